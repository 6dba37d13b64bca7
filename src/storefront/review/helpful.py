"""MarkReviewHelpful: count a helpful vote on a review."""

from protean import handle
from protean.fields import Identifier
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.review.review import Review


@storefront.command(part_of="Review")
class MarkReviewHelpful:
    review_id = Identifier(required=True)


@storefront.command_handler(part_of=Review)
class MarkReviewHelpfulHandler:
    @handle(MarkReviewHelpful)
    def mark_review_helpful(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.get(command.review_id)
        review.mark_helpful()
        repo.add(review)
        return review.helpful_votes
