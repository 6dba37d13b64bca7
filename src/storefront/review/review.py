"""Review aggregate (CQRS): one customer's verdict on a product they received.

A review is tied to the delivered order that proves the purchase. Reviews
backed by such an order are marked verified and approved on submission.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Identifier,
    Integer,
    String,
    Text,
    ValueObject,
)

from storefront.domain import storefront
from storefront.review.events import ReviewMarkedHelpful, ReviewSubmitted

MAX_LIST_ENTRIES = 5
MAX_ENTRY_LENGTH = 100


# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------
@storefront.value_object(part_of="Review")
class Rating:
    """A star rating from 1 to 5."""

    score = Integer(required=True)

    @invariant.post
    def score_must_be_in_range(self):
        if self.score is not None and (self.score < 1 or self.score > 5):
            raise ValidationError({"score": ["Rating must be between 1 and 5"]})


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Review:
    product_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)

    rating = ValueObject(Rating, required=True)
    title = String(required=True, max_length=100)
    comment = Text(required=True)
    pros = Text()  # JSON array of strings
    cons = Text()  # JSON array of strings

    is_verified_purchase = Boolean(default=True)
    is_approved = Boolean(default=False)
    helpful_votes = Integer(default=0, min_value=0)

    created_at = DateTime()
    updated_at = DateTime()

    # -------------------------------------------------------------------
    # Invariants
    # -------------------------------------------------------------------
    @invariant.post
    def title_length(self):
        if self.title is not None and not 5 <= len(self.title.strip()) <= 100:
            raise ValidationError({"title": ["Title must be between 5 and 100 characters"]})

    @invariant.post
    def comment_length(self):
        if self.comment is not None and not 10 <= len(self.comment.strip()) <= 1000:
            raise ValidationError({"comment": ["Comment must be between 10 and 1000 characters"]})

    @invariant.post
    def pros_and_cons_are_short_lists(self):
        for field in ("pros", "cons"):
            entries = self.entries(field)
            if len(entries) > MAX_LIST_ENTRIES:
                raise ValidationError({field: [f"Cannot list more than {MAX_LIST_ENTRIES} {field}"]})
            if any(len(e) > MAX_ENTRY_LENGTH for e in entries):
                raise ValidationError({field: [f"Each entry must be at most {MAX_ENTRY_LENGTH} characters"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(
        cls,
        product_id,
        customer_id,
        order_id,
        rating,
        title,
        comment,
        pros=None,
        cons=None,
        verified_purchase=True,
    ):
        now = datetime.now(UTC)
        review = cls(
            product_id=product_id,
            customer_id=customer_id,
            order_id=order_id,
            rating=Rating(score=rating),
            title=title.strip(),
            comment=comment.strip(),
            pros=json.dumps([p.strip() for p in (pros or [])]),
            cons=json.dumps([c.strip() for c in (cons or [])]),
            is_verified_purchase=verified_purchase,
            is_approved=verified_purchase,
            helpful_votes=0,
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                product_id=str(product_id),
                customer_id=str(customer_id),
                order_id=str(order_id),
                rating=rating,
                title=review.title,
                is_verified_purchase=review.is_verified_purchase,
                is_approved=review.is_approved,
                submitted_at=now,
            )
        )
        return review

    def entries(self, field):
        value = getattr(self, field)
        return json.loads(value) if value else []

    def mark_helpful(self):
        self.helpful_votes = (self.helpful_votes or 0) + 1
        self.updated_at = datetime.now(UTC)
        self.raise_(
            ReviewMarkedHelpful(
                review_id=str(self.id),
                helpful_votes=self.helpful_votes,
            )
        )
