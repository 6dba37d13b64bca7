"""Domain events for the Review aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from storefront.domain import storefront


@storefront.event(part_of="Review")
class ReviewSubmitted:
    """A customer reviewed a product from one of their delivered orders."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String(required=True)
    is_verified_purchase = Boolean(default=True)
    is_approved = Boolean(default=False)
    submitted_at = DateTime(required=True)


@storefront.event(part_of="Review")
class ReviewMarkedHelpful:
    __version__ = 1

    review_id = Identifier(required=True)
    helpful_votes = Integer(required=True)
