"""SubmitReview: review a product from a delivered order.

One review per customer per product, enforced here because it spans
instances. The product's rating is recomputed in the same Unit of Work.
"""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.order.order import Order, OrderStatus
from storefront.product.product import Product
from storefront.review.rating import recalculate_product_rating
from storefront.review.review import Review

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Review")
class SubmitReview:
    product_id = Identifier(required=True)
    customer_id = Identifier(required=True)
    order_id = Identifier(required=True)
    rating = Integer(required=True, min_value=1, max_value=5)
    title = String(required=True, max_length=100)
    comment = Text(required=True)
    pros = Text()  # JSON array of strings
    cons = Text()  # JSON array of strings


@storefront.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        current_domain.repository_for(Product).get(command.product_id)

        order = current_domain.repository_for(Order).find_for_customer(command.order_id, command.customer_id)
        if order is None or order.status != OrderStatus.DELIVERED.value:
            raise ValidationError({"order_id": ["Order not found or not eligible for review"]})
        if not order.contains_product(command.product_id):
            raise ValidationError({"product_id": ["Product not found in this order"]})

        repo = current_domain.repository_for(Review)
        if repo.find_by_customer_and_product(command.customer_id, command.product_id) is not None:
            raise ValidationError({"review": ["You have already reviewed this product"]})

        review = Review.submit(
            product_id=command.product_id,
            customer_id=command.customer_id,
            order_id=command.order_id,
            rating=command.rating,
            title=command.title,
            comment=command.comment,
            pros=json.loads(command.pros) if command.pros else None,
            cons=json.loads(command.cons) if command.cons else None,
        )
        repo.add(review)

        average, count = recalculate_product_rating(command.product_id, pending=[review])
        logger.info(
            "review_submitted",
            review_id=str(review.id),
            product_id=str(command.product_id),
            rating=command.rating,
            product_rating=average,
            review_count=count,
        )
        return str(review.id)
