"""Product rating recomputation.

A product's rating is the mean of its approved review scores, rounded half up
to one decimal, together with the number of approved reviews. Handlers that
write reviews call recalculate_product_rating() explicitly, inside their own
Unit of Work.
"""

import math

from protean.utils.globals import current_domain

from storefront.product.product import Product
from storefront.review.review import Review


def average_rating(scores):
    """(average, count) for a list of 1..5 scores. (0.0, 0) when empty."""
    if not scores:
        return 0.0, 0
    mean = sum(scores) / len(scores)
    return math.floor(mean * 10 + 0.5) / 10, len(scores)


def recalculate_product_rating(product_id, pending=()):
    """Recompute and store the rating of `product_id`.

    Args:
        pending: Reviews written in the current unit of work. They are counted
                 even when the repository cannot see them yet.
    """
    reviews = {str(r.id): r for r in current_domain.repository_for(Review).approved_for_product(product_id)}
    for review in pending:
        if str(review.product_id) != str(product_id):
            continue
        if review.is_approved:
            reviews[str(review.id)] = review
        else:
            reviews.pop(str(review.id), None)

    average, count = average_rating([r.rating.score for r in reviews.values()])

    product_repo = current_domain.repository_for(Product)
    product = product_repo.get(product_id)
    product.update_rating(average, count)
    product_repo.add(product)
    return average, count
