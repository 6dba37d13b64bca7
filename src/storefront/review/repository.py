"""Repository for the Review aggregate."""

from storefront.domain import storefront
from storefront.review.review import Review

# Upper bound on reviews read for a single product
SCAN_LIMIT = 1000

# Product review sort keys -> (key function, descending)
SORT_OPTIONS = {
    "newest": (lambda r: r.created_at, True),
    "oldest": (lambda r: r.created_at, False),
    "rating": (lambda r: r.rating.score, False),
    "-rating": (lambda r: r.rating.score, True),
    "helpful": (lambda r: r.helpful_votes, True),
}


@storefront.repository(part_of=Review)
class ReviewRepository:
    def find_by_customer_and_product(self, customer_id, product_id) -> Review | None:
        items = (
            self._dao.query.filter(
                customer_id=str(customer_id),
                product_id=str(product_id),
            )
            .all()
            .items
        )
        return items[0] if items else None

    def approved_for_product(self, product_id) -> list[Review]:
        return (
            self._dao.query.filter(product_id=str(product_id), is_approved=True)
            .limit(SCAN_LIMIT)
            .all()
            .items
        )

    def product_page(self, product_id, sort="newest", page=1, limit=10):
        """Approved reviews for a product, sorted and paginated.

        Returns (reviews, total, distribution) where distribution maps each
        score present to its count, highest score first.
        """
        key, descending = SORT_OPTIONS.get(sort, SORT_OPTIONS["newest"])
        reviews = sorted(self.approved_for_product(product_id), key=key, reverse=descending)

        distribution = {}
        for score in sorted({r.rating.score for r in reviews}, reverse=True):
            distribution[score] = len([r for r in reviews if r.rating.score == score])

        start = (page - 1) * limit
        return reviews[start : start + limit], len(reviews), distribution

    def by_customer(self, customer_id, page=1, limit=10):
        return (
            self._dao.query.filter(customer_id=str(customer_id))
            .order_by("-created_at")
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
