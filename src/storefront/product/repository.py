"""Repository for the Product aggregate: catalogue lookups used by handlers and the API."""

from protean.exceptions import ValidationError

from storefront.domain import storefront
from storefront.product.product import Product, ProductCategory

# Storefront listing sort keys -> field ordering
SORT_OPTIONS = {
    "newest": "-created_at",
    "oldest": "created_at",
    "price": "price",
    "-price": "-price",
    "rating": "rating_average",
    "-rating": "-rating_average",
    "name": "name",
    "-name": "-name",
}

# Upper bound when scanning the whole catalogue (brands, dashboards)
SCAN_LIMIT = 1000


@storefront.repository(part_of=Product)
class ProductRepository:
    def find_by_sku(self, sku: str) -> Product | None:
        items = self._dao.query.filter(sku=sku.upper()).all().items
        return items[0] if items else None

    def find_by_slug(self, slug: str) -> Product | None:
        items = self._dao.query.filter(slug=slug, is_active=True).all().items
        return items[0] if items else None

    def search(
        self,
        category=None,
        brand=None,
        min_price=None,
        max_price=None,
        in_stock=None,
        featured=None,
        min_rating=None,
        include_inactive=False,
        sort="newest",
        page=1,
        limit=12,
    ):
        """Filtered, sorted, paginated catalogue listing. Returns a Protean ResultSet.

        `brand` matches case-insensitively anywhere in the brand name, and
        `min_rating` keeps products whose average rating is at least that value.
        """
        if sort not in SORT_OPTIONS:
            raise ValidationError({"sort": ["Invalid sort option"]})

        filters = {}
        if not include_inactive:
            filters["is_active"] = True
        if category:
            filters["category"] = category
        if brand:
            filters["brand__icontains"] = brand
        if min_price is not None:
            filters["price__gte"] = min_price
        if max_price is not None:
            filters["price__lte"] = max_price
        if in_stock is not None:
            filters["in_stock"] = in_stock
        if featured is not None:
            filters["is_featured"] = featured
        if min_rating is not None:
            filters["rating_average__gte"] = min_rating

        query = self._dao.query.filter(**filters) if filters else self._dao.query
        return (
            query.order_by(SORT_OPTIONS[sort])
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )

    def category_counts(self) -> dict[str, int]:
        counts = {}
        for category in ProductCategory:
            total = self._dao.query.filter(category=category.value, is_active=True).all().total
            if total:
                counts[category.value] = total
        return counts

    def brands(self) -> list[str]:
        products = self._dao.query.filter(is_active=True).limit(SCAN_LIMIT).all().items
        return sorted({p.brand for p in products})

    def related_to(self, product: Product, limit: int = 4) -> list[Product]:
        candidates = (
            self._dao.query.filter(category=product.category, is_active=True)
            .order_by("-rating_average")
            .limit(limit + 1)
            .all()
            .items
        )
        return [p for p in candidates if str(p.id) != str(product.id)][:limit]

    def low_stock(self, limit: int = 10) -> list[Product]:
        """Products at or below their own low stock threshold, lowest stock first."""
        products = self._dao.query.order_by("quantity").limit(SCAN_LIMIT).all().items
        return [p for p in products if p.quantity <= p.low_stock_threshold][:limit]
