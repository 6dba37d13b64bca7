"""Public catalogue endpoints."""

from fastapi import APIRouter, Query
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.schemas import ProductSort
from storefront.api.views import ok, pagination, product_view
from storefront.product.product import Product, ProductCategory

product_router = APIRouter(prefix="/products", tags=["products"])

FEATURED_LIMIT = 8
RELATED_LIMIT = 4


def _active_product(product_id):
    product = current_domain.repository_for(Product).get(product_id)
    if not product.is_active:
        raise ObjectNotFoundError("Product not found")
    return product


@product_router.get("")
async def list_products(
    category: ProductCategory | None = None,
    brand: str | None = None,
    min_price: float | None = Query(default=None, ge=0),
    max_price: float | None = Query(default=None, ge=0),
    in_stock: bool | None = None,
    featured: bool | None = None,
    rating: float | None = Query(default=None, ge=0, le=5),
    sort: ProductSort = "newest",
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=12, ge=1, le=100),
):
    results = current_domain.repository_for(Product).search(
        category=category.value if category else None,
        brand=brand,
        min_price=min_price,
        max_price=max_price,
        in_stock=in_stock,
        featured=featured,
        min_rating=rating,
        sort=sort,
        page=page,
        limit=limit,
    )
    return ok(
        {
            "products": [product_view(p) for p in results.items],
            "pagination": pagination(page, limit, len(results.items), results.total),
        }
    )


@product_router.get("/categories")
async def list_categories():
    counts = current_domain.repository_for(Product).category_counts()
    return ok([{"name": name, "count": count} for name, count in counts.items()])


@product_router.get("/brands")
async def list_brands():
    return ok(current_domain.repository_for(Product).brands())


@product_router.get("/featured")
async def list_featured():
    results = current_domain.repository_for(Product).search(featured=True, sort="-rating", limit=FEATURED_LIMIT)
    return ok([product_view(p) for p in results.items])


@product_router.get("/slug/{slug}")
async def get_product_by_slug(slug: str):
    product = current_domain.repository_for(Product).find_by_slug(slug)
    if product is None:
        raise ObjectNotFoundError("Product not found")
    return ok(product_view(product))


@product_router.get("/{product_id}")
async def get_product(product_id: str):
    return ok(product_view(_active_product(product_id)))


@product_router.get("/{product_id}/related")
async def list_related(product_id: str):
    product = _active_product(product_id)
    related = current_domain.repository_for(Product).related_to(product, limit=RELATED_LIMIT)
    return ok([product_view(p) for p in related])
