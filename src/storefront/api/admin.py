"""Back-office endpoints. Every route requires an admin principal."""

import json

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from storefront.api.dependencies import require_admin
from storefront.api.schemas import (
    CreateProductRequest,
    ProductSort,
    RestockRequest,
    UpdateOrderStatusRequest,
    UpdateProductRequest,
)
from storefront.api.views import ok, order_view, pagination, product_view
from storefront.order.fulfillment import UpdateOrderStatus
from storefront.order.order import Order
from storefront.product.management import (
    ActivateProduct,
    AddProduct,
    DeactivateProduct,
    RestockProduct,
    UpdateProductDetails,
)
from storefront.product.product import Product, ProductCategory
from storefront.projections.daily_sales import DailySales

admin_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(require_admin)])

RECENT_ORDERS = 5
LOW_STOCK_LIMIT = 10
SALES_DAYS = 7


def _json_or_none(value):
    return json.dumps(value) if value is not None else None


def _product(product_id):
    return product_view(current_domain.repository_for(Product).get(product_id))


# --- Dashboard ---


@admin_router.get("/dashboard")
async def dashboard():
    product_repo = current_domain.repository_for(Product)
    order_repo = current_domain.repository_for(Order)
    daily_sales = (
        current_domain.repository_for(DailySales)._dao.query.order_by("-date").limit(SALES_DAYS).all().items
    )
    return ok(
        {
            "stats": {
                "total_products": product_repo.search(include_inactive=True, limit=1).total,
                "total_orders": order_repo.count(),
                "total_revenue": order_repo.delivered_revenue(),
            },
            "recent_orders": [order_view(o) for o in order_repo.recent(RECENT_ORDERS)],
            "low_stock_products": [product_view(p) for p in product_repo.low_stock(LOW_STOCK_LIMIT)],
            "daily_sales": [
                {
                    "date": day.date,
                    "orders_placed": day.orders_placed,
                    "orders_delivered": day.orders_delivered,
                    "orders_cancelled": day.orders_cancelled,
                    "gross_revenue": day.gross_revenue,
                    "delivered_revenue": day.delivered_revenue,
                    "cancelled_value": day.cancelled_value,
                }
                for day in daily_sales
            ],
        }
    )


# --- Products ---


@admin_router.get("/products")
async def list_products(
    category: ProductCategory | None = None,
    sort: ProductSort = "newest",
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
):
    results = current_domain.repository_for(Product).search(
        category=category.value if category else None,
        include_inactive=True,
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


@admin_router.post("/products", status_code=201)
async def create_product(body: CreateProductRequest):
    command = AddProduct(
        name=body.name,
        description=body.description,
        price=body.price,
        original_price=body.original_price or 0.0,
        category=body.category,
        brand=body.brand,
        model=body.model,
        sku=body.sku,
        quantity=body.quantity,
        images=json.dumps([image.model_dump() for image in body.images]),
        specifications=json.dumps(body.specifications),
        features=json.dumps(body.features),
        tags=json.dumps(body.tags),
        low_stock_threshold=body.low_stock_threshold,
        is_featured=body.is_featured,
    )
    product_id = current_domain.process(command, asynchronous=False)
    return ok(_product(product_id), "Product created successfully")


@admin_router.put("/products/{product_id}")
async def update_product(product_id: str, body: UpdateProductRequest):
    command = UpdateProductDetails(
        product_id=product_id,
        name=body.name,
        description=body.description,
        price=body.price,
        original_price=body.original_price,
        category=body.category,
        brand=body.brand,
        model=body.model,
        specifications=_json_or_none(body.specifications),
        features=_json_or_none(body.features),
        tags=_json_or_none(body.tags),
        low_stock_threshold=body.low_stock_threshold,
        is_featured=body.is_featured,
    )
    current_domain.process(command, asynchronous=False)
    return ok(_product(product_id), "Product updated successfully")


@admin_router.put("/products/{product_id}/stock")
async def restock_product(product_id: str, body: RestockRequest):
    current_domain.process(RestockProduct(product_id=product_id, quantity=body.quantity), asynchronous=False)
    return ok(_product(product_id), "Stock updated successfully")


@admin_router.put("/products/{product_id}/activate")
async def activate_product(product_id: str):
    current_domain.process(ActivateProduct(product_id=product_id), asynchronous=False)
    return ok(_product(product_id), "Product activated successfully")


@admin_router.delete("/products/{product_id}")
async def deactivate_product(product_id: str):
    """Soft delete: the product leaves the storefront but past orders keep their references."""
    current_domain.process(DeactivateProduct(product_id=product_id), asynchronous=False)
    return ok(message="Product deleted successfully")


# --- Orders ---


@admin_router.get("/orders")
async def list_orders(
    status: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=20, ge=1, le=100),
):
    results = current_domain.repository_for(Order).search(status=status, page=page, limit=limit)
    return ok(
        {
            "orders": [order_view(o) for o in results.items],
            "pagination": pagination(page, limit, len(results.items), results.total),
        }
    )


@admin_router.put("/orders/{order_id}/status")
async def update_order_status(order_id: str, body: UpdateOrderStatusRequest):
    command = UpdateOrderStatus(order_id=order_id, status=body.status, reason=body.reason)
    current_domain.process(command, asynchronous=False)
    order = current_domain.repository_for(Order).get(order_id)
    return ok(order_view(order), "Order status updated successfully")
