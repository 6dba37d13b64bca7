"""Response shaping: success envelopes and read views of aggregates."""

import json
import math

from storefront.order.pricing import price_cart


def ok(data=None, message=None):
    body = {"success": True}
    if message:
        body["message"] = message
    if data is not None:
        body["data"] = data
    return body


def pagination(page, limit, count, total):
    return {
        "current": page,
        "total": math.ceil(total / limit) if limit else 0,
        "count": count,
        "totalCount": total,
    }


def _loads(value, default):
    return json.loads(value) if value else default


def product_view(product):
    return {
        "id": str(product.id),
        "name": product.name,
        "slug": product.slug,
        "description": product.description,
        "price": product.price,
        "original_price": product.original_price,
        "discount_percentage": product.discount_percentage(),
        "category": product.category,
        "brand": product.brand,
        "model": product.model,
        "sku": product.sku,
        "images": [{"url": i.url, "alt": i.alt, "is_primary": i.is_primary} for i in product.images],
        "specifications": _loads(product.specifications, {}),
        "features": _loads(product.features, []),
        "tags": _loads(product.tags, []),
        "quantity": product.quantity,
        "low_stock_threshold": product.low_stock_threshold,
        "in_stock": product.in_stock,
        "is_active": product.is_active,
        "is_featured": product.is_featured,
        "rating": {"average": product.rating_average, "count": product.rating_count},
        "created_at": product.created_at,
        "updated_at": product.updated_at,
    }


def cart_view(cart, products=None):
    """Cart lines with their captured prices, plus totals from the pricing policy.

    Args:
        products: Optional dict of product id -> Product used to show current
                  name, image and availability next to each line.
    """
    products = products or {}
    items = []
    for item in cart.items:
        line = {
            "product_id": str(item.product_id),
            "quantity": item.quantity,
            "price": item.price,
            "line_total": item.line_total,
            "added_at": item.added_at,
        }
        product = products.get(str(item.product_id))
        if product is not None:
            line["product"] = {
                "name": product.name,
                "image": product.primary_image_url(),
                "in_stock": product.in_stock,
                "quantity": product.quantity,
            }
        items.append(line)

    return {
        "id": str(cart.id),
        "customer_id": str(cart.customer_id),
        "items": items,
        "item_count": cart.item_count(),
        "totals": price_cart(cart),
        "updated_at": cart.updated_at,
    }


def order_view(order):
    return {
        "id": str(order.id),
        "order_number": order.order_number,
        "customer_id": str(order.customer_id),
        "status": order.status,
        "items": [
            {
                "product_id": str(i.product_id),
                "name": i.name,
                "sku": i.sku,
                "price": i.price,
                "quantity": i.quantity,
                "image": i.image,
                "line_total": i.line_total,
            }
            for i in order.items
        ],
        "shipping_address": order.shipping_address.to_dict() if order.shipping_address else None,
        "billing_address": order.billing_address.to_dict() if order.billing_address else None,
        "pricing": order.pricing.to_dict() if order.pricing else None,
        "payment_method": order.payment_method,
        "payment_intent_id": order.payment_intent_id,
        "payment_status": order.payment_status,
        "cancellation_reason": order.cancellation_reason,
        "cancelled_by": order.cancelled_by,
        "shipped_at": order.shipped_at,
        "delivered_at": order.delivered_at,
        "cancelled_at": order.cancelled_at,
        "created_at": order.created_at,
        "updated_at": order.updated_at,
    }


def review_view(review):
    return {
        "id": str(review.id),
        "product_id": str(review.product_id),
        "customer_id": str(review.customer_id),
        "order_id": str(review.order_id),
        "rating": review.rating.score,
        "title": review.title,
        "comment": review.comment,
        "pros": review.entries("pros"),
        "cons": review.entries("cons"),
        "is_verified_purchase": review.is_verified_purchase,
        "is_approved": review.is_approved,
        "helpful_votes": review.helpful_votes,
        "created_at": review.created_at,
    }
