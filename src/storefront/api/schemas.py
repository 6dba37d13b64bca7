"""Pydantic request schemas for the Storefront API.

These are external contracts (anti-corruption layer), separate from
internal Protean commands. Field names follow the JSON the storefront
client sends.
"""

from typing import Literal

from pydantic import BaseModel, Field

ProductSort = Literal["newest", "oldest", "price", "-price", "rating", "-rating", "name", "-name"]


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)
    phone: str = Field(min_length=1)
    street: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    country: str = Field(min_length=1)


class ProductImageSchema(BaseModel):
    url: str
    alt: str = ""
    is_primary: bool = False


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=1, le=50, default=1)

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "9b1deb4d-3b7d-4bad-9bdd-2b0d7b3dcb6d",
                    "quantity": 2,
                }
            ]
        }
    }


class UpdateCartItemRequest(BaseModel):
    product_id: str
    quantity: int = Field(ge=0, le=50)


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    shipping_address: AddressSchema
    billing_address: AddressSchema | None = None
    payment_method: Literal["credit_card", "debit_card", "paypal", "bank_transfer"]
    payment_intent_id: str = Field(min_length=1)


class CancelOrderRequest(BaseModel):
    reason: str | None = Field(default=None, max_length=500)


class UpdateOrderStatusRequest(BaseModel):
    status: Literal["pending", "processing", "shipped", "delivered", "cancelled"]
    reason: str | None = Field(default=None, max_length=500)


# ---------------------------------------------------------------------------
# Reviews
# ---------------------------------------------------------------------------
class SubmitReviewRequest(BaseModel):
    product_id: str
    order_id: str
    rating: int = Field(ge=1, le=5)
    title: str = Field(min_length=5, max_length=100)
    comment: str = Field(min_length=10, max_length=1000)
    pros: list[str] = Field(default_factory=list, max_length=5)
    cons: list[str] = Field(default_factory=list, max_length=5)


# ---------------------------------------------------------------------------
# Payments
# ---------------------------------------------------------------------------
class CreatePaymentIntentRequest(BaseModel):
    currency: Literal["usd", "eur", "gbp"] = "usd"


class ConfirmPaymentRequest(BaseModel):
    payment_intent_id: str = Field(min_length=1)


# ---------------------------------------------------------------------------
# Admin: products
# ---------------------------------------------------------------------------
class CreateProductRequest(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    description: str = Field(min_length=1, max_length=2000)
    price: float = Field(ge=0)
    original_price: float | None = Field(default=None, ge=0)
    category: str
    brand: str = Field(min_length=1)
    model: str | None = None
    sku: str = Field(min_length=1, max_length=50)
    quantity: int = Field(ge=0, default=0)
    images: list[ProductImageSchema] = Field(default_factory=list)
    specifications: dict[str, str] = Field(default_factory=dict)
    features: list[str] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    low_stock_threshold: int = Field(ge=0, default=10)
    is_featured: bool = False

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Pro Laptop 15",
                    "description": "A 15-inch laptop for professionals.",
                    "price": 1299.0,
                    "category": "laptops",
                    "brand": "Acme",
                    "sku": "ACME-PL15",
                    "quantity": 25,
                }
            ]
        }
    }


class UpdateProductRequest(BaseModel):
    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=2000)
    price: float | None = Field(default=None, ge=0)
    original_price: float | None = Field(default=None, ge=0)
    category: str | None = None
    brand: str | None = None
    model: str | None = None
    specifications: dict[str, str] | None = None
    features: list[str] | None = None
    tags: list[str] | None = None
    low_stock_threshold: int | None = Field(default=None, ge=0)
    is_featured: bool | None = None


class RestockRequest(BaseModel):
    quantity: int = Field(ge=0)


# ---------------------------------------------------------------------------
# Development helpers
# ---------------------------------------------------------------------------
class IssueTokenRequest(BaseModel):
    customer_id: str | None = None
    role: Literal["customer", "admin"] = "customer"


class ConfigureGatewayRequest(BaseModel):
    should_succeed: bool
    failure_reason: str = "Card declined"
