"""Product aggregate (CQRS): a catalogue entry that also owns its stock count.

Stock is the quantity-on-hand. It is decremented when an order is placed and
restored when an order is cancelled, always through reserve_stock() and
release_stock() so the check and the decrement happen on the same loaded
version of the aggregate.
"""

import json
from datetime import UTC, datetime
from enum import Enum

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import (
    Boolean,
    DateTime,
    Float,
    HasMany,
    Integer,
    String,
    Text,
)

from storefront.domain import storefront
from storefront.product.events import (
    LowStockDetected,
    ProductActivated,
    ProductAdded,
    ProductDeactivated,
    ProductDetailsUpdated,
    ProductRatingRecalculated,
    ProductRestocked,
    StockReleased,
    StockReserved,
)
from storefront.product.slug import slugify


class ProductCategory(Enum):
    LAPTOPS = "laptops"
    SMARTPHONES = "smartphones"
    TABLETS = "tablets"
    HEADPHONES = "headphones"
    CAMERAS = "cameras"
    GAMING = "gaming"
    ACCESSORIES = "accessories"
    COMPONENTS = "components"
    WEARABLES = "wearables"
    SMART_HOME = "smart-home"


# Fields an admin may edit through update_details()
EDITABLE_FIELDS = (
    "name",
    "description",
    "price",
    "original_price",
    "category",
    "brand",
    "model",
    "specifications",
    "features",
    "tags",
    "low_stock_threshold",
    "is_featured",
)

_JSON_FIELDS = ("specifications", "features", "tags")

MAX_DESCRIPTION_LENGTH = 2000


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------
@storefront.entity(part_of="Product")
class ProductImage:
    url = String(required=True, max_length=500)
    alt = String(max_length=255, default="")
    is_primary = Boolean(default=False)


# ---------------------------------------------------------------------------
# Aggregate Root
# ---------------------------------------------------------------------------
@storefront.aggregate
class Product:
    name = String(required=True, max_length=100)
    description = Text(required=True)
    price = Float(required=True, min_value=0.0)
    original_price = Float(default=0.0, min_value=0.0)
    category = String(required=True, choices=ProductCategory)
    brand = String(required=True, max_length=100)
    model = String(max_length=100, default="")
    sku = String(required=True, max_length=50)
    slug = String(max_length=200)
    images = HasMany(ProductImage)
    specifications = Text()  # JSON object of spec name -> value
    features = Text()  # JSON array of strings
    tags = Text()  # JSON array of lower-cased strings
    quantity = Integer(required=True, min_value=0, default=0)
    low_stock_threshold = Integer(default=10, min_value=0)
    in_stock = Boolean(default=True)
    is_active = Boolean(default=True)
    is_featured = Boolean(default=False)
    rating_average = Float(default=0.0, min_value=0.0, max_value=5.0)
    rating_count = Integer(default=0, min_value=0)
    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def in_stock_flag_must_follow_quantity(self):
        if self.quantity is not None and self.in_stock != (self.quantity > 0):
            raise ValidationError({"in_stock": ["In-stock flag must reflect the stock quantity"]})

    @invariant.post
    def description_must_fit(self):
        if self.description and len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                {"description": [f"Description cannot be more than {MAX_DESCRIPTION_LENGTH} characters"]}
            )

    @invariant.post
    def only_one_primary_image(self):
        if len([i for i in self.images if i.is_primary]) > 1:
            raise ValidationError({"images": ["Only one image can be marked as primary"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def create(
        cls,
        name,
        description,
        price,
        category,
        brand,
        sku,
        quantity=0,
        original_price=0.0,
        model="",
        images=None,
        specifications=None,
        features=None,
        tags=None,
        low_stock_threshold=10,
        is_featured=False,
    ):
        """Add a product to the catalogue.

        Args:
            images: List of dicts with url, alt, is_primary.
            specifications: Dict of spec name -> value.
            features: List of feature strings.
            tags: List of tags; stored lower-cased.
        """
        now = datetime.now(UTC)
        product = cls(
            name=name.strip(),
            description=description,
            price=price,
            original_price=original_price or 0.0,
            category=category,
            brand=brand.strip(),
            model=model or "",
            sku=sku.strip().upper(),
            slug=slugify(name),
            images=[ProductImage(**image) for image in (images or [])],
            specifications=json.dumps(specifications or {}),
            features=json.dumps([f.strip() for f in (features or [])]),
            tags=json.dumps([t.strip().lower() for t in (tags or [])]),
            quantity=quantity,
            low_stock_threshold=low_stock_threshold,
            in_stock=quantity > 0,
            is_active=True,
            is_featured=is_featured,
            rating_average=0.0,
            rating_count=0,
            created_at=now,
            updated_at=now,
        )
        product.raise_(
            ProductAdded(
                product_id=str(product.id),
                sku=product.sku,
                name=product.name,
                category=product.category,
                price=product.price,
                quantity=product.quantity,
                added_at=now,
            )
        )
        return product

    # -------------------------------------------------------------------
    # Derived values
    # -------------------------------------------------------------------
    def discount_percentage(self):
        """Percent off the original price, 0 when there is no markdown."""
        if self.original_price and self.original_price > self.price:
            return round((self.original_price - self.price) / self.original_price * 100)
        return 0

    def primary_image_url(self):
        primary = next((i for i in self.images if i.is_primary), None)
        if primary is None and self.images:
            primary = self.images[0]
        return primary.url if primary else ""

    def can_fulfil(self, quantity):
        return bool(self.is_active and self.in_stock and self.quantity >= quantity)

    # -------------------------------------------------------------------
    # Catalogue maintenance
    # -------------------------------------------------------------------
    def update_details(self, **changes):
        """Apply admin edits. Unknown fields are rejected, None values are ignored."""
        unknown = set(changes) - set(EDITABLE_FIELDS)
        if unknown:
            raise ValidationError({field: ["Field cannot be updated"] for field in sorted(unknown)})

        now = datetime.now(UTC)
        with atomic_change(self):
            for field, value in changes.items():
                if value is None:
                    continue
                if field == "tags":
                    value = [t.strip().lower() for t in value]
                if field in _JSON_FIELDS:
                    value = json.dumps(value)
                setattr(self, field, value)
                if field == "name":
                    self.slug = slugify(value)
            self.updated_at = now

        self.raise_(
            ProductDetailsUpdated(
                product_id=str(self.id),
                name=self.name,
                price=self.price,
                is_featured=self.is_featured,
                updated_at=now,
            )
        )

    def restock(self, quantity):
        """Set the quantity on hand to an absolute value."""
        if quantity is None or quantity < 0:
            raise ValidationError({"quantity": ["Quantity cannot be negative"]})

        previous_quantity = self.quantity
        now = datetime.now(UTC)
        with atomic_change(self):
            self.quantity = quantity
            self.in_stock = quantity > 0
            self.updated_at = now

        self.raise_(
            ProductRestocked(
                product_id=str(self.id),
                previous_quantity=previous_quantity,
                new_quantity=quantity,
                restocked_at=now,
            )
        )

    def activate(self):
        if self.is_active:
            raise ValidationError({"is_active": ["Product is already active"]})
        self.is_active = True
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductActivated(product_id=str(self.id)))

    def deactivate(self):
        if not self.is_active:
            raise ValidationError({"is_active": ["Product is already inactive"]})
        self.is_active = False
        self.updated_at = datetime.now(UTC)
        self.raise_(ProductDeactivated(product_id=str(self.id)))

    # -------------------------------------------------------------------
    # Stock movements
    # -------------------------------------------------------------------
    def reserve_stock(self, quantity, order_id):
        """Take stock for an order. Rejects instead of going below zero."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})
        if not self.can_fulfil(quantity):
            raise ValidationError({"quantity": [f"{self.name} is no longer available in the requested quantity"]})

        previous_quantity = self.quantity
        with atomic_change(self):
            self.quantity = previous_quantity - quantity
            self.in_stock = self.quantity > 0
            self.updated_at = datetime.now(UTC)

        self.raise_(
            StockReserved(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                remaining=self.quantity,
            )
        )

        if previous_quantity > self.low_stock_threshold >= self.quantity:
            self.raise_(
                LowStockDetected(
                    product_id=str(self.id),
                    sku=self.sku,
                    name=self.name,
                    quantity=self.quantity,
                    threshold=self.low_stock_threshold,
                )
            )

    def release_stock(self, quantity, order_id):
        """Give stock back, e.g. when the order holding it is cancelled."""
        if quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        with atomic_change(self):
            self.quantity = self.quantity + quantity
            self.in_stock = True
            self.updated_at = datetime.now(UTC)

        self.raise_(
            StockReleased(
                product_id=str(self.id),
                order_id=str(order_id),
                quantity=quantity,
                remaining=self.quantity,
            )
        )

    # -------------------------------------------------------------------
    # Ratings
    # -------------------------------------------------------------------
    def update_rating(self, average, count):
        with atomic_change(self):
            self.rating_average = average
            self.rating_count = count
        self.raise_(
            ProductRatingRecalculated(
                product_id=str(self.id),
                average=average,
                count=count,
            )
        )
