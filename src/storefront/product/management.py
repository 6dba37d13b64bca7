"""Catalogue administration: commands and handler."""

import json

import structlog
from protean import handle
from protean.exceptions import ValidationError
from protean.fields import Boolean, Float, Identifier, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.product.product import Product

logger = structlog.get_logger(__name__)


@storefront.command(part_of="Product")
class AddProduct:
    name = String(required=True, max_length=100)
    description = Text(required=True)
    price = Float(required=True, min_value=0.0)
    category = String(required=True, max_length=50)
    brand = String(required=True, max_length=100)
    sku = String(required=True, max_length=50)
    quantity = Integer(default=0, min_value=0)
    original_price = Float(default=0.0)
    model = String(max_length=100)
    images = Text()  # JSON: list of {url, alt, is_primary}
    specifications = Text()  # JSON: object
    features = Text()  # JSON: list of strings
    tags = Text()  # JSON: list of strings
    low_stock_threshold = Integer(default=10, min_value=0)
    is_featured = Boolean(default=False)


@storefront.command(part_of="Product")
class UpdateProductDetails:
    product_id = Identifier(required=True)
    name = String(max_length=100)
    description = Text()
    price = Float(min_value=0.0)
    original_price = Float(min_value=0.0)
    category = String(max_length=50)
    brand = String(max_length=100)
    model = String(max_length=100)
    specifications = Text()  # JSON
    features = Text()  # JSON
    tags = Text()  # JSON
    low_stock_threshold = Integer(min_value=0)
    is_featured = Boolean()


@storefront.command(part_of="Product")
class RestockProduct:
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0)


@storefront.command(part_of="Product")
class ActivateProduct:
    product_id = Identifier(required=True)


@storefront.command(part_of="Product")
class DeactivateProduct:
    product_id = Identifier(required=True)


def _loads(value):
    return json.loads(value) if isinstance(value, str) else value


@storefront.command_handler(part_of=Product)
class ManageCatalogueHandler:
    @handle(AddProduct)
    def add_product(self, command):
        repo = current_domain.repository_for(Product)
        sku = command.sku.strip().upper()
        if repo.find_by_sku(sku) is not None:
            raise ValidationError({"sku": [f"A product with SKU {sku} already exists"]})

        product = Product.create(
            name=command.name,
            description=command.description,
            price=command.price,
            category=command.category,
            brand=command.brand,
            sku=sku,
            quantity=command.quantity or 0,
            original_price=command.original_price,
            model=command.model,
            images=_loads(command.images),
            specifications=_loads(command.specifications),
            features=_loads(command.features),
            tags=_loads(command.tags),
            low_stock_threshold=command.low_stock_threshold if command.low_stock_threshold is not None else 10,
            is_featured=bool(command.is_featured),
        )
        repo.add(product)
        logger.info("product_added", product_id=str(product.id), sku=product.sku)
        return str(product.id)

    @handle(UpdateProductDetails)
    def update_product_details(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.update_details(
            name=command.name,
            description=command.description,
            price=command.price,
            original_price=command.original_price,
            category=command.category,
            brand=command.brand,
            model=command.model,
            specifications=_loads(command.specifications),
            features=_loads(command.features),
            tags=_loads(command.tags),
            low_stock_threshold=command.low_stock_threshold,
            is_featured=command.is_featured,
        )
        repo.add(product)

    @handle(RestockProduct)
    def restock_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.restock(command.quantity)
        repo.add(product)

    @handle(ActivateProduct)
    def activate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.activate()
        repo.add(product)

    @handle(DeactivateProduct)
    def deactivate_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get(command.product_id)
        product.deactivate()
        repo.add(product)
