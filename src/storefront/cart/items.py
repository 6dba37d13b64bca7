"""Cart item management: commands and handler."""

from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, Integer
from protean.utils.globals import current_domain

from storefront.cart.cart import MAX_LINE_QUANTITY, Cart
from storefront.domain import storefront
from storefront.product.product import Product


@storefront.command(part_of="Cart")
class AddToCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=1, max_value=MAX_LINE_QUANTITY)


@storefront.command(part_of="Cart")
class UpdateCartItem:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)
    quantity = Integer(required=True, min_value=0, max_value=MAX_LINE_QUANTITY)


@storefront.command(part_of="Cart")
class RemoveFromCart:
    customer_id = Identifier(required=True)
    product_id = Identifier(required=True)


@storefront.command(part_of="Cart")
class ClearCart:
    customer_id = Identifier(required=True)


def _check_stock(product, quantity):
    if product.quantity < quantity:
        raise ValidationError({"quantity": [f"Only {product.quantity} items available in stock"]})


@storefront.command_handler(part_of=Cart)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        if not product.is_active or not product.in_stock:
            raise ValidationError({"product_id": ["Product is not available"]})

        repo = current_domain.repository_for(Cart)
        cart = repo.for_customer(command.customer_id)

        # The whole line, not just this addition, must be coverable by stock
        existing = cart.find_item(command.product_id)
        _check_stock(product, command.quantity + (existing.quantity if existing else 0))

        cart.add_item(
            product_id=command.product_id,
            quantity=command.quantity,
            price=product.price,
        )
        repo.add(cart)
        return str(cart.id)

    @handle(UpdateCartItem)
    def update_cart_item(self, command):
        product = current_domain.repository_for(Product).get(command.product_id)
        if command.quantity > 0:
            _check_stock(product, command.quantity)

        repo = current_domain.repository_for(Cart)
        cart = repo.for_customer(command.customer_id)
        if cart.find_item(command.product_id) is None:
            raise ObjectNotFoundError("Item not found in cart")

        cart.update_item_quantity(
            product_id=command.product_id,
            new_quantity=command.quantity,
        )
        repo.add(cart)
        return str(cart.id)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_customer(command.customer_id)
        if cart.find_item(command.product_id) is None:
            raise ObjectNotFoundError("Item not found in cart")

        cart.remove_item(product_id=command.product_id)
        repo.add(cart)
        return str(cart.id)

    @handle(ClearCart)
    def clear_cart(self, command):
        repo = current_domain.repository_for(Cart)
        cart = repo.for_customer(command.customer_id)
        cart.clear(reason="Cleared")
        repo.add(cart)
        return str(cart.id)
