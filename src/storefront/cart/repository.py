"""Repository for the Cart aggregate."""

from storefront.cart.cart import Cart
from storefront.domain import storefront


@storefront.repository(part_of=Cart)
class CartRepository:
    def find_by_customer(self, customer_id) -> Cart | None:
        items = self._dao.query.filter(customer_id=str(customer_id)).all().items
        return items[0] if items else None

    def for_customer(self, customer_id) -> Cart:
        """The customer's cart. A fresh, unsaved cart is returned when none exists yet."""
        cart = self.find_by_customer(customer_id)
        if cart is None:
            cart = Cart.create(customer_id=str(customer_id))
        return cart
