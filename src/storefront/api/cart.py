"""Cart endpoints. Every route acts on the caller's own cart."""

from fastapi import APIRouter, Depends
from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.api.dependencies import current_principal
from storefront.api.schemas import AddToCartRequest, UpdateCartItemRequest
from storefront.api.views import cart_view, ok
from storefront.auth.port import Principal
from storefront.cart.cart import Cart
from storefront.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from storefront.product.product import Product

cart_router = APIRouter(prefix="/cart", tags=["cart"])


def _current_cart_view(customer_id):
    cart = current_domain.repository_for(Cart).for_customer(customer_id)
    product_repo = current_domain.repository_for(Product)
    products = {}
    for item in cart.items:
        try:
            products[str(item.product_id)] = product_repo.get(item.product_id)
        except ObjectNotFoundError:
            continue  # Shown without product details
    return cart_view(cart, products)


@cart_router.get("")
async def get_cart(principal: Principal = Depends(current_principal)):
    return ok(_current_cart_view(principal.customer_id))


@cart_router.post("/add")
async def add_to_cart(body: AddToCartRequest, principal: Principal = Depends(current_principal)):
    command = AddToCart(
        customer_id=principal.customer_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return ok(_current_cart_view(principal.customer_id), "Item added to cart successfully")


@cart_router.put("/update")
async def update_cart_item(body: UpdateCartItemRequest, principal: Principal = Depends(current_principal)):
    command = UpdateCartItem(
        customer_id=principal.customer_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    current_domain.process(command, asynchronous=False)
    return ok(_current_cart_view(principal.customer_id), "Cart updated successfully")


@cart_router.delete("/remove/{product_id}")
async def remove_from_cart(product_id: str, principal: Principal = Depends(current_principal)):
    command = RemoveFromCart(customer_id=principal.customer_id, product_id=product_id)
    current_domain.process(command, asynchronous=False)
    return ok(_current_cart_view(principal.customer_id), "Item removed from cart successfully")


@cart_router.delete("/clear")
async def clear_cart(principal: Principal = Depends(current_principal)):
    current_domain.process(ClearCart(customer_id=principal.customer_id), asynchronous=False)
    return ok(_current_cart_view(principal.customer_id), "Cart cleared successfully")
