"""Checkout pricing policy.

Tax is a flat 8% of the subtotal. Shipping is free only when the subtotal is
strictly greater than the threshold; an order of exactly 100.00 pays the flat
fee. Nothing to ship costs nothing. Every amount is rounded to cents.
"""

TAX_RATE = 0.08
FREE_SHIPPING_THRESHOLD = 100.0
FLAT_SHIPPING_FEE = 15.0
CURRENCY = "USD"


def _cents(amount):
    return round(amount, 2)


def price_lines(lines):
    """Price a list of (unit_price, quantity) pairs.

    Returns a dict with subtotal, tax, shipping, total and currency.
    """
    subtotal = _cents(sum(price * quantity for price, quantity in lines))
    tax = _cents(subtotal * TAX_RATE)
    shipping = 0.0 if not lines or subtotal > FREE_SHIPPING_THRESHOLD else FLAT_SHIPPING_FEE
    return {
        "subtotal": subtotal,
        "tax": tax,
        "shipping": shipping,
        "total": _cents(subtotal + tax + shipping),
        "currency": CURRENCY,
    }


def price_cart(cart):
    return price_lines([(item.price, item.quantity) for item in cart.items])
