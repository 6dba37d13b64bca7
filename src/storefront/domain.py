"""Storefront bounded context: catalogue, cart, checkout, orders and reviews.

Product stock, carts and orders live in one domain so that a checkout (and a
cancellation) can touch all three inside a single Unit of Work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging()

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
