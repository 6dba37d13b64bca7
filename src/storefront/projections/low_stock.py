"""Low stock alerts: reacts to products falling to their reorder threshold."""

import structlog
from protean.utils.mixins import handle

from storefront.domain import storefront
from storefront.product.events import LowStockDetected
from storefront.product.product import Product

logger = structlog.get_logger(__name__)


@storefront.event_handler(part_of=Product)
class LowStockHandler:
    @handle(LowStockDetected)
    def on_low_stock(self, event: LowStockDetected) -> None:
        logger.warning(
            "low_stock",
            product_id=str(event.product_id),
            sku=event.sku,
            name=event.name,
            quantity=event.quantity,
            threshold=event.threshold,
        )
