"""Tests for low stock detection on checkout."""

import logging

from protean import current_domain

from storefront.product.events import LowStockDetected
from storefront.product.product import Product
from storefront.projections.low_stock import LowStockHandler


def _alerts(caplog):
    return [r for r in caplog.records if r.levelno == logging.WARNING and "low_stock" in r.getMessage()]


class TestLowStockHandler:
    def test_handler_logs_a_warning(self, caplog):
        event = LowStockDetected(
            product_id="prod-001",
            sku="ACME-USBC",
            name="USB-C Cable",
            quantity=2,
            threshold=10,
        )
        with caplog.at_level(logging.WARNING):
            LowStockHandler().on_low_stock(event)

        alerts = _alerts(caplog)
        assert len(alerts) == 1
        assert "ACME-USBC" in alerts[0].getMessage()

    def test_checkout_crossing_threshold_alerts(self, caplog, add_product, fill_cart, place_order):
        product = add_product(quantity=12, low_stock_threshold=10)
        fill_cart((product, 3))
        with caplog.at_level(logging.WARNING):
            place_order()

        assert len(_alerts(caplog)) == 1
        assert current_domain.repository_for(Product).get(product.id).quantity == 9

    def test_no_alert_above_threshold(self, caplog, add_product, fill_cart, place_order):
        product = add_product(quantity=20, low_stock_threshold=10)
        fill_cart((product, 2))
        with caplog.at_level(logging.WARNING):
            place_order()

        assert _alerts(caplog) == []
