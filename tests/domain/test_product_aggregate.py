"""Tests for the Product aggregate: creation, derived values and catalogue edits."""

import json

import pytest
from protean.exceptions import ValidationError

from storefront.product.events import ProductAdded, ProductDetailsUpdated, ProductRestocked
from storefront.product.product import Product


def _make_product(**overrides):
    data = {
        "name": "Pro Laptop 15",
        "description": "A laptop for professionals.",
        "price": 1299.0,
        "category": "laptops",
        "brand": "Acme",
        "sku": "acme-pl15",
        "quantity": 20,
    }
    data.update(overrides)
    return Product.create(**data)


class TestProductCreation:
    def test_sku_is_upper_cased(self):
        assert _make_product().sku == "ACME-PL15"

    def test_slug_is_derived_from_name(self):
        assert _make_product(name='Pro Laptop 15" (2024)').slug == "pro-laptop-15-2024"

    def test_tags_are_lower_cased(self):
        product = _make_product(tags=["Work", " Travel "])
        assert json.loads(product.tags) == ["work", "travel"]

    def test_in_stock_follows_quantity(self):
        assert _make_product(quantity=3).in_stock is True
        assert _make_product(quantity=0).in_stock is False

    def test_new_product_is_active_and_unrated(self):
        product = _make_product()
        assert product.is_active is True
        assert product.rating_average == 0.0
        assert product.rating_count == 0

    def test_raises_product_added(self):
        product = _make_product()
        events = [e for e in product._events if isinstance(e, ProductAdded)]
        assert len(events) == 1
        assert events[0].sku == "ACME-PL15"
        assert events[0].quantity == 20

    def test_invalid_category_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_product(category="groceries")

    def test_description_longer_than_limit_is_rejected(self):
        with pytest.raises(ValidationError) as exc:
            _make_product(description="x" * 2001)
        assert "description" in exc.value.messages

    def test_only_one_primary_image(self):
        with pytest.raises(ValidationError):
            _make_product(
                images=[
                    {"url": "https://img/1.jpg", "is_primary": True},
                    {"url": "https://img/2.jpg", "is_primary": True},
                ]
            )


class TestDerivedValues:
    def test_discount_percentage(self):
        assert _make_product(price=75.0, original_price=100.0).discount_percentage() == 25

    def test_no_discount_without_markdown(self):
        assert _make_product(price=100.0, original_price=0.0).discount_percentage() == 0
        assert _make_product(price=100.0, original_price=90.0).discount_percentage() == 0

    def test_primary_image_url_prefers_primary(self):
        product = _make_product(
            images=[
                {"url": "https://img/1.jpg"},
                {"url": "https://img/2.jpg", "is_primary": True},
            ]
        )
        assert product.primary_image_url() == "https://img/2.jpg"

    def test_primary_image_url_falls_back_to_first(self):
        product = _make_product(images=[{"url": "https://img/1.jpg"}])
        assert product.primary_image_url() == "https://img/1.jpg"

    def test_primary_image_url_empty_without_images(self):
        assert _make_product().primary_image_url() == ""


class TestUpdateDetails:
    def test_updates_fields_and_reslugs(self):
        product = _make_product()
        product.update_details(name="Pro Laptop 16", price=1399.0)
        assert product.name == "Pro Laptop 16"
        assert product.slug == "pro-laptop-16"
        assert product.price == 1399.0

    def test_none_values_are_ignored(self):
        product = _make_product()
        product.update_details(name=None, price=999.0)
        assert product.name == "Pro Laptop 15"

    def test_unknown_fields_are_rejected(self):
        product = _make_product()
        with pytest.raises(ValidationError) as exc:
            product.update_details(quantity=100)
        assert "quantity" in exc.value.messages

    def test_list_fields_are_stored_as_json(self):
        product = _make_product()
        product.update_details(features=["Backlit keyboard"], tags=["Sale"])
        assert json.loads(product.features) == ["Backlit keyboard"]
        assert json.loads(product.tags) == ["sale"]

    def test_raises_details_updated(self):
        product = _make_product()
        product._events.clear()
        product.update_details(is_featured=True)
        assert isinstance(product._events[-1], ProductDetailsUpdated)
        assert product._events[-1].is_featured is True


class TestRestockAndActivation:
    def test_restock_sets_absolute_quantity(self):
        product = _make_product(quantity=0)
        product.restock(12)
        assert product.quantity == 12
        assert product.in_stock is True

    def test_restock_to_zero_marks_out_of_stock(self):
        product = _make_product(quantity=5)
        product.restock(0)
        assert product.in_stock is False

    def test_restock_raises_event(self):
        product = _make_product(quantity=5)
        product._events.clear()
        product.restock(9)
        event = product._events[-1]
        assert isinstance(event, ProductRestocked)
        assert event.previous_quantity == 5
        assert event.new_quantity == 9

    def test_negative_restock_is_rejected(self):
        with pytest.raises(ValidationError):
            _make_product().restock(-1)

    def test_deactivate_and_activate(self):
        product = _make_product()
        product.deactivate()
        assert product.is_active is False
        assert product.can_fulfil(1) is False
        product.activate()
        assert product.is_active is True

    def test_cannot_deactivate_twice(self):
        product = _make_product()
        product.deactivate()
        with pytest.raises(ValidationError):
            product.deactivate()
