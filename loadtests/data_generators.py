"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
(Address email check, product categories, review lengths) and match the
exact field names expected by the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = [
    "laptops",
    "smartphones",
    "tablets",
    "headphones",
    "cameras",
    "gaming",
    "accessories",
    "components",
    "wearables",
    "smart-home",
]

PAYMENT_METHODS = ["credit_card", "debit_card", "paypal", "bank_transfer"]


# ---------- Catalogue ----------


def valid_sku(prefix: str = "LT") -> str:
    """Generate unique SKUs like 'LT-1A2B3C4D'."""
    return f"{prefix}-{uuid.uuid4().hex[:8].upper()}"


def product_data(sku: str | None = None) -> dict:
    """Generate CreateProductRequest payload matching schema field names."""
    word = fake.word().capitalize()
    price = round(random.uniform(9.99, 1499.99), 2)
    return {
        "name": f"{word} {fake.word().capitalize()} {random.randint(1, 99)}"[:100],
        "description": fake.paragraph(nb_sentences=3)[:2000],
        "price": price,
        "original_price": round(price * random.choice([1.0, 1.1, 1.25]), 2),
        "category": random.choice(CATEGORIES),
        "brand": fake.company()[:100],
        "model": f"{word[:3].upper()}-{random.randint(100, 999)}",
        "sku": sku or valid_sku("PROD"),
        "quantity": random.randint(50, 500),
        "images": [
            {
                "url": f"https://cdn.example.com/images/{uuid.uuid4().hex}.jpg",
                "alt": fake.sentence(nb_words=4)[:255],
                "is_primary": True,
            }
        ],
        "specifications": {"weight": f"{random.randint(100, 3000)} g", "color": fake.color_name()},
        "features": [fake.sentence(nb_words=4) for _ in range(3)],
        "tags": [fake.word() for _ in range(3)],
        "low_stock_threshold": 10,
        "is_featured": random.random() < 0.2,
    }


def restock_quantity() -> int:
    return random.randint(100, 1000)


# ---------- Checkout ----------


def valid_email() -> str:
    """Generate emails that pass the Address email check."""
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:4]}@{fake.free_email_domain()}"


def address_data() -> dict:
    """Generate AddressSchema payload matching schema field names."""
    return {
        "name": fake.name()[:100],
        "email": valid_email(),
        "phone": f"+1-{random.randint(200, 999)}-{random.randint(200, 999)}-{random.randint(1000, 9999)}",
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "zip_code": fake.zipcode()[:20],
        "country": "US",
    }


def checkout_data(payment_intent_id: str) -> dict:
    """Generate PlaceOrderRequest payload."""
    return {
        "shipping_address": address_data(),
        "payment_method": random.choice(PAYMENT_METHODS),
        "payment_intent_id": payment_intent_id,
    }


def cart_quantity() -> int:
    return random.randint(1, 3)


# ---------- Reviews ----------


def review_data(product_id: str, order_id: str) -> dict:
    """Generate SubmitReviewRequest payload within the title and comment limits."""
    return {
        "product_id": product_id,
        "order_id": order_id,
        "rating": random.randint(1, 5),
        "title": fake.sentence(nb_words=4)[:100],
        "comment": fake.paragraph(nb_sentences=2)[:1000],
        "pros": [fake.word() for _ in range(random.randint(0, 3))],
        "cons": [fake.word() for _ in range(random.randint(0, 2))],
    }
