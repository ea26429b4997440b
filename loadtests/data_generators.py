"""Faker-based data generators for Locust load test scenarios.

Payloads match the field names of the API's Pydantic request schemas.
"""

import random
import uuid

from faker import Faker

fake = Faker()


def shopper_data() -> dict:
    """RegisterRequest payload with an email unique to this run."""
    local = fake.user_name()[:20]
    return {
        "name": fake.name()[:100],
        "email": f"{local}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}",
        "password": fake.password(length=12),
    }


def category_data() -> dict:
    return {
        "name": f"{fake.word().title()} {uuid.uuid4().hex[:4]}",
        "description": fake.sentence(),
    }


def product_data(category_id: str | None = None, quantity: int | None = None) -> dict:
    return {
        "name": f"{fake.color_name()} {fake.word().title()}"[:255],
        "description": fake.sentence(),
        "price": round(random.uniform(2.0, 250.0), 2),
        "quantity": quantity if quantity is not None else random.randint(50, 500),
        "category_id": category_id,
    }


def address_data() -> dict:
    return {
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "state": fake.state_abbr(),
        "postal_code": fake.zipcode()[:20],
        "country": "US",
    }


def order_data() -> dict:
    address = address_data()
    return {"shipping_address": address, "billing_address": address}
