"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the domain's validation rules
(EmailAddress VO, PhoneNumber VO, GST and PAN formats) and match the
field names expected by the API's Pydantic request schemas.
"""

import random
import string
import uuid

from faker import Faker

fake = Faker("en_IN")

VEHICLE_TYPES = ["motorcycle", "scooter", "bicycle", "car", "van"]


def valid_email() -> str:
    """Generate emails that pass EmailAddress VO validation."""
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}"


def valid_phone() -> str:
    """Generate phones matching PhoneNumber VO regex: ^\\+?[\\d\\s\\-()]+$"""
    return f"+91 {random.randint(70000, 99999)} {random.randint(10000, 99999)}"


def _letters(count: int) -> str:
    return "".join(random.choices(string.ascii_uppercase, k=count))


def pan_number() -> str:
    return f"{_letters(5)}{random.randint(1000, 9999)}{_letters(1)}"


def gst_number() -> str:
    return f"{random.randint(10, 37)}{pan_number()}{random.randint(1, 9)}Z{random.randint(0, 9)}"


def account_data(role: str) -> dict:
    return {"name": fake.name()[:255], "email": valid_email(), "role": role}


def seller_profile() -> dict:
    return {
        "business_name": fake.company()[:255],
        "email": valid_email(),
        "phone": valid_phone(),
        "business_address": fake.address(),
        "gst_number": gst_number(),
        "pan_number": pan_number(),
    }


def partner_profile() -> dict:
    return {
        "full_name": fake.name()[:255],
        "email": valid_email(),
        "phone": valid_phone(),
        "address": fake.address(),
        "vehicle_type": random.choice(VEHICLE_TYPES),
        "vehicle_number": f"{_letters(2)}{random.randint(10, 99)}{_letters(2)}{random.randint(1000, 9999)}",
    }


def application_data(account_id: str, kind: str) -> dict:
    profile = seller_profile() if kind == "seller" else partner_profile()
    return {
        "account_id": account_id,
        "kind": kind,
        "profile": profile,
        "documents": [f"{kind}-{uuid.uuid4().hex[:8]}.pdf"],
    }


def order_data(seller_id: str) -> dict:
    items = [
        {
            "product_id": f"prod-{uuid.uuid4().hex[:8]}",
            "title": fake.catch_phrase()[:255],
            "quantity": random.randint(1, 4),
            "unit_price": round(random.uniform(50.0, 2500.0), 2),
        }
        for _ in range(random.randint(1, 3))
    ]
    return {
        "seller_id": seller_id,
        "items": items,
        "shipping_charges": round(random.uniform(0.0, 80.0), 2),
        "tax_amount": round(random.uniform(0.0, 150.0), 2),
    }


def location_data() -> dict:
    return {
        "address": fake.address(),
        "contact_name": fake.name()[:255],
        "contact_phone": valid_phone(),
        "latitude": float(fake.latitude()),
        "longitude": float(fake.longitude()),
    }


def delivery_data(order_id: str) -> dict:
    return {
        "order_id": order_id,
        "pickup": location_data(),
        "drop": location_data(),
        "delivery_fee": round(random.uniform(20.0, 120.0), 2),
        "tip": random.choice([0.0, 10.0, 20.0]),
    }
