"""Test data factories using Faker."""

from faker import Faker
from datetime import datetime, timedelta, timezone

from primehomes.models.inquiry import Inquiry
from primehomes.models.listing import Listing, ListingImage

fake = Faker()

CITIES = ["Lilongwe", "Blantyre", "Mzuzu", "Zomba"]


def _timestamp(days_ago: int) -> str:
    return (datetime(2024, 12, 9, tzinfo=timezone.utc) - timedelta(days=days_ago)).isoformat()


def create_listing_data(**overrides) -> dict:
    """Create a ``properties`` row."""
    data = {
        "id": fake.uuid4(),
        "title": fake.sentence(nb_words=3).rstrip("."),
        "description": fake.text(max_nb_chars=120),
        "price": fake.random_int(min=5000, max=900000),
        "type": fake.random_element(["sale", "rent"]),
        "category": fake.random_element(["house", "apartment", "land", "commercial"]),
        "bedrooms": fake.random_int(min=0, max=6),
        "bathrooms": fake.random_int(min=0, max=4),
        "area_sqm": fake.random_int(min=30, max=900),
        "location": fake.street_address(),
        "city": fake.random_element(CITIES),
        "latitude": None,
        "longitude": None,
        "featured": fake.boolean(chance_of_getting_true=30),
        "status": "available",
        "created_at": _timestamp(fake.random_int(min=0, max=365)),
        "updated_at": _timestamp(0),
    }
    data.update(overrides)
    return data


def create_listing(**overrides) -> Listing:
    return Listing.model_validate(create_listing_data(**overrides))


def create_listings(count: int, **overrides) -> list[Listing]:
    return [create_listing(**overrides) for _ in range(count)]


def create_image_data(property_id: str, **overrides) -> dict:
    """Create a ``property_images`` row."""
    data = {
        "id": fake.uuid4(),
        "property_id": property_id,
        "image_url": fake.image_url(),
        "is_primary": False,
        "order_index": 0,
        "created_at": _timestamp(0),
    }
    data.update(overrides)
    return data


def create_image(property_id: str, **overrides) -> ListingImage:
    return ListingImage.model_validate(create_image_data(property_id, **overrides))


def create_inquiry_data(property_id=None, **overrides) -> dict:
    """Create a ``contact_inquiries`` row."""
    data = {
        "id": fake.uuid4(),
        "property_id": property_id,
        "name": fake.name(),
        "email": fake.email(),
        "phone": fake.phone_number(),
        "message": fake.sentence(),
        "status": "new",
        "created_at": _timestamp(fake.random_int(min=0, max=30)),
    }
    data.update(overrides)
    return data


def create_inquiry(property_id=None, **overrides) -> Inquiry:
    return Inquiry.model_validate(create_inquiry_data(property_id, **overrides))


def create_admin_data(**overrides) -> dict:
    """Create an ``admins`` row."""
    data = {
        "id": fake.uuid4(),
        "email": fake.email(),
        "password": fake.password(),
        "name": fake.name(),
        "is_active": True,
        "last_login": None,
    }
    data.update(overrides)
    return data


def create_listing_form(**overrides) -> dict:
    """Admin form payload, with values typed as strings the way a form posts them."""
    data = {
        "title": "  Garden Cottage ",
        "description": "Quiet cottage with a garden",
        "price": "75000",
        "type": "SALE",
        "category": "House",
        "bedrooms": "3",
        "bathrooms": "2",
        "area_sqm": "140.5",
        "location": "Area 47",
        "city": "Lilongwe",
        "latitude": "",
        "longitude": "",
        "featured": "on",
        "status": "Available",
    }
    data.update(overrides)
    return data
