"""Shared pytest fixtures and configuration."""

import os
import pytest
from freezegun import freeze_time

# Set test environment variables
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("SUPABASE_URL", "https://test.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-key")
os.environ.setdefault("SESSION_SIGNING_SECRET", "test-session-secret")
os.environ.setdefault("SESSION_COOKIE_SECURE", "false")
os.environ.setdefault("LOG_FORMAT", "text")

from faker import Faker

from primehomes.services.session_store import InMemorySessionStore
from primehomes.utils.logging_config import LoggingConfig
from tests.utils.factories import create_admin_data, create_image_data, create_listing_data
from tests.utils.fakes import InMemoryBackend

Faker.seed(20241209)

# Configure once up front so handlers never replace pytest's capture handler mid-test
LoggingConfig.ensure_configured()


@pytest.fixture
def admin_row():
    return create_admin_data(email="admin@primehomes.mw", password="secret", name="Chikondi Banda")


@pytest.fixture
def lake_view_villa():
    return create_listing_data(
        id="lake-view",
        title="Lake View Villa",
        description="Five bedroom villa overlooking the lake",
        location="Katoto",
        city="Mzuzu",
        price=50000,
        type="sale",
        category="house",
        featured=True,
        created_at="2024-12-01T08:00:00+00:00",
    )


@pytest.fixture
def city_flat():
    return create_listing_data(
        id="city-flat",
        title="City Flat",
        description="Two bedroom flat near the market",
        location="Limbe",
        city="Blantyre",
        price=20000,
        type="rent",
        category="apartment",
        featured=False,
        created_at="2024-12-05T08:00:00+00:00",
    )


@pytest.fixture
def fake_backend(lake_view_villa, city_flat, admin_row):
    """In-memory collaborator seeded with two listings, one image and an admin."""
    return InMemoryBackend(
        listings=[lake_view_villa, city_flat],
        images=[create_image_data(property_id="lake-view", is_primary=True, order_index=0)],
        admins=[admin_row],
    )


@pytest.fixture
def memory_store():
    return InMemorySessionStore()


@pytest.fixture
def freeze_time_fixture():
    """Fixture for freezing time in tests."""
    with freeze_time("2024-12-09 12:00:00") as frozen_time:
        yield frozen_time
