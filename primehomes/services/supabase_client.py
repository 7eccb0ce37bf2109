"""Supabase client wrapper with async context manager support."""

import asyncio
from datetime import datetime, timezone
from typing import Any, Optional
from supabase import create_client, Client
from supabase.client import ClientOptions

from primehomes.models.inquiry import Inquiry
from primehomes.models.listing import Listing, ListingImage, ListingStatus
from primehomes.models.session import AdminAccount
from primehomes.services.backend import CatalogBackend, Collection, parse_rows
from primehomes.utils.config import AppConfig
from primehomes.utils.errors import SupabaseError
from primehomes.utils.logging import get_structured_logger, log_timing, mask_email

logger = get_structured_logger(__name__)

# Global client instance (singleton pattern)
_client: Optional[Client] = None


def get_supabase_client() -> Client:
    """Get or create Supabase client singleton."""
    global _client

    if _client is None:
        url = AppConfig.supabase_url()
        key = AppConfig.supabase_key()

        if not url or not key:
            raise SupabaseError("SUPABASE_URL and SUPABASE_ANON_KEY must be set")

        options = ClientOptions(
            auto_refresh_token=False,
            persist_session=False,
        )

        _client = create_client(url, key, options)
        logger.info("Supabase client initialized", url=url)

    return _client


class SupabaseClient:
    """Async context manager for Supabase client."""

    def __init__(self):
        self.client: Optional[Client] = None

    async def __aenter__(self) -> Client:
        self.client = get_supabase_client()
        return self.client

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        if exc_type:
            logger.error(
                "Supabase operation error",
                error=str(exc_val),
                error_type=exc_type.__name__
            )
        return False


async def _execute(query: Any, action: str) -> Any:
    """Run a blocking PostgREST query off the event loop, wrapping driver errors."""
    try:
        return await asyncio.to_thread(query.execute)
    except Exception as e:
        raise SupabaseError(f"Failed to {action}: {e}") from e


class SupabaseBackend(CatalogBackend):
    """Collaborator backed by Supabase tables."""

    async def list_listings(
        self,
        status: Optional[str] = ListingStatus.AVAILABLE.value,
        featured_first: bool = True,
    ) -> list[Listing]:
        async with SupabaseClient() as client:
            query = client.table(Collection.LISTINGS.value).select("*")
            if status:
                query = query.eq("status", status)
            if featured_first:
                query = query.order("featured", desc=True)
            query = query.order("created_at", desc=True)

            with log_timing("list_listings", logger=logger, status=status or "any"):
                result = await _execute(query, "list listings")
            return parse_rows(Listing, result.data or [], Collection.LISTINGS)

    async def list_images(self, listing_id: Optional[str] = None) -> list[ListingImage]:
        async with SupabaseClient() as client:
            query = client.table(Collection.IMAGES.value).select("*")
            if listing_id:
                query = query.eq("property_id", listing_id).order("order_index")

            with log_timing("list_images", logger=logger):
                result = await _execute(query, "list images")
            return parse_rows(ListingImage, result.data or [], Collection.IMAGES)

    async def list_inquiries(self) -> list[Inquiry]:
        async with SupabaseClient() as client:
            query = client.table(Collection.INQUIRIES.value).select("*").order("created_at", desc=True)

            with log_timing("list_inquiries", logger=logger):
                result = await _execute(query, "list inquiries")
            return parse_rows(Inquiry, result.data or [], Collection.INQUIRIES)

    async def insert(self, collection: Collection, records: list[dict]) -> list[dict]:
        async with SupabaseClient() as client:
            query = client.table(collection.value).insert(records)
            result = await _execute(query, f"insert into {collection.value}")
            if not result.data:
                raise SupabaseError(f"Failed to insert into {collection.value}: no data returned")
            return result.data

    async def update(self, collection: Collection, record_id: str, changes: dict) -> dict:
        async with SupabaseClient() as client:
            query = client.table(collection.value).update(changes).eq("id", record_id)
            result = await _execute(query, f"update {collection.value}")
            if not result.data:
                raise SupabaseError(f"Failed to update {collection.value}: {record_id} not found")
            return result.data[0]

    async def delete(self, collection: Collection, record_id: str) -> None:
        async with SupabaseClient() as client:
            query = client.table(collection.value).delete().eq("id", record_id)
            await _execute(query, f"delete from {collection.value}")

    async def find_admin(self, email: str, password: str) -> Optional[AdminAccount]:
        async with SupabaseClient() as client:
            query = (
                client.table(Collection.ADMINS.value)
                .select("*")
                .eq("email", email)
                .eq("password", password)
                .eq("is_active", True)
                .limit(1)
            )
            with log_timing("find_admin", logger=logger, email=mask_email(email)):
                result = await _execute(query, "check admin credentials")
            admins = parse_rows(AdminAccount, result.data or [], Collection.ADMINS)
            return admins[0] if admins else None

    async def record_admin_login(self, admin_id: str) -> None:
        async with SupabaseClient() as client:
            query = (
                client.table(Collection.ADMINS.value)
                .update({"last_login": datetime.now(timezone.utc).isoformat()})
                .eq("id", admin_id)
            )
            await _execute(query, "record admin login")
