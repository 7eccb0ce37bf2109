"""Collaborator port: the narrow interface to the hosted data store."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Iterable, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from primehomes.models.inquiry import Inquiry
from primehomes.models.listing import Listing, ListingImage, ListingStatus
from primehomes.models.session import AdminAccount
from primehomes.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class Collection(str, Enum):
    """Collections (tables) exposed by the collaborator."""
    LISTINGS = "properties"
    IMAGES = "property_images"
    INQUIRIES = "contact_inquiries"
    ADMINS = "admins"


class CatalogBackend(ABC):
    """Storage-agnostic collaborator interface.

    Implementations raise ``SupabaseError`` (or a subclass) for any
    connectivity or query failure; callers never see driver exceptions.
    """

    @abstractmethod
    async def list_listings(
        self,
        status: Optional[str] = ListingStatus.AVAILABLE.value,
        featured_first: bool = True,
    ) -> list[Listing]:
        """Listings ordered featured-first (optional) then newest-first.

        ``status=None`` returns every status.
        """

    @abstractmethod
    async def list_images(self, listing_id: Optional[str] = None) -> list[ListingImage]:
        """All images, or one listing's images ordered by ``order_index``."""

    @abstractmethod
    async def list_inquiries(self) -> list[Inquiry]:
        """Inquiries newest-first."""

    @abstractmethod
    async def insert(self, collection: Collection, records: list[dict]) -> list[dict]:
        """Insert rows and return them as stored."""

    @abstractmethod
    async def update(self, collection: Collection, record_id: str, changes: dict) -> dict:
        """Update one row by id and return it as stored."""

    @abstractmethod
    async def delete(self, collection: Collection, record_id: str) -> None:
        """Delete one row by id."""

    @abstractmethod
    async def find_admin(self, email: str, password: str) -> Optional[AdminAccount]:
        """Active admin whose email and secret match exactly, or None."""

    @abstractmethod
    async def record_admin_login(self, admin_id: str) -> None:
        """Stamp ``last_login`` on an admin row."""


def parse_rows(model: Type[ModelT], rows: Iterable[dict], collection: Collection) -> list[ModelT]:
    """Validate raw rows, skipping (and logging) rows that do not fit the model."""
    parsed: list[ModelT] = []
    for row in rows:
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as e:
            logger.warning(
                "Skipping malformed row",
                collection=collection.value,
                row_id=row.get("id") if isinstance(row, dict) else None,
                error_count=e.error_count(),
            )
    return parsed
