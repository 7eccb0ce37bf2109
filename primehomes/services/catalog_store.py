"""In-memory catalog state, replaced wholesale on every load."""

import asyncio
from typing import Optional

from primehomes.models.filters import CatalogView, FilterCriteria
from primehomes.models.inquiry import Inquiry
from primehomes.models.listing import Listing, ListingImage, ListingStatus
from primehomes.services import filter_engine
from primehomes.services.backend import CatalogBackend
from primehomes.services.presentation import catalog_payload, dashboard_payload, distinct_cities
from primehomes.utils.errors import SupabaseError
from primehomes.utils.logging import get_structured_logger, log_timing

logger = get_structured_logger(__name__)


class CatalogStore:
    """Public catalog: available listings (featured-first, newest-first) and their images.

    ``last_error`` keeps the most recent load failure so it can be shown as a
    banner; it is cleared by the next successful load.
    """

    def __init__(self, backend: CatalogBackend):
        self.backend = backend
        self.listings: list[Listing] = []
        self.images: list[ListingImage] = []
        self.loaded = False
        self.last_error: Optional[str] = None

    async def _fetch(self) -> tuple:
        return await asyncio.gather(
            self.backend.list_listings(status=ListingStatus.AVAILABLE.value, featured_first=True),
            self.backend.list_images(),
        )

    def _replace(self, listings: list[Listing], images: list[ListingImage]) -> None:
        self.listings = list(listings)
        self.images = list(images)

    async def load(self) -> "CatalogStore":
        """Fetch everything and swap it in; on failure the previous state is kept."""
        with log_timing(f"{type(self).__name__}.load", logger=logger):
            try:
                fetched = await self._fetch()
            except SupabaseError as e:
                self.last_error = str(e)
                logger.error("Catalog load failed", error=str(e), store=type(self).__name__)
                raise

        self._replace(*fetched)
        self.loaded = True
        self.last_error = None
        logger.info(
            "Catalog loaded",
            store=type(self).__name__,
            listing_count=len(self.listings),
            image_count=len(self.images),
        )
        return self

    async def reload(self) -> "CatalogStore":
        return await self.load()

    def get(self, listing_id: str) -> Optional[Listing]:
        for listing in self.listings:
            if listing.id == listing_id:
                return listing
        return None

    def images_for(self, listing_id: str) -> list[ListingImage]:
        return [image for image in self.images if image.property_id == listing_id]

    def cities(self) -> list[str]:
        return distinct_cities(self.listings)

    def search(self, criteria: FilterCriteria, query: str = "") -> list[Listing]:
        return filter_engine.apply(self.listings, criteria, query)

    def view(self, criteria: FilterCriteria, query: str = "") -> CatalogView:
        return filter_engine.partition(self.search(criteria, query))

    def payload(self, criteria: FilterCriteria, query: str = "") -> dict:
        return catalog_payload(self.view(criteria, query), self.images_for, self.cities())


class AdminCatalog(CatalogStore):
    """Back-office catalog: every listing newest-first, all images, all inquiries."""

    def __init__(self, backend: CatalogBackend):
        super().__init__(backend)
        self.inquiries: list[Inquiry] = []

    async def _fetch(self) -> tuple:
        return await asyncio.gather(
            self.backend.list_listings(status=None, featured_first=False),
            self.backend.list_images(),
            self.backend.list_inquiries(),
        )

    def _replace(self, listings: list[Listing], images: list[ListingImage], inquiries: list[Inquiry] = ()) -> None:
        super()._replace(listings, images)
        self.inquiries = list(inquiries)

    def snapshot(self) -> dict:
        return dashboard_payload(self.listings, self.images_for, self.inquiries)
