"""Admin mutation layer: forwards writes to the collaborator, then reloads the admin catalog."""

from typing import Awaitable, Iterable, Optional, TypeVar, Union

from primehomes.models.inquiry import Inquiry, InquiryStatus
from primehomes.models.listing import Listing, ListingImage, ListingInput
from primehomes.services.backend import CatalogBackend, Collection
from primehomes.services.catalog_store import AdminCatalog
from primehomes.utils.errors import AdminMutationError, ConfirmationRequiredError, SupabaseError
from primehomes.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)

T = TypeVar("T")


class AdminService:
    """Back-office operations.

    Every successful write is followed by a full reload of ``catalog``; there
    are no optimistic or incremental updates and nothing is retried. Failures
    raise ``AdminMutationError`` carrying a message meant for the operator.
    """

    def __init__(self, backend: CatalogBackend, catalog: Optional[AdminCatalog] = None):
        self.backend = backend
        self.catalog = catalog or AdminCatalog(backend)

    async def _forward(self, action: str, operation: Awaitable[T]) -> T:
        try:
            return await operation
        except SupabaseError as e:
            logger.error("Admin mutation failed", action=action, error=str(e))
            raise AdminMutationError(f"Failed to {action}: {e}") from e

    async def _refresh(self) -> None:
        await self.catalog.reload()

    async def create_listing(self, data: ListingInput) -> Listing:
        rows = await self._forward("create property", self.backend.insert(Collection.LISTINGS, [data.to_record()]))
        listing = Listing.model_validate(rows[0])
        logger.info("Listing created", listing_id=listing.id)
        await self._refresh()
        return listing

    async def update_listing(self, listing_id: str, data: ListingInput) -> Listing:
        row = await self._forward("update property", self.backend.update(Collection.LISTINGS, listing_id, data.to_record()))
        listing = Listing.model_validate(row)
        logger.info("Listing updated", listing_id=listing_id, status=listing.status.value)
        await self._refresh()
        return listing

    async def delete_listing(self, listing_id: str, confirmed: bool = False) -> None:
        if not confirmed:
            raise ConfirmationRequiredError("Are you sure you want to delete this property?")
        await self._forward("delete property", self.backend.delete(Collection.LISTINGS, listing_id))
        logger.info("Listing deleted", listing_id=listing_id)
        await self._refresh()

    async def add_images(self, listing_id: str, image_urls: Iterable[str]) -> list[ListingImage]:
        """Attach a batch of image URLs; the first becomes primary, order follows the batch."""
        records = self._image_records(listing_id, image_urls)
        if not records:
            return []
        rows = await self._forward("add images", self.backend.insert(Collection.IMAGES, records))
        logger.info("Images added", listing_id=listing_id, image_count=len(rows))
        await self._refresh()
        return [ListingImage.model_validate(row) for row in rows]

    async def delete_image(self, image_id: str, confirmed: bool = False) -> None:
        if not confirmed:
            raise ConfirmationRequiredError("Delete this image?")
        await self._forward("delete image", self.backend.delete(Collection.IMAGES, image_id))
        logger.info("Image deleted", image_id=image_id)
        await self._refresh()

    async def update_inquiry_status(self, inquiry_id: str, status: Union[InquiryStatus, str]) -> Inquiry:
        status = InquiryStatus(status)
        row = await self._forward(
            "update status",
            self.backend.update(Collection.INQUIRIES, inquiry_id, {"status": status.value}),
        )
        logger.info("Inquiry status updated", inquiry_id=inquiry_id, status=status.value)
        await self._refresh()
        return Inquiry.model_validate(row)

    async def save_listing(
        self,
        data: ListingInput,
        listing_id: Optional[str] = None,
        image_urls: Iterable[str] = (),
    ) -> Listing:
        """Create or update a listing plus its new images, reloading once at the end.

        Once the listing row is written, a failed image insert is logged and
        the save still succeeds, so a retry never duplicates the listing.
        """
        urls = self._clean_urls(image_urls)
        if listing_id:
            row = await self._forward("save property", self.backend.update(Collection.LISTINGS, listing_id, data.to_record()))
        else:
            rows = await self._forward("save property", self.backend.insert(Collection.LISTINGS, [data.to_record()]))
            row = rows[0]
        listing = Listing.model_validate(row)

        records = self._image_records(listing.id, urls)
        if records:
            try:
                await self.backend.insert(Collection.IMAGES, records)
            except SupabaseError as e:
                logger.warning("Image insert failed", listing_id=listing.id, image_count=len(records), error=str(e))
                records = []

        logger.info("Listing saved", listing_id=listing.id, is_new=listing_id is None, image_count=len(records))
        await self._refresh()
        return listing

    @staticmethod
    def _clean_urls(image_urls: Iterable[str]) -> list[str]:
        """Trimmed non-blank URLs; anything that is not a string is rejected."""
        urls = []
        for url in image_urls:
            if url is None:
                continue
            if not isinstance(url, str):
                raise ValueError("image_urls must be a list of strings")
            if url.strip():
                urls.append(url.strip())
        return urls

    @classmethod
    def _image_records(cls, listing_id: str, image_urls: Iterable[str]) -> list[dict]:
        return [
            {
                "property_id": listing_id,
                "image_url": url,
                "is_primary": index == 0,
                "order_index": index,
            }
            for index, url in enumerate(cls._clean_urls(image_urls))
        ]
