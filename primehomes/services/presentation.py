"""Display helpers that turn catalog state into JSON payloads."""

from typing import Iterable, Optional

from primehomes.models.filters import CatalogView
from primehomes.models.inquiry import Inquiry, InquiryStatus
from primehomes.models.listing import Listing, ListingImage, ListingType
from primehomes.utils.config import CURRENCY, MAP_EMBED_URL, PLACEHOLDER_IMAGE_URL


def format_price(price: float, currency: str = CURRENCY) -> str:
    """Format a price like ``MWK 50,000`` (cents only when present)."""
    if float(price).is_integer():
        return f"{currency} {price:,.0f}"
    return f"{currency} {price:,.2f}"


def transaction_label(listing: Listing) -> str:
    return "For Sale" if listing.type == ListingType.SALE else "For Rent"


def ordered_images(images: Iterable[ListingImage]) -> list[ListingImage]:
    """Primary image first, then by ``order_index``."""
    return sorted(images, key=lambda image: (not image.is_primary, image.order_index))


def primary_image_url(images: Iterable[ListingImage]) -> str:
    images = list(images)
    for image in images:
        if image.is_primary:
            return image.image_url
    if images:
        return images[0].image_url
    return PLACEHOLDER_IMAGE_URL


def distinct_cities(listings: Iterable[Listing]) -> list[str]:
    """Sorted, de-duplicated city names for the filter dropdown."""
    return sorted({listing.city for listing in listings if listing.city})


def inquiry_listing_title(inquiry: Inquiry, listings: Iterable[Listing]) -> str:
    if inquiry.is_general:
        return "General Inquiry"
    for listing in listings:
        if listing.id == inquiry.property_id:
            return listing.title
    return "Unknown Property"


def new_inquiry_count(inquiries: Iterable[Inquiry]) -> int:
    return sum(1 for inquiry in inquiries if inquiry.status == InquiryStatus.NEW)


def map_url(listing: Listing) -> Optional[str]:
    """Embeddable map centred on the listing, or None without both coordinates."""
    if not listing.has_coordinates:
        return None
    return MAP_EMBED_URL.format(latitude=listing.latitude, longitude=listing.longitude)


def listing_card(listing: Listing, images: Iterable[ListingImage]) -> dict:
    card = listing.model_dump(mode="json")
    card["price_display"] = format_price(listing.price)
    card["transaction_label"] = transaction_label(listing)
    card["primary_image_url"] = primary_image_url(images)
    return card


def listing_detail(listing: Listing, images: Iterable[ListingImage]) -> dict:
    """Detail view: card fields plus the ordered gallery (placeholder if empty)."""
    gallery = ordered_images(images)
    detail = listing_card(listing, gallery)
    if gallery:
        detail["images"] = [image.model_dump(mode="json") for image in gallery]
    else:
        detail["images"] = [{
            "id": None,
            "property_id": listing.id,
            "image_url": PLACEHOLDER_IMAGE_URL,
            "is_primary": True,
            "order_index": 0,
            "created_at": None,
        }]
    detail["has_coordinates"] = listing.has_coordinates
    detail["map_url"] = map_url(listing)
    return detail


def catalog_payload(view: CatalogView, images_for, cities: list[str]) -> dict:
    """Public catalog response.

    ``images_for`` maps a listing id to its images.
    """
    return {
        "featured": [listing_card(listing, images_for(listing.id)) for listing in view.featured],
        "regular": [listing_card(listing, images_for(listing.id)) for listing in view.regular],
        "cities": cities,
        "total": len(view.featured) + len(view.regular),
    }


def dashboard_payload(listings: list[Listing], images_for, inquiries: list[Inquiry]) -> dict:
    """Admin back-office snapshot: every listing plus triaged inquiries."""
    return {
        "listings": [listing_card(listing, images_for(listing.id)) for listing in listings],
        "inquiries": [
            {
                **inquiry.model_dump(mode="json"),
                "listing_title": inquiry_listing_title(inquiry, listings),
            }
            for inquiry in inquiries
        ],
        "counts": {
            "listings": len(listings),
            "new_inquiries": new_inquiry_count(inquiries),
        },
    }
