"""Catalog filtering and featured/regular partitioning.

Two modes, chosen per call:

* Structural: with an empty query, a listing survives only when every active
  criterion (type, category, city, price bounds) matches.
* Text search: a non-empty query *replaces* the structural predicate. A
  listing matches when the query appears (case-insensitively) in its title,
  description, location, city or category; structural criteria are ignored.

Both modes preserve the input order.
"""

import math
from typing import Iterable, Optional

from primehomes.models.filters import ALL, CatalogView, FilterCriteria
from primehomes.models.listing import Listing
from primehomes.utils.config import FEATURED_LIMIT


def parse_price_bound(raw: Optional[str]) -> Optional[float]:
    """Parse a user-typed price bound; anything unusable disables the bound."""
    if raw is None:
        return None
    text = str(raw).strip()
    if not text or "_" in text:
        return None
    try:
        value = float(text)
    except ValueError:
        return None
    return value if math.isfinite(value) else None


def matches_criteria(listing: Listing, criteria: FilterCriteria) -> bool:
    if criteria.type != ALL and listing.type.value != criteria.type:
        return False
    if criteria.category != ALL and listing.category.value != criteria.category:
        return False
    if criteria.city and listing.city != criteria.city:
        return False

    min_price = parse_price_bound(criteria.min_price)
    if min_price is not None and listing.price < min_price:
        return False
    max_price = parse_price_bound(criteria.max_price)
    if max_price is not None and listing.price > max_price:
        return False

    return True


def matches_query(listing: Listing, query: str) -> bool:
    needle = query.lower()
    haystacks = (
        listing.title,
        listing.description,
        listing.location,
        listing.city,
        listing.category.value,
    )
    return any(needle in text.lower() for text in haystacks)


def apply(listings: Iterable[Listing], criteria: FilterCriteria, query: str = "") -> list[Listing]:
    """Return the listings to display, in catalog order."""
    if query:
        return [listing for listing in listings if matches_query(listing, query)]
    return [listing for listing in listings if matches_criteria(listing, criteria)]


def partition(results: Iterable[Listing], featured_limit: int = FEATURED_LIMIT) -> CatalogView:
    """Split results into a capped featured group and an uncapped regular group."""
    results = list(results)
    featured = [listing for listing in results if listing.featured][:featured_limit]
    regular = [listing for listing in results if not listing.featured]
    return CatalogView(featured=featured, regular=regular)
