"""Public catalog endpoint: filtered listing groups, or a single listing's detail view."""

from primehomes.models.filters import FilterCriteria
from primehomes.services.backend import CatalogBackend
from primehomes.services.catalog_store import CatalogStore
from primehomes.services.presentation import listing_detail
from primehomes.services.supabase_client import SupabaseBackend
from primehomes.utils.http import JSONHandler, Response


async def get_catalog(params: dict[str, str], backend: CatalogBackend) -> Response:
    """
    Load the catalog and answer one of two shapes.

    With ``id``: the detail view (gallery ordered primary-first).
    Otherwise: ``featured``/``regular`` groups for the given filters and
    free-text ``q``, plus the city list for the filter dropdown.
    """
    store = await CatalogStore(backend).load()

    listing_id = params.get("id")
    if listing_id:
        listing = store.get(listing_id)
        if listing is None:
            return 404, {"error": "listing not found"}
        return 200, listing_detail(listing, store.images_for(listing.id))

    criteria = FilterCriteria.from_params(params)
    return 200, store.payload(criteria, params.get("q", ""))


class handler(JSONHandler):
    """Vercel serverless function handler for the public catalog."""

    def do_GET(self):
        params = self.query_params()
        self.respond(lambda: get_catalog(params, SupabaseBackend()))
