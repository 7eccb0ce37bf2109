"""Admin listings endpoint.

GET     dashboard snapshot (listings, inquiries, counts)
POST    create a listing (optional ``image_urls`` batch)
PUT     update listing ``?id=`` (optional ``image_urls`` batch)
DELETE  delete listing ``?id=&confirm=true``

Every mutation answers with the freshly reloaded dashboard.
"""

from primehomes.models.listing import ListingInput
from primehomes.services.admin_mutations import AdminService
from primehomes.services.backend import CatalogBackend
from primehomes.services.catalog_store import AdminCatalog
from primehomes.services.presentation import listing_card
from primehomes.services.session_gate import SessionGate
from primehomes.services.session_store import SessionStore
from primehomes.services.supabase_client import SupabaseBackend
from primehomes.utils.http import JSONHandler, Response, is_truthy


def _required_id(params: dict[str, str]) -> str:
    listing_id = (params.get("id") or "").strip()
    if not listing_id:
        raise ValueError("id is required")
    return listing_id


async def get_dashboard(store: SessionStore, backend: CatalogBackend) -> Response:
    SessionGate(store, backend).require()
    catalog = await AdminCatalog(backend).load()
    return 200, catalog.snapshot()


async def save_listing(
    body: dict,
    params: dict[str, str],
    store: SessionStore,
    backend: CatalogBackend,
    creating: bool,
) -> Response:
    SessionGate(store, backend).require()
    listing_id = None if creating else _required_id(params)
    image_urls = body.pop("image_urls", None) or []
    if not isinstance(image_urls, list):
        raise ValueError("image_urls must be a list")

    data = ListingInput.model_validate(body)
    service = AdminService(backend)
    listing = await service.save_listing(data, listing_id=listing_id, image_urls=image_urls)
    return (201 if creating else 200), {
        "listing": listing_card(listing, service.catalog.images_for(listing.id)),
        "dashboard": service.catalog.snapshot(),
    }


async def delete_listing(params: dict[str, str], store: SessionStore, backend: CatalogBackend) -> Response:
    SessionGate(store, backend).require()
    service = AdminService(backend)
    await service.delete_listing(_required_id(params), confirmed=is_truthy(params.get("confirm")))
    return 200, {"ok": True, "dashboard": service.catalog.snapshot()}


class handler(JSONHandler):
    """Vercel serverless function handler for admin listing management."""

    def do_GET(self):
        self.respond(lambda store: get_dashboard(store, SupabaseBackend()), with_session=True)

    def do_POST(self):
        params = self.query_params()
        self.respond(
            lambda store: save_listing(self.read_json(), params, store, SupabaseBackend(), creating=True),
            with_session=True,
        )

    def do_PUT(self):
        params = self.query_params()
        self.respond(
            lambda store: save_listing(self.read_json(), params, store, SupabaseBackend(), creating=False),
            with_session=True,
        )

    def do_DELETE(self):
        params = self.query_params()
        self.respond(lambda store: delete_listing(params, store, SupabaseBackend()), with_session=True)
