"""Admin listing images endpoint: POST adds a batch, DELETE removes one (``?id=&confirm=true``)."""

from primehomes.services.admin_mutations import AdminService
from primehomes.services.backend import CatalogBackend
from primehomes.services.session_gate import SessionGate
from primehomes.services.session_store import SessionStore
from primehomes.services.supabase_client import SupabaseBackend
from primehomes.utils.http import JSONHandler, Response, is_truthy


async def add_images(body: dict, store: SessionStore, backend: CatalogBackend) -> Response:
    SessionGate(store, backend).require()
    listing_id = body.get("listing_id") or ""
    image_urls = body.get("image_urls") or []
    if isinstance(listing_id, int) and not isinstance(listing_id, bool):
        listing_id = str(listing_id)
    if not isinstance(listing_id, str) or not listing_id.strip():
        raise ValueError("listing_id is required")
    if not isinstance(image_urls, list):
        raise ValueError("image_urls must be a list")

    service = AdminService(backend)
    images = await service.add_images(listing_id.strip(), image_urls)
    return 201, {
        "images": [image.model_dump(mode="json") for image in images],
        "dashboard": service.catalog.snapshot(),
    }


async def delete_image(params: dict[str, str], store: SessionStore, backend: CatalogBackend) -> Response:
    SessionGate(store, backend).require()
    image_id = (params.get("id") or "").strip()
    if not image_id:
        raise ValueError("id is required")

    service = AdminService(backend)
    await service.delete_image(image_id, confirmed=is_truthy(params.get("confirm")))
    return 200, {"ok": True, "dashboard": service.catalog.snapshot()}


class handler(JSONHandler):
    """Vercel serverless function handler for admin image management."""

    def do_POST(self):
        self.respond(lambda store: add_images(self.read_json(), store, SupabaseBackend()), with_session=True)

    def do_DELETE(self):
        params = self.query_params()
        self.respond(lambda store: delete_image(params, store, SupabaseBackend()), with_session=True)
