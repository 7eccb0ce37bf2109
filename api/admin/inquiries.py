"""Admin inquiry triage endpoint: PATCH ``?id=`` with ``{"status": "contacted"}``."""

from primehomes.services.admin_mutations import AdminService
from primehomes.services.backend import CatalogBackend
from primehomes.services.session_gate import SessionGate
from primehomes.services.session_store import SessionStore
from primehomes.services.supabase_client import SupabaseBackend
from primehomes.utils.http import JSONHandler, Response


async def update_inquiry_status(
    body: dict,
    params: dict[str, str],
    store: SessionStore,
    backend: CatalogBackend,
) -> Response:
    SessionGate(store, backend).require()
    inquiry_id = (params.get("id") or "").strip()
    if not inquiry_id:
        raise ValueError("id is required")

    service = AdminService(backend)
    inquiry = await service.update_inquiry_status(inquiry_id, body.get("status", ""))
    return 200, {
        "inquiry": inquiry.model_dump(mode="json"),
        "dashboard": service.catalog.snapshot(),
    }


class handler(JSONHandler):
    """Vercel serverless function handler for inquiry triage."""

    def do_PATCH(self):
        params = self.query_params()
        self.respond(
            lambda store: update_inquiry_status(self.read_json(), params, store, SupabaseBackend()),
            with_session=True,
        )
