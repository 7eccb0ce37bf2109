"""Public contact form endpoint."""

from primehomes.models.inquiry import InquiryInput
from primehomes.services.backend import CatalogBackend
from primehomes.services.inquiries import submit_inquiry
from primehomes.services.supabase_client import SupabaseBackend
from primehomes.utils.http import JSONHandler, Response


async def post_inquiry(body: dict, backend: CatalogBackend) -> Response:
    inquiry = await submit_inquiry(backend, InquiryInput.model_validate(body))
    return 201, {"ok": True, "id": inquiry.id, "status": inquiry.status.value}


class handler(JSONHandler):
    """Vercel serverless function handler for contact inquiries."""

    def do_POST(self):
        self.respond(lambda: post_inquiry(self.read_json(), SupabaseBackend()))
