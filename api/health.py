"""Health check endpoint."""

from primehomes.utils.config import AppConfig
from primehomes.utils.http import JSONHandler, Response

SERVICE_NAME = "primehomes-backend"


async def health() -> Response:
    """Liveness plus a cheap check that the deployment carries its settings."""
    return 200, {
        "status": "ok",
        "service": SERVICE_NAME,
        "supabase_configured": bool(AppConfig.supabase_url() and AppConfig.supabase_key()),
    }


class handler(JSONHandler):
    """Health check handler for Vercel serverless function."""

    def do_GET(self):
        self.respond(health)

    def do_POST(self):
        """Same as GET for health check."""
        self.do_GET()
