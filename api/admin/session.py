"""Admin session endpoint: GET restores, POST logs in, DELETE logs out."""

from primehomes.models.session import AuthOutcome, SessionState
from primehomes.services.backend import CatalogBackend
from primehomes.services.session_gate import SessionGate
from primehomes.services.session_store import SessionStore
from primehomes.services.supabase_client import SupabaseBackend
from primehomes.utils.http import JSONHandler, Response

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
TRANSIENT_FAILURE_MESSAGE = "An error occurred during login. Please try again."


def session_body(state: SessionState) -> dict:
    admin = None
    if state.token is not None:
        admin = {"id": state.token.id, "email": state.token.email, "name": state.token.name}
    return {"authorized": state.authorized, "admin": admin}


async def restore_session(store: SessionStore, backend: CatalogBackend) -> Response:
    return 200, session_body(SessionGate(store, backend).restore())


async def login(body: dict, store: SessionStore, backend: CatalogBackend) -> Response:
    email = body.get("email") or ""
    password = body.get("password") or ""
    if not isinstance(email, str) or not isinstance(password, str):
        raise ValueError("email and password must be strings")
    state = await SessionGate(store, backend).login(email, password)
    if state.outcome == AuthOutcome.INVALID_CREDENTIALS:
        return 401, {"authorized": False, "error": INVALID_CREDENTIALS_MESSAGE}
    if state.outcome == AuthOutcome.TRANSIENT_FAILURE:
        return 503, {"authorized": False, "error": TRANSIENT_FAILURE_MESSAGE}
    return 200, session_body(state)


async def logout(store: SessionStore, backend: CatalogBackend) -> Response:
    return 200, session_body(SessionGate(store, backend).logout())


class handler(JSONHandler):
    """Vercel serverless function handler for admin sessions."""

    def do_GET(self):
        self.respond(lambda store: restore_session(store, SupabaseBackend()), with_session=True)

    def do_POST(self):
        self.respond(lambda store: login(self.read_json(), store, SupabaseBackend()), with_session=True)

    def do_DELETE(self):
        self.respond(lambda store: logout(store, SupabaseBackend()), with_session=True)
