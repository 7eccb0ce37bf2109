"""Shared plumbing for the Vercel serverless handlers in ``api/``."""

import asyncio
import json
from http.server import BaseHTTPRequestHandler
from typing import Any, Awaitable, Callable, Iterable, Optional
from urllib.parse import parse_qs, urlsplit

from pydantic import ValidationError

from primehomes.services.session_store import CookieSessionStore
from primehomes.utils.config import AppConfig
from primehomes.utils.errors import (
    AdminMutationError,
    ConfigurationError,
    ConfirmationRequiredError,
    NotAuthenticatedError,
    SupabaseError,
)
from primehomes.utils.logging import correlation_context, get_structured_logger, mask_sensitive_data
from primehomes.utils.logging_config import LoggingConfig

logger = get_structured_logger(__name__)

Response = tuple[int, dict]


def run_async(coro: Awaitable[Any]) -> Any:
    """Drive a coroutine to completion from a synchronous handler."""
    try:
        loop = asyncio.get_event_loop()
    except RuntimeError:
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    if loop.is_closed():
        loop = asyncio.new_event_loop()
        asyncio.set_event_loop(loop)
    return loop.run_until_complete(coro)


def error_response(exc: Exception) -> Response:
    """Map an exception onto a status code and an operator-facing payload."""
    if isinstance(exc, ValidationError):
        return 400, {
            "error": "Please fill in all required fields correctly",
            "fields": sorted({".".join(str(part) for part in err["loc"]) for err in exc.errors()}),
        }
    if isinstance(exc, ValueError):
        return 400, {"error": str(exc)}
    if isinstance(exc, NotAuthenticatedError):
        return 401, {"error": "authentication required"}
    if isinstance(exc, ConfirmationRequiredError):
        return 409, {"error": str(exc), "confirm": True}
    if isinstance(exc, (AdminMutationError, SupabaseError)):
        # Collaborator failures block the operator until acknowledged
        return 502, {"error": str(exc), "notify": True}
    if isinstance(exc, ConfigurationError):
        return 500, {"error": "service misconfigured"}
    return 500, {"error": "internal server error"}


def first_values(query: str) -> dict[str, str]:
    """Flatten a query string to its first value per key, keeping blanks."""
    return {key: values[0] for key, values in parse_qs(query, keep_blank_values=True).items()}


def is_truthy(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in ("1", "true", "yes", "on")


class JSONHandler(BaseHTTPRequestHandler):
    """Base handler: JSON in, JSON out, with correlation IDs and error mapping."""

    def query_params(self) -> dict[str, str]:
        return first_values(urlsplit(self.path).query)

    def read_json(self) -> dict:
        """Parse the request body; a missing or non-object body reads as ``{}``."""
        content_length = int(self.headers.get('Content-Length', 0) or 0)
        raw_body = self.rfile.read(content_length).decode('utf-8') if content_length > 0 else ""
        if not raw_body:
            return {}
        try:
            body = json.loads(raw_body)
        except json.JSONDecodeError:
            raise ValueError("request body must be JSON")
        if not isinstance(body, dict):
            raise ValueError("request body must be a JSON object")
        return body

    def session_store(self) -> CookieSessionStore:
        return CookieSessionStore(
            self.headers.get("Cookie"),
            secret=AppConfig.session_signing_secret(),
            secure=AppConfig.session_cookie_secure(),
        )

    def send_json(self, status: int, payload: dict, cookies: Iterable[str] = ()) -> None:
        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        for cookie in cookies:
            self.send_header('Set-Cookie', cookie)
        self.end_headers()
        self.wfile.write(json.dumps(payload).encode('utf-8'))

    def respond(self, action: Callable[..., Awaitable[Response]], with_session: bool = False) -> None:
        """Run ``action`` inside a correlation context and write its result.

        With ``with_session`` the action receives the request's cookie
        store. Cookies it queues are sent on success and on error, so a
        session invalidated mid-request is still cleared in the browser.
        """
        LoggingConfig.ensure_configured()
        store: Optional[CookieSessionStore] = None
        with correlation_context(self.headers.get(LoggingConfig.LOG_CORRELATION_ID_HEADER)):
            try:
                if with_session:
                    store = self.session_store()
                    status, payload = run_async(action(store))
                else:
                    status, payload = run_async(action())
            except Exception as e:
                status, payload = error_response(e)
                if status >= 500:
                    logger.error(
                        "Request failed",
                        method=self.command,
                        path=self.path,
                        status_code=status,
                        error=mask_sensitive_data(str(e)),
                        error_type=type(e).__name__,
                        exc_info=status == 500,
                    )
                else:
                    logger.info("Request rejected", method=self.command, path=self.path, status_code=status)
            self.send_json(status, payload, cookies=store.outgoing if store else ())

    def log_message(self, format: str, *args: Any) -> None:
        logger.debug("HTTP access", detail=format % args)
