"""Test helper functions."""

import json
from datetime import datetime
from http.client import HTTPMessage
from io import BytesIO
from typing import Any, Dict, Optional
from unittest.mock import Mock

from primehomes.services.session_store import seal
from primehomes.utils.config import SESSION_KEY


class MockSocket:
    """Socket whose request stream is empty, so constructing a handler runs no verb."""

    def makefile(self, *args, **kwargs):
        return BytesIO(b"")

    def sendall(self, data):
        pass

    def close(self):
        pass


def build_handler(
    handler_cls,
    method: str = "GET",
    path: str = "/",
    body: Any = None,
    headers: Optional[Dict[str, str]] = None,
):
    """Create a handler instance primed with a request, with response methods mocked."""
    h = handler_cls(MockSocket(), ("127.0.0.1", 8000), None)

    if body is None:
        raw = b""
    elif isinstance(body, (bytes, str)):
        raw = body.encode('utf-8') if isinstance(body, str) else body
    else:
        raw = json.dumps(body).encode('utf-8')

    message = HTTPMessage()
    for key, value in (headers or {}).items():
        message[key] = value
    message["Content-Length"] = str(len(raw))

    h.command = method
    h.path = path
    h.request_version = "HTTP/1.1"
    h.headers = message
    h.rfile = BytesIO(raw)
    h.wfile = BytesIO()
    h.send_response = Mock()
    h.send_header = Mock()
    h.end_headers = Mock()
    return h


def response_status(h) -> int:
    return h.send_response.call_args[0][0]


def response_json(h) -> Dict[str, Any]:
    h.wfile.seek(0)
    return json.loads(h.wfile.read().decode('utf-8'))


def set_cookie_headers(h) -> list[str]:
    return [c.args[1] for c in h.send_header.call_args_list if c.args[0] == 'Set-Cookie']


def cookie_from_set_cookie(set_cookie: str) -> str:
    """Turn a ``Set-Cookie`` value into the ``Cookie`` header a browser would send back."""
    return set_cookie.split(";", 1)[0]


def session_json(login_time: datetime, **overrides) -> str:
    """Raw ``admin_session`` record as the browser stores it."""
    record = {
        "id": "admin-1",
        "email": "admin@primehomes.mw",
        "name": "Chikondi Banda",
        "loginTime": login_time.isoformat(),
    }
    record.update(overrides)
    return json.dumps(record)


def session_cookie(secret: str, login_time: datetime, **overrides) -> str:
    """``Cookie`` header carrying a correctly signed session."""
    return f"{SESSION_KEY}={seal(secret, session_json(login_time, **overrides))}"
