"""Storage ports for the persisted admin session record."""

import base64
import binascii
import hashlib
import hmac
from abc import ABC, abstractmethod
from http.cookies import SimpleCookie
from typing import Optional

from primehomes.utils.config import SESSION_VALIDITY
from primehomes.utils.errors import SessionSigningError
from primehomes.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


class SessionStore(ABC):
    """Key/value store holding whole session records as strings."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """Stored value, or None when the key is absent."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        ...


class InMemorySessionStore(SessionStore):
    """Dictionary-backed store for local runs and tests."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def delete(self, key: str) -> None:
        self.data.pop(key, None)


def sign_value(secret: str, payload: str) -> str:
    """HMAC-SHA256 hex digest of ``payload``."""
    if not secret:
        raise SessionSigningError("Session signing secret is empty")
    return hmac.new(
        secret.encode('utf-8'),
        payload.encode('utf-8'),
        hashlib.sha256
    ).hexdigest()


def seal(secret: str, value: str) -> str:
    """Encode ``value`` as ``<base64url>.<signature>`` (cookie-safe characters only)."""
    payload = base64.urlsafe_b64encode(value.encode('utf-8')).decode('ascii').rstrip("=")
    return f"{payload}.{sign_value(secret, payload)}"


def unseal(secret: str, sealed: str) -> Optional[str]:
    """Verify and decode a sealed value; None when the signature or encoding is bad."""
    payload, dot, signature = sealed.rpartition(".")
    if not dot or not payload:
        return None
    if not hmac.compare_digest(sign_value(secret, payload), signature):
        return None
    try:
        padded = payload + "=" * (-len(payload) % 4)
        return base64.urlsafe_b64decode(padded.encode('ascii')).decode('utf-8')
    except (binascii.Error, UnicodeError, ValueError):
        return None


def parse_cookie_header(cookie_header: Optional[str]) -> dict[str, str]:
    """Split a ``Cookie`` header into name/value pairs.

    Each pair is read on its own, so a foreign cookie that is not valid
    RFC 6265 (JSON values, spaces) cannot hide the ones after it. The first
    occurrence of a name wins, as browsers send the most specific path first.
    """
    cookies: dict[str, str] = {}
    for pair in (cookie_header or "").split(";"):
        name, eq, value = pair.strip().partition("=")
        name = name.strip()
        if not eq or not name or name in cookies:
            continue
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        cookies[name] = value
    return cookies


class CookieSessionStore(SessionStore):
    """Session store backed by the browser's cookie jar.

    Reads come from the request's ``Cookie`` header; writes and deletes are
    queued as ``Set-Cookie`` header values in ``outgoing``. A cookie that
    fails signature verification reads back as an empty string, which the
    session gate treats as a corrupt record.
    """

    def __init__(self, cookie_header: Optional[str], secret: str, secure: bool = True):
        self.secret = secret
        self.secure = secure
        self.outgoing: list[str] = []
        self._cookies = parse_cookie_header(cookie_header)

    def get(self, key: str) -> Optional[str]:
        raw = self._cookies.get(key)
        if raw is None:
            return None
        value = unseal(self.secret, raw)
        if value is None:
            logger.warning("Session cookie failed verification", cookie=key)
            return ""
        return value

    def set(self, key: str, value: str) -> None:
        sealed = seal(self.secret, value)
        self._cookies[key] = sealed
        self.outgoing.append(self._header(key, sealed, int(SESSION_VALIDITY.total_seconds())))

    def delete(self, key: str) -> None:
        self._cookies.pop(key, None)
        self.outgoing.append(self._header(key, "", 0))

    def _header(self, key: str, value: str, max_age: int) -> str:
        cookie = SimpleCookie()
        cookie[key] = value
        morsel = cookie[key]
        morsel["path"] = "/"
        morsel["httponly"] = True
        morsel["samesite"] = "Lax"
        morsel["max-age"] = max_age
        if self.secure:
            morsel["secure"] = True
        return morsel.OutputString()
