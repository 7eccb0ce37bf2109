"""Admin session gate: restore, login and logout against a storage port."""

from datetime import datetime, timezone

from pydantic import ValidationError

from primehomes.models.session import AuthOutcome, SessionState, SessionToken
from primehomes.services.backend import CatalogBackend
from primehomes.services.session_store import SessionStore
from primehomes.utils.config import SESSION_KEY, SESSION_VALIDITY
from primehomes.utils.errors import NotAuthenticatedError, SupabaseError
from primehomes.utils.logging import get_structured_logger, mask_email

logger = get_structured_logger(__name__)


class SessionGate:
    """Turns the persisted ``admin_session`` record into an authorization decision.

    All side effects go through ``store``; the credential check itself is
    delegated to the collaborator.
    """

    def __init__(self, store: SessionStore, backend: CatalogBackend):
        self.store = store
        self.backend = backend

    def restore(self) -> SessionState:
        """Authorize from the stored token.

        Absent tokens leave the store alone. Corrupt or expired tokens are
        deleted (an implicit logout) and never reported to the user.
        """
        raw = self.store.get(SESSION_KEY)
        if raw is None:
            return SessionState.unauthorized()

        try:
            token = SessionToken.from_json(raw)
        except ValidationError:
            logger.warning("Discarding unreadable admin session")
            self.store.delete(SESSION_KEY)
            return SessionState.unauthorized()

        age = token.age(datetime.now(timezone.utc))
        if age >= SESSION_VALIDITY:
            logger.info(
                "Admin session expired",
                admin_email=mask_email(token.email),
                age_hours=round(age.total_seconds() / 3600, 2),
            )
            self.store.delete(SESSION_KEY)
            return SessionState.unauthorized()

        logger.debug("Admin session restored", admin_email=mask_email(token.email))
        return SessionState(outcome=AuthOutcome.AUTHORIZED, token=token)

    async def login(self, email: str, password: str) -> SessionState:
        """Check credentials with the collaborator and persist a fresh token.

        A rejected credential check yields ``INVALID_CREDENTIALS``; a
        collaborator failure yields ``TRANSIENT_FAILURE`` so callers can show
        a retry message instead of blaming the password.
        """
        normalized = (email or "").strip().lower()
        try:
            admin = await self.backend.find_admin(normalized, password or "")
        except SupabaseError as e:
            logger.error("Admin credential check failed", admin_email=mask_email(normalized), error=str(e))
            return SessionState(outcome=AuthOutcome.TRANSIENT_FAILURE)

        if admin is None:
            logger.info("Admin login rejected", admin_email=mask_email(normalized))
            return SessionState(outcome=AuthOutcome.INVALID_CREDENTIALS)

        try:
            await self.backend.record_admin_login(admin.id)
        except SupabaseError as e:
            logger.warning("Failed to record admin login (non-fatal)", admin_id=admin.id, error=str(e))

        token = SessionToken.issue(admin)
        self.store.set(SESSION_KEY, token.to_json())
        logger.info("Admin logged in", admin_id=admin.id, admin_email=mask_email(admin.email))
        return SessionState(outcome=AuthOutcome.AUTHORIZED, token=token)

    def logout(self) -> SessionState:
        self.store.delete(SESSION_KEY)
        logger.info("Admin logged out")
        return SessionState.unauthorized()

    def require(self) -> SessionState:
        """Restore the session or raise ``NotAuthenticatedError``."""
        state = self.restore()
        if not state.authorized:
            raise NotAuthenticatedError("Admin session missing or expired")
        return state
