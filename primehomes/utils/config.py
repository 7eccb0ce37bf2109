"""Application settings read from the environment."""

import os
from datetime import timedelta
from typing import Optional

from primehomes.utils.errors import ConfigurationError


# Session validity window is fixed, not configurable
SESSION_VALIDITY = timedelta(hours=24)
SESSION_KEY = "admin_session"
FEATURED_LIMIT = 3
CURRENCY = "MWK"
PLACEHOLDER_IMAGE_URL = (
    "https://images.pexels.com/photos/1396122/pexels-photo-1396122.jpeg"
    "?auto=compress&cs=tinysrgb&w=1200"
)
MAP_EMBED_URL = "https://www.google.com/maps?q={latitude},{longitude}&z=15&output=embed"


class AppConfig:
    """Environment-backed settings.

    Values are read on every call so serverless cold starts and tests pick
    up changes to ``os.environ``.
    """

    @staticmethod
    def supabase_url() -> Optional[str]:
        return os.environ.get("SUPABASE_URL")

    @staticmethod
    def supabase_key() -> Optional[str]:
        # The public site runs on the anon key; the service role key is accepted for back-office deployments
        return os.environ.get("SUPABASE_ANON_KEY") or os.environ.get("SUPABASE_SERVICE_ROLE_KEY")

    @staticmethod
    def session_signing_secret() -> str:
        secret = os.environ.get("SESSION_SIGNING_SECRET", "").strip()
        if not secret:
            raise ConfigurationError("SESSION_SIGNING_SECRET not set")
        return secret

    @staticmethod
    def session_cookie_secure() -> bool:
        return os.environ.get("SESSION_COOKIE_SECURE", "true").lower() == "true"
