"""Error handling utilities."""


class PrimeHomesError(Exception):
    """Base exception for PrimeHomes backend."""
    pass


class ConfigurationError(PrimeHomesError):
    """Required configuration is missing."""
    pass


class SupabaseError(PrimeHomesError):
    """Supabase operation error (connectivity or query failure)."""
    pass


class SessionSigningError(PrimeHomesError):
    """Session cookie could not be signed."""
    pass


class AdminMutationError(PrimeHomesError):
    """Admin create/update/delete failed; message is shown to the operator."""
    pass


class ConfirmationRequiredError(PrimeHomesError):
    """Destructive admin action issued without explicit confirmation."""
    pass


class NotAuthenticatedError(PrimeHomesError):
    """Admin route called without a valid session."""
    pass
