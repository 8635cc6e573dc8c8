"""API key domain error constants.

Messages are returned to API callers, so they never echo the secret.
"""


class ApiKeyError:
    """API key error constants."""

    # Authentication
    MISSING = "API key is required"
    INVALID = "Invalid API key"
    REVOKED = "API key has been revoked"
    EXPIRED = "API key has expired"

    # Authorization
    IP_NOT_ALLOWED = "Access denied: IP address is not allowed for this API key"
    NOT_OWNED = "API key is not owned by user"

    # Management
    NOT_FOUND = "API key not found"
    ALREADY_ACTIVE = "App already has an active API key"
    NO_ACTIVE_KEY = "App has no active API key"
    INVALID_IP_RESTRICTION = "Invalid IP restriction entry"


class ActiveApiKeyConflictError(ValueError):
    """Raised by a repository when a write would leave two active keys on one app."""

    def __init__(self, app_id: object) -> None:
        self.app_id = app_id
        super().__init__(f"App {app_id} already has an active API key")
