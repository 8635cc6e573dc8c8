"""Domain-level error codes (machine-readable).

Error codes follow ENTITY_ACTION_REASON naming convention and travel
inside DomainError instances carried by Failure results.

Categories:
- Validation errors (INVALID_*, VALIDATION_*)
- Resource errors (*_NOT_FOUND)
- Conflict errors (*_ALREADY_*)
- Authentication errors (API_KEY_*)
- Authorization errors (IP_*, RESOURCE_NOT_OWNED)
- Store errors (CACHE_*, PERSISTENCE_*, RATE_LIMIT_*)
"""

from enum import Enum


class ErrorCode(Enum):
    """Domain-level error codes (machine-readable)."""

    # Validation errors
    INVALID_DATE_RANGE = "invalid_date_range"
    INVALID_EVENT = "invalid_event"
    INVALID_IP_RESTRICTION = "invalid_ip_restriction"
    VALIDATION_FAILED = "validation_failed"

    # Resource errors
    USER_NOT_FOUND = "user_not_found"
    APP_NOT_FOUND = "app_not_found"
    API_KEY_NOT_FOUND = "api_key_not_found"
    CREDENTIALS_NOT_FOUND = "credentials_not_found"
    RESOURCE_NOT_FOUND = "resource_not_found"

    # Conflict errors
    API_KEY_ALREADY_ACTIVE = "api_key_already_active"
    RESOURCE_CONFLICT = "resource_conflict"

    # Authentication errors
    API_KEY_MISSING = "api_key_missing"
    API_KEY_INVALID = "api_key_invalid"
    API_KEY_EXPIRED = "api_key_expired"
    API_KEY_REVOKED = "api_key_revoked"
    AUTHENTICATION_FAILED = "authentication_failed"

    # Authorization errors
    IP_NOT_ALLOWED = "ip_not_allowed"
    RESOURCE_NOT_OWNED = "resource_not_owned"
    PERMISSION_DENIED = "permission_denied"

    # Store errors
    CACHE_UNAVAILABLE = "cache_unavailable"
    PERSISTENCE_FAILED = "persistence_failed"
    RATE_LIMIT_CHECK_FAILED = "rate_limit_check_failed"
