"""Infrastructure-specific error codes.

Internal codes for tracking store failures. They travel alongside the
domain ErrorCode on InfrastructureError instances.
"""

from enum import Enum


class InfrastructureErrorCode(Enum):
    """Infrastructure-specific error codes."""

    # Cache / counter store errors
    CACHE_CONNECTION_ERROR = "cache_connection_error"
    CACHE_TIMEOUT = "cache_timeout"
    CACHE_GET_ERROR = "cache_get_error"
    CACHE_SET_ERROR = "cache_set_error"
    CACHE_DELETE_ERROR = "cache_delete_error"
    CACHE_SERIALIZATION_ERROR = "cache_serialization_error"
