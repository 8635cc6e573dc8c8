"""Event domain error constants."""


class EventError:
    """Event validation and persistence error constants."""

    EVENT_TYPE_REQUIRED = "Event type is required"
    EVENT_TYPE_TOO_LONG = "Event type exceeds maximum length"
    URL_REQUIRED = "URL is required"
    URL_TOO_LONG = "URL exceeds maximum length"
    TIMESTAMP_NAIVE = "Timestamp must include a timezone"
    INVALID_PAGE_LOAD_TIME = "pageLoadTime must be a non-negative integer"
    PERSISTENCE_FAILED = "Failed to record event"
