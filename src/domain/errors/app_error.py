"""App domain error constants.

Plain message strings used in ValueError raised by entity construction and
as messages of DomainError instances returned by handlers.
"""


class AppError:
    """App error constants."""

    NAME_REQUIRED = "App name is required"
    NAME_TOO_LONG = "App name exceeds maximum length"
    NOT_FOUND = "App not found for user"
