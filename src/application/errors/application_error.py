"""Application layer error types.

Application errors wrap domain errors with the context the presentation
layer needs to pick an HTTP status.

Exports:
    ApplicationErrorCode: Application-level error code enum
    ApplicationError: Application layer error dataclass
"""

from dataclasses import dataclass
from enum import Enum

from src.core.errors import (
    AuthenticationError,
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from src.core.errors.domain_error import DomainError


class ApplicationErrorCode(Enum):
    """Application-level error codes.

    Examples:
        >>> error = ApplicationError(
        ...     code=ApplicationErrorCode.COMMAND_VALIDATION_FAILED,
        ...     message="Event rejected",
        ... )
    """

    COMMAND_VALIDATION_FAILED = "command_validation_failed"
    COMMAND_EXECUTION_FAILED = "command_execution_failed"
    QUERY_VALIDATION_FAILED = "query_validation_failed"
    QUERY_EXECUTION_FAILED = "query_execution_failed"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    RATE_LIMIT_EXCEEDED = "rate_limit_exceeded"


# Checked in order; first isinstance match wins
_DOMAIN_ERROR_CODES: tuple[tuple[type[DomainError], ApplicationErrorCode], ...] = (
    (NotFoundError, ApplicationErrorCode.NOT_FOUND),
    (AuthenticationError, ApplicationErrorCode.UNAUTHORIZED),
    (AuthorizationError, ApplicationErrorCode.FORBIDDEN),
    (ConflictError, ApplicationErrorCode.CONFLICT),
)


@dataclass(frozen=True, slots=True, kw_only=True)
class ApplicationError:
    """Application layer error.

    Attributes:
        code: Application error code (from ApplicationErrorCode enum)
        message: Human-readable error message
        domain_error: Original domain error (if error originated from domain layer)
        details: Additional context as key-value pairs

    Examples:
        >>> error = ApplicationError.from_domain_error(
        ...     NotFoundError(
        ...         code=ErrorCode.APP_NOT_FOUND,
        ...         message="App not found for user",
        ...         resource_type="App",
        ...         resource_id=str(app_id),
        ...     )
        ... )
        >>> error.code
        <ApplicationErrorCode.NOT_FOUND: 'not_found'>
    """

    code: ApplicationErrorCode
    message: str
    domain_error: DomainError | None = None
    details: dict[str, str] | None = None

    @classmethod
    def from_domain_error(
        cls,
        error: DomainError,
        *,
        is_query: bool = False,
    ) -> "ApplicationError":
        """Wrap a handler failure.

        Unclassified errors become execution failures (HTTP 500) and keep
        only their public message.
        """
        if isinstance(error, ValidationError):
            code = (
                ApplicationErrorCode.QUERY_VALIDATION_FAILED
                if is_query
                else ApplicationErrorCode.COMMAND_VALIDATION_FAILED
            )
            return cls(code=code, message=error.message, domain_error=error)

        for error_type, code in _DOMAIN_ERROR_CODES:
            if isinstance(error, error_type):
                return cls(code=code, message=error.message, domain_error=error)

        return cls(
            code=(
                ApplicationErrorCode.QUERY_EXECUTION_FAILED
                if is_query
                else ApplicationErrorCode.COMMAND_EXECUTION_FAILED
            ),
            message=error.message,
            domain_error=error,
        )
