"""Result types for railway-oriented programming.

Operations that can fail (store calls, handler execution, credential
validation) return a Result instead of raising. Callers branch with
pattern matching so failure handling stays explicit and testable.

Usage:
    async def find_app(app_id: UUID) -> Result[App, NotFoundError]:
        app = await repo.find_by_id(app_id)
        if app is None:
            return Failure(error=NotFoundError(...))
        return Success(value=app)

    match await find_app(app_id):
        case Success(value=app):
            ...
        case Failure(error=error):
            ...
"""

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")  # Success type
E = TypeVar("E")  # Error type


@dataclass(frozen=True, slots=True, kw_only=True)
class Success(Generic[T]):
    """Successful outcome.

    Attributes:
        value: The produced value.
    """

    value: T


@dataclass(frozen=True, slots=True, kw_only=True)
class Failure(Generic[E]):
    """Failed outcome.

    Attributes:
        error: What went wrong (usually a DomainError or an error string).
    """

    error: E


type Result[T, E] = Success[T] | Failure[E]
