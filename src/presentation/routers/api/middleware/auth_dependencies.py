"""Authentication dependencies.

Two identities reach the API:

- Tenant credential: ``X-API-Key`` header, used by event collection and
  per-user stats. Validated by ApiKeyAuthenticator.
- Dashboard user: ``X-User-Id`` header asserted by the upstream login
  service, used by management and summary endpoints. Must reference an
  existing user.

Both dependencies record the identity on ``request.state`` so the rate
limiter can key on it.

Usage:
    @router.post("/events")
    async def record_event(
        api_key: CurrentApiKey,
        ...
    ):
        ...
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Header, HTTPException, Request, status

from src.application.dtos.api_key_dtos import AuthenticatedApiKey
from src.application.errors import ApplicationError
from src.application.services.api_key_authenticator import ApiKeyAuthenticator
from src.core.container import get_api_key_authenticator, get_user_repository
from src.core.result import Failure, Success
from src.domain.protocols.user_repository import UserRepository
from src.presentation.routers.api.middleware.client_ip import get_client_ip
from src.presentation.routers.api.v1.errors.error_response_builder import (
    ErrorResponseBuilder,
)


async def require_api_key(
    request: Request,
    authenticator: Annotated[ApiKeyAuthenticator, Depends(get_api_key_authenticator)],
    x_api_key: Annotated[
        str | None,
        Header(alias="X-API-Key", description="Tenant API key"),
    ] = None,
) -> AuthenticatedApiKey:
    """Authenticate the request's API key.

    Raises:
        HTTPException: 401 for missing, unknown, revoked or expired keys;
            403 when the caller's address is outside the key's restrictions.
    """
    result = await authenticator.authenticate(
        x_api_key,
        client_ip=get_client_ip(request),
    )
    match result:
        case Success(value=api_key):
            request.state.api_key_id = api_key.key_id
            return api_key
        case Failure(error=error):
            app_error = ApplicationError.from_domain_error(error)
            raise HTTPException(
                status_code=ErrorResponseBuilder._get_status_code(app_error.code),
                detail=app_error.message,
            )


async def require_user_id(
    request: Request,
    user_repo: Annotated[UserRepository, Depends(get_user_repository)],
    x_user_id: Annotated[
        str | None,
        Header(alias="X-User-Id", description="Authenticated user id"),
    ] = None,
) -> UUID:
    """Resolve the dashboard user.

    Raises:
        HTTPException: 401 if the header is missing, malformed, or names an
            unknown user.
    """
    if not x_user_id:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    try:
        user_id = UUID(x_user_id)
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid user id",
        ) from None

    if await user_repo.find_by_id(user_id) is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unknown user",
        )

    request.state.user_id = user_id
    return user_id


CurrentApiKey = Annotated[AuthenticatedApiKey, Depends(require_api_key)]
CurrentUserId = Annotated[UUID, Depends(require_user_id)]
