"""Apps resource handlers.

Handlers:
    register_app       - Register an app and issue its first API key
    get_app_api_key    - Metadata of the app's active key
    revoke_app_api_key - Revoke the app's active key
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path, Request
from fastapi.responses import JSONResponse

from src.application.commands.api_key_commands import RegisterApp, RevokeAppApiKey
from src.application.commands.handlers.register_app_handler import RegisterAppHandler
from src.application.commands.handlers.revoke_app_api_key_handler import (
    RevokeAppApiKeyHandler,
)
from src.application.queries.api_key_queries import GetAppApiKey
from src.application.queries.handlers.get_app_api_key_handler import GetAppApiKeyHandler
from src.core.container import (
    get_app_api_key_handler,
    get_register_app_handler,
    get_revoke_app_api_key_handler,
)
from src.core.result import Failure
from src.presentation.routers.api.middleware.auth_dependencies import CurrentUserId
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.api_key_schemas import (
    ApiKeyResponse,
    ApiKeyRevokeResponse,
    AppCreateRequest,
    AppCreateResponse,
)


async def register_app(
    request: Request,
    user_id: CurrentUserId,
    data: AppCreateRequest,
    handler: RegisterAppHandler = Depends(get_register_app_handler),
) -> AppCreateResponse | JSONResponse:
    """Register an app.

    POST /api/v1/apps → 201 Created

    The response carries the plaintext API key; it cannot be retrieved
    later.
    """
    command = RegisterApp(
        user_id=user_id,
        name=data.name,
        description=data.description,
        url=data.url,
        ip_restrictions=data.ip_restrictions,
    )
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id() or "",
        )

    return AppCreateResponse.from_dto(result.value)


async def get_app_api_key(
    request: Request,
    user_id: CurrentUserId,
    app_id: Annotated[UUID, Path(description="App UUID")],
    handler: GetAppApiKeyHandler = Depends(get_app_api_key_handler),
) -> ApiKeyResponse | JSONResponse:
    """Get the app's active API key.

    GET /api/v1/apps/{app_id}/api-key → 200 OK

    Only the display prefix is returned, never the secret.
    """
    result = await handler.handle(GetAppApiKey(user_id=user_id, app_id=app_id))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id() or "",
            is_query=True,
        )

    return ApiKeyResponse.from_dto(result.value)


async def revoke_app_api_key(
    request: Request,
    user_id: CurrentUserId,
    app_id: Annotated[UUID, Path(description="App UUID")],
    handler: RevokeAppApiKeyHandler = Depends(get_revoke_app_api_key_handler),
) -> ApiKeyRevokeResponse | JSONResponse:
    """Revoke the app's active API key.

    POST /api/v1/apps/{app_id}/revoke-key → 200 OK
    """
    result = await handler.handle(RevokeAppApiKey(user_id=user_id, app_id=app_id))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id() or "",
        )

    return ApiKeyRevokeResponse(id=result.value)
