"""API keys resource handlers.

Handler functions for key management endpoints.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Handlers:
    list_api_keys      - List the caller's keys (no secrets)
    create_api_key     - Issue a key for an app without an active key
    revoke_api_key     - Deactivate a key
    regenerate_api_key - Rotate a key's secret and expiry
"""

from typing import Annotated
from uuid import UUID

from fastapi import Depends, Path, Query, Request
from fastapi.responses import JSONResponse

from src.application.commands.api_key_commands import (
    CreateApiKey,
    RegenerateApiKey,
    RevokeApiKey,
)
from src.application.commands.handlers.create_api_key_handler import (
    CreateApiKeyHandler,
)
from src.application.commands.handlers.regenerate_api_key_handler import (
    RegenerateApiKeyHandler,
)
from src.application.commands.handlers.revoke_api_key_handler import (
    RevokeApiKeyHandler,
)
from src.application.queries.api_key_queries import ListApiKeys
from src.application.queries.handlers.list_api_keys_handler import ListApiKeysHandler
from src.core.container import (
    get_create_api_key_handler,
    get_list_api_keys_handler,
    get_regenerate_api_key_handler,
    get_revoke_api_key_handler,
)
from src.core.result import Failure
from src.presentation.routers.api.middleware.auth_dependencies import CurrentUserId
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.api_key_schemas import (
    ApiKeyCreateRequest,
    ApiKeyCreateResponse,
    ApiKeyListResponse,
    ApiKeyRevokeResponse,
)


async def list_api_keys(
    request: Request,
    user_id: CurrentUserId,
    active_only: Annotated[
        bool,
        Query(description="Only return active keys"),
    ] = False,
    handler: ListApiKeysHandler = Depends(get_list_api_keys_handler),
) -> ApiKeyListResponse | JSONResponse:
    """List API keys.

    GET /api/v1/api-keys → 200 OK
    """
    result = await handler.handle(ListApiKeys(user_id=user_id, active_only=active_only))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id() or "",
            is_query=True,
        )

    return ApiKeyListResponse.from_dto(result.value)


async def create_api_key(
    request: Request,
    user_id: CurrentUserId,
    data: ApiKeyCreateRequest,
    handler: CreateApiKeyHandler = Depends(get_create_api_key_handler),
) -> ApiKeyCreateResponse | JSONResponse:
    """Issue an API key.

    POST /api/v1/api-keys → 201 Created

    Fails with 409 while the app still has an active key.
    """
    command = CreateApiKey(
        user_id=user_id,
        app_id=data.app_id,
        ip_restrictions=data.ip_restrictions,
    )
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id() or "",
        )

    return ApiKeyCreateResponse.from_dto(result.value)


async def revoke_api_key(
    request: Request,
    user_id: CurrentUserId,
    key_id: Annotated[UUID, Path(description="API key UUID")],
    handler: RevokeApiKeyHandler = Depends(get_revoke_api_key_handler),
) -> ApiKeyRevokeResponse | JSONResponse:
    """Revoke an API key.

    DELETE /api/v1/api-keys/{key_id} → 200 OK

    Events recorded with the key are kept.
    """
    result = await handler.handle(RevokeApiKey(user_id=user_id, key_id=key_id))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id() or "",
        )

    return ApiKeyRevokeResponse(id=result.value)


async def regenerate_api_key(
    request: Request,
    user_id: CurrentUserId,
    key_id: Annotated[UUID, Path(description="API key UUID")],
    handler: RegenerateApiKeyHandler = Depends(get_regenerate_api_key_handler),
) -> ApiKeyCreateResponse | JSONResponse:
    """Regenerate an API key.

    POST /api/v1/api-keys/{key_id}/regenerate → 200 OK

    The old secret stops working immediately.
    """
    result = await handler.handle(RegenerateApiKey(user_id=user_id, key_id=key_id))

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id() or "",
        )

    return ApiKeyCreateResponse.from_dto(result.value)
