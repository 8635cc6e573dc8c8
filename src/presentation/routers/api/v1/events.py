"""Event collection handlers.

Handler functions for the ingestion endpoint.
Routes are registered via ROUTE_REGISTRY in routes/registry.py.

Handlers:
    record_event - Record one behavioral event for the calling API key
"""

from fastapi import Depends, Request
from fastapi.responses import JSONResponse

from src.application.commands.event_commands import RecordEvent
from src.application.commands.handlers.record_event_handler import (
    RecordEventHandler,
)
from src.core.container import get_record_event_handler
from src.core.result import Failure
from src.presentation.routers.api.middleware.auth_dependencies import CurrentApiKey
from src.presentation.routers.api.middleware.client_ip import get_client_ip
from src.presentation.routers.api.middleware.trace_middleware import get_trace_id
from src.presentation.routers.api.v1.errors import ErrorResponseBuilder
from src.schemas.event_schemas import EventCreateRequest, EventCreateResponse


async def record_event(
    request: Request,
    api_key: CurrentApiKey,
    data: EventCreateRequest,
    handler: RecordEventHandler = Depends(get_record_event_handler),
) -> EventCreateResponse | JSONResponse:
    """Record an event.

    POST /api/v1/events → 201 Created

    The response is sent once the event is stored; rolling counters are
    updated in the background.

    Args:
        request: FastAPI request object.
        api_key: Authenticated API key (from X-API-Key).
        data: Event payload.
        handler: Record event handler (injected).

    Returns:
        EventCreateResponse with the event id.
        JSONResponse with RFC 9457 error on failure.
    """
    command = RecordEvent(
        api_key_id=api_key.key_id,
        app_id=api_key.app_id,
        event_type=data.event,
        url=data.url,
        timestamp=data.timestamp,
        referrer=data.referrer,
        device=data.device,
        ip_address=data.ip_address,
        tracking_user_id=data.tracking_user_id,
        session_id=data.session_id,
        page_title=data.page_title,
        page_load_time=data.page_load_time,
        metadata=data.metadata,
        client_ip=get_client_ip(request),
    )
    result = await handler.handle(command)

    if isinstance(result, Failure):
        return ErrorResponseBuilder.from_domain_error(
            error=result.error,
            request=request,
            trace_id=get_trace_id() or "",
        )

    return EventCreateResponse.from_dto(result.value)
