"""Record event handler.

Flow (ingestion states):
1. RECEIVED: credential already authenticated; fill source IP if absent
2. VALIDATED: build the Event entity (invariants enforced there)
3. PERSISTED: write the event row (commit before responding)
4. COUNTERS_UPDATED | COUNTERS_FAILED: rolling counters, in the background
5. Return the new event id

Validation and persistence failures end the flow synchronously. Counter
failures never reach the caller.
"""

from uuid_extensions import uuid7

from src.application.commands.event_commands import RecordEvent
from src.application.dtos.event_dtos import RecordedEvent
from src.application.services.aggregation_engine import AggregationEngine
from src.core.enums import ErrorCode
from src.core.errors import DomainError, ValidationError
from src.core.result import Failure, Result, Success
from src.domain.entities.event import Event
from src.domain.enums import IngestionState
from src.domain.errors.event_error import EventError
from src.domain.protocols.event_repository import EventRepository
from src.domain.protocols.logger_protocol import LoggerProtocol


class RecordEventHandler:
    """Handler for RecordEvent command."""

    def __init__(
        self,
        event_repo: EventRepository,
        aggregation_engine: AggregationEngine,
        logger: LoggerProtocol,
    ) -> None:
        self._event_repo = event_repo
        self._aggregation_engine = aggregation_engine
        self._logger = logger

    async def handle(self, cmd: RecordEvent) -> Result[RecordedEvent, DomainError]:
        """Handle RecordEvent command.

        Returns:
            Success(RecordedEvent) once the event is durable.
            Failure(ValidationError) if the event breaks an invariant.
            Failure(DomainError) with PERSISTENCE_FAILED if the write failed.
        """
        log = self._logger.bind(
            api_key_id=str(cmd.api_key_id),
            event_type=cmd.event_type,
        )
        log.debug("ingestion_state", state=IngestionState.RECEIVED.value)

        try:
            event = Event(
                id=uuid7(),
                api_key_id=cmd.api_key_id,
                event_type=cmd.event_type,
                url=cmd.url,
                timestamp=cmd.timestamp,
                referrer=cmd.referrer,
                device=cmd.device,
                ip_address=cmd.ip_address or cmd.client_ip,
                tracking_user_id=cmd.tracking_user_id,
                session_id=cmd.session_id,
                page_title=cmd.page_title,
                page_load_time=cmd.page_load_time,
                metadata=dict(cmd.metadata),
            )
        except ValueError as e:
            log.info("event_rejected", reason=str(e))
            return Failure(
                error=ValidationError(
                    code=ErrorCode.INVALID_EVENT,
                    message=str(e),
                )
            )
        log.debug("ingestion_state", state=IngestionState.VALIDATED.value)

        try:
            await self._event_repo.save(event)
        except Exception as e:
            log.error(
                "event_persist_failed",
                error=e,
                state=IngestionState.PERSISTED.value,
            )
            return Failure(
                error=DomainError(
                    code=ErrorCode.PERSISTENCE_FAILED,
                    message=EventError.PERSISTENCE_FAILED,
                )
            )
        log.info(
            "event_recorded",
            event_id=str(event.id),
            state=IngestionState.PERSISTED.value,
        )

        self._aggregation_engine.schedule_counter_update(event, app_id=cmd.app_id)

        return Success(
            value=RecordedEvent(
                event_id=event.id,
                event_type=event.event_type,
                timestamp=event.timestamp,
            )
        )
