"""Ingestion path states.

RECEIVED -> VALIDATED -> PERSISTED -> COUNTERS_UPDATED | COUNTERS_FAILED

The first three are synchronous and decide the response; the counter states
are reached in the background after the response has been sent. Values are
written to the ``state`` field of ingestion log entries.
"""

from enum import Enum


class IngestionState(str, Enum):
    """Stages an ingested event passes through."""

    RECEIVED = "received"
    VALIDATED = "validated"
    PERSISTED = "persisted"
    COUNTERS_UPDATED = "counters_updated"
    COUNTERS_FAILED = "counters_failed"

    @classmethod
    def terminal_states(cls) -> set["IngestionState"]:
        """States after which nothing further happens to the event."""
        return {cls.COUNTERS_UPDATED, cls.COUNTERS_FAILED}
