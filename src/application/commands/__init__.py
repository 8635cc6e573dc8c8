"""Commands - Write operations that change state.

Commands represent user intent to perform an action. They are immutable
dataclasses with imperative names (RecordEvent, RevokeApiKey).

Each command has a corresponding handler that contains the business logic
to execute the command.
"""

from src.application.commands.analytics_commands import InvalidateAnalyticsCache
from src.application.commands.api_key_commands import (
    CreateApiKey,
    RegenerateApiKey,
    RegisterApp,
    RevokeApiKey,
    RevokeAppApiKey,
)
from src.application.commands.event_commands import RecordEvent

__all__ = [
    # Analytics commands
    "InvalidateAnalyticsCache",
    # API key commands
    "CreateApiKey",
    "RegenerateApiKey",
    "RegisterApp",
    "RevokeApiKey",
    "RevokeAppApiKey",
    # Event commands
    "RecordEvent",
]
