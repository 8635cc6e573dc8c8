"""Unit tests for GetUserStatsHandler and InvalidateAnalyticsCacheHandler."""

from unittest.mock import AsyncMock
from uuid import UUID

import pytest
from uuid_extensions import uuid7

from src.application.commands.analytics_commands import InvalidateAnalyticsCache
from src.application.commands.handlers.invalidate_analytics_cache_handler import (
    InvalidateAnalyticsCacheHandler,
)
from src.application.queries.analytics_queries import GetUserStats
from src.application.queries.handlers.get_user_stats_handler import GetUserStatsHandler
from src.core.enums import ErrorCode
from src.core.errors import NotFoundError
from src.core.result import Failure, Success
from src.domain.value_objects.analytics import UserStats
from tests.conftest import make_api_key


@pytest.fixture
def user_id() -> UUID:
    return uuid7()


@pytest.mark.unit
class TestGetUserStats:
    async def test_spans_every_key_of_the_owner(self, user_id):
        # Arrange
        caller = make_api_key(user_id=user_id, app_id=uuid7())
        sibling_id = uuid7()
        repo = AsyncMock()
        repo.find_by_id.return_value = caller
        repo.find_ids_by_user.return_value = [caller.id, sibling_id]
        engine = AsyncMock()
        engine.user_stats.return_value = UserStats(tracking_user_id="u1", total_events=4)
        handler = GetUserStatsHandler(api_key_repo=repo, aggregation_engine=engine)

        # Act
        result = await handler.handle(
            GetUserStats(api_key_id=caller.id, tracking_user_id="u1")
        )

        # Assert
        assert isinstance(result, Success)
        assert result.value.stats.total_events == 4
        repo.find_ids_by_user.assert_awaited_once_with(user_id)
        engine.user_stats.assert_awaited_once_with(
            tracking_user_id="u1", api_key_ids=[caller.id, sibling_id]
        )

    async def test_unknown_credential_is_not_found(self):
        repo = AsyncMock()
        repo.find_by_id.return_value = None
        engine = AsyncMock()
        handler = GetUserStatsHandler(api_key_repo=repo, aggregation_engine=engine)

        result = await handler.handle(GetUserStats(api_key_id=uuid7(), tracking_user_id="u1"))

        assert isinstance(result, Failure)
        assert isinstance(result.error, NotFoundError)
        assert result.error.code == ErrorCode.CREDENTIALS_NOT_FOUND
        engine.user_stats.assert_not_awaited()


@pytest.mark.unit
class TestInvalidateAnalyticsCache:
    async def test_reports_deleted_entries(self, user_id):
        cache = AsyncMock()
        cache.invalidate_user.return_value = 3
        app_id = uuid7()
        handler = InvalidateAnalyticsCacheHandler(summary_cache=cache)

        result = await handler.handle(
            InvalidateAnalyticsCache(user_id=user_id, event_type="click", app_id=app_id)
        )

        assert result.value.deleted == 3
        cache.invalidate_user.assert_awaited_once_with(
            user_id, event_type="click", app_id=app_id
        )
