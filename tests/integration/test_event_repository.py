"""Integration tests for the PostgreSQL repositories.

Tests cover:
- Event persistence and aggregate queries (count, distinct users, devices)
- Day-boundary and soft-delete filtering
- Per-user statistics queries
- API key lookups used by authentication and ownership checks

Architecture:
- REAL PostgreSQL at DATABASE_URL; tests skip when it is unreachable
- Tables are created for the module and dropped afterwards
"""

from datetime import UTC, date, datetime, timedelta

import pytest
import pytest_asyncio
from uuid_extensions import uuid7

from src.core.config import settings
from src.domain.entities.user import User
from src.domain.value_objects.date_range import DateRange
from src.infrastructure.persistence.database import Database
from src.infrastructure.persistence.repositories.api_key_repository import (
    ApiKeyRepository,
)
from src.infrastructure.persistence.repositories.app_repository import AppRepository
from src.infrastructure.persistence.repositories.event_repository import EventRepository
from src.infrastructure.persistence.repositories.user_repository import UserRepository
from tests.conftest import make_api_key, make_app, make_event

MARCH_1 = DateRange(start=date(2024, 3, 1), end=date(2024, 3, 1))


def _at(hour: int, minute: int = 0, day: int = 1) -> datetime:
    return datetime(2024, 3, day, hour, minute, tzinfo=UTC)


# =============================================================================
# Fixtures
# =============================================================================


@pytest_asyncio.fixture
async def test_database():
    db = Database(settings.database_url)
    if not await db.check_connection():
        await db.close()
        pytest.skip("PostgreSQL is not reachable")
    await db.create_all()
    yield db
    await db.drop_all()
    await db.close()


@pytest_asyncio.fixture
async def session(test_database):
    async with test_database.get_session() as session:
        yield session


@pytest_asyncio.fixture
async def tenant(session):
    """A user with one app and one active key, all persisted."""
    user = User(id=uuid7(), email=f"{uuid7()}@example.com")
    await UserRepository(session).save(user)
    app = make_app(user_id=user.id)
    await AppRepository(session).save(app)
    key = make_api_key(user_id=user.id, app_id=app.id, plaintext=f"bk_{uuid7()}")
    await ApiKeyRepository(session).save(key)
    await session.commit()
    return user, app, key


# =============================================================================
# Events
# =============================================================================


@pytest.mark.integration
class TestEventAggregates:
    async def test_summary_queries(self, session, tenant):
        _, _, key = tenant
        repo = EventRepository(session)
        for user, device, when in [
            ("u1", "mobile", _at(9)),
            ("u1", "Desktop", _at(10)),
            ("u2", "mobile", _at(23, 59)),
            (None, None, _at(0, 0, day=2)),
        ]:
            await repo.save(
                make_event(api_key_id=key.id, tracking_user_id=user, device=device, timestamp=when)
            )

        count = await repo.count(api_key_ids=[key.id], event_type="click", date_range=MARCH_1)
        unique = await repo.count_distinct_tracking_users(
            api_key_ids=[key.id], event_type="click", date_range=MARCH_1
        )
        devices = dict(
            await repo.count_by_device(api_key_ids=[key.id], event_type="click", date_range=MARCH_1)
        )

        assert count == 3
        assert unique == 2
        assert devices == {"mobile": 2, "Desktop": 1}

    async def test_foreign_credentials_are_excluded(self, session, tenant):
        _, _, key = tenant
        repo = EventRepository(session)
        await repo.save(make_event(api_key_id=key.id, timestamp=_at(9)))

        assert await repo.count(api_key_ids=[uuid7()], event_type="click", date_range=MARCH_1) == 0
        assert await repo.count(api_key_ids=[], event_type="click", date_range=MARCH_1) == 0

    async def test_round_trip_keeps_fields(self, session, tenant):
        _, _, key = tenant
        repo = EventRepository(session)
        event = make_event(
            api_key_id=key.id,
            tracking_user_id="u1",
            ip_address="203.0.113.4",
            timestamp=_at(12),
            metadata={"browser": "Firefox", "custom": {"plan": "pro"}},
        )
        await repo.save(event)

        loaded = await repo.find_by_id(event.id)

        assert loaded is not None
        assert loaded.timestamp == event.timestamp
        assert loaded.ip_address == "203.0.113.4"
        assert loaded.metadata == {"browser": "Firefox", "custom": {"plan": "pro"}}

    async def test_tracking_user_queries(self, session, tenant):
        _, _, key = tenant
        repo = EventRepository(session)
        for event_type, hour in [("click", 9), ("page_view", 10), ("page_view", 11)]:
            await repo.save(
                make_event(
                    api_key_id=key.id,
                    event_type=event_type,
                    tracking_user_id="u1",
                    timestamp=_at(hour),
                )
            )

        total = await repo.count_for_tracking_user(api_key_ids=[key.id], tracking_user_id="u1")
        latest = await repo.latest_for_tracking_user(api_key_ids=[key.id], tracking_user_id="u1")
        top = await repo.top_events_for_tracking_user(
            api_key_ids=[key.id], tracking_user_id="u1", limit=5
        )

        assert total == 3
        assert latest.timestamp == _at(11)
        assert top == [("page_view", 2), ("click", 1)]


# =============================================================================
# API keys
# =============================================================================


@pytest.mark.integration
class TestApiKeyQueries:
    async def test_lookup_by_hash_and_user(self, session, tenant):
        user, app, key = tenant
        repo = ApiKeyRepository(session)

        assert (await repo.find_by_hash(key.key_hash)).id == key.id
        assert await repo.find_ids_by_user(user.id) == [key.id]
        assert await repo.find_ids_by_user(user.id, app_id=uuid7()) == []
        assert (await repo.find_active_by_app(app.id)).id == key.id

    async def test_revoked_keys_still_belong_to_user(self, session, tenant):
        user, app, key = tenant
        repo = ApiKeyRepository(session)
        key.revoke()
        await repo.update(key)

        assert await repo.find_active_by_app(app.id) is None
        assert await repo.find_ids_by_user(user.id) == [key.id]
        assert await repo.count_active_by_user(user.id) == 0

    async def test_find_expired(self, session, tenant):
        _, _, key = tenant
        repo = ApiKeyRepository(session)

        assert await repo.find_expired(datetime.now(UTC)) == []
        expired = await repo.find_expired(key.expires_at + timedelta(seconds=1))
        assert [k.id for k in expired] == [key.id]
