"""Tests for AppDbContext staging and commit error handling."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from appserver.modules.user_profiles.infrastructure.database import (
    REALM_MAPPING,
    USER_PROFILE_MAPPING,
    AppDbContext,
    MutationKind,
)
from appserver.modules.user_profiles.presentation.dependencies import get_app_db_context
from appserver.shared.core.exceptions import DuplicateKeyError, PersistenceError


@pytest.fixture
def mock_session():
    session = MagicMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    return session


class TestStaging:
    def test_staged_changes_keep_call_order(self, mock_session, make_realm, make_profile):
        context = AppDbContext(mock_session)
        realm = make_realm(version=1)
        context.stage_add(REALM_MAPPING, realm)
        context.stage_delete(USER_PROFILE_MAPPING, make_profile(version=1), expected_version=1)
        context.stage_update(REALM_MAPPING, realm, expected_version=1)

        kinds = [mutation.kind for mutation in context.staged_changes]
        assert kinds == [MutationKind.ADD, MutationKind.DELETE, MutationKind.UPDATE]
        assert context.latest_staged(REALM_MAPPING, "r1").kind is MutationKind.UPDATE
        assert context.latest_staged(USER_PROFILE_MAPPING, "r1") is None

    def test_discard_changes(self, mock_session, make_realm):
        context = AppDbContext(mock_session)
        context.stage_add(REALM_MAPPING, make_realm())
        context.discard_changes()
        assert context.pending_changes == 0

    async def test_commit_without_changes_is_a_no_op(self, mock_session):
        context = AppDbContext(mock_session)
        assert await context.commit() == 0
        mock_session.execute.assert_not_awaited()
        mock_session.commit.assert_not_awaited()

    async def test_close_discards_and_closes_session(self, mock_session, make_realm):
        context = AppDbContext(mock_session)
        context.stage_add(REALM_MAPPING, make_realm())
        await context.close()
        assert context.pending_changes == 0
        mock_session.close.assert_awaited_once()

    async def test_request_dependency_closes_context(self, mock_session, make_realm):
        provider = get_app_db_context(mock_session)
        context = await provider.__anext__()
        context.stage_add(REALM_MAPPING, make_realm())

        with pytest.raises(StopAsyncIteration):
            await provider.__anext__()

        assert context.pending_changes == 0
        mock_session.close.assert_awaited_once()


class TestCommitFailures:
    async def test_cancellation_rolls_back(self, mock_session, make_realm):
        mock_session.execute.side_effect = asyncio.CancelledError()
        context = AppDbContext(mock_session)
        context.stage_add(REALM_MAPPING, make_realm())

        with pytest.raises(asyncio.CancelledError):
            await context.commit()

        mock_session.rollback.assert_awaited_once()
        mock_session.commit.assert_not_awaited()
        assert context.pending_changes == 1

    async def test_store_failure_becomes_persistence_error(self, mock_session, make_realm):
        mock_session.execute.side_effect = OperationalError(
            "INSERT INTO realms", {}, Exception("connection lost")
        )
        context = AppDbContext(mock_session)
        context.stage_add(REALM_MAPPING, make_realm())

        with pytest.raises(PersistenceError) as exc_info:
            await context.commit()

        assert exc_info.value.status_code == 503
        mock_session.rollback.assert_awaited_once()

    async def test_unique_violation_becomes_duplicate_key(self, mock_session, make_realm):
        mock_session.execute.side_effect = IntegrityError(
            "INSERT INTO realms", {}, Exception("UNIQUE constraint failed: realms.name")
        )
        context = AppDbContext(mock_session)
        context.stage_add(REALM_MAPPING, make_realm())

        with pytest.raises(DuplicateKeyError) as exc_info:
            await context.commit()

        assert exc_info.value.details == {"resource_type": "realm", "resource_id": "r1"}

    async def test_other_constraint_violation_becomes_persistence_error(self, mock_session, make_profile):
        mock_session.execute.side_effect = IntegrityError(
            "INSERT INTO user_profiles", {}, Exception("FOREIGN KEY constraint failed")
        )
        context = AppDbContext(mock_session)
        context.stage_add(USER_PROFILE_MAPPING, make_profile())

        with pytest.raises(PersistenceError):
            await context.commit()


class TestRealStore:
    async def test_commit_reports_affected_rows(self, context, realms, user_profiles, make_realm, make_profile):
        await realms.add(make_realm())
        await user_profiles.add(make_profile())
        await user_profiles.add(make_profile(user_id="u2", username="user", email="user@gmail.com"))

        assert context.pending_changes == 3
        assert await context.commit() == 3
        assert await context.user_profiles.filter_by(realm_id="r1").count() == 2

    async def test_stored_version(self, context, stored_realm):
        assert await context.stored_version(REALM_MAPPING, "r1") == 1
        assert await context.stored_version(REALM_MAPPING, "missing") is None
