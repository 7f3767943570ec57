"""Tests for the generic repository over AppDbContext: add, update, delete and concurrency."""

import pytest

from appserver.modules.user_profiles.domain.models import Realm, UserProfile
from appserver.modules.user_profiles.domain.repositories import BaseRepository
from appserver.modules.user_profiles.infrastructure.database import (
    RealmRepositoryImpl,
    UserProfileRepositoryImpl,
)
from appserver.shared.core.exceptions import (
    ConcurrencyError,
    DuplicateKeyError,
    NotFoundError,
    ValidationError,
)


class TestAdd:
    async def test_add_returns_persisted_copy(self, realms, make_realm):
        realm = make_realm()
        added = await realms.add(realm)

        assert added.realm_id == "r1"
        assert added.version == 1
        assert added.created_at is not None
        assert added.updated_at == added.created_at
        assert realm.version == 0  # caller's instance untouched

    async def test_added_entity_visible_only_after_commit(self, context, realms, make_realm):
        await realms.add(make_realm())
        assert not await realms.entities.contains("r1")

        affected = await context.commit()

        assert affected == 1
        assert await realms.entities.contains("r1")
        assert context.pending_changes == 0

    async def test_add_duplicate_of_committed_entity(self, realms, stored_realm, make_realm):
        with pytest.raises(DuplicateKeyError) as exc_info:
            await realms.add(make_realm(name="OTHER.COM"))
        assert exc_info.value.details["resource_id"] == "r1"

    async def test_add_duplicate_of_staged_entity(self, context, realms, make_realm):
        await realms.add(make_realm())
        with pytest.raises(DuplicateKeyError):
            await realms.add(make_realm(name="OTHER.COM"))
        assert context.pending_changes == 1

    async def test_duplicate_realm_name_rejected_at_commit(self, context, realms, stored_realm, make_realm):
        await realms.add(make_realm(realm_id="r2"))

        with pytest.raises(DuplicateKeyError):
            await context.commit()

        assert context.pending_changes == 1
        assert not await realms.entities.contains("r2")

    async def test_duplicate_username_in_realm_rejected_at_commit(
        self, context, user_profiles, stored_profile, make_profile
    ):
        await user_profiles.add(make_profile(user_id="u2"))
        with pytest.raises(DuplicateKeyError):
            await context.commit()

    async def test_same_username_in_other_realm_allowed(
        self, context, realms, user_profiles, stored_profile, make_realm, make_profile
    ):
        await realms.add(make_realm(realm_id="r2", name="OTHER.COM"))
        await user_profiles.add(make_profile(user_id="u2", realm_id="r2"))
        assert await context.commit() == 2

    async def test_add_rejects_invalid_entity(self, realms):
        invalid = Realm.model_construct(realm_id="r1", name="", description=None, version=0)
        with pytest.raises(ValidationError) as exc_info:
            await realms.add(invalid)
        assert exc_info.value.details["errors"][0]["loc"] == "name"

    async def test_add_rejects_wrong_entity_type(self, realms, make_profile):
        with pytest.raises(ValidationError):
            await realms.add(make_profile())


class TestUpdate:
    async def test_update_is_reflected_after_commit(self, context, user_profiles, stored_profile):
        profile = await user_profiles.entities.get("u1")
        profile.email = "Root@Example.com"

        await user_profiles.update(profile)
        await context.commit()

        reloaded = await user_profiles.entities.get("u1")
        assert reloaded.email == "root@example.com"
        assert reloaded.version == 2

    async def test_update_not_visible_before_commit(self, user_profiles, stored_profile):
        profile = await user_profiles.entities.get("u1")
        await user_profiles.update(profile.model_copy(update={"first_name": "Root"}))

        unchanged = await user_profiles.entities.get("u1")
        assert unchanged.first_name == "Admin"

    async def test_update_absent_entity(self, user_profiles, stored_realm, make_profile):
        with pytest.raises(NotFoundError):
            await user_profiles.update(make_profile(user_id="ghost", version=1))

    async def test_update_with_stale_version(self, user_profiles, stored_profile):
        profile = await user_profiles.entities.get("u1")
        with pytest.raises(ConcurrencyError) as exc_info:
            await user_profiles.update(profile.model_copy(update={"version": 7}))
        assert exc_info.value.details["actual_version"] == 1

    async def test_consecutive_updates_in_one_context(self, context, user_profiles, stored_profile):
        profile = await user_profiles.entities.get("u1")
        await user_profiles.update(profile.model_copy(update={"first_name": "Root"}))
        await user_profiles.update(profile.model_copy(update={"first_name": "Boss", "version": 2}))
        await context.commit()

        reloaded = await user_profiles.entities.get("u1")
        assert reloaded.first_name == "Boss"
        assert reloaded.version == 3

    async def test_update_of_staged_deletion(self, user_profiles, stored_profile):
        profile = await user_profiles.entities.get("u1")
        await user_profiles.delete(profile)
        with pytest.raises(NotFoundError):
            await user_profiles.update(profile)

    async def test_update_rejects_invalid_entity(self, user_profiles, stored_profile):
        profile = await user_profiles.entities.get("u1")
        invalid = UserProfile.model_construct(**{**profile.model_dump(), "email": "not-an-email"})
        with pytest.raises(ValidationError):
            await user_profiles.update(invalid)


class TestDelete:
    async def test_delete_removes_after_commit(self, context, user_profiles, stored_profile):
        profile = await user_profiles.entities.get("u1")
        await user_profiles.delete(profile)
        assert await user_profiles.entities.contains("u1")

        await context.commit()

        assert not await user_profiles.entities.contains("u1")

    async def test_repeated_delete_in_one_context(self, user_profiles, stored_profile):
        profile = await user_profiles.entities.get("u1")
        await user_profiles.delete(profile)
        with pytest.raises(NotFoundError):
            await user_profiles.delete(profile)

    async def test_delete_after_commit(self, context, user_profiles, stored_profile):
        profile = await user_profiles.entities.get("u1")
        await user_profiles.delete(profile)
        await context.commit()

        with pytest.raises(NotFoundError):
            await user_profiles.delete(profile)

    async def test_delete_absent_entity(self, realms, make_realm):
        with pytest.raises(NotFoundError):
            await realms.delete(make_realm(realm_id="missing"))

    async def test_delete_rejects_entity_of_another_kind(self, context, realms, stored_profile):
        profile = await context.user_profiles.get("u1")

        with pytest.raises(ValidationError):
            await realms.delete(profile)

        assert context.pending_changes == 0
        assert await context.commit() == 0
        assert await realms.entities.contains("r1")

    async def test_delete_with_stale_version(self, context, user_profiles, stored_profile):
        profile = await user_profiles.entities.get("u1")

        with pytest.raises(ConcurrencyError) as exc_info:
            await user_profiles.delete(profile.model_copy(update={"version": 7}))

        assert exc_info.value.details["actual_version"] == 1
        assert context.pending_changes == 0

    async def test_add_after_staged_delete(self, context, realms, stored_realm, make_realm):
        await realms.delete(stored_realm)
        await realms.add(make_realm(description="Recreated"))
        await context.commit()

        recreated = await realms.entities.get("r1")
        assert recreated.description == "Recreated"
        assert recreated.version == 1


class TestConcurrency:
    async def test_update_after_concurrent_commit_rejected_at_staging(
        self, context, other_context, stored_profile
    ):
        first = UserProfileRepositoryImpl(context)
        second = UserProfileRepositoryImpl(other_context)
        mine = await first.entities.get("u1")
        theirs = await second.entities.get("u1")

        await second.update(theirs.model_copy(update={"first_name": "Theirs"}))
        await other_context.commit()

        with pytest.raises(ConcurrencyError):
            await first.update(mine.model_copy(update={"first_name": "Mine"}))

    async def test_stale_update_rejected_at_commit(self, context, other_context, stored_profile):
        first = UserProfileRepositoryImpl(context)
        second = UserProfileRepositoryImpl(other_context)
        mine = await first.entities.get("u1")
        theirs = await second.entities.get("u1")

        await first.update(mine.model_copy(update={"first_name": "Mine"}))
        await second.update(theirs.model_copy(update={"first_name": "Theirs"}))
        await other_context.commit()

        with pytest.raises(ConcurrencyError) as exc_info:
            await context.commit()

        assert exc_info.value.details["expected_version"] == 1
        assert exc_info.value.details["actual_version"] == 2
        current = await first.entities.get("u1")
        assert current.first_name == "Theirs"

    async def test_delete_of_concurrently_deleted_row(self, context, other_context, stored_profile):
        first = UserProfileRepositoryImpl(context)
        second = UserProfileRepositoryImpl(other_context)
        profile = await first.entities.get("u1")

        await first.delete(profile)
        await second.delete(profile)
        await other_context.commit()

        with pytest.raises(NotFoundError):
            await context.commit()

    async def test_failed_commit_applies_nothing(
        self, context, other_context, stored_profile, make_realm
    ):
        realms = RealmRepositoryImpl(context)
        first = UserProfileRepositoryImpl(context)
        second = UserProfileRepositoryImpl(other_context)

        await realms.add(make_realm(realm_id="r2", name="OTHER.COM"))
        mine = await first.entities.get("u1")
        await first.update(mine.model_copy(update={"first_name": "Mine"}))

        theirs = await second.entities.get("u1")
        await second.update(theirs.model_copy(update={"first_name": "Theirs"}))
        await other_context.commit()

        with pytest.raises(ConcurrencyError):
            await context.commit()

        assert not await realms.entities.contains("r2")
        assert context.pending_changes == 2


    async def test_delete_from_stale_read_after_concurrent_update(
        self, context, other_context, stored_profile
    ):
        first = UserProfileRepositoryImpl(context)
        second = UserProfileRepositoryImpl(other_context)
        mine = await first.entities.get("u1")
        theirs = await second.entities.get("u1")

        await second.update(theirs.model_copy(update={"first_name": "Theirs"}))
        await other_context.commit()

        with pytest.raises(ConcurrencyError):
            await first.delete(mine)
        assert await first.entities.contains("u1")


class TestSpecializations:
    def test_specializations_share_the_generic_contract(self, realms, user_profiles):
        assert isinstance(realms, BaseRepository)
        assert isinstance(user_profiles, BaseRepository)
        assert type(realms).add is type(user_profiles).add
