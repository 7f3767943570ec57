"""Tests for the default realm and profile seed data."""

from appserver.modules.user_profiles.infrastructure.database import seed_default_data


class TestSeedDefaultData:
    async def test_inserts_default_realm_and_profiles(self, context):
        inserted = await seed_default_data(context)

        assert inserted == 3
        realm = await context.realms.get("example-com")
        assert realm.name == "EXAMPLE.COM"
        usernames = [p.username for p in await context.user_profiles.order_by("username").all()]
        assert usernames == ["admin", "user"]

    async def test_is_idempotent(self, context, other_context):
        await seed_default_data(context)
        assert await seed_default_data(other_context) == 0
        assert await other_context.user_profiles.count() == 2

    async def test_fills_in_missing_entries(self, context, realms, make_realm):
        await realms.add(make_realm(realm_id="example-com", name="EXAMPLE.COM"))
        await context.commit()

        assert await seed_default_data(context) == 2
        realm = await context.realms.get("example-com")
        assert realm.description == "Example realm"
