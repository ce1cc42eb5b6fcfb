"""
Integration tests for watchlist management.
"""
import pytest

from src.activity.service import get_user_activity_logs
from src.core.errors import DuplicateEntryError, NotFoundError, ValidationError
from src.watchlists.service import (
    DUPLICATE_MESSAGE,
    add_company_to_watchlist,
    create_watchlist,
    delete_watchlist,
    get_user_watchlists,
    get_watchlist,
    get_watchlist_owner,
    get_watchlist_stats,
    is_company_in_watchlists,
    remove_company_from_watchlist,
    update_company_notes,
    update_watchlist,
)

USER = "user-1"


@pytest.fixture
async def watchlist(gateway):
    return await create_watchlist(gateway, USER, "  Targets ", "Q3 shortlist")


class TestCreateWatchlist:

    async def test_create_trims_name(self, gateway, watchlist):
        assert watchlist["name"] == "Targets"
        assert watchlist["description"] == "Q3 shortlist"
        assert watchlist["user_id"] == USER
        assert await get_watchlist_owner(gateway, watchlist["id"]) == USER

    @pytest.mark.parametrize("name", ["", "   "])
    async def test_blank_name_rejected(self, gateway, name):
        with pytest.raises(ValidationError):
            await create_watchlist(gateway, USER, name)
        assert await get_user_watchlists(gateway, USER) == []

    async def test_creation_is_logged(self, gateway, watchlist):
        logs = await get_user_activity_logs(gateway, USER, activity_type="CREATE_WATCHLIST")
        assert len(logs) == 1
        assert logs[0]["resource_id"] == watchlist["id"]

    async def test_update_and_delete(self, gateway, watchlist, company_factory):
        updated = await update_watchlist(gateway, watchlist["id"], name="Renamed")
        assert updated["name"] == "Renamed"
        assert updated["description"] == "Q3 shortlist"

        with pytest.raises(ValidationError):
            await update_watchlist(gateway, watchlist["id"], name=" ")

        company_id = await company_factory(name="Acme")
        await add_company_to_watchlist(gateway, watchlist["id"], company_id)
        assert await delete_watchlist(gateway, watchlist["id"]) is True

        with pytest.raises(NotFoundError):
            await get_watchlist(gateway, watchlist["id"])
        assert await is_company_in_watchlists(gateway, USER, company_id) == []

    async def test_unknown_watchlist(self, gateway):
        with pytest.raises(NotFoundError):
            await get_watchlist_owner(gateway, "missing")
        with pytest.raises(NotFoundError):
            await delete_watchlist(gateway, "missing")


class TestWatchlistMembership:

    async def test_add_and_read_back(self, gateway, watchlist, company_factory):
        company_id = await company_factory(name="Acme Analytics")
        added = await add_company_to_watchlist(gateway, watchlist["id"], company_id, notes="call CFO")
        assert added["company_id"] == company_id
        assert added["notes"] == "call CFO"

        loaded = await get_watchlist(gateway, watchlist["id"])
        assert len(loaded["watchlist_companies"]) == 1
        entry = loaded["watchlist_companies"][0]
        assert entry["company"]["name"] == "Acme Analytics"
        assert entry["notes"] == "call CFO"

        logs = await get_user_activity_logs(gateway, USER, activity_type="ADD_TO_WATCHLIST")
        assert [log["company_id"] for log in logs] == [company_id]

    async def test_duplicate_add_is_rejected(self, gateway, watchlist, company_factory):
        company_id = await company_factory(name="Acme")
        await add_company_to_watchlist(gateway, watchlist["id"], company_id)

        with pytest.raises(DuplicateEntryError) as exc:
            await add_company_to_watchlist(gateway, watchlist["id"], company_id, notes="again")
        assert str(exc.value) == DUPLICATE_MESSAGE

        loaded = await get_watchlist(gateway, watchlist["id"])
        assert len(loaded["watchlist_companies"]) == 1
        assert loaded["watchlist_companies"][0]["notes"] == ""

    async def test_same_company_in_two_watchlists(self, gateway, watchlist, company_factory):
        other = await create_watchlist(gateway, USER, "Backup")
        company_id = await company_factory(name="Acme")
        await add_company_to_watchlist(gateway, watchlist["id"], company_id)
        await add_company_to_watchlist(gateway, other["id"], company_id)

        memberships = await is_company_in_watchlists(gateway, USER, company_id)
        assert [m["name"] for m in memberships] == ["Backup", "Targets"]
        assert await is_company_in_watchlists(gateway, "someone-else", company_id) == []

    async def test_add_to_missing_targets(self, gateway, watchlist, company_factory):
        company_id = await company_factory(name="Acme")
        with pytest.raises(NotFoundError):
            await add_company_to_watchlist(gateway, "missing", company_id)
        with pytest.raises(NotFoundError):
            await add_company_to_watchlist(gateway, watchlist["id"], 9999)

    async def test_notes_and_removal(self, gateway, watchlist, company_factory):
        company_id = await company_factory(name="Acme")
        await add_company_to_watchlist(gateway, watchlist["id"], company_id)

        entry = await update_company_notes(gateway, watchlist["id"], company_id, "met at expo")
        assert entry["notes"] == "met at expo"

        assert await remove_company_from_watchlist(gateway, watchlist["id"], company_id) is True
        with pytest.raises(NotFoundError):
            await remove_company_from_watchlist(gateway, watchlist["id"], company_id)
        with pytest.raises(NotFoundError):
            await update_company_notes(gateway, watchlist["id"], company_id, "gone")

        # removed pairs can be added again
        await add_company_to_watchlist(gateway, watchlist["id"], company_id)


class TestWatchlistStats:

    async def test_counts_per_watchlist(self, gateway, watchlist, company_factory):
        empty = await create_watchlist(gateway, USER, "Empty")
        await create_watchlist(gateway, "user-2", "Not mine")
        for name in ("A", "B", "C"):
            company_id = await company_factory(name=name)
            await add_company_to_watchlist(gateway, watchlist["id"], company_id)

        stats = await get_watchlist_stats(gateway, USER)
        assert stats["total_watchlists"] == 2
        assert stats["total_companies"] == 3
        assert stats["watchlists"] == [
            {"id": empty["id"], "name": "Empty", "company_count": 0},
            {"id": watchlist["id"], "name": "Targets", "company_count": 3},
        ]

    async def test_user_watchlists_newest_first(self, gateway, watchlist):
        await create_watchlist(gateway, USER, "Later")
        names = [w["name"] for w in await get_user_watchlists(gateway, USER)]
        assert names == ["Later", "Targets"]
