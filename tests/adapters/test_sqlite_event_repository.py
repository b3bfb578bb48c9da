"""Unit tests for SqliteEventRepository using an in-memory database."""

from __future__ import annotations

from datetime import date, datetime

import pytest

from habo_data.adapters.sqlite.event_repository import SqliteEventRepository


@pytest.fixture
def repo(db) -> SqliteEventRepository:
    repo = SqliteEventRepository()
    repo._connection = db
    return repo


class TestEvents:
    @pytest.mark.asyncio
    async def test_insert_and_list_ascending(self, repo):
        await repo.insert_event(1, date(2024, 1, 3), ["check", ""])
        await repo.insert_event(1, date(2024, 1, 1), ["skip", "travel"])

        events = await repo.list_for_habit(1)

        assert [e.day for e in events] == [date(2024, 1, 1), date(2024, 1, 3)]
        assert events[0].payload == ["skip", "travel"]

    @pytest.mark.asyncio
    async def test_habit_need_not_exist_locally(self, repo):
        # Habits may be stored remotely while events stay local.
        await repo.insert_event(404, date(2024, 1, 1), ["check"])
        assert len(await repo.list_for_habit(404)) == 1

    @pytest.mark.asyncio
    async def test_insert_overwrites_same_day(self, repo):
        await repo.insert_event(1, datetime(2024, 1, 1, 7, 0), ["fail"])
        await repo.insert_event(1, datetime(2024, 1, 1, 22, 0), ["check"])
        assert await repo.map_for_habit(1) == {date(2024, 1, 1): ["check"]}

    @pytest.mark.asyncio
    async def test_find_event(self, repo):
        await repo.insert_event(1, date(2024, 1, 1), ["check"])
        assert (await repo.find_event(1, date(2024, 1, 1))).payload == ["check"]
        assert await repo.find_event(1, date(2024, 1, 2)) is None
        assert await repo.find_event(2, date(2024, 1, 1)) is None

    @pytest.mark.asyncio
    async def test_delete_event_and_missing(self, repo):
        await repo.insert_event(1, date(2024, 1, 1), ["check"])
        await repo.delete_event(1, date(2024, 1, 1))
        await repo.delete_event(1, date(2024, 1, 1))
        assert await repo.list_for_habit(1) == []

    @pytest.mark.asyncio
    async def test_batch_last_wins_and_ascending(self, repo):
        await repo.insert_many_for_habit(
            1,
            [
                (date(2024, 1, 5), ["first"]),
                (date(2024, 1, 2), ["x"]),
                (datetime(2024, 1, 5, 12, 0), ["second"]),
            ],
        )
        assert await repo.map_for_habit(1) == {
            date(2024, 1, 2): ["x"],
            date(2024, 1, 5): ["second"],
        }
        assert list(await repo.map_for_habit(1)) == [date(2024, 1, 2), date(2024, 1, 5)]

    @pytest.mark.asyncio
    async def test_batch_accepts_mapping(self, repo):
        await repo.insert_many_for_habit(1, {date(2024, 1, 1): ["check"]})
        assert len(await repo.list_for_habit(1)) == 1

    @pytest.mark.asyncio
    async def test_delete_all_for_habit_and_all(self, repo):
        await repo.insert_event(1, date(2024, 1, 1), ["check"])
        await repo.insert_event(2, date(2024, 1, 1), ["check"])

        await repo.delete_all_for_habit(1)
        assert await repo.list_for_habit(1) == []
        assert len(await repo.list_for_habit(2)) == 1

        await repo.delete_all()
        assert await repo.list_for_habit(2) == []
