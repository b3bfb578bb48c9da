"""Unit tests for SqliteHabitRepository.

Uses an in-memory SQLite database so tests run without touching the filesystem.
"""

from __future__ import annotations

import sqlite3
from datetime import date, time

import pytest

from habo_data.adapters.sqlite.habit_repository import SqliteHabitRepository
from habo_data.models import Category, Habit, HabitType
from habo_data.repositories import NotFoundError


def _make_repo(conn: sqlite3.Connection) -> SqliteHabitRepository:
    repo = SqliteHabitRepository()
    repo._connection = conn
    return repo


@pytest.fixture
def repo(db) -> SqliteHabitRepository:
    return _make_repo(db)


# ---------------------------------------------------------------------------
# connection property
# ---------------------------------------------------------------------------


class TestConnectionProperty:
    def test_returns_injected_connection(self, repo, db):
        assert repo.connection is db

    def test_lazy_init_uses_db_path(self, tmp_path, mocker):
        fake = mocker.MagicMock()
        get_conn = mocker.patch(
            "habo_data.adapters.sqlite.habit_repository.get_connection", return_value=fake
        )
        repo = SqliteHabitRepository(db_path=str(tmp_path / "habo.db"))
        assert repo.connection is fake
        get_conn.assert_called_once_with(str(tmp_path / "habo.db"))


# ---------------------------------------------------------------------------
# create / find
# ---------------------------------------------------------------------------


class TestCreate:
    @pytest.mark.asyncio
    async def test_round_trip_all_fields(self, repo):
        habit = Habit(
            title="Practice piano",
            position=2,
            habit_type=HabitType.NUMERIC,
            target_value=30.0,
            partial_value=5.0,
            unit="min",
            archived=True,
            notification=True,
            notification_time=time(19, 45),
            two_day_rule=True,
            cue="After dinner",
            routine="Scales",
            reward="Tea",
            show_reward=True,
            advanced=True,
            sanction="No TV",
            show_sanction=True,
            accountant="Sam",
        )

        habit_id = await repo.create(habit)
        stored = await repo.find_by_id(habit_id)

        assert stored == habit.model_copy(update={"id": habit_id})

    @pytest.mark.asyncio
    async def test_ids_are_distinct_and_nonzero(self, repo):
        first = await repo.create(Habit(title="A"))
        second = await repo.create(Habit(title="A"))
        assert first > 0 and second > 0 and first != second

    @pytest.mark.asyncio
    async def test_find_missing_is_none(self, repo):
        assert await repo.find_by_id(123) is None

    @pytest.mark.asyncio
    async def test_events_and_categories_loaded(self, repo, db):
        db.execute("INSERT INTO categories (id, name) VALUES (1, 'Health')")
        habit_id = await repo.create(
            Habit(
                title="Run",
                categories=[Category(id=1, name="Health")],
                events={date(2024, 1, 2): ["check", ""], date(2024, 1, 1): ["fail", ""]},
            )
        )
        stored = await repo.find_by_id(habit_id)
        assert [c.name for c in stored.categories] == ["Health"]
        assert list(stored.events) == [date(2024, 1, 1), date(2024, 1, 2)]

    @pytest.mark.asyncio
    async def test_list_ordered_by_position(self, repo):
        await repo.create(Habit(title="Second", position=1))
        await repo.create(Habit(title="First", position=0))
        assert [h.title for h in await repo.list_all()] == ["First", "Second"]


# ---------------------------------------------------------------------------
# update / delete
# ---------------------------------------------------------------------------


class TestUpdateDelete:
    @pytest.mark.asyncio
    async def test_update(self, repo):
        habit_id = await repo.create(Habit(title="Run"))
        await repo.update(Habit(id=habit_id, title="Run far", archived=True))
        stored = await repo.find_by_id(habit_id)
        assert (stored.title, stored.archived) == ("Run far", True)

    @pytest.mark.asyncio
    async def test_update_missing_raises(self, repo):
        with pytest.raises(NotFoundError):
            await repo.update(Habit(id=77, title="Ghost"))

    @pytest.mark.asyncio
    async def test_update_without_id_raises(self, repo):
        with pytest.raises(NotFoundError):
            await repo.update(Habit(title="Ghost"))

    @pytest.mark.asyncio
    async def test_failed_update_leaves_habit_untouched(self, repo, db):
        db.execute("INSERT INTO categories (id, name) VALUES (1, 'Health')")
        habit_id = await repo.create(
            Habit(title="Run", categories=[Category(id=1, name="Health")])
        )

        with pytest.raises(sqlite3.IntegrityError):
            await repo.update(
                Habit(id=habit_id, title="Renamed", categories=[Category(id=999, name="Ghost")])
            )
        # A later commit on the shared connection must not persist the failed write.
        await repo.update_order([])

        stored = await repo.find_by_id(habit_id)
        assert stored.title == "Run"
        assert [c.id for c in stored.categories] == [1]

    @pytest.mark.asyncio
    async def test_delete_removes_events(self, repo, db):
        habit_id = await repo.create(Habit(title="Run", events={date(2024, 1, 1): ["check"]}))
        await repo.delete(habit_id)
        assert await repo.find_by_id(habit_id) is None
        assert db.execute("SELECT COUNT(*) FROM events").fetchone()[0] == 0

    @pytest.mark.asyncio
    async def test_delete_missing_is_silent(self, repo):
        await repo.delete(999)


# ---------------------------------------------------------------------------
# Bulk operations
# ---------------------------------------------------------------------------


class TestBulk:
    @pytest.mark.asyncio
    async def test_update_order(self, repo):
        a = await repo.create(Habit(title="A", position=0))
        b = await repo.create(Habit(title="B", position=1))
        await repo.update_order([Habit(id=b, title="B"), Habit(id=a, title="A")])
        assert [h.title for h in await repo.list_all()] == ["B", "A"]

    @pytest.mark.asyncio
    async def test_insert_many_keeps_ids(self, repo):
        ids = await repo.insert_many([Habit(id=10, title="A"), Habit(title="B")])
        assert ids[0] == 10
        assert ids[1] > 10
        assert [h.id for h in await repo.list_all()] == ids

    @pytest.mark.asyncio
    async def test_insert_many_rolls_back_on_conflict(self, repo):
        await repo.create(Habit(id=None, title="Existing"))
        existing_id = (await repo.list_all())[0].id
        with pytest.raises(sqlite3.IntegrityError):
            await repo.insert_many([Habit(title="New"), Habit(id=existing_id, title="Dup")])
        assert [h.title for h in await repo.list_all()] == ["Existing"]

    @pytest.mark.asyncio
    async def test_delete_all(self, repo):
        await repo.insert_many([Habit(title="A"), Habit(title="B")])
        await repo.delete_all()
        assert await repo.list_all() == []
