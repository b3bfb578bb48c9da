"""Repository abstraction layer for habo-data.

This module defines the abstract base classes (interfaces) for every entity
family, following the hexagonal architecture (Ports & Adapters) pattern.

Callers obtain repositories from the storage strategy context and never know
whether a local SQLite database or the remote HTTP backend sits behind them.

Shared rules for every contract:
- find_by_id() returns None, not an error, when nothing matches.
- update() raises NotFoundError when the identifier is absent from the store.
- delete() is idempotent: deleting an absent record succeeds silently.
- create() returns the assigned identifier, or UNRESOLVED_ID (0) when the
  store accepted the record but its identity could not be reconciled.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from datetime import date
from typing import Any

from habo_data.models import Category, Event, Habit, Log, Rule

EventBatch = Mapping[date, list[Any]] | Iterable[tuple[date, list[Any]]]


class HabitRepository(ABC):
    """Abstract base class for habit persistence operations."""

    @abstractmethod
    async def list_all(self) -> list[Habit]:
        """List all habits.

        Returns:
            List of Habit objects

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "HabitRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def find_by_id(self, habit_id: int) -> Habit | None:
        """Find a habit by identifier.

        Args:
            habit_id: Identifier of the habit

        Returns:
            Habit object, or None if no habit has that identifier

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "HabitRepository.find_by_id() must be implemented by adapter"
        )

    @abstractmethod
    async def create(self, habit: Habit) -> int:
        """Create a new habit.

        Args:
            habit: Habit to persist (its id is ignored)

        Returns:
            Assigned identifier, or UNRESOLVED_ID if it could not be determined

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            IdentityUnresolvedError: If the store returned no identifier at all
        """
        raise NotImplementedError(
            "HabitRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def update(self, habit: Habit) -> None:
        """Update an existing habit, matched by habit.id.

        Args:
            habit: Habit carrying the new field values

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            NotFoundError: If no habit has habit.id
        """
        raise NotImplementedError(
            "HabitRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, habit_id: int) -> None:
        """Delete a habit. Deleting an absent habit is a no-op.

        Args:
            habit_id: Identifier of the habit

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "HabitRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def update_order(self, habits: list[Habit]) -> None:
        """Persist display order; position follows the list index.

        Args:
            habits: Habits in their new display order

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "HabitRepository.update_order() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_all(self) -> None:
        """Delete every habit.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "HabitRepository.delete_all() must be implemented by adapter"
        )

    @abstractmethod
    async def insert_many(self, habits: list[Habit]) -> list[int]:
        """Insert several habits (e.g. when restoring a backup).

        Args:
            habits: Habits to insert

        Returns:
            Identifiers in input order, as create() would return them

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "HabitRepository.insert_many() must be implemented by adapter"
        )


class EventRepository(ABC):
    """Abstract base class for habit event persistence operations.

    Events are keyed by (habit_id, day) with day granularity.
    """

    @abstractmethod
    async def list_for_habit(self, habit_id: int) -> list[Event]:
        """List a habit's events in ascending day order.

        Args:
            habit_id: Identifier of the habit

        Returns:
            List of Event objects

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "EventRepository.list_for_habit() must be implemented by adapter"
        )

    @abstractmethod
    async def map_for_habit(self, habit_id: int) -> dict[date, list[Any]]:
        """Get a habit's events as a day -> payload mapping.

        Args:
            habit_id: Identifier of the habit

        Returns:
            Dictionary ordered ascending by day

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "EventRepository.map_for_habit() must be implemented by adapter"
        )

    @abstractmethod
    async def find_event(self, habit_id: int, day: date) -> Event | None:
        """Find the event recorded for a habit on a given day.

        Returns:
            Event object, or None if nothing is recorded for that day

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "EventRepository.find_event() must be implemented by adapter"
        )

    @abstractmethod
    async def insert_event(self, habit_id: int, day: date, payload: list[Any]) -> None:
        """Record an event, overwriting any event already on that day.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "EventRepository.insert_event() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_event(self, habit_id: int, day: date) -> None:
        """Delete the event on a day. Missing events are ignored.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "EventRepository.delete_event() must be implemented by adapter"
        )

    @abstractmethod
    async def insert_many_for_habit(self, habit_id: int, events: EventBatch) -> None:
        """Insert a batch of events for one habit.

        Args:
            habit_id: Identifier of the habit
            events: Day -> payload mapping or iterable of (day, payload)
                pairs; the last payload given for a day wins

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "EventRepository.insert_many_for_habit() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_all_for_habit(self, habit_id: int) -> None:
        """Delete every event of a habit.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "EventRepository.delete_all_for_habit() must be implemented by adapter"
        )

    @abstractmethod
    async def delete_all(self) -> None:
        """Delete every event of every habit.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "EventRepository.delete_all() must be implemented by adapter"
        )


class CategoryRepository(ABC):
    """Abstract base class for category persistence operations.

    Includes the habit <-> category relation.
    """

    @abstractmethod
    async def list_all(self) -> list[Category]:
        """List all categories.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "CategoryRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def find_by_id(self, category_id: int) -> Category | None:
        """Find a category by identifier, None if absent.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "CategoryRepository.find_by_id() must be implemented by adapter"
        )

    @abstractmethod
    async def create(self, category: Category) -> int:
        """Create a category and return its identifier.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            IdentityUnresolvedError: If the store returned no identifier
        """
        raise NotImplementedError(
            "CategoryRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def update(self, category: Category) -> None:
        """Update a category, matched by category.id.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            NotFoundError: If no category has category.id
        """
        raise NotImplementedError(
            "CategoryRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, category_id: int) -> None:
        """Delete a category. Deleting an absent category is a no-op.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "CategoryRepository.delete() must be implemented by adapter"
        )

    @abstractmethod
    async def list_for_habit(self, habit_id: int) -> list[Category]:
        """List the categories a habit belongs to.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "CategoryRepository.list_for_habit() must be implemented by adapter"
        )

    @abstractmethod
    async def set_categories_for_habit(
        self, habit_id: int, categories: list[Category]
    ) -> None:
        """Replace the set of categories a habit belongs to.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "CategoryRepository.set_categories_for_habit() must be implemented by adapter"
        )

    @abstractmethod
    async def add_habit_to_category(self, habit_id: int, category_id: int) -> None:
        """Attach a habit to a category.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "CategoryRepository.add_habit_to_category() must be implemented by adapter"
        )

    @abstractmethod
    async def remove_habit_from_category(
        self, habit_id: int, category_id: int
    ) -> None:
        """Detach a habit from a category.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "CategoryRepository.remove_habit_from_category() must be implemented by adapter"
        )


class RuleRepository(ABC):
    """Abstract base class for habit scheduling rules.

    Rules reference their habit by name, which is also the key the remote
    backend uses for update and delete.
    """

    @abstractmethod
    async def list_all(self) -> list[Rule]:
        """List all rules.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "RuleRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def list_for_habit(self, habit_name: str) -> list[Rule]:
        """List the rules of one habit.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "RuleRepository.list_for_habit() must be implemented by adapter"
        )

    @abstractmethod
    async def find_by_id(self, rule_id: int) -> Rule | None:
        """Find a rule by identifier, None if absent.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "RuleRepository.find_by_id() must be implemented by adapter"
        )

    @abstractmethod
    async def create(self, rule: Rule) -> int:
        """Create a rule.

        Returns:
            Assigned identifier, or UNRESOLVED_ID if it could not be determined

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "RuleRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def update(self, rule: Rule) -> None:
        """Update a rule.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            NotFoundError: If the rule does not exist
        """
        raise NotImplementedError(
            "RuleRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, habit_name: str) -> None:
        """Delete every rule of a habit. No rules is a no-op.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "RuleRepository.delete() must be implemented by adapter"
        )


class LogRepository(ABC):
    """Abstract base class for habit log persistence operations."""

    @abstractmethod
    async def list_all(self, habit_name: str | None = None) -> list[Log]:
        """List log entries, optionally for one habit only.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "LogRepository.list_all() must be implemented by adapter"
        )

    @abstractmethod
    async def find_by_id(self, log_id: int) -> Log | None:
        """Find a log entry by identifier, None if absent.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "LogRepository.find_by_id() must be implemented by adapter"
        )

    @abstractmethod
    async def create(self, log: Log) -> int:
        """Append a log entry.

        Returns:
            Assigned identifier, or UNRESOLVED_ID if it could not be determined

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "LogRepository.create() must be implemented by adapter"
        )

    @abstractmethod
    async def update(self, log_id: int, field: str, value: Any) -> None:
        """Update a single field of a log entry.

        Args:
            log_id: Identifier of the entry
            field: One of LOG_UPDATABLE_FIELDS
            value: New value for the field

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
            NotFoundError: If no entry has log_id
            ValueError: If field is not updatable
        """
        raise NotImplementedError(
            "LogRepository.update() must be implemented by adapter"
        )

    @abstractmethod
    async def delete(self, log_id: int) -> None:
        """Delete a log entry. Deleting an absent entry is a no-op.

        Raises:
            NotImplementedError: Must be implemented by concrete adapter
        """
        raise NotImplementedError(
            "LogRepository.delete() must be implemented by adapter"
        )
