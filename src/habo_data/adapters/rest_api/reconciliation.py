"""Identity reconciliation for backends whose create endpoints return no id.

After a create the adapter refetches the collection and looks for the new
record. Anything other than exactly one candidate yields UNRESOLVED_ID.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol, TypeVar

from habo_data.models import UNRESOLVED_ID, Habit, Rule


class _Identified(Protocol):
    id: int | None


T = TypeVar("T", bound=_Identified)


def resolve_unique(records: Iterable[T], predicate: Callable[[T], bool]) -> int:
    """Return the id of the single record matching predicate, else UNRESOLVED_ID."""
    matches = [record for record in records if predicate(record)]
    if len(matches) != 1 or matches[0].id is None:
        return UNRESOLVED_ID
    return matches[0].id


def resolve_by_title(habits: Iterable[Habit], title: str) -> int:
    """Resolve a habit id from its title."""
    return resolve_unique(habits, lambda habit: habit.title == title)


def resolve_rule(rules: Iterable[Rule], rule: Rule) -> int:
    """Resolve a rule id from its habit name and schedule slot."""
    return resolve_unique(
        rules,
        lambda candidate: (
            candidate.habit == rule.habit
            and candidate.day == rule.day
            and candidate.hour == rule.hour
            and candidate.minute == rule.minute
        ),
    )


def resolve_new_id(known_ids: set[int], records: Iterable[T]) -> int:
    """Resolve the id that appeared since known_ids was taken."""
    return resolve_unique(
        records, lambda record: record.id is not None and record.id not in known_ids
    )
