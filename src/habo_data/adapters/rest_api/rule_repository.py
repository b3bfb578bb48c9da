"""REST API implementation of RuleRepository."""

from __future__ import annotations

import logging

from habo_data.models import UNRESOLVED_ID, Rule
from habo_data.repositories.exceptions import NotFoundError
from habo_data.repositories.repository import RuleRepository

from .base import RestApiRepository
from .mapping import rule_from_wire, rule_to_wire
from .reconciliation import resolve_rule

logger = logging.getLogger(__name__)


class RestApiRuleRepository(RestApiRepository, RuleRepository):
    """Rule repository backed by ``/{user}/rules``.

    The backend addresses rules by habit name for update and delete.
    """

    family = "rules"

    async def list_all(self) -> list[Rule]:
        payload = await self._get("fetch rules")
        return [rule_from_wire(item) for item in self._envelope(payload, "result", "fetch rules")]

    async def list_for_habit(self, habit_name: str) -> list[Rule]:
        return [rule for rule in await self.list_all() if rule.habit == habit_name]

    async def find_by_id(self, rule_id: int) -> Rule | None:
        for rule in await self.list_all():
            if rule.id == rule_id:
                return rule
        return None

    async def create(self, rule: Rule) -> int:
        await self.submit_create(rule)
        return await self.resolve_created_id(rule)

    async def submit_create(self, rule: Rule) -> None:
        await self._post("create rule", "/add", params=rule_to_wire(rule))

    async def resolve_created_id(self, rule: Rule) -> int:
        rule_id = resolve_rule(await self.list_all(), rule)
        if rule_id == UNRESOLVED_ID:
            logger.warning(
                "Could not resolve the id of created rule for %r at day %s %02d:%02d",
                rule.habit,
                rule.day,
                rule.hour,
                rule.minute,
            )
        return rule_id

    async def update(self, rule: Rule) -> None:
        current = await self.find_by_id(rule.id) if rule.id is not None else None
        if current is None:
            raise NotFoundError(f"Rule not found: {rule.id}")
        # The backend recalculates a habit's rules; the slot itself is not sent.
        await self._post("update rule", "/update", params={"habit": current.habit})

    async def delete(self, habit_name: str) -> None:
        if not await self.list_for_habit(habit_name):
            logger.debug("No rules for habit %r, nothing to delete", habit_name)
            return
        await self._post("delete rules", "/delete", params={"habit": habit_name})
