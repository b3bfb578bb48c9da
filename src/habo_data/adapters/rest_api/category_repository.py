"""REST API implementation of CategoryRepository."""

from __future__ import annotations

import logging
from collections.abc import Mapping

from habo_data.models import Category
from habo_data.repositories.exceptions import IdentityUnresolvedError, NotFoundError
from habo_data.repositories.repository import CategoryRepository

from .base import RestApiRepository
from .mapping import category_from_wire, category_to_wire, parse_remote_id

logger = logging.getLogger(__name__)


class RestApiCategoryRepository(RestApiRepository, CategoryRepository):
    """Category repository backed by ``/{user}/categories``."""

    family = "categories"

    async def list_all(self) -> list[Category]:
        payload = await self._get("fetch categories")
        items = self._envelope(payload, "categories", "fetch categories")
        return [category_from_wire(item) for item in items]

    async def find_by_id(self, category_id: int) -> Category | None:
        action = f"fetch category {category_id}"
        response = await self._request("GET", action, f"/{category_id}")
        if response.status_code == 404:
            return None
        payload = self._decode(self._expect_ok(response, action), action)
        item = self._envelope(payload, "category", action, dict)
        if not item:
            return None
        return category_from_wire(item)

    async def create(self, category: Category) -> int:
        action = "create category"
        body = {"name": category.name}
        response = await self._post(action, "/add", json=body)
        payload = self._decode(response, action)
        category_id = (
            parse_remote_id(payload.get("id")) if isinstance(payload, Mapping) else None
        )
        if category_id is None:
            raise IdentityUnresolvedError(
                f"Backend created category {category.name!r} without returning an id"
            )
        return category_id

    async def update(self, category: Category) -> None:
        if category.id is None:
            raise NotFoundError("Cannot update a category without an id")
        action = f"update category {category.id}"
        response = await self._request(
            "POST", action, f"/update/{category.id}", json=category_to_wire(category)
        )
        if response.status_code == 404:
            raise NotFoundError(f"Category not found: {category.id}")
        self._expect_ok(response, action)

    async def delete(self, category_id: int) -> None:
        action = f"delete category {category_id}"
        response = await self._request("POST", action, f"/delete/{category_id}")
        if response.status_code == 404:
            logger.debug("Category %s already absent, nothing to delete", category_id)
            return
        self._expect_ok(response, action)

    async def list_for_habit(self, habit_id: int) -> list[Category]:
        action = f"fetch categories of habit {habit_id}"
        payload = await self._get(action, f"/habit/{habit_id}")
        return [
            category_from_wire(item)
            for item in self._envelope(payload, "categories", action)
        ]

    async def set_categories_for_habit(
        self, habit_id: int, categories: list[Category]
    ) -> None:
        category_ids = [c.id for c in categories if c.id is not None]
        await self._post(
            f"set categories of habit {habit_id}",
            f"/habit/{habit_id}/update",
            json={"categoryIds": category_ids},
        )

    async def add_habit_to_category(self, habit_id: int, category_id: int) -> None:
        await self._post(
            f"add habit {habit_id} to category {category_id}",
            f"/habit/{habit_id}/add/{category_id}",
        )

    async def remove_habit_from_category(
        self, habit_id: int, category_id: int
    ) -> None:
        await self._post(
            f"remove habit {habit_id} from category {category_id}",
            f"/habit/{habit_id}/remove/{category_id}",
        )
