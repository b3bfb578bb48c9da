"""Shared test fixtures and configuration.

Provides an in-memory SQLite database, an in-process fake Habo backend served
through httpx.MockTransport, and isolation from the real config/log dirs.
"""

from __future__ import annotations

import json
import logging
import sqlite3
from unittest.mock import MagicMock, patch

import httpx
import pytest

from habo_data.adapters.sqlite import schema as db_schema
from habo_data.models import APIConfig, AppConfig, StorageConfig
from habo_data.services.api.client import APIClient

BACKEND_URL = "http://habo.test"
USER_ID = 7


# ---------------------------------------------------------------------------
# Fake Habo backend
# ---------------------------------------------------------------------------


def _ok(payload=None) -> httpx.Response:
    return httpx.Response(200, json=payload if payload is not None else {"status": "ok"})


def _not_found() -> httpx.Response:
    return httpx.Response(404, json={"error": "not found"})


class FakeHaboBackend:
    """In-process stand-in for the Habo HTTP backend.

    State is kept in plain dicts/lists shaped like the backend's own records.
    ``failures`` maps ``(method, path)`` to a status code returned instead of
    handling the request.
    """

    def __init__(self, user_id: int = USER_ID):
        self.user_id = user_id
        self.habits: list[dict] = []
        self.events: dict[int, dict[str, list]] = {}
        self.categories: dict[int, dict] = {}
        self.habit_categories: dict[int, set[int]] = {}
        self.rules: list[dict] = []
        self.logs: list[dict] = []
        self.requests: list[httpx.Request] = []
        self.failures: dict[tuple[str, str], int] = {}
        self._next_id = 1

    def next_id(self) -> int:
        value = self._next_id
        self._next_id += 1
        return value

    def add_habit(self, name: str, is_device: bool = True, habit_id=None) -> dict:
        record = {
            "habit_id": habit_id if habit_id is not None else self.next_id(),
            "habit_name": name,
            "is_device": is_device,
        }
        self.habits.append(record)
        return record

    def calls(self, method: str | None = None, suffix: str = "") -> list[httpx.Request]:
        """Recorded requests, optionally filtered by method and path suffix."""
        return [
            r
            for r in self.requests
            if (method is None or r.method == method) and r.url.path.endswith(suffix)
        ]

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, request.url.path)
        if key in self.failures:
            return httpx.Response(self.failures[key], text="backend failure")

        prefix = f"/{self.user_id}/"
        if not request.url.path.startswith(prefix):
            return _not_found()
        family, *rest = request.url.path[len(prefix):].split("/")
        handler = getattr(self, f"_handle_{family.replace('-', '_')}", None)
        if handler is None:
            return _not_found()
        params = dict(request.url.params)
        body = json.loads(request.content) if request.content else None
        return handler(request.method, rest, params, body)

    # -- habits ------------------------------------------------------------

    def _handle_habits(self, method, rest, params, body):
        if method == "GET" and not rest:
            return _ok({"habits": list(self.habits)})
        if method == "POST" and rest == ["add"]:
            self.add_habit(params["name"], params["device"] == "true")
            return _ok()
        if method == "POST" and rest == ["update"]:
            for habit in self.habits:
                if habit["habit_name"] == params["name"]:
                    habit[params["field"]] = params["value"] == "true"
            return _ok()
        if method == "POST" and rest == ["delete"]:
            self.habits = [h for h in self.habits if h["habit_name"] != params["name"]]
            return _ok()
        return _not_found()

    # -- events ------------------------------------------------------------

    def _handle_events(self, method, rest, params, body):
        if method == "POST" and rest == ["add"]:
            self.events.setdefault(body["habitId"], {})[body["date"]] = body["eventData"]
            return _ok()
        if method == "POST" and rest == ["delete"]:
            habit_events = self.events.get(body["habitId"], {})
            if body["date"] not in habit_events:
                return _not_found()
            del habit_events[body["date"]]
            return _ok()
        if method == "POST" and rest == ["clear-all"]:
            self.events.clear()
            return _ok()
        if rest and rest[0] == "habit":
            habit_id = int(rest[1])
            habit_events = self.events.get(habit_id, {})
            if method == "GET" and len(rest) == 2:
                return _ok(
                    {
                        "events": [
                            {"date": day, "eventData": payload}
                            for day, payload in sorted(habit_events.items())
                        ]
                    }
                )
            if method == "GET" and rest[2:] == ["map"]:
                return _ok({"events": dict(habit_events)})
            if method == "POST" and rest[2:] == ["batch"]:
                self.events.setdefault(habit_id, {}).update(body["events"])
                return _ok()
            if method == "POST" and rest[2:] == ["clear"]:
                self.events.pop(habit_id, None)
                return _ok()
        return _not_found()

    # -- categories --------------------------------------------------------

    def _handle_categories(self, method, rest, params, body):
        if method == "GET" and not rest:
            return _ok({"categories": list(self.categories.values())})
        if method == "POST" and rest == ["add"]:
            category_id = self.next_id()
            self.categories[category_id] = {"id": category_id, "name": body["name"]}
            return _ok({"id": category_id})
        if rest and rest[0] == "habit":
            habit_id = int(rest[1])
            linked = self.habit_categories.setdefault(habit_id, set())
            if method == "GET" and len(rest) == 2:
                return _ok(
                    {"categories": [self.categories[c] for c in sorted(linked) if c in self.categories]}
                )
            if method == "POST" and rest[2:] == ["update"]:
                self.habit_categories[habit_id] = set(body["categoryIds"])
                return _ok()
            if method == "POST" and len(rest) == 4 and rest[2] == "add":
                linked.add(int(rest[3]))
                return _ok()
            if method == "POST" and len(rest) == 4 and rest[2] == "remove":
                linked.discard(int(rest[3]))
                return _ok()
        if method == "POST" and len(rest) == 2 and rest[0] in ("update", "delete"):
            category_id = int(rest[1])
            if category_id not in self.categories:
                return _not_found()
            if rest[0] == "update":
                self.categories[category_id]["name"] = body["name"]
            else:
                del self.categories[category_id]
            return _ok()
        if method == "GET" and len(rest) == 1:
            category = self.categories.get(int(rest[0]))
            if category is None:
                return _not_found()
            return _ok({"category": category})
        return _not_found()

    # -- rules -------------------------------------------------------------

    def _handle_rules(self, method, rest, params, body):
        if method == "GET" and not rest:
            return _ok({"result": list(self.rules)})
        if method == "POST" and rest == ["add"]:
            self.rules.append(
                {
                    "id": self.next_id(),
                    "habit": params["habit"],
                    "day": int(params["day"]),
                    "hour": int(params["hour"]),
                    "minute": int(params["minute"]),
                    "active": params["active"] == "true",
                }
            )
            return _ok()
        if method == "POST" and rest == ["update"]:
            return _ok({"result": f"Rules of {params['habit']} updated"})
        if method == "POST" and rest == ["delete"]:
            self.rules = [r for r in self.rules if r["habit"] != params["habit"]]
            return _ok()
        return _not_found()

    # -- logs --------------------------------------------------------------

    def _handle_logs(self, method, rest, params, body):
        if method == "GET" and not rest:
            name = params.get("name")
            return _ok(
                {"result": [log for log in self.logs if name is None or log["habit_name"] == name]}
            )
        if method == "POST" and rest == ["add"]:
            self.logs.append(
                {
                    "id": self.next_id(),
                    "habit_name": params["name"],
                    "state": params["state"],
                    "reported": params["reported"] == "true",
                }
            )
            return _ok()
        if method == "POST" and rest == ["update"]:
            for log in self.logs:
                if log["id"] == int(params["id"]):
                    value = params["value"]
                    log[params["field"]] = (
                        value == "true" if params["field"] == "reported" else value
                    )
            return _ok()
        if method == "POST" and rest == ["delete"]:
            self.logs = [log for log in self.logs if log["id"] != int(params["id"])]
            return _ok()
        return _not_found()


# ---------------------------------------------------------------------------
# Remote fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def backend() -> FakeHaboBackend:
    return FakeHaboBackend()


@pytest.fixture
def api_config() -> APIConfig:
    return APIConfig(endpoint=BACKEND_URL, user_id=USER_ID, timeout=5)


@pytest.fixture
def api_client(backend, api_config) -> APIClient:
    """APIClient whose requests are answered by the fake backend."""
    return APIClient(api_config, transport=httpx.MockTransport(backend.handle))


def client_for(handler) -> APIClient:
    """APIClient answering every request with handler(request)."""
    return APIClient(
        APIConfig(endpoint=BACKEND_URL, user_id=USER_ID),
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def make_client():
    """Factory for clients backed by an ad-hoc request handler."""
    return client_for


# ---------------------------------------------------------------------------
# SQLite fixtures
# ---------------------------------------------------------------------------


def create_in_memory_db() -> sqlite3.Connection:
    """Create an in-memory SQLite database with the full schema."""
    conn = sqlite3.connect(":memory:", check_same_thread=False)
    conn.row_factory = sqlite3.Row
    conn.execute("PRAGMA foreign_keys = ON")
    db_schema.initialize_schema(conn)
    return conn


@pytest.fixture
def db() -> sqlite3.Connection:
    conn = create_in_memory_db()
    yield conn
    conn.close()


# ---------------------------------------------------------------------------
# Config and logging isolation
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path):
    """Keep the application log file inside tmp_path."""
    import habo_data.utils.logger as logger_mod

    original = logger_mod._logger
    logger_mod._logger = None
    logging.getLogger("habo_data").handlers.clear()
    with patch("habo_data.utils.logger.user_log_dir", return_value=str(tmp_path / "logs")):
        yield
    logging.getLogger("habo_data").handlers.clear()
    logger_mod._logger = original


@pytest.fixture()
def tmp_config(tmp_path):
    """Provide a real ConfigService backed by a temporary directory."""
    from habo_data.services.config_service import ConfigService, get_config_service

    get_config_service.cache_clear()
    with patch(
        "habo_data.services.config_service.user_data_dir", return_value=str(tmp_path / "data")
    ):
        yield ConfigService(config_dir=tmp_path / "config")
    get_config_service.cache_clear()


@pytest.fixture()
def mock_config_service(tmp_path):
    """A MagicMock standing in for get_config_service(), with a local AppConfig."""
    config = AppConfig(storage=StorageConfig(db_path=str(tmp_path / "test.db")))
    svc = MagicMock()
    svc.config = config
    svc.load_config.return_value = config
    return svc
