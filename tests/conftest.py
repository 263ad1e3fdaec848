"""Pytest configuration shared by all tests."""

import asyncio
import json
import shutil
from pathlib import Path
from typing import Any, Callable, Optional

import httpx
import pytest

from hnapi.client import HackerNewsAPI
from hnapi.utils.config import reset_settings
from hnapi.utils.logging_config import reset_logging

BASE_URL = "https://hn.test/v0"

CONFIG_ENV_VARS = (
    "APP_NAME",
    "ENVIRONMENT",
    "LOG_LEVEL",
    "HN_BASE_URL",
    "API_TIMEOUT",
    "MAX_CONCURRENCY",
)


@pytest.fixture(scope="session", autouse=True)
def backup_env_file():
    """Backup .env file during test session to prevent pollution."""
    env_file = Path(".env")
    backup_file = Path(".env.test_backup")

    if env_file.exists():
        shutil.copy(env_file, backup_file)
        env_file.unlink()

    yield

    if backup_file.exists():
        shutil.move(backup_file, env_file)


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch):
    """Start every test from default settings and unconfigured logging."""
    for name in CONFIG_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings()
    reset_logging()
    yield
    reset_settings()
    reset_logging()


class FakeHackerNews:
    """In-memory stand-in for the Firebase API, served through httpx.MockTransport.

    Routes map a path below the base URL (e.g. "showstories.json") to either a
    JSON-serialisable body or an ``httpx.Response``. Unknown paths return 404.
    Paths listed in ``delays`` wait that many seconds before answering.
    """

    base_url = BASE_URL

    def __init__(self, routes: dict[str, Any], delays: Optional[dict[str, float]] = None):
        self.routes = routes
        self.delays = delays or {}
        self.requested: list[str] = []
        self.finished: list[str] = []
        self.in_flight = 0
        self.peak_in_flight = 0

    async def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path.removeprefix("/v0/")
        self.requested.append(path)

        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)
        try:
            # Always yield so concurrent requests overlap
            await asyncio.sleep(self.delays.get(path, 0))
        finally:
            self.in_flight -= 1
        self.finished.append(path)

        if path not in self.routes:
            return httpx.Response(404, json={"error": "not found"})

        route = self.routes[path]
        if isinstance(route, Exception):
            raise route
        if isinstance(route, httpx.Response):
            return route
        return httpx.Response(
            200,
            content=json.dumps(route).encode(),
            headers={"Content-Type": "application/json"},
        )

    def requested_items(self) -> list[int]:
        """IDs of item endpoints hit, in request order."""
        return [
            int(path.removeprefix("item/").removesuffix(".json"))
            for path in self.requested
            if path.startswith("item/")
        ]

    def api(self, **kwargs) -> HackerNewsAPI:
        client = httpx.AsyncClient(transport=httpx.MockTransport(self.handler))
        return HackerNewsAPI(base_url=BASE_URL, client=client, **kwargs)


@pytest.fixture
def fake_hn() -> Callable[..., FakeHackerNews]:
    """Factory building a FakeHackerNews from a route table and optional delays."""
    return FakeHackerNews


def _all_lists(**overrides) -> dict[str, Any]:
    """Route table answering every list endpoint, with optional overrides."""
    routes: dict[str, Any] = {
        "topstories.json": [10, 11, 12],
        "newstories.json": [20, 21],
        "beststories.json": [30],
        "askstories.json": [40, 41],
        "showstories.json": [50],
        "jobstories.json": [60, 61, 62],
    }
    routes.update(overrides)
    return routes


def _item(story_id: int, title: str = "A story", **extra) -> dict[str, Any]:
    """Item endpoint body for a story."""
    body = {
        "by": "pg",
        "descendants": 3,
        "id": story_id,
        "kids": [story_id + 1000],
        "score": 42,
        "time": 1160418111,
        "title": title,
        "type": "story",
        "url": f"https://example.com/{story_id}",
    }
    body.update(extra)
    return body


@pytest.fixture
def all_lists() -> Callable[..., dict[str, Any]]:
    """Route table answering every list endpoint; keyword overrides replace routes."""
    return _all_lists


@pytest.fixture
def item() -> Callable[..., dict[str, Any]]:
    """Builder for item endpoint bodies."""
    return _item
