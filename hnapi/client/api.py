"""Hacker News client.

Fetches feed category ID lists and story records from the Hacker News
Firebase API.
"""

import asyncio
from typing import Any, Iterable, Optional

import httpx
from pydantic import ValidationError

from hnapi.client.endpoints import COLLECT_ORDER, PRINT_ORDER, StoryType, resolve_url
from hnapi.client.errors import DecodeFailed, HackerNewsApiError, RequestFailed
from hnapi.client.models import HackerNewsResponse, Story, StoryIdList
from hnapi.utils.config import get_settings
from hnapi.utils.logging_config import get_logger


def _get_logger():
    """Get logger instance lazily to avoid import-time config loading."""
    return get_logger(__name__)


class HackerNewsAPI:
    """Async client for the Hacker News Firebase API.

    The category is passed to every call, so one instance can serve
    concurrent requests. Use as an async context manager:

        async with HackerNewsAPI() as api:
            response = await api.collect_all_stories()
            await api.debug_print_stories(response, amount=5)

    An ``httpx.AsyncClient`` passed in is used as-is and left open.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        max_concurrency: Optional[int] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize the client.

        Args:
            base_url: API base URL, defaults to HN_BASE_URL
            timeout: Per-request timeout in seconds, defaults to API_TIMEOUT
            max_concurrency: Requests in flight at once, defaults to MAX_CONCURRENCY
            client: Existing HTTP client to use instead of creating one

        Raises:
            ValueError: If max_concurrency is not positive
        """
        settings = get_settings()
        self.base_url = (base_url or settings.HN_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT
        self.max_concurrency = (
            max_concurrency if max_concurrency is not None else settings.MAX_CONCURRENCY
        )
        if self.max_concurrency <= 0:
            raise ValueError("max_concurrency must be positive")

        self._client = client
        self._owns_client = client is None
        self._semaphore: Optional[asyncio.Semaphore] = None
        self._semaphore_loop: Optional[asyncio.AbstractEventLoop] = None

    async def __aenter__(self) -> "HackerNewsAPI":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this instance created it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    def _limiter(self) -> asyncio.Semaphore:
        """Semaphore bounding requests in flight, one per event loop."""
        loop = asyncio.get_running_loop()
        if self._semaphore is None or self._semaphore_loop is not loop:
            self._semaphore = asyncio.Semaphore(self.max_concurrency)
            self._semaphore_loop = loop
        return self._semaphore

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            raise RuntimeError("HackerNewsAPI must be used as an async context manager")
        return self._client

    async def _get_json(self, url: str, story_type: Optional[StoryType] = None) -> Any:
        """GET a URL and decode its JSON body.

        Raises:
            RequestFailed: On transport errors or non-success status
            DecodeFailed: If the body is not valid JSON
        """
        async with self._limiter():
            _get_logger().debug(f"GET {url}")
            try:
                response = await self.client.get(url, timeout=self.timeout)
            except httpx.HTTPError as e:
                raise RequestFailed(
                    f"Request to {url} failed: {e}", url, story_type
                ) from e

        if response.is_error:
            raise RequestFailed(
                f"Request to {url} returned HTTP {response.status_code}",
                url,
                story_type,
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise DecodeFailed(f"Invalid JSON from {url}: {e}", url, story_type) from e

    async def fetch_story_ids(self, story_type: StoryType) -> list[int]:
        """Fetch the ID list of one feed category.

        Args:
            story_type: List category to fetch

        Returns:
            Story IDs in the order the API returns them

        Raises:
            RequestFailed: If the request fails
            DecodeFailed: If the body is not a list of non-negative integers
        """
        url = resolve_url(story_type, base_url=self.base_url)
        data = await self._get_json(url, story_type)

        try:
            return StoryIdList.validate_python(data)
        except ValidationError as e:
            raise DecodeFailed(
                f"Expected a list of story IDs from {url}", url, story_type
            ) from e

    async def _collect_one(
        self, story_type: StoryType
    ) -> tuple[StoryType, Optional[list[int]], Optional[HackerNewsApiError]]:
        try:
            ids = await self.fetch_story_ids(story_type)
        except HackerNewsApiError as e:
            _get_logger().warning(f"Failed to fetch {story_type.display_name} stories: {e}")
            return story_type, None, e

        _get_logger().info(
            f"Fetched {len(ids)} {story_type.display_name} story IDs",
            extra={"extra_fields": {"story_type": story_type.value, "count": len(ids)}},
        )
        return story_type, ids, None

    async def collect_all_stories(self) -> HackerNewsResponse:
        """Fetch the ID lists of all six feed categories.

        Requests run concurrently. A failed category is left as None and its
        error recorded; the other categories are still returned. Call
        ``raise_for_errors()`` on the result for all-or-nothing behaviour.

        Returns:
            HackerNewsResponse with one list per category
        """
        results = await asyncio.gather(
            *(self._collect_one(story_type) for story_type in COLLECT_ORDER)
        )

        fields: dict[str, list[int]] = {}
        errors: dict[StoryType, HackerNewsApiError] = {}
        for story_type, ids, error in results:
            if error is not None:
                errors[story_type] = error
            else:
                fields[story_type.name.lower()] = ids

        return HackerNewsResponse(**fields, errors=errors)

    async def fetch_story(self, story_id: int) -> Story:
        """Fetch a single story record.

        Raises:
            RequestFailed: If the request fails
            DecodeFailed: If the item does not exist or has an unexpected shape
        """
        url = resolve_url(StoryType.ITEM, story_id, base_url=self.base_url)
        data = await self._get_json(url)

        if data is None:
            raise DecodeFailed(f"Item {story_id} not found", url)

        try:
            return Story.model_validate(data)
        except ValidationError as e:
            raise DecodeFailed(f"Unexpected item shape for {story_id}: {e}", url) from e

    async def fetch_stories(self, story_ids: Iterable[int]) -> list[Story]:
        """Fetch several stories concurrently, returned in input order.

        The first failure cancels the requests still pending.

        Raises:
            HackerNewsApiError: The first failure encountered
        """
        tasks = [asyncio.ensure_future(self.fetch_story(story_id)) for story_id in story_ids]
        try:
            return list(await asyncio.gather(*tasks))
        except BaseException:
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

    async def debug_print_story(
        self, response: HackerNewsResponse, story_type: StoryType, amount: int
    ) -> list[Story]:
        """Print the first ``amount`` stories of a category.

        Prints a ``Story Type: <Name>`` header followed by one
        ``Story #<index> - id: <id> - <title>`` line per story.

        Args:
            response: Result of collect_all_stories()
            story_type: Category to print
            amount: Number of IDs to resolve from the front of the list

        Returns:
            The stories that were printed

        Raises:
            ValueError: If amount is negative
            HackerNewsApiError: If any story fails to resolve
        """
        ids = response.take(story_type, amount)
        print(f"Story Type: {story_type.display_name}")

        stories = await self.fetch_stories(ids)
        for index, (story_id, story) in enumerate(zip(ids, stories)):
            print(f"Story #{index} - id: {story_id} - {story.title}")

        return stories

    async def debug_print_stories(
        self, response: HackerNewsResponse, amount: int
    ) -> dict[StoryType, list[Story]]:
        """Print the first ``amount`` stories of every category."""
        printed = {}
        for story_type in PRINT_ORDER:
            printed[story_type] = await self.debug_print_story(response, story_type, amount)
        return printed
