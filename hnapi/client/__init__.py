"""Hacker News Firebase API client."""

from hnapi.client.api import HackerNewsAPI
from hnapi.client.endpoints import COLLECT_ORDER, PRINT_ORDER, StoryType, resolve_url
from hnapi.client.errors import DecodeFailed, HackerNewsApiError, RequestFailed
from hnapi.client.models import HackerNewsResponse, Story

__all__ = [
    "COLLECT_ORDER",
    "DecodeFailed",
    "HackerNewsAPI",
    "HackerNewsApiError",
    "HackerNewsResponse",
    "PRINT_ORDER",
    "RequestFailed",
    "Story",
    "StoryType",
    "resolve_url",
]
