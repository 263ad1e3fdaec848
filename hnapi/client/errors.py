"""Exceptions raised by the Hacker News client.

Every failure that reaches a caller is one of two kinds:

- RequestFailed: the GET did not complete or returned a non-success status
- DecodeFailed: the body is not JSON or does not have the expected shape
"""

from typing import Optional

from hnapi.client.endpoints import StoryType


class HackerNewsApiError(Exception):
    """Base exception for Hacker News API failures."""

    def __init__(self, message: str, url: str, story_type: Optional[StoryType] = None):
        """Initialize API error with request context.

        Args:
            message: Error message
            url: URL of the request that failed
            story_type: Category being fetched, if any
        """
        super().__init__(message)
        self.url = url
        self.story_type = story_type

    def __str__(self):
        """String representation with category name if available."""
        base = super().__str__()
        if self.story_type is not None:
            return f"[{self.story_type.display_name}] {base}"
        return base


class RequestFailed(HackerNewsApiError):
    """Transport failure or non-success HTTP status."""

    def __init__(
        self,
        message: str,
        url: str,
        story_type: Optional[StoryType] = None,
        status_code: Optional[int] = None,
    ):
        """Initialize request error.

        Args:
            message: Error message
            url: URL of the request that failed
            story_type: Category being fetched, if any
            status_code: HTTP status code if a response was received
        """
        super().__init__(message, url, story_type)
        self.status_code = status_code


class DecodeFailed(HackerNewsApiError):
    """Response body did not match the expected JSON shape."""

    pass
