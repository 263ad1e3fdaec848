"""Endpoint resolution for the Hacker News Firebase API.

Pure URL construction, no network access.
"""

from enum import Enum
from typing import Optional

from hnapi.utils.config import DEFAULT_BASE_URL

BASE_URL = DEFAULT_BASE_URL


class StoryType(str, Enum):
    """Hacker News feed category.

    The value of each member is its path segment under the API base.
    ITEM addresses a single story by ID rather than a list.
    """

    TOP = "topstories"
    NEW = "newstories"
    BEST = "beststories"
    ASK = "askstories"
    SHOW = "showstories"
    JOB = "jobstories"
    ITEM = "item"

    @property
    def display_name(self) -> str:
        """Human readable name, e.g. "Top"."""
        return self.name.capitalize()

    @property
    def is_list(self) -> bool:
        return self is not StoryType.ITEM


# Order in which the aggregator fetches category lists
COLLECT_ORDER = (
    StoryType.TOP,
    StoryType.NEW,
    StoryType.ASK,
    StoryType.JOB,
    StoryType.BEST,
    StoryType.SHOW,
)

# Order in which stories are printed for all categories
PRINT_ORDER = (
    StoryType.SHOW,
    StoryType.JOB,
    StoryType.BEST,
    StoryType.TOP,
    StoryType.NEW,
    StoryType.ASK,
)


def resolve_url(
    story_type: StoryType,
    item_id: Optional[int] = None,
    base_url: str = BASE_URL,
) -> str:
    """Build the absolute URL for a category or a single item.

    Args:
        story_type: Category to resolve
        item_id: Item ID, required for StoryType.ITEM and rejected otherwise
        base_url: API base URL

    Returns:
        ``{base}/{segment}.json`` for list categories,
        ``{base}/item/{id}.json`` for items

    Raises:
        ValueError: If the item ID is missing, negative, or given for a list
    """
    base = base_url.rstrip("/")

    if story_type is StoryType.ITEM:
        if item_id is None:
            raise ValueError("Item lookup requires an item_id")
        if item_id < 0:
            raise ValueError(f"item_id must be non-negative, got {item_id}")
        return f"{base}/{story_type.value}/{item_id}.json"

    if item_id is not None:
        raise ValueError(f"item_id is not accepted for {story_type.display_name} stories")
    return f"{base}/{story_type.value}.json"
