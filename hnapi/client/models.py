"""Data models for Hacker News responses."""

from dataclasses import dataclass, field
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, TypeAdapter

from hnapi.client.endpoints import COLLECT_ORDER, StoryType
from hnapi.client.errors import HackerNewsApiError

# Decoder for list endpoints
StoryIdList = TypeAdapter(list[NonNegativeInt])


class Story(BaseModel):
    """A single item as returned by the item endpoint.

    Only the structure is checked; unknown fields are ignored.

    Attributes:
        by: Author handle
        descendants: Total comment count, absent for jobs
        id: Item ID
        kids: IDs of direct child comments
        score: Story score
        title: Story title
        story_type: Item type tag ("story", "job", ...), ``type`` on the wire
        url: External URL, absent for text posts
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    by: str
    descendants: Optional[NonNegativeInt] = None
    id: NonNegativeInt
    kids: Optional[list[NonNegativeInt]] = None
    score: NonNegativeInt
    title: str
    story_type: str = Field(alias="type")
    url: Optional[str] = None


@dataclass(frozen=True)
class HackerNewsResponse:
    """Story ID lists for every feed category from one aggregation run.

    A list is None when its category was not fetched. Categories whose fetch
    failed are recorded in ``errors``.
    """

    top: Optional[list[int]] = None
    new: Optional[list[int]] = None
    best: Optional[list[int]] = None
    ask: Optional[list[int]] = None
    show: Optional[list[int]] = None
    job: Optional[list[int]] = None
    errors: dict[StoryType, HackerNewsApiError] = field(default_factory=dict)

    def ids_for(self, story_type: StoryType) -> Optional[list[int]]:
        """Return the ID list for a category, or None if absent."""
        if not story_type.is_list:
            raise ValueError("Item is not a list category")
        return getattr(self, story_type.name.lower())

    def take(self, story_type: StoryType, amount: int) -> list[int]:
        """Return the first ``amount`` IDs of a category.

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            raise ValueError(f"Amount must be non-negative, got {amount}")
        ids = self.ids_for(story_type)
        if ids is None:
            return []
        return ids[:amount]

    @property
    def ok(self) -> bool:
        return not self.errors

    def raise_for_errors(self) -> None:
        """Raise the error of the first failed category in collection order."""
        for story_type in COLLECT_ORDER:
            if story_type in self.errors:
                raise self.errors[story_type]
