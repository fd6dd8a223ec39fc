"""Unified search result model shared by adapters, aggregator and API."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any, Literal


class ResultType(str, Enum):
    """Entity category a search result belongs to."""

    MENTOR = "mentor"
    MATCH = "match"
    LISTING = "listing"
    # Declared for the results page tabs; no adapter produces events yet.
    EVENT = "event"


@dataclass(frozen=True)
class MentorMetadata:
    """Mentor-specific fields used for badges and click-through."""

    user_id: str
    price: float | None = None
    city: str | None = None
    is_verified: bool = False
    rating: float | None = None
    kind: Literal["mentor"] = "mentor"


@dataclass(frozen=True)
class MatchMetadata:
    """Match profile fields used for click-through."""

    user_id: str
    city: str | None = None
    seeking: str | None = None
    kind: Literal["match"] = "match"


@dataclass(frozen=True)
class ListingMetadata:
    """Marketplace listing fields shown on the result card."""

    price: float | None = None
    city: str | None = None
    category: str | None = None
    kind: Literal["listing"] = "listing"


ResultMetadata = MentorMetadata | MatchMetadata | ListingMetadata

_METADATA_TYPES: dict[ResultType, type] = {
    ResultType.MENTOR: MentorMetadata,
    ResultType.MATCH: MatchMetadata,
    ResultType.LISTING: ListingMetadata,
}


@dataclass(frozen=True)
class SearchResult:
    """One entity matched by a search.

    Attributes:
        id: Identifier, unique within its type
        type: Entity category
        title: Display title
        description: Display description
        relevance: Ordering score for this search only (higher is better)
        image: Optional image URL
        tags: Up to three short tags
        metadata: Type-specific metadata variant
    """

    id: str
    type: ResultType
    title: str
    description: str
    relevance: float
    metadata: ResultMetadata
    image: str | None = None
    tags: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if self.relevance < 0:
            raise ValueError(f"relevance must be non-negative, got {self.relevance}")
        expected = _METADATA_TYPES.get(self.type)
        if expected is None or not isinstance(self.metadata, expected):
            raise TypeError(
                f"{type(self.metadata).__name__} is not valid metadata "
                f"for a {self.type.value} result"
            )

    @property
    def key(self) -> tuple[str, str]:
        """Identity of the result within one aggregated list."""
        return (self.type.value, self.id)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "id": self.id,
            "type": self.type.value,
            "title": self.title,
            "description": self.description,
            "image": self.image,
            "tags": list(self.tags),
            "relevance": self.relevance,
            "metadata": asdict(self.metadata),
        }


@dataclass(frozen=True)
class SearchStats:
    """Per-category counts for one search."""

    total: int = 0
    mentors: int = 0
    matches: int = 0
    listings: int = 0
    events: int = 0

    def count_for(self, tab: str) -> int:
        """Return the count shown next to a results tab."""
        counts = {
            "all": self.total,
            ResultType.MENTOR.value: self.mentors,
            ResultType.MATCH.value: self.matches,
            ResultType.LISTING.value: self.listings,
            ResultType.EVENT.value: self.events,
        }
        return counts[tab]


@dataclass(frozen=True)
class EmptyQuery:
    """Outcome for a blank query; nothing was fetched."""

    query: str = ""
    results: tuple[SearchResult, ...] = ()
    stats: SearchStats = field(default_factory=SearchStats)


@dataclass(frozen=True)
class SearchOk:
    """Outcome where every source answered."""

    query: str
    results: tuple[SearchResult, ...]
    stats: SearchStats


@dataclass(frozen=True)
class PartialFailure:
    """Outcome where one or more sources failed and count as zero results."""

    query: str
    results: tuple[SearchResult, ...]
    stats: SearchStats
    failed_sources: tuple[ResultType, ...]


SearchOutcome = EmptyQuery | SearchOk | PartialFailure
