"""Domain value objects for the discussion board.

Value objects are immutable and defined by their values, not identity.
They encapsulate validation rules and business logic.
"""

from enum import Enum
from uuid import UUID

from pydantic import field_validator

from board.domain.value.common import RootValueObject, ValueObject
from board.domain.value.identifiers import ActorId

# Fixed-width, zero-padded segments make the string encoding of a path sort
# exactly like the tuple it encodes.
PATH_SEGMENT_WIDTH = 10
PATH_SEPARATOR = "."


class ContentStatus(str, Enum):
    """Moderation status shared by discussions and replies."""

    ACTIVE = "active"
    HIDDEN = "hidden"
    DELETED = "deleted"
    FLAGGED = "flagged"

    @property
    def is_visible(self) -> bool:
        """Whether content with this status is shown to regular readers."""
        return self in (ContentStatus.ACTIVE, ContentStatus.FLAGGED)


class ReactionType(str, Enum):
    """Kind of reaction an actor can leave on a discussion or reply."""

    LIKE = "like"
    LOVE = "love"
    LAUGH = "laugh"
    ANGRY = "angry"
    SAD = "sad"


class LikeTargetType(str, Enum):
    """Type of entity that can be liked."""

    DISCUSSION = "discussion"
    REPLY = "reply"


class DiscussionSortOrder(str, Enum):
    """Sort order for discussion listings."""

    RECENT = "recent"  # last_activity_at DESC
    POPULAR = "popular"  # weighted likes + replies DESC
    VIEWS = "views"  # views_count DESC


class DisplayName(RootValueObject[str]):
    """Author display name snapshot supplied by the identity provider."""

    @field_validator("root")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        """Validate display name is not blank and within length limits."""
        if not v.strip() or len(v) > 255:
            raise ValueError("Display name must be 1-255 characters")
        return v


class ReplyPath(RootValueObject[tuple[int, ...]]):
    """Materialized path of a reply inside its discussion thread.

    Each segment is the per-discussion sequence number of an ancestor, the
    last segment being the reply's own. Paths compare as integer tuples, so
    sorting replies by path yields depth-first order with siblings in
    creation order. ``encode()`` produces the persisted string form, which
    sorts identically under byte-wise collation.
    """

    @field_validator("root")
    @classmethod
    def validate_segments(cls, v: tuple[int, ...]) -> tuple[int, ...]:
        """Validate the path is non-empty and every segment is encodable."""
        if not v:
            raise ValueError("Reply path must have at least one segment")
        for segment in v:
            if segment < 1 or segment >= 10**PATH_SEGMENT_WIDTH:
                raise ValueError(f"Invalid reply path segment: {segment}")
        return v

    @classmethod
    def top_level(cls, seq: int) -> "ReplyPath":
        """Path of a reply posted directly on the discussion."""
        return cls((seq,))

    @classmethod
    def decode(cls, value: str) -> "ReplyPath":
        """Parse the persisted string form."""
        return cls(tuple(int(part) for part in value.split(PATH_SEPARATOR)))

    def child(self, seq: int) -> "ReplyPath":
        """Path of a direct child with the given sequence number."""
        return ReplyPath(self.root + (seq,))

    def encode(self) -> str:
        """Encode as a fixed-width, dot-joined string."""
        return PATH_SEPARATOR.join(
            f"{segment:0{PATH_SEGMENT_WIDTH}d}" for segment in self.root
        )

    def is_ancestor_of(self, other: "ReplyPath") -> bool:
        """Whether ``other`` lies strictly below this path."""
        return (
            len(other.root) > len(self.root)
            and other.root[: len(self.root)] == self.root
        )

    @property
    def level(self) -> int:
        """Nesting level implied by the path (0 for top-level)."""
        return len(self.root) - 1

    @property
    def seq(self) -> int:
        """The owning reply's own sequence number."""
        return self.root[-1]

    def __lt__(self, other: "ReplyPath") -> bool:
        return self.root < other.root

    def __str__(self) -> str:
        return self.encode()


class Actor(ValueObject):
    """Authenticated caller as supplied by the identity provider."""

    actor_id: ActorId
    display_name: DisplayName


class LikeState(ValueObject):
    """Result of a like/unlike operation on a single target."""

    target_type: LikeTargetType
    target_id: UUID
    reaction: ReactionType
    liked: bool
    likes_count: int
