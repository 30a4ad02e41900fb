"""
Context Keeper - Conversation Models
Immutable message records, synthetic bridge entries, and classification enums
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Tuple, Union


BRIDGE_ID_PREFIX = "context-bridge-"


class Role(str, Enum):
    """Author of a message. Compares equal to its plain string value."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"


@dataclass(frozen=True)
class Message:
    """
    A single message supplied by the session store.

    Attributes:
        id: Unique within a conversation
        content: Message text (may be empty)
        timestamp: Non-decreasing within a conversation
        role: 'user', 'assistant', or 'system'
        images: Opaque image references, in order
    """
    id: str
    content: str
    timestamp: datetime
    role: Role
    images: Tuple[str, ...] = ()

    def __post_init__(self):
        # Accept plain strings and lists from the session store
        object.__setattr__(self, "role", Role(self.role))
        object.__setattr__(self, "images", tuple(self.images))

    @property
    def is_bridge(self) -> bool:
        return False

    @property
    def has_images(self) -> bool:
        return len(self.images) > 0


@dataclass(frozen=True)
class BridgeMessage:
    """
    Synthetic stand-in for a span of omitted history.

    Always assistant-authored and always carries BRIDGE_ID_PREFIX in its
    id, so consumers can tell it apart from genuine model output whether
    they inspect the type, `is_bridge`, or only the id.

    Attributes:
        id: BRIDGE_ID_PREFIX + epoch milliseconds of `timestamp`
        content: Natural-language placeholder for the skipped span
        timestamp: Taken from the message the bridge follows
        skipped_count: Messages omitted between early and recent tiers
        time_span: Human-readable elapsed time ('' when negligible)
        topics: Up to two topics drawn from the skipped messages
    """
    id: str
    content: str
    timestamp: datetime
    skipped_count: int = 0
    time_span: str = ""
    topics: Tuple[str, ...] = ()
    role: Role = field(default=Role.ASSISTANT, init=False)
    images: Tuple[str, ...] = field(default=(), init=False)

    @property
    def is_bridge(self) -> bool:
        return True

    @property
    def has_images(self) -> bool:
        return False


ContextEntry = Union[Message, BridgeMessage]
ContextWindow = List[ContextEntry]


def is_bridge_id(message_id: str) -> bool:
    """Check whether an id was minted for a bridge message."""
    return message_id.startswith(BRIDGE_ID_PREFIX)


def bridge_id_for(timestamp: datetime) -> str:
    """Build a bridge id from the bridge's timestamp."""
    return f"{BRIDGE_ID_PREFIX}{int(timestamp.timestamp() * 1000)}"


class TopicTransition(Enum):
    """How a new query relates to the recent conversation."""
    NEW_CONVERSATION = "newConversation"
    CONTINUATION = "continuation"
    RELATED = "related"
    NEW_TOPIC = "newTopic"

    @property
    def label(self) -> str:
        return _TRANSITION_LABELS[self]


_TRANSITION_LABELS = {
    TopicTransition.NEW_CONVERSATION: "New Conversation",
    TopicTransition.CONTINUATION: "Topic Continuation",
    TopicTransition.RELATED: "Related Topic",
    TopicTransition.NEW_TOPIC: "New Topic",
}


class ContextTier(Enum):
    """Selection stage that contributed an entry to a context window."""
    EARLY = "early"
    BRIDGE = "bridge"
    TOPIC = "topic"
    RECENT = "recent"
    VERBATIM = "verbatim"  # Short history forwarded unfiltered
