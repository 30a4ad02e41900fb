"""
Context Keeper - Context Window Selection
Builds the bounded message window forwarded to the model each turn

STAGES (for histories longer than max_context_window):
    1. Recent          - tail slice, minus trivial user chatter
    2. Early-important - head slice, only messages that frame the task
    3. Topic-relevant  - middle messages that share topics with the recent tier
    4. Combine         - early → bridge → topic-relevant → recent, deduplicated

Shorter histories are forwarded verbatim. Once selection kicks in the
window never exceeds max_context_window: recent entries win, then the
oldest early entries, then the bridge, then topic-relevant entries.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Set

from context.models import (
    BridgeMessage,
    ContextTier,
    ContextWindow,
    Message,
    Role,
    bridge_id_for,
)
from context.settings import ContextSettings
from context.topics import TopicExtractor, tokenize
from core.logger import log_debug
from core.temporal import format_elapsed_span


# Verbs that mark a message as setting up the task at hand
TASK_KEYWORDS = (
    "analyze", "explain", "summarize", "compare", "evaluate",
    "recommend", "solve", "create", "design", "implement",
)

# Markdown-ish structure that suggests a substantive assistant answer
STRUCTURE_MARKERS = ("##", "**", "1.", "•", "- ", "```")


@dataclass
class ContextSelection:
    """
    A selected window plus the tier each entry came from.

    Attributes:
        window: Entries to forward, in order
        early: Early-important messages that made it into the window
        bridge: The synthesized bridge, if one was inserted
        topic_relevant: Middle messages recovered by topic overlap
        recent: Recent-tier messages in the window
        verbatim: True when the history was short enough to forward as-is
    """
    window: ContextWindow
    early: List[Message] = field(default_factory=list)
    bridge: Optional[BridgeMessage] = None
    topic_relevant: List[Message] = field(default_factory=list)
    recent: List[Message] = field(default_factory=list)
    verbatim: bool = False

    def tier_map(self) -> Dict[str, ContextTier]:
        """Map entry id to the tier that contributed it."""
        if self.verbatim:
            return {m.id: ContextTier.VERBATIM for m in self.window}

        tiers: Dict[str, ContextTier] = {}
        for m in self.early:
            tiers[m.id] = ContextTier.EARLY
        if self.bridge is not None:
            tiers[self.bridge.id] = ContextTier.BRIDGE
        for m in self.topic_relevant:
            tiers[m.id] = ContextTier.TOPIC
        for m in self.recent:
            tiers[m.id] = ContextTier.RECENT
        return tiers


class ContextSelector:
    """
    Selects which prior messages to send upstream.

    Stateless: holds only its settings, so one instance can serve any
    number of conversations and threads.
    """

    def __init__(
        self,
        settings: Optional[ContextSettings] = None,
        extractor: Optional[TopicExtractor] = None
    ):
        self.settings = settings or ContextSettings()
        self.extractor = extractor or TopicExtractor(self.settings)

    # =========================================================================
    # PUBLIC API
    # =========================================================================

    def select_context(self, history: Sequence[Message]) -> ContextWindow:
        """
        Assemble the context window for the next model call.

        Args:
            history: Full conversation, oldest first

        Returns:
            The history itself (as a new list) when it fits the window,
            otherwise the tiered selection
        """
        return self.select(history).window

    def select(self, history: Sequence[Message]) -> ContextSelection:
        """Like select_context(), but keeps the per-tier breakdown."""
        history = list(history)
        total = len(history)
        s = self.settings

        if total <= s.max_context_window:
            return ContextSelection(window=history, verbatim=True)

        recent_start = max(total - s.recent_count, 0)
        early_end = min(s.early_count, recent_start)

        recent = [m for m in history[recent_start:] if self.is_substantial(m)]
        early = [m for m in history[:early_end] if self.is_important(m)]
        topic_relevant = self._find_topic_relevant(history, recent, early_end, recent_start)

        selection = self._combine(history, recent, early, topic_relevant)

        log_debug(
            f"Context window: {len(selection.window)}/{total} messages "
            f"(early {len(selection.early)}, bridge {int(selection.bridge is not None)}, "
            f"topic {len(selection.topic_relevant)}, recent {len(selection.recent)})",
            prefix="🪟"
        )
        return selection

    def is_substantial(self, message: Message) -> bool:
        """Recent-tier filter: drop short, image-less user messages."""
        return (
            message.has_images
            or len(message.content.strip()) > self.settings.substantial_min_chars
            or message.role == Role.ASSISTANT
        )

    def is_important(self, message: Message) -> bool:
        """Early-tier filter: keep messages that establish the task."""
        content = message.content

        if message.has_images:
            return True

        if len(content) > self.settings.important_min_chars:
            return True

        if "?" in content and message.role == Role.USER:
            return True

        if message.role == Role.ASSISTANT and has_structured_content(content):
            return True

        lowered = content.lower()
        return any(keyword in lowered for keyword in TASK_KEYWORDS)

    # =========================================================================
    # STAGES
    # =========================================================================

    def _find_topic_relevant(
        self,
        history: List[Message],
        recent: List[Message],
        early_end: int,
        recent_start: int
    ) -> List[Message]:
        """Recover middle messages that revisit what the recent tier is about."""
        s = self.settings
        if len(history) < s.topic_scan_min_history or recent_start <= early_end:
            return []

        topics = self.extractor.extract_topics(recent)
        if not topics:
            return []

        middle = history[early_end:recent_start]
        candidates = middle[-s.topic_scan_limit:]

        accepted: List[Message] = []
        for message in reversed(candidates):
            if len(accepted) >= s.topic_accept_limit:
                break
            score = self.relevance_score(message, topics)
            if score >= s.topic_min_score or (
                message.has_images and score >= s.topic_min_score_with_image
            ):
                accepted.append(message)

        accepted.reverse()
        return accepted

    def relevance_score(self, message: Message, topics: Sequence[str]) -> int:
        """3 points per topic matched as a whole word, 1 per substring-only hit."""
        content = message.content.lower()
        words = set(tokenize(content))

        score = 0
        for topic in topics:
            if topic in content:
                score += 3 if topic in words else 1
        return score

    def _combine(
        self,
        history: List[Message],
        recent: List[Message],
        early: List[Message],
        topic_relevant: List[Message]
    ) -> ContextSelection:
        s = self.settings
        budget = s.max_context_window

        # Gap is measured from where the filtered recent tier starts
        gap_exceeded = len(history) - len(recent) > s.early_count + s.bridge_gap

        # Recent always wins the budget; early keeps its oldest entries
        if len(recent) > budget:
            recent = recent[-budget:]
        head_budget = budget - len(recent)
        early = early[:max(head_budget, 0)]

        window: ContextWindow = []
        used_ids: Set[str] = set()
        kept_early: List[Message] = []
        kept_topic: List[Message] = []
        kept_recent: List[Message] = []

        for message in early:
            if message.id not in used_ids:
                window.append(message)
                used_ids.add(message.id)
                kept_early.append(message)

        bridge = None
        wants_bridge = bool(kept_early) and (
            bool(topic_relevant) or gap_exceeded
        )
        if wants_bridge and len(window) < head_budget:
            bridge = self._create_bridge(history, kept_early, recent)
            window.append(bridge)

        for message in topic_relevant:
            if message.id not in used_ids and len(window) < head_budget:
                window.append(message)
                used_ids.add(message.id)
                kept_topic.append(message)

        for message in recent:
            if message.id not in used_ids:
                window.append(message)
                used_ids.add(message.id)
                kept_recent.append(message)

        return ContextSelection(
            window=window,
            early=kept_early,
            bridge=bridge,
            topic_relevant=kept_topic,
            recent=kept_recent,
        )

    # =========================================================================
    # BRIDGE
    # =========================================================================

    def _create_bridge(
        self,
        history: List[Message],
        early: List[Message],
        recent: List[Message]
    ) -> BridgeMessage:
        """
        Summarize the span between the early and recent tiers.

        The bridge takes its timestamp (and therefore its id) from the
        early message it follows, so the same history always produces
        the same bridge.
        """
        anchor = early[-1]
        follower = recent[0] if recent else history[-1]

        skipped_count = len(history) - len(early) - len(recent)
        time_span = format_elapsed_span(anchor.timestamp, follower.timestamp)

        kept_ids = {m.id for m in early} | {m.id for m in recent}
        skipped = [m for m in history if m.id not in kept_ids]
        topics = self.extractor.extract_topics(skipped, limit=self.settings.bridge_topic_count)

        content = "[... conversation continued"
        if skipped_count > 0:
            noun = "message" if skipped_count == 1 else "messages"
            content += f" ({skipped_count} {noun})"
        if time_span:
            content += f" over {time_span}"
        if topics:
            content += f" discussing {', '.join(topics)}"
        content += " ...]"

        return BridgeMessage(
            id=bridge_id_for(anchor.timestamp),
            content=content,
            timestamp=anchor.timestamp,
            skipped_count=skipped_count,
            time_span=time_span,
            topics=tuple(topics),
        )


def has_structured_content(content: str) -> bool:
    """Check for headers, bold text, lists, or code fences."""
    return any(marker in content for marker in STRUCTURE_MARKERS)
