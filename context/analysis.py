"""
Context Keeper - Context Analysis
Debug view of a single turn: what was kept, why, and how the query changed
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional, Sequence

from context.engine import ContextEngine, get_context_engine
from context.models import ContextTier, Message, Role, TopicTransition


# Display label per tier
CATEGORY_LABELS: Dict[ContextTier, str] = {
    ContextTier.BRIDGE: "Bridge",
    ContextTier.RECENT: "Recent",
    ContextTier.EARLY: "Early",
    ContextTier.TOPIC: "Topic",
    ContextTier.VERBATIM: "History",
}

ROLE_LABELS: Dict[Role, str] = {
    Role.USER: "User",
    Role.ASSISTANT: "AI",
    Role.SYSTEM: "System",
}


@dataclass
class AnalyzedEntry:
    """One row of the context window breakdown."""
    position: int
    source_index: Optional[int]  # Index in the full history; None for bridges
    category: str
    role_label: str
    has_images: bool
    preview: str
    timestamp: datetime


@dataclass
class ContextAnalysis:
    """Snapshot of how the engine handled one turn."""
    history_size: int
    window_size: int
    transition: TopicTransition
    original_query: str
    enhanced_query: str
    summary: str
    tier_counts: Dict[str, int] = field(default_factory=dict)
    entries: List[AnalyzedEntry] = field(default_factory=list)

    @property
    def transition_label(self) -> str:
        return self.transition.label

    @property
    def was_enhanced(self) -> bool:
        return self.enhanced_query != self.original_query

    @property
    def bridge_count(self) -> int:
        return self.tier_counts.get(CATEGORY_LABELS[ContextTier.BRIDGE], 0)


def truncate_preview(content: str, limit: int = 80) -> str:
    """Shorten content for one-line display."""
    if len(content) <= limit:
        return content
    return f"{content[:limit]}..."


def analyze_turn(
    history: Sequence[Message],
    query: str,
    engine: Optional[ContextEngine] = None,
    preview_chars: int = 80
) -> ContextAnalysis:
    """
    Run a turn through the engine and describe the result.

    Args:
        history: Conversation before the query, oldest first
        query: The incoming user query
        engine: Engine to use (global instance if None)
        preview_chars: Max characters of content per entry preview

    Returns:
        ContextAnalysis suitable for rendering
    """
    engine = engine or get_context_engine()
    turn = engine.prepare_turn(history, query)
    tiers = turn.selection.tier_map()

    index_by_id = {}
    for i, message in enumerate(history):
        index_by_id.setdefault(message.id, i)

    entries: List[AnalyzedEntry] = []
    counts: Dict[str, int] = {label: 0 for label in CATEGORY_LABELS.values()}

    for position, entry in enumerate(turn.window):
        category = CATEGORY_LABELS[tiers.get(entry.id, ContextTier.VERBATIM)]
        counts[category] += 1
        entries.append(AnalyzedEntry(
            position=position,
            source_index=None if entry.is_bridge else index_by_id.get(entry.id),
            category=category,
            role_label=ROLE_LABELS[entry.role],
            has_images=entry.has_images,
            preview=truncate_preview(entry.content, preview_chars),
            timestamp=entry.timestamp,
        ))

    return ContextAnalysis(
        history_size=len(history),
        window_size=len(turn.window),
        transition=turn.transition,
        original_query=query,
        enhanced_query=turn.enhanced_query,
        summary=engine.summarize(history),
        tier_counts={label: n for label, n in counts.items() if n > 0},
        entries=entries,
    )
