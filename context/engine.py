"""
Context Keeper - Context Engine
Per-turn orchestration of selection, transition detection, and enhancement
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from context.enhancer import QueryEnhancer
from context.models import ContextWindow, Message, TopicTransition
from context.selector import ContextSelection, ContextSelector
from context.settings import ContextSettings
from context.summary import SummaryGenerator
from context.topics import TopicExtractor
from context.transitions import TransitionClassifier


@dataclass
class TurnContext:
    """Everything the request builder needs for one user turn."""
    query: str
    enhanced_query: str
    transition: TopicTransition
    selection: ContextSelection

    @property
    def window(self) -> ContextWindow:
        return self.selection.window

    @property
    def was_enhanced(self) -> bool:
        return self.enhanced_query != self.query

    def to_api_messages(self) -> List[Dict[str, Any]]:
        """Window in outbound request shape."""
        return to_api_messages(self.window)


class ContextEngine:
    """
    Wires the context components around one shared settings object.

    Each turn: classify the query against the full history, select the
    window to send upstream, then rewrite the query against that window.
    """

    def __init__(self, settings: Optional[ContextSettings] = None):
        self.settings = settings or ContextSettings()
        self.extractor = TopicExtractor(self.settings)
        self.selector = ContextSelector(self.settings, self.extractor)
        self.classifier = TransitionClassifier(self.settings, self.extractor)
        self.enhancer = QueryEnhancer(self.settings, self.extractor)
        self.summarizer = SummaryGenerator(self.settings, self.extractor)

    def prepare_turn(self, history: Sequence[Message], query: str) -> TurnContext:
        """
        Run the full per-turn flow.

        Args:
            history: Conversation before the new query, oldest first
            query: The user's incoming message

        Returns:
            TurnContext with the window, transition, and enhanced query
        """
        transition = self.classifier.classify(history, query)
        selection = self.selector.select(history)
        enhanced = self.enhancer.enhance(query, selection.window)

        return TurnContext(
            query=query,
            enhanced_query=enhanced,
            transition=transition,
            selection=selection,
        )

    def select_context(self, history: Sequence[Message]) -> ContextWindow:
        return self.selector.select_context(history)

    def summarize(self, history: Sequence[Message]) -> str:
        return self.summarizer.summarize(history)


def to_api_messages(window: ContextWindow) -> List[Dict[str, Any]]:
    """
    Format a context window for the outbound request builder.

    Bridge entries are flagged as synthetic so providers and loggers
    never mistake them for real model output.
    """
    messages = []
    for entry in window:
        payload: Dict[str, Any] = {
            "role": entry.role.value,
            "content": entry.content,
            "images": list(entry.images),
            "timestamp": entry.timestamp.isoformat(),
        }
        if entry.is_bridge:
            payload["synthetic"] = True
        messages.append(payload)
    return messages


# Global instance
_context_engine: Optional[ContextEngine] = None


def get_context_engine() -> ContextEngine:
    """Get the global context engine instance (settings from config)."""
    global _context_engine
    if _context_engine is None:
        _context_engine = ContextEngine(ContextSettings.from_config())
    return _context_engine


def init_context_engine(settings: Optional[ContextSettings] = None) -> ContextEngine:
    """Initialize the global context engine."""
    global _context_engine
    _context_engine = ContextEngine(settings or ContextSettings.from_config())
    return _context_engine
