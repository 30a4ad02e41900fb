"""
Context Keeper - Topic Transition Detection
Classifies a new query against the tail of the conversation
"""

from typing import Optional, Sequence

from context.models import ContextEntry, TopicTransition
from context.settings import ContextSettings
from context.topics import TopicExtractor
from core.logger import log_debug


class TransitionClassifier:
    """
    Decides whether a query continues, relates to, or departs from the
    recent discussion, using the overlap ratio of meaningful words.
    """

    def __init__(
        self,
        settings: Optional[ContextSettings] = None,
        extractor: Optional[TopicExtractor] = None
    ):
        self.settings = settings or ContextSettings()
        self.extractor = extractor or TopicExtractor(self.settings)

    def overlap_ratio(self, history: Sequence[ContextEntry], new_query: str) -> Optional[float]:
        """
        Fraction of the query's meaningful words found in recent messages.

        Returns:
            Ratio in [0, 1], or None when the query has no meaningful words
        """
        query_words = self.extractor.meaningful_words(new_query)
        if not query_words:
            return None

        recent = history[-self.settings.transition_window:]
        conversation_text = " ".join(m.content.lower() for m in recent)
        conversation_words = self.extractor.meaningful_words(conversation_text)

        return len(conversation_words & query_words) / len(query_words)

    def classify(self, history: Sequence[ContextEntry], new_query: str) -> TopicTransition:
        """
        Classify a new query relative to the ongoing conversation.

        Args:
            history: Full conversation so far, oldest first
            new_query: The user's incoming message

        Returns:
            The detected TopicTransition
        """
        if len(history) < self.settings.transition_min_history:
            return TopicTransition.NEW_CONVERSATION

        ratio = self.overlap_ratio(history, new_query)
        if ratio is None:
            # Nothing in the query to disagree with the conversation
            return TopicTransition.CONTINUATION

        if ratio >= self.settings.continuation_threshold:
            transition = TopicTransition.CONTINUATION
        elif ratio >= self.settings.related_threshold:
            transition = TopicTransition.RELATED
        else:
            transition = TopicTransition.NEW_TOPIC

        log_debug(f"Topic transition: {transition.label} (overlap {ratio:.2f})", prefix="🔀")
        return transition
