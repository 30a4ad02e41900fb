"""
Context Keeper - Conversation Summaries
One-paragraph digest of a long conversation for debug and analysis views
"""

from typing import List, Optional, Sequence

from context.models import ContextEntry, Role
from context.settings import ContextSettings
from context.topics import TopicExtractor


class SummaryGenerator:
    """Composes a readable summary from lexical topic statistics."""

    def __init__(
        self,
        settings: Optional[ContextSettings] = None,
        extractor: Optional[TopicExtractor] = None
    ):
        self.settings = settings or ContextSettings()
        self.extractor = extractor or TopicExtractor(self.settings)

    def summarize(self, history: Sequence[ContextEntry]) -> str:
        """
        Summarize a conversation.

        Covers scope (messages, images), main topics, how the topic moved
        over time, whether the user asked a lot of questions, and what
        the last few messages focused on.

        Args:
            history: Full conversation, oldest first

        Returns:
            Summary paragraph, or '' for conversations too short to bother
        """
        s = self.settings
        if len(history) < s.summary_min_messages:
            return ""

        user_messages = [m for m in history if m.role == Role.USER]
        image_count = sum(1 for m in history if m.has_images)
        question_count = sum(1 for m in user_messages if "?" in m.content)

        topics = self.extractor.extract_topics(history, limit=s.summary_topic_count)
        phases = self.identify_phases(history)

        scope = f"This {len(history)}-message conversation"
        clauses = []
        if image_count > 0:
            noun = "images" if image_count > 1 else "image"
            clauses.append(f"included analysis of {image_count} {noun}")
        if topics:
            clauses.append(f"explored topics including {', '.join(topics)}")

        if clauses:
            sentences = [f"{scope} {' and '.join(clauses)}."]
        else:
            sentences = [f"{scope} had no dominant topics."]

        if len(phases) > 1:
            sentences.append(
                f"The discussion evolved through {len(phases)} main phases: {' → '.join(phases)}."
            )

        if user_messages and question_count > len(user_messages) * s.summary_interactive_ratio:
            sentences.append("The conversation was highly interactive with many clarifying questions.")

        recent = list(reversed(history[-s.summary_recent_window:]))
        recent_topics = self.extractor.extract_topics(recent, limit=s.summary_recent_topic_count)
        if recent_topics:
            sentences.append(f"Recent focus: {', '.join(recent_topics)}.")

        return "Conversation Summary: " + " ".join(sentences)

    def identify_phases(self, history: Sequence[ContextEntry]) -> List[str]:
        """
        Trace topic shifts by taking the lead topic of each fixed-size chunk.

        Adjacent chunks with the same lead topic collapse into one phase.
        """
        size = self.settings.summary_phase_size
        phases: List[str] = []

        for start in range(0, len(history), size):
            lead = self.extractor.extract_topics(history[start:start + size], limit=1)
            if lead and (not phases or phases[-1] != lead[0]):
                phases.append(lead[0])

        return phases
