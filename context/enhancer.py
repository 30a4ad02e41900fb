"""
Context Keeper - Query Enhancement
Rewrites vague or follow-up queries so they stand on their own
"""

from typing import Optional, Sequence

from context.models import ContextEntry, Role
from context.settings import ContextSettings
from context.topics import TopicExtractor, tokenize
from core.logger import log_debug


# Words that point back at something said earlier
CONTEXTUAL_REFERENCES = frozenset({
    "this", "that", "it", "they", "them", "these", "those", "above",
    "mentioned", "previous", "earlier", "before", "same", "similar",
    "different", "compare", "contrast",
})

# Phrases that continue the previous answer
FOLLOW_UP_PATTERNS = (
    "what about", "how about", "can you also", "explain more",
    "tell me more", "continue", "also", "additionally", "furthermore",
    "what if", "but what", "and what",
)


class QueryEnhancer:
    """
    Makes implicit references in a query explicit using the context window.

    Two rewrites are attempted, in order:
    - Contextual references ("how does it work?") are anchored to the
      user's most recent message in the window.
    - Follow-ups ("what about X?") are anchored to the main topic of the
      last genuine assistant reply. Bridge entries never count as replies.
    """

    def __init__(
        self,
        settings: Optional[ContextSettings] = None,
        extractor: Optional[TopicExtractor] = None
    ):
        self.settings = settings or ContextSettings()
        self.extractor = extractor or TopicExtractor(self.settings)

    def enhance(
        self,
        query: str,
        context_window: Sequence[ContextEntry],
        include_image_context: Optional[bool] = None
    ) -> str:
        """
        Rewrite a query using the selected context, when it needs it.

        Args:
            query: The user's raw query
            context_window: Window produced by ContextSelector
            include_image_context: Mention images carried by the referenced
                message (settings.include_image_context if None)

        Returns:
            The enhanced query, or the original when no rewrite applies
        """
        if not context_window or len(query.strip()) < self.settings.enhancer_min_query_length:
            return query

        if include_image_context is None:
            include_image_context = self.settings.include_image_context

        if has_contextual_reference(query):
            enhanced = self._add_explicit_context(query, context_window, include_image_context)
        elif is_follow_up(query):
            enhanced = self._enhance_follow_up(query, context_window)
        else:
            return query

        if enhanced != query:
            log_debug(f"Enhanced query: {enhanced}", prefix="✏️")
        return enhanced

    def _add_explicit_context(
        self,
        query: str,
        context_window: Sequence[ContextEntry],
        include_image_context: bool
    ) -> str:
        recent_user = [
            m for m in reversed(context_window)
            if m.role == Role.USER and not m.is_bridge
        ][:self.settings.enhancer_user_lookback]

        if not recent_user:
            return query

        last_user = recent_user[0]
        snippet = " ".join(last_user.content.split()[:self.settings.enhancer_snippet_words])

        enhanced = f'Referring to our previous discussion about "{snippet}", {query}'

        if include_image_context and last_user.has_images:
            noun = "images" if len(last_user.images) > 1 else "image"
            enhanced += f" (regarding the uploaded {noun})"

        return enhanced

    def _enhance_follow_up(self, query: str, context_window: Sequence[ContextEntry]) -> str:
        last_reply = next(
            (m for m in reversed(context_window) if m.role == Role.ASSISTANT and not m.is_bridge),
            None
        )
        if last_reply is None:
            return query

        topics = self.extractor.extract_topics([last_reply], limit=1)
        if not topics:
            return query

        return f"Building on your explanation about {topics[0]}: {query}"


def has_contextual_reference(query: str) -> bool:
    """Check if the query refers back to earlier material."""
    return any(word in CONTEXTUAL_REFERENCES for word in tokenize(query))


def is_follow_up(query: str) -> bool:
    """Check if the query continues the previous answer."""
    lowered = query.lower()
    return any(pattern in lowered for pattern in FOLLOW_UP_PATTERNS)
