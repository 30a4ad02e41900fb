"""
Context Keeper - Topic Extraction
Cheap lexical topic detection over groups of messages

Topics are plain lowercase words, not embeddings. A word qualifies when it
is long enough to carry meaning and is not on the stop list. Ranking is a
stable sort on (occurrence count desc, word asc) so "the first N topics"
is the same on every run.
"""

import re
from collections import Counter
from typing import Iterable, List, Optional, Set

from context.models import ContextEntry
from context.settings import ContextSettings


# Common English function/filler words that never count as topics
STOP_WORDS = frozenset({
    "this", "that", "with", "have", "will", "from", "they", "been",
    "were", "said", "each", "which", "their", "time", "about", "would",
    "there", "could", "other", "after", "first", "well", "water", "very",
    "what", "know", "just", "year", "work", "think", "come", "good",
    "want", "right", "look", "make", "people", "take", "see", "way",
})

_NON_WORD = re.compile(r"[^\w\s]")


def tokenize(text: str) -> List[str]:
    """
    Lowercase text, replace punctuation with spaces, split on whitespace.

    Args:
        text: Raw message or query text

    Returns:
        Word tokens in their original order
    """
    if not text:
        return []
    return _NON_WORD.sub(" ", text.lower()).split()


class TopicExtractor:
    """Pulls a bounded, ranked topic set out of messages or raw text."""

    def __init__(self, settings: Optional[ContextSettings] = None):
        self.settings = settings or ContextSettings()

    def _is_topic_word(self, word: str) -> bool:
        return (
            self.settings.topic_min_word_length <= len(word) <= self.settings.topic_max_word_length
            and word not in STOP_WORDS
        )

    def count_topics(self, messages: Iterable[ContextEntry]) -> Counter:
        """Count topic-word occurrences across all messages."""
        counts: Counter = Counter()
        for message in messages:
            counts.update(w for w in tokenize(message.content) if self._is_topic_word(w))
        return counts

    def extract_topics(
        self,
        messages: Iterable[ContextEntry],
        limit: Optional[int] = None
    ) -> List[str]:
        """
        Extract the highest-ranked topics from a group of messages.

        Args:
            messages: Messages to scan (order does not affect the result)
            limit: Max topics to return (settings.max_topics if None)

        Returns:
            Topics ordered by frequency, ties broken alphabetically
        """
        cap = self.settings.max_topics if limit is None else min(limit, self.settings.max_topics)
        if cap <= 0:
            return []

        counts = self.count_topics(messages)
        ranked = sorted(counts.items(), key=lambda item: (-item[1], item[0]))
        return [word for word, _ in ranked[:cap]]

    def meaningful_words(self, text: str) -> Set[str]:
        """
        Words worth comparing between a query and the conversation.

        Looser than topic words: anything of three or more characters
        that is not a stop word.
        """
        return {
            word for word in tokenize(text)
            if len(word) >= self.settings.meaningful_min_word_length and word not in STOP_WORDS
        }
