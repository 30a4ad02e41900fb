"""
Context Keeper - Engine Settings
Explicit, immutable configuration shared by all context components
"""

from dataclasses import dataclass

import config


@dataclass(frozen=True)
class ContextSettings:
    """
    Budgets and thresholds for context selection and analysis.

    Components receive one of these at construction and never read
    module-level config afterwards, so tests can pin any window size.

    Raises:
        ValueError: On non-positive sizes or inconsistent thresholds
    """
    # Window selection
    max_context_window: int = 20
    recent_count: int = 12
    early_count: int = 6
    substantial_min_chars: int = 10
    important_min_chars: int = 150
    topic_scan_min_history: int = 25
    topic_scan_limit: int = 10
    topic_accept_limit: int = 3
    topic_min_score: int = 2
    topic_min_score_with_image: int = 1
    bridge_gap: int = 5
    bridge_topic_count: int = 2

    # Topic extraction
    topic_min_word_length: int = 5
    topic_max_word_length: int = 15
    max_topics: int = 10
    meaningful_min_word_length: int = 3

    # Transition detection
    transition_min_history: int = 3
    transition_window: int = 6
    continuation_threshold: float = 0.5
    related_threshold: float = 0.2

    # Query enhancement
    enhancer_min_query_length: int = 3
    enhancer_user_lookback: int = 3
    enhancer_snippet_words: int = 10
    include_image_context: bool = True

    # Summaries
    summary_min_messages: int = 6
    summary_topic_count: int = 3
    summary_phase_size: int = 8
    summary_recent_window: int = 10
    summary_recent_topic_count: int = 2
    summary_interactive_ratio: float = 0.5

    def __post_init__(self):
        positive = {
            "max_context_window": self.max_context_window,
            "recent_count": self.recent_count,
            "topic_scan_limit": self.topic_scan_limit,
            "max_topics": self.max_topics,
            "transition_window": self.transition_window,
            "summary_phase_size": self.summary_phase_size,
        }
        for name, value in positive.items():
            if value < 1:
                raise ValueError(f"{name} must be at least 1, got {value}")

        non_negative = {
            "early_count": self.early_count,
            "topic_accept_limit": self.topic_accept_limit,
            "bridge_gap": self.bridge_gap,
            "enhancer_snippet_words": self.enhancer_snippet_words,
        }
        for name, value in non_negative.items():
            if value < 0:
                raise ValueError(f"{name} cannot be negative, got {value}")

        if self.topic_min_word_length > self.topic_max_word_length:
            raise ValueError(
                f"topic_min_word_length ({self.topic_min_word_length}) exceeds "
                f"topic_max_word_length ({self.topic_max_word_length})"
            )

        if not 0.0 <= self.related_threshold <= self.continuation_threshold <= 1.0:
            raise ValueError(
                "Transition thresholds must satisfy "
                f"0 <= related ({self.related_threshold}) "
                f"<= continuation ({self.continuation_threshold}) <= 1"
            )

    @classmethod
    def from_config(cls) -> "ContextSettings":
        """Build settings from config.py (environment overrides applied)."""
        return cls(
            max_context_window=config.CONTEXT_MAX_WINDOW,
            recent_count=config.CONTEXT_RECENT_COUNT,
            early_count=config.CONTEXT_EARLY_COUNT,
            substantial_min_chars=config.CONTEXT_SUBSTANTIAL_MIN_CHARS,
            important_min_chars=config.CONTEXT_IMPORTANT_MIN_CHARS,
            topic_scan_min_history=config.CONTEXT_TOPIC_SCAN_MIN_HISTORY,
            topic_scan_limit=config.CONTEXT_TOPIC_SCAN_LIMIT,
            topic_accept_limit=config.CONTEXT_TOPIC_ACCEPT_LIMIT,
            topic_min_score=config.CONTEXT_TOPIC_MIN_SCORE,
            topic_min_score_with_image=config.CONTEXT_TOPIC_MIN_SCORE_WITH_IMAGE,
            bridge_gap=config.CONTEXT_BRIDGE_GAP,
            bridge_topic_count=config.CONTEXT_BRIDGE_TOPIC_COUNT,
            topic_min_word_length=config.TOPIC_MIN_WORD_LENGTH,
            topic_max_word_length=config.TOPIC_MAX_WORD_LENGTH,
            max_topics=config.TOPIC_MAX_COUNT,
            meaningful_min_word_length=config.MEANINGFUL_MIN_WORD_LENGTH,
            transition_min_history=config.TRANSITION_MIN_HISTORY,
            transition_window=config.TRANSITION_WINDOW,
            continuation_threshold=config.TRANSITION_CONTINUATION_THRESHOLD,
            related_threshold=config.TRANSITION_RELATED_THRESHOLD,
            enhancer_min_query_length=config.ENHANCER_MIN_QUERY_LENGTH,
            enhancer_user_lookback=config.ENHANCER_USER_LOOKBACK,
            enhancer_snippet_words=config.ENHANCER_SNIPPET_WORDS,
            include_image_context=config.ENHANCER_INCLUDE_IMAGE_CONTEXT,
            summary_min_messages=config.SUMMARY_MIN_MESSAGES,
            summary_topic_count=config.SUMMARY_TOPIC_COUNT,
            summary_phase_size=config.SUMMARY_PHASE_SIZE,
            summary_recent_window=config.SUMMARY_RECENT_WINDOW,
            summary_recent_topic_count=config.SUMMARY_RECENT_TOPIC_COUNT,
            summary_interactive_ratio=config.SUMMARY_INTERACTIVE_RATIO,
        )
