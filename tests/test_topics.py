"""
Tests for lexical topic extraction.
"""

import unittest

from context.settings import ContextSettings
from context.topics import STOP_WORDS, TopicExtractor, tokenize

from conversation_helpers import make_message


class TestTokenize(unittest.TestCase):
    """Normalisation shared by every lexical heuristic."""

    def test_strips_punctuation_and_lowercases(self):
        self.assertEqual(tokenize("Hello, World! It's"), ["hello", "world", "it", "s"])

    def test_splits_on_any_whitespace(self):
        self.assertEqual(tokenize("neural\nnetworks\tlayers"), ["neural", "networks", "layers"])

    def test_empty_text(self):
        self.assertEqual(tokenize(""), [])


class TestExtractTopics(unittest.TestCase):
    """Ranked, bounded topic sets."""

    def setUp(self):
        self.extractor = TopicExtractor()

    def test_drops_short_and_stop_words(self):
        messages = [make_message(0, "The neural networks about people")]
        self.assertEqual(self.extractor.extract_topics(messages), ["networks", "neural"])

    def test_ranks_by_frequency_then_alphabetically(self):
        messages = [
            make_message(0, "vision vision models"),
            make_message(1, "models vision zebra apple"),
        ]
        self.assertEqual(
            self.extractor.extract_topics(messages),
            ["vision", "models", "apple", "zebra"]
        )

    def test_caps_at_ten_topics(self):
        words = " ".join(f"topic{c}" for c in "abcdefghijkl")
        topics = self.extractor.extract_topics([make_message(0, words)])

        self.assertEqual(len(topics), 10)
        self.assertEqual(topics[0], "topica")
        self.assertEqual(topics[-1], "topicj")

    def test_excludes_overlong_words(self):
        topics = self.extractor.extract_topics([make_message(0, "supercalifragilistic words")])
        self.assertEqual(topics, ["words"])

    def test_limit_argument(self):
        messages = [make_message(0, "alpha alpha bravo charlie")]
        self.assertEqual(self.extractor.extract_topics(messages, limit=1), ["alpha"])
        self.assertEqual(self.extractor.extract_topics(messages, limit=0), [])

    def test_message_order_does_not_matter(self):
        messages = [
            make_message(0, "gradient descent converges"),
            make_message(1, "learning rates and gradient clipping"),
            make_message(2, "momentum helps descent"),
        ]
        self.assertEqual(
            self.extractor.extract_topics(messages),
            self.extractor.extract_topics(list(reversed(messages)))
        )

    def test_empty_input(self):
        self.assertEqual(self.extractor.extract_topics([]), [])
        self.assertEqual(self.extractor.extract_topics([make_message(0, "")]), [])

    def test_custom_settings(self):
        extractor = TopicExtractor(ContextSettings(max_topics=2))
        topics = extractor.extract_topics([make_message(0, "alpha bravo charlie delta")])
        self.assertEqual(topics, ["alpha", "bravo"])


class TestMeaningfulWords(unittest.TestCase):
    """Looser word sets used for transition detection."""

    def test_keeps_three_letter_words(self):
        words = TopicExtractor().meaningful_words("How do I implement neural networks?")
        self.assertEqual(words, {"how", "implement", "neural", "networks"})

    def test_excludes_stop_words(self):
        words = TopicExtractor().meaningful_words("what would they see")
        self.assertEqual(words, set())

    def test_stop_list_size(self):
        self.assertEqual(len(STOP_WORDS), 40)


if __name__ == '__main__':
    unittest.main()
