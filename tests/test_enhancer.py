"""
Tests for query enhancement.
"""

import unittest

from context.enhancer import QueryEnhancer, has_contextual_reference, is_follow_up
from context.models import BridgeMessage, Role
from context.settings import ContextSettings
from interface.demo import build_demo_conversation

from conversation_helpers import BASE_TIME, make_message


class TestPassThrough(unittest.TestCase):
    """Queries that are returned untouched."""

    def setUp(self):
        self.enhancer = QueryEnhancer()
        self.demo = build_demo_conversation()

    def test_empty_context(self):
        for query in ("What is machine learning?", "How does it work?", "", "tell me more"):
            self.assertEqual(self.enhancer.enhance(query, []), query)

    def test_too_short_query(self):
        self.assertEqual(self.enhancer.enhance("it", self.demo), "it")
        self.assertEqual(self.enhancer.enhance("  ok  ", self.demo), "  ok  ")

    def test_specific_query_unchanged(self):
        query = "What is the YOLO algorithm used for object detection?"
        self.assertEqual(self.enhancer.enhance(query, self.demo[:3]), query)

    def test_reference_without_user_message(self):
        window = [make_message(0, "An answer about gradients", Role.ASSISTANT)]
        self.assertEqual(self.enhancer.enhance("explain that", window), "explain that")


class TestContextualReferences(unittest.TestCase):
    """Vague references get anchored to the user's last message."""

    def setUp(self):
        self.enhancer = QueryEnhancer()
        self.demo = build_demo_conversation()

    def test_pronoun_anchored_to_last_user_message(self):
        enhanced = self.enhancer.enhance("How does it work?", self.demo[:4])

        self.assertEqual(
            enhanced,
            'Referring to our previous discussion about '
            '"I want to understand neural networks and deep learning", How does it work?'
        )

    def test_ambiguous_query_gains_topic(self):
        query = "Tell me more about that"
        window = [m for m in self.demo if "computer vision" in m.content]

        enhanced = self.enhancer.enhance(query, window)

        self.assertGreater(len(enhanced), len(query))
        self.assertIn("vision", enhanced.lower())

    def test_snippet_limited_to_ten_words(self):
        window = [make_message(0, "one two three four five six seven eight nine ten eleven twelve")]
        enhanced = self.enhancer.enhance("what about this", window)

        self.assertIn('"one two three four five six seven eight nine ten"', enhanced)
        self.assertNotIn("eleven", enhanced)

    def test_image_reference(self):
        several = [make_message(0, "Look at this chart", images=["a.png", "b.png"])]
        single = [make_message(1, "One picture", images=["a.png"])]

        self.assertTrue(
            self.enhancer.enhance("what is this?", several).endswith("(regarding the uploaded images)")
        )
        self.assertTrue(
            self.enhancer.enhance("what is this?", single).endswith("(regarding the uploaded image)")
        )

    def test_image_reference_can_be_disabled(self):
        window = [make_message(0, "Look at this chart", images=["a.png"])]

        enhanced = self.enhancer.enhance("what is this?", window, include_image_context=False)
        self.assertNotIn("uploaded", enhanced)

        quiet = QueryEnhancer(ContextSettings(include_image_context=False))
        self.assertNotIn("uploaded", quiet.enhance("what is this?", window))


class TestFollowUps(unittest.TestCase):
    """Follow-ups get anchored to the last assistant reply's main topic."""

    def setUp(self):
        self.enhancer = QueryEnhancer()

    def test_follow_up_uses_last_assistant_topic(self):
        enhanced = self.enhancer.enhance("What about YOLO algorithm?", build_demo_conversation())

        self.assertEqual(
            enhanced,
            "Building on your explanation about classification: What about YOLO algorithm?"
        )

    def test_bridge_is_not_treated_as_a_reply(self):
        window = [
            make_message(0, "Photosynthesis photosynthesis needs sunlight", Role.ASSISTANT),
            BridgeMessage(
                id="context-bridge-1",
                content="[... conversation continued discussing kubernetes ...]",
                timestamp=BASE_TIME,
            ),
        ]

        enhanced = self.enhancer.enhance("what about roots", window)

        self.assertEqual(enhanced, "Building on your explanation about photosynthesis: what about roots")

    def test_follow_up_without_assistant_reply(self):
        window = [make_message(0, "A user message only")]
        self.assertEqual(self.enhancer.enhance("how about roots", window), "how about roots")

    def test_follow_up_without_topics(self):
        window = [make_message(0, "ok sure", Role.ASSISTANT)]
        self.assertEqual(self.enhancer.enhance("what about roots", window), "what about roots")


class TestDetectors(unittest.TestCase):

    def test_contextual_reference_matches_whole_words(self):
        self.assertTrue(has_contextual_reference("Is THAT right?"))
        self.assertTrue(has_contextual_reference("compare them"))
        self.assertFalse(has_contextual_reference("Thistle and itinerary"))

    def test_follow_up_patterns(self):
        self.assertTrue(is_follow_up("And what happens next"))
        self.assertTrue(is_follow_up("Can you also add tests"))
        self.assertFalse(is_follow_up("Describe gradient descent"))


if __name__ == '__main__':
    unittest.main()
