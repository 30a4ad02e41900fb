"""
Tests for the terminal inspector and the main entry point.
"""

import unittest
from unittest.mock import patch

from rich.console import Console

import config
from context.analysis import analyze_turn
from context.engine import ContextEngine
from interface.cli import ContextInspector
from interface.demo import build_demo_conversation, build_synthetic_conversation


def render_to_text(analysis) -> str:
    console = Console(record=True, width=200)
    ContextInspector(console).render(analysis)
    return console.export_text()


class TestContextInspector(unittest.TestCase):

    def setUp(self):
        self.engine = ContextEngine()

    def test_renders_enhanced_query(self):
        analysis = analyze_turn(build_demo_conversation(), "Tell me more about that", self.engine)
        output = render_to_text(analysis)

        self.assertIn("Query Analysis", output)
        self.assertIn("New Topic", output)
        self.assertIn("Original Query:", output)
        self.assertIn("Enhanced Query:", output)
        self.assertIn("11/11", output)
        self.assertIn("History Messages", output)
        self.assertIn("Conversation Summary", output)

    def test_renders_tiers_for_long_history(self):
        analysis = analyze_turn(build_synthetic_conversation(60), "what about kubernetes?", self.engine)
        output = render_to_text(analysis)

        self.assertIn("19/60", output)
        self.assertIn("Bridge Messages", output)
        self.assertIn("conversation continued", output)

    def test_unchanged_query(self):
        analysis = analyze_turn([], "Hello there", self.engine)
        output = render_to_text(analysis)

        self.assertIn("(unchanged)", output)
        self.assertIn("Context window is empty", output)
        self.assertNotIn("Conversation Summary", output)

    def test_markup_in_content_is_escaped(self):
        analysis = analyze_turn([], "show [bold]raw[/bold] text", self.engine)
        output = render_to_text(analysis)

        self.assertIn("[bold]raw[/bold]", output)


class TestMain(unittest.TestCase):

    def run_main(self, *argv):
        import main

        with patch("sys.argv", ["main.py", *argv]), \
                patch.object(config, "LOG_TO_FILE", False), \
                patch.object(config, "LOG_TO_CONSOLE", False), \
                patch("main.ContextInspector") as inspector:
            code = main.main()
        return code, inspector

    def test_demo_run(self):
        code, inspector = self.run_main("--query", "How does it work?")

        self.assertEqual(code, 0)
        analysis = inspector.return_value.render.call_args[0][0]
        self.assertEqual(analysis.history_size, 11)
        self.assertEqual(analysis.original_query, "How does it work?")

    def test_synthetic_run(self):
        code, inspector = self.run_main("--synthetic", "40")

        self.assertEqual(code, 0)
        analysis = inspector.return_value.render.call_args[0][0]
        self.assertEqual(analysis.history_size, 40)
        self.assertLessEqual(analysis.window_size, config.CONTEXT_MAX_WINDOW)

    def test_invalid_configuration(self):
        with patch.object(config, "CONTEXT_MAX_WINDOW", 0):
            code, inspector = self.run_main()

        self.assertEqual(code, 1)
        inspector.return_value.render.assert_not_called()


if __name__ == '__main__':
    unittest.main()
