"""
Tests for the console side of the logging system.
"""

import unittest
from pathlib import Path
from unittest.mock import patch

from core import logger


UNUSED_LOG_PATH = Path("unused.log")


class TestConsoleSwitch(unittest.TestCase):

    def tearDown(self):
        logger.setup_logging(UNUSED_LOG_PATH, log_to_file=False, log_to_console=True)

    def test_console_disabled_silences_every_helper(self):
        logger.setup_logging(UNUSED_LOG_PATH, log_to_file=False, log_to_console=False)

        with patch.object(logger.console, "print") as mock_print:
            logger.log_startup_banner("0.1.0", "Context Keeper")
            logger.log_section("Configuration", "⚙️")
            logger.log_config("Max context window", "20", indent=1)
            logger.log_info("Loaded demo conversation")
            logger.log_error("Invalid context configuration")

        mock_print.assert_not_called()

    def test_console_enabled_prints_banner_and_config(self):
        logger.setup_logging(UNUSED_LOG_PATH, log_to_file=False, log_to_console=True)

        with patch.object(logger.console, "print") as mock_print:
            logger.log_startup_banner("0.1.0", "Context Keeper")
            logger.log_section("Configuration")
            logger.log_config("Recent tier", "12")

        self.assertEqual(mock_print.call_count, 5)

    def test_debug_lines_need_debug_level(self):
        logger.setup_logging(UNUSED_LOG_PATH, level="INFO", log_to_file=False, log_to_console=True)
        with patch.object(logger.console, "print") as mock_print:
            logger.log_debug("Context window: 19/60 messages")
        mock_print.assert_not_called()

        logger.setup_logging(UNUSED_LOG_PATH, level="DEBUG", log_to_file=False, log_to_console=True)
        with patch.object(logger.console, "print") as mock_print:
            logger.log_debug("Context window: 19/60 messages")
        mock_print.assert_called_once()


if __name__ == '__main__':
    unittest.main()
