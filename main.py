#!/usr/bin/env python3
"""
Context Keeper - Main Entry Point
Inspect how the context engine handles a conversation turn

Usage:
    python main.py                          # Demo conversation, default query
    python main.py --query "Tell me more about that"
    python main.py --synthetic 1000         # Generated conversation (timing check)
    python main.py --dev                    # Debug logging on the console
    python main.py -d -s 200 -q "what about kubernetes?"
"""

import sys
import time
import argparse
from pathlib import Path

# Ensure we can import from project root
sys.path.insert(0, str(Path(__file__).parent))

import config
from core.logger import (
    setup_logging,
    log_startup_banner,
    log_section,
    log_config,
    log_info,
    log_success,
    log_warning,
    log_error,
)
from context.analysis import analyze_turn
from context.engine import init_context_engine
from context.settings import ContextSettings
from interface.cli import ContextInspector
from interface.demo import build_demo_conversation, build_synthetic_conversation


DEFAULT_QUERY = "Tell me more about that"

# Selection on a long conversation should stay well inside this
LATENCY_BUDGET_MS = 100.0


def print_configuration(settings: ContextSettings) -> None:
    """Print the active selection budgets."""
    log_section("Configuration", "⚙️")
    log_config("Max context window", str(settings.max_context_window), indent=1)
    log_config("Recent tier", str(settings.recent_count), indent=1)
    log_config("Early tier", str(settings.early_count), indent=1)
    log_config("Topic scan from", f"{settings.topic_scan_min_history} messages", indent=1)
    log_config(
        "Transition thresholds",
        f"continuation ≥ {settings.continuation_threshold}, related ≥ {settings.related_threshold}",
        indent=1
    )


def main() -> int:
    parser = argparse.ArgumentParser(description="Context Keeper - conversation context inspector")
    parser.add_argument(
        "--query", "-q",
        default=DEFAULT_QUERY,
        help="Incoming user query to classify and enhance"
    )
    parser.add_argument(
        "--synthetic", "-s",
        type=int,
        nargs="?",
        const=config.CLI_SYNTHETIC_DEFAULT_SIZE,
        default=None,
        metavar="N",
        help="Use a generated N-message conversation instead of the demo"
    )
    parser.add_argument(
        "--dev", "-d",
        action="store_true",
        help="Show debug logging on the console"
    )
    args = parser.parse_args()

    setup_logging(
        log_file_path=config.DIAGNOSTIC_LOG_PATH,
        level="DEBUG" if args.dev else config.LOG_LEVEL,
        log_to_file=config.LOG_TO_FILE,
        log_to_console=config.LOG_TO_CONSOLE
    )
    log_startup_banner(config.VERSION, config.PROJECT_NAME)

    try:
        settings = ContextSettings.from_config()
    except ValueError as e:
        log_error(f"Invalid context configuration: {e}")
        return 1

    print_configuration(settings)
    engine = init_context_engine(settings)

    if args.synthetic is not None:
        history = build_synthetic_conversation(max(args.synthetic, 0))
        log_info(f"Generated synthetic conversation with {len(history)} messages", prefix="🧪")
    else:
        history = build_demo_conversation()
        log_info(f"Loaded demo conversation with {len(history)} messages", prefix="💬")

    started = time.perf_counter()
    window = engine.select_context(history)
    elapsed_ms = (time.perf_counter() - started) * 1000

    if elapsed_ms <= LATENCY_BUDGET_MS:
        log_success(f"Selected {len(window)}/{len(history)} messages in {elapsed_ms:.1f}ms")
    else:
        log_warning(f"Selection took {elapsed_ms:.1f}ms (budget {LATENCY_BUDGET_MS:.0f}ms)")

    analysis = analyze_turn(history, args.query, engine, preview_chars=config.CLI_PREVIEW_CHARS)
    ContextInspector().render(analysis)
    return 0


if __name__ == "__main__":
    sys.exit(main())
