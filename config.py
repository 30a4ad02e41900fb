"""
Context Keeper - Configuration
Selection budgets, heuristic thresholds, and logging settings
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

# =============================================================================
# PATHS
# =============================================================================
PROJECT_ROOT = Path(__file__).parent
LOGS_DIR = PROJECT_ROOT / "logs"
DIAGNOSTIC_LOG_PATH = LOGS_DIR / "diagnostic.log"

# =============================================================================
# VERSION
# =============================================================================
VERSION = "0.1.0"
PROJECT_NAME = "Context Keeper"

# =============================================================================
# CONTEXT WINDOW SELECTION
# =============================================================================
# A history at or under CONTEXT_MAX_WINDOW is forwarded verbatim.
# Longer histories are assembled from four tiers:
#
#   early-important  →  bridge  →  topic-relevant  →  recent
#
# The window never exceeds CONTEXT_MAX_WINDOW once selection kicks in.
CONTEXT_MAX_WINDOW = int(os.getenv("CONTEXT_MAX_WINDOW", "20"))
CONTEXT_RECENT_COUNT = int(os.getenv("CONTEXT_RECENT_COUNT", "12"))    # Tail slice for the recent tier
CONTEXT_EARLY_COUNT = int(os.getenv("CONTEXT_EARLY_COUNT", "6"))       # Head slice for the early tier

# Recent tier: user messages at or under this many characters (no image) are dropped
CONTEXT_SUBSTANTIAL_MIN_CHARS = 10

# Early tier: messages longer than this are always important
CONTEXT_IMPORTANT_MIN_CHARS = 150

# Topic-relevant tier
CONTEXT_TOPIC_SCAN_MIN_HISTORY = int(os.getenv("CONTEXT_TOPIC_SCAN_MIN_HISTORY", "25"))
CONTEXT_TOPIC_SCAN_LIMIT = 10          # Middle candidates inspected, newest first
CONTEXT_TOPIC_ACCEPT_LIMIT = 3         # Stop scanning after this many hits
CONTEXT_TOPIC_MIN_SCORE = 2            # Whole-word hit = 3, substring hit = 1
CONTEXT_TOPIC_MIN_SCORE_WITH_IMAGE = 1

# Bridge: inserted when the skipped span exceeds early_count + this many messages
CONTEXT_BRIDGE_GAP = 5
CONTEXT_BRIDGE_TOPIC_COUNT = 2

# =============================================================================
# TOPIC EXTRACTION
# =============================================================================
TOPIC_MIN_WORD_LENGTH = 5              # Tokens shorter than this are never topics
TOPIC_MAX_WORD_LENGTH = 15
TOPIC_MAX_COUNT = int(os.getenv("TOPIC_MAX_COUNT", "10"))
MEANINGFUL_MIN_WORD_LENGTH = 3         # Used by transition detection

# =============================================================================
# TOPIC TRANSITION DETECTION
# =============================================================================
TRANSITION_MIN_HISTORY = 3             # Fewer messages = new conversation
TRANSITION_WINDOW = int(os.getenv("TRANSITION_WINDOW", "6"))
TRANSITION_CONTINUATION_THRESHOLD = float(os.getenv("TRANSITION_CONTINUATION_THRESHOLD", "0.5"))
TRANSITION_RELATED_THRESHOLD = float(os.getenv("TRANSITION_RELATED_THRESHOLD", "0.2"))

# =============================================================================
# QUERY ENHANCEMENT
# =============================================================================
ENHANCER_MIN_QUERY_LENGTH = 3
ENHANCER_USER_LOOKBACK = 3             # Recent user messages considered for references
ENHANCER_SNIPPET_WORDS = 10
ENHANCER_INCLUDE_IMAGE_CONTEXT = os.getenv("ENHANCER_INCLUDE_IMAGE_CONTEXT", "true").lower() == "true"

# =============================================================================
# SUMMARY GENERATION
# =============================================================================
SUMMARY_MIN_MESSAGES = int(os.getenv("SUMMARY_MIN_MESSAGES", "6"))
SUMMARY_TOPIC_COUNT = 3
SUMMARY_PHASE_SIZE = 8                 # Messages per phase when tracing topic flow
SUMMARY_RECENT_WINDOW = 10
SUMMARY_RECENT_TOPIC_COUNT = 2
SUMMARY_INTERACTIVE_RATIO = 0.5        # Share of user messages that are questions

# =============================================================================
# LOGGING CONFIGURATION
# =============================================================================
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() == "true"
LOG_TO_CONSOLE = True

# =============================================================================
# CLI CONFIGURATION
# =============================================================================
CLI_PREVIEW_CHARS = 80
CLI_SYNTHETIC_DEFAULT_SIZE = 1000
