"""
Context Keeper - Context Engine
Window selection, topic tracking, and query enhancement for long conversations
"""

from context.models import (
    BRIDGE_ID_PREFIX,
    BridgeMessage,
    ContextEntry,
    ContextTier,
    ContextWindow,
    Message,
    Role,
    TopicTransition,
    is_bridge_id,
)
from context.settings import ContextSettings
from context.topics import TopicExtractor
from context.transitions import TransitionClassifier
from context.selector import ContextSelection, ContextSelector
from context.enhancer import QueryEnhancer
from context.summary import SummaryGenerator
from context.engine import (
    ContextEngine,
    TurnContext,
    get_context_engine,
    init_context_engine,
    to_api_messages,
)

__all__ = [
    "BRIDGE_ID_PREFIX",
    "BridgeMessage",
    "ContextEntry",
    "ContextTier",
    "ContextWindow",
    "Message",
    "Role",
    "TopicTransition",
    "is_bridge_id",
    "ContextSettings",
    "TopicExtractor",
    "TransitionClassifier",
    "ContextSelection",
    "ContextSelector",
    "QueryEnhancer",
    "SummaryGenerator",
    "ContextEngine",
    "TurnContext",
    "get_context_engine",
    "init_context_engine",
    "to_api_messages",
]
