"""
Shared builders for context engine tests.
"""

from datetime import datetime, timedelta
from typing import List, Sequence

from context.models import Message, Role


BASE_TIME = datetime(2024, 3, 1, 10, 0, 0)


def make_message(
    index: int,
    content: str,
    role: Role = Role.USER,
    images: Sequence[str] = (),
    message_id: str = ""
) -> Message:
    """Message stamped one minute per index after BASE_TIME."""
    return Message(
        id=message_id or f"m{index}",
        content=content,
        timestamp=BASE_TIME + timedelta(minutes=index),
        role=role,
        images=tuple(images),
    )


def alternate_role(index: int) -> Role:
    return Role.USER if index % 2 == 0 else Role.ASSISTANT


def filler_history(count: int, start: int = 0) -> List[Message]:
    """Substantial messages that share no topics with anything else in the tests."""
    return [
        make_message(i, f"Random chatter regarding weekend hiking trips #{i}", alternate_role(i))
        for i in range(start, start + count)
    ]


def window_positions(window, history) -> List[int]:
    """Source indices of the real (non-bridge) entries in a window."""
    index_by_id = {m.id: i for i, m in enumerate(history)}
    return [index_by_id[entry.id] for entry in window if not entry.is_bridge]
