"""
Context Keeper - Demo Conversations
Sample histories for the inspector and for exercising the engine
"""

from datetime import datetime, timedelta
from typing import List, Optional

from context.models import Message, Role


# (id, role, content, minutes before `now`, images)
_DEMO_TURNS = [
    ("1", Role.USER, "Hello, I need help with machine learning", 120, ()),
    ("2", Role.ASSISTANT,
     "I'd be happy to help with machine learning! What specific area interests you?", 119, ()),
    ("3", Role.USER, "I want to understand neural networks and deep learning", 110, ()),
    ("4", Role.ASSISTANT,
     "Neural networks are computational models inspired by biological neural networks...", 109, ()),
    ("5", Role.USER, "Can you analyze this diagram of a neural network?", 90,
     ("/path/to/neural_network_diagram.png",)),
    ("6", Role.ASSISTANT,
     "This diagram shows a feedforward neural network with three layers...", 89, ()),
    ("7", Role.USER, "Actually, let me ask about computer vision instead", 45, ()),
    ("8", Role.ASSISTANT,
     "Computer vision is a field of AI that enables computers to interpret visual information...", 44, ()),
    ("9", Role.USER, "How does object detection work?", 10, ()),
    ("10", Role.ASSISTANT, "Object detection combines classification and localization...", 9, ()),
    ("11", Role.USER, "What about YOLO algorithm?", 2, ()),
]

_SYNTHETIC_SUBJECTS = [
    "gradient descent optimization",
    "convolutional filters",
    "transformer attention heads",
    "database indexing strategies",
    "kubernetes deployment rollouts",
]


def build_demo_conversation(now: Optional[datetime] = None) -> List[Message]:
    """
    The machine learning → computer vision → YOLO walkthrough.

    Ids run "1" to "11" in chronological order; message 5 carries an image.
    """
    now = now or datetime.now()
    return [
        Message(
            id=message_id,
            content=content,
            timestamp=now - timedelta(minutes=minutes_ago),
            role=role,
            images=images,
        )
        for message_id, role, content, minutes_ago, images in _DEMO_TURNS
    ]


def build_synthetic_conversation(
    count: int,
    start: Optional[datetime] = None,
    interval: timedelta = timedelta(minutes=1)
) -> List[Message]:
    """
    Generate an alternating user/assistant conversation.

    Subjects rotate every ten messages so topic detection has something
    to find. Ids are "msg-0", "msg-1", ...
    """
    start = start or datetime(2024, 1, 1, 9, 0, 0)
    messages = []
    for i in range(count):
        subject = _SYNTHETIC_SUBJECTS[(i // 10) % len(_SYNTHETIC_SUBJECTS)]
        if i % 2 == 0:
            role = Role.USER
            content = f"Question {i}: could you walk me through {subject}?"
        else:
            role = Role.ASSISTANT
            content = f"Answer {i}: here is an overview of {subject} with a short example."
        messages.append(Message(
            id=f"msg-{i}",
            content=content,
            timestamp=start + interval * i,
            role=role,
        ))
    return messages
