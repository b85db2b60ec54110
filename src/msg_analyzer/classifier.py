"""ISO 20022 message-type detection by marker substring."""

from __future__ import annotations

from msg_analyzer.models import MessageType

# Checked in order; when a text carries several markers the first listed wins.
MESSAGE_MARKERS: list[tuple[str, MessageType]] = [
    ("pacs.008", MessageType.PACS_008),
    ("pacs.002", MessageType.PACS_002),
    ("camt.053", MessageType.CAMT_053),
    ("pain.001", MessageType.PAIN_001),
]


def classify(text: str) -> MessageType:
    """Return the message type of the first marker found (case-sensitive)."""
    for marker, message_type in MESSAGE_MARKERS:
        if marker in text:
            return message_type
    return MessageType.UNKNOWN
