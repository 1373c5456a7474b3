"""Message models shared by publishers, subscribers and consumers."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Message:
    """Message data container matching GCP Pub/Sub structure."""

    data: bytes
    message_id: str = ""
    publish_time: Optional[datetime] = None
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass
class ReceivedMessage:
    """Received message container matching GCP Pub/Sub structure."""

    message: Message
    ack_id: str


@dataclass
class PullResponse:
    """Pull response container matching GCP Pub/Sub structure."""

    received_messages: list[ReceivedMessage]


@dataclass
class PublishFuture:
    """Future-like object for publish result."""

    message_id: str

    def result(self, timeout: Optional[float] = None) -> str:
        """Return the message ID (blocking call for compatibility)."""
        return self.message_id
