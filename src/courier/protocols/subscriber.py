"""Subscriber protocol definitions."""

from typing import Protocol, Any, Callable, runtime_checkable

from courier.models.request import PullRequest, AcknowledgeRequest


@runtime_checkable
class PubSubSubscriber(Protocol):
    """Synchronous protocol for pulling and acknowledging Pub/Sub messages."""

    def pull(self, request: PullRequest, timeout: float) -> Any:
        """
        Pull messages from a subscription synchronously.

        Args:
            request: Pull request with subscription path and max_messages
            timeout: Timeout in seconds

        Returns:
            Pull response with received_messages
        """
        ...

    def acknowledge(self, request: AcknowledgeRequest) -> None:
        """
        Acknowledge messages synchronously.

        Args:
            request: Acknowledge request with subscription path and ack_ids

        Raises:
            AcknowledgementError: If the broker did not accept the acknowledgement
        """
        ...


@runtime_checkable
class AsyncPubSubSubscriber(Protocol):
    """Async protocol for pulling and acknowledging Pub/Sub messages."""

    async def pull(self, request: PullRequest, timeout: float) -> Any:
        """
        Pull messages from a subscription asynchronously.

        Args:
            request: Pull request with subscription path and max_messages
            timeout: Timeout in seconds

        Returns:
            Pull response with received_messages
        """
        ...

    async def acknowledge(self, request: AcknowledgeRequest) -> None:
        """
        Acknowledge messages asynchronously.

        Args:
            request: Acknowledge request with subscription path and ack_ids
        """
        ...


@runtime_checkable
class StreamingSubscriber(Protocol):
    """Protocol for brokers that push messages to a callback on their own threads."""

    def subscribe(self, subscription: str, callback: Callable[[Any], None]) -> Any:
        """
        Register a callback for every message delivered to a subscription.

        Args:
            subscription: Full subscription path
            callback: Called with a ``Delivery`` per message, possibly concurrently

        Returns:
            Future-like handle; ``cancel()`` stops new deliveries
        """
        ...
