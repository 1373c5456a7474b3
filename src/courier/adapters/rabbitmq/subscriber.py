"""RabbitMQ subscriber implementing PubSubSubscriber protocol."""

import logging

import pika
import pika.exceptions
from pika.adapters.blocking_connection import BlockingChannel

from courier.errors import AcknowledgementError
from courier.models.request import PullRequest, AcknowledgeRequest
from courier.models.response import Message, ReceivedMessage, PullResponse

logger = logging.getLogger(__name__)


class RabbitMQSubscriber:
    """
    RabbitMQ subscriber implementing PubSubSubscriber protocol.

    Subscription names are queue names. Maps delivery_tag to ack_id for
    acknowledge() calls.
    """

    def __init__(self, connection: pika.BlockingConnection):
        self._connection = connection
        self._channel: BlockingChannel = connection.channel()
        # Map ack_id (str) -> delivery_tag (int) for acknowledge
        self._pending_acks: dict[str, int] = {}

    def pull(self, request: PullRequest, timeout: float) -> PullResponse:
        """
        Pull up to ``max_messages`` messages from a RabbitMQ queue.

        Args:
            request: PullRequest with subscription (queue name)
            timeout: Timeout in seconds (used as inactivity timeout)

        Returns:
            PullResponse with received messages
        """
        queue = request["subscription"]
        max_messages = request.get("max_messages", 1)

        received_messages: list[ReceivedMessage] = []

        for method, properties, body in self._channel.consume(
            queue=queue,
            auto_ack=False,
            inactivity_timeout=timeout,
        ):
            if method is None:
                # Timeout reached, no message available
                break

            ack_id = str(method.delivery_tag)
            self._pending_acks[ack_id] = method.delivery_tag

            received_messages.append(
                ReceivedMessage(
                    message=Message(
                        data=body,
                        message_id=properties.message_id or "",
                        attributes=dict(properties.headers or {}),
                    ),
                    ack_id=ack_id,
                )
            )
            if len(received_messages) >= max_messages:
                break

        # Cancel consumer to allow reuse; unacked messages stay pending on the channel
        self._channel.cancel()

        return PullResponse(received_messages=received_messages)

    def acknowledge(self, request: AcknowledgeRequest) -> None:
        """
        Acknowledge messages by their ack_ids.

        Args:
            request: AcknowledgeRequest with subscription and ack_ids

        Raises:
            AcknowledgementError: If the channel rejected the ack
        """
        for ack_id in request["ack_ids"]:
            delivery_tag = self._pending_acks.pop(ack_id, None)
            if delivery_tag is None:
                logger.debug("Unknown ack_id %s, ignoring", ack_id)
                continue
            try:
                self._channel.basic_ack(delivery_tag=delivery_tag)
            except pika.exceptions.AMQPError as e:
                raise AcknowledgementError(ack_id, f"Failed to acknowledge message {ack_id}: {e!r}") from e
