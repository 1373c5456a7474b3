"""RabbitMQ publisher implementing PubSubPublisher protocol."""

import logging
import uuid
from typing import Any

import pika
import pika.exceptions
from pika.adapters.blocking_connection import BlockingChannel

from courier.errors import DeliveryError
from courier.models.response import PublishFuture

logger = logging.getLogger(__name__)


def split_topic(topic: str) -> tuple[str, str]:
    """Split ``exchange:routing_key`` into its parts; a bare name targets the default exchange."""
    if ":" in topic:
        exchange, routing_key = topic.split(":", 1)
        return exchange, routing_key
    return "", topic


class RabbitMQPublisher:
    """
    RabbitMQ publisher implementing PubSubPublisher protocol.

    Topic format: "queue_name" or "exchange_name:routing_key"
    If no routing key provided, publishes directly to queue (default exchange).

    The channel runs in publisher-confirm mode, so ``publish`` returns only
    after the broker has accepted the message.
    """

    def __init__(self, connection: pika.BlockingConnection):
        self._connection = connection
        self._channel: BlockingChannel = connection.channel()
        self._channel.confirm_delivery()

    def publish(self, topic: str, data: bytes, **kwargs: Any) -> PublishFuture:
        """
        Publish a message to a RabbitMQ queue or exchange.

        Args:
            topic: Queue name, or "exchange:routing_key" format
            data: Message data as bytes
            **kwargs: ``attributes`` become AMQP headers; anything else is ignored

        Returns:
            PublishFuture with the generated message ID

        Raises:
            DeliveryError: If the message is unroutable, nacked, or the connection failed
        """
        exchange, routing_key = split_topic(topic)
        message_id = str(uuid.uuid4())

        try:
            self._channel.basic_publish(
                exchange=exchange,
                routing_key=routing_key,
                body=data,
                properties=pika.BasicProperties(
                    delivery_mode=2,  # Persistent
                    message_id=message_id,
                    headers=kwargs.get("attributes") or None,
                ),
                mandatory=True,
            )
        except pika.exceptions.AMQPError as e:
            logger.error("Publish to %s failed: %r", topic, e)
            raise DeliveryError(topic, f"Failed to publish to topic {topic}: {e!r}") from e

        return PublishFuture(message_id=message_id)
