"""Publisher services that normalize payloads and hand them to a broker."""

import inspect
import logging
from typing import Optional

from courier.errors import DeliveryError
from courier.protocols.publisher import AsyncPubSubPublisher, PubSubPublisher

logger = logging.getLogger(__name__)


def normalize(payload: str) -> str:
    """Case-normalize a payload before it is published."""
    if payload is None:
        raise TypeError("payload must not be None")
    return payload.upper()


class PublisherService:
    """
    Publishes application messages to one topic.

    Each payload is uppercased once, then published synchronously: ``publish``
    returns only after the broker has stored the message.
    """

    def __init__(self, publisher: PubSubPublisher, topic: str, timeout: Optional[float] = None):
        """
        Args:
            publisher: Broker adapter implementing PubSubPublisher
            topic: Topic path messages are published to
            timeout: Seconds to wait for the broker to confirm each publish
        """
        self.publisher = publisher
        self.topic = topic
        self.timeout = timeout

    def publish(self, payload: str) -> str:
        """
        Publish a message and return its broker-issued ID.

        Raises:
            TypeError: If payload is None
            DeliveryError: If the broker could not be reached or refused the message
        """
        message = normalize(payload)
        logger.info("Publishing message: '%s' to topic: '%s'", message, self.topic)

        try:
            message_id = self.publisher.publish(self.topic, message.encode("utf-8")).result(
                timeout=self.timeout
            )
        except DeliveryError:
            raise
        except Exception as e:
            raise DeliveryError(self.topic, f"Failed to publish to topic {self.topic}: {e}") from e

        logger.debug("Published message %s to topic: '%s'", message_id, self.topic)
        return message_id


class AsyncPublisherService:
    """Asyncio counterpart of PublisherService."""

    def __init__(self, publisher: AsyncPubSubPublisher, topic: str):
        self.publisher = publisher
        self.topic = topic

    async def publish(self, payload: str) -> str:
        message = normalize(payload)
        logger.info("Publishing message: '%s' to topic: '%s'", message, self.topic)

        try:
            result = await self.publisher.publish(self.topic, message.encode("utf-8"))
            if inspect.isawaitable(result):
                result = await result
            message_id = result if isinstance(result, str) else result.result()
        except DeliveryError:
            raise
        except Exception as e:
            raise DeliveryError(self.topic, f"Failed to publish to topic {self.topic}: {e}") from e

        return message_id
