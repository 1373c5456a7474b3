"""Google Cloud Pub/Sub publisher implementing PubSubPublisher protocol."""

import logging
from concurrent import futures
from typing import Any, Optional

from google.api_core import exceptions as api_exceptions
from google.cloud import pubsub_v1

from courier.errors import DeliveryError
from courier.models.response import PublishFuture

logger = logging.getLogger(__name__)


class GooglePubSubPublisher:
    """
    Publisher backed by ``pubsub_v1.PublisherClient``.

    The client reads ``PUBSUB_EMULATOR_HOST`` itself, so the same adapter
    talks to the emulator in tests.
    """

    def __init__(self, client: Optional[pubsub_v1.PublisherClient] = None, timeout: float = 30.0):
        self._client = client if client is not None else pubsub_v1.PublisherClient()
        self._timeout = timeout

    def publish(self, topic: str, data: bytes, **kwargs: Any) -> PublishFuture:
        """
        Publish a message and wait for the server to store it.

        Args:
            topic: Full topic path
            data: Message data as bytes
            **kwargs: ``attributes`` are sent as Pub/Sub message attributes

        Raises:
            DeliveryError: If the topic does not exist, the call failed or timed out
        """
        attributes = kwargs.get("attributes") or {}
        try:
            message_id = self._client.publish(topic, data, **attributes).result(timeout=self._timeout)
        except (api_exceptions.GoogleAPICallError, api_exceptions.RetryError, futures.TimeoutError) as e:
            logger.error("Publish to %s failed: %r", topic, e)
            raise DeliveryError(topic, f"Failed to publish to topic {topic}: {e!r}") from e

        return PublishFuture(message_id=message_id)
