"""Google Cloud Pub/Sub subscribers for pull and streaming-pull delivery."""

import logging
from typing import Any, Callable, Optional

from google.api_core import exceptions as api_exceptions
from google.cloud import pubsub_v1

from courier.consumer.delivery import Delivery
from courier.errors import AcknowledgementError
from courier.models.request import PullRequest, AcknowledgeRequest
from courier.models.response import Message, ReceivedMessage, PullResponse

logger = logging.getLogger(__name__)


def _to_message(pubsub_message: Any) -> Message:
    return Message(
        data=pubsub_message.data,
        message_id=pubsub_message.message_id,
        publish_time=pubsub_message.publish_time,
        attributes=dict(pubsub_message.attributes),
    )


class GooglePubSubSubscriber:
    """Pull subscriber backed by ``pubsub_v1.SubscriberClient``."""

    def __init__(self, client: Optional[pubsub_v1.SubscriberClient] = None):
        self._client = client if client is not None else pubsub_v1.SubscriberClient()

    def pull(self, request: PullRequest, timeout: float) -> PullResponse:
        """
        Pull messages from a subscription.

        An empty response is returned when the server has nothing to deliver
        before the deadline.
        """
        try:
            response = self._client.pull(request=dict(request), timeout=timeout)
        except api_exceptions.DeadlineExceeded:
            return PullResponse(received_messages=[])

        return PullResponse(
            received_messages=[
                ReceivedMessage(message=_to_message(received.message), ack_id=received.ack_id)
                for received in response.received_messages
            ]
        )

    def acknowledge(self, request: AcknowledgeRequest) -> None:
        """
        Acknowledge messages by their ack_ids.

        Raises:
            AcknowledgementError: If the acknowledge RPC failed
        """
        try:
            self._client.acknowledge(request=dict(request))
        except api_exceptions.GoogleAPICallError as e:
            ack_ids = ",".join(request["ack_ids"])
            raise AcknowledgementError(ack_ids, f"Failed to acknowledge messages {ack_ids}: {e!r}") from e


class GooglePubSubStreamingSubscriber:
    """
    Streaming-pull subscriber: the client library pushes messages to a callback.

    The callback runs on the client's scheduler threads, several at a time.
    """

    def __init__(self, client: Optional[pubsub_v1.SubscriberClient] = None):
        self._client = client if client is not None else pubsub_v1.SubscriberClient()

    def subscribe(self, subscription: str, callback: Callable[[Delivery], None]) -> Any:
        """
        Register ``callback`` for the subscription.

        Returns:
            The StreamingPullFuture; ``cancel()`` stops the stream
        """

        def on_message(pubsub_message: Any) -> None:
            # message.ack() is fire-and-forget; the response future reports a failed ack
            def acknowledge() -> None:
                pubsub_message.ack_with_response().result()

            callback(
                Delivery(
                    message=_to_message(pubsub_message),
                    acknowledge=acknowledge,
                    ack_id=pubsub_message.ack_id,
                )
            )

        logger.info("Opening streaming pull on %s", subscription)
        return self._client.subscribe(subscription, on_message)
