"""Async message consumer that buffers payloads and acknowledges them."""

import logging
from typing import Optional

from courier.consumer.buffer import ReceivedMessageBuffer
from courier.consumer.delivery import Delivery
from courier.errors import AcknowledgementError
from courier.protocols.subscriber import AsyncPubSubSubscriber

logger = logging.getLogger(__name__)


class AsyncMessageConsumer:
    """
    Asynchronous message consumer for one Pub/Sub subscription.

    Responsibilities:
    - Pull messages from subscription asynchronously
    - Decode each payload and append it to the received-message buffer
    - Acknowledge each message asynchronously, only after it is buffered
    """

    def __init__(
        self,
        subscription: str,
        subscriber: AsyncPubSubSubscriber,
        buffer: Optional[ReceivedMessageBuffer] = None,
    ):
        """
        Initialize async message consumer.

        Args:
            subscription: Pub/Sub subscription path
            subscriber: Async subscriber adapter for pulling messages
            buffer: Buffer to append payloads to; the consumer creates its own if omitted
        """
        self.subscription = subscription
        self.subscriber = subscriber
        self._buffer = buffer if buffer is not None else ReceivedMessageBuffer()
        self._running = False

    @property
    def received_messages(self) -> ReceivedMessageBuffer:
        """Buffer of received payloads, owned by this consumer."""
        return self._buffer

    def start(self) -> None:
        """Start the message consumer."""
        self._running = True

    def stop(self) -> None:
        """Stop the message consumer."""
        self._running = False

    async def handle_delivery(self, delivery: Delivery) -> None:
        """Buffer a delivered message, then acknowledge it."""
        payload = delivery.payload.decode("utf-8")
        logger.info("Message arrived! Payload: %s", payload)

        self._buffer.append(payload)
        delivery.mark_buffered()

        try:
            await delivery.ack_async()
        except AcknowledgementError as e:
            logger.warning("Acknowledgement failed, broker will redeliver: %s", e)

    async def process_one_message(self) -> None:
        """
        Process a single message from the subscription asynchronously.

        This method:
        1. Pulls one message from subscription
        2. Appends its payload to the buffer
        3. Acknowledges the message
        """
        response = await self.subscriber.pull(
            request={"subscription": self.subscription, "max_messages": 1},
            timeout=30,
        )

        if not response.received_messages:
            return

        received_message = response.received_messages[0]
        ack_id = received_message.ack_id

        async def acknowledge() -> None:
            await self.subscriber.acknowledge(
                request={"subscription": self.subscription, "ack_ids": [ack_id]}
            )

        await self.handle_delivery(
            Delivery(message=received_message.message, acknowledge=acknowledge, ack_id=ack_id)
        )

    async def run(self) -> None:
        """
        Run the async message consumer loop.

        Continuously processes messages from the subscription while running.
        Call start() before run(), and stop() to exit the loop.
        """
        while self._running:
            await self.process_one_message()
