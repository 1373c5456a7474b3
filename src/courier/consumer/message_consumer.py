"""Synchronous message consumer that buffers payloads and acknowledges them."""

import logging
import threading
from typing import Any, Optional

from courier.consumer.buffer import ReceivedMessageBuffer
from courier.consumer.delivery import Delivery
from courier.errors import AcknowledgementError
from courier.protocols.subscriber import PubSubSubscriber, StreamingSubscriber

logger = logging.getLogger(__name__)


class MessageConsumer:
    """
    Synchronous message consumer for one Pub/Sub subscription.

    Responsibilities:
    - Receive messages, either by pulling or from broker callbacks
    - Decode each payload and append it to the received-message buffer
    - Acknowledge each message, only after it is buffered

    Acknowledgement failures are logged and otherwise ignored: the broker
    redelivers the message and the buffer gets a duplicate entry.
    """

    def __init__(
        self,
        subscription: str,
        subscriber: Optional[PubSubSubscriber] = None,
        buffer: Optional[ReceivedMessageBuffer] = None,
    ):
        """
        Initialize synchronous message consumer.

        Args:
            subscription: Pub/Sub subscription path
            subscriber: Subscriber adapter for pulling messages (pull mode only)
            buffer: Buffer to append payloads to; the consumer creates its own if omitted
        """
        self.subscription = subscription
        self.subscriber = subscriber
        self._buffer = buffer if buffer is not None else ReceivedMessageBuffer()
        self._running = False
        self._in_flight = 0
        self._idle = threading.Condition()
        self._streaming_future: Any = None

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

    def handle_delivery(self, delivery: Delivery) -> None:
        """
        Buffer a delivered message, then acknowledge it.

        Safe to call from several broker threads at once. Deliveries that
        arrive while the consumer is stopped are left unacknowledged so the
        broker redelivers them.

        Raises:
            UnicodeDecodeError: If the payload is not UTF-8; the message is not acknowledged
        """
        if not self._begin_delivery(require_running=True):
            logger.debug("Consumer stopped, leaving message %s unacknowledged", delivery.ack_id)
            return
        try:
            self._buffer_then_ack(delivery)
        finally:
            self._end_delivery()

    def _begin_delivery(self, require_running: bool) -> bool:
        with self._idle:
            if require_running and not self._running:
                return False
            self._in_flight += 1
            return True

    def _end_delivery(self) -> None:
        with self._idle:
            self._in_flight -= 1
            if self._in_flight == 0:
                self._idle.notify_all()

    def _buffer_then_ack(self, delivery: Delivery) -> None:
        payload = delivery.payload.decode("utf-8")
        logger.info("Message arrived! Payload: %s", payload)

        self._buffer.append(payload)
        delivery.mark_buffered()

        try:
            delivery.ack()
        except AcknowledgementError as e:
            logger.warning("Acknowledgement failed, broker will redeliver: %s", e)

    def process_one_message(self) -> None:
        """
        Process a single message from the subscription synchronously.

        This method:
        1. Pulls one message from subscription
        2. Appends its payload to the buffer
        3. Acknowledges the message
        """
        response = self.subscriber.pull(
            request={"subscription": self.subscription, "max_messages": 1},
            timeout=30,
        )

        if not response.received_messages:
            return

        received_message = response.received_messages[0]
        ack_id = received_message.ack_id

        def acknowledge() -> None:
            self.subscriber.acknowledge(
                request={"subscription": self.subscription, "ack_ids": [ack_id]}
            )

        # A pulled message is always finished, even if stop() ran during the pull
        self._begin_delivery(require_running=False)
        try:
            self._buffer_then_ack(
                Delivery(message=received_message.message, acknowledge=acknowledge, ack_id=ack_id)
            )
        finally:
            self._end_delivery()

    def run(self) -> None:
        """
        Run the synchronous message consumer loop.

        Continuously processes messages from the subscription while running.
        Call start() before run(), and stop() to exit the loop.
        """
        while self._running:
            self.process_one_message()

    def listen(self, streaming_subscriber: StreamingSubscriber) -> Any:
        """
        Start receiving pushed messages on the broker's dispatch threads.

        Returns:
            The streaming future returned by the subscriber
        """
        self.start()
        self._streaming_future = streaming_subscriber.subscribe(self.subscription, self.handle_delivery)
        logger.info("Listening on subscription: %s", self.subscription)
        return self._streaming_future

    def shutdown(self, timeout: Optional[float] = None) -> bool:
        """
        Stop accepting deliveries and wait for in-flight ones to finish.

        Args:
            timeout: Seconds to wait for in-flight deliveries, or None to wait forever

        Returns:
            True if every in-flight delivery finished before the timeout
        """
        with self._idle:
            self._running = False
        if self._streaming_future is not None:
            self._streaming_future.cancel()
            self._streaming_future = None

        with self._idle:
            drained = self._idle.wait_for(lambda: self._in_flight == 0, timeout=timeout)
        if not drained:
            logger.warning("Shutdown timed out with %d deliveries in flight", self._in_flight)
        return drained
