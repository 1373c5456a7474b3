"""Delivery records pairing a received message with its acknowledgement handle."""

import enum
from dataclasses import dataclass
from typing import Any, Callable

from courier.errors import AcknowledgementError, InvalidDeliveryStateError
from courier.models.response import Message


class DeliveryState(enum.Enum):
    DELIVERED = "delivered"
    BUFFERED = "buffered"
    ACKNOWLEDGED = "acknowledged"


@dataclass
class Delivery:
    """
    One delivery attempt of a message to this consumer.

    A redelivered message arrives as a new Delivery. The only legal path is
    DELIVERED -> BUFFERED -> ACKNOWLEDGED.
    """

    message: Message
    acknowledge: Callable[[], Any]
    ack_id: str = ""
    state: DeliveryState = DeliveryState.DELIVERED

    @property
    def payload(self) -> bytes:
        return self.message.data

    def _require(self, expected: DeliveryState) -> None:
        if self.state is not expected:
            raise InvalidDeliveryStateError(
                f"Delivery {self.ack_id or self.message.message_id!r} is {self.state.value}, "
                f"expected {expected.value}"
            )

    def mark_buffered(self) -> None:
        self._require(DeliveryState.DELIVERED)
        self.state = DeliveryState.BUFFERED

    def ack(self) -> None:
        """
        Acknowledge the delivery to the broker.

        Raises:
            InvalidDeliveryStateError: If the payload has not been buffered yet
            AcknowledgementError: If the broker call failed; state stays BUFFERED
        """
        self._require(DeliveryState.BUFFERED)
        try:
            self.acknowledge()
        except AcknowledgementError:
            raise
        except Exception as e:
            raise AcknowledgementError(self.ack_id, f"Failed to acknowledge message {self.ack_id}: {e}") from e
        self.state = DeliveryState.ACKNOWLEDGED

    async def ack_async(self) -> None:
        """Acknowledge through an async handle. Same rules as ``ack()``."""
        self._require(DeliveryState.BUFFERED)
        try:
            await self.acknowledge()
        except AcknowledgementError:
            raise
        except Exception as e:
            raise AcknowledgementError(self.ack_id, f"Failed to acknowledge message {self.ack_id}: {e}") from e
        self.state = DeliveryState.ACKNOWLEDGED
