"""Exceptions raised by courier publishers, consumers and services."""

from typing import Optional


class CourierError(Exception):
    """Base class for all courier errors."""


class DeliveryError(CourierError):
    """The broker could not be reached or refused a publish."""

    def __init__(self, topic: str, message: Optional[str] = None):
        self.topic = topic
        super().__init__(message or f"Failed to publish to topic: {topic}")


class AcknowledgementError(CourierError):
    """
    An acknowledgement call failed.

    Not fatal: the broker keeps the message and redelivers it.
    """

    def __init__(self, ack_id: str, message: Optional[str] = None):
        self.ack_id = ack_id
        super().__init__(message or f"Failed to acknowledge message: {ack_id}")


class InvalidDeliveryStateError(CourierError):
    """A delivery was moved through its states out of order."""


class ValidationError(CourierError):
    """A product failed a business rule before reaching the repository."""


class NotFoundError(CourierError):
    """No product exists with the requested identifier."""

    def __init__(self, product_id: int):
        self.product_id = product_id
        super().__init__(f"Product not found with ID: {product_id}")
