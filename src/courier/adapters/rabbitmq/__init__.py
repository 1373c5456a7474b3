"""RabbitMQ adapter for courier pub-sub protocols."""

from courier.adapters.rabbitmq.publisher import RabbitMQPublisher
from courier.adapters.rabbitmq.subscriber import RabbitMQSubscriber

__all__ = ["RabbitMQPublisher", "RabbitMQSubscriber"]
