"""Constructor wiring for publishers, consumers and the product service."""

import logging
from typing import Optional

import pika
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine

from courier.adapters.gcp import GooglePubSubPublisher, GooglePubSubStreamingSubscriber, GooglePubSubSubscriber
from courier.adapters.rabbitmq import RabbitMQPublisher, RabbitMQSubscriber
from courier.config import Settings
from courier.consumer.buffer import ReceivedMessageBuffer
from courier.consumer.message_consumer import MessageConsumer
from courier.models.addressing import SubscriptionPath, TopicPath
from courier.products.repository import SqlAlchemyProductRepository
from courier.products.service import ProductService
from courier.publisher.service import PublisherService

logger = logging.getLogger(__name__)


def rabbitmq_connection(settings: Settings) -> pika.BlockingConnection:
    return pika.BlockingConnection(
        pika.ConnectionParameters(host=settings.rabbitmq_host, port=settings.rabbitmq_port)
    )


def topic_name(settings: Settings) -> str:
    """Topic as the configured broker addresses it."""
    if settings.broker == "gcp":
        return str(TopicPath.parse(settings.topic, default_project=settings.project_id))
    return settings.topic


def subscription_name(settings: Settings) -> str:
    """Subscription as the configured broker addresses it."""
    if settings.broker == "gcp":
        return str(SubscriptionPath.parse(settings.subscription, default_project=settings.project_id))
    return settings.subscription


def build_publisher_service(
    settings: Settings, connection: Optional[pika.BlockingConnection] = None
) -> PublisherService:
    if settings.broker == "gcp":
        publisher = GooglePubSubPublisher()
    else:
        publisher = RabbitMQPublisher(connection or rabbitmq_connection(settings))
    logger.info("Publisher ready: broker=%s topic=%s", settings.broker, topic_name(settings))
    return PublisherService(publisher, topic_name(settings))


def build_consumer(
    settings: Settings,
    connection: Optional[pika.BlockingConnection] = None,
    buffer: Optional[ReceivedMessageBuffer] = None,
) -> MessageConsumer:
    """Pull-mode consumer for the configured broker."""
    if settings.broker == "gcp":
        subscriber = GooglePubSubSubscriber()
    else:
        subscriber = RabbitMQSubscriber(connection or rabbitmq_connection(settings))
    return MessageConsumer(subscription_name(settings), subscriber=subscriber, buffer=buffer)


def build_streaming_subscriber(settings: Settings) -> GooglePubSubStreamingSubscriber:
    """Push-mode subscriber; only Google Pub/Sub delivers by streaming pull."""
    if settings.broker != "gcp":
        raise ValueError(f"Streaming delivery is not supported for broker: {settings.broker}")
    return GooglePubSubStreamingSubscriber()


def build_product_service(settings: Settings, engine: Optional[Engine] = None) -> ProductService:
    repository = SqlAlchemyProductRepository(engine or create_engine(settings.database_url))
    repository.create_schema()
    return ProductService(repository)
