"""Google Cloud Pub/Sub adapter for courier pub-sub protocols."""

from courier.adapters.gcp.publisher import GooglePubSubPublisher
from courier.adapters.gcp.subscriber import GooglePubSubStreamingSubscriber, GooglePubSubSubscriber

__all__ = ["GooglePubSubPublisher", "GooglePubSubSubscriber", "GooglePubSubStreamingSubscriber"]
