"""Topic and subscription addressing."""

from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict, field_validator


def _check_name(value: str) -> str:
    if not value:
        raise ValueError("name must not be empty")
    if "/" in value:
        raise ValueError(f"name must not contain '/': {value!r}")
    return value


class _ResourcePath(BaseModel):
    """Base for fully-qualified Pub/Sub resource names."""

    model_config = ConfigDict(frozen=True)

    collection: ClassVar[str] = ""

    project: str

    @field_validator("project")
    @classmethod
    def validate_project(cls, value: str) -> str:
        return _check_name(value)

    @property
    def name(self) -> str:
        raise NotImplementedError

    def __str__(self) -> str:
        return f"projects/{self.project}/{self.collection}/{self.name}"

    @classmethod
    def _split(cls, path: str, default_project: Optional[str]) -> tuple[str, str]:
        parts = path.split("/")
        if len(parts) == 4 and parts[0] == "projects" and parts[2] == cls.collection:
            return parts[1], parts[3]
        if len(parts) == 1:
            if default_project is None:
                raise ValueError(f"bare name {path!r} needs a default project")
            return default_project, path
        raise ValueError(f"not a valid {cls.collection} path: {path!r}")


class TopicPath(_ResourcePath):
    """Address of a topic, e.g. ``projects/my-project/topics/example-topic``."""

    collection: ClassVar[str] = "topics"

    topic: str

    @field_validator("topic")
    @classmethod
    def validate_topic(cls, value: str) -> str:
        return _check_name(value)

    @property
    def name(self) -> str:
        return self.topic

    @classmethod
    def parse(cls, path: str, default_project: Optional[str] = None) -> "TopicPath":
        """
        Parse a fully-qualified topic path or a bare topic name.

        Args:
            path: ``projects/P/topics/T`` or ``T``
            default_project: Project used when ``path`` is a bare name

        Raises:
            ValueError: If the path is malformed
        """
        project, topic = cls._split(path, default_project)
        return cls(project=project, topic=topic)


class SubscriptionPath(_ResourcePath):
    """Address of a subscription, e.g. ``projects/my-project/subscriptions/example-subscription``."""

    collection: ClassVar[str] = "subscriptions"

    subscription: str

    @field_validator("subscription")
    @classmethod
    def validate_subscription(cls, value: str) -> str:
        return _check_name(value)

    @property
    def name(self) -> str:
        return self.subscription

    @classmethod
    def parse(cls, path: str, default_project: Optional[str] = None) -> "SubscriptionPath":
        """Parse a fully-qualified subscription path or a bare subscription name."""
        project, subscription = cls._split(path, default_project)
        return cls(project=project, subscription=subscription)
