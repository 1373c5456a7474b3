"""Environment-driven settings and logging setup."""

import logging
import os
from typing import Literal, Mapping, Optional

from pydantic import BaseModel, Field

ENV_PREFIX = "COURIER_"

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class Settings(BaseModel):
    """
    Runtime settings.

    Every field can be set from an environment variable named
    ``COURIER_<FIELD>``, e.g. ``COURIER_RABBITMQ_PORT=5673``.
    """

    broker: Literal["rabbitmq", "gcp"] = "rabbitmq"
    project_id: str = "test-project"
    topic: str = "example-topic"
    subscription: str = "example-subscription"
    rabbitmq_host: str = "localhost"
    rabbitmq_port: int = Field(default=5672, gt=0, lt=65536)
    database_url: str = "sqlite://"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from ``COURIER_*`` environment variables.

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        environ = os.environ if environ is None else environ
        values = {}
        for name in cls.model_fields:
            key = ENV_PREFIX + name.upper()
            if key in environ:
                values[name] = environ[key]
        if "log_level" in values:
            values["log_level"] = values["log_level"].upper()
        return cls(**values)


def configure_logging(level: str = "INFO") -> None:
    """Send log records from every courier module to stderr."""
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("pika").setLevel(logging.WARNING)
