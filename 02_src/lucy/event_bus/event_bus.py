"""EventBus implementation for state-change notifications."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Protocol

from ..logging_config import get_logger

logger = get_logger(__name__)


class Topic(str, Enum):
    """EventBus topics."""

    TIMELINE = "timeline"
    ASSETS = "assets"
    CINEMA = "cinema"


@dataclass
class BusMessage:
    """A state-change notification."""

    topic: Topic
    payload: dict  # varies by topic
    source: str  # component that published
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))


TopicHandler = Callable[[BusMessage], None]


class IEventBus(Protocol):
    """In-process pub/sub between state holders and observers."""

    def subscribe(self, topic: Topic, handler: TopicHandler) -> None:
        """Subscribe a handler to a topic."""
        ...

    def unsubscribe(self, topic: Topic, handler: TopicHandler) -> None:
        """Remove a previously subscribed handler."""
        ...

    def publish(self, topic: Topic, source: str, payload: dict | None = None) -> None:
        """Notify subscribers of the topic in subscription order."""
        ...


class EventBus:
    """Synchronous in-memory pub/sub."""

    def __init__(self):
        self._subscribers: dict[Topic, list[TopicHandler]] = {
            topic: [] for topic in Topic
        }

    def subscribe(self, topic: Topic, handler: TopicHandler) -> None:
        """Subscribe a handler to a topic."""
        self._subscribers[topic].append(handler)

    def unsubscribe(self, topic: Topic, handler: TopicHandler) -> None:
        """Remove a previously subscribed handler."""
        try:
            self._subscribers[topic].remove(handler)
        except ValueError:
            logger.debug("Handler not subscribed to %s", topic.value)

    def publish(self, topic: Topic, source: str, payload: dict | None = None) -> None:
        """Notify subscribers of the topic in subscription order."""
        message = BusMessage(topic=topic, payload=payload or {}, source=source)

        # One failing observer must not break the state holder or other observers
        for i, handler in enumerate(list(self._subscribers[topic])):
            try:
                handler(message)
            except Exception as e:
                logger.error(
                    "Error in %s handler %s: %s", topic.value, i, e, exc_info=True
                )
