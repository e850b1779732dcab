"""EventDispatcher — decode, classify and publish one inbound payload.

This is the single entry point the transports call.  Topics are published
in classification order and subscribers of one topic fire in registration
order.  How subscriber failures are handled is governed by
:class:`~tinyspeck.models.routing.ErrorPolicy`.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from typing import Any

from tinyspeck.core.classifier import EventClassifier
from tinyspeck.core.decoder import CanonicalMessage, decode
from tinyspeck.core.registry import Callback, EventRegistry, callback_name
from tinyspeck.models.routing import ErrorPolicy

logger = logging.getLogger(__name__)


class SubscriberError(RuntimeError):
    """Raised under ``FAIL_FAST`` when a subscriber callback fails."""

    def __init__(self, topic: str, callback: Callback, exc: Exception) -> None:
        super().__init__(
            f"Subscriber {callback_name(callback)} failed on topic {topic!r}: {exc}"
        )
        self.topic = topic
        self.callback = callback


class EventDispatcher:
    """Ties the decoder, classifier and registry together.

    Parameters
    ----------
    registry:
        Subscriber table.  A fresh one is created when omitted.
    classifier:
        Topic classifier.  Defaults to specific-value topics only.
    error_policy:
        ``ISOLATE`` logs a failing subscriber and keeps delivering;
        ``FAIL_FAST`` aborts the dispatch with :class:`SubscriberError`.
    error_handler:
        Called as ``error_handler(topic, callback, exc)`` for every isolated
        failure, after it has been logged.
    """

    def __init__(
        self,
        registry: EventRegistry | None = None,
        classifier: EventClassifier | None = None,
        *,
        error_policy: ErrorPolicy = ErrorPolicy.ISOLATE,
        error_handler: Callable[[str, Callback, Exception], None] | None = None,
    ) -> None:
        self.registry = registry or EventRegistry()
        self.classifier = classifier or EventClassifier()
        self.error_policy = ErrorPolicy(error_policy)
        self._error_handler = error_handler

    def dispatch(self, raw: str | bytes | Mapping[str, Any]) -> CanonicalMessage:
        """Decode *raw* and publish it to every topic it classifies under.

        Returns the decoded message so the caller can inspect it (for
        example to echo a verification challenge).
        """
        return self.route(decode(raw))

    def route(self, message: CanonicalMessage) -> CanonicalMessage:
        """Publish an already-decoded message to all of its topics."""
        topics = self.classifier.classify(message)
        logger.debug("Routing message to topics %s", topics)
        for topic in topics:
            self.publish(topic, message)
        return message

    def publish(self, topic: str, message: CanonicalMessage) -> int:
        """Publish to a single topic under this dispatcher's error policy."""
        if self.error_policy is ErrorPolicy.FAIL_FAST:
            return self.registry.publish(topic, message, on_error=_fail_fast)
        return self.registry.publish(topic, message, on_error=self._isolate)

    def _isolate(self, topic: str, callback: Callback, exc: Exception) -> None:
        logger.error(
            "Subscriber %s failed on topic %r: %s",
            callback_name(callback),
            topic,
            exc,
            exc_info=exc,
        )
        if self._error_handler is not None:
            self._error_handler(topic, callback, exc)


def _fail_fast(topic: str, callback: Callback, exc: Exception) -> None:
    raise SubscriberError(topic, callback, exc) from exc
