"""Event registry — topic name to ordered subscriber callbacks.

Subscriber lists are copy-on-write: every mutation swaps in a new list
under a lock, so ``publish`` can iterate whatever list it picked up
without locking and without seeing a half-applied change.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Callable, Iterable
from typing import Any

logger = logging.getLogger(__name__)

Callback = Callable[[dict[str, Any]], Any]
ErrorHook = Callable[[str, Callback, Exception], None]


def callback_name(callback: Callback) -> str:
    return getattr(callback, "__qualname__", None) or repr(callback)


class EventRegistry:
    """Multi-topic publish/subscribe table.

    Usage
    -----
    >>> registry = EventRegistry()
    >>> registry.subscribe(["*", "message"], print)
    >>> registry.publish("message", {"text": "hi"})
    {'text': 'hi'}
    1
    """

    def __init__(self) -> None:
        self._subscribers: dict[str, list[Callback]] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Subscription management
    # ------------------------------------------------------------------

    def subscribe(self, topics: str | Iterable[str], callback: Callback) -> None:
        """Attach *callback* to every topic in *topics*.

        All topics are updated in one step.  Repeated subscriptions append;
        the same callback may be registered more than once.
        """
        if not callable(callback):
            raise TypeError(f"Subscriber must be callable, got {callback!r}")
        names = [topics] if isinstance(topics, str) else list(topics)

        with self._lock:
            for name in names:
                self._subscribers[name] = [*self._subscribers.get(name, []), callback]

        logger.info(
            "Subscribed %s to %s", callback_name(callback), ", ".join(names)
        )

    def unsubscribe(
        self, callback: Callback, topics: str | Iterable[str] | None = None
    ) -> int:
        """Remove every registration of *callback*.

        When *topics* is given only those topics are affected.  Returns the
        number of registrations removed.
        """
        removed = 0
        with self._lock:
            if topics is None:
                names = list(self._subscribers)
            elif isinstance(topics, str):
                names = [topics]
            else:
                names = list(topics)

            for name in names:
                current = self._subscribers.get(name)
                if not current:
                    continue
                kept = [cb for cb in current if cb != callback]
                removed += len(current) - len(kept)
                if kept:
                    self._subscribers[name] = kept
                else:
                    del self._subscribers[name]

        if removed:
            logger.info(
                "Unsubscribed %s (%d registrations)", callback_name(callback), removed
            )
        return removed

    def clear(self, topic: str | None = None) -> None:
        """Drop all subscribers, or only those of *topic*."""
        with self._lock:
            if topic is None:
                self._subscribers = {}
            else:
                self._subscribers.pop(topic, None)

    def subscribers(self, topic: str) -> list[Callback]:
        """Return a copy of the subscribers registered for *topic*."""
        return list(self._subscribers.get(topic, []))

    @property
    def topics(self) -> list[str]:
        """Topics that currently have at least one subscriber."""
        return list(self._subscribers)

    # ------------------------------------------------------------------
    # Publish
    # ------------------------------------------------------------------

    def publish(
        self,
        topic: str,
        message: dict[str, Any],
        on_error: ErrorHook | None = None,
    ) -> int:
        """Invoke every subscriber of *topic* in registration order.

        Without *on_error* the first failing callback propagates and the
        remaining subscribers are skipped.  With it, each failure is passed
        to ``on_error(topic, callback, exc)`` and delivery continues.

        Returns the number of callbacks invoked.
        """
        snapshot = self._subscribers.get(topic, [])
        for callback in snapshot:
            if on_error is None:
                callback(message)
                continue
            try:
                callback(message)
            except Exception as exc:  # noqa: BLE001
                on_error(topic, callback, exc)
        return len(snapshot)
