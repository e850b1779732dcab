"""Event classifier — derives the ordered topic set for a canonical message."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from tinyspeck.models.classification import ClassifierConfig, TopicField


class EventClassifier:
    """Maps a decoded message to the topics it should be published under.

    The wildcard always comes first.  Each configured rule then contributes
    its category marker and/or the field's value when the field is present
    and non-empty.  Classification is a pure function of the message.

    Parameters
    ----------
    config:
        The rule set.  Defaults to specific-value topics only.
    """

    def __init__(self, config: ClassifierConfig | None = None) -> None:
        self._config = config or ClassifierConfig()
        self._rules = self._config.ordered_rules()

    @property
    def config(self) -> ClassifierConfig:
        return self._config

    def classify(self, message: Mapping[str, Any]) -> list[str]:
        """Return the topics for *message*, wildcard first.

        A field holding a list (a repeated form key) emits one topic per
        non-empty item, after a single category marker.  Mapping values and
        mapping items are not topics and are skipped.
        """
        topics = [self._config.wildcard]
        for rule in self._rules:
            values = _topic_values(extract_field(message, rule.field))
            if not values:
                continue
            if rule.category:
                topics.append(rule.category)
            if rule.emit_value:
                topics.extend(values)
        return topics


def _topic_values(value: Any) -> list[str]:
    if isinstance(value, (list, tuple)):
        return [
            str(item)
            for item in value
            if item and not isinstance(item, (Mapping, list, tuple))
        ]
    if not value or isinstance(value, Mapping):
        return []
    return [str(value)]


def extract_field(message: Mapping[str, Any], field: TopicField) -> Any:
    """Return the raw value *field* refers to, or ``None`` if absent."""
    if field is TopicField.EVENT:
        return _nested(message, "event", "type")
    if field is TopicField.CALLBACK_ID:
        return _nested(message, "payload", "callback_id")
    return message.get(field.value)


def _nested(message: Mapping[str, Any], outer: str, inner: str) -> Any:
    container = message.get(outer)
    if isinstance(container, Mapping):
        return container.get(inner)
    return None


_default_classifier = EventClassifier()


def classify(message: Mapping[str, Any]) -> list[str]:
    """Classify *message* with the default rule set."""
    return _default_classifier.classify(message)
