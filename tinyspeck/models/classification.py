"""Topic classification rules — which message fields become topics.

A rule names one source field and decides whether that field contributes
its specific value, a broad category marker, or both.  Rules are evaluated
in a fixed order so the resulting topic set is deterministic.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class TopicField(str, Enum):
    """The message fields that can produce a topic, in evaluation order."""

    TYPE = "type"
    EVENT = "event"
    COMMAND = "command"
    TRIGGER_WORD = "trigger_word"
    CALLBACK_ID = "callback_id"


class TopicRule(BaseModel):
    """How a single field contributes to the topic set.

    Attributes
    ----------
    field:
        The source field.
    emit_value:
        Publish under the field's own value (e.g. ``"/deploy"``).
    category:
        Optional broad marker published before the value
        (e.g. ``"slash_command"``).
    """

    model_config = ConfigDict(frozen=True)

    field: TopicField
    emit_value: bool = True
    category: str | None = None


DEFAULT_RULES: tuple[TopicRule, ...] = tuple(TopicRule(field=f) for f in TopicField)

CATEGORY_MARKERS: dict[TopicField, str] = {
    TopicField.EVENT: "event",
    TopicField.COMMAND: "slash_command",
    TopicField.TRIGGER_WORD: "webhook",
    TopicField.CALLBACK_ID: "interactive_message",
}


class ClassifierConfig(BaseModel):
    """The complete rule set used by :class:`~tinyspeck.core.classifier.EventClassifier`.

    Rules are always applied in :class:`TopicField` order regardless of the
    order they are given in.
    """

    model_config = ConfigDict(frozen=True)

    wildcard: str = "*"
    rules: tuple[TopicRule, ...] = DEFAULT_RULES

    def ordered_rules(self) -> list[TopicRule]:
        order = list(TopicField)
        return sorted(self.rules, key=lambda r: order.index(r.field))

    @classmethod
    def with_categories(cls, wildcard: str = "*") -> ClassifierConfig:
        """Rule set that also emits the broad category markers."""
        rules = tuple(
            TopicRule(field=f, category=CATEGORY_MARKERS.get(f))
            for f in TopicField
        )
        return cls(wildcard=wildcard, rules=rules)
