"""Unit tests for EventClassifier — topic order and rule configuration."""

from __future__ import annotations

from tinyspeck.core.classifier import EventClassifier, classify, extract_field
from tinyspeck.models.classification import (
    ClassifierConfig,
    TopicField,
    TopicRule,
)


class TestDefaultClassification:
    """The default rules emit the wildcard and then each specific value."""

    def test_empty_message_is_wildcard_only(self):
        assert classify({}) == ["*"]

    def test_slash_command(self):
        assert classify({"command": "/test"}) == ["*", "/test"]

    def test_event_and_trigger_word(self):
        topics = classify({"event": {"type": "message"}, "trigger_word": "bot"})
        assert topics == ["*", "message", "bot"]

    def test_top_level_type(self):
        assert classify({"type": "url_verification"}) == ["*", "url_verification"]

    def test_callback_id_from_payload(self):
        assert classify({"payload": {"callback_id": "btn1"}}) == ["*", "btn1"]

    def test_fixed_field_order(self):
        message = {
            "payload": {"callback_id": "cb"},
            "trigger_word": "tw",
            "command": "/cmd",
            "event": {"type": "ev"},
            "type": "event_callback",
        }
        assert classify(message) == ["*", "event_callback", "ev", "/cmd", "tw", "cb"]

    def test_empty_values_are_skipped(self):
        assert classify({"type": "", "command": "", "event": {}}) == ["*"]

    def test_event_without_mapping_is_skipped(self):
        assert classify({"event": "message"}) == ["*"]

    def test_duplicate_values_are_kept(self):
        assert classify({"type": "message", "event": {"type": "message"}}) == [
            "*",
            "message",
            "message",
        ]

    def test_non_string_values_are_stringified(self):
        assert classify({"command": 7}) == ["*", "7"]

    def test_repeated_form_key_emits_each_value(self):
        assert classify({"command": ["/a", "/b"]}) == ["*", "/a", "/b"]

    def test_structured_values_are_not_topics(self):
        assert classify({"type": {"nested": 1}, "command": [{"x": 1}, ""]}) == ["*"]

    def test_classification_does_not_modify_message(self):
        message = {"command": "/test", "payload": {"callback_id": "x"}}
        snapshot = {"command": "/test", "payload": {"callback_id": "x"}}
        classify(message)
        assert message == snapshot


class TestCategoryRules:
    """Broad category markers precede the specific value when enabled."""

    def test_with_categories(self):
        classifier = EventClassifier(ClassifierConfig.with_categories())
        assert classifier.classify({"command": "/deploy"}) == ["*", "slash_command", "/deploy"]
        assert classifier.classify({"event": {"type": "message"}}) == ["*", "event", "message"]
        assert classifier.classify({"trigger_word": "bot"}) == ["*", "webhook", "bot"]
        assert classifier.classify({"payload": {"callback_id": "b"}}) == [
            "*",
            "interactive_message",
            "b",
        ]

    def test_list_value_gets_one_category_marker(self):
        classifier = EventClassifier(ClassifierConfig.with_categories())
        assert classifier.classify({"command": ["/a", "/b"]}) == [
            "*",
            "slash_command",
            "/a",
            "/b",
        ]

    def test_type_field_has_no_category(self):
        classifier = EventClassifier(ClassifierConfig.with_categories())
        assert classifier.classify({"type": "url_verification"}) == ["*", "url_verification"]

    def test_category_only_rule(self):
        rules = (TopicRule(field=TopicField.COMMAND, emit_value=False, category="slash_command"),)
        classifier = EventClassifier(ClassifierConfig(rules=rules))
        assert classifier.classify({"command": "/deploy", "type": "x"}) == ["*", "slash_command"]

    def test_rules_are_applied_in_field_order(self):
        rules = (
            TopicRule(field=TopicField.CALLBACK_ID),
            TopicRule(field=TopicField.TYPE),
        )
        classifier = EventClassifier(ClassifierConfig(rules=rules))
        message = {"type": "t", "payload": {"callback_id": "c"}}
        assert classifier.classify(message) == ["*", "t", "c"]

    def test_custom_wildcard(self):
        classifier = EventClassifier(ClassifierConfig(wildcard="all"))
        assert classifier.classify({}) == ["all"]


class TestExtractField:
    def test_nested_fields(self):
        message = {"event": {"type": "reaction_added"}, "payload": {"callback_id": "c"}}
        assert extract_field(message, TopicField.EVENT) == "reaction_added"
        assert extract_field(message, TopicField.CALLBACK_ID) == "c"
        assert extract_field(message, TopicField.COMMAND) is None
