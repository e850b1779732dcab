"""TinySpeck data models — Pydantic v2, frozen where they describe configuration."""

from tinyspeck.models.classification import (
    CATEGORY_MARKERS,
    DEFAULT_RULES,
    ClassifierConfig,
    TopicField,
    TopicRule,
)
from tinyspeck.models.routing import ErrorPolicy

__all__ = [
    # classification
    "CATEGORY_MARKERS",
    "DEFAULT_RULES",
    "ClassifierConfig",
    "TopicField",
    "TopicRule",
    # routing
    "ErrorPolicy",
]
