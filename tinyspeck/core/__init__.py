"""Message normalization and event routing.

``decode`` turns any inbound wire format into a canonical dict,
``EventClassifier`` derives its topics, ``EventRegistry`` holds the
subscribers, and ``EventDispatcher`` runs the three in sequence.
"""

from tinyspeck.core.classifier import EventClassifier, classify
from tinyspeck.core.decoder import CanonicalMessage, PayloadDecodeError, decode
from tinyspeck.core.dispatcher import EventDispatcher, SubscriberError
from tinyspeck.core.registry import EventRegistry

__all__ = [
    "CanonicalMessage",
    "EventClassifier",
    "EventDispatcher",
    "EventRegistry",
    "PayloadDecodeError",
    "SubscriberError",
    "classify",
    "decode",
]
