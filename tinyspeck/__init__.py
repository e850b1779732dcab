"""TinySpeck: a minimal adapter for the Slack Web API, realtime socket and webhooks.

Inbound payloads (JSON objects, JSON strings or URL-encoded forms) are
normalized into one canonical message and published to subscribers by
topic: the ``*`` wildcard, the event type, slash command, trigger word or
interactive ``callback_id``.
"""

__version__ = "1.0.0"
__description__ = "Minimal Slack adapter with message normalization and topic routing"

from tinyspeck.adapter import TinySpeck, create
from tinyspeck.core import (
    EventClassifier,
    EventDispatcher,
    EventRegistry,
    PayloadDecodeError,
    SubscriberError,
    classify,
    decode,
)

__all__ = [
    "EventClassifier",
    "EventDispatcher",
    "EventRegistry",
    "PayloadDecodeError",
    "SubscriberError",
    "TinySpeck",
    "__version__",
    "classify",
    "create",
    "decode",
]
