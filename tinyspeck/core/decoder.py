"""Wire decoder — normalizes inbound payloads into one canonical message.

The platform delivers the same logical message in three shapes: a JSON
object, a JSON string, or an ``application/x-www-form-urlencoded`` body.
Interactive payloads add one more layer: their ``payload`` field is itself
a JSON document encoded as a string.  ``decode`` flattens all of this into
a plain ``dict`` whose ``payload`` (if any) is always a ``dict``.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any
from urllib.parse import parse_qsl

CanonicalMessage = dict[str, Any]


class PayloadDecodeError(ValueError):
    """Raised when a nested ``payload`` field is not a JSON object."""


def decode(raw: str | bytes | Mapping[str, Any]) -> CanonicalMessage:
    """Decode *raw* into a canonical message.

    Text is tried as JSON first and falls back to form decoding, which never
    fails.  An already-structured mapping is shallow-copied.  In every case a
    string ``payload`` field is parsed into a dict.

    Raises
    ------
    PayloadDecodeError
        If the ``payload`` field is a string that is not a JSON object.
    TypeError
        If *raw* is not text, bytes or a mapping.
    """
    if isinstance(raw, bytes):
        raw = raw.decode("utf-8", errors="replace")

    if isinstance(raw, str):
        message = _decode_text(raw)
    elif isinstance(raw, Mapping):
        message = dict(raw)
    else:
        raise TypeError(
            f"Cannot decode payload of type {type(raw).__name__}"
        )

    payload = message.get("payload")
    if isinstance(payload, str):
        message["payload"] = _decode_payload_field(payload)

    return message


def decode_form(text: str) -> CanonicalMessage:
    """Decode a URL-encoded form body.

    Only ``&``-separated segments containing ``=`` are kept, so text with no
    recognizable pairs decodes to an empty dict.  Repeated keys collect
    their values into a list.
    """
    pairs = "&".join(seg for seg in text.split("&") if "=" in seg)
    message: CanonicalMessage = {}
    for key, value in parse_qsl(pairs, keep_blank_values=True):
        if key not in message:
            message[key] = value
        elif isinstance(message[key], list):
            message[key].append(value)
        else:
            message[key] = [message[key], value]
    return message


def _decode_text(text: str) -> CanonicalMessage:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError:
        return decode_form(text)

    # Scalars and arrays are valid JSON but not records
    if not isinstance(parsed, dict):
        return decode_form(text)
    return parsed


def _decode_payload_field(text: str) -> CanonicalMessage:
    try:
        parsed = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PayloadDecodeError(f"Malformed interactive payload: {exc}") from exc

    if not isinstance(parsed, dict):
        raise PayloadDecodeError(
            f"Interactive payload must be a JSON object, got {type(parsed).__name__}"
        )
    return parsed
