"""Routing models — how the dispatcher reacts to failing subscribers."""

from __future__ import annotations

from enum import Enum


class ErrorPolicy(str, Enum):
    """What a dispatch does when a subscriber raises."""

    ISOLATE = "isolate"
    FAIL_FAST = "fail_fast"
