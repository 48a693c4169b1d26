"""Errors raised while turning hook events into DingTalk messages."""

from __future__ import annotations

from typing import Any


class DingtalkError(Exception):
    """Base class for notification building failures."""


class UnsupportedEventError(DingtalkError):
    """The event tag is not one of the known hook event types."""

    def __init__(self, event: Any) -> None:
        self.event = event
        super().__init__(f"unexpected event {event!r}")


class InvalidPayloadError(DingtalkError):
    """The event data does not match the model of its event type."""

    def __init__(self, event: str, detail: Any) -> None:
        self.event = event
        self.detail = detail
        super().__init__(f"invalid {event} payload: {detail}")


class PayloadEncodingError(DingtalkError):
    """The finished payload could not be encoded to JSON."""
