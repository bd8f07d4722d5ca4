# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exceptions raised while building, encoding and sending messages.

Every error derives from :class:`MailgunError` so callers can catch the whole
family at once. Errors wrapping a lower level failure (I/O, network, JSON)
chain it as ``__cause__``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import SendFailure


class MailgunError(Exception):
    """Base class for all Mailgun client errors."""


class ConfigurationError(MailgunError):
    """Raised when credentials or settings are missing or malformed."""


class InvalidMessageError(MailgunError, ValueError):
    """Raised when a message cannot be sent as-is (no text or html body)."""


class FieldSerializationError(MailgunError):
    """Raised when a structured field (e.g. recipient variables) cannot be encoded."""

    def __init__(self, field_name: str, reason: str):
        self.field_name = field_name
        super().__init__(f"Message Error: cannot serialize '{field_name}': {reason}")


class BodyConstructionError(MailgunError):
    """Raised when the multipart body cannot be assembled."""

    def __init__(self, reason: str):
        super().__init__(f"Message Body Error: {reason}")


class TransportError(MailgunError):
    """Raised when the request cannot be sent or the response cannot be read."""


class ApiForbiddenError(MailgunError):
    """Raised when Mailgun rejects the API key."""

    def __init__(self) -> None:
        super().__init__("API Forbidden Error")


class SendRejected(MailgunError):
    """Raised when Mailgun answers with a failure message.

    Attributes:
        message: The provider's failure message.
        response: The parsed failure response.
    """

    def __init__(self, response: "SendFailure"):
        self.response = response
        self.message = response.message
        super().__init__(f"Send Message Error: {response.message}")


class DecodeError(MailgunError):
    """Raised when the response body is neither a known JSON shape nor ``Forbidden``."""
