# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Asynchronous delivery of messages to the Mailgun send API.

The dispatcher owns one HTTP exchange per call: it encodes the message,
POSTs it to ``<api_base>/<domain>/messages`` with HTTP Basic authentication
(user ``api``, password the API key), reads the whole response body and
classifies it.

Mailgun reports results in the body rather than in the status code, so the
status is never inspected:

- the literal text ``Forbidden`` means the API key was rejected;
- ``{"message": ..., "id": ...}`` means the message was queued;
- ``{"message": ...}`` means the provider refused the message.

Example:
    Sending a message::

        dispatcher = Dispatcher("key-123", "mg.example.com")
        outcome = await dispatcher.send(builder.message)
        print(outcome.id)
"""

from __future__ import annotations

import asyncio
from typing import Annotated, Optional, Union

import aiohttp
from pydantic import Field, TypeAdapter, ValidationError

from .encoder import FORM_URLENCODED, Encoder
from .errors import (
    ApiForbiddenError,
    DecodeError,
    SendRejected,
    TransportError,
)
from .logger import get_logger
from .models import Message, SendFailure, SendOutcome

logger = get_logger("Dispatcher")

DEFAULT_API_BASE = "https://api.mailgun.net/v3"
EU_API_BASE = "https://api.eu.mailgun.net/v3"
API_USER = "api"
FORBIDDEN_BODY = "Forbidden"

# Shapes are told apart by the presence of "id": try the richer one first.
_RESPONSE_ADAPTER: TypeAdapter[Union[SendOutcome, SendFailure]] = TypeAdapter(
    Annotated[Union[SendOutcome, SendFailure], Field(union_mode="left_to_right")]
)


def messages_url(api_base: str, domain: str) -> str:
    """Build the send endpoint URL for a domain."""
    return f"{api_base.rstrip('/')}/{domain}/messages"


def classify_response(text: str) -> SendOutcome:
    """Turn a raw response body into an outcome.

    Args:
        text: Full response body.

    Returns:
        The parsed success response.

    Raises:
        ApiForbiddenError: If the body is exactly ``Forbidden``.
        SendRejected: If the body is a failure message.
        DecodeError: If the body matches no known shape.
    """
    if text == FORBIDDEN_BODY:
        raise ApiForbiddenError()

    try:
        parsed = _RESPONSE_ADAPTER.validate_json(text)
    except ValidationError as exc:
        raise DecodeError(f"Unexpected response body: {text[:200]!r}") from exc

    if isinstance(parsed, SendFailure):
        raise SendRejected(parsed)
    return parsed


class Dispatcher:
    """Sends messages to Mailgun over aiohttp.

    The dispatcher keeps only credentials between calls, so concurrent
    ``send`` calls need no coordination.

    Attributes:
        domain: Sending domain.
        api_base: API root, without trailing slash.
    """

    def __init__(
        self,
        api_key: str,
        domain: str,
        api_base: str = DEFAULT_API_BASE,
        session: Optional[aiohttp.ClientSession] = None,
        encoder: Optional[Encoder] = None,
    ):
        """Initialize the dispatcher.

        Args:
            api_key: Secret Mailgun API key.
            domain: Sending domain registered on Mailgun.
            api_base: API root URL.
            session: Optional caller-owned session. When omitted a session is
                opened and closed for each call.
            encoder: Encoder to use; a default one is created when omitted.
        """
        self._api_key = api_key
        self.domain = domain
        self.api_base = api_base.rstrip("/")
        self._session = session
        self._encoder = encoder or Encoder()

    @property
    def messages_url(self) -> str:
        return messages_url(self.api_base, self.domain)

    def _auth(self) -> aiohttp.BasicAuth:
        return aiohttp.BasicAuth(API_USER, self._api_key)

    async def send(self, message: Message) -> SendOutcome:
        """Send one message and classify Mailgun's answer.

        Args:
            message: The message to send. It is not retained after the call.

        Returns:
            The success response with the provider message id.

        Raises:
            InvalidMessageError: If the message has no body; nothing is sent.
            FieldSerializationError: If recipient variables cannot be encoded.
            BodyConstructionError: If an attachment cannot be read.
            TransportError: If the request fails or the body cannot be read.
            ApiForbiddenError: If the API key is rejected.
            SendRejected: If Mailgun refuses the message.
            DecodeError: If the response body is not understood.
        """
        if message.has_files:
            body = await asyncio.to_thread(self._encoder.encode, message)
        else:
            body = self._encoder.encode(message)

        if body.is_multipart:
            data = body.to_multipart()
            headers = {"Content-Type": data.content_type}
        else:
            data = body.form_body()
            headers = {"Content-Type": FORM_URLENCODED}

        logger.debug("POST %s (%s)", self.messages_url, headers["Content-Type"])

        if self._session is not None:
            text = await self._exchange(self._session, data, headers)
        else:
            async with aiohttp.ClientSession() as session:
                text = await self._exchange(session, data, headers)

        try:
            outcome = classify_response(text)
        except (ApiForbiddenError, SendRejected) as exc:
            logger.warning("Mailgun did not accept message '%s': %s", message.subject, exc)
            raise

        logger.info("Message '%s' queued by Mailgun with id %s", message.subject, outcome.id)
        return outcome

    async def _exchange(
        self,
        session: aiohttp.ClientSession,
        data: Union[str, aiohttp.MultipartWriter],
        headers: dict,
    ) -> str:
        """POST the body and return the full response text."""
        try:
            response = await session.post(
                self.messages_url,
                data=data,
                headers=headers,
                auth=self._auth(),
            )
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError(f"Unable to send request to {self.messages_url}: {exc}") from exc

        async with response:
            try:
                return await response.text()
            except (aiohttp.ClientError, asyncio.TimeoutError, UnicodeDecodeError) as exc:
                raise TransportError("Unable to read response") from exc

    def __repr__(self) -> str:
        return f"<Dispatcher domain='{self.domain}' api_base='{self.api_base}'>"
