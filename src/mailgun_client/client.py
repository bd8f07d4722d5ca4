# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Python client for the Mailgun send API.

This module provides a small blocking facade for scripts and REPL sessions,
built on ``requests``. Async applications should use
:class:`~mailgun_client.dispatcher.Dispatcher` directly or
:meth:`MailgunClient.send_message_async`.

Usage in REPL:
    >>> from mailgun_client import Address, MailgunClient, MessageBuilder
    >>> client = MailgunClient("key-123", "mg.example.com")
    >>> builder = MessageBuilder("Hello", Address("me@example.com"), ["you@example.com"])
    >>> client.send_message(builder.text("Hi there").message)
    SendOutcome(id='<20111114174239.25659.5817@samples.mailgun.org>', message='Queued. Thank you.')
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import aiohttp
import requests

from .dispatcher import API_USER, DEFAULT_API_BASE, Dispatcher, classify_response, messages_url
from .encoder import FORM_URLENCODED, EncodedBody, Encoder
from .errors import ApiForbiddenError, SendRejected, TransportError
from .logger import get_logger
from .models import Message, SendOutcome

logger = get_logger("MailgunClient")


class MailgunClient:
    """Client holding the credentials of one Mailgun sending domain.

    Attributes:
        api_key: Secret API key, found under *Security* in the Mailgun
            control panel. Keep it secret.
        domain: Sending domain.
        api_base: API root URL.
    """

    def __init__(
        self,
        api_key: str,
        domain: str,
        api_base: str = DEFAULT_API_BASE,
    ):
        """Initialize the client.

        Args:
            api_key: Secret Mailgun API key.
            domain: Sending domain registered on Mailgun.
            api_base: API root URL.
        """
        self.api_key = api_key
        self.domain = domain
        self.api_base = api_base.rstrip("/")
        self._encoder = Encoder()

    @property
    def messages_url(self) -> str:
        return messages_url(self.api_base, self.domain)

    def _request_kwargs(self, body: EncodedBody) -> Dict[str, Any]:
        """Map an encoded body onto ``requests.post`` arguments."""
        if not body.is_multipart:
            return {
                "data": body.form_body(),
                "headers": {"Content-Type": FORM_URLENCODED},
            }
        # requests builds the multipart body and its boundary header.
        return {
            "data": list(body.fields),
            "files": [
                (part.field_name, (part.filename, part.content, part.content_type))
                for part in body.files
            ],
        }

    def send_message(self, message: Message) -> SendOutcome:
        """Send a message and wait for Mailgun's answer.

        Raises:
            InvalidMessageError: If neither text nor html is set; nothing is sent.
            FieldSerializationError: If recipient variables cannot be encoded.
            BodyConstructionError: If an attachment cannot be read.
            TransportError: If the request fails or the body cannot be read.
            ApiForbiddenError: If the API key is rejected.
            SendRejected: If Mailgun refuses the message.
            DecodeError: If the response body is not understood.
        """
        body = self._encoder.encode(message)
        url = self.messages_url
        logger.debug("POST %s (multipart=%s)", url, body.is_multipart)

        try:
            resp = requests.post(
                url,
                auth=(API_USER, self.api_key),
                stream=True,
                **self._request_kwargs(body),
            )
        except requests.RequestException as exc:
            raise TransportError(f"Unable to send request to {url}: {exc}") from exc

        try:
            text = resp.text
        except requests.RequestException as exc:
            raise TransportError("Unable to read response") from exc
        finally:
            resp.close()

        try:
            outcome = classify_response(text)
        except (ApiForbiddenError, SendRejected) as exc:
            logger.warning("Mailgun did not accept message '%s': %s", message.subject, exc)
            raise

        logger.info("Message '%s' queued by Mailgun with id %s", message.subject, outcome.id)
        return outcome

    async def send_message_async(
        self, message: Message, session: Optional[aiohttp.ClientSession] = None
    ) -> SendOutcome:
        """Send a message through :class:`Dispatcher` without blocking the loop."""
        dispatcher = Dispatcher(self.api_key, self.domain, self.api_base, session=session)
        return await dispatcher.send(message)

    def __repr__(self) -> str:
        return f"<MailgunClient domain='{self.domain}'>"
