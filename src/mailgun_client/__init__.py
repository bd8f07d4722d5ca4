# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Client library for sending transactional email through the Mailgun API.

Typically you build a message with :class:`MessageBuilder` and send it with
an async :class:`Dispatcher` or the blocking :class:`MailgunClient`::

    from mailgun_client import Address, Dispatcher, MessageBuilder

    builder = MessageBuilder(
        "Subject Line",
        Address("from@host.com"),
        [Address("to1@host.com"), Address("to2@host.com")],
    )
    builder.html("<h1>Message Body</h1>")

    outcome = await Dispatcher("YOUR_API_KEY", "YOUR_DOMAIN.com").send(builder.message)
"""

from .builder import MessageBuilder
from .client import MailgunClient
from .config import MailgunConfig, load_config
from .dispatcher import DEFAULT_API_BASE, EU_API_BASE, Dispatcher, classify_response
from .encoder import EncodedBody, Encoder, FilePart, validate_for_sending
from .errors import (
    ApiForbiddenError,
    BodyConstructionError,
    ConfigurationError,
    DecodeError,
    FieldSerializationError,
    InvalidMessageError,
    MailgunError,
    SendRejected,
    TransportError,
)
from .models import (
    Address,
    AddressList,
    Attachment,
    AttachmentList,
    Message,
    SendFailure,
    SendOutcome,
)

__all__ = [
    "Address",
    "AddressList",
    "ApiForbiddenError",
    "Attachment",
    "AttachmentList",
    "BodyConstructionError",
    "ConfigurationError",
    "DEFAULT_API_BASE",
    "DecodeError",
    "Dispatcher",
    "EU_API_BASE",
    "EncodedBody",
    "Encoder",
    "FieldSerializationError",
    "FilePart",
    "InvalidMessageError",
    "MailgunClient",
    "MailgunConfig",
    "MailgunError",
    "Message",
    "MessageBuilder",
    "SendFailure",
    "SendOutcome",
    "SendRejected",
    "TransportError",
    "classify_response",
    "load_config",
    "validate_for_sending",
]
