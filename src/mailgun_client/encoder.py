# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Conversion of a :class:`~mailgun_client.models.Message` into a request body.

Two representations are produced:

- ``application/x-www-form-urlencoded`` when the message has no attachments;
- ``multipart/form-data`` when it has file or inline attachments, with every
  text field as a form part followed by one file part per attachment.

The mapping from message attributes to Mailgun parameter names lives in the
declarative :data:`WIRE_FIELDS` table. Prefixes follow the provider's naming
scheme: ``o:`` delivery options, ``t:`` template options, ``h:`` custom MIME
headers and ``v:`` custom variables.

Example:
    Encoding a message::

        body = Encoder().encode(message)
        if body.is_multipart:
            writer = body.to_multipart()
        else:
            data = body.form_body()
"""

from __future__ import annotations

import json
import mimetypes
from dataclasses import dataclass
from itertools import chain
from pathlib import Path
from typing import Any, Callable, List, Optional, Tuple
from urllib.parse import urlencode

import aiohttp

from .errors import BodyConstructionError, FieldSerializationError, InvalidMessageError
from .logger import get_logger
from .models import Attachment, Message

logger = get_logger("MailgunEncoder")

FORM_URLENCODED = "application/x-www-form-urlencoded"
DEFAULT_FILE_CONTENT_TYPE = "application/octet-stream"


def _verbatim(value: Any) -> Optional[str]:
    return str(value)


def _render(value: Any) -> Optional[str]:
    return value.render()


def _yes_no(value: bool) -> Optional[str]:
    return "yes" if value else "no"


def _yes_or_omit(value: bool) -> Optional[str]:
    return "yes" if value else None


def _to_json(value: Any) -> Optional[str]:
    return json.dumps(dict(value), separators=(",", ":"))


@dataclass(frozen=True)
class WireField:
    """One row of the attribute to wire parameter mapping.

    Attributes:
        attribute: Name of the :class:`Message` attribute.
        wire_name: Parameter name, or prefix when ``per_key`` is set.
        format: Converts the attribute value to its string form. Returning
            ``None`` omits the parameter.
        per_key: Emit one ``<wire_name><key>`` parameter per mapping entry.
    """

    attribute: str
    wire_name: str
    format: Callable[[Any], Optional[str]] = _verbatim
    per_key: bool = False


WIRE_FIELDS: Tuple[WireField, ...] = (
    WireField("from_", "from", _render),
    WireField("to", "to", _render),
    WireField("cc", "cc", _render),
    WireField("bcc", "bcc", _render),
    WireField("subject", "subject"),
    WireField("text", "text"),
    WireField("html", "html"),
    WireField("amp_html", "amp-html"),
    WireField("template", "template"),
    WireField("template_version", "t:version"),
    WireField("template_text", "t:text", _yes_or_omit),
    WireField("option_tag", "o:tag"),
    WireField("option_dkim", "o:dkim"),
    WireField("option_deliverytime", "o:deliverytime"),
    WireField("option_testmode", "o:testmode"),
    WireField("option_tracking", "o:tracking"),
    WireField("option_tracking_clicks", "o:tracking-clicks"),
    WireField("option_tracking_opens", "o:tracking-opens", _yes_no),
    WireField("option_require_tls", "o:require-tls", _yes_no),
    WireField("option_skip_verification", "o:skip-verification", _yes_no),
    WireField("custom_headers", "h:", per_key=True),
    WireField("custom_data", "v:", per_key=True),
    WireField("recipient_variables", "recipient-variables", _to_json),
)


def wire_params(message: Message) -> List[Tuple[str, str]]:
    """Flatten a message into ordered ``(wire_name, value)`` pairs.

    Unset attributes are skipped. Attachments are not part of the table.

    Raises:
        FieldSerializationError: If a structured field cannot be encoded.
    """
    params: List[Tuple[str, str]] = []
    for spec in WIRE_FIELDS:
        value = getattr(message, spec.attribute)
        if value is None:
            continue
        if spec.per_key:
            params.extend((f"{spec.wire_name}{key}", str(item)) for key, item in value.items())
            continue
        try:
            formatted = spec.format(value)
        except (TypeError, ValueError) as exc:
            raise FieldSerializationError(spec.wire_name, str(exc)) from exc
        if formatted is not None:
            params.append((spec.wire_name, formatted))
    return params


def validate_for_sending(message: Message) -> None:
    """Check that the message can be handed to Mailgun.

    Raises:
        InvalidMessageError: If neither a text nor an HTML body is set.
    """
    if not message.has_body:
        raise InvalidMessageError("No message body is set: set text or html before sending")


@dataclass(frozen=True)
class FilePart:
    """A file read from disk, ready to become a multipart part."""

    field_name: str
    filename: str
    content: bytes
    content_type: str = DEFAULT_FILE_CONTENT_TYPE


@dataclass(frozen=True)
class EncodedBody:
    """Encoded form of a message, independent of the HTTP library.

    Attributes:
        fields: Ordered text parameters.
        files: File parts, attachments first then inline attachments.
        is_multipart: Whether the body must be sent as multipart/form-data.
    """

    fields: Tuple[Tuple[str, str], ...]
    files: Tuple[FilePart, ...] = ()
    is_multipart: bool = False

    def form_body(self) -> str:
        """Return the URL-encoded body (spaces as ``+``, reserved chars percent-encoded)."""
        return urlencode(self.fields)

    def to_multipart(self) -> aiohttp.MultipartWriter:
        """Assemble a ``multipart/form-data`` writer for aiohttp.

        The writer generates the boundary; its ``content_type`` carries it and
        must be sent as the request Content-Type.

        Raises:
            BodyConstructionError: If a part cannot be added to the writer.
        """
        writer = aiohttp.MultipartWriter("form-data")
        try:
            for name, value in self.fields:
                part = writer.append(value)
                part.set_content_disposition("form-data", quote_fields=False, name=name)
            for file in self.files:
                part = writer.append(file.content, {"Content-Type": file.content_type})
                part.set_content_disposition(
                    "form-data",
                    quote_fields=False,
                    name=file.field_name,
                    filename=file.filename,
                )
        except (TypeError, ValueError) as exc:
            raise BodyConstructionError(str(exc)) from exc
        return writer


class Encoder:
    """Chooses the wire representation of a message and serializes it.

    Every message is validated with :func:`validate_for_sending` before it is
    encoded, so no transport can send a message without a body.
    """

    def encode(self, message: Message) -> EncodedBody:
        """Encode a message.

        Attachment files are read while encoding.

        Raises:
            InvalidMessageError: If the message has no text or HTML body.
            FieldSerializationError: If recipient variables cannot be JSON encoded.
            BodyConstructionError: If an attachment file cannot be read.
        """
        validate_for_sending(message)
        fields = tuple(message.to_wire_params())

        if not message.has_files:
            logger.debug("Encoding message '%s' as %s", message.subject, FORM_URLENCODED)
            return EncodedBody(fields=fields)

        attachments = chain(message.attachments or (), message.inline_attachments or ())
        files = tuple(self._read_file(attachment) for attachment in attachments)
        logger.debug(
            "Encoding message '%s' as multipart/form-data with %d file(s)",
            message.subject,
            len(files),
        )
        return EncodedBody(fields=fields, files=files, is_multipart=True)

    def _read_file(self, attachment: Attachment) -> FilePart:
        """Read an attachment's bytes and guess its MIME type from the filename.

        Raises:
            BodyConstructionError: If the file cannot be read.
        """
        path = Path(attachment.source_path)
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise BodyConstructionError(
                f"cannot read attachment '{attachment.field_name}' from {path}: {exc}"
            ) from exc

        content_type, _ = mimetypes.guess_type(path.name)
        return FilePart(
            field_name=attachment.field_name,
            filename=path.name,
            content=content,
            content_type=content_type or DEFAULT_FILE_CONTENT_TYPE,
        )
