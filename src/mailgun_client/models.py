# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Data models for messages sent to, and responses received from, Mailgun.

Full API documentation:
https://documentation.mailgun.com/en/latest/api-sending.html

A message needs only a subject, a sender and at least one recipient to be
constructed, but it must carry a text or an HTML body before it can be sent.
Use :class:`mailgun_client.builder.MessageBuilder` to build and modify a
message.

Models:
    - Address / AddressList: message participants
    - Attachment / AttachmentList: file references
    - Message: immutable snapshot of every sendable field
    - SendOutcome / SendFailure: the two JSON response shapes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict


@dataclass(frozen=True)
class Address:
    """A single email participant.

    Attributes:
        email_address: The bare address, passed through without RFC checks.
        display_name: Optional human-readable name.
    """

    email_address: str
    display_name: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.email_address:
            raise ValueError("email_address must not be empty")

    def render(self) -> str:
        """Return ``"name <address>"`` when a name is set, else the address."""
        if self.display_name is not None:
            return f"{self.display_name} <{self.email_address}>"
        return self.email_address

    def __str__(self) -> str:
        return self.render()


AddressLike = Union[Address, str]


def _as_address(value: AddressLike) -> Address:
    if isinstance(value, Address):
        return value
    return Address(value)


@dataclass(frozen=True)
class AddressList:
    """Ordered list of participants, rendered comma-separated."""

    addresses: Tuple[Address, ...] = ()

    @classmethod
    def of(cls, items: Union["AddressList", AddressLike, Iterable[AddressLike]]) -> "AddressList":
        """Build a list from Address objects or bare address strings."""
        if isinstance(items, AddressList):
            return items
        if isinstance(items, (str, Address)):
            items = [items]
        return cls(tuple(_as_address(item) for item in items))

    def render(self) -> str:
        return ",".join(address.render() for address in self.addresses)

    def __str__(self) -> str:
        return self.render()

    def __iter__(self) -> Iterator[Address]:
        return iter(self.addresses)

    def __len__(self) -> int:
        return len(self.addresses)


@dataclass(frozen=True)
class Attachment:
    """A logical field name paired with a local file path.

    The file is not opened here; it is read when the multipart body is built.
    """

    field_name: str
    source_path: str

    def render(self) -> str:
        return f"@{self.field_name}:{self.source_path}"

    def __str__(self) -> str:
        return self.render()


@dataclass
class AttachmentList:
    """Ordered, append-only list of attachments.

    A :class:`Message` never holds one of these: it keeps its attachments
    as a tuple, so appending here cannot reach an existing snapshot.
    """

    attachments: List[Attachment] = field(default_factory=list)

    @classmethod
    def of(cls, items: Union["AttachmentList", Iterable[Attachment]]) -> "AttachmentList":
        if isinstance(items, AttachmentList):
            return cls(list(items.attachments))
        return cls(list(items))

    def append(self, attachment: Attachment) -> None:
        self.attachments.append(attachment)

    def render(self) -> str:
        return ",".join(attachment.render() for attachment in self.attachments)

    def __str__(self) -> str:
        return self.render()

    def __iter__(self) -> Iterator[Attachment]:
        return iter(self.attachments)

    def __len__(self) -> int:
        return len(self.attachments)

    def __bool__(self) -> bool:
        return bool(self.attachments)


def _frozen_mapping(value: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    if value is None:
        return None
    return MappingProxyType(dict(value))


def _attachment_tuple(value: Optional[Iterable[Attachment]]) -> Optional[Tuple[Attachment, ...]]:
    if value is None:
        return None
    return tuple(value)


def _recipients_or_unset(value: Optional[Iterable[AddressLike]]) -> Optional[AddressList]:
    # An empty cc/bcc list is the same as not setting it.
    if value is None:
        return None
    addresses = AddressList.of(value)
    return addresses if addresses else None


@dataclass(frozen=True)
class Message:
    """Immutable snapshot of a message and all of its optional fields.

    The meaning of every field is documented at
    https://documentation.mailgun.com/en/latest/api-sending.html#sending.
    Wire names and formats are defined by ``encoder.WIRE_FIELDS``.

    Attributes:
        from_: Sender (wire name ``from``).
        to: Recipients, at least one.
        subject: Subject line.
        cc: Carbon copy recipients. An empty list is stored as ``None``.
        bcc: Blind carbon copy recipients. An empty list is stored as ``None``.
        text: Plain text body.
        html: HTML body.
        amp_html: AMP body (``amp-html``).
        attachments: File attachments (multipart only), as a tuple.
        inline_attachments: Attachments with inline disposition (multipart
            only), as a tuple.
        template: Name of a stored template.
        template_version: Template version (``t:version``).
        template_text: Render a text part from the template (``t:text``).
        option_tag: ``o:tag``.
        option_dkim: ``o:dkim``.
        option_deliverytime: ``o:deliverytime``.
        option_testmode: ``o:testmode``.
        option_tracking: ``o:tracking``.
        option_tracking_clicks: ``o:tracking-clicks``.
        option_tracking_opens: ``o:tracking-opens``.
        option_require_tls: ``o:require-tls``.
        option_skip_verification: ``o:skip-verification``.
        custom_headers: Extra MIME headers (``h:<key>``).
        custom_data: Custom variables (``v:<key>``).
        recipient_variables: Per-recipient substitutions, JSON encoded.
    """

    from_: Address
    to: AddressList
    subject: str
    cc: Optional[AddressList] = None
    bcc: Optional[AddressList] = None
    text: Optional[str] = None
    html: Optional[str] = None
    amp_html: Optional[str] = None
    attachments: Optional[Tuple[Attachment, ...]] = None
    inline_attachments: Optional[Tuple[Attachment, ...]] = None
    template: Optional[str] = None
    template_version: Optional[str] = None
    template_text: Optional[bool] = None
    option_tag: Optional[str] = None
    option_dkim: Optional[str] = None
    option_deliverytime: Optional[str] = None
    option_testmode: Optional[str] = None
    option_tracking: Optional[str] = None
    option_tracking_clicks: Optional[str] = None
    option_tracking_opens: Optional[bool] = None
    option_require_tls: Optional[bool] = None
    option_skip_verification: Optional[bool] = None
    custom_headers: Optional[Mapping[str, str]] = None
    custom_data: Optional[Mapping[str, str]] = None
    recipient_variables: Optional[Mapping[str, Any]] = None

    # Mapping fields are read-only proxies, which cannot be hashed.
    __hash__ = None

    def __post_init__(self) -> None:
        # Normalize convenience inputs; the instance stays frozen afterwards.
        object.__setattr__(self, "from_", _as_address(self.from_))
        object.__setattr__(self, "to", AddressList.of(self.to))
        if not self.to:
            raise ValueError("a message needs at least one 'to' recipient")
        for name in ("cc", "bcc"):
            object.__setattr__(self, name, _recipients_or_unset(getattr(self, name)))
        for name in ("attachments", "inline_attachments"):
            object.__setattr__(self, name, _attachment_tuple(getattr(self, name)))
        for name in ("custom_headers", "custom_data", "recipient_variables"):
            object.__setattr__(self, name, _frozen_mapping(getattr(self, name)))

    @property
    def has_body(self) -> bool:
        """True when a text or an HTML body is set."""
        return self.text is not None or self.html is not None

    @property
    def has_files(self) -> bool:
        """True when the message must be sent as multipart/form-data."""
        return bool(self.attachments) or bool(self.inline_attachments)

    def to_wire_params(self) -> List[Tuple[str, str]]:
        """Return the ordered ``(wire_name, value)`` pairs for every set field.

        Attachments are not included; they only travel as multipart file parts.

        Raises:
            FieldSerializationError: If recipient variables cannot be JSON encoded.
        """
        from .encoder import wire_params

        return wire_params(self)


class SendOutcome(BaseModel):
    """Successful send response: ``{"message": ..., "id": ...}``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    message: str


class SendFailure(BaseModel):
    """Failure response: ``{"message": ...}`` without an ``id``."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    message: str
