# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Fluent builder for :class:`~mailgun_client.models.Message`.

Example:
    Building a message with two recipients::

        from mailgun_client import Address, MessageBuilder

        sender = Address("sender@example.com", "Sender")
        builder = MessageBuilder(
            "Subject Line",
            sender,
            [Address("one@example.com"), Address("two@example.com", "Two")],
        )
        builder.html("<h1>Your Email</h1>").text("Your Email")

        message = builder.message

Every setter replaces the field (``None`` clears it) and returns the builder.
``attachment()`` is the exception: it appends to the attachment list.
Reading :attr:`MessageBuilder.message` returns the current snapshot; later
mutations produce new snapshots and never alter one already handed out.
"""

from __future__ import annotations

import dataclasses
from typing import Any, Iterable, Mapping, Optional, Union

from .models import (
    AddressLike,
    AddressList,
    Attachment,
    AttachmentList,
    Message,
)

Recipients = Union[AddressList, Iterable[AddressLike]]


class MessageBuilder:
    """Mutable accumulator around an immutable :class:`Message`."""

    def __init__(self, subject: str, from_: AddressLike, to: Recipients):
        self._message = Message(from_=from_, to=to, subject=subject)

    @property
    def message(self) -> Message:
        """The message in its current state."""
        return self._message

    def get_message(self) -> Message:
        return self._message

    def _set(self, **changes: Any) -> "MessageBuilder":
        self._message = dataclasses.replace(self._message, **changes)
        return self

    # Participants and subject

    def from_(self, from_: AddressLike) -> "MessageBuilder":
        return self._set(from_=from_)

    def to(self, to: Recipients) -> "MessageBuilder":
        return self._set(to=to)

    def cc(self, cc: Optional[Recipients]) -> "MessageBuilder":
        return self._set(cc=cc)

    def bcc(self, bcc: Optional[Recipients]) -> "MessageBuilder":
        return self._set(bcc=bcc)

    def subject(self, subject: str) -> "MessageBuilder":
        return self._set(subject=subject)

    # Bodies

    def text(self, text: Optional[str]) -> "MessageBuilder":
        return self._set(text=text)

    def html(self, html: Optional[str]) -> "MessageBuilder":
        return self._set(html=html)

    def amp_html(self, amp_html: Optional[str]) -> "MessageBuilder":
        return self._set(amp_html=amp_html)

    # Attachments

    def attachment(self, attachment: Attachment) -> "MessageBuilder":
        """Append one file attachment."""
        attachments = AttachmentList.of(self._message.attachments or ())
        attachments.append(attachment)
        return self._set(attachments=tuple(attachments))

    def inline(self, inline: Optional[Iterable[Attachment]]) -> "MessageBuilder":
        """Replace the inline attachments (e.g. images referenced by ``cid:``)."""
        return self._set(inline_attachments=inline)

    # Templates

    def template(self, template: Optional[str]) -> "MessageBuilder":
        return self._set(template=template)

    def template_version(self, template_version: Optional[str]) -> "MessageBuilder":
        return self._set(template_version=template_version)

    def template_text(self, template_text: Optional[bool]) -> "MessageBuilder":
        return self._set(template_text=template_text)

    # Delivery options

    def option_tag(self, option_tag: Optional[str]) -> "MessageBuilder":
        return self._set(option_tag=option_tag)

    def option_dkim(self, option_dkim: Optional[str]) -> "MessageBuilder":
        return self._set(option_dkim=option_dkim)

    def option_deliverytime(self, option_deliverytime: Optional[str]) -> "MessageBuilder":
        return self._set(option_deliverytime=option_deliverytime)

    def option_testmode(self, option_testmode: Optional[str]) -> "MessageBuilder":
        return self._set(option_testmode=option_testmode)

    def option_tracking(self, option_tracking: Optional[str]) -> "MessageBuilder":
        return self._set(option_tracking=option_tracking)

    def option_tracking_clicks(self, option_tracking_clicks: Optional[str]) -> "MessageBuilder":
        return self._set(option_tracking_clicks=option_tracking_clicks)

    def option_tracking_opens(self, option_tracking_opens: Optional[bool]) -> "MessageBuilder":
        return self._set(option_tracking_opens=option_tracking_opens)

    def option_require_tls(self, option_require_tls: Optional[bool]) -> "MessageBuilder":
        return self._set(option_require_tls=option_require_tls)

    def option_skip_verification(
        self, option_skip_verification: Optional[bool]
    ) -> "MessageBuilder":
        return self._set(option_skip_verification=option_skip_verification)

    # Custom headers and variables

    def custom_headers(self, custom_headers: Optional[Mapping[str, str]]) -> "MessageBuilder":
        return self._set(custom_headers=custom_headers)

    def custom_data(self, custom_data: Optional[Mapping[str, str]]) -> "MessageBuilder":
        return self._set(custom_data=custom_data)

    def recipient_variables(
        self, recipient_variables: Optional[Mapping[str, Any]]
    ) -> "MessageBuilder":
        return self._set(recipient_variables=recipient_variables)

    def __repr__(self) -> str:
        return f"<MessageBuilder subject='{self._message.subject[:30]}' to={len(self._message.to)}>"
