"""Tests for message, participant and attachment models."""

import dataclasses

import pytest

from mailgun_client.models import (
    Address,
    AddressList,
    Attachment,
    AttachmentList,
    Message,
)


class TestAddress:
    """Tests for Address rendering."""

    def test_render_with_name(self):
        """Test that a named address renders as 'name <address>'."""
        address = Address("test@test.com", "Name")
        assert address.render() == "Name <test@test.com>"
        assert str(address) == "Name <test@test.com>"

    def test_render_without_name(self):
        """Test that an unnamed address renders as the bare address."""
        assert Address("test@test.com").render() == "test@test.com"

    def test_address_is_not_validated(self):
        """Test that malformed addresses pass through untouched."""
        assert Address("not an address").render() == "not an address"

    def test_empty_address_rejected(self):
        """Test that an empty address is refused."""
        with pytest.raises(ValueError):
            Address("")


class TestAddressList:
    """Tests for AddressList rendering."""

    def test_render_joins_with_comma_preserving_order(self):
        """Test comma join without spaces, in input order."""
        addresses = AddressList.of([
            Address("test1@test.com"),
            Address("test2@test.com", "Two"),
            Address("test3@test.com"),
        ])
        assert addresses.render() == "test1@test.com,Two <test2@test.com>,test3@test.com"

    def test_single_address(self):
        """Test a one element list renders like the address."""
        assert AddressList.of([Address("a@x.com", "A")]).render() == "A <a@x.com>"

    def test_of_accepts_strings(self):
        """Test that bare strings are promoted to Address objects."""
        addresses = AddressList.of(["a@x.com", Address("b@x.com")])
        assert list(addresses) == [Address("a@x.com"), Address("b@x.com")]
        assert len(addresses) == 2

    def test_of_single_string(self):
        """Test that a lone string is one recipient, not a character list."""
        assert AddressList.of("a@x.com").render() == "a@x.com"


class TestAttachment:
    """Tests for Attachment and AttachmentList."""

    def test_render(self):
        """Test '@name:path' rendering."""
        assert Attachment("name1", "path1").render() == "@name1:path1"

    def test_list_render(self):
        """Test comma-joined rendering of a list."""
        attachments = AttachmentList([
            Attachment("name1", "path1"),
            Attachment("name2", "path2"),
            Attachment("name3", "path3"),
        ])
        assert attachments.render() == "@name1:path1,@name2:path2,@name3:path3"

    def test_append_mutates_in_place(self):
        """Test that append adds to the end of the same list."""
        attachments = AttachmentList()
        assert not attachments

        attachments.append(Attachment("a", "/tmp/a"))
        attachments.append(Attachment("b", "/tmp/b"))

        assert [a.field_name for a in attachments] == ["a", "b"]
        assert len(attachments) == 2


class TestMessage:
    """Tests for the Message snapshot."""

    def _message(self, **kwargs):
        return Message(
            from_=Address("test@test.com"),
            to=[Address("test@test.com"), Address("other@test.com")],
            subject="Subject line",
            **kwargs,
        )

    def test_new_message(self):
        """Test construction with only the required fields."""
        message = self._message()

        assert message.from_ == Address("test@test.com")
        assert len(message.to) == 2
        assert message.subject == "Subject line"
        assert message.text is None
        assert message.html is None
        assert message.attachments is None

    def test_is_immutable(self):
        """Test that fields cannot be reassigned."""
        message = self._message()
        with pytest.raises(dataclasses.FrozenInstanceError):
            message.subject = "Other"

    def test_mapping_fields_are_read_only(self):
        """Test that custom header maps are copied and frozen."""
        headers = {"X-Trace": "1"}
        message = self._message(custom_headers=headers)

        headers["X-Trace"] = "2"
        assert message.custom_headers["X-Trace"] == "1"
        with pytest.raises(TypeError):
            message.custom_headers["X-Trace"] = "3"

    def test_attachment_list_is_copied(self):
        """Test that appending to the source list does not change the message."""
        attachments = AttachmentList()
        message = self._message(text="t", attachments=attachments)

        attachments.append(Attachment("a", "/tmp/a"))

        assert message.attachments == ()
        assert not message.has_files
        with pytest.raises(AttributeError):
            message.attachments.append(Attachment("b", "/tmp/b"))

    def test_is_not_hashable(self):
        """Test that hashing is disabled rather than failing on a field."""
        assert Message.__hash__ is None
        with pytest.raises(TypeError, match="Message"):
            hash(self._message(custom_headers={"X-Trace": "1"}))

    def test_empty_cc_and_bcc_are_unset(self):
        """Test that empty carbon copy lists are stored as None."""
        message = self._message(cc=[], bcc=AddressList())
        assert message.cc is None
        assert message.bcc is None
        assert self._message(cc=["c@x.com"]).cc.render() == "c@x.com"

    def test_requires_a_recipient(self):
        """Test that an empty 'to' list is refused."""
        with pytest.raises(ValueError, match="at least one"):
            Message(from_=Address("a@x.com"), to=[], subject="S")

    def test_has_body(self):
        """Test body detection for text, html and neither."""
        assert not self._message().has_body
        assert self._message(text="hi").has_body
        assert self._message(html="<p>hi</p>").has_body

    def test_has_files(self):
        """Test that empty attachment lists do not count as files."""
        assert not self._message().has_files
        assert not self._message(attachments=[], inline_attachments=[]).has_files
        assert self._message(attachments=[Attachment("a", "/tmp/a")]).has_files
        assert self._message(inline_attachments=[Attachment("i", "/tmp/i")]).has_files
