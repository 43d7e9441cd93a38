"""Message stanzas (RFC 6120)."""

from __future__ import annotations

import dataclasses
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import TypeVar

from . import msg_extensions  # noqa: F401  (register message extensions)
from .error import XmppError
from .node import make_tag, parse_xml, split_tag, to_xml
from .packet import TYPE_REGISTRY, Attrs, MsgExtension, Packet, PacketType

_E = TypeVar("_E", bound=MsgExtension)


def _text(element: ET.Element) -> str:
    return (element.text or "") + "".join(child.tail or "" for child in element)


@dataclass
class Message(Packet):
    """A message stanza with its standard children and extensions."""

    packet_name = "message"

    attrs: Attrs = field(default_factory=Attrs)
    subject: str = ""
    body: str = ""
    thread: str = ""
    error: XmppError = field(default_factory=XmppError)
    extensions: list[MsgExtension] = field(default_factory=list)
    space: str = ""

    def get(self, ext_type: type[_E]) -> _E | None:
        """Return the first extension of exactly this type, or None."""
        return next((ext for ext in self.extensions if type(ext) is ext_type), None)

    def xmpp_format(self) -> str:
        """Serialise the message with all its extensions."""
        return self.to_xml()

    def to_element(self) -> ET.Element:
        """Build the <message/> element."""
        element = ET.Element(make_tag(self.space, "message"))
        self.attrs.apply_to(element)
        for local, value in (("subject", self.subject), ("body", self.body), ("thread", self.thread)):
            if value:
                ET.SubElement(element, local).text = value
        error = self.error.to_element()
        if error is not None:
            element.append(error)
        for ext in self.extensions:
            element.append(ext.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Message:
        """Read a <message/> element; registered children become extensions."""
        message = cls(attrs=Attrs.from_element(element), space=split_tag(element.tag)[0])
        for child in element:
            if not isinstance(child.tag, str):
                continue
            space, local = split_tag(child.tag)
            ext_class = TYPE_REGISTRY.get_extension(PacketType.MESSAGE, space, local)
            if ext_class is not None:
                message.extensions.append(ext_class.from_element(child))
            elif local == "body":
                message.body = _text(child)
            elif local == "thread":
                message.thread = _text(child)
            elif local == "subject":
                message.subject = _text(child)
            elif local == "error":
                message.error = XmppError.from_element(child)
        return message

    def to_xml(self) -> str:
        """Serialise the message."""
        return to_xml(self.to_element())

    @classmethod
    def from_xml(cls, text: str | bytes) -> Message:
        """Parse a message from XML text."""
        return cls.from_element(parse_xml(text))


def new_message(attrs: Attrs) -> Message:
    """Create a message with the given attributes."""
    return Message(attrs=dataclasses.replace(attrs))