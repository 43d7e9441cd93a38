"""Presence stanzas (RFC 6120)."""

from __future__ import annotations

import dataclasses
import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import TypeVar

from . import pres_muc  # noqa: F401  (register presence extensions)
from .error import XmppError
from .node import make_tag, parse_xml, split_tag, to_xml
from .packet import TYPE_REGISTRY, Attrs, Packet, PacketType, PresExtension

_E = TypeVar("_E", bound=PresExtension)
_INT = re.compile(r"[+-]?\d+\Z", re.ASCII)


def _text(element: ET.Element) -> str:
    return (element.text or "") + "".join(child.tail or "" for child in element)


def _parse_priority(text: str) -> int:
    text = text.strip()
    if not text:
        return 0
    if not _INT.match(text):
        raise ValueError(f"invalid priority {text!r}")
    value = int(text)
    if not -128 <= value <= 127:
        raise ValueError(f"priority {value} out of range")
    return value


@dataclass
class Presence(Packet):
    """A presence stanza with its standard children and extensions."""

    packet_name = "presence"

    attrs: Attrs = field(default_factory=Attrs)
    show: str = ""
    status: str = ""
    priority: int = 0
    error: XmppError = field(default_factory=XmppError)
    extensions: list[PresExtension] = field(default_factory=list)
    space: str = ""

    def get(self, ext_type: type[_E]) -> _E | None:
        """Return the first extension of exactly this type, or None."""
        return next((ext for ext in self.extensions if type(ext) is ext_type), None)

    def to_element(self) -> ET.Element:
        """Build the <presence/> element."""
        element = ET.Element(make_tag(self.space, "presence"))
        self.attrs.apply_to(element)
        if self.show:
            ET.SubElement(element, "show").text = str(self.show)
        if self.status:
            ET.SubElement(element, "status").text = self.status
        if self.priority:
            ET.SubElement(element, "priority").text = str(self.priority)
        error = self.error.to_element()
        if error is not None:
            element.append(error)
        for ext in self.extensions:
            element.append(ext.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Presence:
        """Read a <presence/> element; registered children become extensions."""
        presence = cls(attrs=Attrs.from_element(element), space=split_tag(element.tag)[0])
        for child in element:
            if not isinstance(child.tag, str):
                continue
            space, local = split_tag(child.tag)
            ext_class = TYPE_REGISTRY.get_extension(PacketType.PRESENCE, space, local)
            if ext_class is not None:
                presence.extensions.append(ext_class.from_element(child))
            elif local == "show":
                presence.show = _text(child)
            elif local == "status":
                presence.status = _text(child)
            elif local == "priority":
                presence.priority = _parse_priority(_text(child))
            elif local == "error":
                presence.error = XmppError.from_element(child)
        return presence

    def to_xml(self) -> str:
        """Serialise the presence."""
        return to_xml(self.to_element())

    @classmethod
    def from_xml(cls, text: str | bytes) -> Presence:
        """Parse a presence from XML text."""
        return cls.from_element(parse_xml(text))


def new_presence(attrs: Attrs) -> Presence:
    """Create a presence with the given attributes."""
    return Presence(attrs=dataclasses.replace(attrs))