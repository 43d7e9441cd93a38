"""Common packet attributes, extension bases and the extension registry."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import ClassVar

from .namespaces import NS_FRAMING
from .node import make_tag, split_tag

_ATTR_FIELDS = {"type": "type", "id": "id", "from": "from_", "to": "to", "lang": "lang"}


class PacketType(Enum):
    """Kinds of stanza that carry extensions."""

    MESSAGE = "message"
    PRESENCE = "presence"
    IQ = "iq"


@dataclass
class Attrs:
    """Attributes shared by message, presence and iq stanzas."""

    type: str = ""
    id: str = ""
    from_: str = ""
    to: str = ""
    lang: str = ""

    def apply_to(self, element: ET.Element) -> None:
        """Set the non-empty attributes on an element."""
        for name, attribute in _ATTR_FIELDS.items():
            if value := getattr(self, attribute):
                element.set(name, str(value))

    @classmethod
    def from_element(cls, element: ET.Element) -> Attrs:
        """Read the attributes by local name; the last occurrence wins."""
        attrs = cls()
        for name, value in element.attrib.items():
            if target := _ATTR_FIELDS.get(split_tag(name)[1]):
                setattr(attrs, target, value)
        return attrs


class Packet:
    """Base class for top-level stanzas and nonzas."""

    packet_name: ClassVar[str] = ""


class Extension:
    """Base class for payload elements; by default an empty element."""

    NAMESPACE: ClassVar[str] = ""
    LOCAL: ClassVar[str] = ""

    def to_element(self) -> ET.Element:
        """Build the element for this extension."""
        return ET.Element(make_tag(self.NAMESPACE, self.LOCAL))

    @classmethod
    def from_element(cls, element: ET.Element) -> Extension:
        """Build the extension from its element."""
        return cls()


class MsgExtension(Extension):
    """An extension carried by a message."""


class PresExtension(Extension):
    """An extension carried by a presence."""


class IQPayload(Extension):
    """The payload of an iq."""

    def namespace(self) -> str:
        """Return the payload's namespace."""
        return self.NAMESPACE


class ExtensionRegistry:
    """Maps element names to extension classes, per packet type."""

    def __init__(self) -> None:
        self._map: dict[tuple[PacketType, str, str], type[Extension]] = {}

    def map_extension(self, packet_type, namespace: str, local: str, cls: type[Extension]) -> None:
        """Register cls for an element in a packet type; later entries replace earlier."""
        self._map[(PacketType(packet_type), namespace, local)] = cls

    def get_extension(self, packet_type, namespace: str, local: str) -> type[Extension] | None:
        """Return the class registered for an element, or None."""
        return self._map.get((PacketType(packet_type), namespace, local))


TYPE_REGISTRY = ExtensionRegistry()


@dataclass
class WebsocketOpen:
    """The <open/> element that starts a WebSocket connection."""

    NAMESPACE: ClassVar[str] = NS_FRAMING
    LOCAL: ClassVar[str] = "open"

    from_: str = ""
    id: str = ""
    version: str = ""

    def to_element(self) -> ET.Element:
        """Build the <open/> element."""
        return ET.Element(
            make_tag(self.NAMESPACE, self.LOCAL), {"from": self.from_, "id": self.id, "version": self.version}
        )

    @classmethod
    def from_element(cls, element: ET.Element) -> WebsocketOpen:
        """Read an <open/> element."""
        values = {split_tag(name)[1]: value for name, value in element.attrib.items()}
        return cls(values.get("from", ""), values.get("id", ""), values.get("version", ""))