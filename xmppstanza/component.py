"""Component stanzas: the handshake (XEP-0114) and namespace delegation (XEP-0355)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Callable, Iterator
from dataclasses import dataclass
from xml.sax.saxutils import escape

from .iq import IQ
from .message import Message
from .namespaces import NS_COMPONENT
from .node import RAW_XML_TAG, make_tag, split_tag, to_xml
from .packet import TYPE_REGISTRY, IQPayload, MsgExtension, Packet, PacketType
from .presence import Presence

NS_DELEGATION = "urn:xmpp:delegation:1"
NS_FORWARD = "urn:xmpp:forward:0"

_STANZA_DECODERS: dict[str, Callable[[ET.Element], Packet]] = {
    "message": Message.from_element,
    "presence": Presence.from_element,
    "iq": IQ.from_element,
}


def _attrs(element: ET.Element) -> dict[str, str]:
    return {split_tag(name)[1]: value for name, value in element.attrib.items()}


def _elements(element: ET.Element) -> list[ET.Element]:
    return [child for child in element if isinstance(child.tag, str)]


def _inner_xml(element: ET.Element) -> str:
    parts = [escape(element.text or "")]
    for child in element:
        if isinstance(child.tag, str):
            parts.append(to_xml(child))
        parts.append(escape(child.tail or ""))
    return "".join(parts)


@dataclass
class Handshake(Packet):
    """The element a component sends to authenticate on the component port."""

    packet_name = "component:handshake"

    value: str = ""

    def to_element(self) -> ET.Element:
        """Build the <handshake/> element; the value is written as raw XML."""
        element = ET.Element(make_tag(NS_COMPONENT, "handshake"))
        if self.value:
            ET.SubElement(element, RAW_XML_TAG).text = self.value
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Handshake:
        """Read a <handshake/> element, keeping its content as XML text."""
        return cls(value=_inner_xml(element))


def _decoded_stanzas(element: ET.Element) -> Iterator[Packet]:
    for child in _elements(element):
        decoder = _STANZA_DECODERS.get(split_tag(child.tag)[1])
        if decoder is None:
            yield from _decoded_stanzas(child)
            continue
        try:
            yield decoder(child)
        except ValueError:
            continue


@dataclass
class Forwarded:
    """A wrapper around a forwarded stanza."""

    stanza: Packet | None = None

    def to_element(self) -> ET.Element:
        """Build the <forwarded/> element."""
        element = ET.Element(make_tag(NS_FORWARD, "forwarded"))
        if self.stanza is not None:
            element.append(self.stanza.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Forwarded:
        """Read a <forwarded/> element; the last stanza that decodes is kept."""
        forwarded = cls()
        for stanza in _decoded_stanzas(element):
            forwarded.stanza = stanza
        return forwarded


@dataclass
class Delegated:
    """A namespace whose handling was delegated to the component."""

    namespace: str = ""

    def to_element(self) -> ET.Element:
        """Build the <delegated/> element."""
        element = ET.Element("delegated")
        if self.namespace:
            element.set("namespace", self.namespace)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Delegated:
        """Read a <delegated/> element."""
        return cls(namespace=_attrs(element).get("namespace", ""))


@dataclass
class Delegation(MsgExtension, IQPayload):
    """Delegation element: confirms a delegated namespace in a message, wraps a forwarded iq in an iq."""

    NAMESPACE = NS_DELEGATION
    LOCAL = "delegation"

    forwarded: Forwarded | None = None
    delegated: Delegated | None = None

    def to_element(self) -> ET.Element:
        """Build the <delegation/> element."""
        element = ET.Element(make_tag(self.NAMESPACE, self.LOCAL))
        if self.forwarded is not None:
            element.append(self.forwarded.to_element())
        if self.delegated is not None:
            element.append(self.delegated.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Delegation:
        """Read a <delegation/> element."""
        delegation = cls()
        for child in _elements(element):
            space, local = split_tag(child.tag)
            if (space, local) == (NS_FORWARD, "forwarded"):
                delegation.forwarded = Forwarded.from_element(child)
            elif local == "delegated":
                delegation.delegated = Delegated.from_element(child)
        return delegation


TYPE_REGISTRY.map_extension(PacketType.MESSAGE, NS_DELEGATION, "delegation", Delegation)
TYPE_REGISTRY.map_extension(PacketType.IQ, NS_DELEGATION, "delegation", Delegation)