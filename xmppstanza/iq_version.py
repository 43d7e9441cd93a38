"""Software version payload (XEP-0092)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass

from .node import make_tag, split_tag
from .packet import TYPE_REGISTRY, IQPayload, PacketType

NS_VERSION = "jabber:iq:version"


def _text(element: ET.Element) -> str:
    return (element.text or "") + "".join(child.tail or "" for child in element)


@dataclass
class Version(IQPayload):
    """Name, version and operating system of a piece of software."""

    NAMESPACE = NS_VERSION
    LOCAL = "query"

    name: str = ""
    version: str = ""
    os: str = ""

    def set_info(self, name: str, version: str, os: str) -> Version:
        """Set all version info and return self."""
        self.name = name
        self.version = version
        self.os = os
        return self

    def to_element(self) -> ET.Element:
        """Build the <query/> element; empty parts are left out."""
        element = ET.Element(make_tag(self.NAMESPACE, self.LOCAL))
        for local, value in (("name", self.name), ("version", self.version), ("os", self.os)):
            if value:
                ET.SubElement(element, local).text = value
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Version:
        """Read a version <query/> element."""
        values: dict[str, str] = {}
        for child in element:
            if isinstance(child.tag, str):
                values[split_tag(child.tag)[1]] = _text(child)
        return cls(
            name=values.get("name", ""),
            version=values.get("version", ""),
            os=values.get("os", ""),
        )


TYPE_REGISTRY.map_extension(PacketType.IQ, NS_VERSION, "query", Version)