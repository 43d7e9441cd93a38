"""IoT control payloads (XEP-0325)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from .node import make_tag, split_tag
from .packet import TYPE_REGISTRY, Extension, IQPayload, PacketType

NS_IOT_CONTROL = "urn:xmpp:iot:control"


@dataclass
class ControlField:
    """A typed control parameter, such as <string name='..' value='..'/>."""

    local: str
    name: str = ""
    value: str = ""
    space: str = ""

    def to_element(self) -> ET.Element:
        """Build the parameter element."""
        attrs = {"name": self.name, "value": self.value}
        return ET.Element(make_tag(self.space, self.local), {k: v for k, v in attrs.items() if v})

    @classmethod
    def from_element(cls, element: ET.Element) -> ControlField:
        """Read a parameter element, keeping its name."""
        space, local = split_tag(element.tag)
        attrs = {split_tag(name)[1]: value for name, value in element.attrib.items()}
        return cls(local, attrs.get("name", ""), attrs.get("value", ""), space)


@dataclass
class ControlSet(IQPayload):
    """A request to set control parameters."""

    NAMESPACE = NS_IOT_CONTROL
    LOCAL = "set"

    fields: list[ControlField] = field(default_factory=list)

    def to_element(self) -> ET.Element:
        """Build the <set/> element."""
        element = ET.Element(make_tag(self.NAMESPACE, self.LOCAL))
        element.extend(control.to_element() for control in self.fields)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> ControlSet:
        """Read a <set/> element; every child is a parameter."""
        return cls([ControlField.from_element(c) for c in element if isinstance(c.tag, str)])


@dataclass
class ControlGetForm(Extension):
    """A request for the control form."""

    NAMESPACE = NS_IOT_CONTROL
    LOCAL = "getForm"


@dataclass
class ControlSetResponse(IQPayload):
    """The response to a control set request."""

    NAMESPACE = NS_IOT_CONTROL
    LOCAL = "setResponse"


TYPE_REGISTRY.map_extension(PacketType.IQ, NS_IOT_CONTROL, "set", ControlSet)