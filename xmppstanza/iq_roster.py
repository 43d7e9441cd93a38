"""Roster payloads."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterable
from dataclasses import dataclass, field

from .node import make_tag, split_tag
from .packet import TYPE_REGISTRY, IQPayload, PacketType

NS_ROSTER = "jabber:iq:roster"

# Neither side is subscribed to the other's presence; the default.
SUBSCRIPTION_NONE = "none"
# The user is subscribed to the contact's presence only.
SUBSCRIPTION_TO = "to"
# The contact is subscribed to the user's presence only.
SUBSCRIPTION_FROM = "from"
# Both are subscribed to each other's presence.
SUBSCRIPTION_BOTH = "both"


def _local(element: ET.Element) -> str:
    return split_tag(element.tag)[1] if isinstance(element.tag, str) else ""


def _attrs(element: ET.Element) -> dict[str, str]:
    return {split_tag(name)[1]: value for name, value in element.attrib.items()}


def _text(element: ET.Element) -> str:
    return (element.text or "") + "".join(child.tail or "" for child in element)


@dataclass
class Roster(IQPayload):
    """An empty roster query."""

    NAMESPACE = NS_ROSTER
    LOCAL = "query"

    def to_element(self) -> ET.Element:
        """Build the roster <query/> element."""
        return ET.Element(make_tag(self.NAMESPACE, self.LOCAL))

    @classmethod
    def from_element(cls, element: ET.Element) -> Roster:
        """Read a roster <query/> element."""
        return cls()


@dataclass
class RosterItem:
    """A contact in the roster."""

    jid: str = ""
    ask: str = ""
    name: str = ""
    subscription: str = ""
    groups: list[str] = field(default_factory=list)

    def to_element(self) -> ET.Element:
        """Build the <item/> element; jid is always written."""
        element = ET.Element(make_tag(NS_ROSTER, "item"))
        element.set("jid", self.jid)
        for name, value in (("ask", self.ask), ("name", self.name), ("subscription", self.subscription)):
            if value:
                element.set(name, value)
        for group in self.groups:
            ET.SubElement(element, "group").text = group
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> RosterItem:
        """Read an <item/> element."""
        attrs = _attrs(element)
        return cls(
            jid=attrs.get("jid", ""),
            ask=attrs.get("ask", ""),
            name=attrs.get("name", ""),
            subscription=attrs.get("subscription", ""),
            groups=[_text(child) for child in element if _local(child) == "group"],
        )


@dataclass
class RosterItems(IQPayload):
    """A roster query listing items."""

    NAMESPACE = NS_ROSTER
    LOCAL = "query"

    items: list[RosterItem] = field(default_factory=list)

    def add_item(
        self,
        jid: str,
        subscription: str,
        ask: str,
        name: str,
        groups: Iterable[str] | None,
    ) -> RosterItems:
        """Append an item and return self."""
        self.items.append(
            RosterItem(
                jid=jid,
                subscription=subscription,
                ask=ask,
                name=name,
                groups=list(groups or ()),
            )
        )
        return self

    def to_element(self) -> ET.Element:
        """Build the roster <query/> element with its items."""
        element = ET.Element(make_tag(self.NAMESPACE, self.LOCAL))
        for item in self.items:
            element.append(item.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> RosterItems:
        """Read a roster <query/> element with its items."""
        return cls(items=[RosterItem.from_element(c) for c in element if _local(c) == "item"])


# Both use the same element; the later mapping is the one in effect.
TYPE_REGISTRY.map_extension(PacketType.IQ, NS_ROSTER, "query", Roster)
TYPE_REGISTRY.map_extension(PacketType.IQ, NS_ROSTER, "query", RosterItems)