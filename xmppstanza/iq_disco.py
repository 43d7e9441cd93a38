"""Service discovery payloads (XEP-0030)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from .node import make_tag, split_tag
from .packet import TYPE_REGISTRY, IQPayload, PacketType

NS_DISCO_INFO = "http://jabber.org/protocol/disco#info"
NS_DISCO_ITEMS = "http://jabber.org/protocol/disco#items"


def _attrs(element: ET.Element) -> dict[str, str]:
    return {split_tag(name)[1]: value for name, value in element.attrib.items()}


def _children(element: ET.Element, local: str) -> list[ET.Element]:
    return [c for c in element if isinstance(c.tag, str) and split_tag(c.tag)[1] == local]


def _query(payload: IQPayload, node: str) -> ET.Element:
    return ET.Element(make_tag(payload.NAMESPACE, payload.LOCAL), {"node": node} if node else {})


@dataclass
class Identity:
    """An identity of a discovered entity."""

    name: str = ""
    category: str = ""
    type: str = ""

    def to_element(self) -> ET.Element:
        """Build the <identity/> element."""
        attrs = {"name": self.name, "category": self.category, "type": self.type}
        return ET.Element("identity", {k: v for k, v in attrs.items() if v})

    @classmethod
    def from_element(cls, element: ET.Element) -> Identity:
        """Read an <identity/> element."""
        attrs = _attrs(element)
        return cls(attrs.get("name", ""), attrs.get("category", ""), attrs.get("type", ""))


@dataclass
class Feature:
    """A feature namespace supported by an entity."""

    var: str = ""

    def to_element(self) -> ET.Element:
        """Build the <feature/> element; var is always written."""
        return ET.Element("feature", {"var": self.var})

    @classmethod
    def from_element(cls, element: ET.Element) -> Feature:
        """Read a <feature/> element."""
        return cls(var=_attrs(element).get("var", ""))


@dataclass
class DiscoInfo(IQPayload):
    """A disco#info query."""

    NAMESPACE = NS_DISCO_INFO
    LOCAL = "query"

    node: str = ""
    identities: list[Identity] = field(default_factory=list)
    features: list[Feature] = field(default_factory=list)

    def add_identity(self, name: str, category: str, typ: str) -> None:
        """Append an identity."""
        self.identities.append(Identity(name, category, typ))

    def add_features(self, *namespaces: str) -> None:
        """Append a feature for each namespace."""
        self.features.extend(Feature(ns) for ns in namespaces)

    def set_node(self, node: str) -> DiscoInfo:
        """Set the node and return self."""
        self.node = node
        return self

    def set_identities(self, *identities: Identity) -> DiscoInfo:
        """Replace the identities and return self."""
        self.identities = list(identities)
        return self

    def set_features(self, *namespaces: str) -> DiscoInfo:
        """Replace the features and return self."""
        self.features = [Feature(ns) for ns in namespaces]
        return self

    def to_element(self) -> ET.Element:
        """Build the <query/> element."""
        element = _query(self, self.node)
        element.extend(identity.to_element() for identity in self.identities)
        element.extend(feature.to_element() for feature in self.features)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> DiscoInfo:
        """Read a disco#info <query/> element."""
        return cls(
            node=_attrs(element).get("node", ""),
            identities=[Identity.from_element(c) for c in _children(element, "identity")],
            features=[Feature.from_element(c) for c in _children(element, "feature")],
        )


@dataclass
class DiscoItem:
    """An item listed by a disco#items query."""

    jid: str = ""
    node: str = ""
    name: str = ""

    def to_element(self) -> ET.Element:
        """Build the <item/> element."""
        attrs = {"jid": self.jid, "node": self.node, "name": self.name}
        return ET.Element("item", {k: v for k, v in attrs.items() if v})

    @classmethod
    def from_element(cls, element: ET.Element) -> DiscoItem:
        """Read an <item/> element."""
        attrs = _attrs(element)
        return cls(attrs.get("jid", ""), attrs.get("node", ""), attrs.get("name", ""))


@dataclass
class DiscoItems(IQPayload):
    """A disco#items query."""

    NAMESPACE = NS_DISCO_ITEMS
    LOCAL = "query"

    node: str = ""
    items: list[DiscoItem] = field(default_factory=list)

    def set_node(self, node: str) -> DiscoItems:
        """Set the node and return self."""
        self.node = node
        return self

    def add_item(self, jid: str, node: str, name: str) -> DiscoItems:
        """Append an item and return self."""
        self.items.append(DiscoItem(jid, node, name))
        return self

    def to_element(self) -> ET.Element:
        """Build the <query/> element."""
        element = _query(self, self.node)
        element.extend(item.to_element() for item in self.items)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> DiscoItems:
        """Read a disco#items <query/> element."""
        return cls(
            node=_attrs(element).get("node", ""),
            items=[DiscoItem.from_element(c) for c in _children(element, "item")],
        )


TYPE_REGISTRY.map_extension(PacketType.IQ, NS_DISCO_INFO, "query", DiscoInfo)
TYPE_REGISTRY.map_extension(PacketType.IQ, NS_DISCO_ITEMS, "query", DiscoItems)