"""Publish-subscribe event notifications carried by messages."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import ClassVar, Union

from .form import NS_DATA, Form
from .node import Node, make_tag, split_tag
from .packet import TYPE_REGISTRY, MsgExtension, PacketType

NS_PUBSUB_EVENT = "http://jabber.org/protocol/pubsub#event"

PUBSUB_COLLECTION_EVENT_NAME = "Collection"
PUBSUB_CONFIG_EVENT_NAME = "Configuration"
PUBSUB_DELETE_EVENT_NAME = "Delete"
PUBSUB_ITEMS_EVENT_NAME = "List"
PUBSUB_PURGE_EVENT_NAME = "Purge"
PUBSUB_SUBSCRIPTION_EVENT_NAME = "Subscription"

ASSOC = "Associate"
DISASSOC = "Disassociate"


def _attrs(element: ET.Element) -> dict[str, str]:
    return {split_tag(name)[1]: value for name, value in element.attrib.items()}


def _elements(element: ET.Element) -> list[ET.Element]:
    return [child for child in element if isinstance(child.tag, str)]


def _last(element: ET.Element, local: str) -> ET.Element | None:
    found = [child for child in _elements(element) if split_tag(child.tag)[1] == local]
    return found[-1] if found else None


def _set_if(element: ET.Element, name: str, value: str) -> None:
    if value:
        element.set(name, value)


@dataclass
class AssociateEvent:
    """A node associated with a collection."""

    assoc_disassoc: ClassVar[str] = ASSOC

    node: str = ""

    def to_element(self) -> ET.Element:
        """Build the <associate/> element."""
        element = ET.Element("associate")
        element.set("node", self.node)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> AssociateEvent:
        """Read an <associate/> element."""
        return cls(node=_attrs(element).get("node", ""))


@dataclass
class DisassociateEvent:
    """A node disassociated from a collection."""

    assoc_disassoc: ClassVar[str] = DISASSOC

    node: str = ""

    def to_element(self) -> ET.Element:
        """Build the <disassociate/> element."""
        element = ET.Element("disassociate")
        element.set("node", self.node)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> DisassociateEvent:
        """Read a <disassociate/> element."""
        return cls(node=_attrs(element).get("node", ""))


@dataclass
class CollectionEvent:
    """A change to a collection node."""

    event_name: ClassVar[str] = PUBSUB_COLLECTION_EVENT_NAME

    assoc_disassoc: AssociateEvent | DisassociateEvent | None = None
    node: str = ""

    def to_element(self) -> ET.Element:
        """Build the <collection/> element."""
        element = ET.Element("collection")
        _set_if(element, "node", self.node)
        if self.assoc_disassoc is not None:
            element.append(self.assoc_disassoc.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> CollectionEvent:
        """Read a <collection/> element."""
        event = cls(node=_attrs(element).get("node", ""))
        for child in _elements(element):
            local = split_tag(child.tag)[1]
            if local == "associate":
                event.assoc_disassoc = AssociateEvent.from_element(child)
            elif local == "disassociate":
                event.assoc_disassoc = DisassociateEvent.from_element(child)
        return event


@dataclass
class ConfigurationEvent:
    """A node's configuration changed, possibly with the new form."""

    event_name: ClassVar[str] = PUBSUB_CONFIG_EVENT_NAME

    node: str = ""
    form: Form | None = None

    def to_element(self) -> ET.Element:
        """Build the <configuration/> element."""
        element = ET.Element("configuration")
        _set_if(element, "node", self.node)
        if self.form is not None:
            element.append(self.form.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> ConfigurationEvent:
        """Read a <configuration/> element."""
        forms = [c for c in _elements(element) if split_tag(c.tag) == (NS_DATA, "x")]
        return cls(
            node=_attrs(element).get("node", ""),
            form=Form.from_element(forms[-1]) if forms else None,
        )


@dataclass
class RedirectEvent:
    """Where subscribers of a deleted node should go."""

    uri: str = ""

    def to_element(self) -> ET.Element:
        """Build the <redirect/> element."""
        element = ET.Element("redirect")
        element.set("uri", self.uri)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> RedirectEvent:
        """Read a <redirect/> element."""
        return cls(uri=_attrs(element).get("uri", ""))


@dataclass
class DeleteEvent:
    """A node was deleted."""

    event_name: ClassVar[str] = PUBSUB_CONFIG_EVENT_NAME

    node: str = ""
    redirect: RedirectEvent | None = None

    def to_element(self) -> ET.Element:
        """Build the <delete/> element."""
        element = ET.Element("delete")
        element.set("node", self.node)
        if self.redirect is not None:
            element.append(self.redirect.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> DeleteEvent:
        """Read a <delete/> element."""
        redirect = _last(element, "redirect")
        return cls(
            node=_attrs(element).get("node", ""),
            redirect=RedirectEvent.from_element(redirect) if redirect is not None else None,
        )


@dataclass
class RetractEvent:
    """An item was retracted; the identifier is carried in the node attribute."""

    id: str = ""

    def to_element(self) -> ET.Element:
        """Build the <retract/> element."""
        element = ET.Element("retract")
        element.set("node", self.id)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> RetractEvent:
        """Read a <retract/> element."""
        return cls(id=_attrs(element).get("node", ""))


@dataclass
class ItemEvent:
    """A published item with its payload."""

    id: str = ""
    publisher: str = ""
    any: Node | None = None

    def to_element(self) -> ET.Element:
        """Build the <item/> element."""
        element = ET.Element("item")
        _set_if(element, "id", self.id)
        _set_if(element, "publisher", self.publisher)
        if self.any is not None:
            element.append(self.any.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> ItemEvent:
        """Read an <item/> element; its last child element is the payload."""
        attrs = _attrs(element)
        children = _elements(element)
        return cls(
            id=attrs.get("id", ""),
            publisher=attrs.get("publisher", ""),
            any=Node.from_element(children[-1]) if children else None,
        )


@dataclass
class ItemsEvent:
    """Items published to, or retracted from, a node."""

    event_name: ClassVar[str] = PUBSUB_ITEMS_EVENT_NAME

    items: list[ItemEvent] = field(default_factory=list)
    node: str = ""
    retract: RetractEvent | None = None

    def to_element(self) -> ET.Element:
        """Build the <items/> element; node is always written."""
        element = ET.Element("items")
        element.set("node", self.node)
        for item in self.items:
            element.append(item.to_element())
        if self.retract is not None:
            element.append(self.retract.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> ItemsEvent:
        """Read an <items/> element."""
        retract = _last(element, "retract")
        return cls(
            items=[
                ItemEvent.from_element(c) for c in _elements(element) if split_tag(c.tag)[1] == "item"
            ],
            node=_attrs(element).get("node", ""),
            retract=RetractEvent.from_element(retract) if retract is not None else None,
        )


@dataclass
class PurgeEvent:
    """All items of a node were purged."""

    event_name: ClassVar[str] = PUBSUB_PURGE_EVENT_NAME

    node: str = ""

    def to_element(self) -> ET.Element:
        """Build the <purge/> element."""
        element = ET.Element("purge")
        element.set("node", self.node)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> PurgeEvent:
        """Read a <purge/> element."""
        return cls(node=_attrs(element).get("node", ""))


@dataclass
class SubscriptionEvent:
    """A change in the state of a subscription."""

    event_name: ClassVar[str] = PUBSUB_SUBSCRIPTION_EVENT_NAME

    sub_status: str = ""
    expiry: str = ""

    def to_element(self) -> ET.Element:
        """Build the <subscription/> element."""
        element = ET.Element("subscription")
        _set_if(element, "subscription", self.sub_status)
        _set_if(element, "expiry", self.expiry)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> SubscriptionEvent:
        """Read a <subscription/> element."""
        attrs = _attrs(element)
        return cls(sub_status=attrs.get("subscription", ""), expiry=attrs.get("expiry", ""))


EventElement = Union[
    CollectionEvent, ConfigurationEvent, DeleteEvent, ItemsEvent, PurgeEvent, SubscriptionEvent
]

_EVENT_CLASSES = {
    "collection": CollectionEvent,
    "configuration": ConfigurationEvent,
    "delete": DeleteEvent,
    "items": ItemsEvent,
    "purge": PurgeEvent,
    "subscription": SubscriptionEvent,
}


@dataclass
class PubSubEvent(MsgExtension):
    """The <event/> message extension holding one event element."""

    NAMESPACE = NS_PUBSUB_EVENT
    LOCAL = "event"

    event_element: EventElement | None = None

    def to_element(self) -> ET.Element:
        """Build the <event/> element."""
        element = ET.Element(make_tag(self.NAMESPACE, self.LOCAL))
        if self.event_element is not None:
            element.append(self.event_element.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> PubSubEvent:
        """Read an <event/> element; the last known child is the event."""
        event = cls()
        for child in _elements(element):
            event_class = _EVENT_CLASSES.get(split_tag(child.tag)[1])
            if event_class is not None:
                event.event_element = event_class.from_element(child)
        return event


TYPE_REGISTRY.map_extension(PacketType.MESSAGE, NS_PUBSUB_EVENT, "event", PubSubEvent)