"""Message extensions: chat markers, chat states, hints, XHTML-IM, OOB, receipts."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from .node import RAW_XML_TAG, XML_NS, make_tag, split_tag, to_xml
from .packet import TYPE_REGISTRY, MsgExtension, PacketType

NS_MSG_CHAT_MARKERS = "urn:xmpp:chat-markers:0"
NS_MSG_CHAT_STATE_NOTIFICATIONS = "http://jabber.org/protocol/chatstates"
NS_MSG_HINTS = "urn:xmpp:hints"
NS_XHTML_IM = "http://jabber.org/protocol/xhtml-im"
NS_XHTML = "http://www.w3.org/1999/xhtml"
NS_OOB = "jabber:x:oob"
NS_MSG_RECEIPTS = "urn:xmpp:receipts"


def _attrs(element: ET.Element) -> dict[str, str]:
    return {split_tag(name)[1]: value for name, value in element.attrib.items()}


def _text(element: ET.Element) -> str:
    return (element.text or "") + "".join(child.tail or "" for child in element)


def _children(element: ET.Element, local: str) -> list[ET.Element]:
    return [c for c in element if isinstance(c.tag, str) and split_tag(c.tag)[1] == local]


@dataclass
class _IdExtension(MsgExtension):
    """An empty element carrying a mandatory id attribute."""

    id: str = ""

    def to_element(self) -> ET.Element:
        element = ET.Element(make_tag(self.NAMESPACE, self.LOCAL))
        element.set("id", self.id)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> _IdExtension:
        return cls(id=_attrs(element).get("id", ""))


# Chat markers (XEP-0333)


@dataclass
class Markable(MsgExtension):
    """Marks a message as one whose reading may be reported."""

    NAMESPACE = NS_MSG_CHAT_MARKERS
    LOCAL = "markable"


@dataclass
class MarkReceived(_IdExtension):
    """Reports that a message was received."""

    NAMESPACE = NS_MSG_CHAT_MARKERS
    LOCAL = "received"


@dataclass
class MarkDisplayed(_IdExtension):
    """Reports that a message was displayed."""

    NAMESPACE = NS_MSG_CHAT_MARKERS
    LOCAL = "displayed"


@dataclass
class MarkAcknowledged(_IdExtension):
    """Reports that a message was acknowledged."""

    NAMESPACE = NS_MSG_CHAT_MARKERS
    LOCAL = "acknowledged"


# Chat state notifications (XEP-0085)


@dataclass
class StateActive(MsgExtension):
    """The user takes part in the conversation."""

    NAMESPACE = NS_MSG_CHAT_STATE_NOTIFICATIONS
    LOCAL = "active"


@dataclass
class StateComposing(MsgExtension):
    """The user is composing a message."""

    NAMESPACE = NS_MSG_CHAT_STATE_NOTIFICATIONS
    LOCAL = "composing"


@dataclass
class StateGone(MsgExtension):
    """The user has left the conversation."""

    NAMESPACE = NS_MSG_CHAT_STATE_NOTIFICATIONS
    LOCAL = "gone"


@dataclass
class StateInactive(MsgExtension):
    """The user is not paying attention to the conversation."""

    NAMESPACE = NS_MSG_CHAT_STATE_NOTIFICATIONS
    LOCAL = "inactive"


@dataclass
class StatePaused(MsgExtension):
    """The user paused composing a message."""

    NAMESPACE = NS_MSG_CHAT_STATE_NOTIFICATIONS
    LOCAL = "paused"


# Message processing hints (XEP-0334)


@dataclass
class HintNoPermanentStore(MsgExtension):
    """Ask that the message not be archived permanently."""

    NAMESPACE = NS_MSG_HINTS
    LOCAL = "no-permanent-store"


@dataclass
class HintNoStore(MsgExtension):
    """Ask that the message not be stored at all."""

    NAMESPACE = NS_MSG_HINTS
    LOCAL = "no-store"


@dataclass
class HintNoCopy(MsgExtension):
    """Ask that the message not be copied to other resources."""

    NAMESPACE = NS_MSG_HINTS
    LOCAL = "no-copy"


@dataclass
class HintStore(MsgExtension):
    """Ask that the message be stored."""

    NAMESPACE = NS_MSG_HINTS
    LOCAL = "store"


# XHTML-IM


def _strip_namespace(element: ET.Element, namespace: str) -> ET.Element:
    space, local = split_tag(element.tag)
    tag = local if space == namespace else element.tag
    copy = ET.Element(tag, dict(element.attrib))
    copy.text = element.text
    copy.tail = element.tail
    for child in element:
        if isinstance(child.tag, str):
            copy.append(_strip_namespace(child, namespace))
    return copy


def _inner_xml(element: ET.Element) -> str:
    namespace = split_tag(element.tag)[0]
    wrapper = ET.Element("w")
    wrapper.text = element.text
    for child in element:
        if isinstance(child.tag, str):
            wrapper.append(_strip_namespace(child, namespace))
    return to_xml(wrapper)[len("<w>") : -len("</w>")]


@dataclass
class HTMLBody:
    """The XHTML body; its inner XML is written as given, unchecked."""

    inner_xml: str = ""

    def to_element(self) -> ET.Element:
        """Build the XHTML <body/> element."""
        element = ET.Element(make_tag(NS_XHTML, "body"))
        if self.inner_xml:
            ET.SubElement(element, RAW_XML_TAG).text = self.inner_xml
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> HTMLBody:
        """Read a <body/> element, keeping its content as XML text."""
        return cls(inner_xml=_inner_xml(element))


@dataclass
class HTML(MsgExtension):
    """An XHTML-IM <html/> message extension."""

    NAMESPACE = NS_XHTML_IM
    LOCAL = "html"

    body: HTMLBody = field(default_factory=HTMLBody)
    lang: str = ""

    def to_element(self) -> ET.Element:
        """Build the <html/> element."""
        element = ET.Element(make_tag(self.NAMESPACE, self.LOCAL))
        if self.lang:
            element.set(make_tag(XML_NS, "lang"), self.lang)
        element.append(self.body.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> HTML:
        """Read an <html/> element."""
        bodies = _children(element, "body")
        return cls(
            body=HTMLBody.from_element(bodies[-1]) if bodies else HTMLBody(),
            lang=_attrs(element).get("lang", ""),
        )


# Out of band data (XEP-0066)


@dataclass
class OOB(MsgExtension):
    """A URL sent out of band, with an optional description."""

    NAMESPACE = NS_OOB
    LOCAL = "x"

    url: str = ""
    desc: str = ""

    def to_element(self) -> ET.Element:
        """Build the <x/> element; <url/> is always written."""
        element = ET.Element(make_tag(self.NAMESPACE, self.LOCAL))
        ET.SubElement(element, "url").text = self.url
        if self.desc:
            ET.SubElement(element, "desc").text = self.desc
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> OOB:
        """Read an <x/> out-of-band element."""
        urls = [_text(c) for c in _children(element, "url")]
        descs = [_text(c) for c in _children(element, "desc")]
        return cls(url=urls[-1] if urls else "", desc=descs[-1] if descs else "")


# Message delivery receipts (XEP-0184)


@dataclass
class ReceiptRequest(MsgExtension):
    """Asks the recipient to acknowledge receipt."""

    NAMESPACE = NS_MSG_RECEIPTS
    LOCAL = "request"


@dataclass
class ReceiptReceived(_IdExtension):
    """Acknowledges receipt of the message with the given id."""

    NAMESPACE = NS_MSG_RECEIPTS
    LOCAL = "received"


for _cls in (
    Markable,
    MarkReceived,
    MarkDisplayed,
    MarkAcknowledged,
    StateActive,
    StateComposing,
    StateGone,
    StateInactive,
    StatePaused,
    HintNoPermanentStore,
    HintNoStore,
    HintNoCopy,
    HintStore,
    HTML,
    OOB,
    ReceiptRequest,
    ReceiptReceived,
):
    TYPE_REGISTRY.map_extension(PacketType.MESSAGE, _cls.NAMESPACE, _cls.LOCAL, _cls)