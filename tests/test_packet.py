import xml.etree.ElementTree as ET

import pytest

from xmppstanza.node import make_tag, parse_xml, to_xml
from xmppstanza.packet import (
    Attrs,
    Extension,
    ExtensionRegistry,
    IQPayload,
    MsgExtension,
    PacketType,
    WebsocketOpen,
)


class _Marker(MsgExtension):
    NAMESPACE = "urn:xmpp:hints"
    LOCAL = "store"


class _Query(IQPayload):
    NAMESPACE = "jabber:iq:roster"
    LOCAL = "query"


class _OtherQuery(IQPayload):
    NAMESPACE = "jabber:iq:roster"
    LOCAL = "query"


def test_attrs_written_in_order():
    element = ET.Element("iq")
    Attrs(type="get", id="1", to="test@localhost").apply_to(element)
    assert to_xml(element) == '<iq type="get" id="1" to="test@localhost"></iq>'


def test_attrs_round_trip():
    attrs = Attrs(type="set", id="7", from_="admin@localhost", to="test@localhost", lang="en")
    element = ET.Element("message")
    attrs.apply_to(element)
    assert Attrs.from_element(parse_xml(to_xml(element))) == attrs


def test_attrs_read_xml_lang():
    element = parse_xml("<iq xml:lang='en' id='aac1a' type='error'/>")
    attrs = Attrs.from_element(element)
    assert attrs.lang == "en"
    assert attrs.id == "aac1a"
    assert attrs.type == "error"


def test_default_extension_element():
    element = _Marker().to_element()
    assert element.tag == make_tag("urn:xmpp:hints", "store")
    assert len(element) == 0
    assert isinstance(_Marker.from_element(element), _Marker)


def test_iq_payload_namespace():
    registry = ExtensionRegistry()
    registry.map_extension(PacketType.IQ, "jabber:iq:roster", "query", _Query)
    payload_cls = registry.get_extension(PacketType.IQ, "jabber:iq:roster", "query")
    payload = payload_cls.from_element(parse_xml("<query xmlns='jabber:iq:roster'/>"))
    assert payload.namespace() == "jabber:iq:roster"
    assert payload.to_element().tag == make_tag("jabber:iq:roster", "query")


def test_registry_lookup():
    registry = ExtensionRegistry()
    registry.map_extension(PacketType.MESSAGE, "urn:xmpp:hints", "store", _Marker)
    assert registry.get_extension(PacketType.MESSAGE, "urn:xmpp:hints", "store") is _Marker
    assert registry.get_extension(PacketType.IQ, "urn:xmpp:hints", "store") is None
    assert registry.get_extension(PacketType.MESSAGE, "urn:xmpp:hints", "other") is None


def test_registry_later_mapping_wins():
    registry = ExtensionRegistry()
    registry.map_extension(PacketType.IQ, "jabber:iq:roster", "query", _Query)
    registry.map_extension(PacketType.IQ, "jabber:iq:roster", "query", _OtherQuery)
    assert registry.get_extension(PacketType.IQ, "jabber:iq:roster", "query") is _OtherQuery


def test_registry_accepts_base_extension():
    registry = ExtensionRegistry()
    registry.map_extension(PacketType.PRESENCE, "ns", "x", Extension)
    assert registry.get_extension(PacketType.PRESENCE, "ns", "x") is Extension


def test_websocket_open_wire_format():
    opening = WebsocketOpen(from_="localhost", id="abc", version="1.0")
    assert to_xml(opening.to_element()) == (
        '<open xmlns="urn:ietf:params:xml:ns:xmpp-framing" from="localhost" id="abc" version="1.0"></open>'
    )


def test_websocket_open_round_trip():
    opening = WebsocketOpen(from_="localhost", id="abc", version="1.0")
    parsed = WebsocketOpen.from_element(parse_xml(to_xml(opening.to_element())))
    assert parsed == opening