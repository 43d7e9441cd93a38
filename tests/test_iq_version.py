from xmppstanza.iq_version import NS_VERSION, Version
from xmppstanza.node import make_tag, parse_xml, to_xml
from xmppstanza.packet import TYPE_REGISTRY, PacketType


def roundtrip(obj):
    return type(obj).from_element(parse_xml(to_xml(obj.to_element())))


def test_version_builder_round_trip():
    version = Version().set_info("Exodus", "0.7.0.4", "Windows-XP 5.01.2600")
    parsed = roundtrip(version)
    assert parsed.name == "Exodus"
    assert parsed.version == "0.7.0.4"
    assert parsed.os == "Windows-XP 5.01.2600"


def test_set_info_returns_self():
    version = Version()
    assert version.set_info("a", "b", "c") is version


def test_empty_parts_are_omitted():
    element = Version(name="only").to_element()
    assert element.tag == make_tag(NS_VERSION, "query")
    assert [c.tag for c in element] == ["name"]


def test_empty_version_round_trip():
    assert roundtrip(Version()) == Version()


def test_namespace_and_registry():
    assert Version().namespace() == NS_VERSION
    assert TYPE_REGISTRY.get_extension(PacketType.IQ, NS_VERSION, "query") is Version