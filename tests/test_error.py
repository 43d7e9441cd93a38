from xmppstanza.error import XmppError
from xmppstanza.namespaces import ErrorType
from xmppstanza.node import parse_xml, to_xml


def _error_of(packet):
    return XmppError.from_element(parse_xml(packet).find("error"))


def test_unmarshal_error_text():
    packet = """
 <iq from='pubsub.example.com'
       id='kj4vz31m'
       to='romeo@example.net/foo'
       type='error'>
  <error type='wait'>
    <resource-constraint
        xmlns='urn:ietf:params:xml:ns:xmpp-stanzas'/>
    <text xmlns='urn:ietf:params:xml:ns:xmpp-stanzas'>System overloaded, please retry</text>
  </error>
 </iq>"""
    error = _error_of(packet)
    assert error.text == "System overloaded, please retry"
    assert error.reason == "resource-constraint"
    assert error.type is ErrorType.WAIT


def test_error_tag_round_trip():
    error = XmppError(
        code=503,
        type=ErrorType.CANCEL,
        reason="service-unavailable",
        text="User session not found",
    )
    parsed = XmppError.from_element(parse_xml(to_xml(error.to_element())))
    assert parsed == error


def test_error_wire_format():
    error = XmppError(code=503, type="cancel", reason="service-unavailable")
    assert to_xml(error.to_element()) == (
        '<error code="503" type="cancel">'
        '<service-unavailable xmlns="urn:ietf:params:xml:ns:xmpp-stanzas"></service-unavailable>'
        "</error>"
    )


def test_error_without_code_is_omitted():
    assert XmppError(type="cancel", reason="service-unavailable").to_element() is None


def test_payload_with_error():
    packet = """<iq xml:lang='en' to='test1@localhost/resource' from='test@localhost' type='error' id='aac1a'>
 <query xmlns='jabber:iq:version'/>
 <error code='407' type='auth'>
  <subscription-required xmlns='urn:ietf:params:xml:ns:xmpp-stanzas'/>
  <text xml:lang='en' xmlns='urn:ietf:params:xml:ns:xmpp-stanzas'>Not subscribed</text>
 </error>
</iq>"""
    error = _error_of(packet)
    assert error.reason == "subscription-required"
    assert error.code == 407
    assert error.type is ErrorType.AUTH
    assert error.text == "Not subscribed"


def test_decode_message_error_type():
    packet = """<message from='test@example.com' id='msg_1' to='test@example.com' type='error'>
  <error type='cancel'>
    <not-acceptable xmlns='urn:ietf:params:xml:ns:xmpp-stanzas'/>
  </error>
</message>"""
    error = _error_of(packet)
    assert error.type == "cancel"
    assert error.reason == "not-acceptable"


def test_pubsub_gone_and_reason():
    packet = (
        "<iq type='error' id='1'><error type='cancel'>"
        "<gone xmlns='urn:ietf:params:xml:ns:xmpp-stanzas'>xmpp:pubsub.example.com?;node=x</gone>"
        "<invalid-jid xmlns='http://jabber.org/protocol/pubsub#errors'/>"
        "</error></iq>"
    )
    error = _error_of(packet)
    assert error.text == "xmpp:pubsub.example.com?;node=x"
    assert error.reason == "invalid-jid"


def test_invalid_code_is_ignored():
    error = XmppError.from_element(parse_xml("<error code='abc' type='strange'/>"))
    assert error.code == 0
    assert error.type == "strange"