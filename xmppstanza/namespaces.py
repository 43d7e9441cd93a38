"""XMPP namespaces and the enumerated values used on stanzas.

The package parses, builds and serialises XMPP stanzas and nonzas.
"""

from __future__ import annotations

from enum import Enum

NS_STREAM = "http://etherx.jabber.org/streams"
NS_TLS = "urn:ietf:params:xml:ns:xmpp-tls"
NS_SASL = "urn:ietf:params:xml:ns:xmpp-sasl"
NS_BIND = "urn:ietf:params:xml:ns:xmpp-bind"
NS_SESSION = "urn:ietf:params:xml:ns:xmpp-session"
NS_FRAMING = "urn:ietf:params:xml:ns:xmpp-framing"
NS_CLIENT = "jabber:client"
NS_COMPONENT = "jabber:component:accept"

# Stanza "type" attribute values (RFC 6120, A.5 and A.6).
IQ_TYPE_ERROR = "error"
IQ_TYPE_GET = "get"
IQ_TYPE_RESULT = "result"
IQ_TYPE_SET = "set"

MESSAGE_TYPE_CHAT = "chat"
MESSAGE_TYPE_ERROR = "error"
MESSAGE_TYPE_GROUPCHAT = "groupchat"
MESSAGE_TYPE_HEADLINE = "headline"
MESSAGE_TYPE_NORMAL = "normal"

PRESENCE_TYPE_ERROR = "error"
PRESENCE_TYPE_PROBE = "probe"
PRESENCE_TYPE_SUBSCRIBE = "subscribe"
PRESENCE_TYPE_SUBSCRIBED = "subscribed"
PRESENCE_TYPE_UNAVAILABLE = "unavailable"
PRESENCE_TYPE_UNSUBSCRIBE = "unsubscribe"
PRESENCE_TYPE_UNSUBSCRIBED = "unsubscribed"


class ErrorType(str, Enum):
    """Values of the "type" attribute of a stanza error."""

    AUTH = "auth"
    CANCEL = "cancel"
    CONTINUE = "continue"
    MODIFY = "modify"
    WAIT = "wait"

    def __str__(self) -> str:
        return self.value


class PresenceShow(str, Enum):
    """Values of the presence <show/> element."""

    AWAY = "away"
    CHAT = "chat"
    DND = "dnd"
    XA = "xa"

    def __str__(self) -> str:
        return self.value


def is_empty_type(value: str | None) -> bool:
    """Return True when a stanza type is missing or only whitespace."""
    return not str(value or "").strip()