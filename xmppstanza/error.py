"""Stanza errors, carried in the payload of an erroneous stanza."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from .namespaces import ErrorType
from .node import Node, make_tag, split_tag

STANZAS_NS = "urn:ietf:params:xml:ns:xmpp-stanzas"
PUBSUB_ERRORS_NS = "http://jabber.org/protocol/pubsub#errors"

_CODE = re.compile(r"[+-]?\d+\Z", re.ASCII)


def _error_type(value: str) -> ErrorType | str:
    try:
        return ErrorType(value)
    except ValueError:
        return value


@dataclass
class XmppError:
    """An <error/> element with its code, type, reason and text."""

    code: int = 0
    type: ErrorType | str = ""
    reason: str = ""
    text: str = ""

    def to_element(self) -> ET.Element | None:
        """Build the <error/> element; an error without a code is omitted."""
        if self.code == 0:
            return None
        element = ET.Element("error")
        element.set("code", str(self.code))
        if str(self.type):
            element.set("type", str(self.type))
        if self.reason:
            ET.SubElement(element, make_tag(STANZAS_NS, self.reason))
        if self.text:
            ET.SubElement(element, make_tag(STANZAS_NS, "text")).text = self.text
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> XmppError:
        """Read an <error/> element."""
        error = cls()
        for name, value in element.attrib.items():
            local = split_tag(name)[1]
            if local == "type":
                error.type = _error_type(value)
            elif local == "code" and _CODE.match(value):
                error.code = int(value)

        for child in element:
            if not isinstance(child.tag, str):
                continue
            namespace, local = split_tag(child.tag)
            if namespace == STANZAS_NS and local in ("text", "gone"):
                error.text = Node.from_element(child).content
            elif namespace in (STANZAS_NS, PUBSUB_ERRORS_NS):
                error.reason = local
        return error