"""Info/query stanzas (RFC 6120)."""

from __future__ import annotations

import dataclasses
import uuid
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

from . import commands, iot  # noqa: F401  (register their payloads)
from .error import XmppError
from .iq_disco import DiscoInfo, DiscoItems
from .iq_roster import Roster, RosterItems
from .iq_version import Version
from .namespaces import IQ_TYPE_ERROR, IQ_TYPE_GET, IQ_TYPE_RESULT, IQ_TYPE_SET, is_empty_type
from .node import Node, make_tag, parse_xml, split_tag, to_xml
from .packet import TYPE_REGISTRY, Attrs, IQPayload, Packet, PacketType

IQ_TYPE_UNSET = "iq type is not set but is mandatory"
IQ_ID_UNSET = "iq stanza ID is not set but is mandatory"
IQ_GET_SET_NO_PAYLOAD = "iq is of type get or set but has no payload"
IQ_RESULT_NO_PAYLOAD = "iq is of type result but has no payload"
IQ_ERROR_NO_ERROR_PAYLOAD = "iq is of type error but has no error payload"


class IQValidationError(ValueError):
    """Raised when an iq lacks something the protocol requires."""


@dataclass
class IQ(Packet):
    """An iq stanza with at most one payload, an error and unknown content."""

    packet_name = "iq"

    attrs: Attrs = field(default_factory=Attrs)
    payload: IQPayload | None = None
    error: XmppError | None = None
    any: Node | None = None
    space: str = ""

    def make_error(self, error: XmppError) -> IQ:
        """Turn this iq into an error reply: swap from/to and attach the error."""
        self.attrs.type = IQ_TYPE_ERROR
        self.attrs.from_, self.attrs.to = self.attrs.to, self.attrs.from_
        self.error = error
        return self

    def validate(self) -> None:
        """Raise IQValidationError when the iq breaks the protocol rules."""
        if not self.attrs.id.strip():
            raise IQValidationError(IQ_ID_UNSET)
        if is_empty_type(self.attrs.type):
            raise IQValidationError(IQ_TYPE_UNSET)
        kind = self.attrs.type
        if kind in (IQ_TYPE_GET, IQ_TYPE_SET) and self.payload is None and self.any is None:
            raise IQValidationError(IQ_GET_SET_NO_PAYLOAD)
        if kind == IQ_TYPE_RESULT and self.payload is not None and self.any is not None:
            raise IQValidationError(IQ_RESULT_NO_PAYLOAD)
        if kind == IQ_TYPE_ERROR and self.error is None:
            raise IQValidationError(IQ_ERROR_NO_ERROR_PAYLOAD)

    def disco_info(self) -> DiscoInfo:
        """Set and return an empty disco#info payload."""
        payload = DiscoInfo()
        self.payload = payload
        return payload

    def disco_items(self) -> DiscoItems:
        """Set and return an empty disco#items payload."""
        payload = DiscoItems()
        self.payload = payload
        return payload

    def roster_iq(self) -> Roster:
        """Set and return an empty roster payload."""
        payload = Roster()
        self.payload = payload
        return payload

    def roster_items(self) -> RosterItems:
        """Set and return an empty roster items payload."""
        payload = RosterItems()
        self.payload = payload
        return payload

    def version(self) -> Version:
        """Set and return an empty software version payload."""
        payload = Version()
        self.payload = payload
        return payload

    def to_element(self) -> ET.Element:
        """Build the <iq/> element."""
        element = ET.Element(make_tag(self.space, "iq"))
        self.attrs.apply_to(element)
        if self.payload is not None:
            element.append(self.payload.to_element())
        if self.error is not None:
            error = self.error.to_element()
            if error is not None:
                element.append(error)
        if self.any is not None:
            element.append(self.any.to_element())
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> IQ:
        """Read an <iq/> element; unknown children are kept as a Node."""
        attrs = Attrs.from_element(element)
        # An iq reads only its id, type, from and to attributes.
        attrs.lang = ""
        iq = cls(attrs=attrs, space=split_tag(element.tag)[0])
        for child in element:
            if not isinstance(child.tag, str):
                continue
            space, local = split_tag(child.tag)
            if local == "error":
                iq.error = XmppError.from_element(child)
                continue
            payload_class = TYPE_REGISTRY.get_extension(PacketType.IQ, space, local)
            if payload_class is not None:
                iq.payload = payload_class.from_element(child)
                continue
            iq.any = Node.from_element(child)
        return iq

    def to_xml(self) -> str:
        """Serialise the iq."""
        return to_xml(self.to_element())

    @classmethod
    def from_xml(cls, text: str | bytes) -> IQ:
        """Parse an iq from XML text."""
        return cls.from_element(parse_xml(text))


def new_iq(attrs: Attrs) -> IQ:
    """Create an iq, generating an id if missing; the type is mandatory."""
    attrs = dataclasses.replace(attrs)
    if not attrs.id:
        attrs.id = str(uuid.uuid4())
    if is_empty_type(attrs.type):
        raise IQValidationError(IQ_TYPE_UNSET)
    return IQ(attrs=attrs)