"""Reading XMPP stanzas one by one from an XML stream."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections import deque
from collections.abc import Callable
from dataclasses import dataclass
from typing import IO, AnyStr

from .component import Handshake
from .iq import IQ
from .message import Message
from .namespaces import NS_CLIENT, NS_COMPONENT, NS_FRAMING, NS_SASL, NS_STREAM
from .node import split_tag
from .packet import Packet
from .presence import Presence

NS_STREAM_MANAGEMENT = "urn:xmpp:sm:3"

_Decoder = Callable[[ET.Element], Packet]


class PacketParseError(Exception):
    """Raised when the stream cannot be read or holds an unexpected packet."""


@dataclass
class StreamClose(Packet):
    """The closing tag of the XMPP stream."""

    packet_name = "stream:stream"


_CLIENT_DECODERS: dict[str, _Decoder] = {
    "message": Message.from_element,
    "presence": Presence.from_element,
    "iq": IQ.from_element,
}

_COMPONENT_DECODERS: dict[str, _Decoder] = {
    "handshake": Handshake.from_element,
    **_CLIENT_DECODERS,
}


def _unexpected(element: ET.Element) -> PacketParseError:
    space, local = split_tag(element.tag)
    return PacketParseError(f"unexpected XMPP packet {space} <{local}/>")


def decode_client(element: ET.Element) -> Packet:
    """Decode a message, presence or iq element."""
    decoder = _CLIENT_DECODERS.get(split_tag(element.tag)[1])
    if decoder is None:
        raise _unexpected(element)
    return decoder(element)


def decode_component(element: ET.Element) -> Packet:
    """Decode a handshake, message, presence or iq element."""
    decoder = _COMPONENT_DECODERS.get(split_tag(element.tag)[1])
    if decoder is None:
        raise _unexpected(element)
    return decoder(element)


def _unsupported(element: ET.Element) -> Packet:
    space, local = split_tag(element.tag)
    raise PacketParseError(f"unsupported XMPP packet {space} <{local}/>")


def _select_decoder(element: ET.Element) -> _Decoder:
    """Pick the decoder for a top level element, failing early on unknown ones."""
    space, local = split_tag(element.tag)
    if space == NS_STREAM:
        if local in ("error", "features"):
            return _unsupported
        raise _unexpected(element)
    if space == NS_SASL:
        if local in ("success", "failure"):
            return _unsupported
        raise _unexpected(element)
    if space == NS_CLIENT:
        if local not in _CLIENT_DECODERS:
            raise _unexpected(element)
        return decode_client
    if space == NS_COMPONENT:
        if local not in _COMPONENT_DECODERS:
            raise _unexpected(element)
        return decode_component
    if space == NS_STREAM_MANAGEMENT:
        return _unsupported
    raise PacketParseError(f"unknown namespace {space} <{local}/>")


class StreamReader:
    """Reads an XMPP stream incrementally from a file-like source."""

    def __init__(self, source: IO[AnyStr], chunk_size: int = 4096) -> None:
        self._source = source
        self._chunk_size = chunk_size
        self._parser = ET.XMLPullParser(events=("start", "end"))
        self._events: deque[tuple[str, ET.Element]] = deque()
        self._open: list[ET.Element] = []

    def _next_event(self) -> tuple[str, ET.Element]:
        while not self._events:
            chunk = self._source.read(self._chunk_size)
            if not chunk:
                raise PacketParseError("connection closed")
            try:
                self._parser.feed(chunk)
                self._events.extend(self._parser.read_events())
            except ET.ParseError as exc:
                raise PacketParseError(f"NextStart {exc}") from exc
        return self._events.popleft()

    def _track(self, event: str, element: ET.Element) -> None:
        if event == "start":
            self._open.append(element)
        else:
            self._open.pop()

    def init_stream(self) -> str:
        """Read the opening <stream/> or <open/> element and return the stream id."""
        while True:
            event, element = self._next_event()
            self._track(event, element)
            if event != "start":
                continue
            space, local = split_tag(element.tag)
            if (space, local) not in ((NS_STREAM, "stream"), (NS_FRAMING, "open")):
                raise PacketParseError(
                    f"xmpp: expected <stream> or <open> but got <{local}> in {space}"
                )
            return next(
                (value for name, value in element.attrib.items() if split_tag(name)[1] == "id"),
                "",
            )

    def next_packet(self) -> Packet:
        """Read and decode the next complete stanza, or the stream close."""
        pending: ET.Element | None = None
        decoder: _Decoder | None = None
        while True:
            event, element = self._next_event()
            self._track(event, element)
            if event == "start":
                if pending is None:
                    decoder = _select_decoder(element)
                    pending = element
                continue
            if pending is not None and element is pending:
                if self._open:
                    self._open[-1].remove(element)
                return decoder(element)
            if pending is None and split_tag(element.tag) == (NS_STREAM, "stream"):
                return StreamClose()