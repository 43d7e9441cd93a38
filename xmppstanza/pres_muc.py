"""Multi-user chat presence extension (XEP-0045)."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .node import make_tag, split_tag
from .packet import TYPE_REGISTRY, PacketType, PresExtension

NS_MUC = "http://jabber.org/protocol/muc"

_INT = re.compile(r"[+-]?\d+\Z", re.ASCII)
_SINCE = re.compile(r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2}):(\d{2})Z\Z", re.ASCII)


def _parse_int(name: str, text: str) -> int:
    if not _INT.match(text):
        raise ValueError(f"invalid {name} value {text!r}")
    return int(text)


def _parse_since(text: str) -> datetime:
    match = _SINCE.match(text)
    if not match:
        raise ValueError(f"invalid since value {text!r}")
    return datetime(*map(int, match.groups()), tzinfo=timezone.utc)


def _format_since(value: datetime) -> str:
    return (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}"
        f"T{value.hour:02d}:{value.minute:02d}:{value.second:02d}Z"
    )


def _text(element: ET.Element) -> str:
    return (element.text or "") + "".join(child.tail or "" for child in element)


@dataclass
class History:
    """How much room history to receive on joining; unset values are None."""

    max_chars: int | None = None
    max_stanzas: int | None = None
    seconds: int | None = None
    since: datetime | None = None

    def to_element(self) -> ET.Element | None:
        """Build the <history/> element, or None when nothing is set."""
        values = (
            ("maxchars", self.max_chars),
            ("maxstanzas", self.max_stanzas),
            ("seconds", self.seconds),
        )
        if self.since is None and all(value is None for _, value in values):
            return None
        element = ET.Element("history")
        for name, value in values:
            if value is not None:
                element.set(name, str(value))
        if self.since is not None:
            element.set("since", _format_since(self.since))
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> History:
        """Read a <history/> element; raises ValueError on malformed values."""
        history = cls()
        for name, value in element.attrib.items():
            local = split_tag(name)[1]
            if local == "maxchars":
                history.max_chars = _parse_int(local, value)
            elif local == "maxstanzas":
                history.max_stanzas = _parse_int(local, value)
            elif local == "seconds":
                history.seconds = _parse_int(local, value)
            elif local == "since":
                history.since = _parse_since(value)
        return history


@dataclass
class MucPresence(PresExtension):
    """The <x xmlns='http://jabber.org/protocol/muc'/> element sent to join a room."""

    NAMESPACE = NS_MUC
    LOCAL = "x"

    password: str = ""
    history: History = field(default_factory=History)

    def to_element(self) -> ET.Element:
        """Build the <x/> element."""
        element = ET.Element(make_tag(self.NAMESPACE, self.LOCAL))
        if self.password:
            ET.SubElement(element, "password").text = self.password
        history = self.history.to_element()
        if history is not None:
            element.append(history)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> MucPresence:
        """Read an <x/> MUC element."""
        muc = cls()
        for child in element:
            if not isinstance(child.tag, str):
                continue
            local = split_tag(child.tag)[1]
            if local == "password":
                muc.password = _text(child)
            elif local == "history":
                muc.history = History.from_element(child)
        return muc


TYPE_REGISTRY.map_extension(PacketType.PRESENCE, NS_MUC, "x", MucPresence)