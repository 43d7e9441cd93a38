"""Personal eventing payloads: user tune and user mood."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass

from .node import make_tag, split_tag
from .packet import Extension, MsgExtension

NS_TUNE = "http://jabber.org/protocol/tune"
NS_MOOD = "http://jabber.org/protocol/mood"

_INT = re.compile(r"[+-]?\d+\Z", re.ASCII)


def _text(element: ET.Element) -> str:
    return (element.text or "") + "".join(child.tail or "" for child in element)


def _children_text(element: ET.Element) -> dict[str, str]:
    values: dict[str, str] = {}
    for child in element:
        if isinstance(child.tag, str):
            values[split_tag(child.tag)[1]] = _text(child)
    return values


def _parse_int(name: str, text: str) -> int:
    text = text.strip()
    if not text:
        return 0
    if not _INT.match(text):
        raise ValueError(f"invalid {name} value {text!r}")
    return int(text)


@dataclass
class Tune(Extension):
    """The music a user is listening to (XEP-0118)."""

    NAMESPACE = NS_TUNE
    LOCAL = "tune"

    artist: str = ""
    length: int = 0
    rating: int = 0
    source: str = ""
    title: str = ""
    track: str = ""
    uri: str = ""

    def to_element(self) -> ET.Element:
        """Build the <tune/> element; empty values are left out."""
        element = ET.Element(make_tag(self.NAMESPACE, self.LOCAL))
        for local, value in (
            ("artist", self.artist),
            ("length", self.length),
            ("rating", self.rating),
            ("source", self.source),
            ("title", self.title),
            ("track", self.track),
            ("uri", self.uri),
        ):
            if value:
                ET.SubElement(element, local).text = str(value)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Tune:
        """Read a <tune/> element; raises ValueError on a malformed number."""
        values = _children_text(element)
        return cls(
            artist=values.get("artist", ""),
            length=_parse_int("length", values.get("length", "")),
            rating=_parse_int("rating", values.get("rating", "")),
            source=values.get("source", ""),
            title=values.get("title", ""),
            track=values.get("track", ""),
            uri=values.get("uri", ""),
        )


@dataclass
class Mood(MsgExtension):
    """A user's mood (XEP-0107); carries the free text only."""

    NAMESPACE = NS_MOOD
    LOCAL = "mood"

    text: str = ""

    def to_element(self) -> ET.Element:
        """Build the <mood/> element."""
        element = ET.Element(make_tag(self.NAMESPACE, self.LOCAL))
        if self.text:
            ET.SubElement(element, "text").text = self.text
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Mood:
        """Read a <mood/> element."""
        return cls(text=_children_text(element).get("text", ""))