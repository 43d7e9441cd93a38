"""Generic XML nodes and the XML reading and writing helpers."""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field

XML_NS = "http://www.w3.org/XML/1998/namespace"

# An element with this tag is written as its text, unescaped, without tags.
RAW_XML_TAG = "{urn:xmppstanza:raw}raw"

_NAME = re.compile(r"[A-Za-z_][\w.\-]*\Z")
_TEXT_ESCAPES = str.maketrans(
    {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&#34;", "'": "&#39;", "\t": "&#x9;", "\r": "&#xD;"}
)


def split_tag(tag: str) -> tuple[str, str]:
    """Split a "{namespace}local" tag into (namespace, local)."""
    if tag.startswith("{"):
        namespace, _, local = tag[1:].partition("}")
        return namespace, local
    return "", tag


def make_tag(namespace: str, local: str) -> str:
    """Build a "{namespace}local" tag, or just local without a namespace."""
    return f"{{{namespace}}}{local}" if namespace else local


def _attr(text: str) -> str:
    return text.translate(_TEXT_ESCAPES).replace("\n", "&#xA;")


def _write(element: ET.Element, out: list[str]) -> None:
    if not isinstance(element.tag, str):
        return
    if element.tag == RAW_XML_TAG:
        out.append(element.text or "")
        return
    namespace, local = split_tag(element.tag)
    out.append("<" + local)
    if namespace:
        out.append(f' xmlns="{_attr(namespace)}"')
    prefixes: dict[str, str] = {}
    for name, value in element.attrib.items():
        attr_ns, qname = split_tag(name)
        if attr_ns == XML_NS:
            qname = "xml:" + qname
        elif attr_ns:
            if attr_ns not in prefixes:
                prefix = attr_ns.rstrip("/").rsplit("/", 1)[-1]
                if not _NAME.match(prefix) or prefix.startswith("xml"):
                    prefix = "_" + prefix if _NAME.match(prefix) else "_"
                base, seq = prefix, 1
                while prefix in prefixes.values():
                    prefix, seq = f"{base}_{seq}", seq + 1
                prefixes[attr_ns] = prefix
                out.append(f' xmlns:{prefix}="{_attr(attr_ns)}"')
            qname = f"{prefixes[attr_ns]}:{qname}"
        out.append(f' {qname}="{_attr(value)}"')
    out.append(">" + (element.text or "").translate(_TEXT_ESCAPES))
    for child in element:
        _write(child, out)
        out.append((child.tail or "").translate(_TEXT_ESCAPES))
    out.append(f"</{local}>")


def to_xml(element: ET.Element) -> str:
    """Serialise an element, declaring xmlns on every namespaced element."""
    out: list[str] = []
    _write(element, out)
    return "".join(out)


def parse_xml(text: str | bytes) -> ET.Element:
    """Parse an XML document into an element; raises ET.ParseError."""
    return ET.fromstring(text.strip())


@dataclass
class Node:
    """Generic XML content, used for unknown or custom payloads."""

    local: str
    space: str = ""
    attrs: dict[str, str] = field(default_factory=dict)
    content: str = ""
    nodes: list[Node] = field(default_factory=list)

    def namespace(self) -> str:
        """Return the node's namespace."""
        return self.space

    def to_element(self) -> ET.Element:
        """Build an element; character content follows the child nodes."""
        element = ET.Element(make_tag(self.space, self.local), dict(self.attrs))
        element.extend(node.to_element() for node in self.nodes)
        if self.content:
            if len(element):
                element[-1].tail = self.content
            else:
                element.text = self.content
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Node:
        """Build a node tree from an element."""
        space, local = split_tag(element.tag)
        return cls(
            local=local,
            space=space,
            attrs=dict(element.attrib),
            content=(element.text or "") + "".join(child.tail or "" for child in element),
            nodes=[cls.from_element(child) for child in element if isinstance(child.tag, str)],
        )