"""Ad-hoc commands (XEP-0050)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from typing import Union

from .form import Form
from .node import RAW_XML_TAG, Node, make_tag, split_tag
from .packet import TYPE_REGISTRY, IQPayload, PacketType

NS_COMMANDS = "http://jabber.org/protocol/commands"

COMMAND_ACTION_CANCEL = "cancel"
COMMAND_ACTION_COMPLETE = "complete"
COMMAND_ACTION_EXECUTE = "execute"
COMMAND_ACTION_NEXT = "next"
COMMAND_ACTION_PREVIOUS = "prev"

COMMAND_STATUS_CANCELLED = "canceled"
COMMAND_STATUS_COMPLETED = "completed"
COMMAND_STATUS_EXECUTING = "executing"

COMMAND_NOTE_TYPE_ERR = "error"
COMMAND_NOTE_TYPE_INFO = "info"
COMMAND_NOTE_TYPE_WARN = "warn"

_ERROR_FLAGS = (
    ("bad-action", "bad_action"),
    ("bad-locale", "bad_locale"),
    ("bad-payload", "bad_payload"),
    ("bad-sessionid", "bad_session_id"),
    ("malformed-action", "malformed_action"),
    ("session-expired", "session_expired"),
)


def _local(element: ET.Element) -> str:
    return split_tag(element.tag)[1] if isinstance(element.tag, str) else ""


def _attrs(element: ET.Element) -> dict[str, str]:
    return {split_tag(name)[1]: value for name, value in element.attrib.items()}


def _text(element: ET.Element) -> str:
    return (element.text or "") + "".join(child.tail or "" for child in element)


def _cdata(text: str) -> str:
    return "<![CDATA[" + text.replace("]]>", "]]]]><![CDATA[>") + "]]>"


@dataclass
class Actions:
    """The actions a command's next stage allows."""

    prev: bool = False
    next: bool = False
    complete: bool = False
    execute: str = ""

    def to_element(self) -> ET.Element:
        """Build the <actions/> element."""
        element = ET.Element("actions")
        if self.execute:
            element.set("execute", self.execute)
        for local, present in (("prev", self.prev), ("next", self.next), ("complete", self.complete)):
            if present:
                ET.SubElement(element, local)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Actions:
        """Read an <actions/> element."""
        children = {_local(child) for child in element}
        return cls(
            prev="prev" in children,
            next="next" in children,
            complete="complete" in children,
            execute=_attrs(element).get("execute", ""),
        )


@dataclass
class Note:
    """A note attached to a command; its text is written as CDATA."""

    text: str = ""
    type: str = ""

    def to_element(self) -> ET.Element:
        """Build the <note/> element."""
        element = ET.Element("note")
        if self.type:
            element.set("type", self.type)
        if self.text:
            ET.SubElement(element, RAW_XML_TAG).text = _cdata(self.text)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Note:
        """Read a <note/> element."""
        return cls(text=_text(element), type=_attrs(element).get("type", ""))


CommandElement = Union[Form, Actions, Note, Node]

_ELEMENT_CLASSES = {"actions": Actions, "note": Note, "x": Form}


@dataclass
class Command(IQPayload):
    """A <command/> payload with its attributes, element and error flags."""

    NAMESPACE = NS_COMMANDS
    LOCAL = "command"

    node: str = ""
    action: str = ""
    session_id: str = ""
    status: str = ""
    lang: str = ""
    command_element: CommandElement | None = None
    bad_action: bool = False
    bad_locale: bool = False
    bad_payload: bool = False
    bad_session_id: bool = False
    malformed_action: bool = False
    session_expired: bool = False

    def to_element(self) -> ET.Element:
        """Build the <command/> element; node is always written."""
        element = ET.Element(make_tag(self.NAMESPACE, self.LOCAL))
        if self.action:
            element.set("action", self.action)
        element.set("node", self.node)
        for name, value in (("sessionid", self.session_id), ("status", self.status), ("lang", self.lang)):
            if value:
                element.set(name, value)
        if self.command_element is not None:
            element.append(self.command_element.to_element())
        for local, flag in _ERROR_FLAGS:
            if getattr(self, flag):
                ET.SubElement(element, local)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Command:
        """Read a <command/> element; the last child element is the command element."""
        attrs = _attrs(element)
        command = cls(
            node=attrs.get("node", ""),
            action=attrs.get("action", ""),
            session_id=attrs.get("sessionid", ""),
            status=attrs.get("status", ""),
            lang=attrs.get("lang", ""),
        )
        flags = dict(_ERROR_FLAGS)
        for child in element:
            local = _local(child)
            if not local:
                continue
            if local in flags:
                setattr(command, flags[local], True)
                continue
            element_class = _ELEMENT_CLASSES.get(local, Node)
            command.command_element = element_class.from_element(child)
        return command


TYPE_REGISTRY.map_extension(PacketType.IQ, NS_COMMANDS, "command", Command)