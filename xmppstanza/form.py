"""Data forms (XEP-0004, XEP-0068)."""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterable
from dataclasses import dataclass, field

from .node import make_tag, split_tag
from .packet import Extension

NS_DATA = "jabber:x:data"

FORM_TYPE_CANCEL = "cancel"
FORM_TYPE_FORM = "form"
FORM_TYPE_RESULT = "result"
FORM_TYPE_SUBMIT = "submit"

FIELD_TYPE_BOOL = "boolean"
FIELD_TYPE_FIXED = "fixed"
FIELD_TYPE_HIDDEN = "hidden"
FIELD_TYPE_JID_MULTI = "jid-multi"
FIELD_TYPE_JID_SINGLE = "jid-single"
FIELD_TYPE_LIST_MULTI = "list-multi"
FIELD_TYPE_LIST_SINGLE = "list-single"
FIELD_TYPE_TEXT_MULTI = "text-multi"
FIELD_TYPE_TEXT_PRIVATE = "text-private"
FIELD_TYPE_TEXT_SINGLE = "text-Single"


def _attrs(element: ET.Element) -> dict[str, str]:
    return {split_tag(name)[1]: value for name, value in element.attrib.items()}


def _text(element: ET.Element) -> str:
    return (element.text or "") + "".join(child.tail or "" for child in element)


def _children(element: ET.Element, local: str) -> list[ET.Element]:
    return [c for c in element if isinstance(c.tag, str) and split_tag(c.tag)[1] == local]


def _texts(element: ET.Element, local: str) -> list[str]:
    return [_text(child) for child in _children(element, local)]


@dataclass
class Option:
    """A choice offered by a list field."""

    label: str = ""
    values: list[str] = field(default_factory=list)

    def to_element(self) -> ET.Element:
        """Build the <option/> element."""
        element = ET.Element("option", {"label": self.label} if self.label else {})
        for value in self.values:
            ET.SubElement(element, "value").text = value
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Option:
        """Read an <option/> element."""
        return cls(label=_attrs(element).get("label", ""), values=_texts(element, "value"))


@dataclass
class Field:
    """A form field with its values and options."""

    var: str = ""
    type: str = ""
    label: str = ""
    description: str = ""
    required: str | None = None
    values: list[str] = field(default_factory=list)
    options: list[Option] = field(default_factory=list)

    def to_element(self) -> ET.Element:
        """Build the <field/> element."""
        attrs = {"var": self.var, "type": self.type, "label": self.label}
        element = ET.Element("field", {k: v for k, v in attrs.items() if v})
        if self.description:
            ET.SubElement(element, "desc").text = self.description
        if self.required is not None:
            ET.SubElement(element, "required").text = self.required
        for value in self.values:
            ET.SubElement(element, "value").text = value
        element.extend(option.to_element() for option in self.options)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Field:
        """Read a <field/> element."""
        attrs = _attrs(element)
        descriptions = _texts(element, "desc")
        required = _texts(element, "required")
        return cls(
            var=attrs.get("var", ""),
            type=attrs.get("type", ""),
            label=attrs.get("label", ""),
            description=descriptions[-1] if descriptions else "",
            required=required[-1] if required else None,
            values=_texts(element, "value"),
            options=[Option.from_element(child) for child in _children(element, "option")],
        )


@dataclass
class FormItem:
    """A <reported/> or <item/> row of fields; the element name is kept when read."""

    fields: list[Field] = field(default_factory=list)
    local: str = ""
    space: str = ""

    def to_element(self) -> ET.Element:
        """Build the element, named <item/> unless a name was set."""
        element = ET.Element(make_tag(self.space, self.local or "item"))
        element.extend(item_field.to_element() for item_field in self.fields)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> FormItem:
        """Read a row element, remembering its name."""
        space, local = split_tag(element.tag)
        return cls([Field.from_element(c) for c in _children(element, "field")], local, space)


@dataclass
class Form(Extension):
    """A data form: the <x xmlns='jabber:x:data'/> element."""

    NAMESPACE = NS_DATA
    LOCAL = "x"

    type: str = ""
    title: str = ""
    instructions: list[str] = field(default_factory=list)
    fields: list[Field] = field(default_factory=list)
    reported: FormItem | None = None
    items: list[FormItem] = field(default_factory=list)

    def to_element(self) -> ET.Element:
        """Build the <x/> element; the type attribute is always written."""
        element = ET.Element(make_tag(self.NAMESPACE, self.LOCAL), {"type": self.type})
        for instruction in self.instructions:
            ET.SubElement(element, "instructions").text = instruction
        if self.title:
            ET.SubElement(element, "title").text = self.title
        element.extend(form_field.to_element() for form_field in self.fields)
        if self.reported is not None:
            reported = self.reported.to_element()
            if not self.reported.local:
                reported.tag = make_tag(self.reported.space, "reported")
            element.append(reported)
        element.extend(item.to_element() for item in self.items)
        return element

    @classmethod
    def from_element(cls, element: ET.Element) -> Form:
        """Read an <x/> data form element."""
        reported = _children(element, "reported")
        titles = _texts(element, "title")
        return cls(
            type=_attrs(element).get("type", ""),
            title=titles[-1] if titles else "",
            instructions=_texts(element, "instructions"),
            fields=[Field.from_element(child) for child in _children(element, "field")],
            reported=FormItem.from_element(reported[-1]) if reported else None,
            items=[FormItem.from_element(child) for child in _children(element, "item")],
        )


def new_form(fields: Iterable[Field], form_type: str) -> Form:
    """Create a form of the given type holding the given fields."""
    return Form(type=form_type, fields=list(fields))