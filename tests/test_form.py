import pytest

from xmppstanza.form import (
    FIELD_TYPE_HIDDEN,
    FORM_TYPE_SUBMIT,
    NS_DATA,
    Field,
    Form,
    FormItem,
    Option,
    new_form,
)
from xmppstanza.node import make_tag, parse_xml, split_tag, to_xml


def roundtrip(obj):
    return type(obj).from_element(parse_xml(to_xml(obj.to_element())))


def sample_form():
    return Form(
        type=FORM_TYPE_SUBMIT,
        title="Config",
        instructions=["Fill it in", "Then send it"],
        fields=[
            Field(var="FORM_TYPE", type=FIELD_TYPE_HIDDEN, values=["urn:example:config"]),
            Field(var="groups", values=["friends", "servants", "courtiers"]),
            Field(
                var="style",
                type="list-single",
                label="Delivery style",
                description="How to deliver",
                required="",
                values=["headline"],
                options=[Option(values=["normal"]), Option(label="H", values=["headline"])],
            ),
        ],
        reported=FormItem(fields=[Field(var="service", label="Service")], local="reported", space=NS_DATA),
        items=[
            FormItem(fields=[Field(var="service", values=["httpd"])], local="item", space=NS_DATA),
            FormItem(fields=[Field(var="service", values=["jabberd"])], local="item", space=NS_DATA),
        ],
    )


def test_form_round_trip():
    form = sample_form()
    assert roundtrip(form) == form


def test_new_form_sets_type_and_fields():
    fields = [Field(var="a"), Field(var="b")]
    form = new_form(fields, FORM_TYPE_SUBMIT)
    assert form.type == FORM_TYPE_SUBMIT
    assert [f.var for f in form.fields] == ["a", "b"]


def test_form_element_name_and_type_always_written():
    element = Form().to_element()
    assert element.tag == make_tag(NS_DATA, "x")
    assert element.get("type") == ""


def test_field_children_order():
    element = Field(
        var="v", description="d", required="", values=["1", "2"], options=[Option(values=["x"])]
    ).to_element()
    assert [child.tag for child in element] == ["desc", "required", "value", "value", "option"]


def test_field_optional_parts_omitted():
    element = Field(var="v").to_element()
    assert list(element) == []
    assert "type" not in element.attrib
    assert "label" not in element.attrib


def test_field_wire_form():
    assert to_xml(Field(var="a", values=["b"]).to_element()) == '<field var="a"><value>b</value></field>'


def test_reported_without_name_is_written_as_reported():
    form = Form(reported=FormItem(fields=[Field(var="s")]))
    element = form.to_element()
    names = [split_tag(child.tag)[1] for child in element]
    assert names == ["reported"]
    parsed = roundtrip(form)
    assert parsed.reported.local == "reported"
    assert parsed.reported.fields == [Field(var="s")]


def test_item_without_name_is_written_as_item():
    element = FormItem(fields=[Field(var="s")]).to_element()
    assert split_tag(element.tag)[1] == "item"


@pytest.mark.parametrize("required", [None, "", "yes"])
def test_required_round_trip(required):
    field = Field(var="x", required=required)
    assert roundtrip(field).required == required


def test_option_round_trip():
    option = Option(label="Normal", values=["normal", "other"])
    assert roundtrip(option) == option