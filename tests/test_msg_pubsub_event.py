import pytest

from xmppstanza.form import Field, Form
from xmppstanza.message import Message
from xmppstanza.msg_pubsub_event import (
    AssociateEvent,
    CollectionEvent,
    ConfigurationEvent,
    DeleteEvent,
    DisassociateEvent,
    ItemEvent,
    ItemsEvent,
    PubSubEvent,
    PurgeEvent,
    RedirectEvent,
    RetractEvent,
    SubscriptionEvent,
)
from xmppstanza.node import Node, parse_xml, to_xml

DECODE_INPUT = """<message from='pubsub.shakespeare.lit' to='francisco@example.com' id='foo'>
	 <event xmlns='http://jabber.org/protocol/pubsub#event'>
	   <items node='princely_musings'>
	     <item id='ae890ac52d0df67ed7cfdf51b644e901'>
	       <entry xmlns='http://www.w3.org/2005/Atom'>
	         <title>Soliloquy</title>
	         <summary>
	To be, or not to be: that is the question:
	Whether 'tis nobler in the mind to suffer
	The slings and arrows of outrageous fortune,
	Or to take arms against a sea of troubles,
	And by opposing end them?
	         </summary>
	         <link rel='alternate' type='text/html'
	               href='http://denmark.lit/2003/12/13/atom03'/>
	         <id>tag:denmark.lit,2003:entry-32397</id>
	         <published>2003-12-13T18:30:02Z</published>
	         <updated>2003-12-13T18:30:02Z</updated>
	       </entry>
	     </item>
	   </items>
	 </event>
	</message>
	"""


def test_decode_msg_event():
    parsed = Message.from_xml(DECODE_INPUT)
    assert parsed.body == ""
    assert len(parsed.extensions) >= 1
    ext = parsed.extensions[0]
    assert isinstance(ext, PubSubEvent)
    items = ext.event_element
    assert isinstance(items, ItemsEvent)
    assert items.node == "princely_musings"
    assert items.items[0].any.nodes[0].content == "Soliloquy"
    assert len(items.items[0].any.nodes) == 6
    assert items.event_name == "List"


def test_encode_event():
    expected = (
        '<message><event xmlns="http://jabber.org/protocol/pubsub#event">'
        '<items node="princely_musings"><item id="ae890ac52d0df67ed7cfdf51b644e901">'
        '<entry xmlns="http://www.w3.org/2005/Atom"><title>My pub item title</title>'
        '<summary>My pub item content summary</summary><link rel="alternate" '
        'type="text/html" href="http://denmark.lit/2003/12/13/atom03">'
        "</link><id>My pub item content ID</id><published>2003-12-13T18:30:02Z</published>"
        "<updated>2003-12-13T18:30:02Z</updated></entry></item></items></event></message>"
    )
    entry = Node(
        local="entry",
        space="http://www.w3.org/2005/Atom",
        nodes=[
            Node(local="title", content="My pub item title"),
            Node(local="summary", content="My pub item content summary"),
            Node(
                local="link",
                attrs={
                    "rel": "alternate",
                    "type": "text/html",
                    "href": "http://denmark.lit/2003/12/13/atom03",
                },
            ),
            Node(local="id", content="My pub item content ID"),
            Node(local="published", content="2003-12-13T18:30:02Z"),
            Node(local="updated", content="2003-12-13T18:30:02Z"),
        ],
    )
    message = Message(
        extensions=[
            PubSubEvent(
                event_element=ItemsEvent(
                    items=[ItemEvent(id="ae890ac52d0df67ed7cfdf51b644e901", any=entry)],
                    node="princely_musings",
                )
            )
        ]
    )
    assert message.to_xml().strip() == expected.strip()


@pytest.mark.parametrize(
    "event_element",
    [
        CollectionEvent(assoc_disassoc=AssociateEvent(node="n1"), node="coll"),
        CollectionEvent(assoc_disassoc=DisassociateEvent(node="n2")),
        ConfigurationEvent(node="n", form=Form(type="result", fields=[Field(var="a", values=["1"])])),
        DeleteEvent(node="n", redirect=RedirectEvent(uri="xmpp:hamlet@example.com")),
        ItemsEvent(node="n", retract=RetractEvent(id="item-1")),
        PurgeEvent(node="n"),
        SubscriptionEvent(sub_status="subscribed", expiry="2006-02-28T23:59:59Z"),
    ],
)
def test_event_round_trip(event_element):
    event = PubSubEvent(event_element=event_element)
    parsed = PubSubEvent.from_element(parse_xml(to_xml(event.to_element())))
    assert parsed == event


def test_unknown_child_is_ignored():
    text = '<event xmlns="http://jabber.org/protocol/pubsub#event"><unknown/></event>'
    assert PubSubEvent.from_element(parse_xml(text)).event_element is None


def test_last_known_child_wins():
    text = (
        '<event xmlns="http://jabber.org/protocol/pubsub#event">'
        '<purge node="a"/><delete node="b"/></event>'
    )
    parsed = PubSubEvent.from_element(parse_xml(text))
    assert parsed.event_element == DeleteEvent(node="b")


def test_items_node_always_written():
    element = ItemsEvent().to_element()
    assert element.get("node") == ""
    assert len(element) == 0


def test_assoc_kinds():
    parsed = CollectionEvent.from_element(parse_xml('<collection><disassociate node="x"/></collection>'))
    assert parsed.assoc_disassoc == DisassociateEvent(node="x")
    assert parsed.assoc_disassoc.assoc_disassoc == "Disassociate"