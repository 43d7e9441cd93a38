# xmppstanza

A pure Python library for reading and writing XMPP stanzas. It turns XML
into Python dataclasses and turns those objects back into XML. It covers
messages, presence, IQ and a set of common extensions. It has no
dependencies outside the standard library.

## What it covers

- `xmppstanza.jid`: `Jid.parse("user@example.com/res")`, with `full()` and
  `bare()`. An invalid JID raises `JidError`.
- `xmppstanza.datetime_profiles`: `JabberDate.from_string(...)` reads an
  RFC 3339 date-time, a `YYYY-MM-DD` date or a `hh:mm:ss+00:00` time.
  `date_to_string()`, `date_time_to_string(nanos)` and `time_to_string(nanos)`
  format it again. Input it cannot read raises `InvalidDateInputError`.
- Core stanzas: `Message` (`xmppstanza.message`), `Presence`
  (`xmppstanza.presence`) and `IQ` (`xmppstanza.iq`). Each has
  `to_element()` / `from_element()` and `to_xml()` / `from_xml()`.
  `new_message`, `new_presence` and `new_iq` build them from an `Attrs`.
  `new_iq` makes a UUID id when none is given. It raises `IQValidationError`
  when the type is missing.
- `IQ.validate()` checks the IQ rules and raises `IQValidationError`.
  `IQ.make_error(error)` turns an IQ into an error reply.
- Stanza errors: `XmppError` in `xmppstanza.error`, with code, type, reason
  and text. An error whose code is 0 is left out when the stanza is written.
- IQ payloads:
  - `DiscoInfo` and `DiscoItems` (`xmppstanza.iq_disco`)
  - `Roster` and `RosterItems` (`xmppstanza.iq_roster`)
  - `Version` (`xmppstanza.iq_version`)
  - `Command` with `Actions`, `Note` or a `Form` (`xmppstanza.commands`)
  - `ControlSet` (`xmppstanza.iot`)
- Data forms: `Form`, `Field`, `Option`, `FormItem` and `new_form` in
  `xmppstanza.form`.
- Message extensions (`xmppstanza.msg_extensions`):
  - chat markers
  - chat states
  - processing hints
  - XHTML-IM (`HTML`, `HTMLBody`)
  - out-of-band data (`OOB`)
  - delivery receipts
- Other message extensions: pubsub events (`PubSubEvent` in
  `xmppstanza.msg_pubsub_event`) and component delegation (`Delegation` in
  `xmppstanza.component`).
- Presence extensions: MUC join (`MucPresence`, `History` in
  `xmppstanza.pres_muc`).
- `Tune` and `Mood` in `xmppstanza.pep`.
- The component handshake: `Handshake` in `xmppstanza.component`.
- Unknown payloads are kept as a generic `Node` tree (`xmppstanza.node`).
- Extensions are looked up in `TYPE_REGISTRY`, an `ExtensionRegistry` in
  `xmppstanza.packet`. Register your own class with `map_extension`.
- Stream reading: `StreamReader` (`xmppstanza.parser`) reads from a
  file-like object. `init_stream()` reads the opening `<stream>` or `<open>`
  and returns the stream id. Each `next_packet()` call returns the next
  message, presence, iq or handshake, or `StreamClose` at the end of the
  stream. Problems raise `PacketParseError`.

## Installation

```
pip install xmppstanza
```

## Usage

Build an IQ and serialize it:

```python
from xmppstanza.packet import Attrs
from xmppstanza.iq import IQ, new_iq
from xmppstanza.iq_disco import NS_DISCO_INFO, NS_DISCO_ITEMS

iq = new_iq(Attrs(type="get", to="service.example.com", id="disco-1"))
disco = iq.disco_info()
disco.add_identity("Test Component", "gateway", "service")
disco.add_features(NS_DISCO_INFO, NS_DISCO_ITEMS)

xml_text = iq.to_xml()
parsed = IQ.from_xml(xml_text)
```

Parse a message and look up one of its extensions:

```python
from xmppstanza.message import Message
from xmppstanza.msg_extensions import ReceiptRequest

msg = Message.from_xml(
    "<message to='romeo@example.com'><body>hi</body>"
    "<request xmlns='urn:xmpp:receipts'/></message>"
)
receipt = msg.get(ReceiptRequest)  # the extension, or None
```

Read stanzas from a stream:

```python
import io
from xmppstanza.parser import StreamReader

data = io.StringIO(
    "<stream:stream xmlns='jabber:client' "
    "xmlns:stream='http://etherx.jabber.org/streams' id='abc'>"
    "<message to='romeo@example.com'><body>hi</body></message>"
)
reader = StreamReader(data)
stream_id = reader.init_stream()   # "abc"
packet = reader.next_packet()      # a Message
```

Parse and format a JID:

```python
from xmppstanza.jid import Jid

jid = Jid.parse("juliet@example.com/balcony")
jid.bare()   # "juliet@example.com"
```

## What it does not do

This is a stanza library, not a client. It does not open connections,
negotiate TLS, authenticate, bind resources or handle stream management.
`StreamReader.next_packet()` knows stream features, stream errors, SASL
success/failure and stream management elements, but it does not decode
them. It raises `PacketParseError` for them.

## Running the tests

```
pip install -e .[test]
pytest
```