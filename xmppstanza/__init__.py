"""Parse, build and serialize XMPP stanzas and common protocol extensions."""

__version__ = "0.1.0"