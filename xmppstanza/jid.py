"""Jabber identifiers: parsing and formatting."""

from __future__ import annotations

from dataclasses import dataclass

_USERNAME_FORBIDDEN = frozenset("@/'\":<>")
_DOMAIN_FORBIDDEN = frozenset("@/")


class JidError(ValueError):
    """Raised when a string is not a valid JID."""


def _is_valid(text: str, forbidden: frozenset[str]) -> bool:
    return not any(c.isspace() or c in forbidden for c in text)


@dataclass
class Jid:
    """A parsed JID: node@domain/resource."""

    node: str = ""
    domain: str = ""
    resource: str = ""

    @classmethod
    def parse(cls, sjid: str) -> Jid:
        """Parse a JID string, raising JidError when it is invalid."""
        if not sjid:
            raise JidError("jid cannot be empty")

        node, sep, domain = sjid.partition("@")
        if not sep:
            node, domain = "", sjid
        else:
            if not node:
                raise JidError(f"invalid jid '{sjid}'")
            if not domain:
                raise JidError("domain cannot be empty")

        domain, _, resource = domain.partition("/")

        if not _is_valid(node, _USERNAME_FORBIDDEN):
            raise JidError(f"invalid Node in Jid '{sjid}'")
        if not domain or not _is_valid(domain, _DOMAIN_FORBIDDEN):
            raise JidError(f"invalid domain in Jid '{sjid}'")
        return cls(node=node, domain=domain, resource=resource)

    def full(self) -> str:
        """Return node@domain/resource."""
        return f"{self.node}@{self.domain}/{self.resource}"

    def bare(self) -> str:
        """Return node@domain."""
        return f"{self.node}@{self.domain}"