"""
WCP Audit — Rate Table

Immutable role → RateEntry lookup. Built once and injected into the validator;
nothing mutates it after construction. Lookup is exact and case-sensitive, and
a miss returns None (the validator turns it into an UnknownRole finding).
"""
from types import MappingProxyType

from wcpaudit.config import DBWD_RATES
from wcpaudit.models import RateEntry


class RateTable:
    __slots__ = ("_entries",)

    def __init__(self, entries: dict):
        self._entries = MappingProxyType(dict(entries))

    @classmethod
    def from_mapping(cls, rates: dict) -> "RateTable":
        """Build from {"Role": {"base": x, "fringe": y}} as used in config."""
        return cls({role: RateEntry(base_rate=float(r["base"]), fringe_rate=float(r.get("fringe", 0)))
                    for role, r in rates.items()})

    def lookup(self, role: str):
        return self._entries.get(role)

    def roles(self) -> list:
        return sorted(self._entries)

    def __contains__(self, role) -> bool:
        return role in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def to_dict(self) -> dict:
        return {role: self._entries[role].to_dict() for role in self.roles()}


def default_rate_table() -> RateTable:
    return RateTable.from_mapping(DBWD_RATES)
