"""Case-insensitive, multi-valued request header collection.

Names are stored lower-cased; every value registered under a name is kept in
arrival order. Lookups normalize the queried name the same way, so
``Authorization``, ``authorization`` and ``AUTHORIZATION`` are one entry.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping, Sequence
from typing import Union

HeaderValues = Union[str, Sequence[str]]


def _normalize(name: str) -> str:
    return name.lower()


class HeaderCollection(Mapping[str, tuple[str, ...]]):
    """Read-only mapping of lower-cased header name to its ordered values."""

    def __init__(self, entries: Mapping[str, tuple[str, ...]] | None = None) -> None:
        self._entries: dict[str, tuple[str, ...]] = dict(entries or {})

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> HeaderCollection:
        """Build from ``(name, value)`` pairs, e.g. ``request.headers.items()``."""
        collected: dict[str, list[str]] = {}
        for name, value in pairs:
            collected.setdefault(_normalize(name), []).append(value)
        return cls({name: tuple(values) for name, values in collected.items()})

    @classmethod
    def from_mapping(cls, headers: Mapping[str, HeaderValues]) -> HeaderCollection:
        """Build from a plain mapping of name to a value or a list of values.

        Names differing only in case are merged in iteration order.
        """
        pairs: list[tuple[str, str]] = []
        for name, values in headers.items():
            if isinstance(values, str):
                pairs.append((name, values))
            else:
                pairs.extend((name, value) for value in values)
        return cls.from_pairs(pairs)

    def getall(self, name: str) -> tuple[str, ...]:
        """All values for ``name`` in arrival order; empty when absent."""
        return self._entries.get(_normalize(name), ())

    def getone(self, name: str, default: str | None = None) -> str | None:
        values = self.getall(name)
        if not values:
            return default
        return values[0]

    def __getitem__(self, name: str) -> tuple[str, ...]:
        return self._entries[_normalize(name)]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and _normalize(name) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"HeaderCollection({self._entries!r})"


def as_header_collection(headers: object) -> HeaderCollection:
    """Coerce a supported header container into a HeaderCollection.

    Accepts a HeaderCollection (returned as-is), an aiohttp/multidict header
    proxy, or a plain mapping of name to value(s).
    """
    if isinstance(headers, HeaderCollection):
        return headers
    if hasattr(headers, "getall"):
        # multidict yields duplicate names from items(), in arrival order
        return HeaderCollection.from_pairs(headers.items())  # type: ignore[attr-defined]
    if isinstance(headers, Mapping):
        return HeaderCollection.from_mapping(headers)
    raise TypeError(f"Unsupported header container: {type(headers).__name__}")
