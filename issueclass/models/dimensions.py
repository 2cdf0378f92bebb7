"""Dimension key: canonical identity of a set of dimension name/value pairs."""

from __future__ import annotations

import json
from collections.abc import Iterator, Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class DimensionKey(Mapping[str, str]):
    """Order-independent mapping of dimension name to value.

    Two keys compare (and hash) equal iff their contents are equal, no matter
    in which order the pairs were supplied.  ``canonical()`` yields the string
    form used for exact-match store queries; equal keys always serialise to
    the same string.
    """

    items_: tuple[tuple[str, str], ...] = ()

    def __post_init__(self) -> None:
        # Normalise to sorted, de-duplicated pairs so equality is content-based.
        object.__setattr__(self, "items_", tuple(sorted(dict(self.items_).items())))

    @classmethod
    def of(cls, mapping: Mapping[str, str] | None = None, **dimensions: str) -> DimensionKey:
        merged: dict[str, str] = dict(mapping or {})
        merged.update(dimensions)
        return cls(tuple((str(k), str(v)) for k, v in merged.items()))

    @classmethod
    def parse(cls, text: str) -> DimensionKey:
        """Inverse of ``canonical()``.  Empty text yields the empty key."""
        if not text:
            return cls()
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError(f"Dimension key must be a JSON object, got: {text!r}")
        return cls.of(data)

    def canonical(self) -> str:
        return json.dumps(dict(self.items_), sort_keys=True, separators=(",", ":"))

    def __getitem__(self, name: str) -> str:
        for key, value in self.items_:
            if key == name:
                return value
        raise KeyError(name)

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self.items_)

    def __len__(self) -> int:
        return len(self.items_)

    def __str__(self) -> str:
        return self.canonical()
