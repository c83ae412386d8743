"""Immutable, case-insensitive HTTP headers.

Implements ``Mapping[str, str]``. Each header name maps to an ordered
sequence of values; ``__getitem__`` returns the first, ``get_list``
returns them all.
"""

from collections.abc import Iterator, Mapping


class Headers(Mapping[str, str]):
    """Immutable, case-insensitive HTTP headers.

    Built from the raw ASGI byte pairs. Names are lowercased once at
    construction; values keep their arrival order.
    """

    __slots__ = ("_index", "_raw")

    _index: dict[str, tuple[str, ...]]
    _raw: tuple[tuple[bytes, bytes], ...]

    def __init__(self, raw: tuple[tuple[bytes, bytes], ...] = ()) -> None:
        index: dict[str, list[str]] = {}
        for name, value in raw:
            key = name.decode("latin-1").lower()
            index.setdefault(key, []).append(value.decode("latin-1"))
        object.__setattr__(self, "_raw", raw)
        object.__setattr__(self, "_index", {k: tuple(v) for k, v in index.items()})

    @classmethod
    def from_pairs(cls, pairs: Mapping[str, str] | tuple[tuple[str, str], ...]) -> "Headers":
        """Build headers from ``str`` pairs (tests, synthetic requests)."""
        items = pairs.items() if isinstance(pairs, Mapping) else pairs
        return cls(
            tuple((name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in items)
        )

    def __setattr__(self, name: str, value: object) -> None:
        msg = "Headers are immutable"
        raise AttributeError(msg)

    def __getitem__(self, key: str) -> str:
        return self._index[key.lower()][0]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._index

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        items = ", ".join(f"{k!r}: {list(v)!r}" for k, v in self._index.items())
        return f"Headers({{{items}}})"

    def get(self, key: str, default: str | None = None) -> str | None:  # type: ignore[override]
        """Return the first value for *key*, or *default* if missing."""
        values = self._index.get(key.lower())
        return values[0] if values else default

    def get_list(self, key: str) -> list[str]:
        """Return all values for *key* in arrival order."""
        return list(self._index.get(key.lower(), ()))

    def multi_items(self) -> list[tuple[str, str]]:
        """Every ``(name, value)`` pair, repeated names included."""
        return [(name, value) for name, values in self._index.items() for value in values]

    @property
    def raw(self) -> tuple[tuple[bytes, bytes], ...]:
        """Access raw header byte pairs for ASGI compatibility."""
        return self._raw
