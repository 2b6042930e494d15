"""Sorted, immutable lookup tables.

Every generated table is a total order over unique keys so consumers can
binary-search it. Keys are subtag codes or (code, code) pairs compared
component-major, which is exactly Python's tuple ordering.
"""

from __future__ import annotations

from bisect import bisect_left
from collections.abc import Iterable, Iterator, Sequence
from typing import Any, Generic, TypeVar

from langid_tables.errors import DuplicateKeyError
from langid_tables.subtags import LanguageCode, encode_language

K = TypeVar("K")
V = TypeVar("V")


def is_strictly_sorted(keys: Sequence[Any]) -> bool:
    """Whether every key is smaller than the one after it (no duplicates)."""
    return all(a < b for a, b in zip(keys, keys[1:]))


def _binary_search(keys: Sequence[Any], key: Any) -> int | None:
    index = bisect_left(keys, key)
    if index < len(keys) and keys[index] == key:
        return index
    return None


class SortedTable(Generic[K, V]):
    """An immutable key -> value table sorted ascending by key.

    Entries are sorted on construction; two entries with the same key raise
    DuplicateKeyError naming the table.
    """

    def __init__(self, name: str, entries: Iterable[tuple[K, V]]) -> None:
        ordered = sorted(entries, key=lambda entry: entry[0])
        for (previous, _), (current, _) in zip(ordered, ordered[1:]):
            if previous == current:
                raise DuplicateKeyError(name, current)
        self._name = name
        self._keys: tuple[K, ...] = tuple(key for key, _ in ordered)
        self._values: tuple[V, ...] = tuple(value for _, value in ordered)

    @property
    def name(self) -> str:
        return self._name

    def keys(self) -> tuple[K, ...]:
        return self._keys

    def entries(self) -> list[tuple[K, V]]:
        return list(zip(self._keys, self._values))

    def get(self, key: K) -> V | None:
        """Binary-search for key; return its value or None when absent."""
        index = _binary_search(self._keys, key)
        return None if index is None else self._values[index]

    def __contains__(self, key: object) -> bool:
        return _binary_search(self._keys, key) is not None

    def __iter__(self) -> Iterator[tuple[K, V]]:
        return iter(zip(self._keys, self._values))

    def __len__(self) -> int:
        return len(self._keys)

    def __repr__(self) -> str:
        return f"SortedTable({self._name!r}, {len(self)} entries)"


class RtlTable:
    """Sorted set of encoded languages written right-to-left."""

    def __init__(self, languages: Iterable[int]) -> None:
        self._languages: tuple[LanguageCode, ...] = tuple(
            LanguageCode(code) for code in sorted(set(languages))
        )

    @classmethod
    def from_languages(cls, languages: Iterable[str]) -> RtlTable:
        """Build the table from language subtags (encoded via the codec)."""
        return cls(encode_language(language) for language in languages)

    @property
    def languages(self) -> tuple[LanguageCode, ...]:
        return self._languages

    def is_rtl(self, subtag: int) -> bool:
        """Whether the encoded language subtag is in the set."""
        return _binary_search(self._languages, subtag) is not None

    def __iter__(self) -> Iterator[LanguageCode]:
        return iter(self._languages)

    def __len__(self) -> int:
        return len(self._languages)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RtlTable):
            return NotImplemented
        return self._languages == other._languages

    def __hash__(self) -> int:
        return hash(self._languages)

    def __repr__(self) -> str:
        return f"RtlTable({len(self)} languages)"
