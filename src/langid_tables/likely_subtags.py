"""Classification of CLDR likely-subtags rules into lookup tables.

supplemental/likelySubtags.json maps partial identifiers ("en", "und-Arab",
"und-419") to their most likely full form. Each rule is routed by which of
language, script and region its key carries into one of six tables:

    language           -> LANG_ONLY      keyed by language
    language + region  -> LANG_REGION    keyed by (language, region)
    language + script  -> LANG_SCRIPT    keyed by (language, script)
    script + region    -> SCRIPT_REGION  keyed by (script, region)
    script             -> SCRIPT_ONLY    keyed by script
    region             -> REGION_ONLY    keyed by region

The bare "und" rule is skipped. A key carrying all three subtags has no
table and aborts the run. Values are stored as encoded
(language, script, region) triples; a value region of "ZZ" (unknown
region) is dropped.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from types import MappingProxyType
from typing import Any, Union

from langid_tables.documents import likely_subtags_path, load_json_document
from langid_tables.errors import LanguageIdentifierError, UnclassifiableKeyError
from langid_tables.langid import (
    LangIdSubTags,
    LanguageIdentifier,
    parse_language_identifier,
)
from langid_tables.logging import BuildLogger
from langid_tables.schemas import LIKELY_SUBTAGS_SCHEMA, validate_document
from langid_tables.tables import SortedTable

UNKNOWN_REGION = "ZZ"

BucketKey = Union[int, tuple[int, int]]


class KeyPattern(Enum):
    """Which subtags a likely-subtags key carries."""

    LANG_ONLY = "lang_only"
    LANG_REGION = "lang_region"
    LANG_SCRIPT = "lang_script"
    SCRIPT_REGION = "script_region"
    SCRIPT_ONLY = "script_only"
    REGION_ONLY = "region_only"
    UNDETERMINED = "undetermined"

    @classmethod
    def of(cls, langid: LanguageIdentifier, raw_key: str | None = None) -> KeyPattern:
        """Classify an identifier by its (language, script, region) presence.

        Raises:
            UnclassifiableKeyError: If all three subtags are present.
        """
        presence = (
            langid.language is not None,
            langid.script is not None,
            langid.region is not None,
        )
        pattern = _PATTERNS.get(presence)
        if pattern is None:
            raise UnclassifiableKeyError(
                raw_key if raw_key is not None else str(langid)
            )
        return pattern

    def key_of(self, subtags: LangIdSubTags) -> BucketKey:
        """Pick this pattern's table key out of an encoded identifier."""
        language, script, region = subtags
        if self is KeyPattern.LANG_ONLY:
            return language
        if self is KeyPattern.LANG_REGION:
            return (language, region)
        if self is KeyPattern.LANG_SCRIPT:
            return (language, script)
        if self is KeyPattern.SCRIPT_REGION:
            return (script, region)
        if self is KeyPattern.SCRIPT_ONLY:
            return script
        if self is KeyPattern.REGION_ONLY:
            return region
        raise ValueError(f"{self.name} keys have no table")

    @property
    def table_name(self) -> str:
        return self.name


_PATTERNS: dict[tuple[bool, bool, bool], KeyPattern] = {
    (True, False, False): KeyPattern.LANG_ONLY,
    (True, False, True): KeyPattern.LANG_REGION,
    (True, True, False): KeyPattern.LANG_SCRIPT,
    (False, True, True): KeyPattern.SCRIPT_REGION,
    (False, True, False): KeyPattern.SCRIPT_ONLY,
    (False, False, True): KeyPattern.REGION_ONLY,
    (False, False, False): KeyPattern.UNDETERMINED,
}

# Emission order of the generated tables.
TABLE_PATTERNS: tuple[KeyPattern, ...] = (
    KeyPattern.LANG_ONLY,
    KeyPattern.LANG_REGION,
    KeyPattern.LANG_SCRIPT,
    KeyPattern.SCRIPT_REGION,
    KeyPattern.SCRIPT_ONLY,
    KeyPattern.REGION_ONLY,
)


@dataclass(frozen=True, eq=False)
class LikelySubtagsTables:
    """The six sorted likely-subtags tables of one CLDR version.

    The table mapping is exposed read-only; instances compare and hash by
    identity.
    """

    version: str
    tables: Mapping[KeyPattern, SortedTable[BucketKey, LangIdSubTags]]

    def __post_init__(self) -> None:
        object.__setattr__(self, "tables", MappingProxyType(dict(self.tables)))

    def table(self, pattern: KeyPattern) -> SortedTable[BucketKey, LangIdSubTags]:
        return self.tables[pattern]

    def __iter__(self) -> Iterator[tuple[KeyPattern, SortedTable]]:
        for pattern in TABLE_PATTERNS:
            yield pattern, self.tables[pattern]

    def lookup(self, langid: LanguageIdentifier) -> LangIdSubTags | None:
        """Exact-key lookup of the rule for a partial identifier.

        Returns None when no rule has that key, for "und", and for
        identifiers that already carry language, script and region.
        """
        if langid.language and langid.script and langid.region:
            return None
        pattern = KeyPattern.of(langid)
        if pattern is KeyPattern.UNDETERMINED:
            return None
        return self.tables[pattern].get(pattern.key_of(langid.to_subtags()))

    def summary(self) -> dict[str, int]:
        return {pattern.table_name: len(table) for pattern, table in self}


def _parse(raw: str, role: str, source: str | None) -> LanguageIdentifier:
    try:
        return parse_language_identifier(raw)
    except LanguageIdentifierError as e:
        where = f"likely-subtags {role}" + (f" in {source}" if source else "")
        raise LanguageIdentifierError(e.tag, e.reason, where) from e


class LikelySubtagsCollector:
    """One accumulator per table; build() sorts them into LikelySubtagsTables."""

    def __init__(
        self, source: str | None = None, logger: BuildLogger | None = None
    ) -> None:
        self._source = source
        self._logger = logger
        self._buckets: dict[KeyPattern, list[tuple[BucketKey, LangIdSubTags]]] = {
            pattern: [] for pattern in TABLE_PATTERNS
        }
        self._skipped: list[str] = []

    @property
    def skipped(self) -> list[str]:
        """Raw keys of the rules that were skipped ("und")."""
        return list(self._skipped)

    def add_pair(self, raw_key: str, raw_value: str) -> KeyPattern:
        """Classify one rule and add it to its table.

        Returns:
            The pattern the rule was routed by.

        Raises:
            LanguageIdentifierError: If key or value does not parse.
            SubtagEncodingError: If a subtag does not fit its encoding.
            UnclassifiableKeyError: If the key carries all three subtags.
        """
        key = _parse(raw_key, "key", self._source)
        value = _parse(raw_value, "value", self._source)
        if value.region == UNKNOWN_REGION:
            value = value.with_region(None)

        pattern = KeyPattern.of(key, raw_key)
        if pattern is KeyPattern.UNDETERMINED:
            self._skipped.append(raw_key)
            return pattern

        self._buckets[pattern].append(
            (pattern.key_of(key.to_subtags()), value.to_subtags())
        )
        return pattern

    def build(self, version: str) -> LikelySubtagsTables:
        """Sort every table by key.

        Raises:
            DuplicateKeyError: If two rules normalize to the same key.
        """
        tables = {}
        for pattern in TABLE_PATTERNS:
            table = SortedTable(pattern.table_name, self._buckets[pattern])
            if self._logger:
                self._logger.log_table_summary(pattern.table_name, len(table))
            tables[pattern] = table
        if self._logger and self._skipped:
            self._logger.info(
                f"Skipped undetermined likely-subtags keys: {', '.join(self._skipped)}"
            )
        return LikelySubtagsTables(version=version, tables=tables)


def classify_likely_subtags(
    pairs: Iterable[tuple[str, str]],
    version: str,
    source: str | None = None,
    logger: BuildLogger | None = None,
) -> LikelySubtagsTables:
    """Build the six likely-subtags tables from (key, value) rule pairs."""
    collector = LikelySubtagsCollector(source, logger)
    for raw_key, raw_value in pairs:
        collector.add_pair(raw_key, raw_value)
    return collector.build(version)


def read_likely_subtags(
    document: Any, source: str, logger: BuildLogger | None = None
) -> tuple[str, list[tuple[str, str]]]:
    """Extract (version, rule pairs in document order) from likelySubtags.json.

    Raises:
        MalformedDocumentError: If the document does not have the expected shape.
    """
    validate_document(document, LIKELY_SUBTAGS_SCHEMA, source, logger)
    supplemental = document["supplemental"]
    version = supplemental["version"]["_cldrVersion"]
    return version, list(supplemental["likelySubtags"].items())


def load_likely_subtags(
    cldr_root: Path, logger: BuildLogger | None = None
) -> tuple[str, list[tuple[str, str]]]:
    path = likely_subtags_path(cldr_root)
    document = load_json_document(path)
    version, pairs = read_likely_subtags(document, str(path), logger)
    if logger:
        logger.log_document_read(path, version)
    return version, pairs
