"""Character direction extraction from CLDR per-locale layout data.

Each main/<locale>/layout.json names the locale's character order. All
locales sharing a base language must agree on it; the right-to-left
languages become the RTL table. Left-to-right languages are not recorded:
absence from the table means "not RTL".
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from langid_tables.documents import iter_layout_paths, load_json_document
from langid_tables.errors import (
    DirectionalityConflictError,
    LanguageIdentifierError,
    MalformedDocumentError,
    VersionSkewError,
)
from langid_tables.langid import LanguageIdentifier, parse_language_identifier
from langid_tables.logging import BuildLogger
from langid_tables.schemas import LAYOUT_SCHEMA, validate_document
from langid_tables.tables import RtlTable

ROOT_LOCALE = "root"


class Direction(Enum):
    """Character order of a locale."""

    LTR = "left-to-right"
    RTL = "right-to-left"

    @classmethod
    def parse(cls, value: str, source: str | None = None) -> Direction:
        """Map a CLDR characterOrder value to a Direction.

        Raises:
            MalformedDocumentError: For anything other than the two known
                values.
        """
        try:
            return cls(value)
        except ValueError as e:
            raise MalformedDocumentError(
                f"Unknown character order {value!r}", source
            ) from e


@dataclass(frozen=True)
class LayoutEntry:
    """Direction data read from one locale's layout document.

    Attributes:
        locale: The locale key as written in the document (e.g. "ar-EG").
        langid: The parsed locale identifier.
        version: CLDR version declared by the document.
        direction: The locale's character order.
        source: Where the document was read from.
    """

    locale: str
    langid: LanguageIdentifier
    version: str
    direction: Direction
    source: str = ""


def read_layout_entry(
    document: Any,
    source: str,
    logger: BuildLogger | None = None,
) -> LayoutEntry | None:
    """Extract the layout entry from a parsed layout.json document.

    Args:
        document: Parsed JSON of main/<locale>/layout.json.
        source: Where the document came from (used in error messages).
        logger: Optional logger for validation errors.

    Returns:
        The entry, or None for the "root" locale which carries no language.

    Raises:
        MalformedDocumentError: If the document does not have the expected
            shape, names an unknown direction or an unparseable locale.
    """
    validate_document(document, LAYOUT_SCHEMA, source, logger)
    ((locale, data),) = document["main"].items()
    if locale == ROOT_LOCALE:
        return None

    direction = Direction.parse(
        data["layout"]["orientation"]["characterOrder"], source
    )
    version = data["identity"]["version"]["_cldrVersion"]
    try:
        langid = parse_language_identifier(locale)
    except LanguageIdentifierError as e:
        raise LanguageIdentifierError(e.tag, e.reason, source) from e

    return LayoutEntry(
        locale=locale,
        langid=langid,
        version=version,
        direction=direction,
        source=source,
    )


def load_layout_entries(
    cldr_root: Path, logger: BuildLogger | None = None
) -> list[LayoutEntry]:
    """Read the layout entry of every locale under cldr_root/main.

    The root locale is skipped.
    """
    entries = []
    for path in iter_layout_paths(cldr_root):
        document = load_json_document(path)
        entry = read_layout_entry(document, str(path), logger)
        if entry is None:
            continue
        if logger:
            logger.log_document_read(path, entry.version)
        entries.append(entry)
    return entries


class DirectionalityCollector:
    """Accumulates layout entries and checks their consistency.

    Every entry must carry the same CLDR version, and every locale of a
    language must report the same direction.
    """

    def __init__(self, logger: BuildLogger | None = None) -> None:
        self._logger = logger
        self._version: str | None = None
        # language -> (first locale seen, its direction)
        self._directions: dict[str, tuple[str, Direction]] = {}

    @property
    def version(self) -> str | None:
        return self._version

    def add(self, entry: LayoutEntry) -> None:
        """Record one entry.

        Raises:
            VersionSkewError: If the entry's version differs from earlier ones.
            DirectionalityConflictError: If another locale of the same
                language reported the other direction.
        """
        if self._version is None:
            self._version = entry.version
        elif entry.version != self._version:
            raise VersionSkewError(
                self._version, entry.version, entry.source or entry.locale
            )

        language = entry.langid.language
        if language is None:
            if self._logger:
                self._logger.warning(
                    f"Skipping layout of {entry.locale}: no base language"
                )
            return

        seen = self._directions.get(language)
        if seen is None:
            self._directions[language] = (entry.locale, entry.direction)
            return
        first_locale, first_direction = seen
        if first_direction is not entry.direction:
            if self._logger:
                self._logger.error(
                    f"Conflicting directions for {language}: "
                    f"{first_locale}={first_direction.value}, "
                    f"{entry.locale}={entry.direction.value}"
                )
            raise DirectionalityConflictError(
                language,
                first_locale,
                first_direction.value,
                entry.locale,
                entry.direction.value,
            )

    def rtl_languages(self) -> list[str]:
        """Distinct right-to-left languages, alphabetically."""
        return sorted(
            language
            for language, (_, direction) in self._directions.items()
            if direction is Direction.RTL
        )

    def build(self) -> RtlTable:
        return RtlTable.from_languages(self.rtl_languages())


def extract_directionality(
    entries: Iterable[LayoutEntry], logger: BuildLogger | None = None
) -> tuple[str, RtlTable]:
    """Build the RTL table from layout entries.

    Returns:
        (CLDR version, RTL table).

    Raises:
        MalformedDocumentError: If there are no entries at all.
        VersionSkewError: See DirectionalityCollector.add.
        DirectionalityConflictError: See DirectionalityCollector.add.
    """
    collector = DirectionalityCollector(logger)
    for entry in entries:
        collector.add(entry)
    if collector.version is None:
        raise MalformedDocumentError("No locale layout data found")
    return collector.version, collector.build()
