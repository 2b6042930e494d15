"""Unicode language identifiers (language-script-region-variants).

Parses the identifiers that appear in CLDR data files. Only the subset of
BCP 47 that CLDR uses for locale keys is accepted: no extensions and no
private-use subtags. Invalid identifiers raise LanguageIdentifierError with
the raw tag so a failing run can point at the offending data.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace

from langid_tables.errors import LanguageIdentifierError
from langid_tables.subtags import (
    LanguageCode,
    RegionCode,
    ScriptCode,
    SubtagKind,
    encode_language,
    encode_region,
    encode_script,
)

UNDETERMINED = "und"

LangIdSubTags = tuple[LanguageCode | None, ScriptCode | None, RegionCode | None]

_SEPARATOR_RE = re.compile(r"[-_]")
_LANGUAGE_RE = re.compile(r"^(?:[A-Za-z]{2,3}|[A-Za-z]{5,8})$")
_SCRIPT_RE = re.compile(r"^[A-Za-z]{4}$")
_REGION_RE = re.compile(r"^(?:[A-Za-z]{2}|[0-9]{3})$")
_VARIANT_RE = re.compile(r"^(?:[A-Za-z0-9]{5,8}|[0-9][A-Za-z0-9]{3})$")


@dataclass(frozen=True)
class LanguageIdentifier:
    """A parsed, normalized language identifier.

    Attributes:
        language: Lowercase language subtag, or None for "und".
        script: Title-case script subtag, or None.
        region: Uppercase region subtag, or None.
        variants: Lowercase variant subtags, sorted.
    """

    language: str | None = None
    script: str | None = None
    region: str | None = None
    variants: tuple[str, ...] = ()

    def __str__(self) -> str:
        parts = [self.language or UNDETERMINED]
        if self.script:
            parts.append(self.script)
        if self.region:
            parts.append(self.region)
        parts.extend(self.variants)
        return "-".join(parts)

    def with_region(self, region: str | None) -> LanguageIdentifier:
        """Return a copy with the region replaced (None clears it)."""
        if region is not None:
            region = SubtagKind.REGION.normalize(region)
        return replace(self, region=region)

    def to_subtags(self) -> LangIdSubTags:
        """Encode language, script and region into their integer codes.

        Raises:
            SubtagEncodingError: If a subtag does not fit its encoding.
        """
        return (
            encode_language(self.language) if self.language else None,
            encode_script(self.script) if self.script else None,
            encode_region(self.region) if self.region else None,
        )


def parse_language_identifier(tag: str | bytes) -> LanguageIdentifier:
    """Parse a language identifier such as "en", "und-Arab" or "sr_Latn_RS".

    Args:
        tag: The identifier text; bytes are decoded as ASCII.

    Returns:
        The normalized LanguageIdentifier.

    Raises:
        LanguageIdentifierError: If tag is not a well-formed identifier.
    """
    if isinstance(tag, bytes):
        try:
            tag = tag.decode("ascii")
        except UnicodeDecodeError as e:
            raise LanguageIdentifierError(repr(tag), "identifier must be ASCII") from e
    if not isinstance(tag, str):
        raise LanguageIdentifierError(
            repr(tag), f"expected a string, got {type(tag).__name__}"
        )
    if not tag:
        raise LanguageIdentifierError(tag, "identifier is empty")

    subtags = _SEPARATOR_RE.split(tag)
    if any(not s for s in subtags):
        raise LanguageIdentifierError(tag, "empty subtag")

    first = subtags[0]
    if not _LANGUAGE_RE.fullmatch(first):
        raise LanguageIdentifierError(tag, f"'{first}' is not a language subtag")
    language: str | None = SubtagKind.LANGUAGE.normalize(first)
    if language == UNDETERMINED:
        language = None

    position = 1
    script = None
    if position < len(subtags) and _SCRIPT_RE.fullmatch(subtags[position]):
        script = SubtagKind.SCRIPT.normalize(subtags[position])
        position += 1

    region = None
    if position < len(subtags) and _REGION_RE.fullmatch(subtags[position]):
        region = SubtagKind.REGION.normalize(subtags[position])
        position += 1

    variants: list[str] = []
    for subtag in subtags[position:]:
        if not _VARIANT_RE.fullmatch(subtag):
            raise LanguageIdentifierError(tag, f"unexpected subtag '{subtag}'")
        variant = subtag.lower()
        if variant in variants:
            raise LanguageIdentifierError(tag, f"duplicate variant '{subtag}'")
        variants.append(variant)

    return LanguageIdentifier(
        language=language,
        script=script,
        region=region,
        variants=tuple(sorted(variants)),
    )
