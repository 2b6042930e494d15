"""Fixed-width integer encoding of language, script and region subtags.

A subtag is case-normalized and its ASCII bytes are packed little-endian
(first character in the lowest byte) into an unsigned integer: 64 bits for
languages, 32 bits for scripts and regions. Generated tables are keyed by
these integers so lookups compare integers instead of strings.
"""

from __future__ import annotations

from enum import Enum
from typing import NewType

from langid_tables.errors import SubtagEncodingError

LanguageCode = NewType("LanguageCode", int)
ScriptCode = NewType("ScriptCode", int)
RegionCode = NewType("RegionCode", int)


class SubtagKind(Enum):
    """The three subtag kinds that take part in table keys."""

    LANGUAGE = "language"
    SCRIPT = "script"
    REGION = "region"

    @property
    def width(self) -> int:
        """Encoded width in bytes (also the maximum subtag length)."""
        return 8 if self is SubtagKind.LANGUAGE else 4

    @property
    def min_length(self) -> int:
        """Shortest valid subtag: one letter for languages, two otherwise."""
        return 1 if self is SubtagKind.LANGUAGE else 2

    def normalize(self, subtag: str) -> str:
        if self is SubtagKind.LANGUAGE:
            return subtag.lower()
        if self is SubtagKind.SCRIPT:
            return subtag[:1].upper() + subtag[1:].lower()
        return subtag.upper()

    def accepts(self, subtag: str) -> bool:
        """Whether every character of subtag is in this kind's alphabet."""
        if not subtag.isascii():
            return False
        if self is SubtagKind.LANGUAGE:
            return subtag.isalpha()
        return subtag.isalnum()


def encode(subtag: str, kind: SubtagKind) -> int:
    """Encode a subtag of the given kind into an unsigned integer.

    Args:
        subtag: The subtag text, in any case.
        kind: Which kind of subtag this is.

    Returns:
        The normalized subtag packed into an integer of kind.width bytes.

    Raises:
        SubtagEncodingError: If the subtag is empty, too short or too long for
            its kind, or contains characters outside the kind's alphabet.
    """
    if not isinstance(subtag, str):
        raise SubtagEncodingError(
            subtag, kind.value, f"expected a string, got {type(subtag).__name__}"
        )
    if not subtag:
        raise SubtagEncodingError(subtag, kind.value, "subtag is empty")
    if len(subtag) > kind.width:
        raise SubtagEncodingError(
            subtag, kind.value, f"longer than {kind.width} characters"
        )
    if len(subtag) < kind.min_length:
        raise SubtagEncodingError(
            subtag, kind.value, f"shorter than {kind.min_length} characters"
        )
    if not kind.accepts(subtag):
        allowed = (
            "ASCII letters"
            if kind is SubtagKind.LANGUAGE
            else "ASCII letters and digits"
        )
        raise SubtagEncodingError(subtag, kind.value, f"only {allowed} are allowed")
    return int.from_bytes(kind.normalize(subtag).encode("ascii"), "little")


def decode(value: int, kind: SubtagKind) -> str:
    """Decode an integer produced by encode() back to the normalized subtag.

    Raises:
        SubtagEncodingError: If value is not the encoding of a valid subtag.
    """
    if not isinstance(value, int) or isinstance(value, bool):
        raise SubtagEncodingError(
            value, kind.value, f"expected an integer, got {type(value).__name__}"
        )
    if value <= 0 or value >= 1 << (8 * kind.width):
        raise SubtagEncodingError(
            value, kind.value, f"out of range for a {kind.width}-byte subtag"
        )
    raw = value.to_bytes(kind.width, "little").rstrip(b"\0")
    if b"\0" in raw:
        raise SubtagEncodingError(value, kind.value, "contains an interior NUL byte")
    try:
        text = raw.decode("ascii")
    except UnicodeDecodeError as e:
        raise SubtagEncodingError(value, kind.value, "contains non-ASCII bytes") from e
    if (
        len(text) < kind.min_length
        or not kind.accepts(text)
        or kind.normalize(text) != text
    ):
        raise SubtagEncodingError(
            value, kind.value, f"'{text}' is not a normalized subtag"
        )
    return text


def encode_language(subtag: str) -> LanguageCode:
    return LanguageCode(encode(subtag, SubtagKind.LANGUAGE))


def encode_script(subtag: str) -> ScriptCode:
    return ScriptCode(encode(subtag, SubtagKind.SCRIPT))


def encode_region(subtag: str) -> RegionCode:
    return RegionCode(encode(subtag, SubtagKind.REGION))


def decode_language(value: int) -> str:
    return decode(value, SubtagKind.LANGUAGE)


def decode_script(value: int) -> str:
    return decode(value, SubtagKind.SCRIPT)


def decode_region(value: int) -> str:
    return decode(value, SubtagKind.REGION)
