"""Error taxonomy for table generation.

Every failure that can abort a run derives from GenerationError so callers
can tell malformed input from version skew from an unclassifiable key
without parsing messages. None of these are recoverable: the generator has
no meaningful partial output.
"""

from __future__ import annotations

from typing import Any


class GenerationError(Exception):
    """Base exception for everything that aborts a generation run."""


class MalformedDocumentError(GenerationError):
    """Raised when an input document is missing, unparseable or incomplete."""

    def __init__(self, message: str, source: str | None = None) -> None:
        self.source = source
        if source:
            message = f"{message} (in {source})"
        super().__init__(message)


class LanguageIdentifierError(MalformedDocumentError):
    """Raised when a locale identifier cannot be parsed."""

    def __init__(self, tag: str, reason: str, source: str | None = None) -> None:
        self.tag = tag
        self.reason = reason
        super().__init__(f"Invalid language identifier '{tag}': {reason}", source)


class VersionSkewError(GenerationError):
    """Raised when two input documents report different CLDR versions."""

    def __init__(self, expected: str, found: str, source: str | None = None) -> None:
        self.expected = expected
        self.found = found
        self.source = source
        where = f" in {source}" if source else ""
        super().__init__(
            f"All CLDR data must use the same version: expected {expected}, "
            f"found {found}{where}"
        )


class DirectionalityConflictError(GenerationError):
    """Raised when locales of one language disagree on their layout direction."""

    def __init__(
        self,
        language: str,
        first_locale: str,
        first_direction: str,
        locale: str,
        direction: str,
    ) -> None:
        self.language = language
        self.first_locale = first_locale
        self.first_direction = first_direction
        self.locale = locale
        self.direction = direction
        super().__init__(
            f"Language '{language}' has two directionalities: "
            f"{first_locale} is {first_direction}, {locale} is {direction}"
        )


class UnclassifiableKeyError(GenerationError):
    """Raised when a likely-subtags key has a subtag pattern outside the closed set."""

    def __init__(self, raw_key: str) -> None:
        self.raw_key = raw_key
        super().__init__(f"Unknown likely-subtags key pattern: {raw_key!r}")


class SubtagEncodingError(MalformedDocumentError):
    """Raised when a subtag cannot be encoded to (or decoded from) an integer."""

    def __init__(self, subtag: Any, kind: str, reason: str) -> None:
        self.subtag = subtag
        self.kind = kind
        self.reason = reason
        super().__init__(f"Cannot encode {kind} subtag {subtag!r}: {reason}")


class DuplicateKeyError(GenerationError):
    """Raised when one table receives the same key twice."""

    def __init__(self, table: str, key: Any) -> None:
        self.table = table
        self.key = key
        super().__init__(f"Duplicate key {key!r} in table {table}")


class TemplateRenderError(GenerationError):
    """Raised when an artifact template is missing or cannot be rendered."""


class ArtifactWriteError(GenerationError):
    """Raised when generated artifacts cannot be written to disk."""
