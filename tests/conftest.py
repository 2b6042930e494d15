"""Shared fixtures: miniature cldr-json trees written under tmp_path."""

import json
from pathlib import Path
from typing import Any, Callable

import pytest

RTL = "right-to-left"
LTR = "left-to-right"
CLDR_VERSION = "36.0"

SAMPLE_LAYOUTS: dict[str, str] = {
    "ar": RTL,
    "ar-EG": RTL,
    "ar-SA": RTL,
    "de": LTR,
    "en": LTR,
    "en-GB": LTR,
    "fa": RTL,
    "he": RTL,
    "sr-Latn": LTR,
}

SAMPLE_LIKELY_SUBTAGS: dict[str, str] = {
    "und": "en-Latn-US",
    "en": "en-Latn-US",
    "ar": "ar-Arab-EG",
    "qaa": "qaa-Latn-ZZ",
    "az-IR": "az-Arab-IR",
    "sr-ME": "sr-Latn-ME",
    "az-Arab": "az-Arab-IR",
    "zh-Hant": "zh-Hant-TW",
    "und-Arab-PK": "ur-Arab-PK",
    "und-Arab": "ar-Arab-EG",
    "und-Hant": "zh-Hant-TW",
    "und-419": "es-Latn-419",
    "und-AQ": "und-Latn-AQ",
}


def make_layout_document(
    locale: str, direction: str, version: str = CLDR_VERSION
) -> dict[str, Any]:
    """A main/<locale>/layout.json document as shipped by cldr-json."""
    return {
        "main": {
            locale: {
                "identity": {
                    "version": {"_cldrVersion": version},
                    "language": locale.split("-")[0],
                },
                "layout": {
                    "orientation": {
                        "characterOrder": direction,
                        "lineOrder": "top-to-bottom",
                    }
                },
            }
        }
    }


def make_likely_subtags_document(
    pairs: dict[str, str], version: str = CLDR_VERSION
) -> dict[str, Any]:
    """A supplemental/likelySubtags.json document as shipped by cldr-json."""
    return {
        "supplemental": {
            "version": {"_unicodeVersion": "12.1.0", "_cldrVersion": version},
            "likelySubtags": dict(pairs),
        }
    }


@pytest.fixture
def layout_document() -> Callable[..., dict[str, Any]]:
    return make_layout_document


@pytest.fixture
def likely_subtags_document() -> Callable[..., dict[str, Any]]:
    return make_likely_subtags_document


@pytest.fixture
def write_cldr_tree(tmp_path: Path) -> Callable[..., Path]:
    """Return a function writing a cldr-json tree and returning its root.

    The root locale is always included. layout_versions overrides the
    version of individual locales.
    """

    def _write(
        layouts: dict[str, str] | None = None,
        likely_subtags: dict[str, str] | None = None,
        version: str = CLDR_VERSION,
        likely_version: str | None = None,
        layout_versions: dict[str, str] | None = None,
    ) -> Path:
        cldr_root = tmp_path / "cldr-json"
        layouts = SAMPLE_LAYOUTS if layouts is None else layouts
        likely_subtags = (
            SAMPLE_LIKELY_SUBTAGS if likely_subtags is None else likely_subtags
        )
        layout_versions = layout_versions or {}

        for locale, direction in {"root": LTR, **layouts}.items():
            locale_dir = cldr_root / "main" / locale
            locale_dir.mkdir(parents=True, exist_ok=True)
            document = make_layout_document(
                locale, direction, layout_versions.get(locale, version)
            )
            (locale_dir / "layout.json").write_text(
                json.dumps(document, indent=2), encoding="utf-8"
            )

        supplemental_dir = cldr_root / "supplemental"
        supplemental_dir.mkdir(parents=True, exist_ok=True)
        document = make_likely_subtags_document(
            likely_subtags, likely_version or version
        )
        (supplemental_dir / "likelySubtags.json").write_text(
            json.dumps(document, indent=2), encoding="utf-8"
        )
        return cldr_root

    return _write
