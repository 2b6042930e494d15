"""Tests for language identifier parsing."""

import pytest

from langid_tables.errors import LanguageIdentifierError, MalformedDocumentError
from langid_tables.langid import LanguageIdentifier, parse_language_identifier
from langid_tables.subtags import encode_language, encode_region, encode_script


class TestParseLanguageIdentifier:
    """Tests for parse_language_identifier."""

    def test_language_only(self) -> None:
        assert parse_language_identifier("en") == LanguageIdentifier(language="en")

    def test_full_identifier_is_normalized(self) -> None:
        langid = parse_language_identifier("EN-latn-us")
        assert langid.language == "en"
        assert langid.script == "Latn"
        assert langid.region == "US"
        assert str(langid) == "en-Latn-US"

    def test_underscore_separator(self) -> None:
        """CLDR directory names use underscores in some releases."""
        langid = parse_language_identifier("sr_Latn_RS")
        assert (langid.language, langid.script, langid.region) == ("sr", "Latn", "RS")

    def test_und_means_no_language(self) -> None:
        assert parse_language_identifier("und") == LanguageIdentifier()
        langid = parse_language_identifier("und-Arab")
        assert langid.language is None
        assert langid.script == "Arab"

    def test_numeric_region(self) -> None:
        langid = parse_language_identifier("und-419")
        assert langid.region == "419"
        assert langid.script is None

    def test_variants_sorted_and_lowercased(self) -> None:
        langid = parse_language_identifier("de-DE-1996-POSIX")
        assert langid.region == "DE"
        assert langid.variants == ("1996", "posix")
        assert str(langid) == "de-DE-1996-posix"

    def test_bytes_input(self) -> None:
        assert parse_language_identifier(b"ar-EG") == LanguageIdentifier(
            language="ar", region="EG"
        )

    def test_str_of_undetermined(self) -> None:
        assert str(parse_language_identifier("und-AQ")) == "und-AQ"

    @pytest.mark.parametrize(
        "tag",
        ["", "e", "root", "1234", "en--US", "en-", "en-US-x", "en-Latn-US-ab"],
    )
    def test_invalid_identifiers_raise(self, tag: str) -> None:
        with pytest.raises(LanguageIdentifierError):
            parse_language_identifier(tag)

    def test_duplicate_variant_raises(self) -> None:
        with pytest.raises(LanguageIdentifierError, match="duplicate variant"):
            parse_language_identifier("de-1996-1996")

    def test_non_ascii_bytes_raise(self) -> None:
        with pytest.raises(LanguageIdentifierError, match="ASCII"):
            parse_language_identifier("é".encode("utf-8"))

    def test_error_names_the_raw_tag(self) -> None:
        with pytest.raises(LanguageIdentifierError) as exc_info:
            parse_language_identifier("en-US-x")
        assert exc_info.value.tag == "en-US-x"
        assert "en-US-x" in str(exc_info.value)
        assert isinstance(exc_info.value, MalformedDocumentError)


class TestLanguageIdentifier:
    """Tests for LanguageIdentifier helpers."""

    def test_with_region_none_clears_region(self) -> None:
        langid = parse_language_identifier("en-Latn-ZZ")
        cleared = langid.with_region(None)
        assert cleared.region is None
        assert cleared.script == "Latn"
        assert langid.region == "ZZ"

    def test_with_region_normalizes(self) -> None:
        assert parse_language_identifier("en").with_region("gb").region == "GB"

    def test_to_subtags_encodes_present_subtags(self) -> None:
        assert parse_language_identifier("en-Latn-US").to_subtags() == (
            encode_language("en"),
            encode_script("Latn"),
            encode_region("US"),
        )

    def test_to_subtags_keeps_absent_as_none(self) -> None:
        assert parse_language_identifier("und-Arab").to_subtags() == (
            None,
            encode_script("Arab"),
            None,
        )
