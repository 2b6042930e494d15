"""End-to-end tests for the generation pipeline."""

import json
from pathlib import Path
from typing import Callable

import pytest

from langid_tables.config import GeneratorConfig
from langid_tables.errors import (
    DirectionalityConflictError,
    UnclassifiableKeyError,
    VersionSkewError,
)
from langid_tables.likely_subtags import KeyPattern
from langid_tables.logging import BuildLogger
from langid_tables.pipeline import build_tables, generate
from langid_tables.subtags import encode_language, encode_region, encode_script
from langid_tables.tables import is_strictly_sorted

RTL = "right-to-left"
LTR = "left-to-right"


def _config(cldr_root: Path, tmp_path: Path, fmt: str = "python") -> GeneratorConfig:
    return GeneratorConfig(
        cldr_root=cldr_root,
        output_dir=tmp_path / "generated",
        format=fmt,
        log_file=tmp_path / "build.log",
    )


class TestBuildTables:
    """Tests for build_tables."""

    def test_builds_rtl_and_likely_tables(
        self, write_cldr_tree: Callable[..., Path]
    ) -> None:
        version, rtl, likely = build_tables(write_cldr_tree())
        assert version == "36.0"
        expected = sorted(encode_language(lang) for lang in ["ar", "fa", "he"])
        assert list(rtl.languages) == expected
        assert is_strictly_sorted(rtl.languages)
        assert likely.version == "36.0"
        assert likely.table(KeyPattern.LANG_ONLY).get(encode_language("en")) == (
            encode_language("en"),
            encode_script("Latn"),
            encode_region("US"),
        )
        assert sum(likely.summary().values()) == 12

    def test_version_mismatch_between_sources_raises(
        self, write_cldr_tree: Callable[..., Path], tmp_path: Path
    ) -> None:
        cldr_root = write_cldr_tree(likely_version="35.1")
        logger = BuildLogger(tmp_path / "build.log")
        with pytest.raises(VersionSkewError) as exc_info:
            build_tables(cldr_root, logger)
        assert exc_info.value.expected == "36.0"
        assert exc_info.value.found == "35.1"
        assert "All CLDR data must use the same version" in (
            tmp_path / "build.log"
        ).read_text()

    def test_version_mismatch_between_locales_raises(
        self, write_cldr_tree: Callable[..., Path]
    ) -> None:
        cldr_root = write_cldr_tree(layout_versions={"he": "35.1"})
        with pytest.raises(VersionSkewError, match="35.1"):
            build_tables(cldr_root)

    def test_stage_failure_is_logged(
        self, write_cldr_tree: Callable[..., Path], tmp_path: Path
    ) -> None:
        cldr_root = write_cldr_tree(layouts={"ar-EG": RTL, "ar-SA": LTR})
        logger = BuildLogger(tmp_path / "build.log")
        with pytest.raises(DirectionalityConflictError):
            build_tables(cldr_root, logger)
        content = (tmp_path / "build.log").read_text()
        assert "Stage ended: layout (failure)" in content
        assert "layout stage failed" in content
        assert "Stage started: likely_subtags" not in content


class TestGenerate:
    """Tests for generate."""

    def test_python_artifacts(
        self, write_cldr_tree: Callable[..., Path], tmp_path: Path
    ) -> None:
        config = _config(write_cldr_tree(), tmp_path)
        result = generate(config, BuildLogger(config.log_file))
        output_dir = tmp_path / "generated"
        assert result.written_files == [
            output_dir / "layout.py",
            output_dir / "likely_subtags.py",
        ]
        layout_source = (output_dir / "layout.py").read_text()
        assert "CLDR_VERSION = '36.0'" in layout_source
        assert "# he" in layout_source
        assert "# en\n" not in layout_source
        likely_source = (output_dir / "likely_subtags.py").read_text()
        assert "# und-Arab -> ar-Arab-EG" in likely_source

        log = config.log_file.read_text()
        assert "Generation completed for CLDR 36.0" in log
        assert "Stage ended: write (success)" in log

    def test_json_artifact(
        self, write_cldr_tree: Callable[..., Path], tmp_path: Path
    ) -> None:
        config = _config(write_cldr_tree(), tmp_path, fmt="json")
        result = generate(config)
        assert result.written_files == [tmp_path / "generated" / "langid_tables.json"]
        document = json.loads(result.written_files[0].read_text())
        assert document["cldr_version"] == "36.0"
        assert len(document["rtl"]) == 3
        assert len(document["likely_subtags"]["SCRIPT_ONLY"]) == 2

    def test_conflict_writes_no_artifacts(
        self, write_cldr_tree: Callable[..., Path], tmp_path: Path
    ) -> None:
        cldr_root = write_cldr_tree(layouts={"ar-EG": RTL, "ar-SA": LTR})
        config = _config(cldr_root, tmp_path)
        with pytest.raises(DirectionalityConflictError):
            generate(config)
        assert not (tmp_path / "generated").exists()

    def test_failure_keeps_previous_artifacts(
        self, write_cldr_tree: Callable[..., Path], tmp_path: Path
    ) -> None:
        config = _config(write_cldr_tree(), tmp_path)
        generate(config)
        previous = (tmp_path / "generated" / "likely_subtags.py").read_text()

        write_cldr_tree(likely_subtags={"en-Latn-US": "en-Latn-US"})
        with pytest.raises(UnclassifiableKeyError):
            generate(config)
        assert (tmp_path / "generated" / "likely_subtags.py").read_text() == previous
