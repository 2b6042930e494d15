"""Tests for the build logger."""

import re
from pathlib import Path

from langid_tables.logging import BuildLogger

_ENTRY_RE = re.compile(
    r"^\[\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\+00:00\] \[(\w+)\] (.*)$"
)


def _entries(log_path: Path) -> list[tuple[str, str]]:
    entries = []
    for line in log_path.read_text(encoding="utf-8").splitlines():
        match = _ENTRY_RE.match(line)
        assert match, line
        entries.append((match.group(1), match.group(2)))
    return entries


class TestBuildLogger:
    """Tests for BuildLogger."""

    def test_creates_parent_directories(self, tmp_path: Path) -> None:
        log_path = tmp_path / "logs" / "nested" / "build.log"
        BuildLogger(log_path).info("hello")
        assert log_path.exists()

    def test_levels_and_timestamp_format(self, tmp_path: Path) -> None:
        logger = BuildLogger(tmp_path / "build.log")
        logger.info("one")
        logger.warning("two")
        logger.error("three")
        assert _entries(logger.log_path) == [
            ("INFO", "one"),
            ("WARNING", "two"),
            ("ERROR", "three"),
        ]

    def test_appends_across_instances(self, tmp_path: Path) -> None:
        log_path = tmp_path / "build.log"
        BuildLogger(log_path).info("first run")
        BuildLogger(log_path).info("second run")
        assert [message for _, message in _entries(log_path)] == [
            "first run",
            "second run",
        ]

    def test_build_helpers(self, tmp_path: Path) -> None:
        logger = BuildLogger(tmp_path / "build.log")
        logger.log_build_init(Path("cldr-json"), Path("generated"), "python")
        logger.log_stage_start("layout")
        logger.log_document_read(Path("main/ar/layout.json"), "36.0")
        logger.log_table_summary("CHARACTER_DIRECTION_RTL", 12)
        logger.log_stage_end("layout", success=True)
        logger.log_stage_end("write", success=False)
        logger.log_artifact_write(Path("generated/layout.py"), 512)
        messages = [message for _, message in _entries(logger.log_path)]
        assert messages == [
            "Generation started: cldr_root=cldr-json",
            "Output directory: generated (format=python)",
            "Stage started: layout",
            "Document read: main/ar/layout.json (CLDR 36.0)",
            "Table built: CHARACTER_DIRECTION_RTL (12 entries)",
            "Stage ended: layout (success)",
            "Stage ended: write (failure)",
            "Artifact written: generated/layout.py (512 bytes)",
        ]

    def test_validation_failure_is_an_error(self, tmp_path: Path) -> None:
        logger = BuildLogger(tmp_path / "build.log")
        logger.log_validation_failure("likelySubtags.json", "missing version")
        assert _entries(logger.log_path) == [
            ("ERROR", "Validation failure in likelySubtags.json: missing version")
        ]
