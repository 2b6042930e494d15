"""Build log for table generation runs.

Entries are appended to one plain-text file as
``[<UTC timestamp>] [<LEVEL>] <message>`` lines, so successive runs against
the same log file read as one history.
"""

from datetime import datetime, timezone
from pathlib import Path


class BuildLogger:
    """Appends timestamped entries to a generation log file.

    The file and its parent directories are created on the first entry.
    """

    def __init__(self, log_path: Path) -> None:
        self._path = log_path

    @property
    def log_path(self) -> Path:
        return self._path

    def _now(self) -> str:
        """UTC now, ISO 8601 to the second."""
        return datetime.now(timezone.utc).isoformat(timespec="seconds")

    def _append(self, level: str, message: str) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with self._path.open("a", encoding="utf-8") as log_file:
            log_file.write(f"[{self._now()}] [{level}] {message}\n")

    def info(self, message: str) -> None:
        self._append("INFO", message)

    def warning(self, message: str) -> None:
        self._append("WARNING", message)

    def error(self, message: str) -> None:
        self._append("ERROR", message)

    def log_build_init(self, cldr_root: Path, output_dir: Path, fmt: str) -> None:
        """Record where a run reads from and writes to.

        Args:
            cldr_root: Root of the cldr-json data tree.
            output_dir: Directory receiving the generated artifacts.
            fmt: Artifact format ("python" or "json").
        """
        self.info(f"Generation started: cldr_root={cldr_root}")
        self.info(f"Output directory: {output_dir} (format={fmt})")

    def log_stage_start(self, stage: str) -> None:
        self.info(f"Stage started: {stage}")

    def log_stage_end(self, stage: str, success: bool) -> None:
        """Close a stage opened with log_stage_start (e.g. "layout")."""
        outcome = "success" if success else "failure"
        self.info(f"Stage ended: {stage} ({outcome})")

    def log_document_read(self, path: Path, version: str) -> None:
        self.info(f"Document read: {path} (CLDR {version})")

    def log_table_summary(self, table: str, entries: int) -> None:
        """Record the size of one finished table.

        Args:
            table: Table name, e.g. "LANG_ONLY" or "CHARACTER_DIRECTION_RTL".
            entries: Number of entries after sorting.
        """
        self.info(f"Table built: {table} ({entries} entries)")

    def log_artifact_write(self, path: Path, size: int) -> None:
        self.info(f"Artifact written: {path} ({size} bytes)")

    def log_validation_failure(self, source: str, error: str) -> None:
        """Record why an input document was rejected.

        Args:
            source: The document that failed validation.
            error: What was wrong with it.
        """
        self.error(f"Validation failure in {source}: {error}")
