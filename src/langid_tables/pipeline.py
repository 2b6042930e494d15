"""End-to-end table generation: CLDR data tree in, artifacts out."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, TypeVar

from langid_tables.config import GeneratorConfig
from langid_tables.documents import likely_subtags_path
from langid_tables.errors import GenerationError, VersionSkewError
from langid_tables.layout import extract_directionality, load_layout_entries
from langid_tables.likely_subtags import (
    LikelySubtagsTables,
    classify_likely_subtags,
    load_likely_subtags,
)
from langid_tables.logging import BuildLogger
from langid_tables.output import write_artifacts
from langid_tables.render import (
    FORMAT_JSON,
    render_json_document,
    render_layout_module,
    render_likely_subtags_module,
)
from langid_tables.tables import RtlTable

T = TypeVar("T")


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a successful generation run.

    Attributes:
        version: The CLDR version shared by every input document.
        rtl: The RTL table.
        likely_subtags: The six likely-subtags tables.
        written_files: Artifacts written to the output directory.
    """

    version: str
    rtl: RtlTable
    likely_subtags: LikelySubtagsTables
    written_files: list[Path]


def _run_stage(
    logger: BuildLogger | None, stage_name: str, operation: Callable[[], T]
) -> T:
    if logger:
        logger.log_stage_start(stage_name)
    try:
        result = operation()
    except GenerationError as e:
        if logger:
            logger.error(f"{stage_name} stage failed: {e}")
            logger.log_stage_end(stage_name, success=False)
        raise
    if logger:
        logger.log_stage_end(stage_name, success=True)
    return result


def build_layout(
    cldr_root: Path, logger: BuildLogger | None = None
) -> tuple[str, RtlTable]:
    """Read every locale layout and build the RTL table."""
    entries = load_layout_entries(cldr_root, logger)
    version, rtl = extract_directionality(entries, logger)
    if logger:
        logger.log_table_summary("CHARACTER_DIRECTION_RTL", len(rtl))
    return version, rtl


def build_likely_subtags(
    cldr_root: Path, logger: BuildLogger | None = None
) -> LikelySubtagsTables:
    """Read supplemental likely subtags and classify them into tables."""
    version, pairs = load_likely_subtags(cldr_root, logger)
    source = str(likely_subtags_path(cldr_root))
    return classify_likely_subtags(pairs, version, source, logger)


def build_tables(
    cldr_root: Path, logger: BuildLogger | None = None
) -> tuple[str, RtlTable, LikelySubtagsTables]:
    """Build all tables and check that both data sets share one CLDR version.

    Raises:
        VersionSkewError: If layout and likely-subtags data differ in version.
        GenerationError: Any other data error from the extraction stages.
    """
    version, rtl = _run_stage(logger, "layout", lambda: build_layout(cldr_root, logger))
    likely = _run_stage(
        logger, "likely_subtags", lambda: build_likely_subtags(cldr_root, logger)
    )
    if likely.version != version:
        error = VersionSkewError(
            version, likely.version, str(likely_subtags_path(cldr_root))
        )
        if logger:
            logger.error(str(error))
        raise error
    return version, rtl, likely


def render_artifacts(
    config: GeneratorConfig,
    version: str,
    rtl: RtlTable,
    likely: LikelySubtagsTables,
) -> dict[str, str]:
    """Render artifact file contents keyed by file name."""
    if config.format == FORMAT_JSON:
        return {config.json_artifact: render_json_document(version, rtl, likely)}
    return {
        config.layout_module: render_layout_module(version, rtl),
        config.likely_subtags_module: render_likely_subtags_module(likely),
    }


def generate(
    config: GeneratorConfig, logger: BuildLogger | None = None
) -> GenerationResult:
    """Run the whole generator once.

    Either every artifact is written or, on error, none is.

    Raises:
        GenerationError: On any data, rendering or output error.
    """
    if logger:
        logger.log_build_init(config.cldr_root, config.output_dir, config.format)

    version, rtl, likely = build_tables(config.cldr_root, logger)
    files = _run_stage(
        logger, "render", lambda: render_artifacts(config, version, rtl, likely)
    )
    written = _run_stage(
        logger, "write", lambda: write_artifacts(config.output_dir, files, logger)
    )

    if logger:
        logger.info(f"Generation completed for CLDR {version}")
    return GenerationResult(
        version=version, rtl=rtl, likely_subtags=likely, written_files=written
    )
