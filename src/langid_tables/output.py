"""Writing generated artifacts to the output directory.

All files are first written into a staging directory inside the output
directory and only moved into place once every one of them was written, so
a failed run leaves the previous artifacts untouched.
"""

import shutil
import tempfile
from pathlib import Path

from langid_tables.errors import ArtifactWriteError
from langid_tables.logging import BuildLogger


def write_artifacts(
    output_dir: Path,
    files: dict[str, str],
    logger: BuildLogger | None = None,
) -> list[Path]:
    """Write artifact files into output_dir.

    Args:
        output_dir: Target directory (created if missing).
        files: Mapping of file name to file content.
        logger: Optional logger; each written artifact is logged.

    Returns:
        Paths of the written files, in the order given.

    Raises:
        ArtifactWriteError: If a file name is not a plain name, or on any
            filesystem error.
    """
    for name in files:
        if not name or Path(name).name != name or name in (".", ".."):
            raise ArtifactWriteError(f"Invalid artifact file name: {name!r}")

    try:
        output_dir.mkdir(parents=True, exist_ok=True)
        staging_dir = Path(tempfile.mkdtemp(dir=output_dir, prefix="_staging_"))
    except OSError as e:
        raise ArtifactWriteError(
            f"Cannot prepare output directory {output_dir}: {e}"
        ) from e

    written: list[Path] = []
    try:
        for name, content in files.items():
            (staging_dir / name).write_text(content, encoding="utf-8")

        for name in files:
            target = output_dir / name
            (staging_dir / name).replace(target)
            written.append(target)
            if logger:
                logger.log_artifact_write(target, target.stat().st_size)
    except OSError as e:
        raise ArtifactWriteError(f"Error writing artifacts to {output_dir}: {e}") from e
    finally:
        shutil.rmtree(staging_dir, ignore_errors=True)

    return written
