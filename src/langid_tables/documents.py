"""Reading CLDR JSON documents from a cldr-json data tree.

Expected layout under the CLDR root:

    main/<locale>/layout.json
    supplemental/likelySubtags.json
"""

import json
from pathlib import Path
from typing import Any

from langid_tables.errors import MalformedDocumentError

MAIN_DIR = "main"
LAYOUT_FILE = "layout.json"
SUPPLEMENTAL_DIR = "supplemental"
LIKELY_SUBTAGS_FILE = "likelySubtags.json"


def _reject_duplicate_keys(pairs: list[tuple[str, Any]]) -> dict[str, Any]:
    result: dict[str, Any] = {}
    for key, value in pairs:
        if key in result:
            raise ValueError(f"duplicate object key {key!r}")
        result[key] = value
    return result


def load_json_document(path: Path) -> Any:
    """Load and parse one JSON document.

    The file is opened only for the duration of parsing. Objects that repeat
    a key are rejected instead of silently keeping the last value.

    Args:
        path: Path to the JSON file.

    Returns:
        The parsed document.

    Raises:
        MalformedDocumentError: If the file is missing, unreadable or not
            valid JSON.
    """
    if not path.exists():
        raise MalformedDocumentError("Document not found", str(path))
    try:
        with path.open(encoding="utf-8") as f:
            return json.load(f, object_pairs_hook=_reject_duplicate_keys)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(f"Invalid JSON: {e}", str(path)) from e
    except ValueError as e:
        # Raised by the duplicate-key hook and by undecodable UTF-8.
        raise MalformedDocumentError(f"Invalid document: {e}", str(path)) from e
    except OSError as e:
        raise MalformedDocumentError(f"Error reading document: {e}", str(path)) from e


def iter_layout_paths(cldr_root: Path) -> list[Path]:
    """Return every main/<locale>/layout.json under cldr_root, sorted.

    Locale directories without a layout.json are skipped.

    Raises:
        MalformedDocumentError: If cldr_root has no main/ directory.
    """
    main_dir = cldr_root / MAIN_DIR
    if not main_dir.is_dir():
        raise MalformedDocumentError("Missing locale directory", str(main_dir))
    return [
        locale_dir / LAYOUT_FILE
        for locale_dir in sorted(main_dir.iterdir())
        if locale_dir.is_dir() and (locale_dir / LAYOUT_FILE).is_file()
    ]


def likely_subtags_path(cldr_root: Path) -> Path:
    """Path to supplemental/likelySubtags.json under cldr_root."""
    return cldr_root / SUPPLEMENTAL_DIR / LIKELY_SUBTAGS_FILE
