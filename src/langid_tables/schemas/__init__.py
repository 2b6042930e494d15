"""Schema validation for CLDR input documents.

The bundled schemas only pin down the fields the generator reads; CLDR
documents carry much more and that is left alone.
"""

import json
from pathlib import Path
from typing import Any

import jsonschema

from langid_tables.errors import MalformedDocumentError
from langid_tables.logging import BuildLogger

SCHEMA_DIR = Path(__file__).parent

LAYOUT_SCHEMA = "layout.schema.json"
LIKELY_SUBTAGS_SCHEMA = "likely_subtags.schema.json"

_schema_cache: dict[str, dict[str, Any]] = {}


def load_schema(schema_name: str) -> dict[str, Any]:
    """Load a bundled JSON schema by file name.

    Raises:
        FileNotFoundError: If no bundled schema has that name.
        MalformedDocumentError: If the schema file is not valid JSON.
    """
    if schema_name in _schema_cache:
        return _schema_cache[schema_name]

    path = SCHEMA_DIR / schema_name
    if not path.is_file():
        raise FileNotFoundError(f"No bundled schema named {schema_name!r}")
    try:
        schema = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(
            f"Bundled schema is not JSON: {e}", str(path)
        ) from e

    _schema_cache[schema_name] = schema
    return schema


def validate_document(
    data: Any,
    schema_name: str,
    source: str,
    logger: BuildLogger | None = None,
) -> None:
    """Validate a parsed CLDR document against a bundled JSON schema.

    Args:
        data: The parsed JSON document.
        schema_name: File name of the bundled schema.
        source: Where the document came from (used in error messages).
        logger: Optional logger for validation errors.

    Raises:
        MalformedDocumentError: If the document does not match the schema.
    """
    schema = load_schema(schema_name)
    try:
        jsonschema.validate(instance=data, schema=schema)
    except jsonschema.ValidationError as e:
        location = "/".join(str(part) for part in e.absolute_path)
        message = f"Schema validation failed: {e.message}"
        if location:
            message = f"{message} (at path: {location})"
        if logger:
            logger.log_validation_failure(source, message)
        raise MalformedDocumentError(message, source) from e
    except jsonschema.SchemaError as e:
        msg = f"Invalid schema {schema_name}: {e}"
        if logger:
            logger.error(msg)
        raise MalformedDocumentError(msg, source) from e
