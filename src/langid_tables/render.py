"""Serialization of the generated tables into artifact text.

Two formats are supported:

- "python": two importable modules rendered from the bundled templates,
  each carrying CLDR_VERSION, its tables as tuple literals and a
  binary-search lookup function;
- "json": a single document with the version and every table.

Templates use str.format placeholders. Only plain identifiers such as
{cldr_version_literal} are allowed and every placeholder must be supplied; anything
else is a TemplateRenderError rather than a silently wrong artifact.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from string import Formatter
from typing import Any

from langid_tables.errors import TemplateRenderError
from langid_tables.langid import LangIdSubTags, LanguageIdentifier
from langid_tables.likely_subtags import BucketKey, KeyPattern, LikelySubtagsTables
from langid_tables.subtags import decode_language, decode_region, decode_script
from langid_tables.tables import RtlTable

TEMPLATE_DIR = Path(__file__).parent / "templates"
LAYOUT_TEMPLATE = TEMPLATE_DIR / "layout.py.tmpl"
LIKELY_SUBTAGS_TEMPLATE = TEMPLATE_DIR / "likely_subtags.py.tmpl"

FORMAT_PYTHON = "python"
FORMAT_JSON = "json"
FORMATS = (FORMAT_PYTHON, FORMAT_JSON)

_IDENTIFIER_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")
_INDENT = "    "


def _required_placeholders(template_path: Path, template: str) -> set[str]:
    """Extract placeholder names from a format template.

    Raises:
        TemplateRenderError: If a placeholder is not a plain identifier or the
            template is not a valid format string.
    """
    required: set[str] = set()
    try:
        for _, field_name, _, _ in Formatter().parse(template):
            if field_name is None:
                continue
            if not _IDENTIFIER_RE.fullmatch(field_name):
                raise TemplateRenderError(
                    f"Template '{template_path}' contains unsupported placeholder: "
                    f"{{{field_name}}}"
                )
            required.add(field_name)
    except ValueError as e:
        raise TemplateRenderError(
            f"Invalid format string in template '{template_path}': {e}"
        ) from e
    return required


def render_template(template_path: Path, variables: dict[str, str]) -> str:
    """Render a template, requiring every placeholder to be provided.

    Raises:
        TemplateRenderError: If the template is missing or unreadable, uses an
            unsupported placeholder, or needs a variable that was not given.
    """
    if not template_path.exists():
        raise TemplateRenderError(f"Template file not found: {template_path}")
    try:
        template = template_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise TemplateRenderError(
            f"Error reading template file '{template_path}': {e}"
        ) from e

    missing = sorted(_required_placeholders(template_path, template) - set(variables))
    if missing:
        raise TemplateRenderError(
            f"Template '{template_path}' requires variables that were not provided: "
            f"{', '.join(missing)}"
        )
    return template.format(**variables)


def describe_subtags(subtags: LangIdSubTags) -> str:
    language, script, region = subtags
    return str(
        LanguageIdentifier(
            language=decode_language(language) if language is not None else None,
            script=decode_script(script) if script is not None else None,
            region=decode_region(region) if region is not None else None,
        )
    )


def _describe_key(pattern: KeyPattern, key: BucketKey) -> str:
    """Human-readable form of a table key, for comments in the artifact."""
    if pattern is KeyPattern.LANG_ONLY:
        return describe_subtags((key, None, None))
    if pattern is KeyPattern.LANG_REGION:
        return describe_subtags((key[0], None, key[1]))
    if pattern is KeyPattern.LANG_SCRIPT:
        return describe_subtags((key[0], key[1], None))
    if pattern is KeyPattern.SCRIPT_REGION:
        return describe_subtags((None, key[0], key[1]))
    if pattern is KeyPattern.SCRIPT_ONLY:
        return describe_subtags((None, key, None))
    return describe_subtags((None, None, key))


def _tuple_literal(lines: list[str]) -> str:
    """A multi-line tuple literal from pre-rendered element lines."""
    if not lines:
        return "()"
    return "(\n" + "".join(f"{_INDENT}{line}\n" for line in lines) + ")"


def render_rtl_table(rtl: RtlTable) -> str:
    return _tuple_literal(
        [f"{code},  # {decode_language(code)}" for code in rtl.languages]
    )


def render_likely_subtags_table(pattern: KeyPattern, table: Any) -> str:
    lines = []
    for key, value in table:
        lines.append(
            f"({key!r}, {value!r}),  "
            f"# {_describe_key(pattern, key)} -> {describe_subtags(value)}"
        )
    return _tuple_literal(lines)


def render_layout_module(version: str, rtl: RtlTable) -> str:
    return render_template(
        LAYOUT_TEMPLATE,
        {
            "cldr_version_literal": repr(version),
            "rtl_table": render_rtl_table(rtl),
        },
    )


def render_likely_subtags_module(tables: LikelySubtagsTables) -> str:
    variables = {"cldr_version_literal": repr(tables.version)}
    for pattern, table in tables:
        variables[pattern.value] = render_likely_subtags_table(pattern, table)
    return render_template(LIKELY_SUBTAGS_TEMPLATE, variables)


def _json_key(key: BucketKey) -> Any:
    return list(key) if isinstance(key, tuple) else key


def render_json_document(
    version: str, rtl: RtlTable, tables: LikelySubtagsTables
) -> str:
    """Render every table into one JSON document."""
    document = {
        "cldr_version": version,
        "rtl": list(rtl.languages),
        "likely_subtags": {
            pattern.table_name: [
                [_json_key(key), list(value)] for key, value in table
            ]
            for pattern, table in tables
        },
    }
    return json.dumps(document, indent=2) + "\n"
