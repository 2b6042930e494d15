"""Generator config loading and merging with built-in defaults."""

from __future__ import annotations

import yaml
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

from langid_tables.render import FORMATS

CONFIG_FILE_NAME = "langid_tables.yaml"


class GeneratorConfigError(Exception):
    """Raised when the generator config cannot be loaded or is invalid."""

    pass


@dataclass(frozen=True)
class GeneratorConfig:
    """Merged generator config (built-in defaults + optional YAML overrides).

    Attributes:
        cldr_root: Root of the cldr-json data tree (holds main/ and supplemental/).
        output_dir: Directory receiving the generated artifacts.
        format: Artifact format, "python" or "json".
        layout_module: File name of the generated RTL module (python format).
        likely_subtags_module: File name of the generated likely-subtags module.
        json_artifact: File name of the generated document (json format).
        log_file: Path of the build log.
    """

    cldr_root: Path
    output_dir: Path
    format: str = "python"
    layout_module: str = "layout.py"
    likely_subtags_module: str = "likely_subtags.py"
    json_artifact: str = "langid_tables.json"
    log_file: Path = Path("langid_tables.log")

    def __post_init__(self) -> None:
        if self.layout_module == self.likely_subtags_module:
            raise GeneratorConfigError(
                "layout-module and likely-subtags-module must name different "
                f"files, both are '{self.layout_module}'"
            )

    def with_overrides(self, **overrides: Any) -> GeneratorConfig:
        """Return a copy with every non-None override applied (CLI flags)."""
        changes = {key: value for key, value in overrides.items() if value is not None}
        if "format" in changes:
            changes["format"] = _validate_format(changes["format"])
        for key in ("cldr_root", "output_dir", "log_file"):
            if key in changes:
                changes[key] = Path(changes[key])
        return replace(self, **changes)


# Built-in defaults when no config file exists.
_BUILTIN_DEFAULTS: dict[str, Any] = {
    "cldr-root": "cldr-json",
    "output-dir": "generated",
    "format": "python",
    "layout-module": "layout.py",
    "likely-subtags-module": "likely_subtags.py",
    "json-artifact": "langid_tables.json",
    "log-file": "langid_tables.log",
}


def _validate_format(value: Any) -> str:
    fmt = str(value).strip().lower()
    if fmt not in FORMATS:
        raise GeneratorConfigError(
            f"Unknown artifact format '{value}'. Use one of: {', '.join(FORMATS)}"
        )
    return fmt


def _load_yaml(path: Path) -> dict:
    """Load a YAML file; return empty dict if file missing, raise on invalid YAML."""
    if not path.exists():
        return {}
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise GeneratorConfigError(f"Invalid YAML in {path}: {e}") from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise GeneratorConfigError(f"Config {path} must be a mapping of settings")
    return data


def load_generator_config(
    config_path: Path | None = None,
    base_dir: Path | None = None,
) -> GeneratorConfig:
    """Load the generator config: built-in defaults plus YAML overrides.

    Args:
        config_path: Explicit config file. It must exist when given.
        base_dir: Directory to look for langid_tables.yaml and to resolve
            relative paths against. If None, uses Path.cwd().

    Returns:
        GeneratorConfig with merged values (file values take precedence).

    Raises:
        GeneratorConfigError: If the explicit config file is missing, the YAML
            is invalid, or a value is invalid.
    """
    if base_dir is None:
        base_dir = Path.cwd()
    base_dir = base_dir.resolve()

    if config_path is not None:
        if not config_path.exists():
            raise GeneratorConfigError(f"Config file not found: {config_path}")
        overrides = _load_yaml(config_path)
    else:
        overrides = _load_yaml(base_dir / CONFIG_FILE_NAME)

    # Shallow merge: overrides replace defaults for top-level keys only
    merged = dict(_BUILTIN_DEFAULTS)
    for key, value in overrides.items():
        if value is not None:
            # YAML may use hyphens or snake_case
            merged[str(key).replace("_", "-")] = value

    unknown = sorted(set(merged) - set(_BUILTIN_DEFAULTS))
    if unknown:
        raise GeneratorConfigError(f"Unknown config keys: {', '.join(unknown)}")

    def _path(key: str) -> Path:
        path = Path(str(merged[key]))
        return path if path.is_absolute() else base_dir / path

    return GeneratorConfig(
        cldr_root=_path("cldr-root"),
        output_dir=_path("output-dir"),
        format=_validate_format(merged["format"]),
        layout_module=str(merged["layout-module"]),
        likely_subtags_module=str(merged["likely-subtags-module"]),
        json_artifact=str(merged["json-artifact"]),
        log_file=_path("log-file"),
    )
