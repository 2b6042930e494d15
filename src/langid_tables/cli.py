"""Command-line interface for langid_tables."""

import argparse
import sys
from pathlib import Path

from .config import GeneratorConfig, GeneratorConfigError, load_generator_config
from .errors import GenerationError
from .langid import parse_language_identifier
from .likely_subtags import KeyPattern
from .logging import BuildLogger
from .pipeline import build_tables, generate
from .render import FORMATS, describe_subtags
from .subtags import encode_language


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="langid-tables",
        description=(
            "Generate right-to-left and likely-subtags lookup tables from "
            "CLDR JSON data."
        ),
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'generate' subcommand
    generate_parser = subparsers.add_parser(
        "generate", help="Build the tables and write the artifacts"
    )
    _add_common_arguments(generate_parser)
    generate_parser.add_argument(
        "--output-dir",
        type=Path,
        required=False,
        help="Directory for the generated artifacts (default: generated/)",
    )
    generate_parser.add_argument(
        "--format",
        choices=FORMATS,
        required=False,
        help="Artifact format (default: python)",
    )
    generate_parser.add_argument(
        "--log-file",
        type=Path,
        required=False,
        help="Build log path (default: langid_tables.log)",
    )

    # 'inspect' subcommand
    inspect_parser = subparsers.add_parser(
        "inspect",
        help="Show the likely-subtags rule and direction for one identifier",
    )
    _add_common_arguments(inspect_parser)
    inspect_parser.add_argument(
        "tag", help="Partial language identifier, e.g. en, und-Arab, und-419"
    )

    return parser


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--cldr-root",
        type=Path,
        required=False,
        help="Root of the cldr-json data tree (default: cldr-json/)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        required=False,
        help="Path to a YAML config file (default: ./langid_tables.yaml if present)",
    )


def _load_config(args: argparse.Namespace) -> GeneratorConfig:
    config = load_generator_config(args.config, base_dir=Path.cwd())
    return config.with_overrides(
        cldr_root=args.cldr_root,
        output_dir=getattr(args, "output_dir", None),
        format=getattr(args, "format", None),
        log_file=getattr(args, "log_file", None),
    )


def _run_generate(config: GeneratorConfig) -> int:
    """Run the generator and report the outcome.

    Returns:
        Exit code (0 for success, 1 for failure).
    """
    logger = BuildLogger(config.log_file)
    print(
        f"[langid_tables] Reading CLDR data from {config.cldr_root}",
        flush=True,
    )
    try:
        result = generate(config, logger)
    except GenerationError as e:
        print(f"[langid_tables] Error: {e}", file=sys.stderr, flush=True)
        print(
            f"[langid_tables] See log for details: {logger.log_path}",
            file=sys.stderr,
            flush=True,
        )
        return 1
    except OSError as e:
        # The build log itself could not be written.
        print(
            f"[langid_tables] Error: cannot write build log {logger.log_path}: {e}",
            file=sys.stderr,
            flush=True,
        )
        return 1

    print(f"[langid_tables] CLDR version: {result.version}", flush=True)
    print(
        f"[langid_tables]  - CHARACTER_DIRECTION_RTL: {len(result.rtl)} languages",
        flush=True,
    )
    for name, count in result.likely_subtags.summary().items():
        print(f"[langid_tables]  - {name}: {count} entries", flush=True)
    for path in result.written_files:
        print(f"[langid_tables] Artifact written: {path}", flush=True)
    return 0


def _run_inspect(config: GeneratorConfig, tag: str) -> int:
    """Print the likely-subtags rule and direction for one identifier."""
    try:
        langid = parse_language_identifier(tag)
        version, rtl, likely = build_tables(config.cldr_root)
    except GenerationError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"CLDR version: {version}")
    if langid.language and langid.script and langid.region:
        print(f"{langid}: already has language, script and region")
    else:
        pattern = KeyPattern.of(langid, tag)
        value = likely.lookup(langid)
        if value is None:
            print(f"{langid}: no rule ({pattern.table_name})")
        else:
            print(f"{langid}: {describe_subtags(value)} ({pattern.table_name})")

    if langid.language:
        direction = (
            "right-to-left"
            if rtl.is_rtl(encode_language(langid.language))
            else "left-to-right"
        )
        print(f"{langid.language}: {direction}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments. If None, uses sys.argv[1:].

    Returns:
        Exit code (0 for success, non-zero for failure).
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = _load_config(args)
    except GeneratorConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.command == "generate":
        return _run_generate(config)

    if args.command == "inspect":
        return _run_inspect(config, args.tag)

    return 0


if __name__ == "__main__":
    sys.exit(main())
