"""Command-line interface for layerguard."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from engine import RuleEngine, detect_cycles, should_fail
from parse import import_sources
from report import render_json, render_text
from rules.config import (
    CONFIG_FILENAME,
    ArchConfig,
    ConfigError,
    load_config,
    write_starter_config,
)
from rules.violations import Severity
from scan import collect_java_sources

EXIT_OK = 0
EXIT_VIOLATIONS = 1
EXIT_ERROR = 2


def _add_common_paths(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )
    parser.add_argument(
        "--config",
        "-c",
        default=None,
        help=f"Configuration file (default: <root>/{CONFIG_FILENAME})",
    )
    parser.add_argument(
        "--src",
        "-s",
        action="append",
        default=None,
        help="Source directory relative to root; repeatable (default: config sources)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable debug logging",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="layerguard")
    subparsers = parser.add_subparsers(dest="command", required=True)

    check_parser = subparsers.add_parser(
        "check", help="Check sources against architecture rules"
    )
    _add_common_paths(check_parser)
    check_parser.add_argument(
        "--fail-on",
        default=None,
        help="Fail on violations at or above this severity (default: config failOn)",
    )
    check_parser.add_argument(
        "--format",
        choices=("text", "json"),
        default="text",
        help="Output format (default: text)",
    )
    check_parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Evaluate rules on this many threads (default: 1)",
    )

    cycles_parser = subparsers.add_parser(
        "cycles", help="List class-level dependency cycles"
    )
    _add_common_paths(cycles_parser)

    init_parser = subparsers.add_parser("init", help="Write a starter configuration")
    init_parser.add_argument(
        "root",
        nargs="?",
        default=".",
        help="Project root (default: .)",
    )
    init_parser.add_argument(
        "--output",
        "-o",
        default=None,
        help=f"Output file (default: <root>/{CONFIG_FILENAME})",
    )
    init_parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite an existing configuration file",
    )

    return parser


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _resolve_config_path(root: Path, config: str | None) -> Path:
    if config is None:
        return root / CONFIG_FILENAME
    return Path(config).expanduser().resolve()


def _resolve_sources(root: Path, config: ArchConfig, src: list[str] | None) -> list[Path]:
    sources = collect_java_sources(
        root,
        src if src else config.sources,
        include_patterns=config.include or None,
        exclude_patterns=config.exclude or None,
        nested_gitignore=config.nested_gitignore,
    )
    if not sources:
        searched = ", ".join(src if src else config.sources)
        msg = f"No Java source files found under {root} (searched: {searched})"
        raise ConfigError(msg)
    return sources


def _handle_check(
    root: Path,
    config_path: Path,
    src: list[str] | None,
    fail_on: str | None,
    output_format: str,
    workers: int,
) -> int:
    config = load_config(config_path)
    threshold = config.fail_on.severity
    if fail_on is not None:
        try:
            threshold = Severity.parse(fail_on)
        except ValueError as exc:
            raise ConfigError(str(exc)) from exc

    sources = _resolve_sources(root, config, src)
    violations = RuleEngine(workers=workers).run(config, sources)

    if output_format == "json":
        sys.stdout.write(render_json(violations).decode("utf-8") + "\n")
    else:
        sys.stdout.write(render_text(violations))

    if should_fail(violations, threshold):
        sys.stderr.write(
            "Architecture check failed: violations at or above "
            f"severity '{threshold.value}'\n"
        )
        return EXIT_VIOLATIONS
    return EXIT_OK


def _handle_cycles(root: Path, config_path: Path, src: list[str] | None) -> int:
    config = load_config(config_path) if config_path.is_file() else ArchConfig()
    model = import_sources(_resolve_sources(root, config, src))
    cycles = detect_cycles(model)
    if not cycles:
        sys.stdout.write("No dependency cycles found\n")
        return EXIT_OK
    for cycle in cycles:
        sys.stdout.write(f"cycle: {cycle}\n")
    return EXIT_VIOLATIONS


def _handle_init(root: Path, output: str | None, force: bool) -> int:
    target = Path(output).expanduser().resolve() if output else root
    path = write_starter_config(target, force=force)
    sys.stdout.write(f"Created {path}\n")
    return EXIT_OK


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    root = Path(args.root).expanduser().resolve()

    try:
        if args.command == "init":
            return _handle_init(root, args.output, args.force)

        _configure_logging(args.verbose)
        config_path = _resolve_config_path(root, args.config)

        if args.command == "check":
            if args.workers < 1:
                parser.error("--workers must be at least 1")
            return _handle_check(
                root,
                config_path,
                args.src,
                args.fail_on,
                args.format,
                args.workers,
            )

        if args.command == "cycles":
            return _handle_cycles(root, config_path, args.src)
    except ConfigError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_ERROR
    except OSError as exc:
        sys.stderr.write(f"error: {exc}\n")
        return EXIT_ERROR

    raise AssertionError


if __name__ == "__main__":
    raise SystemExit(main())
