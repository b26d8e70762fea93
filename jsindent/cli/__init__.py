"""
jsindent CLI entry point.

Lints (and optionally fixes) the indentation of JavaScript files::

    jsindent --indent 2 --options '{"SwitchCase": 1}' src/
"""

import argparse
import json
import logging
import os
import sys
from pathlib import Path
from typing import Dict, Iterable, List, Optional

from jsindent import __version__
from jsindent.config import IndentConfig, discover_config, load_config
from jsindent.errors import ConfigError
from jsindent.linter import IndentLinter


logger = logging.getLogger(__name__)

JS_SUFFIXES = (".js", ".mjs", ".cjs")

LOG_LEVELS = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


def _configure_logging(level_name: Optional[str]) -> None:
    """Configure the jsindent logger from --log-level or JSINDENT_LOG_LEVEL."""
    log_level = (level_name or os.getenv('JSINDENT_LOG_LEVEL', 'warning')).lower()
    numeric_level = LOG_LEVELS.get(log_level, logging.WARNING)

    package_logger = logging.getLogger('jsindent')
    package_logger.setLevel(numeric_level)
    if not package_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
        package_logger.addHandler(handler)
        package_logger.propagate = False


def _parse_unit(value: str):
    if value == "tab":
        return value
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected 'tab' or a number of spaces, got {value!r}")


def _parse_options(value: str):
    try:
        options = json.loads(value)
    except json.JSONDecodeError as exc:
        raise argparse.ArgumentTypeError(f"invalid JSON: {exc}")
    if not isinstance(options, dict):
        raise argparse.ArgumentTypeError("options must be a JSON object")
    return options


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='jsindent',
        description='Check and fix the indentation of JavaScript files.',
    )
    parser.add_argument('paths', nargs='*', default=['.'], help='Files or directories to lint (default: .)')
    parser.add_argument('--indent', type=_parse_unit, help="Indentation unit: 'tab' or a number of spaces")
    parser.add_argument('--options', type=_parse_options, help='Per-construct options as a JSON object')
    parser.add_argument('--config', type=Path, help='Path to a .jsindent.json or TOML config file')
    parser.add_argument('--module', action='store_true', help='Parse every file as an ES module')
    parser.add_argument('--fix', action='store_true', help='Rewrite files with corrected indentation')
    parser.add_argument('--log-level', choices=sorted(LOG_LEVELS), help='Logging verbosity')
    parser.add_argument('--version', action='version', version=f'jsindent {__version__}')
    return parser


def collect_files(paths: Iterable[str]) -> List[Path]:
    """Expand directories into the JavaScript files they contain."""
    files: List[Path] = []
    for path_arg in paths:
        path = Path(path_arg)
        if path.is_file():
            files.append(path)
        elif path.is_dir():
            files.extend(sorted(p for p in path.rglob('*') if p.is_file() and p.suffix in JS_SUFFIXES))
        else:
            logger.warning("Skipping %s: no such file or directory", path)
    return files


def resolve_config(
    args: argparse.Namespace,
    start: Optional[Path] = None,
    loaded: Optional[Dict[Path, IndentConfig]] = None,
) -> IndentConfig:
    """
    Build the configuration for one linted file.

    Command-line ``--indent`` / ``--options`` take precedence over an
    explicit ``--config`` file, which takes precedence over the nearest
    config file found walking up from ``start`` (the working directory when
    omitted). ``loaded`` caches parsed config files by path.
    """
    if args.indent is not None or args.options is not None:
        return IndentConfig.from_options(args.indent, args.options)
    config_path = args.config or discover_config(start or Path.cwd())
    if config_path is None:
        return IndentConfig()
    if loaded is None:
        return load_config(config_path)
    if config_path not in loaded:
        loaded[config_path] = load_config(config_path)
    return loaded[config_path]


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.log_level)

    files = collect_files(args.paths)
    if not files:
        print("No JavaScript files found to lint")
        return 0

    loaded: Dict[Path, IndentConfig] = {}
    linters: Dict[IndentConfig, IndentLinter] = {}
    remaining = 0
    for file_path in files:
        try:
            config = resolve_config(args, file_path, loaded)
        except ConfigError as exc:
            print(f"Error: {exc.format()}", file=sys.stderr)
            return 2
        if config not in linters:
            linters[config] = IndentLinter(config)
        linter = linters[config]

        try:
            content = file_path.read_text(encoding='utf-8')
        except (OSError, UnicodeDecodeError) as exc:
            logger.warning("Skipping %s: %s", file_path, exc)
            continue

        source_type = 'module' if args.module else None
        if args.fix:
            result = linter.fix_document(content, str(file_path), source_type)
        else:
            result = linter.lint_document(content, str(file_path), source_type)

        for error in result.errors:
            print(f"{file_path}: {error}", file=sys.stderr)
        remaining += len(result.errors)

        if args.fix and result.fixed_text is not None and result.fixed_text != content:
            file_path.write_text(result.fixed_text, encoding='utf-8')

        for finding in result.findings:
            print(finding.format(str(file_path)))
        remaining += len(result.findings)

    return 1 if remaining else 0


__all__ = ["main", "build_parser", "collect_files", "resolve_config"]
