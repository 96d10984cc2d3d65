# SPDX-License-Identifier: Apache-2.0
# Copyright (c) 2025 Addison Kline

import argparse
import logging
import os
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from compilebook import utils
from compilebook.config import BuildConfig
from compilebook.config.build import CONFIG_ENV_VAR, _load_defaults_from_toml
from compilebook.core import CompileBookError
from compilebook.core.render import RENDERERS
from compilebook.core.transforms import TRANSFORMS
from compilebook.pipeline import BuildResult, build_book

logger = logging.getLogger("compilebook.cli")


def _load_config_with_args(args: argparse.Namespace) -> BuildConfig:
    """
    Build the effective config for a run.
    Given CLI args will override the defaults in the config file.
    """
    original_config_path = os.environ.get(CONFIG_ENV_VAR)
    env_overridden = False

    try:
        if args.config:
            resolved_config = Path(args.config).expanduser().resolve()
            os.environ[CONFIG_ENV_VAR] = str(resolved_config)
            env_overridden = True
            _load_defaults_from_toml.cache_clear()

        base_config = BuildConfig()

        overrides: dict[str, object] = {}
        if args.input_dir is not None:
            overrides["input_dir"] = args.input_dir
        if args.output_file is not None:
            overrides["output_file"] = args.output_file
        if args.renderer is not None:
            overrides["renderer"] = args.renderer
        if args.transform is not None:
            overrides["transform"] = args.transform
        if args.extension:
            overrides["extensions"] = args.extension
        if args.no_sort:
            overrides["sort"] = False
        if args.strict:
            overrides["strict"] = True
        if args.timeout is not None:
            overrides["render_timeout"] = args.timeout

        if not overrides:
            return base_config
        # re-validate so that overrides get the same checks as file values
        return BuildConfig.model_validate({**base_config.model_dump(), **overrides})
    finally:
        if env_overridden:
            if original_config_path is None:
                os.environ.pop(CONFIG_ENV_VAR, None)
            else:
                os.environ[CONFIG_ENV_VAR] = original_config_path
            _load_defaults_from_toml.cache_clear()


def _report(result: BuildResult, console: Console) -> None:
    """
    Print the outcome of a build, listing every skipped file.
    """
    console.print(
        f"Markdown conversion complete. Output located at [bold]{result.output_file}[/bold]"
    )
    console.print(
        f"{len(result.included)} file(s) included, {len(result.skipped)} skipped, "
        f"{result.bytes_written} bytes written with '{result.renderer}'"
    )
    for skipped in result.skipped:
        console.print(f"  [yellow]skipped[/yellow] {skipped.path}: {skipped.reason}")


def _run_build_with_args(args: argparse.Namespace) -> int:
    """
    Run a build with the given CLI args and return the process exit code.
    """
    try:
        utils.init_logger(verbose=args.verbose, log_file=args.log_file)
    except OSError as e:
        logger.error(f"could not open log file '{args.log_file}': {e}")
        return 1

    try:
        config = _load_config_with_args(args)
    except ValidationError as e:
        logger.error(f"invalid configuration: {e}")
        return 1

    try:
        result = build_book(config)
    except CompileBookError as e:
        logger.error(str(e))
        return 1

    _report(result, Console(soft_wrap=True))
    return 0


def _list_renderers(_args: argparse.Namespace) -> int:
    """
    Print the available rendering backends.
    """
    for name, description in RENDERERS.items():
        print(f"{name}: {description}")
    return 0


def _print_version(_args: argparse.Namespace) -> int:
    """
    Print the version of compilebook.
    """
    print(f"compilebook version: {utils.get_version()}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    # top-level compilebook parser
    parser = argparse.ArgumentParser(
        prog="compilebook",
        description="Concatenate a directory of markdown chapters into a single HTML file",
    )

    # subparsers for each command
    subparsers = parser.add_subparsers()

    # command `build`
    build_cmd_parser = subparsers.add_parser(
        "build", help="compile the chapters directory into one HTML file"
    )
    build_cmd_parser.set_defaults(func=_run_build_with_args)
    build_cmd_parser.add_argument(
        "-c",
        "--config",
        type=str,
        required=False,
        help="path to the compilebook configuration file",
    )
    build_cmd_parser.add_argument(
        "-i",
        "--input-dir",
        type=Path,
        required=False,
        help="directory containing the chapter files (default: ./chapters)",
    )
    build_cmd_parser.add_argument(
        "-o",
        "--output-file",
        type=Path,
        required=False,
        help="HTML file to write (default: ./output/book.html)",
    )
    build_cmd_parser.add_argument(
        "-r",
        "--renderer",
        type=str,
        choices=sorted(RENDERERS),
        required=False,
        help="markdown-to-HTML backend (default: markdown)",
    )
    build_cmd_parser.add_argument(
        "-t",
        "--transform",
        type=str,
        choices=sorted(TRANSFORMS),
        required=False,
        help="per-file transform applied before concatenation (default: title)",
    )
    build_cmd_parser.add_argument(
        "-e",
        "--extension",
        action="append",
        required=False,
        help="only include files with this extension (repeatable)",
    )
    build_cmd_parser.add_argument(
        "--no-sort",
        action="store_true",
        help="keep filesystem listing order instead of sorting by name",
    )
    build_cmd_parser.add_argument(
        "--strict",
        action="store_true",
        help="abort on the first unreadable file instead of skipping it",
    )
    build_cmd_parser.add_argument(
        "--timeout",
        type=float,
        required=False,
        help="subprocess renderer timeout in seconds",
    )
    build_cmd_parser.add_argument(
        "--log-file",
        type=str,
        required=False,
        help="also write logs to this file",
    )
    build_cmd_parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="enable verbose output",
    )

    # command `renderers`
    renderers_parser = subparsers.add_parser(
        "renderers", help="list the available rendering backends"
    )
    renderers_parser.set_defaults(func=_list_renderers)

    # command `version`
    version_parser = subparsers.add_parser(
        "version", help="print the version of compilebook"
    )
    version_parser.set_defaults(func=_print_version)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()

    # parse CLI args
    args = parser.parse_args(argv)

    # if no command is provided, print the help
    if not hasattr(args, "func"):
        parser.print_help()
        return

    # run the command
    exit_code = args.func(args)
    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
