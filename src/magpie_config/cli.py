"""CLI for inspecting, exporting and validating magpie experiment configurations.

Usage examples:
    python -m magpie_config.cli list

    python -m magpie_config.cli show --profile debug
    python -m magpie_config.cli show --file configs/production.yaml --key stimuli.main

    # write the module the frontend imports
    python -m magpie_config.cli export --profile directLink --format js \
        --output src/magpie.config.js

    # profile from MAGPIE_PROFILE / .env, with MAGPIE_* overrides applied
    python -m magpie_config.cli export --env --format json
    python -m magpie_config.cli show --env --file configs/production.yaml

    python -m magpie_config.cli validate configs/*.yaml src/magpie.config.js
    python -m magpie_config.cli check-stimuli --profile directLink --base-dir .

Exit status is 0 on success and 1 when a configuration or stimuli file is
missing or invalid.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from .config.loader import (
    FORMATS,
    dumps,
    load_config,
    load_from_environment,
    save_config,
)
from .config.profiles import (
    DEFAULT_PROFILE,
    get_profile,
    list_available_profiles,
    print_profile_summary,
)
from .config.record import ExperimentConfig
from .errors import ConfigurationError
from .stimuli import load_stimuli, resolve_stimuli_path, summarize_stimuli

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool = False) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(level=level, format="%(asctime)s - %(levelname)s - %(message)s")


def _add_source_args(p: argparse.ArgumentParser) -> None:
    src = p.add_mutually_exclusive_group()
    src.add_argument(
        "--profile",
        "-p",
        choices=list_available_profiles(),
        help=f"Named profile (default: {DEFAULT_PROFILE})",
    )
    src.add_argument("--file", "-f", help="Config file (.yaml/.yml/.json/.js)")
    p.add_argument(
        "--env",
        action="store_true",
        help="Apply MAGPIE_* environment overrides (and .env) to the profile or file",
    )


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="magpie-config",
        description="Inspect, export and validate magpie experiment configurations",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--verbose", action="store_true", help="Debug logging")
    sub = p.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List available profiles")

    show = sub.add_parser("show", help="Print a configuration as key = value lines")
    _add_source_args(show)
    show.add_argument("--key", "-k", help="Print only this key (e.g. stimuli.main)")

    export = sub.add_parser("export", help="Serialize a configuration")
    _add_source_args(export)
    export.add_argument("--format", choices=FORMATS, default="js", help="Output format")
    export.add_argument("--output", "-o", help="Write to this file instead of stdout")

    validate = sub.add_parser("validate", help="Validate configuration files")
    validate.add_argument("files", nargs="+", help="Config files to validate")

    stim = sub.add_parser("check-stimuli", help="Load the main stimuli file")
    _add_source_args(stim)
    stim.add_argument(
        "--base-dir", default=None, help="Experiment root stimuli paths are relative to"
    )
    return p


def resolve_config(args: argparse.Namespace) -> ExperimentConfig:
    if args.env:
        return load_from_environment(profile=args.profile, path=args.file)
    if args.file:
        return load_config(args.file)
    return get_profile(args.profile or DEFAULT_PROFILE)


def _cmd_show(args: argparse.Namespace) -> int:
    config = resolve_config(args)
    if args.key:
        print(config.get(args.key))
        return 0
    for key, value in config.flatten().items():
        print(f"{key} = {value}")
    return 0


def _cmd_export(args: argparse.Namespace) -> int:
    config = resolve_config(args)
    if args.output:
        path = save_config(config, args.output, fmt=args.format)
        print(f"Wrote {args.format} configuration to {path}")
    else:
        sys.stdout.write(dumps(config, args.format))
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    failures = 0
    for file in args.files:
        try:
            config = load_config(file)
        except (FileNotFoundError, ConfigurationError) as e:
            failures += 1
            print(f"FAIL {file}: {e}", file=sys.stderr)
            continue
        print(f"OK   {file} (experiment {config.experiment_id}, mode {config.mode})")
    return 1 if failures else 0


def _cmd_check_stimuli(args: argparse.Namespace) -> int:
    config = resolve_config(args)
    df = load_stimuli(config, args.base_dir)
    summary = summarize_stimuli(df)
    print(f"{resolve_stimuli_path(config, args.base_dir)}: {summary['rows']} rows")
    print(f"columns: {', '.join(str(c) for c in summary['columns'])}")
    return 0


COMMANDS = {
    "show": _cmd_show,
    "export": _cmd_export,
    "validate": _cmd_validate,
    "check-stimuli": _cmd_check_stimuli,
}


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    if args.command == "list":
        print_profile_summary()
        return 0

    try:
        return COMMANDS[args.command](args)
    except (FileNotFoundError, ValueError, KeyError) as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
