#!/usr/bin/env python3
"""
Shared helpers for the cpubench command-line interface.
"""
import argparse
from typing import Optional, Sequence

from cpubench.consts.DeviceTier import DeviceTier


def build_env_parser(description: Optional[str] = None) -> argparse.ArgumentParser:
    """
    Create an ArgumentParser with the common --env option.

    Args:
        description: Optional parser description shown in CLI help.

    Returns:
        argparse.ArgumentParser: parser preconfigured with the --env argument.
    """
    parser = argparse.ArgumentParser(description=description)
    parser.add_argument(
        "--env",
        type=str,
        default=None,
        help=(
            "Environment name for configuration override (e.g., 'dev'). "
            "Loads config_<env>.yaml in addition to the base config.yaml."
        ),
    )
    return parser


def build_run_parser(description: Optional[str] = None) -> argparse.ArgumentParser:
    parser = build_env_parser(description=description)
    parser.add_argument("--config-dir", type=str, default=None,
                        help="Directory holding config.yaml (default: packaged config_yaml/)")
    parser.add_argument("--tier", choices=[t.value for t in DeviceTier], default=None,
                        help="Workload tier; overrides device_tier from the config")
    parser.add_argument("--workers", type=int, default=None,
                        help="Worker processes for multi-core tests (0 = one per logical CPU)")
    parser.add_argument("--out", type=str, default="",
                        help="Summary JSON path (default: <output_cwd>/summary.json)")
    parser.add_argument("--log-file", type=str, default="",
                        help="Also write DEBUG logs to this file")
    parser.add_argument("--verbose", action="store_true",
                        help="Show DEBUG output on the console")
    return parser


def parse_run_args(argv: Optional[Sequence[str]] = None,
                   description: Optional[str] = None) -> argparse.Namespace:
    """
    Parse cpubench CLI arguments.

    Raises:
        SystemExit: on invalid arguments (argparse convention)
    """
    parser = build_run_parser(description=description)
    args = parser.parse_args(argv)
    if args.workers is not None and args.workers < 0:
        parser.error(f"--workers must be >= 0, got {args.workers}")
    return args
