#!/usr/bin/env python3
"""
pnpconfig CLI

Command-line interface for inspecting configurations and jobs:
  pnpconfig init - Write an empty configuration
  pnpconfig show - Summarize a configuration
  pnpconfig job - Load a job and list its boards
  pnpconfig relpath - Compute a relative path

Usage:
  pnpconfig [-v] [--config-dir <dir>] init
  pnpconfig [-v] [--config-dir <dir>] show
  pnpconfig [-v] [--config-dir <dir>] job <job.yaml>
  pnpconfig relpath <target> <base>
"""

import argparse
import logging
import os
import sys
from pathlib import Path

from .configuration import Configuration
from .errors import ConfigurationError, PathRelativizationFailure
from .machine import ReferenceMachine
from .paths import relativize
from .settings import Settings


def _configuration(args) -> Configuration:
    settings = Settings.from_env()
    if args.config_dir:
        settings.config_dir = Path(args.config_dir).expanduser()
    return Configuration(settings=settings)


def cmd_init(args):
    """Write an empty configuration."""
    config = _configuration(args)
    directory = config.settings.config_dir
    if config.settings.machine_path(directory).exists() and not args.force:
        print(f"Error: configuration already exists in {directory} (use --force)")
        sys.exit(1)

    config.machine = ReferenceMachine()
    config.save(directory)
    print(f"Configuration written to: {directory}")


def cmd_show(args):
    """Load a configuration and print a summary."""
    config = _configuration(args)
    config.load()

    machine = config.machine
    print(f"Configuration: {config.settings.config_dir}")
    print(f"Machine: {machine.machine_type if machine else '-'}")

    packages = config.packages
    print(f"\nPackages: {len(packages)}")
    for package in packages:
        print(f"  {package.id}")

    parts = config.parts
    print(f"\nParts: {len(parts)}")
    for part in parts:
        package = part.package.id if part.package else (part.package_id or "-")
        print(f"  {part.id} ({package})")


def cmd_job(args):
    """Load a job and list its board locations."""
    config = _configuration(args)
    config.load()
    job = config.load_job(Path(args.job))

    print(f"Job: {job.file}")
    print(f"Boards: {len(job.board_locations)}")
    for board_location in job.board_locations:
        board = board_location.board
        print(
            f"  {board_location.board_file} -> {board.file} "
            f"[{board.name}, {len(board.placements)} placements, {board_location.side}]"
        )

    stats = config.board_cache.stats
    print(f"\nBoard files loaded: {stats.misses}, cache hits: {stats.hits}, created: {stats.created}")


def cmd_relpath(args):
    """Print the path to a target relative to a base."""
    target = os.path.abspath(args.target)
    try:
        print(relativize(target, os.path.abspath(args.base), os.sep))
    except PathRelativizationFailure:
        print(target)


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="pnpconfig",
        description="pnpconfig - Pick-and-place configuration and jobs",
    )
    parser.add_argument("--config-dir", help="Configuration directory (default: $PNPCONFIG_HOME)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # init command
    init_parser = subparsers.add_parser("init", help="Write an empty configuration")
    init_parser.add_argument("--force", action="store_true",
                             help="Overwrite an existing configuration")

    # show command
    subparsers.add_parser("show", help="Summarize the configuration")

    # job command
    job_parser = subparsers.add_parser("job", help="Load a job and list its boards")
    job_parser.add_argument("job", help="Job YAML file")

    # relpath command
    relpath_parser = subparsers.add_parser("relpath", help="Compute a relative path")
    relpath_parser.add_argument("target", help="Target path")
    relpath_parser.add_argument("base", help="Base file or directory")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    commands = {
        "init": cmd_init,
        "show": cmd_show,
        "job": cmd_job,
        "relpath": cmd_relpath,
    }
    command = commands.get(args.command)
    if command is None:
        parser.print_help()
        sys.exit(1)

    try:
        command(args)
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
