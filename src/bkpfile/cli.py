"""CLI for bkpfile - single file backups."""

import argparse
import logging
import os
import platform
import sys
from datetime import datetime

from . import __version__
from .backup import create_backup
from .config import Config, ConfigLoadError, default_config, display_config, load_config
from .core.model import OutcomeKind
from .lister import BackupListError, list_backups


def display_path(path: str) -> str:
    """Path relative to the working directory, or unchanged if that fails."""
    try:
        return os.path.relpath(path, ".")
    except ValueError:
        return path


def version_string() -> str:
    return (
        f"bkpfile {__version__} "
        f"(python {platform.python_version()}) [{sys.platform}-{platform.machine()}]"
    )


def cmd_config(args: argparse.Namespace) -> int:
    """Display computed configuration values."""
    try:
        display_config(".")
    except ConfigLoadError as e:
        print(f"Error: {e}", file=sys.stderr)
        return default_config().status_config_error
    return 0


def cmd_list(args: argparse.Namespace, cfg: Config) -> int:
    """List backups of a file, newest first."""
    try:
        backups = list_backups(cfg.backup_dir_path, args.file)
    except BackupListError as e:
        print(f"Error: failed to list backups: {e}", file=sys.stderr)
        return cfg.status_config_error

    for backup in backups:
        stamp = backup.creation_time.strftime("%Y-%m-%d %H:%M:%S")
        print(f"{display_path(backup.path)} ({stamp})")
    return 0


def cmd_backup(args: argparse.Namespace, cfg: Config) -> int:
    """Create a backup unless the file matches its latest backup."""
    outcome = create_backup(
        cfg, args.file, note=args.note or "", dry_run=args.dry_run, now=datetime.now
    )

    if not outcome.is_success:
        print(f"Error: {outcome.message}", file=sys.stderr)
    elif outcome.kind == OutcomeKind.IDENTICAL:
        print(f"File is identical to existing backup: {display_path(outcome.path)}")
    else:
        verb = "Would create backup" if outcome.dry_run else "Created backup"
        print(f"{verb}: {display_path(outcome.path)}")
    return outcome.status_code


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="bkpfile",
        description="Create and manage timestamped backups of a single file.",
        epilog=f"Version: {version_string()}",
    )
    parser.add_argument("file", nargs="?", metavar="FILE_PATH", help="File to back up")
    parser.add_argument("note", nargs="?", metavar="NOTE", help="Note appended to the backup name")
    parser.add_argument(
        "--dry-run", action="store_true",
        help="Show what would be done without creating backups"
    )
    parser.add_argument(
        "--list", action="store_true",
        help="List all backups for the specified file"
    )
    parser.add_argument(
        "--config", action="store_true",
        help="Display computed configuration values and exit"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=version_string()
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.config:
        sys.exit(cmd_config(args))

    if args.file is None:
        print("Error: file path is required", file=sys.stderr)
        sys.exit(default_config().status_config_error)

    try:
        cfg = load_config(".")
    except ConfigLoadError as e:
        # The config itself is unavailable, so fall back to the default code
        print(f"Error: failed to load config: {e}", file=sys.stderr)
        sys.exit(default_config().status_config_error)

    handler = cmd_list if args.list else cmd_backup
    sys.exit(handler(args, cfg))


if __name__ == "__main__":
    main()
