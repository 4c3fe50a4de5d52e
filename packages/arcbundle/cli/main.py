"""Command-line interface for arcbundle."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError
from rich.console import Console

from arcbundle.core.bundle import BundleError, BundleService, ValidationResult
from arcbundle.core.config.loader import configure_logging, load_app_config
from arcbundle.core.config.models import AppConfig, LoggingConfig
from arcbundle.core.io import RealFileSystemSync, absolute_path
from arcbundle.core.songlist import SonglistFormatError, SonglistStore
from arcbundle.core.utils.logging import get_logger

console = Console()
logger = logging.getLogger(__name__)


def print_result(result: ValidationResult) -> None:
    """Print a validation summary, colored by outcome."""
    style = "green" if result.is_valid else "red"
    console.print(result.summary(), style=style, markup=False, highlight=False)


def load_config_or_report(args: argparse.Namespace) -> AppConfig | None:
    """Load app config and configure logging; print the error and return None on failure."""
    try:
        config = load_app_config(args.app_config)
    except (ValueError, ValidationError) as e:
        console.print(f"[red]ERROR: Could not load config: {e}[/red]")
        return None

    if args.log_level:
        config.logging = LoggingConfig.model_validate(
            {**config.logging.model_dump(), "level": args.log_level}
        )
    configure_logging(config)
    return config


def build_service(
    args: argparse.Namespace, config: AppConfig, store: SonglistStore | None = None
) -> BundleService:
    fs = RealFileSystemSync()
    service_logger = get_logger("arcbundle.core.bundle", command=args.cmd)
    return BundleService(
        store or SonglistStore(fs), fs=fs, config=config.bundle, logger=service_logger
    )


def cmd_check(args: argparse.Namespace, config: AppConfig) -> int:
    """Validate the structure of an active folder."""
    service = build_service(args, config)
    result = service.validate_active_folder(args.root)
    print_result(result)
    return 0 if result.is_valid else 1


def cmd_update(args: argparse.Namespace, config: AppConfig) -> int:
    """Copy the list documents from --source into ROOT/songs."""
    fs = RealFileSystemSync()
    store = SonglistStore(fs)
    try:
        store.load_directory(absolute_path(args.source))
        build_service(args, config, store).update_active_folder(args.root)
    except (OSError, BundleError, SonglistFormatError) as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    console.print(
        f"[green]✅ Active folder updated:[/green] {len(store.songs)} songs, "
        f"{len(store.packs)} packs, {len(store.unlocks)} unlocks"
    )
    return 0


def cmd_pack(args: argparse.Namespace, config: AppConfig) -> int:
    """Validate an active folder, then write its meta.cb."""
    service = build_service(args, config)
    root = Path(args.root)

    if not args.skip_check:
        result = service.validate_active_folder(root)
        if not result.is_valid:
            print_result(result)
            console.print("[red]ERROR: Active folder failed validation, nothing written[/red]")
            return 1
        if result.has_warnings:
            print_result(result)

    out_path = Path(args.out) if args.out else root / config.bundle.meta_filename
    try:
        service.generate_meta_cb(
            root,
            out_path,
            app_version=args.app_version,
            bundle_version=args.bundle_version,
            previous_bundle_version=args.previous_version,
        )
    except (OSError, BundleError) as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    console.print(f"[green]📦 Bundle manifest written:[/green] {out_path}")
    return 0


def cmd_verify(args: argparse.Namespace, config: AppConfig) -> int:
    """Check a meta.cb against the active folder it describes."""
    service = build_service(args, config)
    result = service.validate_bundle(args.manifest, args.root)
    print_result(result)
    return 0 if result.is_valid else 1


COMMANDS = {
    "check": cmd_check,
    "update": cmd_update,
    "pack": cmd_pack,
    "verify": cmd_verify,
}


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="arcbundle",
        description="arcbundle - song-metadata bundle packaging and verification",
    )
    p.add_argument(
        "--app-config",
        default="config.json",
        help="Path to app config JSON/YAML (default: config.json, optional)",
    )
    p.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured log level",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    check = sub.add_parser("check", help="Validate an active folder")
    check.add_argument("root", help="Active folder")

    update = sub.add_parser("update", help="Write list documents into an active folder")
    update.add_argument("root", help="Active folder")
    update.add_argument(
        "--source",
        required=True,
        help="Directory holding songlist, packlist and/or unlocks",
    )

    pack = sub.add_parser("pack", help="Generate meta.cb for an active folder")
    pack.add_argument("root", help="Active folder")
    pack.add_argument("--out", help="Output path (default: <root>/meta.cb)")
    pack.add_argument("--app-version", help="applicationVersionNumber")
    pack.add_argument("--bundle-version", help="versionNumber")
    pack.add_argument("--previous-version", help="previousVersionNumber")
    pack.add_argument(
        "--skip-check",
        action="store_true",
        help="Write even if the active folder fails validation",
    )

    verify = sub.add_parser("verify", help="Verify a meta.cb against an active folder")
    verify.add_argument("manifest", help="Path to meta.cb")
    verify.add_argument("root", help="Active folder")

    return p


def run(argv: list[str] | None = None) -> int:
    """Parse *argv* and dispatch; returns the exit code."""
    args = build_arg_parser().parse_args(argv)

    config = load_config_or_report(args)
    if config is None:
        return 1

    logger.debug("Running %s", args.cmd)
    return COMMANDS[args.cmd](args, config)


def main() -> None:
    """Main entry point for CLI."""
    sys.exit(run())
