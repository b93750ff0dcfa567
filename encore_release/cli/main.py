import argparse
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from encore_release.data import DEFAULT_PLATFORMS, Platform, ReleaseConfig
from encore_release.env import get_log_level
from encore_release.errors import BuildError
from encore_release.logging import configure_logging, get_logger
from encore_release.release import build_release

logger = get_logger("cli")


def build(args: argparse.Namespace) -> int:
    """Build the distribution archives of a release."""
    try:
        configure_logging(args.log_level)
    except ValueError:
        configure_logging()
        logger.error("invalid log level: %s", args.log_level)
        return 1

    try:
        platforms = [Platform.parse(p) for p in args.platform] if args.platform else None
        config = ReleaseConfig(
            version=args.version,
            dist_dir=args.dst,
            tsparser_path=args.tsparser_path,
            repo_root=args.repo_root,
            log_level=args.log_level,
            **({"platforms": platforms} if platforms else {}),
        )
    except (BuildError, ValidationError) as e:
        logger.error("invalid configuration: %s", e)
        return 1

    try:
        archives = build_release(config)
    except BuildError as e:
        logger.error("release build failed: %s", e)
        return 1

    for archive in archives:
        print(archive)
    return 0


def platforms(args: argparse.Namespace) -> int:
    """List the platforms built by default."""
    for platform in DEFAULT_PLATFORMS:
        print(f"{platform.os}/{platform.arch}")
    return 0


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="encore-release",
        description="Build Encore distribution archives",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    command_subparsers = parser.add_subparsers(
        dest="command", required=True, help="Primary commands"
    )

    build_parser = command_subparsers.add_parser(
        "build", help="Build one distribution archive per platform."
    )
    build_parser.add_argument("--version", "-v", required=True, help="The version to build.")
    build_parser.add_argument(
        "--dst", type=Path, required=True, help="Output directory for staging trees and archives."
    )
    build_parser.add_argument(
        "--tsparser-path",
        type=Path,
        default=Path("./tsparser"),
        help="Path to the ts-parser source tree.",
    )
    build_parser.add_argument(
        "--repo-root", type=Path, default=Path("."), help="Root of the Encore checkout."
    )
    build_parser.add_argument(
        "--platform",
        action="append",
        help="Platform to build, as os/arch. May be repeated. Defaults to all platforms.",
    )
    build_parser.add_argument(
        "--log-level",
        default=get_log_level(),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        type=str.upper,
    )
    build_parser.set_defaults(func=build)

    platforms_parser = command_subparsers.add_parser(
        "platforms", help="List the default platforms."
    )
    platforms_parser.set_defaults(func=platforms)
    return parser


def cli(argv: Optional[List[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    if hasattr(args, "func"):
        return args.func(args)
    parser.print_help()
    return 0


if __name__ == "__main__":
    raise SystemExit(cli())
