"""
CLI Interface for the zoipack version tool.

This module handles command-line argument parsing and validation.
"""

import argparse
from pathlib import Path

from zoipack import config
from zoipack.errors import UsageError

EPILOG = """
Examples:
  zoi-version bump prod minor
  zoi-version set status "Release Candidate"
  zoi-version set branch dev
  zoi-version formula prod --checksum macos-arm64=<sha512>
"""


class VersionArgumentParser(argparse.ArgumentParser):
    """Argument parser that raises UsageError instead of exiting with status 2."""

    def error(self, message):
        raise UsageError(message)


def build_parser():
    """
    Build the argument parser for the version tool.

    Returns:
        argparse.ArgumentParser: The configured parser.
    """
    parser = VersionArgumentParser(
        prog="zoi-version",
        description="Keep the Zoi version in sync across the release artifacts.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=EPILOG,
    )
    parser.add_argument(
        "--root",
        type=Path,
        default=None,
        help="Project root holding the release artifacts (default: enclosing git work tree).",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show debug output.",
    )

    subparsers = parser.add_subparsers(dest="command", metavar="<command>")

    # Track and part are validated by the version policy so that bad values exit with 1
    bump_parser = subparsers.add_parser(
        "bump", help="Bump the version number in all relevant files."
    )
    bump_parser.add_argument("track", metavar="<prod|dev>")
    bump_parser.add_argument("part", nargs="?", default=None, metavar="<major|minor|patch>")

    set_parser = subparsers.add_parser("set", help="Set a specific value.")
    set_parser.add_argument("key", metavar="<branch|status|number>")
    set_parser.add_argument("value", nargs="?", default=None, metavar="<value>")

    formula_parser = subparsers.add_parser(
        "formula", help="Point the Homebrew formula at a track's current release."
    )
    formula_parser.add_argument("track", metavar="<prod|dev>")
    formula_parser.add_argument(
        "--checksum",
        action="append",
        default=[],
        metavar="PLATFORM=SHA512",
        help=f"Replace a download checksum; PLATFORM is one of {', '.join(config.FORMULA_PLATFORMS)}.",
    )

    show_parser = subparsers.add_parser(
        "show", help="Print a track's version, status and branch."
    )
    show_parser.add_argument("track", metavar="<prod|dev>")

    return parser


def parse_arguments(argv=None):
    """
    Parse command-line arguments for the version tool.

    Returns:
        argparse.Namespace: Parsed command-line arguments.
    """
    return build_parser().parse_args(argv)


def validate_arguments(args):
    """
    Validate the parsed command-line arguments.

    Args:
        args (argparse.Namespace): Parsed command-line arguments.

    Returns:
        tuple: (is_valid, error_message)
    """
    if args.root is not None:
        root = Path(args.root)
        if not root.exists():
            return False, f"Project root does not exist: {args.root}"
        if not root.is_dir():
            return False, f"Project root is not a directory: {args.root}"

    if args.command == "set" and not args.value:
        return False, "'set' command requires a key and a value."

    return True, ""
