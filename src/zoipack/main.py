"""
Main entry points for the zoipack tools.

`main` runs the version tool (`zoi-version`); `bootstrap` runs the installer
wrapper (`zoi-bootstrap`).
"""

import logging
import sys

from dotenv import load_dotenv

from zoipack import config
from zoipack.cli import build_parser, parse_arguments, validate_arguments
from zoipack.errors import UsageError, ZoiPackError
from zoipack.installer import Installer
from zoipack.logging_config import setup_logging
from zoipack.manifest_store import ManifestStore
from zoipack.repository import ProjectLocator
from zoipack.sync import SyncOrchestrator


def _setup_logging_and_env(verbose=False):
    """Sets up logging and environment variables."""
    load_dotenv()
    level = logging.DEBUG if verbose else config.log_level()
    return setup_logging(level)


def _run_command(args, logger):
    """Dispatches a parsed command to the sync orchestrator."""
    root = ProjectLocator().locate(args.root)
    logger.debug(f"Project root: {root}")
    orchestrator = SyncOrchestrator(ManifestStore(root))

    if args.command == "bump":
        orchestrator.bump(args.track, args.part)
    elif args.command == "set":
        orchestrator.set_value(args.key, args.value)
    elif args.command == "formula":
        orchestrator.formula(args.track, args.checksum)
    elif args.command == "show":
        state = orchestrator.current_state(args.track)
        logger.info(f"version: {state.number}")
        logger.info(f"status:  {state.status}")
        logger.info(f"branch:  {state.branch or '(not set)'}")


def main(argv=None):
    """
    Main entry point for the version tool.

    Returns:
        int: Process exit code.
    """
    try:
        args = parse_arguments(argv)
    except UsageError as e:
        # An unknown or incomplete command shows usage, as running without one does
        logger = _setup_logging_and_env()
        logger.error(f"[ERROR] {e}")
        build_parser().print_help()
        return 0
    logger = _setup_logging_and_env(args.verbose)

    if not args.command:
        build_parser().print_help()
        return 0

    is_valid, error_message = validate_arguments(args)
    if not is_valid:
        logger.error(f"[ERROR] {error_message}")
        return 1

    try:
        _run_command(args, logger)
    except (ZoiPackError, ValueError, OSError) as e:
        logger.error(f"[ERROR] {e}")
        return 1
    return 0


def bootstrap():
    """
    Main entry point for the installer wrapper.

    Returns:
        int: The installer's exit code, 0 when zoi is already installed.
    """
    logger = _setup_logging_and_env()
    try:
        return Installer(timeout=config.download_timeout()).run()
    except (ZoiPackError, OSError) as e:
        logger.error(str(e))
        return 1


def run():
    sys.exit(main())


def run_bootstrap():
    sys.exit(bootstrap())


if __name__ == "__main__":
    run()
