"""Agent Smith - Serve core, plugin and theme updates from a GitHub-hosted manifest."""

import argparse
import json
import sys
from pathlib import Path

from config import Config
from logging_setup import get_logger, setup_logging
from settings import describe_settings, missing_config_notice, update_settings
from store import OptionStore
from updater import UpdateChecker


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Serve core, plugin and theme updates from a GitHub-hosted manifest",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.toml)",
    )
    parser.add_argument(
        "--installed-version",
        type=str,
        default=None,
        help="Override installed core version from config",
    )
    parser.add_argument(
        "--locale",
        type=str,
        default=None,
        help="Override site locale from config",
    )

    verbosity_group = parser.add_mutually_exclusive_group()
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only warnings and errors)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write logs to file (always DEBUG level)",
    )

    subparsers = parser.add_subparsers(dest="command")

    check = subparsers.add_parser("check", help="Run the update check (default)")
    check.add_argument(
        "-f", "--force-refresh",
        action="store_true",
        default=False,
        help="Discard cached plugin/theme transients before checking",
    )
    check.add_argument(
        "--json",
        action="store_true",
        default=False,
        help="Print the synthesised transients as JSON",
    )

    configure = subparsers.add_parser("configure", help="Set repository URL and token")
    configure.add_argument(
        "-u", "--repo-url",
        type=str,
        default=None,
        help="Raw GitHub URL of the updates repository",
    )
    configure.add_argument(
        "-t", "--token",
        type=str,
        default=None,
        help="GitHub personal access token with read access",
    )

    args = parser.parse_args()
    if args.command is None:
        args.command = "check"
        args.force_refresh = False
        args.json = False
    return args


def run_configure(args: argparse.Namespace, config: Config) -> int:
    logger = get_logger()
    store = OptionStore(config.options_file)

    try:
        update_settings(store, repo_url=args.repo_url, token=args.token)
    except OSError as e:
        logger.error("Error saving settings: %s", e)
        return 1

    for label, value in describe_settings(store).items():
        logger.info("%s: %s", label, value or "(not set)")
    return 0


def run_check(args: argparse.Namespace, config: Config) -> int:
    logger = get_logger()

    notice = missing_config_notice(config)
    if notice:
        logger.warning(notice)

    result = UpdateChecker(config).run(force_refresh=args.force_refresh)

    if args.json:
        print(json.dumps(
            {
                "core": result.core.to_dict(),
                "plugins": result.plugins,
                "themes": result.themes,
            },
            indent=2,
        ))
        return 0

    logger.info("Installed version: %s", config.installed_version)
    if result.core.response == "upgrade":
        logger.info("Core update available: %s", result.core.current)
    else:
        logger.info("Core is up to date")
    logger.info("Plugin updates: %d", len(result.plugins))
    logger.info("Theme updates: %d", len(result.themes))
    return 0


def main() -> int:
    args = parse_args()

    verbosity = 1 if args.verbose else (-1 if args.quiet else 0)
    # Keep stdout clean for the JSON document
    stream = sys.stderr if getattr(args, "json", False) else sys.stdout
    setup_logging(verbosity=verbosity, log_file=args.log_file, stream=stream)
    logger = get_logger()

    logger.debug("Loading configuration...")
    config = Config.load(
        config_path=args.config,
        installed_version_override=args.installed_version,
        locale_override=args.locale,
    )

    if args.command == "configure":
        return run_configure(args, config)
    return run_check(args, config)


if __name__ == "__main__":
    sys.exit(main())
