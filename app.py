"""
Command-line entry point for github-issues-export.

Exports the issues of a GitHub repository (or one issue) to Markdown files,
one file per issue:

    github-issues-export owner/repo
    github-issues-export owner/repo#42
    github-issues-export --state all --path ./exported owner/repo

The token is read from GITHUB_TOKEN, or from a .env file in the working
directory.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from config import DEFAULT_OUTPUT_DIR, DEFAULT_STATE, PROJECT_NAME, STATES, ExportConfig, __version__
from credentials import resolve_token
from errors import ExportError, RateLimitedError
from exporter import Exporter, parse_target
from github_client import GitHubClient
from logger import log_config_status, setup_logger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=PROJECT_NAME,
        description="Export issues from GitHub into markdown files.",
        epilog="Environment variables: GITHUB_TOKEN (required, may also come from .env), "
               "GITHUB_API_URL, ISSUES_EXPORT_PATH.",
    )
    parser.add_argument(
        "query",
        nargs="?",
        help="owner/repo to export all issues, or owner/repo#issue_number for one issue",
    )
    parser.add_argument(
        "-p", "--path",
        default=DEFAULT_OUTPUT_DIR,
        help=f"output directory (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "-s", "--state",
        choices=STATES,
        default=DEFAULT_STATE,
        help=f"issues to fetch when exporting a whole repository (default: {DEFAULT_STATE})",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="show debug output")
    parser.add_argument("--log-dir", type=Path, help="also write a debug log file into this directory")
    parser.add_argument("--check", action="store_true", help="verify the GitHub token and exit")
    parser.add_argument("--version", action="version", version=f"{PROJECT_NAME} {__version__}")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the exporter.

    Args:
        argv (Optional[List[str]]): Command-line arguments, sys.argv[1:] if None.

    Returns:
        int: Process exit code. 0 on success, 1 on a fatal error or when no
            issue could be exported cleanly, 130 when interrupted.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if not args.query and not args.check:
        parser.error("the following arguments are required: query")

    logger = setup_logger(level=logging.DEBUG if args.verbose else logging.INFO, log_dir=args.log_dir)

    try:
        # Target and token are checked before any request is made
        target = parse_target(args.query) if args.query else None
        token = resolve_token(logger=logger)
        config = ExportConfig(token=token, output_dir=Path(args.path), state=args.state)
        log_config_status(logger, token, config.api_url, config.output_dir)

        with GitHubClient(token, api_url=config.api_url, logger=logger) as client:
            if args.check:
                client.test_connection()
                return 0

            result = Exporter(config, client=client, logger=logger).export(target)

    except RateLimitedError as e:
        logger.error(f"Error: {e}")
        if e.reset_at:
            logger.error(f"Rate limit resets at {datetime.fromtimestamp(e.reset_at):%Y-%m-%d %H:%M:%S}")
        return 1
    except ExportError as e:
        logger.error(f"Error: {e}")
        return 1
    except KeyboardInterrupt:
        logger.error("Interrupted")
        return 130

    if not result.ok:
        logger.error(f"No issue of {target} could be exported without errors")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
