"""Command line entry point for operating the content service."""

import argparse
import sys
from datetime import timedelta
from typing import List, Optional

from common.constants import DEFAULT_TOKEN_TTL_HOURS
from common.logging_config import setup_logging
from distributor.archive import unpack_archive
from distributor.auth import create_access_token
from distributor.config import load_settings
from distributor.exceptions import ContentServiceError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cds", description="PBB content distribution service")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("serve", help="Unpack, index and serve the content archive")
    subparsers.add_parser("unpack", help="Unpack the content archive into the content directory")

    token_parser = subparsers.add_parser("token", help="Print a signed access token")
    token_parser.add_argument("--sub", required=True, help="Account identifier")
    token_parser.add_argument("--username", required=True, help="Account username")
    token_parser.add_argument("--role", default=None, help="Role claim")
    token_parser.add_argument("--inactive", action="store_true", help="Mark the account as not active")
    token_parser.add_argument(
        "--hours", type=float, default=DEFAULT_TOKEN_TTL_HOURS,
        help=f"Token lifetime in hours (default {DEFAULT_TOKEN_TTL_HOURS})"
    )

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run a CLI command.

    Args:
        argv: Arguments without the program name (defaults to sys.argv[1:])

    Returns:
        Process exit status
    """
    args = build_parser().parse_args(argv)
    logger = setup_logging("distributor", log_level="DEBUG" if args.debug else None)
    settings = load_settings()

    if args.command == "serve":
        from distributor.main import main as serve_main
        serve_main(log_level="DEBUG" if args.debug else None)
        return 0

    if args.command == "unpack":
        try:
            count = unpack_archive(settings.archive_path, settings.content_dir)
        except (ContentServiceError, OSError) as e:
            logger.error(f"Unpack failed: {e}")
            return 1
        print(f"Unpacked {count} files into {settings.content_dir}")
        return 0

    token = create_access_token(
        subject=args.sub,
        username=args.username,
        secret=settings.jwt_secret,
        active=not args.inactive,
        role=args.role,
        expires_delta=timedelta(hours=args.hours),
    )
    print(token)
    return 0


if __name__ == "__main__":
    sys.exit(main())
