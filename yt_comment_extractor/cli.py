"""
Command-line entry point.

    yt-comment-extractor run --api-key KEY VIDEO_ID [VIDEO_ID ...]
    yt-comment-extractor version

Exit codes follow sysexits.h: 65 for malformed input, 74 for I/O failures
and 70 for anything else that goes wrong while extracting.
"""

import argparse
import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from . import constants as const
from .client import CommentExtractor
from .config import ExtractorConfig
from .exceptions import CommentExtractorError

logger = logging.getLogger(__name__)

PROG = "yt-comment-extractor"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog=PROG, description="Extract comments of YouTube videos and export them to xlsx.")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("version", help="Print version info and exit")

    run = subparsers.add_parser("run", help="Extract comments of YouTube videos and export")
    run.add_argument("--api-key", help=f"YouTube Data API key (default: ${const.API_KEY_ENV_VAR})")
    run.add_argument("video_ids", nargs="+", metavar="video-id", help="Video IDs, one worksheet each")
    run.add_argument("-o", "--output", type=Path, default=Path(const.DEFAULT_OUTPUT_PATH), help="Output workbook (default: %(default)s)")
    run.add_argument("--timeout", type=float, default=const.DEFAULT_TIMEOUT, help="Per-request timeout in seconds (default: %(default)s)")
    run.add_argument("--isolate-failures", action="store_true", help="Skip a failing video instead of aborting the run")
    run.add_argument("--fail-on-http-error", action="store_true", help="Treat an HTTP error status from the API as a failure instead of an empty page")
    run.add_argument("--insecure", action="store_true", help="Do not verify TLS certificates")
    run.add_argument("--log-dir", type=Path, help=f"Also write a daily rotated {const.LOG_FILE_NAME} to this directory")
    run.add_argument("-v", "--verbose", action="count", default=0, help="Increase log verbosity (-v info, -vv debug)")
    return parser


def setup_logging(verbosity: int = 0, log_dir: Optional[Path] = None) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG

    handlers = [logging.StreamHandler()]
    if log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        handlers.append(
            logging.handlers.TimedRotatingFileHandler(log_dir / const.LOG_FILE_NAME, when="midnight", encoding="utf-8")
        )

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        handlers=handlers,
        force=True,
    )


def run(args: argparse.Namespace) -> int:
    try:
        setup_logging(args.verbose, args.log_dir)
    except OSError as e:
        print(f"Could not create directory for saving log.\nError: {e}", file=sys.stderr)
        return const.EX_IOERR

    if any(not video_id for video_id in args.video_ids):
        print("Video IDs must not be empty.", file=sys.stderr)
        return const.EX_USAGE

    try:
        config = ExtractorConfig.from_env(
            api_key=args.api_key,
            output_path=args.output,
            timeout=args.timeout,
            verify_ssl=not args.insecure,
            isolate_failures=args.isolate_failures,
            fail_on_http_error=args.fail_on_http_error,
        )
    except ValueError as e:
        print(e, file=sys.stderr)
        return const.EX_USAGE

    try:
        with CommentExtractor(config) as extractor:
            extractor.extract(args.video_ids)
    except CommentExtractorError as e:
        print(e, file=sys.stderr)
        return e.exit_code
    except Exception as e:
        logger.exception("Unexpected error during extraction")
        print(e, file=sys.stderr)
        return const.EX_SOFTWARE

    if extractor.failures:
        print(f"{len(extractor.failures)} video(s) failed: {', '.join(extractor.failures)}", file=sys.stderr)
        return next(iter(extractor.failures.values())).exit_code
    return const.EX_OK


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    if args.command == "version":
        print(f"{PROG} {__version__}")
        return const.EX_OK
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
