"""Command-line front door for lazypager.

Parses CLI options, reads the whole content stream (stdin or a file) and
decodes it before any terminal state is touched. Then dispatches into the
interactive pager runtime.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

from .buffer import LineBuffer, ingest
from .config import load_defaults
from .errors import EncodingError
from .highlight import DEFAULT_STYLE
from .runtime import run_pager
from .ui_theme import available_theme_names

EXIT_READ_ERROR = 1
EXIT_ENCODING_ERROR = 2
STDIN_PATH = "-"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lazypager",
        description="Page standard input (or a file) with incremental literal search.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=STDIN_PATH,
        help="File to page. Defaults to standard input ('-').",
    )
    parser.add_argument("--style", default=None, help=f"Pygments style for match colours (default: {DEFAULT_STYLE}).")
    parser.add_argument(
        "--theme",
        default=None,
        help=f"UI theme name ({', '.join(available_theme_names())}).",
    )
    parser.add_argument("--no-color", action="store_true", help="Disable color output.")
    parser.add_argument("--nopager", action="store_true", help="Print input directly without interactive paging.")
    parser.add_argument("--log-file", metavar="PATH", default=None, help="Write debug logs to PATH.")
    return parser


def configure_logging(log_file: str | None) -> None:
    """Attach a file handler when requested; the terminal belongs to the pager.

    Repeated calls in one process reuse the handlers already installed.
    """
    root = logging.getLogger("lazypager")
    if log_file is None:
        if not root.handlers:
            root.addHandler(logging.NullHandler())
        return
    path = os.path.abspath(log_file)
    if any(isinstance(h, logging.FileHandler) and h.baseFilename == path for h in root.handlers):
        return
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)


def _open_source(path: str) -> LineBuffer:
    if path == STDIN_PATH:
        if sys.stdin.isatty():
            raise SystemExit("lazypager: no input; pipe text in or pass a file path")
        return ingest(sys.stdin.buffer)
    with Path(path).open("rb") as handle:
        return ingest(handle)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments, load the content and launch the pager.

    Invalid UTF-8 aborts with exit status 2 before the terminal is touched; an
    unreadable file exits with status 1.
    """
    args = build_parser().parse_args(argv)
    configure_logging(args.log_file)
    defaults = load_defaults()

    try:
        buffer = _open_source(args.path)
    except EncodingError as exc:
        sys.stderr.write(f"lazypager: {exc}\n")
        raise SystemExit(EXIT_ENCODING_ERROR) from exc
    except OSError as exc:
        sys.stderr.write(f"lazypager: cannot read {args.path}: {exc.strerror or exc}\n")
        raise SystemExit(EXIT_READ_ERROR) from exc

    run_pager(
        buffer,
        style=args.style or defaults.style,
        theme_name=args.theme or defaults.theme,
        no_color=args.no_color,
        nopager=args.nopager,
    )


if __name__ == "__main__":
    main()
