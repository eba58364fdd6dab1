"""
Command line entry point for Mehl.

Usage:
    mehl run FILE [--no-prelude]
    mehl repl [--no-prelude]
    mehl lsp

`run` prints nothing but what the program prints; errors (including a
`panic`) go to stderr with exit status 1. The REPL keeps one session, so
definitions persist between lines, and reports errors without leaving.
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Optional, Sequence

from mehl import __version__
from mehl.config import get_log_level
from mehl.errors import MehlError, PanicError
from mehl.printer import format_value

logger = logging.getLogger(__name__)

PROMPT = "mehl> "


def _make_interpreter(args: argparse.Namespace):
    from mehl.interpreter import Interpreter
    return Interpreter(prelude=None if args.no_prelude else 'auto')


def _report(ex: MehlError) -> None:
    if isinstance(ex, PanicError):
        print(f"Panic: {format_value(ex.value)}", file=sys.stderr)
    else:
        print(f"Error: {ex}", file=sys.stderr)


def cmd_run(args: argparse.Namespace) -> int:
    try:
        itp = _make_interpreter(args)
        itp.eval_file(args.file)
    except MehlError as ex:
        _report(ex)
        return 1
    except OSError as ex:
        print(f"Error: {ex}", file=sys.stderr)
        return 1
    return 0


def cmd_repl(args: argparse.Namespace) -> int:
    itp = _make_interpreter(args)
    color = sys.stdout.isatty()
    print(f"Mehl {__version__}. Ctrl-D to exit.")
    while True:
        try:
            line = input(PROMPT)
        except EOFError:
            print()
            return 0
        except KeyboardInterrupt:
            print()
            continue
        if not line.strip():
            continue
        try:
            result = itp.eval(line)
        except MehlError as ex:
            _report(ex)
            continue
        print(format_value(result, color=color))


def cmd_lsp(args: argparse.Namespace) -> int:
    from mehl_lsp.server import start
    start()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="mehl", description="The Mehl language.")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: MEHL_LOG_LEVEL or WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run a .mehl file")
    run_parser.add_argument("file", help="Path to the .mehl file")
    run_parser.add_argument("--no-prelude", action="store_true", help="Start from the bare root scope")
    run_parser.set_defaults(handler=cmd_run)

    repl_parser = subparsers.add_parser("repl", help="Start an interactive session")
    repl_parser.add_argument("--no-prelude", action="store_true", help="Start from the bare root scope")
    repl_parser.set_defaults(handler=cmd_repl)

    lsp_parser = subparsers.add_parser("lsp", help="Start the language server on stdio")
    lsp_parser.set_defaults(handler=cmd_lsp)

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=(args.log_level or get_log_level()).upper(),
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    return args.handler(args)


if __name__ == "__main__":
    sys.exit(main())
