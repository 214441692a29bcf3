"""pyfront CLI entry point.

Usage:
    pyfront tokenize <file>     Display the token stream
    pyfront parse <file>        Display the syntax tree and diagnostics
    pyfront analyze <file>      Print the JSON analysis envelope
    pyfront health              Print the JSON health metadata

Pass - as <file> to read from stdin. Add -v/--verbose for debug logging,
or set PYFRONT_LOG_LEVEL.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from pathlib import Path

from pyfront.diagnostics import Diagnostic
from pyfront.lexer.lexer import Lexer
from pyfront.service import analyze, health

logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    args = list(argv if argv is not None else sys.argv[1:])

    verbose = False
    for flag in ("-v", "--verbose"):
        while flag in args:
            args.remove(flag)
            verbose = True
    _configure_logging(verbose)

    if len(args) < 1:
        print(__doc__.strip())
        return 1

    command = args[0]

    if command in ("--help", "-h"):
        print(__doc__.strip())
        return 0

    if command == "--version":
        from pyfront import __version__
        print(f"pyfront {__version__}")
        return 0

    if command == "health":
        print(json.dumps(health(), indent=2))
        return 0

    if command not in ("tokenize", "parse", "analyze"):
        print(f"Error: unknown command '{command}'", file=sys.stderr)
        print(__doc__.strip())
        return 1

    if len(args) < 2:
        print(f"Error: command '{command}' requires a file argument", file=sys.stderr)
        return 1

    source = _read_source(args[1])
    if source is None:
        return 1

    if command == "tokenize":
        return _cmd_tokenize(source)
    elif command == "parse":
        return _cmd_parse(source)
    else:
        return _cmd_analyze(source)


def _log_level(verbose: bool) -> int:
    """-v wins, then PYFRONT_LOG_LEVEL; unknown names fall back to WARNING."""
    level_name = "DEBUG" if verbose else os.environ.get("PYFRONT_LOG_LEVEL", "WARNING")
    level = logging.getLevelName(level_name.upper())
    return level if isinstance(level, int) else logging.WARNING


def _configure_logging(verbose: bool) -> None:
    level = _log_level(verbose)
    logging.getLogger("pyfront").setLevel(level)
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _read_source(path: str) -> str | None:
    if path == "-":
        return sys.stdin.read()
    filepath = Path(path)
    if not filepath.exists():
        print(f"Error: file not found: {filepath}", file=sys.stderr)
        return None
    logger.debug("reading %s", filepath)
    try:
        return filepath.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {filepath}: {e}", file=sys.stderr)
        return None


def _cmd_tokenize(source: str) -> int:
    """Display the token stream, then any lexical errors."""
    result = Lexer(source).tokenize()
    for tok in result.tokens:
        print(tok)

    _print_diagnostics("lexical", [Diagnostic.from_error_token(t) for t in result.errors])
    return 1 if result.errors else 0


def _cmd_parse(source: str) -> int:
    """Display the syntax tree followed by both diagnostic lists."""
    analysis = analyze(source)

    if analysis.ast is not None:
        print(analysis.ast.pretty())
    else:
        print("(no statements)")

    _print_diagnostics("lexical", analysis.lexical_errors)
    _print_diagnostics("syntax", analysis.syntax_errors)
    return 1 if analysis.has_errors else 0


def _cmd_analyze(source: str) -> int:
    analysis = analyze(source)
    print(json.dumps(analysis.to_response(), indent=2))
    return 1 if analysis.has_errors else 0


def _print_diagnostics(channel: str, diagnostics: list[Diagnostic]) -> None:
    if not diagnostics:
        return
    print()
    print(f"{len(diagnostics)} {channel} error(s):")
    for d in diagnostics:
        print(f"  {d}")
        print(f"    hint: {d.suggestion}")


if __name__ == "__main__":
    sys.exit(main())
