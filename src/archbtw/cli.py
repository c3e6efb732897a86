from __future__ import annotations

import argparse
import sys
import time
from typing import List, Optional

from .api import RunOptions, read_source, run_tokens
from .errors import ArchBtwError, UsageError, format_error
from .lexer import dump, tokenize


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="iusearchbtw",
        description="Interpreter for .archbtw tape programs.",
        add_help=False,
        allow_abbrev=False,
    )
    parser.add_argument("--tokens", action="store_true", help="print the lexed opcodes to stderr before running")
    parser.add_argument("--stats", action="store_true", help="print timings and step count to stderr after running")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    # anything that is not one of the flags counts as a path, so a wrong
    # count gets the fixed usage diagnostic
    args, files = _build_parser().parse_known_args(argv)

    try:
        if len(files) != 1:
            raise UsageError()
        source = read_source(files[0])

        start = time.perf_counter()
        tokens = tokenize(source)
        lexed = time.perf_counter()

        if args.tokens:
            print(dump(tokens), file=sys.stderr)

        result = run_tokens(tokens, options=RunOptions(stdin=sys.stdin, stdout=sys.stdout.buffer))
        end = time.perf_counter()
    except ArchBtwError as e:
        sys.stdout.flush()
        print(format_error(e), file=sys.stderr)
        return 1

    if args.stats:
        print(f"Lexing took {(lexed - start) * 1000:.2f} ms ({len(tokens)} tokens)", file=sys.stderr)
        print(f"Execution took {(end - lexed) * 1000:.2f} ms ({result.steps} steps)", file=sys.stderr)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
