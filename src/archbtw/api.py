from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, List, Optional, TextIO

from .errors import FileTypeError, SourceOpenError
from .executor import Executor
from .lexer import TokenType, tokenize
from .state import MachineState


SOURCE_SUFFIX = ".archbtw"


@dataclass(frozen=True)
class RunOptions:
    stdin: Optional[TextIO] = None
    stdout: Optional[BinaryIO] = None
    trailing_newline: bool = True


@dataclass(frozen=True)
class RunResult:
    tokens: List[TokenType]
    state: MachineState
    steps: int


def run_tokens(tokens: List[TokenType], *, options: Optional[RunOptions] = None) -> RunResult:
    opts = options or RunOptions()
    stdout = opts.stdout if opts.stdout is not None else sys.stdout.buffer
    executor = Executor(tokens, stdin=opts.stdin, stdout=stdout)
    state = executor.run()
    if opts.trailing_newline:
        stdout.write(b"\n")
        stdout.flush()
    return RunResult(tokens=list(tokens), state=state, steps=executor.steps)


def run_string(source: str | bytes, *, options: Optional[RunOptions] = None) -> RunResult:
    return run_tokens(tokenize(source), options=options)


def read_source(path: str | Path) -> bytes:
    """
    Load a program file.

    The file is opened before its name is checked, so an unreadable path is
    always reported as unopenable whatever its extension.
    """
    p = Path(path)
    try:
        with p.open("rb") as f:
            if not str(path).endswith(SOURCE_SUFFIX):
                raise FileTypeError()
            return f.read()
    except OSError as exc:
        raise SourceOpenError() from exc


def run_file(path: str | Path, *, options: Optional[RunOptions] = None) -> RunResult:
    return run_string(read_source(path), options=options)
