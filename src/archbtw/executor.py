from __future__ import annotations

import sys
from typing import BinaryIO, List, Optional, Sequence, TextIO

from .errors import UnbalancedLoopError, make_invalid_token_error
from .lexer import TokenType
from .state import MAX_CELL_SIZE, MachineState

# C isspace set, as used by formatted extraction
INPUT_WHITESPACE = frozenset(" \t\n\v\f\r")
# longest digit run that can fit a 32-bit int
MAX_INPUT_DIGITS = 10


class IntegerReader:
    """
    Pulls whitespace-separated decimal integers from a text stream.

    Mirrors formatted integer extraction: leading whitespace is skipped, an
    optional sign and a run of digits are consumed, and the character that
    stops the run is left for the next read. End of input or a token that is
    not a number yields 0 and leaves the reader failed; every later read
    yields 0 as well. A number too long for a 32-bit int saturates
    past the cell range and also fails the reader.
    """

    def __init__(self, stream: TextIO):
        self.stream = stream
        self.failed = False
        self._pending = ''

    def _peek(self) -> str:
        if not self._pending:
            self._pending = self.stream.read(1)
        return self._pending

    def _take(self) -> str:
        ch = self._peek()
        self._pending = ''
        return ch

    def read_int(self) -> int:
        if self.failed:
            return 0

        while self._peek() and self._peek() in INPUT_WHITESPACE:
            self._take()

        sign = ''
        if self._peek() in ('+', '-'):
            sign = self._take()
        digits: List[str] = []
        while self._peek() and '0' <= self._peek() <= '9':
            digits.append(self._take())

        if not digits:
            self.failed = True
            return 0
        significant = ''.join(digits).lstrip('0')
        if len(significant) > MAX_INPUT_DIGITS:
            # overflow saturates and fails the stream
            self.failed = True
            return -1 if sign == '-' else MAX_CELL_SIZE + 1
        value = int(significant or '0')
        return -value if sign == '-' else value


class Executor:
    """
    Runs a token list against a MachineState.

    Loops are matched on demand by scanning from the bracket being executed,
    so an unbalanced bracket only fails when execution reaches it.
    """

    def __init__(
        self,
        tokens: Sequence[TokenType],
        *,
        stdin: Optional[TextIO] = None,
        stdout: Optional[BinaryIO] = None,
        state: Optional[MachineState] = None,
    ):
        self.tokens = tuple(tokens)
        self.state = state if state is not None else MachineState()
        self.reader = IntegerReader(stdin if stdin is not None else sys.stdin)
        self.stdout = stdout if stdout is not None else sys.stdout.buffer
        self.pc = 0
        self.steps = 0

    @property
    def finished(self) -> bool:
        return self.pc >= len(self.tokens)

    def _skip_forward(self) -> None:
        depth = 1
        while depth:
            self.pc += 1
            if self.pc >= len(self.tokens):
                raise UnbalancedLoopError(index=self.pc)
            tok = self.tokens[self.pc]
            if tok == TokenType.BEG_LOOP:
                depth += 1
            elif tok == TokenType.END_LOOP:
                depth -= 1

    def _rewind(self) -> None:
        depth = 1
        while depth:
            if self.pc == 0:
                raise UnbalancedLoopError(index=self.pc)
            self.pc -= 1
            tok = self.tokens[self.pc]
            if tok == TokenType.END_LOOP:
                depth += 1
            elif tok == TokenType.BEG_LOOP:
                depth -= 1

    def step(self) -> bool:
        """Execute the token at pc. Returns False once the program has ended."""
        if self.finished:
            return False

        st = self.state
        tok = self.tokens[self.pc]
        if tok == TokenType.INPUT:
            st.store_input(self.reader.read_int())
        elif tok == TokenType.OUTPUT:
            # 256 truncates to a NUL byte
            self.stdout.write(bytes((st.cell & 0xFF,)))
            self.stdout.flush()
        elif tok == TokenType.SUB_CELL:
            st.sub_cell()
        elif tok == TokenType.ADD_CELL:
            st.add_cell()
        elif tok == TokenType.SUB_PTR:
            st.sub_ptr()
        elif tok == TokenType.ADD_PTR:
            st.add_ptr()
        elif tok == TokenType.BEG_LOOP:
            if st.cell == 0:
                self._skip_forward()
        elif tok == TokenType.END_LOOP:
            if st.cell != 0:
                self._rewind()
        else:
            raise make_invalid_token_error(token=tok.name, index=self.pc)

        self.pc += 1
        self.steps += 1
        return not self.finished

    def run(self) -> MachineState:
        while self.step():
            pass
        return self.state

