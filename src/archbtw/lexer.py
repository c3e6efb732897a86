from __future__ import annotations

from enum import IntEnum
from typing import Dict, Iterable, List, Union


class TokenType(IntEnum):
    INPUT = 0     # i
    OUTPUT = 1    # btw
    SUB_CELL = 2  # not
    ADD_CELL = 3  # use
    SUB_PTR = 4   # notarch
    ADD_PTR = 5   # arch
    BEG_LOOP = 6  # [
    END_LOOP = 7  # ]
    INVALID = 8   # any other alphabetic word

    @property
    def keyword(self) -> str:
        return _SPELLING[self]


KEYWORDS: Dict[str, TokenType] = {
    'i': TokenType.INPUT,
    'btw': TokenType.OUTPUT,
    'not': TokenType.SUB_CELL,
    'use': TokenType.ADD_CELL,
    'notarch': TokenType.SUB_PTR,
    'arch': TokenType.ADD_PTR,
}

_SPELLING: Dict[TokenType, str] = {tok: word for word, tok in KEYWORDS.items()}
_SPELLING[TokenType.BEG_LOOP] = '['
_SPELLING[TokenType.END_LOOP] = ']'
_SPELLING[TokenType.INVALID] = 'invalid'

WHITESPACE = ' \t\n\r'
_EOF = ''


def _is_alpha(ch: str) -> bool:
    return ('a' <= ch <= 'z') or ('A' <= ch <= 'Z')


class _Cursor:
    """One-character look-ahead over the source; yields '' past the end."""

    def __init__(self, src: str):
        self.src = src
        self.position = -1
        self.current = _EOF
        self.advance()

    def advance(self) -> None:
        self.position += 1
        if self.position < len(self.src):
            self.current = self.src[self.position]
        else:
            self.current = _EOF


def _read_word(cur: _Cursor) -> TokenType:
    buf: List[str] = []
    while cur.current != _EOF and _is_alpha(cur.current):
        buf.append(cur.current)
        cur.advance()
    return KEYWORDS.get(''.join(buf), TokenType.INVALID)


def tokenize(source: Union[str, bytes]) -> List[TokenType]:
    """
    Split source text into opcodes.

    Whitespace separates words, alphabetic runs are matched whole against
    KEYWORDS, '[' and ']' are loop brackets, and every other character is
    dropped. Unknown words become TokenType.INVALID; the lexer never fails.
    """
    if isinstance(source, (bytes, bytearray)):
        source = bytes(source).decode('latin-1')

    cur = _Cursor(source)
    tokens: List[TokenType] = []
    while cur.current != _EOF:
        ch = cur.current
        if ch in WHITESPACE:
            cur.advance()
        elif _is_alpha(ch):
            tokens.append(_read_word(cur))
        elif ch == '[':
            tokens.append(TokenType.BEG_LOOP)
            cur.advance()
        elif ch == ']':
            tokens.append(TokenType.END_LOOP)
            cur.advance()
        else:
            cur.advance()
    return tokens


def render(tokens: Iterable[TokenType]) -> str:
    """Emit canonical source for a token list; tokenize(render(t)) == t."""
    return ' '.join(tok.keyword for tok in tokens)


def dump(tokens: Iterable[TokenType]) -> str:
    """Opcode listing in the form ``[ 3 3 1 ]``."""
    return '[ ' + ''.join(f'{int(tok)} ' for tok in tokens) + ']'
