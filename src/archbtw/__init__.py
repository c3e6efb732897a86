from .api import RunOptions, RunResult, run_file, run_string, run_tokens
from .errors import ArchBtwError, InvalidTokenError, UnbalancedLoopError
from .executor import Executor
from .lexer import KEYWORDS, TokenType, render, tokenize
from .state import MachineState

__all__ = [
    'TokenType',
    'KEYWORDS',
    'tokenize',
    'render',
    'Executor',
    'MachineState',
    'RunOptions',
    'RunResult',
    'run_string',
    'run_file',
    'run_tokens',
    'ArchBtwError',
    'InvalidTokenError',
    'UnbalancedLoopError',
]
