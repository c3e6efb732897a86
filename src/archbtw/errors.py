from __future__ import annotations

from dataclasses import dataclass


ERROR_PREFIX = "ERR: "


@dataclass
class ArchBtwError(Exception):
    message: str

    def __str__(self) -> str:
        return self.message


# ----- driver errors -----

@dataclass
class UsageError(ArchBtwError):
    message: str = "Usage: iusearchbtw <file.archbtw>"


@dataclass
class SourceOpenError(ArchBtwError):
    message: str = "Failed to open source file."


@dataclass
class FileTypeError(ArchBtwError):
    message: str = "Invalid file type."


# ----- runtime errors -----

@dataclass
class ArchBtwRuntimeError(ArchBtwError):
    index: int = -1  # token index being executed when the error was raised


@dataclass
class UnbalancedLoopError(ArchBtwRuntimeError):
    message: str = "Loop went out of scope."


@dataclass
class InvalidTokenError(ArchBtwRuntimeError):
    token: str = "INVALID"


def make_invalid_token_error(*, token: str, index: int) -> InvalidTokenError:
    return InvalidTokenError(message=f"Invalid Token `{token}`", index=index, token=token)


def format_error(err: ArchBtwError) -> str:
    """Render an error as the single-line ``ERR: ...`` diagnostic."""
    return f"{ERROR_PREFIX}{err.message}"
