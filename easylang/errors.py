from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class EasyLangError(Exception):
    """Positioned diagnostic raised by the tokenizer and the parser."""
    def __init__(self, message: str, line: int, column: int, kind: str = 'SyntaxError'):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column
        self.kind = kind

    def __str__(self) -> str:
        return f"{self.kind} at line {self.line}:{self.column}: {self.message}"


class EasyLangRuntimeError(Exception):
    """Unpositioned failure raised while evaluating a program."""
    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


@dataclass(frozen=True)
class Completion:
    """Outcome of executing a statement.

    `kind` is one of 'normal', 'return' or 'error'. A return completion
    carries the returned value; an error completion carries the exception
    that stopped execution so it can be re-raised or reported.
    """
    kind: str
    value: Any = None
    error: Optional[Exception] = None

    @staticmethod
    def returned(value: Any) -> 'Completion':
        return Completion('return', value=value)

    @staticmethod
    def failed(error: Exception) -> 'Completion':
        return Completion('error', error=error)

    @property
    def is_normal(self) -> bool:
        return self.kind == 'normal'

    @property
    def is_return(self) -> bool:
        return self.kind == 'return'

    @property
    def is_error(self) -> bool:
        return self.kind == 'error'


NORMAL = Completion('normal')
