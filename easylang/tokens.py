"""Token definitions for the EasyLang tokenizer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict


class TokenType(Enum):
    # Keywords
    BANAO = 'BANAO'            # variable declaration
    SADA = 'SADA'              # constant declaration
    AGAR = 'AGAR'              # if
    WARNA = 'WARNA'            # else
    DOHRANA = 'DOHRANA'        # for
    JAB_TAK = 'JAB_TAK'        # while
    SYSTEM = 'SYSTEM'          # function (system style)
    KA_SYSTEM = 'KA_SYSTEM'    # function (arrow style marker)
    RETURN = 'RETURN'
    LIKHO = 'LIKHO'            # print
    PUCHHO = 'PUCHHO'          # input
    RANGE = 'RANGE'
    IN = 'IN'
    SACH = 'SACH'              # true
    JHOOTH = 'JHOOTH'          # false
    AUR = 'AUR'                # and
    YA = 'YA'                  # or
    NAHI = 'NAHI'              # not

    IDENTIFIER = 'IDENTIFIER'
    NUMBER = 'NUMBER'
    STRING = 'STRING'

    PLUS = '+'
    MINUS = '-'
    MULTIPLY = '*'
    DIVIDE = '/'
    MODULO = '%'
    POWER = '**'
    EQUAL = '=='
    NOT_EQUAL = '!='
    LESS_THAN = '<'
    GREATER_THAN = '>'
    LESS_EQUAL = '<='
    GREATER_EQUAL = '>='
    ASSIGN = '='
    LEFT_PAREN = '('
    RIGHT_PAREN = ')'
    LEFT_BRACE = '{'
    RIGHT_BRACE = '}'
    COMMA = ','
    COLON = ':'

    # Structural
    NEWLINE = 'NEWLINE'
    INDENT = 'INDENT'
    DEDENT = 'DEDENT'
    EOF = 'EOF'


@dataclass(frozen=True)
class Token:
    type: TokenType
    value: str
    line: int
    column: int

    def __repr__(self) -> str:
        return f"{self.type.name}({self.value!r}) at {self.line}:{self.column}"


KEYWORDS: Dict[str, TokenType] = {
    'banao': TokenType.BANAO,
    'sada': TokenType.SADA,
    'agar': TokenType.AGAR,
    'warna': TokenType.WARNA,
    'dohrana': TokenType.DOHRANA,
    # halves of the compound keywords, when they appear on their own
    'jab': TokenType.JAB_TAK,
    'tak': TokenType.JAB_TAK,
    'ka': TokenType.KA_SYSTEM,
    'system': TokenType.SYSTEM,
    'return': TokenType.RETURN,
    'likho': TokenType.LIKHO,
    'puchho': TokenType.PUCHHO,
    'range': TokenType.RANGE,
    'in': TokenType.IN,
    'sach': TokenType.SACH,
    'jhooth': TokenType.JHOOTH,
    'aur': TokenType.AUR,
    'ya': TokenType.YA,
    'nahi': TokenType.NAHI,
}

# first word -> (second word, merged token type)
COMPOUND_KEYWORDS = {
    'jab': ('tak', TokenType.JAB_TAK),
    'ka': ('system', TokenType.KA_SYSTEM),
}

TWO_CHAR_OPERATORS = {
    '**': TokenType.POWER,
    '==': TokenType.EQUAL,
    '!=': TokenType.NOT_EQUAL,
    '<=': TokenType.LESS_EQUAL,
    '>=': TokenType.GREATER_EQUAL,
}

SINGLE_CHAR_OPERATORS = {
    '+': TokenType.PLUS,
    '-': TokenType.MINUS,
    '*': TokenType.MULTIPLY,
    '/': TokenType.DIVIDE,
    '%': TokenType.MODULO,
    '<': TokenType.LESS_THAN,
    '>': TokenType.GREATER_THAN,
    '=': TokenType.ASSIGN,
    '(': TokenType.LEFT_PAREN,
    ')': TokenType.RIGHT_PAREN,
    '{': TokenType.LEFT_BRACE,
    '}': TokenType.RIGHT_BRACE,
    ',': TokenType.COMMA,
    ':': TokenType.COLON,
}

# Tokens that begin a statement; used by the parser to resynchronize.
STATEMENT_KEYWORDS = frozenset({
    TokenType.BANAO,
    TokenType.SADA,
    TokenType.AGAR,
    TokenType.DOHRANA,
    TokenType.JAB_TAK,
    TokenType.SYSTEM,
    TokenType.RETURN,
    TokenType.LIKHO,
})
