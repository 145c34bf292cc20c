"""Tokenizer for EasyLang.

The lexer performs a single left-to-right scan over the source and emits
a flat list of tokens. Block structure is made explicit with INDENT and
DEDENT tokens, in the manner of Python: the leading whitespace of every
non-blank line is measured (a space counts 1, a tab counts 4) and
compared against a stack of open indentation widths. Blank lines and
comment-only lines never touch the stack.
"""

from __future__ import annotations

from typing import List

from .errors import EasyLangError
from .tokens import (
    Token, TokenType, KEYWORDS, COMPOUND_KEYWORDS,
    TWO_CHAR_OPERATORS, SINGLE_CHAR_OPERATORS,
)

TAB_WIDTH = 4


def _is_alpha(c: str) -> bool:
    return ('a' <= c <= 'z') or ('A' <= c <= 'Z') or c == '_'


def _is_digit(c: str) -> bool:
    return '0' <= c <= '9'


def _is_alnum(c: str) -> bool:
    return _is_alpha(c) or _is_digit(c)


def tokenize(source: str) -> List[Token]:
    """Convert EasyLang source text into a list of tokens.

    Raises EasyLangError on an unrecognized character, an unterminated
    string literal, or a dedent that does not land on an enclosing
    indentation level. The returned list always ends with the DEDENT
    tokens needed to close open blocks followed by a single EOF.
    """
    tokens: List[Token] = []
    indent_stack: List[int] = [0]
    i = 0
    line = 1
    col = 1
    length = len(source)
    at_line_start = True

    def advance(n: int = 1):
        nonlocal i, col, line
        for _ in range(n):
            if i < length and source[i] == '\n':
                line += 1
                col = 1
            else:
                col += 1
            i += 1

    def peek(offset: int = 0) -> str:
        j = i + offset
        return source[j] if j < length else ''

    def add(token_type: TokenType, value: str, tok_line: int, tok_col: int):
        tokens.append(Token(token_type, value, tok_line, tok_col))

    def handle_indentation():
        width = 0
        j = i
        while j < length and source[j] in ' \t':
            width += 1 if source[j] == ' ' else TAB_WIDTH
            j += 1
        nxt = source[j] if j < length else ''
        advance(j - i)
        if nxt in ('', '\n', '\r', '#'):
            # blank or comment-only line
            return
        top = indent_stack[-1]
        if width > top:
            indent_stack.append(width)
            add(TokenType.INDENT, ' ' * width, line, col)
        elif width < top:
            while len(indent_stack) > 1 and indent_stack[-1] > width:
                indent_stack.pop()
                add(TokenType.DEDENT, '', line, col)
            if indent_stack[-1] != width:
                raise EasyLangError('Indentation error', line, col)

    while i < length:
        if at_line_start:
            at_line_start = False
            handle_indentation()
            continue
        c = source[i]
        if c in ' \t\r':
            advance()
            continue
        if c == '\n':
            add(TokenType.NEWLINE, '\n', line, col)
            advance()
            at_line_start = True
            continue
        if c == '#':
            while i < length and source[i] != '\n':
                advance()
            continue
        start_line, start_col = line, col
        # String literal: no escapes, may span lines
        if c == '"':
            advance()
            start_i = i
            while i < length and source[i] != '"':
                advance()
            if i >= length:
                raise EasyLangError('Unterminated string', start_line, start_col)
            value = source[start_i:i]
            advance()  # closing quote
            add(TokenType.STRING, value, start_line, start_col)
            continue
        if _is_digit(c):
            start_i = i
            while _is_digit(peek()):
                advance()
            # the dot belongs to the number only when a digit follows it
            if peek() == '.' and _is_digit(peek(1)):
                advance()
                while _is_digit(peek()):
                    advance()
            add(TokenType.NUMBER, source[start_i:i], start_line, start_col)
            continue
        if _is_alpha(c):
            start_i = i
            while _is_alnum(peek()):
                advance()
            text = source[start_i:i]
            compound = COMPOUND_KEYWORDS.get(text)
            if compound is not None and peek() == ' ':
                second, merged_type = compound
                end = i + 1 + len(second)
                if source[i + 1:end] == second and not (end < length and _is_alnum(source[end])):
                    advance(1 + len(second))
                    add(merged_type, f"{text} {second}", start_line, start_col)
                    continue
            add(KEYWORDS.get(text, TokenType.IDENTIFIER), text, start_line, start_col)
            continue
        pair = source[i:i + 2]
        if pair in TWO_CHAR_OPERATORS:
            advance(2)
            add(TWO_CHAR_OPERATORS[pair], pair, start_line, start_col)
            continue
        if c in SINGLE_CHAR_OPERATORS:
            advance()
            add(SINGLE_CHAR_OPERATORS[c], c, start_line, start_col)
            continue
        raise EasyLangError(f"Unexpected character: {c}", start_line, start_col)

    while len(indent_stack) > 1:
        indent_stack.pop()
        add(TokenType.DEDENT, '', line, col)
    add(TokenType.EOF, '', line, col)
    return tokens
