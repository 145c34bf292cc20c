"""Recursive-descent parser for EasyLang.

The parser consumes the token list produced by `easylang.lexer.tokenize`
and builds the AST defined in `easylang.ast`. Statements are chosen by
their first token; expressions are parsed by one method per precedence
level, lowest first:

    ya -> aur -> == != -> < > <= >= -> + - -> * / % -> ** -> nahi, unary - -> call -> primary

`**` is right-associative, every other binary operator is
left-associative. Blocks are either an indented run of statements
(NEWLINE INDENT ... DEDENT) or, for arrow-style functions, everything
between `{` and `}`.

`parse_program` is the public entry point for source text; `parse` takes
an already tokenized program.
"""

from __future__ import annotations

from typing import List, Tuple

from .ast import (
    Program, Node, Position, VariableDeclaration, Assignment, IfStatement,
    WhileLoop, ForLoop, FunctionDeclaration, ReturnStatement, PrintStatement,
    InputStatement, BinaryExpression, UnaryExpression, CallExpression,
    Identifier, Literal,
)
from .errors import EasyLangError
from .lexer import tokenize
from .tokens import Token, TokenType, STATEMENT_KEYWORDS


def _pos(token: Token) -> Position:
    return Position(token.line, token.column)


class Parser:
    def __init__(self, tokens: List[Token]):
        if not tokens or tokens[-1].type != TokenType.EOF:
            line, column = (tokens[-1].line, tokens[-1].column) if tokens else (1, 1)
            tokens = list(tokens) + [Token(TokenType.EOF, '', line, column)]
        self.tokens = tokens
        self.pos = 0

    # Token cursor helpers
    def peek(self, offset: int = 0) -> Token:
        index = min(self.pos + offset, len(self.tokens) - 1)
        return self.tokens[index]

    def previous(self) -> Token:
        return self.tokens[self.pos - 1]

    def is_at_end(self) -> bool:
        return self.peek().type == TokenType.EOF

    def check(self, *types: TokenType) -> bool:
        return self.peek().type in types

    def advance(self) -> Token:
        if not self.is_at_end():
            self.pos += 1
        return self.previous()

    def match(self, *types: TokenType) -> bool:
        if self.check(*types) and not self.is_at_end():
            self.advance()
            return True
        return False

    def consume(self, token_type: TokenType, message: str) -> Token:
        if self.check(token_type):
            return self.advance()
        token = self.peek()
        raise EasyLangError(message, token.line, token.column)

    # Program and statements
    def parse_program(self) -> Program:
        statements: List[Node] = []
        while not self.is_at_end():
            if self.match(TokenType.NEWLINE):
                continue
            statements.append(self.parse_statement())
        return Program(tuple(statements), Position(1, 1))

    def diagnose(self) -> List[EasyLangError]:
        """Parse the whole token stream and collect every syntax error.

        After each error the parser resynchronizes at the next line or
        statement keyword, so one mistake does not hide the ones after it.
        Recovery happens only here, at the outermost level; a mistake inside
        a block resumes parsing on the following line of that block.
        """
        errors: List[EasyLangError] = []
        while not self.is_at_end():
            if self.match(TokenType.NEWLINE, TokenType.INDENT, TokenType.DEDENT):
                continue
            try:
                self.parse_statement()
            except EasyLangError as e:
                errors.append(e)
                self.synchronize()
        return errors

    def parse_statement(self) -> Node:
        token = self.peek()
        if self.match(TokenType.BANAO):
            return self.parse_variable_declaration(token, is_constant=False)
        if self.match(TokenType.SADA):
            return self.parse_variable_declaration(token, is_constant=True)
        if self.match(TokenType.AGAR):
            return self.parse_if_statement(token)
        if self.match(TokenType.DOHRANA):
            return self.parse_for_loop(token)
        if self.match(TokenType.JAB_TAK):
            return self.parse_while_loop(token)
        if self.match(TokenType.SYSTEM):
            name_token = self.consume(TokenType.IDENTIFIER, 'Expected function name')
            return self.parse_function_declaration('system', name_token)
        if self.match(TokenType.RETURN):
            return self.parse_return_statement(token)
        if self.match(TokenType.LIKHO):
            return PrintStatement(self.parse_expression(), _pos(token))
        if token.type == TokenType.IDENTIFIER and self.peek(1).type == TokenType.KA_SYSTEM:
            self.advance()
            self.advance()
            return self.parse_function_declaration('arrow', token)
        return self.parse_assignment_or_expression()

    def synchronize(self):
        self.advance()
        while not self.is_at_end():
            if self.previous().type == TokenType.NEWLINE:
                return
            if self.peek().type in STATEMENT_KEYWORDS:
                return
            self.advance()

    def parse_variable_declaration(self, keyword: Token, is_constant: bool) -> VariableDeclaration:
        name = self.consume(TokenType.IDENTIFIER, f'Expected variable name after {keyword.value}')
        self.consume(TokenType.ASSIGN, 'Expected "=" after variable name')
        value = self.parse_expression()
        return VariableDeclaration(name.value, value, is_constant, _pos(keyword))

    def parse_if_statement(self, keyword: Token) -> IfStatement:
        condition = self.parse_expression()
        self.consume(TokenType.COLON, 'Expected ":" after if condition')
        self.consume_newline_and_indent()
        then_branch = self.parse_block()
        else_branch = None
        if self.match(TokenType.WARNA):
            self.consume(TokenType.COLON, 'Expected ":" after warna')
            self.consume_newline_and_indent()
            else_branch = self.parse_block()
        return IfStatement(condition, then_branch, else_branch, _pos(keyword))

    def parse_for_loop(self, keyword: Token) -> ForLoop:
        variable = self.consume(TokenType.IDENTIFIER, 'Expected variable name in for loop')
        self.consume(TokenType.IN, 'Expected "in" after for loop variable')
        iterable = self.parse_expression()
        self.consume(TokenType.COLON, 'Expected ":" after for loop expression')
        self.consume_newline_and_indent()
        body = self.parse_block()
        return ForLoop(variable.value, iterable, body, _pos(keyword))

    def parse_while_loop(self, keyword: Token) -> WhileLoop:
        condition = self.parse_expression()
        self.consume(TokenType.COLON, 'Expected ":" after while condition')
        self.consume_newline_and_indent()
        body = self.parse_block()
        return WhileLoop(condition, body, _pos(keyword))

    def parse_function_declaration(self, style: str, name_token: Token) -> FunctionDeclaration:
        if style == 'arrow':
            # `add ka system = (a, b) { ... }` is accepted as well
            self.match(TokenType.ASSIGN)
        self.consume(TokenType.LEFT_PAREN, 'Expected "(" after function name')
        parameters: List[str] = []
        if not self.check(TokenType.RIGHT_PAREN):
            parameters.append(self.consume(TokenType.IDENTIFIER, 'Expected parameter name').value)
            while self.match(TokenType.COMMA):
                parameters.append(self.consume(TokenType.IDENTIFIER, 'Expected parameter name').value)
        self.consume(TokenType.RIGHT_PAREN, 'Expected ")" after parameters')
        if style == 'system':
            self.consume(TokenType.COLON, 'Expected ":" after function signature')
            self.consume_newline_and_indent()
            body = self.parse_block()
        else:
            self.consume(TokenType.LEFT_BRACE, 'Expected "{" after arrow function signature')
            body = self.parse_block(arrow=True)
            self.consume(TokenType.RIGHT_BRACE, 'Expected "}" after arrow function body')
        return FunctionDeclaration(name_token.value, tuple(parameters), body, style, _pos(name_token))

    def parse_return_statement(self, keyword: Token) -> ReturnStatement:
        if self.check(TokenType.NEWLINE, TokenType.DEDENT, TokenType.RIGHT_BRACE, TokenType.EOF):
            return ReturnStatement(None, _pos(keyword))
        return ReturnStatement(self.parse_expression(), _pos(keyword))

    def parse_assignment_or_expression(self) -> Node:
        expr = self.parse_expression()
        if isinstance(expr, Identifier) and self.match(TokenType.ASSIGN):
            value = self.parse_expression()
            return Assignment(expr.name, value, expr.position)
        return expr

    # Blocks
    def consume_newline_and_indent(self):
        self.consume(TokenType.NEWLINE, 'Expected newline')
        while self.match(TokenType.NEWLINE):
            pass
        if not self.match(TokenType.INDENT):
            token = self.peek()
            raise EasyLangError('Expected indentation', token.line, token.column)

    def parse_block(self, arrow: bool = False) -> Tuple[Node, ...]:
        statements: List[Node] = []
        if arrow:
            # Layout inside braces only separates statements.
            while not self.check(TokenType.RIGHT_BRACE, TokenType.EOF):
                if self.match(TokenType.NEWLINE, TokenType.INDENT, TokenType.DEDENT):
                    continue
                statements.append(self.parse_statement())
            return tuple(statements)
        while not self.check(TokenType.DEDENT, TokenType.EOF):
            if self.match(TokenType.NEWLINE):
                continue
            statements.append(self.parse_statement())
        self.match(TokenType.DEDENT)
        return tuple(statements)

    # Expression parsing
    def parse_expression(self) -> Node:
        return self.parse_logical_or()

    def parse_binary(self, operand, *operators: TokenType) -> Node:
        node = operand()
        while self.match(*operators):
            operator = self.previous().value
            right = operand()
            node = BinaryExpression(node, operator, right, node.position)
        return node

    def parse_logical_or(self) -> Node:
        return self.parse_binary(self.parse_logical_and, TokenType.YA)

    def parse_logical_and(self) -> Node:
        return self.parse_binary(self.parse_equality, TokenType.AUR)

    def parse_equality(self) -> Node:
        return self.parse_binary(self.parse_comparison, TokenType.EQUAL, TokenType.NOT_EQUAL)

    def parse_comparison(self) -> Node:
        return self.parse_binary(
            self.parse_term,
            TokenType.LESS_THAN, TokenType.GREATER_THAN,
            TokenType.LESS_EQUAL, TokenType.GREATER_EQUAL,
        )

    def parse_term(self) -> Node:
        return self.parse_binary(self.parse_factor, TokenType.PLUS, TokenType.MINUS)

    def parse_factor(self) -> Node:
        return self.parse_binary(self.parse_power, TokenType.MULTIPLY, TokenType.DIVIDE, TokenType.MODULO)

    def parse_power(self) -> Node:
        node = self.parse_unary()
        if self.match(TokenType.POWER):
            right = self.parse_power()
            return BinaryExpression(node, '**', right, node.position)
        return node

    def parse_unary(self) -> Node:
        if self.match(TokenType.NAHI, TokenType.MINUS):
            op_token = self.previous()
            operand = self.parse_unary()
            return UnaryExpression(op_token.value, operand, _pos(op_token))
        return self.parse_call()

    def parse_call(self) -> Node:
        node = self.parse_primary()
        while self.check(TokenType.LEFT_PAREN):
            paren = self.advance()
            if not isinstance(node, Identifier):
                raise EasyLangError('Only named functions can be called', paren.line, paren.column)
            args: List[Node] = []
            if not self.check(TokenType.RIGHT_PAREN):
                args.append(self.parse_expression())
                while self.match(TokenType.COMMA):
                    args.append(self.parse_expression())
            self.consume(TokenType.RIGHT_PAREN, 'Expected ")" after arguments')
            node = CallExpression(node.name, tuple(args), node.position)
        return node

    def parse_primary(self) -> Node:
        token = self.peek()
        if self.match(TokenType.SACH):
            return Literal(True, 'boolean', _pos(token))
        if self.match(TokenType.JHOOTH):
            return Literal(False, 'boolean', _pos(token))
        if self.match(TokenType.NUMBER):
            return Literal(float(token.value), 'number', _pos(token))
        if self.match(TokenType.STRING):
            return Literal(token.value, 'string', _pos(token))
        if self.match(TokenType.PUCHHO):
            prompt = self.consume(TokenType.STRING, 'Expected string after puchho')
            return InputStatement(prompt.value, _pos(token))
        if self.match(TokenType.RANGE):
            self.consume(TokenType.LEFT_PAREN, 'Expected "(" after range')
            arg = self.parse_expression()
            self.consume(TokenType.RIGHT_PAREN, 'Expected ")" after range argument')
            return CallExpression('range', (arg,), _pos(token))
        if self.match(TokenType.IDENTIFIER):
            return Identifier(token.value, _pos(token))
        if self.match(TokenType.LEFT_PAREN):
            expr = self.parse_expression()
            self.consume(TokenType.RIGHT_PAREN, 'Expected ")" after expression')
            return expr
        raise EasyLangError('Expected expression', token.line, token.column)


def parse(tokens: List[Token]) -> Program:
    """Build a Program from a token list produced by `tokenize`."""
    return Parser(tokens).parse_program()


def parse_program(source: str) -> Program:
    """Tokenize and parse EasyLang source text into a Program AST."""
    return parse(tokenize(source))
