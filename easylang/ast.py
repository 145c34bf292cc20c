"""Abstract Syntax Tree (AST) definitions for EasyLang.

The parser produces these nodes and the interpreter walks them. Nodes are
frozen dataclasses holding tuples, so a parsed Program can be shared and
re-run without being altered. Every node records the source position of
the token it was built from.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple


@dataclass(frozen=True)
class Position:
    line: int
    column: int


NO_POSITION = Position(1, 1)


@dataclass(frozen=True)
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass(frozen=True)
class Program(Node):
    body: Tuple[Node, ...]
    position: Position = NO_POSITION


@dataclass(frozen=True)
class VariableDeclaration(Node):
    identifier: str
    value: Node
    is_constant: bool = False
    position: Position = NO_POSITION


@dataclass(frozen=True)
class Assignment(Node):
    identifier: str
    value: Node
    position: Position = NO_POSITION


@dataclass(frozen=True)
class IfStatement(Node):
    condition: Node
    then_branch: Tuple[Node, ...]
    else_branch: Optional[Tuple[Node, ...]] = None
    position: Position = NO_POSITION


@dataclass(frozen=True)
class WhileLoop(Node):
    condition: Node
    body: Tuple[Node, ...]
    position: Position = NO_POSITION


@dataclass(frozen=True)
class ForLoop(Node):
    variable: str
    iterable: Node
    body: Tuple[Node, ...]
    position: Position = NO_POSITION


@dataclass(frozen=True)
class FunctionDeclaration(Node):
    name: str
    parameters: Tuple[str, ...]
    body: Tuple[Node, ...]
    style: str = 'system'  # 'system' or 'arrow'
    position: Position = NO_POSITION


@dataclass(frozen=True)
class ReturnStatement(Node):
    value: Optional[Node] = None
    position: Position = NO_POSITION


@dataclass(frozen=True)
class PrintStatement(Node):
    value: Node
    position: Position = NO_POSITION


@dataclass(frozen=True)
class InputStatement(Node):
    """`puchho "<prompt>"`; an expression despite the name."""
    prompt: str
    position: Position = NO_POSITION


@dataclass(frozen=True)
class BinaryExpression(Node):
    left: Node
    operator: str
    right: Node
    position: Position = NO_POSITION


@dataclass(frozen=True)
class UnaryExpression(Node):
    operator: str
    operand: Node
    position: Position = NO_POSITION


@dataclass(frozen=True)
class CallExpression(Node):
    callee: str
    arguments: Tuple[Node, ...]
    position: Position = NO_POSITION


@dataclass(frozen=True)
class Identifier(Node):
    name: str
    position: Position = NO_POSITION


@dataclass(frozen=True)
class Literal(Node):
    value: Any
    data_type: str  # 'number', 'string' or 'boolean'
    position: Position = NO_POSITION
