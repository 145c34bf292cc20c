"""JSON serialization/deserialization for the EasyLang AST.

This module converts between AST dataclasses and plain Python dict/list
structures suitable for JSON encoding. Every node carries its `type` name
and source position, so `ast_from_obj(ast_to_obj(program))` rebuilds an
equal Program.
"""

from __future__ import annotations

from typing import Any, Dict, List

from .ast import (
    Program,
    Position,
    VariableDeclaration,
    Assignment,
    IfStatement,
    WhileLoop,
    ForLoop,
    FunctionDeclaration,
    ReturnStatement,
    PrintStatement,
    InputStatement,
    BinaryExpression,
    UnaryExpression,
    CallExpression,
    Identifier,
    Literal,
    NO_POSITION,
)


def _block_to_obj(statements) -> List[Any]:
    return [ast_to_obj(s) for s in statements]


def _block_from_obj(items) -> tuple:
    return tuple(ast_from_obj(s) for s in items)


def ast_to_obj(node: Any) -> Any:
    if node is None:
        return None

    if isinstance(node, Program):
        obj: Dict[str, Any] = {"type": "Program", "body": _block_to_obj(node.body)}
    elif isinstance(node, VariableDeclaration):
        obj = {
            "type": "VariableDeclaration",
            "identifier": node.identifier,
            "value": ast_to_obj(node.value),
            "is_constant": node.is_constant,
        }
    elif isinstance(node, Assignment):
        obj = {"type": "Assignment", "identifier": node.identifier, "value": ast_to_obj(node.value)}
    elif isinstance(node, IfStatement):
        obj = {
            "type": "IfStatement",
            "condition": ast_to_obj(node.condition),
            "then_branch": _block_to_obj(node.then_branch),
            "else_branch": None if node.else_branch is None else _block_to_obj(node.else_branch),
        }
    elif isinstance(node, WhileLoop):
        obj = {"type": "WhileLoop", "condition": ast_to_obj(node.condition), "body": _block_to_obj(node.body)}
    elif isinstance(node, ForLoop):
        obj = {
            "type": "ForLoop",
            "variable": node.variable,
            "iterable": ast_to_obj(node.iterable),
            "body": _block_to_obj(node.body),
        }
    elif isinstance(node, FunctionDeclaration):
        obj = {
            "type": "FunctionDeclaration",
            "name": node.name,
            "parameters": list(node.parameters),
            "body": _block_to_obj(node.body),
            "style": node.style,
        }
    elif isinstance(node, ReturnStatement):
        obj = {"type": "ReturnStatement", "value": ast_to_obj(node.value)}
    elif isinstance(node, PrintStatement):
        obj = {"type": "PrintStatement", "value": ast_to_obj(node.value)}
    elif isinstance(node, InputStatement):
        obj = {"type": "InputStatement", "prompt": node.prompt}
    elif isinstance(node, BinaryExpression):
        obj = {
            "type": "BinaryExpression",
            "left": ast_to_obj(node.left),
            "operator": node.operator,
            "right": ast_to_obj(node.right),
        }
    elif isinstance(node, UnaryExpression):
        obj = {"type": "UnaryExpression", "operator": node.operator, "operand": ast_to_obj(node.operand)}
    elif isinstance(node, CallExpression):
        obj = {"type": "CallExpression", "callee": node.callee, "arguments": _block_to_obj(node.arguments)}
    elif isinstance(node, Identifier):
        obj = {"type": "Identifier", "name": node.name}
    elif isinstance(node, Literal):
        obj = {"type": "Literal", "value": node.value, "data_type": node.data_type}
    else:
        raise TypeError(f"Unsupported node for serialization: {type(node).__name__}")

    obj["position"] = [node.position.line, node.position.column]
    return obj


def ast_from_obj(obj: Any) -> Any:
    if obj is None:
        return None
    if not isinstance(obj, dict):
        raise TypeError("Invalid AST object")
    t = obj.get("type")
    position = Position(*obj["position"]) if "position" in obj else NO_POSITION
    if t == "Program":
        return Program(body=_block_from_obj(obj["body"]), position=position)
    if t == "VariableDeclaration":
        return VariableDeclaration(
            identifier=obj["identifier"],
            value=ast_from_obj(obj["value"]),
            is_constant=bool(obj.get("is_constant", False)),
            position=position,
        )
    if t == "Assignment":
        return Assignment(identifier=obj["identifier"], value=ast_from_obj(obj["value"]), position=position)
    if t == "IfStatement":
        else_branch = obj.get("else_branch")
        return IfStatement(
            condition=ast_from_obj(obj["condition"]),
            then_branch=_block_from_obj(obj["then_branch"]),
            else_branch=None if else_branch is None else _block_from_obj(else_branch),
            position=position,
        )
    if t == "WhileLoop":
        return WhileLoop(
            condition=ast_from_obj(obj["condition"]),
            body=_block_from_obj(obj["body"]),
            position=position,
        )
    if t == "ForLoop":
        return ForLoop(
            variable=obj["variable"],
            iterable=ast_from_obj(obj["iterable"]),
            body=_block_from_obj(obj["body"]),
            position=position,
        )
    if t == "FunctionDeclaration":
        return FunctionDeclaration(
            name=obj["name"],
            parameters=tuple(obj["parameters"]),
            body=_block_from_obj(obj["body"]),
            style=obj.get("style", "system"),
            position=position,
        )
    if t == "ReturnStatement":
        return ReturnStatement(value=ast_from_obj(obj.get("value")), position=position)
    if t == "PrintStatement":
        return PrintStatement(value=ast_from_obj(obj["value"]), position=position)
    if t == "InputStatement":
        return InputStatement(prompt=obj["prompt"], position=position)
    if t == "BinaryExpression":
        return BinaryExpression(
            left=ast_from_obj(obj["left"]),
            operator=obj["operator"],
            right=ast_from_obj(obj["right"]),
            position=position,
        )
    if t == "UnaryExpression":
        return UnaryExpression(operator=obj["operator"], operand=ast_from_obj(obj["operand"]), position=position)
    if t == "CallExpression":
        return CallExpression(
            callee=obj["callee"],
            arguments=_block_from_obj(obj["arguments"]),
            position=position,
        )
    if t == "Identifier":
        return Identifier(name=obj["name"], position=position)
    if t == "Literal":
        value = obj["value"]
        if obj["data_type"] == "number":
            value = float(value)
        return Literal(value=value, data_type=obj["data_type"], position=position)

    raise ValueError(f"Unknown AST node type: {t}")
