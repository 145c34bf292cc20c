"""Tree-walking interpreter for EasyLang.

`Interpreter.interpret` executes a parsed Program and returns a
`RunResult` holding the lines printed by `likho` and, if execution
stopped early, an error message. It never raises for errors in the
program being run: output produced before the failure is kept and
returned next to the error.

Statement execution reports its outcome as a `Completion` (normal,
return with a value, or error) instead of unwinding with exceptions.
Expressions raise `EasyLangRuntimeError`; `execute` converts the
exception into an error completion at the statement boundary, and a
function call turns an error completion of its body back into an
exception so it unwinds through the enclosing expression.

The interpreter owns one global environment. Function calls and for-loops
switch the current environment to a child scope for their duration and
always restore the previous one, whichever way the scope is left.
"""

from __future__ import annotations

import math
import sys
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, List, Optional

from .ast import (
    Program, Node, VariableDeclaration, Assignment, IfStatement, WhileLoop,
    ForLoop, FunctionDeclaration, ReturnStatement, PrintStatement,
    InputStatement, BinaryExpression, UnaryExpression, CallExpression,
    Identifier, Literal,
)
from .environment import Environment
from .errors import EasyLangError, EasyLangRuntimeError, Completion, NORMAL
from .parser import parse_program
from .types import (
    RangeVal, FunctionVal, BuiltinFunction,
    type_name, is_truthy, to_string, values_equal, coerce_input,
)

InputProvider = Callable[[str], str]


@dataclass
class RunResult:
    output: List[str] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def _power(a: float, b: float) -> float:
    if a == 0 and b < 0:
        return math.inf
    try:
        return math.pow(a, b)
    except OverflowError:
        if a < 0 and b.is_integer() and int(b) % 2 == 1:
            return -math.inf
        return math.inf
    except ValueError:
        # negative base with a fractional exponent
        return math.nan


def _remainder(a: float, b: float) -> float:
    if b == 0 or math.isinf(a):
        return math.nan
    return math.fmod(a, b)


class Interpreter:
    """Executes EasyLang programs against a persistent global scope."""

    # When true, an error inside a while-loop body ends the loop quietly and
    # execution continues after it; a return still leaves the function.
    loop_errors_end_loop = True

    # Host stack frames allowed while a program runs; one EasyLang call nests
    # six to nine Python frames.
    recursion_limit = 15000

    def __init__(self, input_provider: Optional[InputProvider] = None,
                 debug_level: int = 0, debug_file: Optional[str] = None):
        self.global_env = Environment()
        self.environment = self.global_env
        self.input_provider = input_provider
        self.output: List[str] = []
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w', encoding='utf-8') if debug_level > 0 and debug_file else None
        self.load_builtins()

    def debug(self, msg: str):
        if self.debug_level > 0:
            if self.debug_fp:
                self.debug_fp.write(msg + '\n')
                self.debug_fp.flush()
            else:
                print(msg)

    def close(self):
        if self.debug_fp:
            self.debug_fp.close()
            self.debug_fp = None

    def load_builtins(self):
        def std_range(args: List[Any]) -> Any:
            (n,) = args
            if type_name(n) != 'number':
                raise EasyLangRuntimeError('range() argument must be a number')
            if not math.isfinite(n):
                raise EasyLangRuntimeError('range() argument must be a finite number')
            return RangeVal(max(0, math.floor(n)))

        self.global_env.define('range', BuiltinFunction('range', 1, std_range), is_constant=True)

    @contextmanager
    def scope(self, env: Environment) -> Iterator[Environment]:
        previous = self.environment
        self.environment = env
        try:
            yield env
        finally:
            self.environment = previous

    # Public API
    def interpret(self, program: Program) -> RunResult:
        self.output = []
        if self.debug_level >= 1:
            self.debug(f"run program with {len(program.body)} statements")
        previous_limit = sys.getrecursionlimit()
        sys.setrecursionlimit(max(previous_limit, self.recursion_limit))
        try:
            result = self.execute_block(program.body)
        except RecursionError:
            result = Completion.failed(EasyLangRuntimeError('Maximum call depth exceeded'))
        finally:
            sys.setrecursionlimit(previous_limit)
        error = None
        if result.is_error:
            error = str(result.error)
            if self.debug_level >= 1:
                self.debug(f"error: {error}")
        elif self.debug_level >= 1:
            self.debug(f"finished with {len(self.output)} output lines")
        return RunResult(self.output, error)

    def execute_block(self, statements) -> Completion:
        for stmt in statements:
            result = self.execute(stmt)
            if not result.is_normal:
                return result
        return NORMAL

    def execute(self, node: Node) -> Completion:
        try:
            return self.execute_statement(node)
        except (EasyLangError, EasyLangRuntimeError) as exc:
            return Completion.failed(exc)

    def execute_statement(self, node: Node) -> Completion:
        if isinstance(node, VariableDeclaration):
            value = self.evaluate(node.value)
            self.environment.define(node.identifier, value, node.is_constant)
            if self.debug_level >= 2:
                kind = 'constant' if node.is_constant else 'variable'
                self.debug(f"declare {kind} {node.identifier} = {to_string(value)}")
            return NORMAL
        if isinstance(node, Assignment):
            value = self.evaluate(node.value)
            self.environment.assign(node.identifier, value)
            if self.debug_level >= 2:
                self.debug(f"assign {node.identifier} = {to_string(value)}")
            return NORMAL
        if isinstance(node, IfStatement):
            cond = self.evaluate(node.condition)
            truthy = is_truthy(cond)
            if self.debug_level >= 3:
                self.debug(f"if condition {to_string(cond)} -> {truthy}")
            if truthy:
                return self.execute_block(node.then_branch)
            if node.else_branch is not None:
                return self.execute_block(node.else_branch)
            return NORMAL
        if isinstance(node, WhileLoop):
            while is_truthy(self.evaluate(node.condition)):
                result = self.execute_block(node.body)
                if result.is_return:
                    return result
                if result.is_error:
                    if self.loop_errors_end_loop:
                        if self.debug_level >= 1:
                            self.debug(f"while loop ended by error: {result.error}")
                        break
                    return result
            return NORMAL
        if isinstance(node, ForLoop):
            iterable = self.evaluate(node.iterable)
            if not isinstance(iterable, RangeVal):
                raise EasyLangRuntimeError('For loop requires a range')
            # one scope for the whole loop; the loop variable is rebound each pass
            with self.scope(Environment(parent=self.environment)) as loop_env:
                for i in range(iterable.bound):
                    loop_env.bind(node.variable, float(i))
                    result = self.execute_block(node.body)
                    if not result.is_normal:
                        return result
            return NORMAL
        if isinstance(node, FunctionDeclaration):
            func = FunctionVal(node.name, node.parameters, node.body, self.environment)
            self.environment.define(node.name, func)
            if self.debug_level >= 2:
                self.debug(f"define function {node.name}({', '.join(node.parameters)})")
            return NORMAL
        if isinstance(node, ReturnStatement):
            value = self.evaluate(node.value) if node.value is not None else False
            return Completion.returned(value)
        if isinstance(node, PrintStatement):
            self.output.append(to_string(self.evaluate(node.value)))
            return NORMAL
        # expression statement; the value is discarded
        self.evaluate(node)
        return NORMAL

    def evaluate(self, node: Node) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Identifier):
            return self.environment.get(node.name)
        if isinstance(node, BinaryExpression):
            # both operands are always evaluated, including for aur/ya
            left = self.evaluate(node.left)
            right = self.evaluate(node.right)
            return self.apply_binary_op(node.operator, left, right)
        if isinstance(node, UnaryExpression):
            operand = self.evaluate(node.operand)
            if node.operator == 'nahi':
                return not is_truthy(operand)
            if node.operator == '-' and type_name(operand) == 'number':
                return -operand
            raise EasyLangRuntimeError(f"Invalid unary operation: {node.operator} {type_name(operand)}")
        if isinstance(node, CallExpression):
            return self.call_function(node)
        if isinstance(node, InputStatement):
            if self.input_provider is None:
                raise EasyLangRuntimeError('Input not available in this context')
            try:
                text = self.input_provider(node.prompt)
            except RecursionError:
                raise
            except Exception as exc:
                raise EasyLangRuntimeError(f"Input failed: {exc}") from exc
            if not isinstance(text, str):
                raise EasyLangRuntimeError('Input provider must return a string')
            return coerce_input(text)
        raise EasyLangRuntimeError(f"Unknown expression type: {type(node).__name__}")

    def call_function(self, node: CallExpression) -> Any:
        func = self.environment.get(node.callee)
        if type_name(func) != 'function':
            raise EasyLangRuntimeError(f"'{node.callee}' is not a function")
        args = [self.evaluate(arg) for arg in node.arguments]
        if self.debug_level >= 3:
            self.debug(f"call {node.callee}({', '.join(to_string(a) for a in args)})")
        if isinstance(func, BuiltinFunction):
            if func.arity is not None and len(args) != func.arity:
                count = 'one argument' if func.arity == 1 else f'{func.arity} arguments'
                raise EasyLangRuntimeError(f"{func.name}() expects exactly {count}")
            return func.fn(args)
        if len(args) != len(func.parameters):
            raise EasyLangRuntimeError(
                f"Function '{func.name}' expects {len(func.parameters)} arguments, got {len(args)}")
        # lexical scoping: the call scope hangs off the declaring scope
        call_env = Environment(parent=func.closure)
        for name, arg in zip(func.parameters, args):
            call_env.define(name, arg)
        with self.scope(call_env):
            result = self.execute_block(func.body)
        if result.is_error:
            raise result.error
        if result.is_return:
            return result.value
        return False

    def apply_binary_op(self, op: str, a: Any, b: Any) -> Any:
        ta, tb = type_name(a), type_name(b)
        if op == '+' and (ta == 'string' or tb == 'string'):
            return to_string(a) + to_string(b)
        if op == '==':
            return values_equal(a, b)
        if op == '!=':
            return not values_equal(a, b)
        if op == 'aur':
            return is_truthy(a) and is_truthy(b)
        if op == 'ya':
            return is_truthy(a) or is_truthy(b)
        if ta == 'number' and tb == 'number':
            if op == '+':
                return a + b
            if op == '-':
                return a - b
            if op == '*':
                return a * b
            if op == '/':
                if b == 0:
                    raise EasyLangRuntimeError('Division by zero')
                return a / b
            if op == '%':
                return _remainder(a, b)
            if op == '**':
                return _power(a, b)
            if op == '<':
                return a < b
            if op == '>':
                return a > b
            if op == '<=':
                return a <= b
            if op == '>=':
                return a >= b
        raise EasyLangRuntimeError(f"Invalid binary operation: {ta} {op} {tb}")


def interpret(program: Program, input_provider: Optional[InputProvider] = None) -> RunResult:
    """Run a Program on a fresh interpreter."""
    return Interpreter(input_provider=input_provider).interpret(program)


def run_program(source: str, input_provider: Optional[InputProvider] = None,
                debug_level: int = 0) -> RunResult:
    """Convenience function to tokenize, parse and run EasyLang source.

    Syntax errors are raised as EasyLangError; runtime errors are
    reported in the returned RunResult.
    """
    ast_program = parse_program(source)
    interpreter = Interpreter(input_provider=input_provider, debug_level=debug_level)
    return interpreter.interpret(ast_program)
