"""Runtime values for EasyLang.

A runtime value is one of five kinds:

* number   -- a Python ``float``
* string   -- a Python ``str``
* boolean  -- a Python ``bool``
* function -- a `FunctionVal` (user defined) or `BuiltinFunction`
* range    -- a `RangeVal`

``bool`` is a subclass of ``int`` in Python, so every helper here checks
for booleans before numbers. `type_name` is the single place that maps a
Python object to its kind and it rejects anything else, so the helpers
that dispatch on it cover every kind explicitly.
"""

from __future__ import annotations

import math
import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Tuple

from .ast import Node

if TYPE_CHECKING:
    from .environment import Environment


@dataclass(frozen=True)
class RangeVal:
    """Result of ``range(n)``: the integers 0 .. bound-1."""
    bound: int

    def __repr__(self) -> str:
        return f"<range {self.bound}>"


@dataclass(eq=False)
class FunctionVal:
    """A user-defined function together with the scope it was declared in."""
    name: str
    parameters: Tuple[str, ...]
    body: Tuple[Node, ...]
    closure: 'Environment' = field(repr=False)

    def __repr__(self) -> str:
        return f"<function {self.name}>"


@dataclass(eq=False)
class BuiltinFunction:
    name: str
    arity: Optional[int]
    fn: Callable[[List[Any]], Any]

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"


def type_name(value: Any) -> str:
    """Return the EasyLang kind of a runtime value."""
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    if isinstance(value, str):
        return 'string'
    if isinstance(value, (FunctionVal, BuiltinFunction)):
        return 'function'
    if isinstance(value, RangeVal):
        return 'range'
    raise TypeError(f"not an EasyLang value: {value!r}")


def is_truthy(value: Any) -> bool:
    kind = type_name(value)
    if kind == 'boolean':
        return value
    if kind == 'number':
        return value != 0
    if kind == 'string':
        return len(value) > 0
    # functions and ranges
    return True


def format_number(value: float) -> str:
    """Render a number the way the language prints it.

    Uses the shortest digit string that round-trips. Values from 1e-6 up to
    1e21 print as plain decimals (`13`, `0.00001`); anything outside that
    range prints as `<digits>e<sign><exponent>` (`1e-7`, `1.5e+22`).
    """
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'Infinity' if value > 0 else '-Infinity'
    if value == 0:
        return '0'
    sign = '-' if value < 0 else ''
    mantissa, _, exp = repr(abs(float(value))).partition('e')
    int_part, _, frac = mantissa.partition('.')
    digits = int_part + frac
    stripped = digits.lstrip('0')
    # value == 0.<digits> * 10 ** point
    point = len(int_part) + (int(exp) if exp else 0) - (len(digits) - len(stripped))
    digits = stripped.rstrip('0')
    k = len(digits)
    if k <= point <= 21:
        return sign + digits + '0' * (point - k)
    if 0 < point <= 21:
        return sign + digits[:point] + '.' + digits[point:]
    if -6 < point <= 0:
        return sign + '0.' + '0' * -point + digits
    exponent = point - 1
    exp_text = ('+' if exponent >= 0 else '-') + str(abs(exponent))
    if k == 1:
        return sign + digits + 'e' + exp_text
    return sign + digits[0] + '.' + digits[1:] + 'e' + exp_text


def to_string(value: Any) -> str:
    """Convert a value to the text `likho` prints."""
    kind = type_name(value)
    if kind == 'boolean':
        return 'sach' if value else 'jhooth'
    if kind == 'number':
        return format_number(value)
    if kind == 'string':
        return value
    return '[object]'


def values_equal(a: Any, b: Any) -> bool:
    """Strict equality: values of different kinds are never equal."""
    if type_name(a) != type_name(b):
        return False
    return a == b


_NUMBER_RE = re.compile(r'\s*[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?\s*', re.ASCII)


def coerce_input(text: str) -> Any:
    """Turn a line of user input into a number when all of it is one."""
    if _NUMBER_RE.fullmatch(text):
        number = float(text)
        if math.isfinite(number):
            return number
    return text
