from typing import Any, Dict, Optional, Set

from easylang.errors import EasyLangRuntimeError


class Environment:
    """A scope mapping identifiers to values, chained to an enclosing scope.

    Function calls and for-loops create child environments that are dropped
    when the call or loop ends. A function value keeps a reference to the
    environment it was declared in, which keeps that scope alive for as long
    as the function is reachable.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}
        self.constants: Set[str] = set()

    def define(self, name: str, value: Any, is_constant: bool = False):
        if name in self.values:
            raise EasyLangRuntimeError(f"Variable '{name}' already defined")
        self.values[name] = value
        if is_constant:
            self.constants.add(name)

    def bind(self, name: str, value: Any):
        """Create or overwrite a binding in this scope only."""
        self.values[name] = value

    def get(self, name: str) -> Any:
        env = self
        while env is not None:
            if name in env.values:
                return env.values[name]
            env = env.parent
        raise EasyLangRuntimeError(f"Undefined variable '{name}'")

    def assign(self, name: str, value: Any):
        env = self
        while env is not None:
            if name in env.values:
                if name in env.constants:
                    raise EasyLangRuntimeError(f"Cannot reassign constant '{name}'")
                env.values[name] = value
                return
            env = env.parent
        raise EasyLangRuntimeError(f"Undefined variable '{name}'")
