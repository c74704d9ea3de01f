"""Runtime values produced by the evaluator. Values are frozen: operations build new values instead of mutating
their operands.
"""

import math
from dataclasses import dataclass
from typing import Tuple


class RuntimeVal:
    """Superclass of every runtime value."""
    type = "unknown"


@dataclass(frozen=True)
class NullVal(RuntimeVal):
    type = "null"
    value: None = None

    def __str__(self):
        return "null"


@dataclass(frozen=True)
class NumberVal(RuntimeVal):
    type = "number"
    value: float = 0.0

    def __str__(self):
        if math.isfinite(self.value) and float(self.value).is_integer():
            return str(int(self.value))
        return str(float(self.value))


@dataclass(frozen=True)
class BoolVal(RuntimeVal):
    type = "boolean"
    value: bool = False

    def __str__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class ObjectVal(RuntimeVal):
    """Result of evaluating an object literal: (name, value) pairs in source order.

    Accepts a mapping or an iterable of pairs. A repeated name keeps its last value, at its first position.
    """
    type = "object"
    properties: Tuple[Tuple[str, RuntimeVal], ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "properties", tuple(dict(self.properties).items()))

    def get(self, key, default=None):
        return dict(self.properties).get(key, default)

    def __str__(self):
        if not self.properties:
            return "{}"
        return "{ " + ", ".join(f"{key}: {value}" for key, value in self.properties) + " }"


def mk_null():
    return NullVal()


def mk_number(value=0):
    return NumberVal(float(value))


def mk_bool(value=False):
    return BoolVal(bool(value))
