"""
Runtime values and the numeric profiles.

Values are plain Python objects:

    - Number  -> float (double profile) or int in 0..255 (byte profile)
    - Boolean -> bool
    - Nil     -> the Nil singleton

bool is a subclass of int in Python, so every number check has to rule it out
explicitly.
"""

from __future__ import annotations

import math
from typing import Any, Callable

import numpy as np

from bytevm.types.nil import Nil
from bytevm.types.errors import DivisionByZeroError, OperandTypeError

Value = Any


def is_bool(v: Value) -> bool:
    return isinstance(v, bool)


def is_nil(v: Value) -> bool:
    return v is Nil


def is_number(v: Value) -> bool:
    return isinstance(v, (int, float)) and not isinstance(v, bool)


def is_falsey(v: Value) -> bool:
    # Only nil and false. 0 is truthy.
    return v is Nil or v is False


def values_equal(a: Value, b: Value) -> bool:
    if is_number(a) and is_number(b):
        return a == b
    if is_bool(a) and is_bool(b):
        return a is b
    return is_nil(a) and is_nil(b)


def format_value(v: Value) -> str:
    if v is True:
        return "true"
    if v is False:
        return "false"
    if v is Nil:
        return "nil"
    if isinstance(v, float):
        return f"{v:g}"
    return str(v)


class NumberModel:
    """Arithmetic for one numeric profile. The VM picks one and never mixes."""

    name = "abstract"
    type_name = "number"

    def is_number(self, v: Value) -> bool:
        raise NotImplementedError

    def coerce(self, literal: str | int | float) -> Value:
        raise NotImplementedError

    def negate(self, a): raise NotImplementedError
    def add(self, a, b): raise NotImplementedError
    def subtract(self, a, b): raise NotImplementedError
    def multiply(self, a, b): raise NotImplementedError
    def divide(self, a, b): raise NotImplementedError
    def modulo(self, a, b): raise NotImplementedError

    def greater(self, a, b) -> bool:
        return a > b

    def less(self, a, b) -> bool:
        return a < b

    def check(self, *operands: Value) -> None:
        if not all(self.is_number(v) for v in operands):
            if len(operands) == 1:
                raise OperandTypeError(f"Operand must be a {self.type_name}.")
            raise OperandTypeError(f"Operands must be {self.type_name}s.")

    def __repr__(self):
        return f"<{type(self).__name__} {self.name}>"


class DoubleModel(NumberModel):
    """IEEE-754 doubles. Division and modulo by zero are errors; overflow gives inf."""

    name = "double"

    def is_number(self, v: Value) -> bool:
        if not is_number(v):
            return False
        if isinstance(v, int):
            # ints past the double range cannot take part in float arithmetic
            try:
                float(v)
            except OverflowError:
                return False
        return True

    def coerce(self, literal):
        return float(literal)

    def negate(self, a):
        return -float(a)

    def add(self, a, b):
        return float(a) + float(b)

    def subtract(self, a, b):
        return float(a) - float(b)

    def multiply(self, a, b):
        return float(a) * float(b)

    def divide(self, a, b):
        if b == 0:
            raise DivisionByZeroError("Division by zero.")
        return float(a) / float(b)

    def modulo(self, a, b):
        if b == 0:
            raise DivisionByZeroError("Modulo by zero.")
        if math.isinf(a):
            return math.nan
        # C fmod: the result takes the sign of the dividend
        return math.fmod(float(a), float(b))


class ByteModel(NumberModel):
    """Unsigned 8-bit integers with wraparound, computed on numpy uint8."""

    name = "byte"
    type_name = "byte"

    def is_number(self, v: Value) -> bool:
        return isinstance(v, int) and not isinstance(v, bool) and 0 <= v <= 0xFF

    def coerce(self, literal):
        if isinstance(literal, str):
            if not literal.isdigit():
                raise ValueError(f"{literal!r} is not a byte literal")
            literal = int(literal)
        if isinstance(literal, float):
            if not literal.is_integer():
                raise ValueError(f"{literal!r} is not a byte literal")
            literal = int(literal)
        if not 0 <= literal <= 0xFF:
            raise ValueError(f"{literal!r} does not fit in a byte")
        return literal

    @staticmethod
    def _wrap(ufunc: Callable, *operands: int) -> int:
        args = [np.uint8(v) for v in operands]
        with np.errstate(over="ignore"):
            return int(ufunc(*args, dtype=np.uint8))

    def negate(self, a):
        return self._wrap(np.negative, a)

    def add(self, a, b):
        return self._wrap(np.add, a, b)

    def subtract(self, a, b):
        return self._wrap(np.subtract, a, b)

    def multiply(self, a, b):
        return self._wrap(np.multiply, a, b)

    def divide(self, a, b):
        if b == 0:
            raise DivisionByZeroError("Division by zero.")
        # unsigned, so floor division truncates
        return self._wrap(np.floor_divide, a, b)

    def modulo(self, a, b):
        if b == 0:
            raise DivisionByZeroError("Modulo by zero.")
        return self._wrap(np.remainder, a, b)


PROFILES: dict[str, NumberModel] = {
    DoubleModel.name: DoubleModel(),
    ByteModel.name: ByteModel(),
}


def get_number_model(profile: str | NumberModel | None = None) -> NumberModel:
    if isinstance(profile, NumberModel):
        return profile
    if profile is None:
        from bytevm.config import get_profile
        profile = get_profile()
    try:
        return PROFILES[profile]
    except KeyError:
        raise ValueError(f"Unknown numeric profile {profile!r}; expected one of {sorted(PROFILES)}") from None
