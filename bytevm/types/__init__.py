from __future__ import annotations

from .nil import Nil, NilType
from .value import (
    Value,
    NumberModel,
    DoubleModel,
    ByteModel,
    get_number_model,
    is_number,
    is_falsey,
    values_equal,
    format_value,
)

__all__ = [
    "Nil",
    "NilType",
    "Value",
    "NumberModel",
    "DoubleModel",
    "ByteModel",
    "get_number_model",
    "is_number",
    "is_falsey",
    "values_equal",
    "format_value",
]
