from __future__ import annotations

from enum import IntEnum


class Opcode(IntEnum):
    # Control
    RETURN = 0x00
    # Constants
    CONSTANT = 0x01  # u8 constant index
    # Arithmetic
    NEGATE = 0x02
    ADD = 0x03
    SUBTRACT = 0x04
    MULTIPLY = 0x05
    DIVIDE = 0x06
    MODULO = 0x07
    # Literals
    NIL = 0x08
    TRUE = 0x09
    FALSE = 0x0A
    # Logic / comparison
    NOT = 0x0B
    EQUAL = 0x0C
    GREATER = 0x0D
    LESS = 0x0E

    @property
    def mnemonic(self) -> str:
        return "Op" + self.name.title().replace("_", "")

    @property
    def size(self) -> int:
        """Encoded width in bytes, opcode included."""
        return 1 + OPERAND_WIDTH.get(self, 0)

    @property
    def arity(self) -> int:
        """Number of stack operands the opcode pops."""
        return STACK_ARITY.get(self, 0)


OPERAND_WIDTH: dict[Opcode, int] = {
    Opcode.CONSTANT: 1,
}

STACK_ARITY: dict[Opcode, int] = {
    Opcode.NEGATE: 1,
    Opcode.NOT: 1,
    Opcode.ADD: 2,
    Opcode.SUBTRACT: 2,
    Opcode.MULTIPLY: 2,
    Opcode.DIVIDE: 2,
    Opcode.MODULO: 2,
    Opcode.EQUAL: 2,
    Opcode.GREATER: 2,
    Opcode.LESS: 2,
}

BINARY_OPS = frozenset(op for op, n in STACK_ARITY.items() if n == 2)


def encode(op: Opcode) -> int:
    return int(op)


def decode(byte: int) -> Opcode | None:
    try:
        return Opcode(byte)
    except ValueError:
        return None
