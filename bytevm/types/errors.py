from __future__ import annotations


class BytevmError(Exception):
    """ Base class for all bytevm errors"""

    def __init__(self, message: str, line: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line

    def __str__(self):
        if self.line is None:
            return self.message
        return f"[line {self.line}] {self.message}"


class ChunkError(BytevmError):
    """ Raised when a chunk is built with an invalid byte or too many constants"""


class BytevmCompileError(BytevmError):
    """ Raised by the scanner/compiler before any bytecode runs"""


class BytevmRuntimeError(BytevmError):
    """ Raised while executing a chunk. The VM fills in the offset and line."""

    def __init__(self, message: str, line: int | None = None, offset: int | None = None):
        super().__init__(message, line)
        self.offset = offset


class StackUnderflowError(BytevmRuntimeError):
    """ Raised when an opcode needs more operands than the stack holds"""


class OperandTypeError(BytevmRuntimeError):
    """ Raised when an arithmetic or comparison opcode sees a non-number"""


class DivisionByZeroError(BytevmRuntimeError):
    """ Raised on division or modulo by zero"""


class UnknownOpcodeError(BytevmRuntimeError):
    """ Raised when a code byte does not decode to an opcode"""


class ConstantIndexError(BytevmRuntimeError):
    """ Raised when a constant operand is missing or outside the pool"""


class MissingReturnError(BytevmRuntimeError):
    """ Raised when execution runs off the end of the chunk"""
