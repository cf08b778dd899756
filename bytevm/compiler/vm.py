from __future__ import annotations

import enum
import logging
import sys
from dataclasses import dataclass
from typing import Any, Callable, List, TextIO, Tuple

from bytevm.types.nil import Nil
from bytevm.types.value import NumberModel, get_number_model, is_falsey, values_equal, format_value
from bytevm.types.errors import (
    BytevmError,
    BytevmRuntimeError,
    StackUnderflowError,
    UnknownOpcodeError,
    ConstantIndexError,
    MissingReturnError,
)

from .opcodes import Opcode, decode
from .chunk import Chunk
from .disasm import format_instruction

logger = logging.getLogger(__name__)


class InterpretStatus(enum.Enum):
    OK = "ok"
    COMPILE_ERROR = "compile error"
    RUNTIME_ERROR = "runtime error"


@dataclass
class InterpretResult:
    status: InterpretStatus
    value: Any = None  # None means "no value" (empty stack at OpReturn); nil is Nil
    error: BytevmError | None = None

    @property
    def ok(self) -> bool:
        return self.status is InterpretStatus.OK

    @property
    def has_value(self) -> bool:
        return self.ok and self.value is not None

    @property
    def line(self) -> int | None:
        return self.error.line if self.error is not None else None

    @classmethod
    def success(cls, value: Any = None) -> InterpretResult:
        return cls(InterpretStatus.OK, value)

    @classmethod
    def compile_error(cls, error: BytevmError) -> InterpretResult:
        return cls(InterpretStatus.COMPILE_ERROR, error=error)

    @classmethod
    def runtime_error(cls, error: BytevmError) -> InterpretResult:
        return cls(InterpretStatus.RUNTIME_ERROR, error=error)

    def __str__(self):
        if self.ok:
            return f"ok => {format_value(self.value)}" if self.has_value else "ok (no value)"
        return f"{self.status.value}: {self.error}"


class VMState(enum.Enum):
    READY = "ready"
    RUNNING = "running"
    HALTED = "halted"


class VM:
    class RunSignal:
        NORMAL = 0
        RETURN = 1

    def __init__(self, profile: str | NumberModel | None = None, trace: bool | None = None, out: TextIO | None = None):
        self.numbers = get_number_model(profile)
        if trace is None:
            from bytevm.config import trace_enabled
            trace = trace_enabled()
        self.trace = trace
        self.out = out
        self.chunk: Chunk | None = None
        self.ip = 0
        self.stack: List[Any] = []
        self.state = VMState.READY
        self.result: InterpretResult | None = None
        # Opcode dispatch table
        self._dispatch: dict[int, Callable[[Opcode], Tuple[int, Any | None]]] = {}
        self._init_dispatch()

    def _init_dispatch(self) -> None:
        d = self._dispatch
        d[Opcode.RETURN] = self.op_return
        d[Opcode.CONSTANT] = self.op_constant
        # Literals
        d[Opcode.NIL] = self.op_nil
        d[Opcode.TRUE] = self.op_true
        d[Opcode.FALSE] = self.op_false
        # Arithmetic
        d[Opcode.NEGATE] = self.op_negate
        d[Opcode.ADD] = self.op_add
        d[Opcode.SUBTRACT] = self.op_subtract
        d[Opcode.MULTIPLY] = self.op_multiply
        d[Opcode.DIVIDE] = self.op_divide
        d[Opcode.MODULO] = self.op_modulo
        # Logic / comparison
        d[Opcode.NOT] = self.op_not
        d[Opcode.EQUAL] = self.op_equal
        d[Opcode.GREATER] = self.op_greater
        d[Opcode.LESS] = self.op_less

    # --- Per-op handlers ---
    def op_return(self, op: Opcode) -> Tuple[int, Any | None]:
        # Inspect, do not pop
        return VM.RunSignal.RETURN, (self.peek() if self.stack else None)

    def op_constant(self, op: Opcode) -> Tuple[int, Any | None]:
        code = self.chunk.code
        if self.ip >= len(code):
            raise ConstantIndexError(f"{op.mnemonic} is missing its constant operand.")
        idx = code[self.ip]
        self.ip += 1
        if idx >= len(self.chunk.constants):
            raise ConstantIndexError(
                f"Constant index {idx} out of range (pool has {len(self.chunk.constants)})."
            )
        self.push(self.chunk.constants[idx])
        return VM.RunSignal.NORMAL, None

    def op_nil(self, op: Opcode) -> Tuple[int, Any | None]:
        self.push(Nil)
        return VM.RunSignal.NORMAL, None

    def op_true(self, op: Opcode) -> Tuple[int, Any | None]:
        self.push(True)
        return VM.RunSignal.NORMAL, None

    def op_false(self, op: Opcode) -> Tuple[int, Any | None]:
        self.push(False)
        return VM.RunSignal.NORMAL, None

    def op_negate(self, op: Opcode) -> Tuple[int, Any | None]:
        self.numbers.check(self.peek())
        self.push(self.numbers.negate(self.pop()))
        return VM.RunSignal.NORMAL, None

    def op_not(self, op: Opcode) -> Tuple[int, Any | None]:
        self.push(is_falsey(self.pop()))
        return VM.RunSignal.NORMAL, None

    def _arith2(self, opfun: Callable[[Any, Any], Any]) -> Tuple[int, Any | None]:
        # Type-check before popping so a failed op leaves the stack intact
        self.numbers.check(self.peek(1), self.peek(0))
        b = self.pop()
        a = self.pop()
        self.push(opfun(a, b))
        return VM.RunSignal.NORMAL, None

    def op_add(self, op: Opcode) -> Tuple[int, Any | None]:
        return self._arith2(self.numbers.add)

    def op_subtract(self, op: Opcode) -> Tuple[int, Any | None]:
        return self._arith2(self.numbers.subtract)

    def op_multiply(self, op: Opcode) -> Tuple[int, Any | None]:
        return self._arith2(self.numbers.multiply)

    def op_divide(self, op: Opcode) -> Tuple[int, Any | None]:
        return self._arith2(self.numbers.divide)

    def op_modulo(self, op: Opcode) -> Tuple[int, Any | None]:
        return self._arith2(self.numbers.modulo)

    def op_greater(self, op: Opcode) -> Tuple[int, Any | None]:
        return self._arith2(self.numbers.greater)

    def op_less(self, op: Opcode) -> Tuple[int, Any | None]:
        return self._arith2(self.numbers.less)

    def op_equal(self, op: Opcode) -> Tuple[int, Any | None]:
        b = self.pop()
        a = self.pop()
        self.push(values_equal(a, b))
        return VM.RunSignal.NORMAL, None

    # --- Stack helpers ---
    def push(self, v: Any) -> None:
        self.stack.append(v)

    def pop(self) -> Any:
        return self.stack.pop()

    def peek(self, n: int = 0) -> Any:
        return self.stack[-1 - n]

    # --- State ---
    @property
    def halted(self) -> bool:
        return self.state is VMState.HALTED

    def reset(self) -> None:
        self.chunk = None
        self.ip = 0
        self.stack.clear()
        self.state = VMState.READY
        self.result = None

    def load(self, chunk: Chunk) -> None:
        """Bind ``chunk`` for stepping without running it."""
        self.reset()
        self.chunk = chunk
        self.state = VMState.RUNNING

    def _halt(self, result: InterpretResult) -> InterpretResult:
        self.state = VMState.HALTED
        self.result = result
        return result

    def _trace(self, offset: int) -> None:
        out = self.out or sys.stdout
        print("          " + "".join(f"[ {format_value(v)} ]" for v in self.stack), file=out)
        print(format_instruction(self.chunk, offset)[0], file=out)

    # --- Execution ---
    def step_once(self) -> InterpretResult | None:
        """Execute one instruction.

        Returns None while the program is still running, and the final
        InterpretResult once it halts (OpReturn or a runtime error). Calling it
        again after a halt returns the same result without executing anything.
        """
        if self.chunk is None:
            raise BytevmError("No chunk loaded")
        if self.halted:
            return self.result

        offset = self.ip
        try:
            code = self.chunk.code
            if offset >= len(code):
                raise MissingReturnError("Reached the end of the chunk without OpReturn.")
            if self.trace:
                self._trace(offset)
            byte = code[offset]
            self.ip += 1
            op = decode(byte)
            handler = self._dispatch.get(op) if op is not None else None
            if handler is None:
                raise UnknownOpcodeError(f"Unknown opcode {byte}.")
            if len(self.stack) < op.arity:
                raise StackUnderflowError(
                    f"Stack underflow: {op.mnemonic} needs {op.arity} operand(s), stack has {len(self.stack)}."
                )
            signal, value = handler(op)
        except BytevmRuntimeError as err:
            return self._halt(InterpretResult.runtime_error(self._attribute(err, offset)))

        if signal == VM.RunSignal.RETURN:
            return self._halt(InterpretResult.success(value))
        return None

    def _attribute(self, err: BytevmRuntimeError, offset: int) -> BytevmRuntimeError:
        err.offset = offset
        if err.line is None:
            # Past the end there is no instruction; blame the last one written
            line = self.chunk.line_at(offset)
            if line is None and self.chunk.lines:
                line = self.chunk.lines[-1]
            err.line = line
        logger.debug("runtime error at offset %04d (line %s): %s", offset, err.line, err.message)
        return err

    def run(self) -> InterpretResult:
        while True:
            result = self.step_once()
            if result is not None:
                return result

    def interpret(self, chunk: Chunk) -> InterpretResult:
        self.load(chunk)
        return self.run()


def run_chunk(chunk: Chunk, profile: str | NumberModel | None = None, trace: bool | None = None) -> InterpretResult:
    vm = VM(profile, trace)
    return vm.interpret(chunk)
