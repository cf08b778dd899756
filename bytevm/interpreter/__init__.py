from __future__ import annotations
import sys
from typing import TextIO

from bytevm.types.value import NumberModel, get_number_model
from bytevm.types.errors import BytevmCompileError
from bytevm.compiler.chunk import Chunk
from bytevm.compiler.compiler import compile_source
from bytevm.compiler.disasm import disassemble
from bytevm.compiler.vm import VM, InterpretResult


class Interpreter:
    """
    Compiles source with the placeholder compiler and runs it on one VM.
    The VM is reused across calls; each call resets it.
    """

    def __init__(
        self,
        profile: str | NumberModel | None = None,
        trace: bool | None = None,
        disasm: bool | None = None,
        out: TextIO | None = None,
    ):
        self.numbers = get_number_model(profile)
        self.vm = VM(self.numbers, trace, out)
        if disasm is None:
            from bytevm.config import disasm_enabled
            disasm = disasm_enabled()
        self.disasm = disasm
        self.out = out
        self.last_chunk: Chunk | None = None

    def compile(self, source: str) -> Chunk:
        return compile_source(source, self.numbers)

    def interpret(self, source: str, name: str = "script") -> InterpretResult:
        try:
            chunk = self.compile(source)
        except BytevmCompileError as ex:
            self.last_chunk = None
            return InterpretResult.compile_error(ex)
        self.last_chunk = chunk
        if self.disasm:
            disassemble(chunk, name, show_lines=True, file=self.out or sys.stdout)
        return self.vm.interpret(chunk)
