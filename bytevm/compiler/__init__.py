from __future__ import annotations

# Public surface for the compiler package
from .opcodes import Opcode, encode, decode
from .chunk import Chunk
from .disasm import disassemble, disassemble_chunk, disassemble_instruction, format_instruction
from .vm import VM, VMState, InterpretResult, InterpretStatus, run_chunk
from .compiler import Compiler, compile_source

__all__ = [
    "Opcode",
    "encode",
    "decode",
    "Chunk",
    "disassemble",
    "disassemble_chunk",
    "disassemble_instruction",
    "format_instruction",
    "VM",
    "VMState",
    "InterpretResult",
    "InterpretStatus",
    "run_chunk",
    "Compiler",
    "compile_source",
]
