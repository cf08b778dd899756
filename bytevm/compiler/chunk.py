from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, TextIO

from bytevm.types.errors import ChunkError
from bytevm.compiler.opcodes import Opcode

MAX_CONSTANTS = 0x100


@dataclass
class Chunk:
    """A chunk of bytecode with a constants table and per-byte line info.

    Instructions are one opcode byte followed by its operand bytes; only
    CONSTANT carries an operand (a u8 index into ``constants``).
    ``lines[i]`` is the source line of ``code[i]``.
    """

    code: bytearray = field(default_factory=bytearray)
    lines: List[int] = field(default_factory=list)
    constants: List[Any] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.code)

    def append(self, byte: int | Opcode, line: int) -> int:
        """Append one code byte with its source line; returns its offset."""
        v = int(byte)
        if not 0 <= v <= 0xFF:
            raise ChunkError(f"Code byte {v} is out of range 0..255", line)
        self.code.append(v)
        self.lines.append(line)
        return len(self.code) - 1

    write = append

    def add_constant(self, value: Any) -> int:
        if len(self.constants) >= MAX_CONSTANTS:
            raise ChunkError(f"Too many constants in one chunk (max {MAX_CONSTANTS})")
        self.constants.append(value)
        return len(self.constants) - 1

    def get_constant(self, index: int) -> Any:
        return self.constants[index]

    # --- Emit helpers ---
    def emit_op(self, op: Opcode, line: int) -> int:
        return self.append(op, line)

    def emit_u8(self, v: int, line: int) -> None:
        self.append(v, line)

    # --- high-level convenience ---
    def emit_constant(self, value: Any, line: int) -> int:
        idx = self.add_constant(value)
        self.emit_op(Opcode.CONSTANT, line)
        self.emit_u8(idx, line)
        return idx

    def line_at(self, offset: int) -> int | None:
        if 0 <= offset < len(self.lines):
            return self.lines[offset]
        return None

    # --- diagnostics ---
    def disassemble(self, name: str, show_lines: bool = False, file: TextIO | None = None) -> None:
        from bytevm.compiler.disasm import disassemble
        disassemble(self, name, show_lines=show_lines, file=file)

    def disassemble_instruction(self, offset: int, show_lines: bool = False, file: TextIO | None = None) -> int:
        from bytevm.compiler.disasm import disassemble_instruction
        return disassemble_instruction(self, offset, show_lines=show_lines, file=file)
