from __future__ import annotations
import sys
from typing import TextIO

from bytevm.types.value import format_value
from .chunk import Chunk
from .opcodes import Opcode, decode


def _line_column(chunk: Chunk, offset: int) -> str:
    line = chunk.line_at(offset)
    if offset > 0 and line == chunk.line_at(offset - 1):
        return "   | "
    return f"{line:4d} " if line is not None else "   ? "


def format_instruction(chunk: Chunk, offset: int, show_lines: bool = False) -> tuple[str, int]:
    """Render the instruction at ``offset``; returns (text, next_offset)."""
    code = chunk.code
    prefix = f"{offset:04d} "
    if show_lines:
        prefix += _line_column(chunk, offset)
    byte = code[offset]
    op = decode(byte)
    if op is None:
        return prefix + f"Unknown opcode {byte}", offset + 1
    if op == Opcode.CONSTANT:
        if offset + 1 >= len(code):
            return prefix + f"{op.mnemonic} <missing operand>", len(code)
        idx = code[offset + 1]
        if idx >= len(chunk.constants):
            return prefix + f"{op.mnemonic} {idx} (out of range)", offset + op.size
        value = format_value(chunk.constants[idx])
        return prefix + f"{op.mnemonic} {idx} (value={value})", offset + op.size
    return prefix + op.mnemonic, offset + op.size


def disassemble_instruction(chunk: Chunk, offset: int, show_lines: bool = False, file: TextIO | None = None) -> int:
    text, next_offset = format_instruction(chunk, offset, show_lines)
    print(text, file=file or sys.stdout)
    return next_offset


def instruction_offsets(chunk: Chunk) -> list[int]:
    offsets = []
    i = 0
    while i < len(chunk.code):
        offsets.append(i)
        _, i = format_instruction(chunk, i)
    return offsets


def disassemble_chunk(chunk: Chunk, name: str | None = None, show_lines: bool = False) -> str:
    out = []
    if name is not None:
        out.append(f"== {name} ==")
    i = 0
    while i < len(chunk.code):
        text, i = format_instruction(chunk, i, show_lines)
        out.append(text)
    return "\n".join(out)


def disassemble(chunk: Chunk, name: str, show_lines: bool = False, file: TextIO | None = None) -> None:
    print(disassemble_chunk(chunk, name, show_lines), file=file or sys.stdout)
