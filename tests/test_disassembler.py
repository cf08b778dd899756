import io

from hypothesis import given, strategies as st

from bytevm.compiler.chunk import Chunk
from bytevm.compiler.opcodes import Opcode
from bytevm.compiler.disasm import (
    disassemble_chunk,
    disassemble_instruction,
    format_instruction,
    instruction_offsets,
)


def _test_chunk():
    chunk = Chunk()
    chunk.emit_constant(42, 1)
    chunk.append(Opcode.NEGATE, 2)
    chunk.append(Opcode.ADD, 3)
    chunk.append(Opcode.SUBTRACT, 4)
    chunk.append(Opcode.MULTIPLY, 5)
    chunk.append(Opcode.DIVIDE, 6)
    chunk.append(Opcode.RETURN, 7)
    return chunk


def test_disassemble_prints_header_and_one_line_per_instruction(capsys):
    _test_chunk().disassemble("Test Chunk")
    assert capsys.readouterr().out == (
        "== Test Chunk ==\n"
        "0000 OpConstant 0 (value=42)\n"
        "0002 OpNegate\n"
        "0003 OpAdd\n"
        "0004 OpSubtract\n"
        "0005 OpMultiply\n"
        "0006 OpDivide\n"
        "0007 OpReturn\n"
    )


def test_disassemble_instruction_offsets(capsys):
    chunk = _test_chunk()
    assert chunk.disassemble_instruction(0) == 2
    assert chunk.disassemble_instruction(2) == 3
    assert capsys.readouterr().out == "0000 OpConstant 0 (value=42)\n0002 OpNegate\n"


def test_values_are_formatted_like_the_vm_prints_them():
    chunk = Chunk()
    chunk.emit_constant(1.2, 1)
    chunk.emit_constant(3.0, 1)
    assert format_instruction(chunk, 0) == ("0000 OpConstant 0 (value=1.2)", 2)
    assert format_instruction(chunk, 2) == ("0002 OpConstant 1 (value=3)", 4)


def test_line_column():
    chunk = Chunk()
    chunk.emit_constant(1.2, 1)
    chunk.append(Opcode.NEGATE, 1)
    chunk.append(Opcode.RETURN, 2)
    assert disassemble_chunk(chunk, "lines", show_lines=True) == (
        "== lines ==\n"
        "0000    1 OpConstant 0 (value=1.2)\n"
        "0002    | OpNegate\n"
        "0003    2 OpReturn"
    )


def test_unknown_opcode_advances_one_byte():
    chunk = Chunk()
    chunk.append(99, 1)
    chunk.append(Opcode.RETURN, 1)
    out = io.StringIO()
    assert disassemble_instruction(chunk, 0, file=out) == 1
    assert out.getvalue() == "0000 Unknown opcode 99\n"


def test_malformed_constants_do_not_raise():
    truncated = Chunk()
    truncated.append(Opcode.CONSTANT, 1)
    assert format_instruction(truncated, 0) == ("0000 OpConstant <missing operand>", 1)

    dangling = Chunk()
    dangling.append(Opcode.CONSTANT, 1)
    dangling.append(3, 1)
    assert format_instruction(dangling, 0) == ("0000 OpConstant 3 (out of range)", 2)


instruction = st.one_of(
    st.sampled_from([op for op in Opcode if op is not Opcode.CONSTANT]),
    st.floats(allow_nan=False, allow_infinity=False),
)


@given(st.lists(instruction, max_size=60))
def test_walk_visits_every_instruction_once(items):
    chunk = Chunk()
    expected = []
    for item in items:
        expected.append(len(chunk.code))
        if isinstance(item, Opcode):
            chunk.append(item, 1)
        else:
            chunk.emit_constant(item, 1)
    assert instruction_offsets(chunk) == expected
    listing = disassemble_chunk(chunk)
    assert (listing.splitlines() if listing else []) == [format_instruction(chunk, o)[0] for o in expected]


@given(st.binary(max_size=64))
def test_walk_over_arbitrary_bytes_terminates_at_end(code):
    chunk = Chunk(code=bytearray(code), lines=[1] * len(code))
    offset = 0
    steps = 0
    while offset < len(chunk.code):
        _, nxt = format_instruction(chunk, offset)
        assert offset < nxt <= len(chunk.code)
        offset = nxt
        steps += 1
    assert offset == len(chunk.code)
    assert steps <= len(code)
