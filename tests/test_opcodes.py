import pytest
from hypothesis import given, strategies as st

from bytevm.compiler.opcodes import Opcode, encode, decode, BINARY_OPS


@pytest.mark.parametrize("op", list(Opcode))
def test_encode_decode_round_trip(op):
    assert decode(encode(op)) is op


@given(st.integers(min_value=0, max_value=255))
def test_decode_rejects_unassigned_bytes(byte):
    op = decode(byte)
    if byte <= max(Opcode):
        assert op is not None and encode(op) == byte
    else:
        assert op is None


@pytest.mark.parametrize(
    "op,mnemonic",
    [
        (Opcode.RETURN, "OpReturn"),
        (Opcode.CONSTANT, "OpConstant"),
        (Opcode.NEGATE, "OpNegate"),
        (Opcode.SUBTRACT, "OpSubtract"),
        (Opcode.MODULO, "OpModulo"),
        (Opcode.NIL, "OpNil"),
        (Opcode.GREATER, "OpGreater"),
    ]
)
def test_mnemonics(op, mnemonic):
    assert op.mnemonic == mnemonic


def test_only_constant_carries_an_operand():
    assert Opcode.CONSTANT.size == 2
    assert all(op.size == 1 for op in Opcode if op is not Opcode.CONSTANT)


def test_stack_arity():
    assert Opcode.RETURN.arity == 0
    assert Opcode.CONSTANT.arity == 0
    assert Opcode.NEGATE.arity == 1
    assert Opcode.NOT.arity == 1
    assert BINARY_OPS == {
        Opcode.ADD, Opcode.SUBTRACT, Opcode.MULTIPLY, Opcode.DIVIDE, Opcode.MODULO,
        Opcode.EQUAL, Opcode.GREATER, Opcode.LESS,
    }
