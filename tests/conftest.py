import pytest

from bytevm.compiler.chunk import Chunk
from bytevm.compiler.opcodes import Opcode

# Profile-agnostic VM tests take the `profile` fixture and run once per numeric
# profile: IEEE-754 doubles ["double"] and wrapping unsigned bytes ["byte"].


@pytest.fixture(params=["double", "byte"])
def profile(request):
    return request.param


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # Tests pick profile and tracing explicitly; keep the host environment out of it
    for var in ("BYTEVM_PROFILE", "BYTEVM_TRACE", "BYTEVM_DISASM"):
        monkeypatch.delenv(var, raising=False)


def build_chunk(*items, line=1):
    """Opcodes are emitted as-is, anything else becomes an OpConstant."""
    chunk = Chunk()
    for item in items:
        if isinstance(item, Opcode):
            chunk.emit_op(item, line)
        else:
            chunk.emit_constant(item, line)
    return chunk


@pytest.fixture
def make_chunk():
    return build_chunk
