from timeit import timeit

from bytevm.compiler.chunk import Chunk
from bytevm.compiler.compiler import compile_source
from bytevm.compiler.opcodes import Opcode
from bytevm.compiler.vm import VM
from bytevm.interpreter import Interpreter


def long_chunk(n_ops: int, profile: str) -> Chunk:
    """1 (+ 1)*n_ops, then return. Wraps in the byte profile, grows in double."""
    chunk = Chunk()
    one = chunk.add_constant(1 if profile == "byte" else 1.0)
    chunk.emit_op(Opcode.CONSTANT, 1)
    chunk.emit_u8(one, 1)
    for _ in range(n_ops):
        chunk.emit_op(Opcode.CONSTANT, 1)
        chunk.emit_u8(one, 1)
        chunk.emit_op(Opcode.ADD, 1)
    chunk.emit_op(Opcode.RETURN, 1)
    return chunk


def time_vm(chunk: Chunk, profile: str, rounds: int) -> float:
    """Time VM execution only; the chunk is built once."""
    vm = VM(profile, trace=False)
    # Warmup
    vm.interpret(chunk)
    # Timed
    return timeit(lambda: vm.interpret(chunk), number=rounds)


def time_stepping(chunk: Chunk, profile: str, rounds: int) -> float:
    """Same as time_vm but driving the VM one step_once at a time."""
    vm = VM(profile, trace=False)

    def drive():
        vm.load(chunk)
        while vm.step_once() is None:
            pass

    drive()
    return timeit(drive, number=rounds)


def time_compile_and_run(source: str, rounds: int) -> float:
    interp = Interpreter(profile="double", trace=False, disasm=False)
    interp.interpret(source)
    return timeit(lambda: interp.interpret(source), number=rounds)


def time_compile_only(source: str, rounds: int) -> float:
    compile_source(source, "double")
    return timeit(lambda: compile_source(source, "double"), number=rounds)


if __name__ == "__main__":
    for profile in ("double", "byte"):
        chunk = long_chunk(1000, profile)
        print(f"Benchmark: 1000 additions ({profile} profile)")
        print(f"  batch: {time_vm(chunk, profile, 100):.6f}s  |  step_once: {time_stepping(chunk, profile, 100):.6f}s  [rounds=100]")

    print("Benchmark: source '6 * 7'")
    print(f"  compile only: {time_compile_only('6 * 7', 20000):.6f}s  |  compile+run: {time_compile_and_run('6 * 7', 20000):.6f}s  [rounds=20000]")
