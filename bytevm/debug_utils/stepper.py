from __future__ import annotations
import sys
from typing import Callable, Optional, TextIO

from bytevm.types.value import format_value
from bytevm.compiler.chunk import Chunk
from bytevm.compiler.disasm import format_instruction
from bytevm.compiler.vm import VM, InterpretResult

# ----------------- ANSI colors -----------------
RESET = "\033[0m"
BOLD = "\033[1m"
COLOR_KEY = "\033[94m"
COLOR_POINTER = "\033[92m"
COLOR_ERROR = "\033[91m"

POINTER = "→"

HELP = " Step <Enter/s>  Run <r>  Quit <q> "


def _c(text: str, color: str, enabled: bool) -> str:
    return f"{color}{text}{RESET}" if enabled else text


class Stepper:
    """Terminal front end that executes a chunk one instruction at a time.

    Only reads ``vm.ip``, ``vm.stack`` and ``vm.chunk``; the single mutator is
    ``vm.step_once``.
    """

    def __init__(
        self,
        chunk: Chunk,
        vm: VM | None = None,
        color: bool = True,
        input_fn: Optional[Callable[[str], str]] = None,
        out: Optional[TextIO] = None,
    ):
        self.vm = vm or VM(trace=False)
        self.vm.load(chunk)
        self.color = color
        self.input_fn = input_fn
        self.out = out
        self.last_offset: int | None = None
        self.exit = False

    @property
    def result(self) -> InterpretResult | None:
        return self.vm.result

    def step(self) -> InterpretResult | None:
        if self.vm.halted:
            return self.vm.result
        self.last_offset = self.vm.ip
        return self.vm.step_once()

    def run_to_end(self) -> InterpretResult:
        while (result := self.step()) is None:
            pass
        return result

    def render(self) -> str:
        vm = self.vm
        lines = [
            _c(" Virtual Machine ", BOLD, self.color),
            f"Instruction Pointer: {vm.ip}",
            "Stack: " + ("".join(f"[ {format_value(v)} ]" for v in vm.stack) or "(empty)"),
            "Chunk Code:",
        ]
        offset = 0
        while offset < len(vm.chunk.code):
            text, next_offset = format_instruction(vm.chunk, offset, show_lines=True)
            if offset == self.last_offset:
                lines.append(_c(f" {POINTER} {text}", COLOR_POINTER, self.color))
            else:
                lines.append(f"   {text}")
            offset = next_offset
        if vm.halted:
            color = COLOR_POINTER if vm.result.ok else COLOR_ERROR
            lines.append(_c(f"Halted: {vm.result}", color, self.color))
        lines.append(_c(HELP, COLOR_KEY, self.color))
        return "\n".join(lines)

    def handle(self, command: str) -> None:
        command = command.strip().lower()
        if command in ("", "s"):
            self.step()
        elif command == "r":
            self.run_to_end()
        elif command == "q":
            self.exit = True

    def run(self) -> InterpretResult | None:
        out = self.out or sys.stdout
        while not self.exit:
            print(self.render(), file=out)
            try:
                command = (self.input_fn or input)("> ")
            except EOFError:
                break
            self.handle(command)
        return self.vm.result
