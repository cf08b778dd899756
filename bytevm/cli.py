"""
bytevm command line driver

Usage:
    bytevm <path> [--disassemble] [--trace] [--profile {double,byte}] [--step] [-v]

Exit status follows sysexits: 64 usage, 65 compile error, 70 runtime error,
74 unreadable file.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from bytevm import __version__
from bytevm.types.value import PROFILES
from bytevm.types.errors import BytevmCompileError
from bytevm.compiler.vm import InterpretResult, InterpretStatus
from bytevm.interpreter import Interpreter
from bytevm.debug_utils.stepper import Stepper

EX_OK = 0
EX_USAGE = 64
EX_DATAERR = 65
EX_SOFTWARE = 70
EX_IOERR = 74

_EXIT_CODES = {
    InterpretStatus.OK: EX_OK,
    InterpretStatus.COMPILE_ERROR: EX_DATAERR,
    InterpretStatus.RUNTIME_ERROR: EX_SOFTWARE,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="bytevm", description="Run a source file on the bytecode VM.")
    parser.add_argument("path", nargs="?", help="source file to run")
    parser.add_argument("--disassemble", action="store_true", help="print the compiled chunk before running")
    parser.add_argument("--trace", action="store_true", help="trace every executed instruction")
    parser.add_argument("--profile", choices=sorted(PROFILES), help="numeric profile (default: $BYTEVM_PROFILE or double)")
    parser.add_argument("--step", action="store_true", help="step through the program interactively")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.path:
        parser.print_usage(sys.stderr)
        return EX_USAGE

    path = Path(args.path)
    try:
        source = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as ex:
        print(f"Could not read file '{path}': {ex}", file=sys.stderr)
        parser.print_usage(sys.stderr)
        return EX_IOERR

    interp = Interpreter(
        profile=args.profile,
        trace=args.trace or None,
        disasm=args.disassemble or None,
    )

    if args.step:
        try:
            chunk = interp.compile(source)
        except BytevmCompileError as ex:
            result = InterpretResult.compile_error(ex)
        else:
            result = Stepper(chunk, vm=interp.vm, color=sys.stdout.isatty()).run()
            if result is None:
                return EX_OK
    else:
        result = interp.interpret(source, name=path.name)

    print(f"Result: {result}")
    return _EXIT_CODES[result.status]


if __name__ == "__main__":
    sys.exit(main())
