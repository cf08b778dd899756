from __future__ import annotations

from typing import Iterator

from bytevm.reader.scanner import Token, scan
from bytevm.types.value import NumberModel, get_number_model
from bytevm.types.errors import BytevmCompileError

from .opcodes import Opcode
from .chunk import Chunk


# !=, >= and <= compile as the negation of ==, < and >
BINARY_OPS: dict[str, tuple[Opcode, ...]] = {
    "+": (Opcode.ADD,),
    "-": (Opcode.SUBTRACT,),
    "*": (Opcode.MULTIPLY,),
    "/": (Opcode.DIVIDE,),
    "%": (Opcode.MODULO,),
    "==": (Opcode.EQUAL,),
    "!=": (Opcode.EQUAL, Opcode.NOT),
    ">": (Opcode.GREATER,),
    ">=": (Opcode.LESS, Opcode.NOT),
    "<": (Opcode.LESS,),
    "<=": (Opcode.GREATER, Opcode.NOT),
}

UNARY_OPS: dict[str, Opcode] = {
    "-": Opcode.NEGATE,
    "!": Opcode.NOT,
}

LITERAL_OPS: dict[str, Opcode] = {
    "true": Opcode.TRUE,
    "false": Opcode.FALSE,
    "nil": Opcode.NIL,
}


class Compiler:
    """
    Placeholder compiler: one literal, one unary form or one binary form.

        program := expr ';'? EOF
        expr    := literal | ('-' | '!') literal | literal OP literal
        literal := NUMBER | 'true' | 'false' | 'nil'

    There is no precedence and no nesting.
    """

    def __init__(self, source: str, profile: str | NumberModel | None = None):
        self.tokens: Iterator[Token] = scan(source)
        self.numbers = get_number_model(profile)
        self.chunk = Chunk()
        self.current: Token | None = None
        self.previous: Token | None = None

    def advance(self) -> Token:
        self.previous = self.current
        self.current = next(self.tokens)
        if self.current.kind == "error":
            raise BytevmCompileError(f"Error: {self.current.lexeme}", self.current.line)
        return self.current

    def error_at(self, token: Token, message: str) -> BytevmCompileError:
        where = "at end" if token.kind == "eof" else f"at '{token.lexeme}'"
        return BytevmCompileError(f"Error {where}: {message}", token.line)

    def compile(self) -> Chunk:
        self.advance()
        if self.current.kind == "eof":
            raise self.error_at(self.current, "Expect expression.")
        self.expression()
        if self.current.kind == ";":
            self.advance()
        if self.current.kind != "eof":
            raise self.error_at(self.current, "Expect end of expression.")
        self.chunk.emit_op(Opcode.RETURN, self.previous.line)
        return self.chunk

    def expression(self) -> None:
        tok = self.current
        if tok.kind in UNARY_OPS:
            self.advance()
            self.literal()
            self.chunk.emit_op(UNARY_OPS[tok.kind], tok.line)
            return

        self.literal()
        op = self.current
        if op.kind in BINARY_OPS:
            self.advance()
            self.literal()
            for code in BINARY_OPS[op.kind]:
                self.chunk.emit_op(code, op.line)

    def literal(self) -> None:
        tok = self.current
        if tok.kind == "number":
            try:
                value = self.numbers.coerce(tok.lexeme)
            except ValueError as ex:
                raise self.error_at(tok, f"{ex}.") from None
            self.chunk.emit_constant(value, tok.line)
        elif tok.kind in LITERAL_OPS:
            self.chunk.emit_op(LITERAL_OPS[tok.kind], tok.line)
        else:
            raise self.error_at(tok, "Expect expression.")
        self.advance()


def compile_source(source: str, profile: str | NumberModel | None = None) -> Chunk:
    return Compiler(source, profile).compile()

