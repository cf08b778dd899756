"""
Scanner

- Longest-match lexing driven by one master regex with named groups
- Lazy: tokens are produced on demand by ``scan``
- Always ends with a single ``eof`` token

Token kinds:

    - literals      -> "number", "string", "identifier"
    - keywords      -> the keyword itself ("true", "nil", "print", ...)
    - punctuation   -> the lexeme itself ("+", "!=", ";", ...)
    - bad input     -> "error" (lexeme holds the message)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator


KEYWORDS = frozenset({
    "and", "class", "else", "false", "for", "fun", "if", "nil", "or",
    "print", "return", "super", "this", "true", "var", "while",
})


TOKEN_RE = re.compile(
    r"(?P<newline>\n)"
    r"|(?P<space>[ \t\r]+)"
    r"|(?P<comment>//[^\n]*)"  # single-line comment
    r'|(?P<string>"[^"]*")'  # strings may span lines
    r'|(?P<unterminated>"[^"]*\Z)'
    r"|(?P<number>\d+(?:\.\d+)?)"
    r"|(?P<identifier>[A-Za-z_][A-Za-z0-9_]*)"
    r"|(?P<op2>!=|==|<=|>=)"
    r"|(?P<op1>[(){},.;\-+/*%!=<>])"
    r"|(?P<error>.)",
    re.DOTALL,
)


@dataclass(frozen=True)
class Token:
    kind: str
    lexeme: str
    line: int


def scan(source: str) -> Iterator[Token]:
    line = 1
    pos = 0
    while pos < len(source):
        m = TOKEN_RE.match(source, pos)
        pos = m.end()
        kind = m.lastgroup
        text = m.group(kind)
        if kind == "newline":
            line += 1
        elif kind in ("space", "comment"):
            continue
        elif kind == "string":
            yield Token("string", text, line)
            line += text.count("\n")
        elif kind == "unterminated":
            yield Token("error", "Unterminated string.", line)
            line += text.count("\n")
        elif kind == "number":
            yield Token("number", text, line)
        elif kind == "identifier":
            yield Token(text if text in KEYWORDS else "identifier", text, line)
        elif kind in ("op1", "op2"):
            yield Token(text, text, line)
        else:
            yield Token("error", f"Unexpected character {text!r}.", line)
    yield Token("eof", "", line)


def scan_all(source: str) -> list[Token]:
    return list(scan(source))
