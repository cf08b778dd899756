import pytest
from hypothesis import given, strategies as st

from bytevm.reader.scanner import Token, scan, scan_all


def kinds(source):
    return [(t.kind, t.lexeme) for t in scan(source)]


@pytest.mark.parametrize(
    "source,expected",
    [
        ("1 + 2", [("number", "1"), ("+", "+"), ("number", "2"), ("eof", "")]),
        ("3.25", [("number", "3.25"), ("eof", "")]),
        ("12.", [("number", "12"), (".", "."), ("eof", "")]),
        ("! != = == < <= > >=", [
            ("!", "!"), ("!=", "!="), ("=", "="), ("==", "=="),
            ("<", "<"), ("<=", "<="), (">", ">"), (">=", ">="), ("eof", ""),
        ]),
        ("(){},.;-+/*%", [
            ("(", "("), (")", ")"), ("{", "{"), ("}", "}"), (",", ","), (".", "."),
            (";", ";"), ("-", "-"), ("+", "+"), ("/", "/"), ("*", "*"), ("%", "%"), ("eof", ""),
        ]),
        ("true false nil", [("true", "true"), ("false", "false"), ("nil", "nil"), ("eof", "")]),
        ("var answer_2 = nil;", [
            ("var", "var"), ("identifier", "answer_2"), ("=", "="), ("nil", "nil"), (";", ";"), ("eof", ""),
        ]),
        ("print nilly", [("print", "print"), ("identifier", "nilly"), ("eof", "")]),
        ('"hi there"', [("string", '"hi there"'), ("eof", "")]),
        ("1 // a comment\n2", [("number", "1"), ("number", "2"), ("eof", "")]),
        ("", [("eof", "")]),
        ("   \t\r\n ", [("eof", "")]),
    ]
)
def test_scan(source, expected):
    assert kinds(source) == expected


def test_line_numbers():
    tokens = scan_all('1\n// two\n"a\nb" 3\n\n4')
    assert [(t.kind, t.line) for t in tokens] == [
        ("number", 1),
        ("string", 3),
        ("number", 4),
        ("number", 6),
        ("eof", 6),
    ]


def test_bad_input_becomes_error_tokens():
    assert scan_all("1 @ 2") == [
        Token("number", "1", 1),
        Token("error", "Unexpected character '@'.", 1),
        Token("number", "2", 1),
        Token("eof", "", 1),
    ]
    assert scan_all('"abc')[0] == Token("error", "Unterminated string.", 1)


def test_scan_is_lazy():
    tokens = scan("1 2")
    assert next(tokens) == Token("number", "1", 1)


@given(st.text(max_size=80))
def test_every_source_ends_in_exactly_one_eof(source):
    tokens = scan_all(source)
    assert tokens[-1].kind == "eof"
    assert [t.kind for t in tokens].count("eof") == 1
    assert all(t.line >= 1 for t in tokens)
    lines = [t.line for t in tokens]
    assert lines == sorted(lines)
