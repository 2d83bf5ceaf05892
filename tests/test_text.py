import pytest

from tomlwriter.text import (
    encode_key,
    encode_string,
    literal_string,
    needs_quoting,
    quoted_string,
)


@pytest.mark.parametrize(
    "value, expected",
    [
        ("world", False),
        ("", False),
        ("tab\there", False),
        ("Ę😀", False),
        ("it's", True),
        ("a\nb", True),
        ("a\rb", True),
        ("\x1a", True),
        ("\x00", True),
        ("\x7f", True),
    ],
)
def test_needs_quoting(value, expected):
    assert needs_quoting(value) is expected


def test_literal_string():
    assert literal_string("world") == "'world'"
    assert literal_string("") == "''"


def test_encode_string_literal():
    assert encode_string("world") == "'world'"
    assert encode_string("a string") == "'a string'"


def test_encode_string_escapes():
    assert encode_string("'\b\f\r\t\"\\") == '"\'\\b\\f\\r\\t\\"\\\\"'


def test_encode_string_utf8():
    assert encode_string("'Ę") == "\"'Ę\""
    assert encode_string("'\u10A85") == "\"'\u10A85\""
    assert encode_string("'😀") == "\"'😀\""


def test_encode_string_control_char():
    assert encode_string("'\x1a") == "\"'\\u001A\""


def test_encode_string_newline():
    assert encode_string("hello\nworld") == '"hello\\nworld"'


def test_encode_string_multiline_forced():
    assert encode_string("hello\nworld", multiline=True) == '"""\nhello\nworld"""'


def test_encode_string_multiline_without_special_chars_stays_literal():
    assert encode_string("Hello\\World", multiline=True) == "'Hello\\World'"


def test_quoted_string_plain():
    assert quoted_string("abc") == '"abc"'
    assert quoted_string("a\\b", multiline=True) == '"""\na\\\\b"""'


@pytest.mark.parametrize(
    "key, expected",
    [
        ("hello", "hello"),
        ("key-1_x", "key-1_x"),
        ("1", "1"),
        ("-inf", "-inf"),
        ("", "''"),
        ("hel\nlo", '"hel\\nlo"'),
        ('hel"lo', "'hel\"lo'"),
        ("map1.1", "'map1.1'"),
        ("+inf", "'+inf'"),
        ("1.002", "'1.002'"),
        ("a\n", '"a\\n"'),
        ("in\ner", '"in\\ner"'),
        ("#", "'#'"),
        ("it's", '"it\'s"'),
        ("café", "'café'"),
    ],
)
def test_encode_key(key, expected):
    assert encode_key(key) == expected