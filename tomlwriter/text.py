"""Rendering of TOML strings and keys."""

from __future__ import annotations

_BARE_KEY_CHARS = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
)

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\f": "\\f",
    "\r": "\\r",
    "\t": "\\t",
}


def _is_invalid_ascii(char: str) -> bool:
    code = ord(char)
    return code <= 0x08 or 0x0A <= code <= 0x1F or code == 0x7F


def needs_quoting(value: str) -> bool:
    """Tell whether a string cannot be written as a literal string."""
    return any(
        char in "'\r\n" or _is_invalid_ascii(char) for char in value
    )


def literal_string(value: str) -> str:
    """Wrap a string in single quotes, without escaping."""
    return f"'{value}'"


def _escape(char: str, multiline: bool) -> str:
    if char in _ESCAPES:
        return _ESCAPES[char]
    if char == "\n":
        return "\n" if multiline else "\\n"
    if _is_invalid_ascii(char):
        return f"\\u{ord(char):04X}"
    return char


def quoted_string(value: str, multiline: bool = False) -> str:
    """Render a basic string, or a multi-line basic string, with escapes."""
    body = "".join(_escape(char, multiline) for char in value)
    if multiline:
        return f'"""\n{body}"""'
    return f'"{body}"'


def encode_string(value: str, multiline: bool = False) -> str:
    """Render a string value, preferring the literal form."""
    if needs_quoting(value):
        return quoted_string(value, multiline)
    return literal_string(value)


def encode_key(key: str) -> str:
    """Render a single key part as a bare, literal or quoted key."""
    if not key:
        return "''"
    needs_quotation = False
    cannot_use_literal = False
    for char in key:
        if char in _BARE_KEY_CHARS:
            continue
        if char == "'":
            cannot_use_literal = True
        needs_quotation = True
    if needs_quotation and needs_quoting(key):
        cannot_use_literal = True

    if cannot_use_literal:
        return quoted_string(key, False)
    if needs_quotation:
        return literal_string(key)
    return key