"""Serialization of Python values into TOML documents."""

from __future__ import annotations

import dataclasses
import datetime as _dt
import io
import math
import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import IO, Any, Protocol, runtime_checkable

from .fields import FieldOptions, field_options
from .text import encode_key, encode_string

_MAX_INT64 = 2**63 - 1
_MIN_INT64 = -(2**63)
_INT_PATTERN = re.compile(r"[+-]?\d+")
_NO_OPTIONS = FieldOptions()


class EncodeError(ValueError):
    """Raised when a value cannot be written as TOML."""


class JsonNumber(str):
    """A number kept in its textual JSON form."""


@runtime_checkable
class TextMarshaler(Protocol):
    """Objects that render themselves as a TOML string."""

    def marshal_text(self) -> str | bytes:
        ...


@dataclass(frozen=True)
class _Ctx:
    parent_key: tuple[str, ...] = ()
    key: str = ""
    has_key: bool = False
    inside_kv: bool = False
    skip_table_header: bool = False
    inline: bool = False
    indent: int = 0
    commented: bool = False
    options: FieldOptions = _NO_OPTIONS

    def shifted(self) -> "_Ctx":
        if not self.has_key:
            return self
        return dataclasses.replace(
            self, parent_key=self.parent_key + (self.key,), key="", has_key=False
        )

    def with_key(self, key: str) -> "_Ctx":
        return dataclasses.replace(self, key=key, has_key=True)

    @property
    def is_root(self) -> bool:
        return not self.parent_key and not self.has_key


@dataclass
class _Entry:
    key: str
    value: Any
    options: FieldOptions


@dataclass
class _Table:
    kvs: list[_Entry] = field(default_factory=list)
    tables: list[_Entry] = field(default_factory=list)

    @staticmethod
    def _push(entries: list[_Entry], key: str, value: Any, options: FieldOptions) -> None:
        if any(e.key == key for e in entries):
            return
        entries.append(_Entry(key, value, options))

    def push_kv(self, key: str, value: Any, options: FieldOptions) -> None:
        self._push(self.kvs, key, value, options)

    def push_table(self, key: str, value: Any, options: FieldOptions) -> None:
        self._push(self.tables, key, value, options)


def _is_struct(value: Any) -> bool:
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _is_scalar_like(value: Any) -> bool:
    return isinstance(value, (_dt.date, _dt.time)) or isinstance(value, TextMarshaler)


def _plain_float(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def _format_float(value: float) -> str:
    if math.isnan(value):
        return "nan"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    if value.is_integer():
        return f"{value:.1f}"
    return format(Decimal(repr(value)), "f")


def _format_fraction(microsecond: int) -> str:
    if not microsecond:
        return ""
    return "." + f"{microsecond:06d}".rstrip("0")


def _format_datetime(value: _dt.datetime) -> str:
    base = (
        f"{value.year:04d}-{value.month:02d}-{value.day:02d}T"
        f"{value.hour:02d}:{value.minute:02d}:{value.second:02d}"
    )
    offset = value.utcoffset()
    if offset is None:
        return base + (f".{value.microsecond:06d}" if value.microsecond else "")
    base += _format_fraction(value.microsecond)
    seconds = int(offset.total_seconds())
    if seconds == 0:
        return base + "Z"
    sign = "+" if seconds > 0 else "-"
    minutes = abs(seconds) // 60
    return f"{base}{sign}{minutes // 60:02d}:{minutes % 60:02d}"


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    if _is_struct(value):
        for f in dataclasses.fields(value):
            if field_options(f).skip:
                continue
            if not _is_empty(getattr(value, f.name)):
                return False
        return True
    if isinstance(value, (str, bytes, list, tuple, dict)):
        return len(value) == 0
    if isinstance(value, (bool, int, float)):
        return not value
    return False


def _should_omit(options: FieldOptions, value: Any) -> bool:
    return options.omitempty and _is_empty(value)


def _will_convert_to_table(ctx: _Ctx, value: Any) -> bool:
    if value is None or _is_scalar_like(value):
        return False
    if isinstance(value, dict) or _is_struct(value):
        return not ctx.inline
    return False


def _will_convert_to_table_or_array_table(ctx: _Ctx, value: Any) -> bool:
    if ctx.inside_kv:
        return False
    if isinstance(value, (list, tuple)):
        if not value:
            return False
        return all(_will_convert_to_table(ctx, item) for item in value)
    return _will_convert_to_table(ctx, value)


def _walk_struct(ctx: _Ctx, table: _Table, value: Any) -> None:
    for f in dataclasses.fields(value):
        opts = field_options(f)
        if opts.skip:
            continue
        item = getattr(value, f.name)
        if opts.flatten:
            if _is_struct(item):
                _walk_struct(ctx, table, item)
            continue
        if item is None:
            continue
        if opts.inline or not _will_convert_to_table_or_array_table(ctx, item):
            table.push_kv(opts.name, item, opts)
        else:
            table.push_table(opts.name, item, opts)


class Encoder:
    """Writes TOML documents to a text stream."""

    def __init__(
        self,
        stream: IO[str],
        *,
        tables_inline: bool = False,
        arrays_multiline: bool = False,
        indent_symbol: str = "  ",
        indent_tables: bool = False,
        marshal_json_numbers: bool = False,
    ) -> None:
        self.stream = stream
        self.tables_inline = tables_inline
        self.arrays_multiline = arrays_multiline
        self.indent_symbol = indent_symbol
        self.indent_tables = indent_tables
        self.marshal_json_numbers = marshal_json_numbers

    def encode(self, value: Any) -> None:
        """Write the TOML representation of ``value`` to the stream."""
        if value is None:
            raise EncodeError("toml: cannot encode a nil interface")
        document = self._encode(_Ctx(inline=self.tables_inline), value)
        try:
            self.stream.write(document)
        except Exception as exc:
            raise EncodeError(f"toml: cannot write: {exc}") from exc

    def _indent(self, level: int) -> str:
        return self.indent_symbol * level

    def _comment(self, indent: int, comment: str) -> str:
        parts = []
        while comment:
            line, _, comment = comment.partition("\n")
            parts.append(f"{self._indent(indent)}# {line}\n")
        return "".join(parts)

    def _json_number(self, ctx: _Ctx, value: JsonNumber) -> str:
        if value == "":
            return "0"
        if _INT_PATTERN.fullmatch(value):
            number = int(value)
            if _MIN_INT64 <= number <= _MAX_INT64:
                return self._encode(ctx, number)
        if "_" not in value and value == value.strip():
            try:
                return self._encode(ctx, float(value))
            except ValueError:
                pass
        raise EncodeError(f"toml: unable to convert {str(value)!r} to int64 or float64")

    def _encode(self, ctx: _Ctx, value: Any) -> str:
        if isinstance(value, _dt.datetime):
            return _format_datetime(value)
        if isinstance(value, _dt.date):
            return value.isoformat()
        if isinstance(value, _dt.time):
            return value.replace(tzinfo=None).isoformat()
        if isinstance(value, JsonNumber) and self.marshal_json_numbers:
            return self._json_number(ctx, value)
        if isinstance(value, TextMarshaler):
            if ctx.is_root:
                raise EncodeError(
                    f"toml: type {type(value).__name__} implementing the "
                    "TextMarshaler interface cannot be a root element"
                )
            try:
                text = value.marshal_text()
            except Exception as exc:
                raise EncodeError(f"toml: cannot marshal text: {exc}") from exc
            if isinstance(text, bytes):
                text = text.decode("utf-8")
            return encode_string(text, ctx.options.multiline)
        if isinstance(value, dict):
            return self._encode_map(ctx, value)
        if _is_struct(value):
            table = _Table()
            _walk_struct(ctx, table, value)
            return self._encode_table(ctx, table)
        if isinstance(value, (list, tuple)):
            return self._encode_slice(ctx, value)
        if value is None:
            raise EncodeError("toml: encoding a nil interface is not supported")
        if isinstance(value, str):
            return encode_string(value, ctx.options.multiline)
        if isinstance(value, bool):
            return "true" if value else "false"
        if isinstance(value, int):
            if value > _MAX_INT64:
                raise EncodeError(
                    f"toml: not encoding uint ({value}) greater than max int64 ({_MAX_INT64})"
                )
            if value < _MIN_INT64:
                raise EncodeError(f"toml: not encoding int ({value}) lower than min int64")
            return str(value)
        if isinstance(value, float):
            return _format_float(value)
        raise EncodeError(f"toml: cannot encode value of type {type(value).__name__}")

    def _key_to_string(self, key: Any) -> str:
        if isinstance(key, str):
            return key
        if isinstance(key, TextMarshaler):
            try:
                text = key.marshal_text()
            except Exception as exc:
                raise EncodeError(f"toml: error marshalling key {key!r} from text: {exc}") from exc
            return text.decode("utf-8") if isinstance(text, bytes) else text
        if isinstance(key, int) and not isinstance(key, bool):
            return str(key)
        if isinstance(key, float):
            return _plain_float(key)
        raise EncodeError(f"toml: type {type(key).__name__} is not supported as a map key")

    def _encode_map(self, ctx: _Ctx, value: dict) -> str:
        table = _Table()
        for raw_key, item in value.items():
            if item is None:
                continue
            key = self._key_to_string(raw_key)
            if _will_convert_to_table_or_array_table(ctx, item):
                table.push_table(key, item, _NO_OPTIONS)
            else:
                table.push_kv(key, item, _NO_OPTIONS)
        table.kvs.sort(key=lambda e: e.key)
        table.tables.sort(key=lambda e: e.key)
        return self._encode_table(ctx, table)

    def _encode_kv(self, ctx: _Ctx, options: FieldOptions, value: Any) -> str:
        prefix = ""
        if not ctx.inline:
            prefix = (
                self._comment(ctx.indent, options.comment)
                + ("# " if ctx.commented else "")
                + self._indent(ctx.indent)
            )
        sub = dataclasses.replace(ctx, inside_kv=True, options=options).shifted()
        return f"{prefix}{encode_key(ctx.key)} = {self._encode(sub, value)}"

    def _table_header(self, ctx: _Ctx) -> str:
        if not ctx.parent_key:
            return ""
        keys = ".".join(encode_key(k) for k in ctx.parent_key)
        return (
            self._comment(ctx.indent, ctx.options.comment)
            + ("# " if ctx.commented else "")
            + self._indent(ctx.indent)
            + f"[{keys}]\n"
        )

    def _encode_table(self, ctx: _Ctx, table: _Table) -> str:
        ctx = ctx.shifted()
        if ctx.inside_kv or (ctx.inline and not ctx.is_root):
            return self._encode_table_inline(ctx, table)

        parts = []
        if not ctx.skip_table_header:
            parts.append(self._table_header(ctx))
            if self.indent_tables and ctx.parent_key:
                ctx = dataclasses.replace(ctx, indent=ctx.indent + 1)
        ctx = dataclasses.replace(ctx, skip_table_header=False)

        has_kv = False
        for kv in table.kvs:
            if _should_omit(kv.options, kv.value):
                continue
            has_kv = True
            ctx = ctx.with_key(kv.key)
            sub = dataclasses.replace(ctx, commented=kv.options.commented or ctx.commented)
            parts.append(self._encode_kv(sub, kv.options, kv.value) + "\n")

        first = True
        for entry in table.tables:
            if _should_omit(entry.options, entry.value):
                continue
            if not first or has_kv:
                parts.append("\n")
            first = False
            ctx = dataclasses.replace(ctx.with_key(entry.key), options=entry.options)
            sub = dataclasses.replace(ctx, commented=ctx.commented or entry.options.commented)
            parts.append(self._encode(sub, entry.value))
        return "".join(parts)

    def _encode_table_inline(self, ctx: _Ctx, table: _Table) -> str:
        if table.tables:
            raise EncodeError("inline table cannot contain nested tables, only key-values")
        items = [
            self._encode_kv(ctx.with_key(kv.key), kv.options, kv.value)
            for kv in table.kvs
            if not _should_omit(kv.options, kv.value)
        ]
        return "{" + ", ".join(items) + "}"

    def _encode_slice(self, ctx: _Ctx, value: list | tuple) -> str:
        if not value:
            return "[]"
        if _will_convert_to_table_or_array_table(ctx, value):
            return self._encode_array_table(ctx, value)
        return self._encode_array(ctx, value)

    def _encode_array_table(self, ctx: _Ctx, value: list | tuple) -> str:
        ctx = ctx.shifted()
        header = ("# " if ctx.commented else "")
        if self.indent_tables:
            header += self._indent(ctx.indent)
        header += "[[" + ".".join(encode_key(k) for k in ctx.parent_key) + "]]\n"
        ctx = dataclasses.replace(ctx, skip_table_header=True)
        comment = self._comment(ctx.indent, ctx.options.comment)
        if self.indent_tables:
            ctx = dataclasses.replace(ctx, indent=ctx.indent + 1)
        return comment + "\n".join(header + self._encode(ctx, item) for item in value)

    def _encode_array(self, ctx: _Ctx, value: list | tuple) -> str:
        multiline = ctx.options.multiline or self.arrays_multiline
        sub = dataclasses.replace(ctx, options=_NO_OPTIONS)
        if not multiline:
            return "[" + ", ".join(self._encode(sub, item) for item in value) + "]"
        sub = dataclasses.replace(sub, indent=sub.indent + 1)
        pad = self._indent(sub.indent)
        body = ",\n".join(pad + self._encode(sub, item) for item in value)
        return f"[\n{body}\n{self._indent(ctx.indent)}]"


def marshal(value: Any, **kwargs: Any) -> str:
    """Return the TOML document for ``value``; kwargs configure the Encoder."""
    buffer = io.StringIO()
    Encoder(buffer, **kwargs).encode(value)
    return buffer.getvalue()