# tomlwriter

`tomlwriter` turns Python values (mappings, dataclasses, lists and tuples,
strings, numbers, booleans, dates and times) into TOML documents.

## Installing

    pip install tomlwriter

## Quick start

```python
from dataclasses import dataclass
from tomlwriter.encoder import marshal

@dataclass
class Config:
    version: int
    name: str
    tags: list[str]

print(marshal(Config(version=2, name="tomlwriter", tags=["python", "toml"])))
```

produces

```toml
version = 2
name = 'tomlwriter'
tags = ['python', 'toml']
```

## Encoding rules

- Mapping keys are written in sorted order. Dataclass fields are written in
  the order they are declared, under their own names. Fields whose names
  start with `_` are left out.
- Mapping keys may be strings, integers, floats (written in plain decimal
  form, e.g. `'1.1'`) or `TextMarshaler` objects. Any other key type is an
  error.
- Nested mappings and dataclasses become `[tables]`. A sequence holding only
  tables becomes an `[[array of tables]]`. Every other sequence becomes an
  `[array]`, and any table inside it is written inline.
- Intermediate tables are always written. Tables are separated by an empty
  line.
- Strings are written as literal strings (`'...'`) unless they contain a
  single quote, a newline or a control character. Those are written as basic
  strings with escapes.
- Keys made only of `A-Z a-z 0-9 - _` are written bare. Other keys are
  quoted, in literal form where possible.
- `None` values inside mappings and dataclasses are left out. `None` at the
  top level or inside an array is an error.
- Integers must fit in the signed 64-bit range.
- Floats keep a decimal point (`42.0`). NaN and the infinities are written
  as `nan`, `inf` and `-inf`.
- `datetime.datetime` values are written as offset date-times (UTC as `Z`)
  or local date-times. `datetime.date` values are written as local dates and
  `datetime.time` values as local times.
- Objects with a `marshal_text()` method (the `TextMarshaler` protocol) are
  written as strings. It may return `str` or `bytes`. Such objects cannot be
  the document's root.

Every failure raises `tomlwriter.encoder.EncodeError`, a `ValueError`. This
includes a failure to write to the stream.

## Encoder options

`Encoder` writes to a text stream and takes keyword options:

```python
import sys
from tomlwriter.encoder import Encoder

Encoder(sys.stdout, indent_tables=True).encode(
    {"root": "value0", "level1": {"one": "value1", "level2": {"two": "value2"}}}
)
```

```toml
root = 'value0'

[level1]
  one = 'value1'

  [level1.level2]
    two = 'value2'
```

| option                 | effect                                                        |
|------------------------|---------------------------------------------------------------|
| `tables_inline`        | write every table below the root as an `{inline table}`       |
| `arrays_multiline`     | write arrays with one element per line                        |
| `indent_symbol`        | string repeated for each indentation level (two spaces)       |
| `indent_tables`        | indent the contents of tables and arrays of tables            |
| `marshal_json_numbers` | write `JsonNumber` values as integers or floats, not strings  |

`JsonNumber` is a `str` subclass that holds a number in its textual form.
With `marshal_json_numbers`, an empty `JsonNumber` is written as `0`. Text
that is neither a 64-bit integer nor a float is an error.

`marshal(value, **kwargs)` accepts the same options and returns the document
as a string.

## Field options

Dataclass fields can carry a tag in `name,option,...` form. Use `toml_field`
from `tomlwriter.fields` to attach one:

```python
from dataclasses import dataclass
from tomlwriter.fields import toml_field

@dataclass
class TLS:
    cipher: str = toml_field("cipher")
    version: str = toml_field("version")

@dataclass
class Server:
    host: str = toml_field("host", comment="Host IP to connect to.")
    port: int = toml_field("port", comment="Port of the remote server.")
    tls: TLS = toml_field("TLS,commented", comment="Encryption parameters (optional)")
```

The options are:

- `multiline`: strings that need quoting are written as `"""multi-line"""`
  strings, and arrays are written one element per line.
- `inline`: a table is written as an inline table.
- `omitempty`: empty values are left out. Empty values are `None`, zero,
  `False`, an empty string or container, and a dataclass whose fields are all
  empty.
- `commented`: the value, and everything beneath it, is prefixed with `# `.

More about tags:

- A tag of `-` leaves the field out.
- An empty or invalid tag name keeps the field's own name.
- `comment` writes a `# comment` line before the value, or several lines if
  the comment contains newlines. Comments are not written inside inline
  tables.
- `embedded=True` merges the fields of a dataclass value into the enclosing
  table, unless the tag gives the field a name.
- Any other keyword arguments to `toml_field` go to `dataclasses.field`.

`parse_tag`, `is_valid_name` and `field_options` expose the parsing: they
return the resulting `FieldOptions` for a tag or a field, or tell whether a
name is valid.

`tomlwriter.text` holds the string and key rendering helpers:
`needs_quoting`, `literal_string`, `quoted_string`, `encode_string` and
`encode_key`.

## What it does not do

`tomlwriter` only writes TOML. It does not read or parse TOML documents, and
it has no command-line tool.