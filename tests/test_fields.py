import dataclasses

import pytest

from tomlwriter.fields import (
    FieldOptions,
    field_options,
    is_valid_name,
    parse_tag,
    toml_field,
)


def _options(cls):
    return {f.name: field_options(f) for f in dataclasses.fields(cls)}


def test_parse_tag_plain_name():
    assert parse_tag("hello") == FieldOptions(name="hello")


def test_parse_tag_empty_name_with_options():
    opts = parse_tag(",omitempty,multiline")
    assert opts.name == ""
    assert opts.omitempty is True
    assert opts.multiline is True
    assert opts.inline is False
    assert opts.commented is False


def test_parse_tag_all_options():
    opts = parse_tag("dependencies,multiline,omitempty,inline,commented")
    assert opts == FieldOptions(
        name="dependencies",
        multiline=True,
        omitempty=True,
        inline=True,
        commented=True,
    )


def test_parse_tag_ignores_unknown_options():
    assert parse_tag("x,bogus,,inline") == FieldOptions(name="x", inline=True)


@pytest.mark.parametrize(
    "name, expected",
    [
        ("hello", True),
        ("#", True),
        ("pprof-listen", True),
        ("max-metrics-per-target", True),
        ("café", True),
        ("a1", True),
        ("", False),
        ("\\", False),
        ('"', False),
        ("a'b", False),
    ],
)
def test_is_valid_name(name, expected):
    assert is_valid_name(name) is expected


def test_field_options_names():
    @dataclasses.dataclass
    class Doc:
        String: str = toml_field("hello", default="world")
        OkSym: str = toml_field("#", default="")
        Bad: str = toml_field("\\", default="")
        Plain: str = ""

    opts = _options(Doc)
    assert opts["String"].name == "hello"
    assert opts["OkSym"].name == "#"
    assert opts["Bad"].name == "Bad"
    assert opts["Plain"] == FieldOptions(name="Plain")


def test_field_options_skip_dash_and_private():
    @dataclasses.dataclass
    class Doc:
        Public: str = toml_field("-", default="hidden")
        _private: str = "hidden"
        Shown: str = "shown"

    opts = _options(Doc)
    assert opts["Public"].skip is True
    assert opts["_private"].skip is True
    assert opts["Shown"].skip is False


def test_field_options_comment_and_flags():
    @dataclasses.dataclass
    class Doc:
        From: str = toml_field(
            "from,omitempty", comment="from in graphite-web format", default=""
        )
        Tls: int = toml_field("TLS,commented", comment="Encryption", default=0)

    opts = _options(Doc)
    assert opts["From"] == FieldOptions(
        name="from", omitempty=True, comment="from in graphite-web format"
    )
    assert opts["Tls"].name == "TLS"
    assert opts["Tls"].commented is True
    assert opts["Tls"].comment == "Encryption"


def test_field_options_embedded():
    @dataclasses.dataclass
    class Inner:
        value: str = ""

    @dataclasses.dataclass
    class Doc:
        Embedded: Inner = toml_field(embedded=True, default_factory=Inner)
        Named: Inner = toml_field("named", embedded=True, default_factory=Inner)

    opts = _options(Doc)
    assert opts["Embedded"].flatten is True
    assert opts["Embedded"].name == ""
    assert opts["Named"].flatten is False
    assert opts["Named"].name == "named"


def test_toml_field_passes_dataclass_arguments():
    @dataclasses.dataclass
    class Doc:
        A: int = toml_field("a", default=3, metadata={"extra": 1})
        B: list = toml_field("b", default_factory=list)

    doc = Doc()
    assert doc.A == 3
    assert doc.B == []
    a_field = dataclasses.fields(Doc)[0]
    assert a_field.metadata["extra"] == 1
    assert field_options(a_field).name == "a"