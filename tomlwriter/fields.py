"""Per-field encoding options for dataclasses, driven by tag strings."""

from __future__ import annotations

import dataclasses
import unicodedata
from dataclasses import dataclass
from typing import Any

TAG_KEY = "toml"
COMMENT_KEY = "comment"
EMBEDDED_KEY = "embedded"

_NAME_PUNCTUATION = "!#$%&()*+-./:;<=>?@[]^_{|}~ "


@dataclass(frozen=True)
class FieldOptions:
    """Options that control how a single field is written."""

    name: str = ""
    multiline: bool = False
    inline: bool = False
    omitempty: bool = False
    commented: bool = False
    comment: str = ""
    skip: bool = False
    embedded: bool = False

    @property
    def flatten(self) -> bool:
        """True when the field's own fields are merged into its parent."""
        return self.embedded and not self.name


def parse_tag(tag: str) -> FieldOptions:
    """Split a tag such as ``"name,omitempty,multiline"`` into options.

    Unknown options are ignored. The name is returned as written, even if
    it is not a valid name.
    """
    name, sep, raw = tag.partition(",")
    if not sep:
        return FieldOptions(name=tag)
    flags = {option for option in raw.split(",") if option}
    return FieldOptions(
        name=name,
        multiline="multiline" in flags,
        inline="inline" in flags,
        omitempty="omitempty" in flags,
        commented="commented" in flags,
    )


def is_valid_name(name: str) -> bool:
    """Tell whether a tag name may be used as a key name."""
    if not name:
        return False
    for char in name:
        if char in _NAME_PUNCTUATION:
            continue
        category = unicodedata.category(char)
        if not (category.startswith("L") or category == "Nd"):
            return False
    return True


def toml_field(tag: str = "", *, comment: str = "", **kwargs: Any) -> Any:
    """Declare a dataclass field carrying a tag and an optional comment.

    ``embedded=True`` marks a field whose value's fields are written as if
    they belonged to the enclosing object (unless the tag gives it a name).
    Remaining keyword arguments go to :func:`dataclasses.field`.
    """
    embedded = bool(kwargs.pop("embedded", False))
    metadata = dict(kwargs.pop("metadata", None) or {})
    metadata[TAG_KEY] = tag
    metadata[COMMENT_KEY] = comment
    metadata[EMBEDDED_KEY] = embedded
    return dataclasses.field(metadata=metadata, **kwargs)


def field_options(field: dataclasses.Field) -> FieldOptions:
    """Resolve the encoding options of a dataclass field."""
    metadata = field.metadata
    tag = metadata.get(TAG_KEY, "")
    if field.name.startswith("_") or tag == "-":
        return FieldOptions(name=field.name, skip=True)

    parsed = parse_tag(tag)
    embedded = bool(metadata.get(EMBEDDED_KEY, False))
    name = parsed.name if is_valid_name(parsed.name) else ""
    if not name and not embedded:
        name = field.name

    return dataclasses.replace(
        parsed,
        name=name,
        comment=metadata.get(COMMENT_KEY, ""),
        embedded=embedded,
    )