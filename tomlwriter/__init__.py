"""Serialize Python values into TOML documents."""

__version__ = "2.0.0"
__all__ = ["encoder", "fields", "text"]