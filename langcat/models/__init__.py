"""Data models for langcat."""

from langcat.models.catalog import (
    Key,
    Lang,
    LangSummary,
    Tag,
    TagSummary,
    empty_lang,
)

__all__ = [
    "Key",
    "Tag",
    "Lang",
    "LangSummary",
    "TagSummary",
    "empty_lang",
]
