"""Edit form support: draft validation and field edits."""

from langcat.forms.edits import (
    FIELD_SETTERS,
    DraftEdit,
    parse_tags,
    set_description,
    set_homepage,
    set_key,
    set_name,
    set_tags,
    setter_for,
)
from langcat.forms.validator import HOMEPAGE_PATTERN, validate_lang

__all__ = [
    # Validation
    "validate_lang",
    "HOMEPAGE_PATTERN",
    # Edits
    "DraftEdit",
    "FIELD_SETTERS",
    "parse_tags",
    "set_key",
    "set_name",
    "set_description",
    "set_homepage",
    "set_tags",
    "setter_for",
]
