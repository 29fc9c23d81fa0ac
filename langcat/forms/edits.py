"""Draft transforms dispatched through UpdateForm."""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from langcat.models import Lang

DraftEdit = Callable[[Lang], Lang]


def set_key(value: str) -> DraftEdit:
    return lambda draft: replace(draft, key=value)


def set_name(value: str) -> DraftEdit:
    return lambda draft: replace(draft, name=value)


def set_description(value: str) -> DraftEdit:
    return lambda draft: replace(draft, description=value)


def set_homepage(value: str) -> DraftEdit:
    return lambda draft: replace(draft, homepage=value)


def parse_tags(text: str) -> tuple[str, ...]:
    """Split a comma-separated tag field, dropping blanks."""
    return tuple(part.strip() for part in text.split(",") if part.strip())


def set_tags(value: str) -> DraftEdit:
    """Replace the draft's tags with the comma-separated labels in value."""
    tags = parse_tags(value)
    return lambda draft: replace(draft, tags=tags)


# Editable form fields. Rating is displayed only, so it has no setter.
FIELD_SETTERS: dict[str, Callable[[str], DraftEdit]] = {
    "key": set_key,
    "name": set_name,
    "description": set_description,
    "homepage": set_homepage,
    "tags": set_tags,
}


def setter_for(field_name: str, value: str) -> DraftEdit:
    """
    Build the edit for one form field.

    Args:
        field_name: Form field (key, name, description, homepage, tags)
        value: Raw text entered for the field

    Returns:
        Transform to dispatch with UpdateForm

    Raises:
        KeyError: If the field is not editable
    """
    try:
        factory = FIELD_SETTERS[field_name]
    except KeyError:
        raise KeyError(f"Field is not editable: {field_name}") from None
    return factory(value)
