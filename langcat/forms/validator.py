"""Validator for language drafts submitted through the edit form."""

from __future__ import annotations

import re

from langcat.models import Lang
from langcat.utils.result import Err, Ok, Result

HOMEPAGE_PATTERN = re.compile(r"(https?|ftp)://[^\s/$.?#][^\s]*", re.IGNORECASE)

REQUIRED_FIELDS = ("key", "name", "description", "homepage")


def validate_lang(lang: Lang) -> Result[Lang, list[str]]:
    """
    Check a draft before it is persisted.

    Every rule is evaluated, so the caller gets all messages at once in
    field order (key, name, description, homepage). Tags and rating are
    never checked.

    Args:
        lang: Draft to check

    Returns:
        Ok with the same Lang, or Err with the list of messages
    """
    errors: list[str] = []

    for name in REQUIRED_FIELDS:
        if not getattr(lang, name):
            errors.append(f"{name} is required")

    # Format is only checked once there is something to check
    if lang.homepage and not HOMEPAGE_PATTERN.fullmatch(lang.homepage):
        errors.append("homepage has the wrong format")

    if errors:
        return Err(errors)
    return Ok(lang)
