"""Unit tests for the language draft validator."""
from dataclasses import replace

import pytest

from langcat.forms import validate_lang
from langcat.models import Lang, empty_lang
from langcat.utils.result import Err, Ok

from conftest import PYTHON


def test_valid_lang_is_returned_unchanged():
    result = validate_lang(PYTHON)

    assert result == Ok(PYTHON)
    assert result.unwrap() is PYTHON


def test_errors_are_accumulated_in_field_order():
    lang = Lang(key="", name="Go", description="", homepage="golang.org", tags=())

    result = validate_lang(lang)

    assert result == Err([
        "key is required",
        "description is required",
        "homepage has the wrong format",
    ])


def test_empty_draft_reports_every_required_field():
    result = validate_lang(empty_lang())

    assert result.unwrap_err() == [
        "key is required",
        "name is required",
        "description is required",
        "homepage is required",
    ]


def test_empty_homepage_skips_format_check():
    errors = validate_lang(replace(PYTHON, homepage="")).unwrap_err()

    assert errors == ["homepage is required"]


@pytest.mark.parametrize("homepage", [
    "http://example.com",
    "https://go.dev/doc",
    "ftp://files.example.org/pub",
    "HTTPS://WWW.RUST-LANG.ORG",
    "http://a",
])
def test_accepted_homepages(homepage):
    assert validate_lang(replace(PYTHON, homepage=homepage)).is_ok()


@pytest.mark.parametrize("homepage", [
    "golang.org",
    "mailto:someone@example.com",
    "gopher://example.com",
    "http://",
    "https://exa mple.com",
    "https://go.dev\n",
])
def test_rejected_homepages(homepage):
    errors = validate_lang(replace(PYTHON, homepage=homepage)).unwrap_err()

    assert errors == ["homepage has the wrong format"]


def test_tags_and_rating_are_never_checked():
    lang = replace(PYTHON, tags=(), rating=-3)

    assert validate_lang(lang) == Ok(lang)
