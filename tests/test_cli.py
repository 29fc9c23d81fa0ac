"""Tests for the langcat command line."""
import json

import pytest
from click.testing import CliRunner

from langcat import cli as cli_module
from langcat.cli import cli
from langcat.config.settings import API_URL_ENV
from langcat.utils.result import ExitCode

from conftest import FakeTransport


@pytest.fixture
def transport(monkeypatch):
    fake = FakeTransport()
    monkeypatch.setattr(cli_module, "create_transport", lambda config: fake)
    monkeypatch.delenv(API_URL_ENV, raising=False)
    return fake


@pytest.fixture
def invoke(tmp_path, transport):
    runner = CliRunner()

    def run(*args):
        return runner.invoke(
            cli,
            ["--config", str(tmp_path / "langcat.yaml"), "--log-level", "error", "--format", "json", *args],
        )

    return run


def test_list(invoke, transport):
    result = invoke("list")

    assert result.exit_code == 0, result.output
    page = json.loads(result.output)
    assert page["page"] == "Home"
    assert [lang["key"] for lang in page["languages"]] == ["python", "haskell"]
    assert "functional" in page["tags"]
    assert transport.closed


def test_show(invoke):
    result = invoke("show", "haskell")

    page = json.loads(result.output)
    assert page["page"] == "ViewLang"
    assert page["lang"]["name"] == "Haskell"


def test_show_missing_language(invoke):
    result = invoke("show", "cobol")

    assert result.exit_code == ExitCode.PAGE_ERROR
    assert json.loads(result.output) == {"page": "Error", "message": "not found: cobol"}


def test_tag(invoke):
    result = invoke("tag", "scripting")

    page = json.loads(result.output)
    assert page == {"page": "ViewTag", "tag": "scripting", "languages": [{"key": "python", "name": "Python"}]}


def test_new_saves_and_returns_home(invoke, transport):
    result = invoke(
        "new",
        "--set", "key=go",
        "--set", "name=Go",
        "--set", "description=Simple and fast",
        "--set", "homepage=https://go.dev",
        "--set", "tags=compiled, concurrent",
    )

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["page"] == "Home"
    assert transport.saved[0].tags == ("compiled", "concurrent")


def test_new_with_invalid_fields(invoke, transport):
    result = invoke("new", "--set", "name=Go", "--set", "homepage=golang.org")

    assert result.exit_code == ExitCode.VALIDATION_FAILED
    page = json.loads(result.output)
    assert page["page"] == "EditLang"
    assert page["errors"] == [
        "key is required",
        "description is required",
        "homepage has the wrong format",
    ]
    assert page["draft"]["name"] == "Go"
    assert transport.saved == []


def test_rating_cannot_be_set(invoke):
    result = invoke("new", "--set", "rating=5")

    assert result.exit_code == 2
    assert "not editable" in result.output


def test_set_requires_field_and_value(invoke):
    result = invoke("new", "--set", "name")

    assert result.exit_code == 2


def test_edit_keeps_key(invoke, transport):
    result = invoke("edit", "python", "--set", "key=py", "--set", "name=Python 3")

    assert result.exit_code == 0, result.output
    assert transport.saved[0].key == "python"
    assert transport.saved[0].name == "Python 3"
    assert transport.saved[0].rating == 5


def test_edit_missing_language(invoke, transport):
    result = invoke("edit", "cobol", "--set", "name=COBOL")

    assert result.exit_code == ExitCode.PAGE_ERROR
    assert "put_lang" not in transport.ops()


def test_failed_save_shows_draft(invoke, transport):
    transport.failures["put_lang"] = "read-only catalog"

    result = invoke("edit", "python", "--set", "name=Python 3")

    assert result.exit_code == ExitCode.PAGE_ERROR
    page = json.loads(result.output)
    assert page["message"] == "read-only catalog"
    assert page["draft"]["name"] == "Python 3"


def test_check_valid_file(invoke, tmp_path):
    path = tmp_path / "go.yaml"
    path.write_text(
        "key: go\nname: Go\ndescription: Simple\nhomepage: https://go.dev\ntags: [compiled]\n"
    )

    result = invoke("check", str(path))

    assert result.exit_code == 0, result.output
    assert json.loads(result.output)["status"] == "valid"


def test_check_invalid_file(invoke, tmp_path, transport):
    path = tmp_path / "go.json"
    path.write_text(json.dumps({"name": "Go", "homepage": "golang.org"}))

    result = invoke("check", str(path))

    assert result.exit_code == ExitCode.VALIDATION_FAILED
    assert json.loads(result.output)["errors"] == [
        "key is required",
        "description is required",
        "homepage has the wrong format",
    ]
    assert transport.calls == []


def test_bad_api_url(invoke):
    result = invoke("--api-url", "not-a-url", "list")

    assert result.exit_code == ExitCode.CONFIG_ERROR
    assert "api.base_url" in result.output


def test_check_rejects_string_tags(invoke, tmp_path):
    path = tmp_path / "haskell.yaml"
    path.write_text("key: haskell\nname: Haskell\ndescription: Lazy\nhomepage: https://haskell.org\ntags: lazy\n")

    result = invoke("check", str(path))

    assert result.exit_code == ExitCode.GENERAL_ERROR
    assert "tags must be a list of strings" in json.loads(result.output)["message"]
