"""Unit tests for client configuration loading."""
from pathlib import Path

import pytest

from langcat.config import ClientConfig, load_config
from langcat.config.settings import API_URL_ENV


@pytest.fixture(autouse=True)
def _no_env_override(monkeypatch):
    monkeypatch.delenv(API_URL_ENV, raising=False)


def test_defaults():
    config = ClientConfig()

    assert config.api.base_url == "http://localhost:8080/api"
    assert config.api.timeout == 10.0
    assert config.page.loading_on_list is False
    assert config.page.history_limit == 50
    assert config.validate().is_ok()


def test_from_dict():
    config = ClientConfig.from_dict({
        "api": {"base_url": "https://langs.example/api", "timeout": 3, "headers": {"X-Client": "cli"}},
        "page": {"loading_on_list": True, "history_limit": 5},
        "logging": {"level": "debug", "format": "text"},
    }).unwrap()

    assert config.api.base_url == "https://langs.example/api"
    assert config.api.timeout == 3.0
    assert config.api.headers == {"X-Client": "cli"}
    assert config.page.loading_on_list is True
    assert config.page.history_limit == 5
    assert config.logging.format == "text"


def test_from_dict_bad_value():
    result = ClientConfig.from_dict({"api": {"timeout": "soon"}})

    assert result.is_err()


def test_from_yaml_missing_file(tmp_path):
    result = ClientConfig.from_yaml(tmp_path / "missing.yaml")

    assert result.unwrap_err().field == "path"


def test_from_yaml_invalid(tmp_path):
    path = tmp_path / "langcat.yaml"
    path.write_text("api: [unclosed")

    assert ClientConfig.from_yaml(path).unwrap_err().field == "yaml"


@pytest.mark.parametrize("base_url", ["localhost:8080", "ftp://files.example", ""])
def test_validate_rejects_non_http_url(base_url):
    config = ClientConfig().with_api_url(base_url)

    assert config.validate().unwrap_err().field == "api.base_url"


def test_validate_rejects_bad_timeout():
    config = ClientConfig.from_dict({"api": {"timeout": 0}}).unwrap()

    assert config.validate().unwrap_err().field == "api.timeout"


def test_load_config_without_file_uses_defaults(tmp_path):
    config = load_config(tmp_path / "langcat.yaml").unwrap()

    assert config == ClientConfig()


def test_load_config_reads_file_and_env(tmp_path, monkeypatch):
    path = tmp_path / "langcat.yaml"
    path.write_text("api:\n  base_url: http://file.example/api\npage:\n  history_limit: 7\n")
    monkeypatch.setenv(API_URL_ENV, "http://env.example/api")

    config = load_config(path).unwrap()

    assert config.api.base_url == "http://env.example/api"
    assert config.page.history_limit == 7


def test_load_config_validates(tmp_path):
    path = tmp_path / "langcat.yaml"
    path.write_text("page:\n  history_limit: 0\n")

    assert load_config(path).unwrap_err().field == "page.history_limit"


def test_example_config_is_valid():
    example = Path(__file__).parent.parent / "config" / "langcat.example.yaml"

    assert load_config(example).is_ok()
