from __future__ import annotations

from pathlib import Path

import pytest

from graph_api_binding.config import DEFAULT_API_VERSION, DEFAULT_TIMEOUT, GraphSettings, load_settings, settings_from_mapping
from graph_api_binding.core.context import GraphContext
from graph_api_binding.core.registry import MappingRegistry, default_registry


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch, tmp_path):
    for name in ("GRAPH_API_SECRETS_PATH", "GRAPH_API_ACCESS_TOKEN", "GRAPH_API_VERSION", "GRAPH_API_TIMEOUT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr("graph_api_binding.config._discover_project_root", lambda: None)


def _write_secrets(path: Path, body: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    return path


def test_defaults_without_secrets_file():
    settings = load_settings()

    assert settings.access_token is None
    assert settings.api_version == DEFAULT_API_VERSION
    assert settings.timeout == DEFAULT_TIMEOUT
    assert settings.base_url == "https://graph.facebook.com/v2.2/"
    assert settings.source_path is None


def test_strict_mode_requires_secrets_file():
    with pytest.raises(FileNotFoundError):
        load_settings(strict=True)


def test_loads_graph_table_from_working_directory(tmp_path):
    path = _write_secrets(
        tmp_path / ".secrets" / "secret.toml",
        '[graph]\naccess_token = "fileToken"\napi_version = "v2.5"\napp_id = "123"\ntimeout = 5\n',
    )

    settings = load_settings()

    assert settings.access_token == "fileToken"
    assert settings.api_version == "v2.5"
    assert settings.app_id == "123"
    assert settings.timeout == 5.0
    assert settings.source_path == path
    assert settings.base_url == "https://graph.facebook.com/v2.5/"


def test_explicit_secrets_path_wins(monkeypatch, tmp_path):
    _write_secrets(tmp_path / ".secrets" / "secret.toml", '[graph]\naccess_token = "local"\n')
    explicit = _write_secrets(tmp_path / "elsewhere" / "graph.toml", '[graph]\naccess_token = "explicit"\n')
    monkeypatch.setenv("GRAPH_API_SECRETS_PATH", str(explicit))

    assert load_settings().access_token == "explicit"


def test_environment_overrides_file_values(monkeypatch):
    monkeypatch.setenv("GRAPH_API_ACCESS_TOKEN", "envToken")
    monkeypatch.setenv("GRAPH_API_VERSION", "v3.0")
    monkeypatch.setenv("GRAPH_API_TIMEOUT", "2.5")

    settings = settings_from_mapping({"graph": {"access_token": "fileToken", "api_version": "v2.2", "timeout": 30}})

    assert settings.access_token == "envToken"
    assert settings.api_version == "v3.0"
    assert settings.timeout == 2.5


@pytest.mark.parametrize("value", ["soon", "0", "-1"])
def test_invalid_timeout_is_rejected(monkeypatch, value):
    monkeypatch.setenv("GRAPH_API_TIMEOUT", value)

    with pytest.raises(ValueError):
        settings_from_mapping({})


def test_context_built_from_settings():
    settings = GraphSettings(access_token="fileToken", api_version="v2.2", timeout=3.0, follow_redirects=True)

    context = GraphContext.build_default(settings=settings)
    overridden = GraphContext.build_default(settings=settings, access_token="runtimeToken")

    assert context.base_url == "https://graph.facebook.com/v2.2/"
    assert context.access_token == "fileToken"
    assert context.timeout == 3.0
    assert context.follow_redirects is True
    assert overridden.access_token == "runtimeToken"


def test_context_keeps_an_explicit_empty_registry():
    empty = MappingRegistry()

    context = GraphContext.build_default(settings=GraphSettings(), registry=empty)

    assert context.registry is empty
    assert context.registry is not default_registry()
    assert len(context.registry) == 0
    assert empty.frozen
