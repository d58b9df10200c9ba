"""Tests for config loading and env overrides."""

import pytest

from lesson_index.config import DEFAULT_RESERVED_ROUTES, load_config


@pytest.mark.asyncio
async def test_defaults_when_file_missing(monkeypatch, tmp_path):
    for name in ("CONTENT_PATH", "API_HOST", "API_PORT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)

    config = await load_config(config_path=str(tmp_path / "missing.yaml"))

    assert config.content.path == "./content"
    assert config.content.topics_path.as_posix() == "content/topics"
    assert config.reserved_routes == frozenset(DEFAULT_RESERVED_ROUTES)
    assert config.logging.level == "INFO"


@pytest.mark.asyncio
async def test_yaml_values_are_loaded(monkeypatch, tmp_path):
    monkeypatch.delenv("CONTENT_PATH", raising=False)
    settings = tmp_path / "settings.yaml"
    settings.write_text(
        "content:\n"
        "  path: /srv/site/content\n"
        "  max_concurrent_reads: 4\n"
        "routes:\n"
        "  reserved: [admin]\n"
    )

    config = await load_config(config_path=str(settings))

    assert config.content.path == "/srv/site/content"
    assert config.content.max_concurrent_reads == 4
    assert config.reserved_routes == frozenset(DEFAULT_RESERVED_ROUTES) | {"admin"}


@pytest.mark.asyncio
async def test_env_overrides_apply(monkeypatch, tmp_path):
    monkeypatch.setenv("CONTENT_PATH", str(tmp_path / "content"))
    monkeypatch.setenv("API_HOST", "0.0.0.0")
    monkeypatch.setenv("API_PORT", "9000")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    config = await load_config(config_path=str(tmp_path / "missing.yaml"))

    assert config.content.path == str(tmp_path / "content")
    assert config.api.host == "0.0.0.0"
    assert config.api.port == 9000
    assert config.logging.level == "DEBUG"


@pytest.mark.asyncio
async def test_empty_env_values_are_ignored(monkeypatch, tmp_path):
    monkeypatch.setenv("CONTENT_PATH", "   ")

    config = await load_config(config_path=str(tmp_path / "missing.yaml"))

    assert config.content.path == "./content"


@pytest.mark.asyncio
async def test_env_overrides_invalid_port(monkeypatch, tmp_path):
    monkeypatch.setenv("API_PORT", "not-an-int")

    with pytest.raises(ValueError):
        await load_config(config_path=str(tmp_path / "missing.yaml"))
