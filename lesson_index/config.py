# lesson_index/config.py

import os
from pathlib import Path
from typing import Optional
import yaml
from pydantic import BaseModel, Field
import anyio


DEFAULT_RESERVED_ROUTES = ["demo", "progress", "quick-reference", "search", "flashcards"]


class ContentConfig(BaseModel):
    path: str = "./content"
    topics_dir: str = "topics"
    index_file: str = "_index.yaml"
    markdown_suffixes: list[str] = Field(default_factory=lambda: [".md", ".markdown"])
    max_concurrent_reads: int = Field(default=32, ge=1)

    @property
    def topics_path(self) -> Path:
        return Path(self.path) / self.topics_dir


class RoutesConfig(BaseModel):
    """Top-level route segments owned by the site itself, never by content.

    Entries extend DEFAULT_RESERVED_ROUTES; the built-in routes stay reserved.
    """
    reserved: list[str] = Field(default_factory=lambda: list(DEFAULT_RESERVED_ROUTES))


class APIConfig(BaseModel):
    """Configuration for the read-only content API."""
    host: str = "127.0.0.1"
    port: int = 8010
    cors_origins: list[str] = Field(default_factory=lambda: [
        "http://localhost:3000",   # Site dev server (hostname)
        "http://127.0.0.1:3000",   # Site dev server (IP variant)
    ])
    debug: bool = False


class LoggingConfig(BaseModel):
    level: str = "INFO"
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class Config(BaseModel):
    content: ContentConfig = Field(default_factory=ContentConfig)
    routes: RoutesConfig = Field(default_factory=RoutesConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def reserved_routes(self) -> frozenset[str]:
        return frozenset(DEFAULT_RESERVED_ROUTES).union(self.routes.reserved)


def _get_env_value(name: str) -> Optional[str]:
    """Get environment variable value, treating empty as unset."""
    value = os.getenv(name)
    if value is None or not value.strip():
        return None
    return value.strip()


def _get_env_int(name: str) -> Optional[int]:
    value = _get_env_value(name)
    if value is None:
        return None
    try:
        return int(value)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer") from e


def _apply_env_overrides(config: Config) -> Config:
    content_path = _get_env_value("CONTENT_PATH")
    if content_path is not None:
        config.content.path = content_path

    api_host = _get_env_value("API_HOST")
    if api_host is not None:
        config.api.host = api_host

    api_port = _get_env_int("API_PORT")
    if api_port is not None:
        config.api.port = api_port

    log_level = _get_env_value("LOG_LEVEL")
    if log_level is not None:
        config.logging.level = log_level.upper()

    return config


async def load_config(config_path: Optional[str] = None) -> Config:
    """Load configuration from YAML file (async)."""
    path = anyio.Path(config_path or "configs/settings.yaml")
    if await path.exists():
        text = await path.read_text()
        data = await anyio.to_thread.run_sync(yaml.safe_load, text)
        config = Config(**data) if data else Config()
        return _apply_env_overrides(config)

    return _apply_env_overrides(Config())


def load_config_sync(config_path: Optional[str] = None) -> Config:
    """Load configuration from outside an event loop."""
    return anyio.run(load_config, config_path)
