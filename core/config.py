"""Configuration models and loading."""

import json
import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from core.exceptions import ConfigurationError
from core.headers import DEFAULT_USER_AGENT

CONFIG_DIR = Path.home() / ".config" / "bybit-proxy"
CONFIG_FILE = CONFIG_DIR / "config.json"

# Environment variable -> (section, field)
ENV_OVERRIDES = {
    "PORT": ("proxy", "port"),
    "HOST": ("proxy", "host"),
    "KOYEB_REGION": ("proxy", "region"),
}


class ProxySettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    host: str = "0.0.0.0"
    port: int = 3000
    trust_proxy: bool = True
    max_body_size: int = 1024 * 1024
    region: str = "unknown"
    debug: bool = False


class UpstreamSettings(BaseModel):
    model_config = ConfigDict(frozen=True)

    mainnet_url: str = "https://api.bybit.com"
    testnet_url: str = "https://api-demo-testnet.bybit.com"
    user_agent: str = DEFAULT_USER_AGENT
    # None waits on the upstream indefinitely
    timeout: float | None = None


class Config(BaseModel):
    model_config = ConfigDict(frozen=True)

    proxy: ProxySettings = Field(default_factory=ProxySettings)
    upstream: UpstreamSettings = Field(default_factory=UpstreamSettings)


def _read_config_file(path: Path) -> dict[str, Any]:
    """Read the JSON config file, backing up a corrupted one."""
    if not path.exists():
        return {}

    try:
        data = json.loads(path.read_text())
        Config.model_validate(data)
        return data
    except (json.JSONDecodeError, ValidationError):
        # Backup corrupted config and fall back to defaults
        path.rename(path.with_suffix(".json.bak"))
        return {}


def load_config(
    path: Path = CONFIG_FILE,
    environ: Mapping[str, str] | None = None,
) -> Config:
    """Load configuration from the JSON file, then apply environment overrides."""
    environ = os.environ if environ is None else environ
    data = _read_config_file(path)

    for env_name, (section, field) in ENV_OVERRIDES.items():
        value = environ.get(env_name)
        if value:
            data.setdefault(section, {})[field] = value

    try:
        return Config.model_validate(data)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration from environment: {e}") from e
