"""
Configuration for the Spline MCP server.

Values are read from the environment after an optional dotenv file has been
loaded. The file is resolved in this order: an explicit ``--config`` path,
``./.env`` in the working directory, then ``.env`` at the project root.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger('spline-mcp')

DEFAULT_API_URL = 'https://api.spline.design'
DEFAULT_OPENAI_URL = 'https://api.openai.com/v1'
DEFAULT_TIMEOUT = 30.0
DEFAULT_PORT = 3000
DEFAULT_HOST = '0.0.0.0'

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class ConfigError(Exception):
    """Raised when the configuration cannot be loaded."""


@dataclass(frozen=True)
class ApiConfig:
    """Connection settings for the Spline REST API."""
    base_url: str = DEFAULT_API_URL
    api_key: str | None = None
    timeout: float = DEFAULT_TIMEOUT


@dataclass(frozen=True)
class OpenAIConfig:
    base_url: str = DEFAULT_OPENAI_URL
    api_key: str | None = None
    timeout: float = DEFAULT_TIMEOUT


@dataclass(frozen=True)
class Settings:
    api: ApiConfig = field(default_factory=ApiConfig)
    openai: OpenAIConfig = field(default_factory=OpenAIConfig)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    env_file: Path | None = None


def resolve_env_file(config_path: str | None = None, cwd: Path | None = None) -> Path | None:
    """
    Find the dotenv file to load.

    Args:
        config_path: Explicit path given on the command line
        cwd: Directory to look for a local .env in (default: current directory)

    Returns:
        Path of the file to load, or None if no candidate exists

    Raises:
        ConfigError: If an explicit path was given but does not exist
    """
    if config_path:
        path = Path(config_path).expanduser()
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        return path

    local = (cwd or Path.cwd()) / '.env'
    if local.is_file():
        return local

    project = PROJECT_ROOT / '.env'
    if project.is_file():
        return project

    return None


def _float_env(name: str, default: float) -> float:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


def load_settings(config_path: str | None = None, cwd: Path | None = None) -> Settings:
    """Load settings from the dotenv file (if any) and the environment."""
    env_file = resolve_env_file(config_path, cwd)
    if env_file is not None:
        load_dotenv(dotenv_path=env_file)
        logger.debug(f"Loaded environment from {env_file}")

    api_key = os.environ.get('SPLINE_API_KEY') or None
    if not api_key:
        logger.warning("SPLINE_API_KEY is not set; requests to the Spline API will be unauthenticated")

    timeout = _float_env('SPLINE_TIMEOUT', DEFAULT_TIMEOUT)

    return Settings(
        api=ApiConfig(
            base_url=os.environ.get('SPLINE_API_URL') or DEFAULT_API_URL,
            api_key=api_key,
            timeout=timeout,
        ),
        openai=OpenAIConfig(
            api_key=os.environ.get('OPENAI_API_KEY') or None,
            timeout=timeout,
        ),
        host=os.environ.get('HOST') or DEFAULT_HOST,
        port=_int_env('PORT', DEFAULT_PORT),
        env_file=env_file,
    )
