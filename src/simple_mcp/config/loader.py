"""Load config from SIMPLE_MCP_CONFIG_PATH or return the defaults.

Settings come from the process environment and, when present, a
``.env.local`` file in the working directory (real environment variables win).

``load_config()`` is memoised with ``functools.lru_cache`` so the file is read
and parsed at most once per process.  Call ``load_config.cache_clear()`` to
force a re-read (useful in tests).
"""

from __future__ import annotations

import functools
import json
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import ENV_FILE
from .schema import DEFAULT_CONFIG, SimpleMCPConfig


class _Env(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SIMPLE_MCP_", env_file=ENV_FILE, extra="ignore")
    env: Optional[str] = None
    config_path: Optional[str] = None


_env: Optional[_Env] = None


def _get_env() -> _Env:
    global _env
    if _env is None:
        _env = _Env()
    return _env


@functools.lru_cache(maxsize=1)
def load_config() -> SimpleMCPConfig:
    """Load config from SIMPLE_MCP_CONFIG_PATH if set and present; else DEFAULT_CONFIG.

    SIMPLE_MCP_ENV, when set, overrides the ``env`` field of either source.

    Raises:
        ValueError: the config file is not a JSON object or fails validation.
    """
    settings = _get_env()
    config = DEFAULT_CONFIG
    path = settings.config_path
    if path and path.strip():
        p = Path(path).expanduser().resolve()
        if p.is_file():
            data = json.loads(p.read_text(encoding="utf-8"))
            if not isinstance(data, dict):
                raise ValueError(f"{p}: config must be a JSON object, got {type(data).__name__}")
            if "models" not in data:
                data["models"] = DEFAULT_CONFIG.model_dump()["models"]
            config = SimpleMCPConfig.model_validate(data)
    if settings.env and settings.env.strip():
        config = config.model_copy(update={"env": settings.env.strip()})
    return config
