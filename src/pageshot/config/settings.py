from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from ..runtime.storage import resolve_output_path

DEFAULT_URL = "https://www.fortinet.com/"
DEFAULT_OUT = "./hn-home.png"


def _env_str(env: Mapping[str, str], name: str, default: str) -> str:
    # Empty values count as unset
    return env.get(name) or default


def _env_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    val = env.get(name)
    if val is None:
        return default
    return val.lower() in {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    url: str = DEFAULT_URL
    out: Path = Path(DEFAULT_OUT)
    headless: bool = True
    log_level: str = "WARNING"


def load_settings(environ: Mapping[str, str] | None = None) -> Settings:
    """Resolve settings once from the process environment.

    ``OUT`` is resolved against the current working directory so the success
    message always reports an absolute path.
    """
    env = os.environ if environ is None else environ
    return Settings(
        url=_env_str(env, "URL", DEFAULT_URL),
        out=resolve_output_path(_env_str(env, "OUT", DEFAULT_OUT)),
        headless=_env_bool(env, "HEADLESS", True),
        log_level=_env_str(env, "LOG_LEVEL", "WARNING").upper(),
    )
