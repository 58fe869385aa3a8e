from __future__ import annotations

"""Runtime settings for the dashboard and CLI.

Settings come from three layers, later layers winning:

1. Dataclass defaults
2. An optional YAML file (`crm.yaml` at the project root, or an explicit path)
3. Environment variables `CRM_API_URL`, `CRM_TIMEOUT`, `CRM_DEBUG`

Example `crm.yaml`::

    api_url: https://crm.example.com/api
    timeout: 10
    debug: false
"""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional
import logging
import os

import yaml

from .io_paths import CONFIG_FILE

logger = logging.getLogger(__name__)

DEFAULT_API_URL = "http://localhost:8000/api"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Connection and logging settings."""

    api_url: str = DEFAULT_API_URL
    timeout: float = 15.0
    debug: bool = False

    def __post_init__(self) -> None:
        # Endpoints always start with "/", so keep the base without a trailing one
        self.api_url = str(self.api_url).rstrip("/")
        self.timeout = float(self.timeout)
        if self.timeout <= 0:
            raise ValueError("timeout must be > 0")

    @property
    def log_level(self) -> str:
        return "DEBUG" if self.debug else "INFO"


def _read_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Settings file must contain a mapping: {path}")
    known = {f.name for f in fields(Settings)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown settings in %s: %s", path, ", ".join(unknown))
    return {k: v for k, v in data.items() if k in known}


def _read_env(environ: Mapping[str, str]) -> Dict[str, Any]:
    out: Dict[str, Any] = {}
    if environ.get("CRM_API_URL"):
        out["api_url"] = environ["CRM_API_URL"]
    if environ.get("CRM_TIMEOUT"):
        out["timeout"] = float(environ["CRM_TIMEOUT"])
    if environ.get("CRM_DEBUG"):
        out["debug"] = environ["CRM_DEBUG"].strip().lower() in _TRUTHY
    return out


def load_settings(path: Optional[Path] = None, environ: Optional[Mapping[str, str]] = None) -> Settings:
    """Build `Settings` from defaults, the YAML file and the environment.

    A missing default file is fine; a missing explicit `path` is an error.
    """
    environ = os.environ if environ is None else environ
    values: Dict[str, Any] = {}
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")
        values.update(_read_yaml(path))
    elif CONFIG_FILE.exists():
        values.update(_read_yaml(CONFIG_FILE))
    values.update(_read_env(environ))
    return Settings(**values)


__all__ = ["DEFAULT_API_URL", "Settings", "load_settings"]
