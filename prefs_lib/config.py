"""Configuration for the preferences tools.

Settings are read from a YAML file: the path in `PREFS_CONFIG` when set,
otherwise `data/config/prefs_config.yml`. A missing file yields the
defaults.
"""
from __future__ import annotations
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any, Dict, Optional
import logging
import os

import yaml

logger = logging.getLogger(__name__)

CONFIG_ENV = "PREFS_CONFIG"
DEFAULT_CONFIG_PATH = Path("data/config/prefs_config.yml")


@dataclass
class Config:
    backend: str = "file"
    application_name: Optional[str] = None
    context_name: Optional[str] = None
    home_dir: Optional[str] = None
    remote_codebase: Optional[str] = None
    remote_max_size: int = 4096
    remote_timeout: float = 10.0
    log_level: str = "WARNING"
    host: str = "127.0.0.1"
    port: int = 8000

    def backend_options(self) -> Dict[str, Any]:
        """Keyword arguments for `prefs_lib.storage.create_backend`."""
        if self.backend == "file":
            return {"home": self.home_dir}
        if self.backend == "remote":
            opts: Dict[str, Any] = {"max_size": self.remote_max_size}
            if self.remote_codebase:
                from prefs_lib.remote import HttpSession

                session = HttpSession(self.remote_codebase, timeout=self.remote_timeout)
                opts["session_provider"] = lambda: session
            return opts
        raise ValueError(f"unknown storage backend: {self.backend!r}")


_TYPES = {"remote_max_size": int, "remote_timeout": float, "port": int}


def config_path() -> Path:
    return Path(os.environ.get(CONFIG_ENV) or DEFAULT_CONFIG_PATH)


def load_config(path: Optional[Path] = None) -> Config:
    """Load a `Config` from YAML.

    Unknown keys are logged and ignored. Raises ValueError when the file is
    not a mapping or a value has the wrong type.
    """
    cfg_path = Path(path) if path is not None else config_path()
    if not cfg_path.exists():
        logger.debug("No configuration at %s, using defaults", cfg_path)
        return Config()
    with cfg_path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"invalid config format: {e}") from e
    if not isinstance(data, dict):
        raise ValueError("invalid config format: expected mapping")

    known = {f.name for f in fields(Config)}
    values: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known:
            logger.warning("Ignoring unknown configuration key %r in %s", key, cfg_path)
            continue
        if value is not None and key in _TYPES:
            try:
                value = _TYPES[key](value)
            except (TypeError, ValueError) as e:
                raise ValueError(f"invalid value for {key}: {value!r}") from e
        values[key] = value
    return Config(**values)


def save_config(cfg: Config, path: Optional[Path] = None) -> Path:
    """Write `cfg` as YAML and return the path written."""
    cfg_path = Path(path) if path is not None else config_path()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    with cfg_path.open("w", encoding="utf-8") as f:
        yaml.safe_dump(asdict(cfg), f, sort_keys=False)
    return cfg_path
