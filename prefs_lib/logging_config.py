from __future__ import annotations
import logging
from pathlib import Path
import yaml
from typing import Optional

from prefs_lib.config import config_path


def configure_logging(config_path_override: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Configure root logging for the preferences tools.

    The level comes from `level` when given, otherwise from the `log_level`
    entry of the YAML configuration, otherwise WARNING. Returns a module
    logger for the caller.
    """
    DEFAULT_LOG_LEVEL = logging.WARNING

    cfg_path = config_path_override or config_path()
    if level is None and cfg_path.exists():
        try:
            with cfg_path.open('r', encoding='utf-8') as _f:
                _cfg = yaml.safe_load(_f) or {}
                level = _cfg.get('log_level') if isinstance(_cfg, dict) else None
        except (OSError, yaml.YAMLError):
            # If config parse fails, fall back to default level
            level = None
    if isinstance(level, str):
        _numeric = getattr(logging, level.upper(), None)
        if isinstance(_numeric, int):
            DEFAULT_LOG_LEVEL = _numeric

    # Reconfigure root handlers to use the selected level and format
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=DEFAULT_LOG_LEVEL, format='%(asctime)s %(levelname)s [%(name)s]: %(message)s')
    logger = logging.getLogger(__name__)

    # Keep known noisy libraries quiet by default
    logging.getLogger('requests').setLevel(logging.WARNING)
    logging.getLogger('urllib3').setLevel(logging.WARNING)
    logging.getLogger('uvicorn.access').setLevel(logging.WARNING)
    logger.debug("Log level set to %s", logging.getLevelName(DEFAULT_LOG_LEVEL))

    return logger
