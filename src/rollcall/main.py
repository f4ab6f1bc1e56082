from __future__ import annotations

import logging
import sys
from typing import Optional

from dotenv import load_dotenv

from .config import get_settings_module, load_settings
from .container import Container, build_container_from_settings

LOG_FORMAT = "%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"

_handler: Optional[logging.Handler] = None


def _resolve_level(level: str | int) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).strip().upper())
    # Unknown names come back as the string "Level <name>".
    return resolved if isinstance(resolved, int) else logging.INFO


def configure_logging(level: str | int = logging.INFO) -> logging.Handler:
    """Attach a stream handler to the package logger (idempotent)."""
    global _handler

    root = logging.getLogger("rollcall")
    root.setLevel(_resolve_level(level))

    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    if _handler not in root.handlers:
        root.addHandler(_handler)
    return _handler


def create_container() -> Container:
    load_dotenv(override=False)

    settings_module = get_settings_module()
    settings = load_settings()
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    logger = logging.getLogger(__name__)
    backend = getattr(settings, "STORE_BACKEND", "mysql")
    if backend == "mysql":
        db_config = getattr(settings, "DB_CONFIG")
        target = f"{db_config.get('user')}@{db_config.get('host')}:{db_config.get('port', 3306)}/{db_config.get('database')}"
    else:
        target = f"{getattr(settings, 'MONGO_URI', '')}/{getattr(settings, 'MONGO_DB_NAME', '')}"
    logger.info("settings=%s store=%s target=%s", settings_module, backend, target)

    return build_container_from_settings(settings)
