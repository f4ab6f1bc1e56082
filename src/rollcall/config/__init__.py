from __future__ import annotations

import importlib
import os
from types import ModuleType


def get_settings_module() -> str:
    # APP_ENV picks the settings module, development when unset
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "rollcall.config.production"

    if env in {"test", "testing"}:
        return "rollcall.config.testing"

    return "rollcall.config.development"


def load_settings() -> ModuleType:
    return importlib.import_module(get_settings_module())
