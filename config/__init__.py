"""Settings selection for the campus portal.

`APP_ENV` names the environment; each maps to one module in this package
exposing `DB_CONFIG`, `FIREBASE_CONFIG` and the portal flags.
"""

import os
from typing import Optional

SETTINGS_MODULES = {
    "development": "config.development",
    "dev": "config.development",
    "production": "config.production",
    "prod": "config.production",
    "testing": "config.testing",
    "test": "config.testing",
}

DEFAULT_ENV = "development"


def get_settings_module(env: Optional[str] = None) -> str:
    """Return the dotted settings module for `env`, or for APP_ENV when omitted.

    Unknown names fall back to development.
    """
    if env is None:
        env = os.getenv("APP_ENV", DEFAULT_ENV)
    return SETTINGS_MODULES.get(env.strip().lower(), SETTINGS_MODULES[DEFAULT_ENV])
