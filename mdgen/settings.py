"""ConfigManager — environment profiles, config layering and logging setup."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

from mdgen.config import (
    CONFIG_DIR,
    CONFIG_FILENAME,
    DEFAULT_RULES_PATH,
    ENV_FILENAME,
    ENV_LOG_LEVEL,
    ENV_OUTPUT_RULES,
    ENV_PROFILE,
    LOG_DATEFMT,
    LOG_FORMAT,
)

logger = logging.getLogger(__name__)

# Known configuration keys and their defaults
_DEFAULTS: dict[str, str] = {
    ENV_PROFILE: "development",
    ENV_LOG_LEVEL: "INFO",
    ENV_OUTPUT_RULES: str(DEFAULT_RULES_PATH),
}

_PROFILES: dict[str, dict[str, str]] = {
    "development": {
        ENV_PROFILE: "development",
        ENV_LOG_LEVEL: "DEBUG",
    },
    "production": {
        ENV_PROFILE: "production",
        ENV_LOG_LEVEL: "WARNING",
    },
    "testing": {
        ENV_PROFILE: "testing",
        ENV_LOG_LEVEL: "DEBUG",
    },
}


class ConfigManager:
    """Manage mdgen configuration across environments."""

    def load_config(self, project_path: str | Path | None = None) -> dict[str, str]:
        """Load merged config: defaults -> profile -> config.json -> .env -> env vars.

        Without *project_path* only defaults, profile and environment
        variables are considered.
        """
        # 1. Defaults
        config: dict[str, str] = dict(_DEFAULTS)

        # 2. Profile overrides
        env_name = os.environ.get(ENV_PROFILE, config[ENV_PROFILE])
        config.update(_PROFILES.get(env_name, {}))

        if project_path is not None:
            root = Path(project_path)

            # 3. .mdgen/config.json
            config_json = root / CONFIG_DIR / CONFIG_FILENAME
            if config_json.is_file():
                try:
                    data = json.loads(config_json.read_text(encoding="utf-8"))
                    for k, v in data.items():
                        config[k] = str(v)
                except (json.JSONDecodeError, OSError, AttributeError):
                    logger.warning("Could not read %s", config_json, exc_info=True)

            # 4. .env file
            env_file = root / ENV_FILENAME
            if env_file.is_file():
                for line in env_file.read_text(encoding="utf-8").splitlines():
                    line = line.strip()
                    if not line or line.startswith("#"):
                        continue
                    if "=" in line:
                        k, v = line.split("=", 1)
                        config[k.strip()] = v.strip()

        # 5. Environment variables override all
        for key in _DEFAULTS:
            env_val = os.environ.get(key)
            if env_val is not None:
                config[key] = env_val

        return config


def rules_path(config: dict[str, str]) -> Path:
    """Return the output rule file named by *config*."""
    return Path(config.get(ENV_OUTPUT_RULES) or DEFAULT_RULES_PATH)


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging with the mdgen format.

    *level* defaults to the configured ``MDGEN_LOG_LEVEL``.
    """
    if level is None:
        level = ConfigManager().load_config()[ENV_LOG_LEVEL]
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)
