"""Runtime configuration for astnamer - centralized configuration management."""

import copy
import json
import os
from pathlib import Path
from typing import Any

from astnamer.utils.logging import logger

DEFAULTS = {
    "paths": {
        "error_log": "./.astnamer/error.log",
    },
    "limits": {
        "max_depth": 500,
        "max_file_size": 32 * 1024 * 1024,
    },
    "report": {
        "max_rows": 500,
        "global_name": "global",
        "anonymous_name": "<anonymous>",
    },
}

CONFIG_FILE = Path(".astnamer") / "config.json"


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from .astnamer/config.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (ASTNAMER_<SECTION>_<KEY>)
    2. .astnamer/config.json file
    3. Built-in defaults

    Args:
        root: Root directory to look for config file

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_FILE
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"ASTNAMER_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    default_value = cfg[section][key]
                    if isinstance(default_value, int):
                        cfg[section][key] = int(value)
                    elif isinstance(default_value, float):
                        cfg[section][key] = float(value)
                    else:
                        cfg[section][key] = value
                except ValueError as e:
                    logger.warning(f"Invalid value for environment variable {env_var}: '{value}' - {e}")
                    logger.info(f"Using default value: {cfg[section][key]}")

    return cfg
