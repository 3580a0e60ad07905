# config_loader.py
import copy
import os

import yaml
from dotenv import load_dotenv

DEFAULT_CONFIG_PATH = "config/config.yaml"

DEFAULTS = {
    "compression": {
        "extension": ".johnny",
        "print_tree": False,
        "print_text_char": True,
    },
    "logging": {
        "level": "INFO",
    },
    "server": {
        "host": "127.0.0.1",
        "port": 4000,
        "max_content_length": 16 * 1024 * 1024,
    },
}


def load_config(config_path=None):
    """
    Loads the YAML configuration and merges it over the defaults.

    The path is taken from the argument, then from HUFFPACK_CONFIG (a .env file
    is read first), then DEFAULT_CONFIG_PATH. Only an explicitly named file has
    to exist. HUFFPACK_LOG_LEVEL overrides logging.level.
    """
    load_dotenv()
    explicit = config_path or os.environ.get("HUFFPACK_CONFIG")
    path = explicit or DEFAULT_CONFIG_PATH

    loaded = {}
    if explicit or os.path.exists(path):
        with open(path, "r") as f:
            loaded = yaml.safe_load(f) or {}
    if not isinstance(loaded, dict):
        raise ValueError(f"Configuration file {path} must contain a mapping.")

    config = copy.deepcopy(DEFAULTS)
    for section, values in loaded.items():
        if isinstance(values, dict) and isinstance(config.get(section), dict):
            config[section].update(values)
        else:
            config[section] = values

    level = os.environ.get("HUFFPACK_LOG_LEVEL")
    if level:
        config["logging"]["level"] = level.upper()
    return config
