"""Configuration loading: defaults, then ``config.json``, then environment.

Recognised keys (environment variable in brackets)::

    "port":              3001                        [PORT]
    "host":              "127.0.0.1"                 [HOST]
    "frontend_url":      "http://localhost:5173"     [FRONTEND_URL]
    "chain_service_url": "http://localhost:3001/api" [CHAIN_SERVICE_URL]
    "database_url":      "sqlite:///metaverse_uni.db" [DATABASE_URL]
    "log_level":         "INFO"                      [LOG_LEVEL]
    "request_timeout":   10                          [REQUEST_TIMEOUT]
"""
import json
import logging
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

logger = logging.getLogger('metaverse.config')

DEFAULTS: Dict[str, Any] = {
    'port': 3001,
    'host': '127.0.0.1',
    'frontend_url': 'http://localhost:5173',
    'chain_service_url': 'http://localhost:3001/api',
    'database_url': 'sqlite:///metaverse_uni.db',
    'log_level': 'INFO',
    'request_timeout': 10,
}

_ENV_KEYS = {
    'PORT': ('port', int),
    'HOST': ('host', str),
    'FRONTEND_URL': ('frontend_url', str),
    'CHAIN_SERVICE_URL': ('chain_service_url', str),
    'DATABASE_URL': ('database_url', str),
    'LOG_LEVEL': ('log_level', str),
    'REQUEST_TIMEOUT': ('request_timeout', float),
}


def load_config(config_path: Optional[str] = None,
                use_dotenv: bool = True) -> Dict[str, Any]:
    """Return the effective configuration dict.

    Args:
        config_path: Optional JSON file whose keys override the defaults.
                     A missing or unreadable file is ignored with a warning.
        use_dotenv:  Load a ``.env`` file into the environment first.

    Returns:
        A new dict containing every key in :data:`DEFAULTS`.
    """
    if use_dotenv:
        load_dotenv()

    config = dict(DEFAULTS)
    if config_path:
        config.update(_load_json(config_path))

    for env_name, (key, cast) in _ENV_KEYS.items():
        raw = os.getenv(env_name)
        if raw in (None, ''):
            continue
        try:
            config[key] = cast(raw)
        except ValueError:
            logger.warning("Ignoring invalid %s=%r", env_name, raw)
    return config


def _load_json(path: str) -> Dict[str, Any]:
    if not os.path.exists(path):
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    try:
        with open(path, 'r') as fh:
            data = json.load(fh)
    except (OSError, json.JSONDecodeError) as exc:
        logger.warning("Could not load %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a JSON object, ignoring", path)
        return {}
    return data
