from __future__ import annotations

# todolists/config.py
import os
import yaml

_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))

DEFAULTS = {
    "session_secret": "secret",
    "log_level": "INFO",
}


def project_root() -> str:
    return _PROJECT_ROOT


def read_config_yaml(path: str | None = None) -> dict:
    """
    Read optional settings from config.yaml (project root unless TODOS_CONFIG
    points elsewhere). Only string values are kept; a missing or broken file
    gives an empty dict.
    """
    cfg_path = path or os.environ.get("TODOS_CONFIG") or os.path.join(_PROJECT_ROOT, "config.yaml")
    if not os.path.exists(cfg_path):
        return {}
    try:
        with open(cfg_path, "r", encoding="utf-8") as f:
            cfg = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {}
    out = {}
    for k in ("db_path", "database_url", "session_secret", "log_level"):
        v = cfg.get(k)
        if isinstance(v, str) and v.strip():
            out[k] = v.strip()
    return out


def is_production() -> bool:
    return os.environ.get("APP_ENV") == "production"


def get_setting(key: str) -> str:
    # env var (upper-case key) > config.yaml > DEFAULTS
    env_val = os.environ.get(key.upper())
    if env_val:
        return env_val
    return read_config_yaml().get(key, DEFAULTS.get(key, ""))
