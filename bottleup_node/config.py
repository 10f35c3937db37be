# bottleup_node/config.py
import copy
import os
from typing import Any, Dict, List

import yaml

from .bottleup_runtime.credit import TREASURY_ACCOUNT
from .bottleup_runtime.redemption import DENOMINATION, EXCHANGE_RATE

CONFIG_FILENAME = "bottleup_config.yaml"

# -------- Defaults (non-secret) --------
_DEFAULT: Dict[str, Any] = {
    "rewards": {
        "exchange_rate": EXCHANGE_RATE,  # bottles per credit unit
        "denomination": DENOMINATION,  # token base units per credit unit
    },
    "access": {"owner": "owner", "admins": []},
    "credit": {"treasury_account": TREASURY_ACCOUNT, "initial_treasury": 0},
    "persistence": {"driver": "memory", "data_dir": "data", "keep_backups": 2},
    "logging": {"level": "INFO"},
    "server": {"host": "0.0.0.0", "port": 8000},
    "cors": {
        "origins": [
            "http://localhost:5173",
            "http://127.0.0.1:5173",
        ]
    },
}

# -------- ENV overrides --------
_ENV_MAP = {
    ("rewards", "exchange_rate"): ("BOTTLEUP_EXCHANGE_RATE", int),
    ("rewards", "denomination"): ("BOTTLEUP_DENOMINATION", int),
    ("access", "owner"): ("BOTTLEUP_OWNER", str),
    ("credit", "treasury_account"): ("BOTTLEUP_TREASURY", str),
    ("credit", "initial_treasury"): ("BOTTLEUP_INITIAL_TREASURY", int),
    ("persistence", "driver"): ("BOTTLEUP_PERSISTENCE", str),
    ("persistence", "data_dir"): ("BOTTLEUP_DATA_DIR", str),
    ("logging", "level"): ("BOTTLEUP_LOG_LEVEL", str),
    ("server", "host"): ("BOTTLEUP_HOST", str),
    ("server", "port"): ("BOTTLEUP_PORT", int),
}


def _deep_merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in (overlay or {}).items():
        if isinstance(v, dict) and isinstance(out.get(k), dict):
            out[k] = _deep_merge(out[k], v)
        else:
            out[k] = v
    return out


def _apply_env_overrides(cfg: Dict[str, Any]) -> Dict[str, Any]:
    for (section, key), (env_name, cast) in _ENV_MAP.items():
        val = os.getenv(env_name)
        if val is None:
            continue
        try:
            casted = cast(val)
        except ValueError as e:
            raise ValueError(f"{env_name}={val!r} is not a valid {cast.__name__}") from e
        cfg.setdefault(section, {})
        cfg[section][key] = casted
    return cfg


def load_config(repo_root: str) -> Dict[str, Any]:
    """
    Loads the YAML config from repo_root/bottleup_config.yaml, merged over
    the defaults, then applies ENV overrides.

    A missing file means defaults. A file that does not parse is an error:
    silently falling back would run the node with the wrong owner.
    """
    path = os.path.join(repo_root, CONFIG_FILENAME)
    cfg = copy.deepcopy(_DEFAULT)

    if os.path.exists(path):
        with open(path, "r") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path}: top-level YAML must be a mapping")
        cfg = _deep_merge(cfg, data)

    cfg = _apply_env_overrides(cfg)

    admins = cfg.get("access", {}).get("admins")
    if isinstance(admins, str):
        cfg["access"]["admins"] = [admins]
    origins = cfg.get("cors", {}).get("origins")
    if isinstance(origins, str):
        cfg["cors"]["origins"] = [origins]

    return cfg


# -------- Small helpers used by the app --------
def get_exchange_rate(cfg: Dict[str, Any]) -> int:
    return int(cfg.get("rewards", {}).get("exchange_rate", EXCHANGE_RATE))


def get_denomination(cfg: Dict[str, Any]) -> int:
    return int(cfg.get("rewards", {}).get("denomination", DENOMINATION))


def get_owner(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("access", {}).get("owner", "owner"))


def get_admins(cfg: Dict[str, Any]) -> List[str]:
    return [str(a) for a in cfg.get("access", {}).get("admins", []) or []]


def get_treasury_account(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("credit", {}).get("treasury_account", TREASURY_ACCOUNT))


def get_initial_treasury(cfg: Dict[str, Any]) -> int:
    return int(cfg.get("credit", {}).get("initial_treasury", 0))


def get_persistence_driver(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("persistence", {}).get("driver", "memory")).lower()


def get_data_dir(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("persistence", {}).get("data_dir", "data"))


def get_keep_backups(cfg: Dict[str, Any]) -> int:
    return int(cfg.get("persistence", {}).get("keep_backups", 2))


def get_log_level(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("logging", {}).get("level", "INFO")).upper()


def get_bind_host(cfg: Dict[str, Any]) -> str:
    return str(cfg.get("server", {}).get("host", "0.0.0.0"))


def get_bind_port(cfg: Dict[str, Any]) -> int:
    return int(cfg.get("server", {}).get("port", 8000))


def get_cors_origins(cfg: Dict[str, Any]) -> List[str]:
    return list(cfg.get("cors", {}).get("origins", []))
