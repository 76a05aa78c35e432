import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, Optional

import yaml

CONFIG_ENV = "STOREFRONT_CONFIG"


@dataclass(frozen=True)
class Settings:
    currency_symbol: str = "€"
    decimals: int = 2
    locale: str = "el"
    log_level: str = "INFO"


def _read_yaml(path: str) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"config file {path} must contain a mapping")
    return data


def _get_env(key: str) -> Optional[str]:
    v = os.getenv(key)
    if v is not None and v.strip() != "":
        return v.strip()
    return None


def load_settings(path: Optional[str] = None) -> Settings:
    """Build settings from defaults, an optional YAML file, then the environment."""
    values: Dict[str, Any] = {}
    path = path or _get_env(CONFIG_ENV)
    if path:
        values.update(_read_yaml(path))

    overrides = {
        "currency_symbol": _get_env("STOREFRONT_CURRENCY"),
        "decimals": _get_env("STOREFRONT_DECIMALS"),
        "locale": _get_env("STOREFRONT_LOCALE"),
        "log_level": _get_env("STOREFRONT_LOG_LEVEL"),
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    known = {k: values[k] for k in Settings.__dataclass_fields__ if k in values}
    if "decimals" in known:
        known["decimals"] = int(known["decimals"])
    return Settings(**known)


def configure_logging(cfg: Optional[Settings] = None) -> None:
    cfg = cfg or settings
    logging.basicConfig(
        level=cfg.log_level.upper(),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


settings = load_settings()
