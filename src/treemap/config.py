import logging
import os
from dataclasses import dataclass
from typing import Any

from treemap.utils import io_util

_TRUTHY = frozenset({"1", "true", "yes", "on"})


@dataclass(frozen=True)
class Settings:
    log_level: str = "WARNING"
    verify_order: bool = False


def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUTHY


def _parse_log_level(level: Any) -> str:
    if not isinstance(level, str):
        raise TypeError(f"Log level must be a string, got {type(level).__name__}.")
    name = level.strip().upper()
    if name not in logging.getLevelNamesMapping():
        raise ValueError(f"Unknown log level '{level}'.")
    return name


def parse_settings(conf: dict[str, Any]) -> Settings:
    """
    Build Settings from a parsed config.toml, applying environment overrides.
    Raises:
        ValueError: If the log level is not a known logging level.
        TypeError: If a setting has the wrong type.
    """
    logging_conf = conf.get("logging", {})
    treemap_conf = conf.get("treemap", {})

    verify_order = treemap_conf.get("verify_order", False)
    if not isinstance(verify_order, bool):
        raise TypeError("'treemap.verify_order' must be a boolean.")

    return Settings(
        log_level=_parse_log_level(
            os.getenv("LOG_LEVEL", logging_conf.get("level", "WARNING"))
        ),
        verify_order=_env_flag("TREEMAP_VERIFY_ORDER", verify_order),
    )


def _parse_config() -> Settings:
    """
    Load and parse the config.toml file.
    """
    return parse_settings(io_util.load_resource_toml("config.toml"))


settings = _parse_config()
