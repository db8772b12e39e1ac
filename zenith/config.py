"""Configuration file management for zenith."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_INCOME = 5000.0
DEFAULT_CURRENCY_SYMBOL = "$"
DEFAULT_INSIGHT_MODEL = "llama3-8b-8192"

DEFAULTS: dict[str, Any] = {
    "default_income": DEFAULT_INCOME,
    "currency_symbol": DEFAULT_CURRENCY_SYMBOL,
    "insight": {
        "model": DEFAULT_INSIGHT_MODEL,
        "api_key": "",
    },
}


def config_dir() -> Path:
    """Directory holding zenith's config, honouring XDG_CONFIG_HOME."""
    base = os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config"
    return Path(base) / "zenith"


def get_config_path() -> Path:
    """Default config file location."""
    return config_dir() / "config.toml"


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Write configuration as TOML, readable only by the owner.

    Args:
        config: Configuration dictionary.
        config_path: Destination file. If None, uses the default location.
    """
    config_path = config_path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_bytes(tomli_w.dumps(config).encode("utf-8"))
    os.chmod(config_path, 0o600)


def create_default_config(config_path: Path | None = None) -> None:
    """Write the built-in defaults, replacing any existing file."""
    save_config(DEFAULTS, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Read the TOML configuration.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    return tomllib.loads((config_path or get_config_path()).read_text(encoding="utf-8"))


def get_setting(config: dict[str, Any], key: str) -> Any:
    """Look up a dotted key, falling back to the built-in default.

    Args:
        config: Loaded configuration (may be empty).
        key: Dotted key such as "default_income" or "insight.model".

    Returns:
        Configured value, or the default when missing.

    Raises:
        KeyError: If the key has no default either.
    """
    value: Any = config
    default: Any = DEFAULTS
    for part in key.split("."):
        default = default[part]
        value = value.get(part) if isinstance(value, dict) else None
    return default if value is None else value


def load_config_or_defaults(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration, or return an empty dict if there is no file yet."""
    try:
        return load_config(config_path)
    except FileNotFoundError:
        return {}


def get_insight_api_key(config: dict[str, Any]) -> str | None:
    """API key for the AI insight service.

    The GROQ_API_KEY environment variable wins over the config file.
    """
    return os.environ.get("GROQ_API_KEY") or get_setting(config, "insight.api_key") or None


def set_setting(key: str, value: Any, config_path: Path | None = None) -> None:
    """Set a dotted key and save the config file.

    Args:
        key: Dotted key such as "default_income".
        value: New value.
        config_path: Config file. If None, uses the default location.
    """
    config = load_config_or_defaults(config_path)

    section = config
    *parents, leaf = key.split(".")
    for part in parents:
        section = section.setdefault(part, {})
    section[leaf] = value

    save_config(config, config_path)
