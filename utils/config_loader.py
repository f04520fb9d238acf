# utils/config_loader.py
import tomllib
from pathlib import Path
from typing import Any, Dict

import structlog
import yaml

log = structlog.get_logger(__name__)


def load_toml_config(config_path: Path, config_name: str) -> Dict[str, Any]:
    """
    Loads an optional TOML file such as the keybindings.
    A missing, undecodable or malformed file is logged and yields ``{}`` so the
    caller falls back to its built-in defaults.
    """
    try:
        raw = config_path.read_bytes()
    except FileNotFoundError:
        log.error(f"{config_name} config file not found", path=str(config_path))
        return {}
    except OSError as e:
        log.error(f"Could not read {config_name} config", path=str(config_path), error=str(e))
        return {}
    try:
        config_data = tomllib.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, tomllib.TOMLDecodeError) as e:
        log.error(f"Ignoring unreadable {config_name} config", path=str(config_path), error=str(e))
        return {}
    log.info(f"{config_name} config loaded", path=str(config_path), tables=sorted(config_data))
    return config_data


def load_yaml_config(config_path: Path, config_name: str) -> Dict[str, Any]:
    """Loads a YAML configuration file. A missing file raises ``FileNotFoundError``."""
    if not config_path.is_file():
        log.error(f"{config_name} config file not found", path=str(config_path))
        raise FileNotFoundError(
            f"{config_name} configuration file not found: {config_path}"
        )
    try:
        with config_path.open("r", encoding="utf-8") as f:
            config_data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        log.error(
            f"Error parsing YAML for {config_name}",
            path=str(config_path),
            error=str(e),
            exc_info=True,
        )
        raise
    if config_data is None:
        log.warning(f"{config_name} config file is empty.", path=str(config_path))
        return {}
    if not isinstance(config_data, dict):
        raise TypeError(f"{config_name} config must be a mapping, got {type(config_data).__name__}")
    log.info(f"{config_name} config loaded", path=str(config_path))
    return config_data
