"""
Device-ID Utility Functions

This module provides helper functions for:
    - Configuration management
    - Logging utilities
    - Hardware address formatting
    - Component value aggregation
"""

import copy
import logging
from pathlib import Path
from typing import Dict, Any, Optional, Iterable

import yaml

# Configure module logger
logger = logging.getLogger("deviceid")


# =============================================================================
# Configuration Management
# =============================================================================

def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Sections present in the file are merged over the defaults, so a partial
    file only needs to name the values it changes.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary
    """
    if config_path is None:
        # Default config location
        project_root = Path(__file__).parent.parent
        config_path = project_root / "configs" / "config.yaml"

    config_path = Path(config_path)

    if not config_path.exists():
        logger.warning(f"Config file not found: {config_path}. Using defaults.")
        return get_default_config()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error loading config: {e}")
        return get_default_config()

    if not isinstance(loaded, dict):
        return get_default_config()

    return merge_config(get_default_config(), loaded)


def get_default_config() -> Dict[str, Any]:
    """Return default configuration values."""
    return {
        "device_id": {
            "network_adapter": {
                "exclude_non_physical": False,
                "exclude_wireless": False,
            },
        },
        "debug": {
            "verbose": False,
            "log_level": "INFO",
            "save_debug_logs": False,
            "debug_log_file": "logs/debug.log",
        },
    }


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge ``override`` into a copy of ``base``.

    A section that is a dictionary in ``base`` is only replaced by another
    dictionary. An empty YAML section loads as None and keeps the defaults.

    Args:
        base: Configuration providing the defaults
        override: Configuration whose values win

    Returns:
        New merged configuration dictionary
    """
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(merged.get(key), dict):
            if isinstance(value, dict):
                merged[key] = merge_config(merged[key], value)
            elif value is not None:
                logger.warning(f"Ignoring config section {key}: expected a mapping, got {value!r}")
        else:
            merged[key] = value
    return merged


def save_config(config: Dict[str, Any], config_path: Optional[str] = None) -> bool:
    """
    Save configuration to YAML file.

    Args:
        config: Configuration dictionary
        config_path: Path to save config file

    Returns:
        True if successful, False otherwise
    """
    if config_path is None:
        project_root = Path(__file__).parent.parent
        config_path = project_root / "configs" / "config.yaml"

    config_path = Path(config_path)

    try:
        config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(config_path, "w", encoding="utf-8") as f:
            yaml.dump(config, f, default_flow_style=False, sort_keys=False)
        return True
    except (OSError, yaml.YAMLError) as e:
        logger.error(f"Error saving config: {e}")
        return False


# =============================================================================
# Hardware Address Formatting
# =============================================================================

# Hex digit counts of an unseparated EUI-48 and EUI-64 address
EUI_HEX_LENGTHS = (12, 16)
MAC_GROUP_SIZE = 2
MAC_SEPARATOR = ":"


def format_mac_address(raw: str) -> str:
    """
    Format a raw hardware address as colon-separated byte pairs.

    Only input that can be an unseparated EUI-48 (12 characters) or EUI-64
    (16 characters) hex string is reformatted. Anything else, including
    addresses that already carry separators, is returned unchanged.

    Args:
        raw: Hardware address as reported by the source

    Returns:
        Address in the ``AA:BB:CC:DD:EE:FF`` form, or ``raw`` itself

    Example:
        >>> format_mac_address("001122334455")
        '00:11:22:33:44:55'
    """
    if len(raw) not in EUI_HEX_LENGTHS:
        return raw

    groups = [
        raw[i:i + MAC_GROUP_SIZE]
        for i in range(0, len(raw), MAC_GROUP_SIZE)
    ]
    return MAC_SEPARATOR.join(groups)


# =============================================================================
# Component Value Aggregation
# =============================================================================

COMPONENT_VALUE_SEPARATOR = ","


def join_component_values(values: Iterable[str]) -> str:
    """Join component values in order, without dedup or sorting."""
    return COMPONENT_VALUE_SEPARATOR.join(values)


# =============================================================================
# Logging Utilities
# =============================================================================

def setup_logging(config: Optional[Dict[str, Any]] = None) -> logging.Logger:
    """
    Set up logging for the device-id components.

    Args:
        config: Configuration dictionary

    Returns:
        Configured logger
    """
    config = config or get_default_config()
    debug_config = config.get("debug") or {}

    log_level = getattr(logging, str(debug_config.get("log_level", "INFO")).upper(), logging.INFO)
    verbose = debug_config.get("verbose", False)

    # Configure package logger
    logger = logging.getLogger("deviceid")
    logger.setLevel(log_level)

    # Console handler
    if verbose or log_level == logging.DEBUG:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(log_level)
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    # File handler (if enabled)
    if debug_config.get("save_debug_logs", False):
        log_file = Path(debug_config.get("debug_log_file", "logs/debug.log"))
        if not log_file.is_absolute():
            log_file = Path(__file__).parent.parent / log_file
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s"
        )
        file_handler.setFormatter(file_formatter)
        logger.addHandler(file_handler)

    return logger
