"""
Device-ID Network Adapter Command Line

Prints the "MACAddress" device-id component of the current host.

Usage:
    python device_id.py [--config path/to/config.yaml] [--exclude-non-physical]
                        [--exclude-wireless] [--verbose]
"""

import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.utils import load_config, setup_logging
from src.components import NetworkAdapterComponent, DeviceQueryError

# Module logger
logger = logging.getLogger("deviceid.cli")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the network adapter device-id command."""
    parser = argparse.ArgumentParser(
        description="Device-ID - network adapter hardware address component"
    )
    parser.add_argument(
        "--config",
        type=str,
        help="Path to configuration file",
        default=None
    )
    parser.add_argument(
        "--exclude-non-physical",
        action="store_true",
        help="Skip adapters that are not backed by hardware"
    )
    parser.add_argument(
        "--exclude-wireless",
        action="store_true",
        help="Skip wireless adapters (MSFT_NetAdapter only)"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    args = parser.parse_args(argv)

    config = load_config(args.config)
    network_config = config["device_id"]["network_adapter"]

    # Command line flags only switch exclusions on
    if args.exclude_non_physical:
        network_config["exclude_non_physical"] = True
    if args.exclude_wireless:
        network_config["exclude_wireless"] = True
    if args.verbose:
        config["debug"]["verbose"] = True
        config["debug"]["log_level"] = "DEBUG"

    setup_logging(config)

    component = NetworkAdapterComponent.from_config(config)

    try:
        value = component.get_value()
    except DeviceQueryError as e:
        logger.error(f"Failed to read {component.name}: {e}")
        return 1

    print(f"{component.name}={value}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
