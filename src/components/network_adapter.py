"""
Network Adapter Device-ID Component

Derives the "MACAddress" component of a device identifier from the
hardware addresses of the installed network adapters.

Addresses are read from the MSFT_NetAdapter class first. Hosts without
that class (before Windows 8) fall back to Win32_NetworkAdapter. Any
other query failure is raised to the caller.
"""

import logging
from enum import Enum
from typing import Dict, Any, List, Optional

from src.utils import join_component_values
from .base_component import BaseDeviceIdComponent
from .network_sources import LegacyAdapterSource, ModernAdapterSource
from .wmi_query import SchemaUnavailableError, WmiQueryInterface

logger = logging.getLogger("deviceid.network")

NETWORK_CONFIG_KEYS = ("exclude_non_physical", "exclude_wireless")


class QueryState(Enum):
    """States of the source selection."""
    TRY_MODERN = "try_modern"
    TRY_LEGACY = "try_legacy"
    DONE = "done"
    FAILED = "failed"


def next_query_state(state: QueryState, error: Optional[BaseException]) -> QueryState:
    """
    Compute the next source-selection state.

    Args:
        state: Current state, TRY_MODERN or TRY_LEGACY
        error: Exception raised by the current source, or None on success

    Returns:
        The following state
    """
    if state is QueryState.TRY_MODERN:
        if error is None:
            return QueryState.DONE
        if isinstance(error, SchemaUnavailableError):
            return QueryState.TRY_LEGACY
        return QueryState.FAILED

    if state is QueryState.TRY_LEGACY:
        if error is None:
            return QueryState.DONE
        return QueryState.FAILED

    raise ValueError(f"No transition out of terminal state {state}")


class NetworkAdapterComponent(BaseDeviceIdComponent):
    """
    Device-id component built from network adapter hardware addresses.

    Options:
        - exclude_non_physical: skip virtual/software adapters
        - exclude_wireless: skip 802.11 adapters (modern schema only)

    Non physical adapters are unlikely to have a stable address, and
    wireless adapters often use address randomization.
    """

    NAME = "MACAddress"

    def __init__(
        self,
        exclude_non_physical: bool = False,
        exclude_wireless: bool = False,
        query_interface=None,
    ):
        super().__init__({
            "exclude_non_physical": exclude_non_physical,
            "exclude_wireless": exclude_wireless,
        })
        self._exclude_non_physical = exclude_non_physical
        self._exclude_wireless = exclude_wireless
        self._query = query_interface if query_interface is not None else WmiQueryInterface()

    @classmethod
    def from_config(cls, config: Optional[Dict[str, Any]] = None,
                    query_interface=None) -> "NetworkAdapterComponent":
        """
        Create the component from a configuration dictionary.

        Args:
            config: Full configuration, see ``get_default_config``
            query_interface: Optional query interface override

        Returns:
            Configured component
        """
        config = config or {}
        device_config = config.get("device_id") or {}
        section = device_config.get("network_adapter") or {}

        for key in section:
            if key not in NETWORK_CONFIG_KEYS:
                logger.warning(f"Ignoring unknown network_adapter option: {key}")

        return cls(
            exclude_non_physical=bool(section.get("exclude_non_physical", False)),
            exclude_wireless=bool(section.get("exclude_wireless", False)),
            query_interface=query_interface,
        )

    @property
    def name(self) -> str:
        return self.NAME

    @property
    def exclude_non_physical(self) -> bool:
        return self._exclude_non_physical

    @property
    def exclude_wireless(self) -> bool:
        return self._exclude_wireless

    def _source_for(self, state: QueryState):
        if state is QueryState.TRY_MODERN:
            return ModernAdapterSource(
                self._query, self._exclude_non_physical, self._exclude_wireless
            )
        return LegacyAdapterSource(
            self._query, self._exclude_non_physical, self._exclude_wireless
        )

    def get_addresses(self) -> List[str]:
        """
        Get the hardware addresses of the kept adapters.

        Returns:
            Addresses from exactly one schema, in enumeration order

        Raises:
            DeviceQueryError: any failure other than a missing modern schema,
                or any failure of the legacy schema
        """
        state = QueryState.TRY_MODERN

        while True:
            source = self._source_for(state)
            addresses: List[str] = []
            error: Optional[BaseException] = None

            try:
                addresses = source.get_addresses()
            except Exception as e:
                error = e

            next_state = next_query_state(state, error)
            logger.debug(f"Source selection: {state.value} -> {next_state.value}")

            if next_state is QueryState.DONE:
                return addresses
            if next_state is QueryState.FAILED:
                raise error

            logger.info(f"{error}; falling back to {LegacyAdapterSource.class_name}")
            state = next_state

    def get_value(self) -> str:
        """Get the comma-separated hardware addresses."""
        return join_component_values(self.get_addresses())
