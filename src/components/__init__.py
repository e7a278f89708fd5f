"""
Device-ID Components Module

This module contains the components that contribute values to a composite
device identifier. Contributors can add new components by implementing the
base component interface.

Available Components:
    - network_adapter: Hardware addresses of the installed network adapters
"""

from .base_component import BaseDeviceIdComponent
from .network_adapter import NetworkAdapterComponent, QueryState
from .network_sources import (
    AdapterRecord,
    LegacyAdapterSource,
    ModernAdapterSource,
    should_keep_adapter,
)
from .wmi_query import (
    DeviceQueryError,
    QueryFailureError,
    SchemaUnavailableError,
    WmiQueryInterface,
)

__all__ = [
    "BaseDeviceIdComponent",
    "NetworkAdapterComponent",
    "QueryState",
    "AdapterRecord",
    "LegacyAdapterSource",
    "ModernAdapterSource",
    "should_keep_adapter",
    "DeviceQueryError",
    "QueryFailureError",
    "SchemaUnavailableError",
    "WmiQueryInterface",
]
