"""
Network Adapter Sources

Enumerates network adapters through the two WMI schemas and turns them
into hardware address lists:
    - ModernAdapterSource: MSFT_NetAdapter (root\\StandardCimv2, Windows 8 and up)
    - LegacyAdapterSource: Win32_NetworkAdapter (root\\cimv2)

The schemas have incompatible fields, so each source maps its instances
onto the common AdapterRecord before filtering.
"""

import logging
from dataclasses import dataclass
from typing import Any, List, Optional

from src.utils import format_mac_address
from .wmi_query import (
    ManagementObject,
    MODERN_NAMESPACE,
    MODERN_CLASS,
    LEGACY_NAMESPACE,
    LEGACY_CLASS,
)

logger = logging.getLogger("deviceid.network")

# NDIS_PHYSICAL_MEDIUM value of NdisPhysicalMediumNative802_11
NDIS_MEDIUM_WIRELESS = 9


@dataclass
class AdapterRecord:
    """One enumerated network adapter, valid for a single pass only."""
    is_physical: bool
    medium_type: Optional[int] = None
    raw_address: Optional[str] = None
    pre_formatted: bool = False

    def __post_init__(self):
        # An empty address is treated as no address at all
        if self.raw_address == "":
            self.raw_address = None


def should_keep_adapter(
    record: AdapterRecord,
    exclude_non_physical: bool,
    exclude_wireless: bool
) -> bool:
    """
    Decide whether an adapter contributes to the component value.

    Args:
        record: Adapter to check
        exclude_non_physical: Reject adapters not backed by hardware
        exclude_wireless: Reject adapters on an 802.11 medium

    Returns:
        True if the adapter is kept
    """
    if exclude_non_physical and not record.is_physical:
        return False

    if exclude_wireless and record.medium_type == NDIS_MEDIUM_WIRELESS:
        return False

    return True


def _optional_int(value: Any) -> Optional[int]:
    if value is None:
        return None
    return int(value)


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)


class AdapterSource:
    """
    Base class for the schema-specific adapter sources.

    Subclasses name the WMI namespace and class they enumerate and map each
    instance onto an AdapterRecord.
    """

    namespace: str = ""
    class_name: str = ""

    def __init__(self, query_interface, exclude_non_physical: bool = False,
                 exclude_wireless: bool = False):
        """
        Args:
            query_interface: Object providing ``instances(namespace, class_name)``
            exclude_non_physical: Skip adapters not backed by hardware
            exclude_wireless: Skip wireless adapters where the schema can tell
        """
        self._query = query_interface
        self.exclude_non_physical = exclude_non_physical
        self.exclude_wireless = exclude_wireless

    @property
    def source_name(self) -> str:
        return f"{self.namespace}:{self.class_name}"

    def read_record(self, instance: ManagementObject) -> AdapterRecord:
        raise NotImplementedError

    def get_addresses(self) -> List[str]:
        """
        Enumerate adapters and return the addresses of those kept.

        Returns:
            Hardware addresses in enumeration order
        """
        addresses = []

        with self._query.instances(self.namespace, self.class_name) as instances:
            for instance in instances:
                with instance:
                    record = self.read_record(instance)

                    if not should_keep_adapter(
                        record, self.exclude_non_physical, self.exclude_wireless
                    ):
                        continue

                    if record.raw_address is None:
                        continue

                    if record.pre_formatted:
                        addresses.append(record.raw_address)
                    else:
                        addresses.append(format_mac_address(record.raw_address))

        logger.debug(f"{self.source_name} yielded {len(addresses)} address(es)")
        return addresses


class ModernAdapterSource(AdapterSource):
    """
    Adapter source for the CIMv2 based MSFT_NetAdapter class.

    PermanentAddress is reported as an unseparated hex string and is
    formatted before use.
    """

    namespace = MODERN_NAMESPACE
    class_name = MODERN_CLASS

    def read_record(self, instance: ManagementObject) -> AdapterRecord:
        return AdapterRecord(
            is_physical=bool(instance.get("ConnectorPresent")),
            medium_type=_optional_int(instance.get("NdisPhysicalMedium")),
            raw_address=_optional_str(instance.get("PermanentAddress")),
            pre_formatted=False,
        )


class LegacyAdapterSource(AdapterSource):
    """
    Adapter source for the Win32_NetworkAdapter class.

    The class has no medium type, so wireless adapters cannot be told apart
    and the wireless exclusion does not apply. MACAddress is already
    colon-separated.
    """

    namespace = LEGACY_NAMESPACE
    class_name = LEGACY_CLASS

    def __init__(self, query_interface, exclude_non_physical: bool = False,
                 exclude_wireless: bool = False):
        super().__init__(query_interface, exclude_non_physical, exclude_wireless=False)
        self.wireless_exclusion_requested = exclude_wireless

    def get_addresses(self) -> List[str]:
        if self.wireless_exclusion_requested:
            logger.debug(
                f"{self.source_name} has no medium type; "
                "wireless adapters are not excluded"
            )
        return super().get_addresses()

    def read_record(self, instance: ManagementObject) -> AdapterRecord:
        return AdapterRecord(
            is_physical=bool(instance.get("PhysicalAdapter")),
            medium_type=None,
            raw_address=_optional_str(instance.get("MACAddress")),
            pre_formatted=True,
        )
