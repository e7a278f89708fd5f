"""
Pytest Configuration and Fixtures

Provides shared fixtures and fake query interfaces for all tests.
"""

import pytest
import tempfile
import os
import sys
from contextlib import contextmanager
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.utils import get_default_config
from src.components.wmi_query import (
    ManagementObject,
    MODERN_NAMESPACE,
    MODERN_CLASS,
    LEGACY_NAMESPACE,
    LEGACY_CLASS,
)


class FakeInstance:
    """Stand-in for a WMI instance; only the given properties exist."""

    def __init__(self, **properties):
        for name, value in properties.items():
            setattr(self, name, value)


class ExplodingInstance:
    """WMI instance whose property reads fail."""

    def __getattr__(self, name):
        raise RuntimeError(f"read of {name} failed")


class TrackingManagementObject(ManagementObject):
    """ManagementObject that remembers whether it was released."""

    def __init__(self, instance):
        super().__init__(instance)
        self.release_count = 0

    def release(self) -> None:
        self.release_count += 1
        super().release()


class FakeQueryInterface:
    """
    In-memory query interface.

    Each (namespace, class) entry maps to either a list of instances or an
    exception to raise when the enumeration is opened.
    """

    def __init__(self, modern=None, legacy=None):
        self._tables = {
            (MODERN_NAMESPACE, MODERN_CLASS): modern if modern is not None else [],
            (LEGACY_NAMESPACE, LEGACY_CLASS): legacy if legacy is not None else [],
        }
        self.queries = []
        self.handles = []
        self.open_enumerations = 0

    @contextmanager
    def instances(self, namespace, class_name):
        self.queries.append((namespace, class_name))
        table = self._tables[(namespace, class_name)]
        if isinstance(table, BaseException):
            raise table

        handles = [TrackingManagementObject(obj) for obj in table]
        self.handles.extend(handles)
        self.open_enumerations += 1
        try:
            yield iter(handles)
        finally:
            self.open_enumerations -= 1
            for handle in handles:
                handle.release()


def modern_instance(address=None, physical=True, medium=0):
    """Build an MSFT_NetAdapter-like instance."""
    return FakeInstance(
        ConnectorPresent=physical,
        NdisPhysicalMedium=medium,
        PermanentAddress=address,
    )


def legacy_instance(address=None, physical=True):
    """Build a Win32_NetworkAdapter-like instance."""
    return FakeInstance(
        PhysicalAdapter=physical,
        MACAddress=address,
    )


@pytest.fixture
def default_config():
    """Provide default configuration."""
    return get_default_config()


@pytest.fixture
def temp_log_dir():
    """Provide temporary log directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def temp_config_file():
    """Provide temporary config file."""
    with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
        f.write("device_id:\n  network_adapter:\n    exclude_wireless: true\n")
        temp_path = f.name

    yield temp_path

    if os.path.exists(temp_path):
        os.unlink(temp_path)


@pytest.fixture
def mixed_modern_adapters():
    """Physical wired, physical wireless and virtual adapters (MSFT_NetAdapter)."""
    return [
        modern_instance("AABBCCDDEEFF", physical=True, medium=0),
        modern_instance("001122334455", physical=True, medium=9),
        modern_instance("0A0B0C0D0E0F", physical=False, medium=0),
    ]


@pytest.fixture
def mixed_legacy_adapters():
    """Physical and virtual adapters (Win32_NetworkAdapter)."""
    return [
        legacy_instance("AA:BB:CC:DD:EE:FF", physical=True),
        legacy_instance("00:11:22:33:44:55", physical=True),
        legacy_instance("0A:0B:0C:0D:0E:0F", physical=False),
        legacy_instance(None, physical=True),
    ]
