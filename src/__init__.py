"""
Device-ID Network Adapter Component

Derives a stable device-identifier fragment from the hardware addresses
of a Windows host's network adapters.

Modules:
    - device_id: Command line entry point
    - utils: Configuration, logging, address formatting and value joining
    - components: Device-id components and the WMI query interface
"""

__version__ = "1.0.0"
__author__ = "DeviceId Contributors"
__license__ = "Apache-2.0"
