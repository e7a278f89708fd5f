"""
Base Device-ID Component Interface

All device-id components must inherit from BaseDeviceIdComponent and
implement the required members. This ensures every component can be
tagged and aggregated the same way by the composite identifier builder.
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional


class BaseDeviceIdComponent(ABC):
    """
    Abstract base class for all device-id components.

    A component contributes one named value to a composite device
    identifier. It holds no state between calls; every call to
    ``get_value`` queries the host again.

    Example:
        class HostnameComponent(BaseDeviceIdComponent):
            @property
            def name(self) -> str:
                return "Hostname"

            def get_value(self) -> str:
                return platform.node()
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the component with optional configuration.

        Args:
            config: Optional dictionary containing component-specific settings
        """
        self.config = config or {}

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the category name used to tag this component's value."""
        pass

    @abstractmethod
    def get_value(self) -> str:
        """
        Compute the component value.

        Returns:
            The component value as a string
        """
        pass

    @property
    def component_name(self) -> str:
        """Return the name of the implementing class."""
        return self.__class__.__name__

    def __repr__(self) -> str:
        return f"{self.component_name}(name={self.name!r})"
