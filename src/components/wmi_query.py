"""
WMI Query Interface

Enumerates management class instances through Windows Management
Instrumentation and turns COM failures into the device-id error taxonomy.

Every enumeration runs inside its own COM apartment and every instance is
handed out as a scoped ManagementObject, so handles are dropped on every
exit path.
"""

import sys
import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Optional

# Conditional imports for Windows-specific features
if sys.platform == "win32":
    try:
        import wmi
        import pythoncom
        import pywintypes
        HAS_WMI = True
    except ImportError:
        HAS_WMI = False
else:
    HAS_WMI = False

logger = logging.getLogger("deviceid.wmi")


MODERN_NAMESPACE = "root\\StandardCimv2"
MODERN_CLASS = "MSFT_NetAdapter"
LEGACY_NAMESPACE = "root\\cimv2"
LEGACY_CLASS = "Win32_NetworkAdapter"

# WBEM status codes (unsigned)
WBEM_E_NOT_FOUND = 0x80041002
WBEM_E_INVALID_NAMESPACE = 0x8004100E
WBEM_E_INVALID_CLASS = 0x80041010

SCHEMA_UNAVAILABLE_CODES = frozenset({
    WBEM_E_NOT_FOUND,
    WBEM_E_INVALID_NAMESPACE,
    WBEM_E_INVALID_CLASS,
})


class DeviceQueryError(Exception):
    """Base class for failures while querying the device-management interface."""

    def __init__(self, message: str, namespace: str = "", class_name: str = "",
                 error_code: Optional[int] = None):
        super().__init__(message)
        self.namespace = namespace
        self.class_name = class_name
        self.error_code = error_code


class SchemaUnavailableError(DeviceQueryError):
    """The requested namespace or class does not exist on this host."""


class QueryFailureError(DeviceQueryError):
    """Any other query failure (transport, access denied, WMI unavailable)."""


def _com_errors() -> tuple:
    if not HAS_WMI:
        return ()
    return (wmi.x_wmi, pywintypes.com_error)


def _to_unsigned(code: int) -> int:
    return code & 0xFFFFFFFF


def get_error_codes(exc: BaseException) -> List[int]:
    """
    Collect the status codes carried by a WMI or COM exception.

    ``wmi.x_wmi`` keeps the underlying ``pywintypes.com_error`` in its
    ``com_error`` attribute. The WBEM status is either the hresult itself
    or, for DISP_E_EXCEPTION, the scode in ``excepinfo[5]``.

    Args:
        exc: Exception raised by the wmi module or by COM

    Returns:
        Unsigned status codes, hresult first
    """
    com_error = getattr(exc, "com_error", None) or exc
    codes = []

    hresult = getattr(com_error, "hresult", None)
    if isinstance(hresult, int):
        codes.append(_to_unsigned(hresult))

    excepinfo = getattr(com_error, "excepinfo", None)
    if excepinfo and len(excepinfo) > 5 and isinstance(excepinfo[5], int):
        codes.append(_to_unsigned(excepinfo[5]))

    return codes


def classify_query_error(exc: BaseException, namespace: str, class_name: str) -> DeviceQueryError:
    """
    Map a WMI or COM exception onto SchemaUnavailableError or QueryFailureError.

    Args:
        exc: Exception raised while connecting or enumerating
        namespace: WMI namespace being queried
        class_name: WMI class being queried

    Returns:
        The translated error. The caller raises it with ``from exc``.
    """
    codes = get_error_codes(exc)
    for code in codes:
        if code in SCHEMA_UNAVAILABLE_CODES:
            return SchemaUnavailableError(
                f"{namespace}:{class_name} is not available (0x{code:08X})",
                namespace=namespace,
                class_name=class_name,
                error_code=code,
            )

    error_code = codes[-1] if codes else None
    return QueryFailureError(
        f"Query of {namespace}:{class_name} failed: {exc}",
        namespace=namespace,
        class_name=class_name,
        error_code=error_code,
    )


class ManagementObject:
    """
    Scoped handle to one management class instance.

    Use as a context manager; the COM reference is dropped on exit.
    """

    def __init__(self, instance: Any, namespace: str = "", class_name: str = ""):
        self._instance = instance
        self.namespace = namespace
        self.class_name = class_name

    @property
    def is_released(self) -> bool:
        return self._instance is None

    def get(self, property_name: str) -> Any:
        """
        Read a property of the instance.

        Returns:
            The property value, or None if the instance has no value for it

        Raises:
            QueryFailureError: the instance was released or the read failed
        """
        if self._instance is None:
            raise QueryFailureError(f"Read of {property_name} from a released instance")

        try:
            return getattr(self._instance, property_name, None)
        except _com_errors() as e:
            codes = get_error_codes(e)
            # A failed read never means the schema is missing
            raise QueryFailureError(
                f"Read of {property_name} from {self.namespace}:{self.class_name} failed: {e}",
                namespace=self.namespace,
                class_name=self.class_name,
                error_code=codes[-1] if codes else None,
            ) from e

    def release(self) -> None:
        """Drop the COM reference. Safe to call more than once."""
        self._instance = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.release()
        return False


class WmiQueryInterface:
    """
    Device-management query interface backed by the ``wmi`` package.

    Only available on Windows with pywin32 and wmi installed; elsewhere
    every query raises QueryFailureError.
    """

    @property
    def is_available(self) -> bool:
        return HAS_WMI

    @contextmanager
    def instances(self, namespace: str, class_name: str) -> Iterator[Iterator[ManagementObject]]:
        """
        Enumerate all instances of a management class.

        Args:
            namespace: WMI namespace, e.g. ``root\\cimv2``
            class_name: WMI class, e.g. ``Win32_NetworkAdapter``

        Yields:
            Iterator of scoped ManagementObject handles

        Raises:
            SchemaUnavailableError: namespace or class missing on this host
            QueryFailureError: WMI unavailable or any other COM failure
        """
        if not self.is_available:
            raise QueryFailureError(
                "WMI is not available on this platform",
                namespace=namespace,
                class_name=class_name,
            )

        com_errors = _com_errors()

        pythoncom.CoInitialize()
        try:
            logger.debug(f"Querying {namespace}:{class_name}")
            try:
                connection = wmi.WMI(namespace=namespace)
            except com_errors as e:
                raise classify_query_error(e, namespace, class_name) from e

            try:
                wmi_class = getattr(connection, class_name)
            except AttributeError as e:
                raise SchemaUnavailableError(
                    f"{namespace}:{class_name} is not available",
                    namespace=namespace,
                    class_name=class_name,
                ) from e

            try:
                handles = [
                    ManagementObject(obj, namespace, class_name)
                    for obj in wmi_class()
                ]
            except com_errors as e:
                raise classify_query_error(e, namespace, class_name) from e

            try:
                yield iter(handles)
            finally:
                # COM references must be gone before CoUninitialize
                for handle in handles:
                    handle.release()
                handles = None
                wmi_class = None
                connection = None
        finally:
            pythoncom.CoUninitialize()
