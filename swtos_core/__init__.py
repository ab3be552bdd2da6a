"""
SWT-OS Core Module - native and running platform detection for SWT bundles.
"""
__version__ = "0.1.0"

from .exceptions import (
    SwtOsError,
    PlatformError,
    UnsupportedPlatformError,
    PlatformProbeError,
    ConfigError,
)
from .platform import (
    OSFamily,
    Arch,
    PlatformIdentity,
    SwtPlatform,
    ALL_IDENTITIES,
    is_windows,
    is_linux,
    is_mac,
    is_mac_or_linux,
    select_by_family,
    select_by_arch,
    os_token,
    arch_token,
    os_dot_arch,
    to_swt,
)
from .detection import (
    PlatformInfo,
    PlatformDetector,
    resolve_native,
    resolve_running,
    detect_platform,
    get_detector,
    get_native,
    get_running,
)
from .config import get_config, get_config_manager

__all__ = [
    "__version__",
    # Exceptions
    "SwtOsError",
    "PlatformError",
    "UnsupportedPlatformError",
    "PlatformProbeError",
    "ConfigError",
    # Identities
    "OSFamily",
    "Arch",
    "PlatformIdentity",
    "SwtPlatform",
    "ALL_IDENTITIES",
    "is_windows",
    "is_linux",
    "is_mac",
    "is_mac_or_linux",
    "select_by_family",
    "select_by_arch",
    "os_token",
    "arch_token",
    "os_dot_arch",
    "to_swt",
    # Detection
    "PlatformInfo",
    "PlatformDetector",
    "resolve_native",
    "resolve_running",
    "detect_platform",
    "get_detector",
    "get_native",
    "get_running",
    # Config
    "get_config",
    "get_config_manager",
]
