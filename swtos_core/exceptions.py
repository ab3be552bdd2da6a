"""SWT-OS Exception Hierarchy."""
from typing import Optional, Sequence


class SwtOsError(Exception):
    """Base exception for all SWT-OS errors."""
    pass


class PlatformError(SwtOsError):
    """Base exception for platform detection errors."""
    def __init__(self, platform: str, message: str):
        self.platform = platform
        self.message = message
        super().__init__(f"[{platform}] {message}")


class UnsupportedPlatformError(PlatformError):
    """Raised when the host OS, or an OS family passed to a selection, is not recognized."""
    def __init__(self, platform: str, message: Optional[str] = None):
        if message is None:
            message = f"Operating system '{platform}' is not supported."
        super().__init__(platform, message)


class PlatformProbeError(PlatformError):
    """Raised when the hardware probe command could not be run or read.

    The probe only runs while classifying macOS hosts, so platform defaults to it.
    """
    def __init__(self, command: Sequence[str], cause: BaseException, platform: str = "macos"):
        self.command = list(command)
        self.cause = cause
        super().__init__(
            platform,
            f"Hardware probe '{' '.join(self.command)}' failed: {cause}",
        )


class ConfigError(SwtOsError):
    """Raised when a configuration value is invalid."""
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"Invalid config value for '{field}': {message}")
