"""Native and running platform detection.

Detection reads three kinds of host signal, each through an injectable callable:
named system properties (``os.name``, ``os.arch``, ``arch.data.model``),
environment variables, and, on macOS only, the output of a hardware probe
command. Native and running identities are computed together in one pass and
cached by the ``PlatformDetector`` that ran it.
"""
import logging
import subprocess
import threading
from typing import Callable, Optional, Sequence

from pydantic import BaseModel, ConfigDict

from .exceptions import PlatformProbeError, UnsupportedPlatformError
from .platform import (
    LINUX_UNKNOWN,
    LINUX_X64,
    LINUX_X86,
    MAC_SILICON,
    MAC_X64,
    WIN_X64,
    WIN_X86,
    Arch,
    OSFamily,
    PlatformIdentity,
    identity_for,
)
from .system import (
    DATA_MODEL,
    OS_ARCH,
    OS_NAME,
    read_environment_variable,
    read_system_property,
    run_command,
)

logger = logging.getLogger(__name__)

PropertyReader = Callable[[str], Optional[str]]
EnvReader = Callable[[str], Optional[str]]
CommandRunner = Callable[[Sequence[str]], str]

DEFAULT_PROBE_COMMAND = ("uname", "-a")

MAC_MARKERS = ("mac", "darwin")
WINDOWS_MARKERS = ("win",)
UNIX_MARKERS = ("nix", "nux", "aix")

# Only set on 64-bit Windows, whatever the bitness of the calling process
WIN64_ENV_VAR = "ProgramFiles(x86)"
ARM64_PROBE_MARKER = "_ARM64_"
ARM64_OS_ARCH = "aarch64"

LINUX_ARCHES = {
    "i386": LINUX_X86,
    "x86": LINUX_X86,
    "x86_64": LINUX_X64,
    "amd64": LINUX_X64,
}


def resolve_native(
    read_property: PropertyReader,
    read_env: EnvReader,
    run: Optional[CommandRunner] = None,
    probe_command: Sequence[str] = DEFAULT_PROBE_COMMAND,
) -> PlatformIdentity:
    """Determine the platform the machine itself runs.

    Args:
        read_property: Lookup for system properties.
        read_env: Lookup for environment variables.
        run: Runs the macOS hardware probe and returns its output.
        probe_command: The probe command line.

    Returns:
        The native PlatformIdentity.

    Raises:
        UnsupportedPlatformError: If os.name is not recognized.
        PlatformProbeError: If the macOS hardware probe could not be run.
    """
    raw_name = read_property(OS_NAME) or ""
    os_name = raw_name.lower()

    # darwin contains "win", so macOS must be matched first
    if any(marker in os_name for marker in MAC_MARKERS):
        try:
            output = (run or run_command)(probe_command)
        except PlatformProbeError:
            raise
        except (OSError, subprocess.SubprocessError) as e:
            raise PlatformProbeError(probe_command, e, OSFamily.MACOS.value) from e
        return MAC_SILICON if ARM64_PROBE_MARKER in output else MAC_X64
    elif any(marker in os_name for marker in WINDOWS_MARKERS):
        return WIN_X64 if read_env(WIN64_ENV_VAR) is not None else WIN_X86
    elif any(marker in os_name for marker in UNIX_MARKERS):
        return LINUX_ARCHES.get(read_property(OS_ARCH) or "", LINUX_UNKNOWN)
    raise UnsupportedPlatformError(raw_name, f"Unknown os.name '{raw_name}'.")


def running_arch(read_property: PropertyReader) -> Arch:
    """Return the architecture of the current process."""
    data_model = read_property(DATA_MODEL)
    if data_model == "32":
        return Arch.X86
    elif data_model == "64":
        return Arch.ARM64 if read_property(OS_ARCH) == ARM64_OS_ARCH else Arch.X64
    return Arch.UNKNOWN


def resolve_running(native: PlatformIdentity, read_property: PropertyReader) -> PlatformIdentity:
    """Determine the platform as seen by the current process.

    The OS family always comes from ``native``; only the architecture may differ.
    Pairs that no variant represents, such as a 32-bit macOS process, become the
    family's unknown variant.
    """
    return identity_for(native.family, running_arch(read_property))


class PlatformInfo(BaseModel):
    """The native and running identities from one detection pass."""
    model_config = ConfigDict(frozen=True)

    native: PlatformIdentity
    running: PlatformIdentity


class PlatformDetector:
    """Runs detection at most once and caches the result."""

    def __init__(self, probe_command: Sequence[str] = DEFAULT_PROBE_COMMAND):
        self.probe_command = tuple(probe_command)
        self._lock = threading.Lock()
        self._info: Optional[PlatformInfo] = None

    @property
    def is_detected(self) -> bool:
        return self._info is not None

    def detect(
        self,
        read_property: Optional[PropertyReader] = None,
        read_env: Optional[EnvReader] = None,
        run: Optional[CommandRunner] = None,
    ) -> PlatformInfo:
        """Detect native and running platforms, or return the cached result.

        Lookups left as None use the real system accessors. Once a detection has
        succeeded, later calls return it regardless of the lookups passed.
        """
        info = self._info
        if info is not None:
            return info

        with self._lock:
            if self._info is None:
                read_property = read_property or read_system_property
                native = resolve_native(
                    read_property,
                    read_env or read_environment_variable,
                    run or run_command,
                    self.probe_command,
                )
                running = resolve_running(native, read_property)
                self._info = PlatformInfo(native=native, running=running)
                logger.debug(f"Detected platform: native={native}, running={running}")
            return self._info

    def native(
        self,
        read_property: Optional[PropertyReader] = None,
        read_env: Optional[EnvReader] = None,
        run: Optional[CommandRunner] = None,
    ) -> PlatformIdentity:
        """Native platform: a 32-bit process on 64-bit Windows gets WIN_x64."""
        return self.detect(read_property, read_env, run).native

    def running(
        self,
        read_property: Optional[PropertyReader] = None,
        read_env: Optional[EnvReader] = None,
        run: Optional[CommandRunner] = None,
    ) -> PlatformIdentity:
        """Running platform: a 32-bit process on 64-bit Windows gets WIN_x86."""
        return self.detect(read_property, read_env, run).running


# Lazy singleton pattern
_detector_instance: Optional[PlatformDetector] = None
_detector_lock = threading.Lock()


def get_detector() -> PlatformDetector:
    """Get the process-wide detector, configured from the SWT-OS config."""
    global _detector_instance
    if _detector_instance is None:
        with _detector_lock:
            if _detector_instance is None:
                from .config import get_config

                _detector_instance = PlatformDetector(get_config().probe_command)
    return _detector_instance


def reset_detector() -> None:
    """Reset the detector singleton. Useful for testing."""
    global _detector_instance
    _detector_instance = None


def detect_platform(
    read_property: Optional[PropertyReader] = None,
    read_env: Optional[EnvReader] = None,
    run: Optional[CommandRunner] = None,
) -> PlatformInfo:
    """Eagerly detect the native and running platforms on the process-wide detector."""
    return get_detector().detect(read_property, read_env, run)


def get_native() -> PlatformIdentity:
    return get_detector().native()


def get_running() -> PlatformIdentity:
    return get_detector().running()
