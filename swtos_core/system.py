"""Real system accessors used when detection is not given explicit lookups."""
import logging
import os
import platform
import struct
import subprocess
from typing import Optional, Sequence

from .exceptions import PlatformProbeError

logger = logging.getLogger(__name__)

# Property keys understood by read_system_property
OS_NAME = "os.name"
OS_ARCH = "os.arch"
DATA_MODEL = "arch.data.model"


def _os_name() -> str:
    system = platform.system()
    # Report macOS the way toolkits expect it so the "mac" marker matches
    if system == "Darwin":
        return "Mac OS X"
    return system


def _data_model() -> str:
    """Pointer width of the running interpreter: '32' or '64'."""
    return str(struct.calcsize("P") * 8)


def read_system_property(name: str) -> Optional[str]:
    """Return a named system property, or None if the key is unknown.

    Args:
        name: One of 'os.name', 'os.arch' or 'arch.data.model'.
    """
    if name == OS_NAME:
        return _os_name()
    elif name == OS_ARCH:
        return platform.machine().lower()
    elif name == DATA_MODEL:
        return _data_model()
    return None


def read_environment_variable(name: str) -> Optional[str]:
    """Return an environment variable, or None if unset."""
    return os.environ.get(name)


def run_command(command: Sequence[str]) -> str:
    """Run a command and return its standard output.

    The exit code is not inspected; only failing to start the process or to
    read its output is an error.

    Raises:
        PlatformProbeError: If the process could not be run.
    """
    try:
        result = subprocess.run(
            list(command),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except (OSError, subprocess.SubprocessError) as e:
        raise PlatformProbeError(command, e) from e

    output = result.stdout.decode("utf-8", errors="replace")
    logger.debug(f"{' '.join(command)} -> {output.strip()}")
    return output
