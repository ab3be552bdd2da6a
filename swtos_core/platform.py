"""Platform identity types and the pure functions that classify them.

This module is intentionally standalone with no I/O so that identities can be
built and inspected in tests without touching the host system.
"""
from enum import Enum
from typing import Dict, FrozenSet, Tuple, TypeVar

from pydantic import BaseModel, ConfigDict, model_validator

from .exceptions import UnsupportedPlatformError

T = TypeVar("T")


class OSFamily(str, Enum):
    """Operating system family."""
    WINDOWS = "windows"
    LINUX = "linux"
    MACOS = "macos"


class Arch(str, Enum):
    """CPU architecture."""
    X86 = "x86"
    X64 = "x64"
    ARM64 = "arm64"
    UNKNOWN = "unknown"


VALID_ARCHES: Dict[OSFamily, FrozenSet[Arch]] = {
    OSFamily.WINDOWS: frozenset({Arch.X86, Arch.X64, Arch.UNKNOWN}),
    OSFamily.LINUX: frozenset({Arch.X86, Arch.X64, Arch.UNKNOWN}),
    OSFamily.MACOS: frozenset({Arch.X64, Arch.ARM64, Arch.UNKNOWN}),
}

# Display names, in declaration order.
_NAMES: Dict[Tuple[OSFamily, Arch], str] = {
    (OSFamily.WINDOWS, Arch.X64): "WIN_x64",
    (OSFamily.WINDOWS, Arch.X86): "WIN_x86",
    (OSFamily.LINUX, Arch.X64): "LINUX_x64",
    (OSFamily.LINUX, Arch.X86): "LINUX_x86",
    (OSFamily.MACOS, Arch.X64): "MAC_x64",
    (OSFamily.MACOS, Arch.ARM64): "MAC_silicon",
    (OSFamily.WINDOWS, Arch.UNKNOWN): "WIN_unknown",
    (OSFamily.LINUX, Arch.UNKNOWN): "LINUX_unknown",
    (OSFamily.MACOS, Arch.UNKNOWN): "MAC_unknown",
}


class PlatformIdentity(BaseModel):
    """An (OS family, architecture) pair drawn from the nine supported variants."""
    model_config = ConfigDict(frozen=True)

    family: OSFamily
    arch: Arch

    @model_validator(mode="after")
    def _check_variant(self) -> "PlatformIdentity":
        if self.arch not in VALID_ARCHES[self.family]:
            raise ValueError(f"{self.family.value} does not support architecture {self.arch.value}")
        return self

    @property
    def name(self) -> str:
        return _NAMES[(self.family, self.arch)]

    def __str__(self) -> str:
        return self.name


WIN_X64 = PlatformIdentity(family=OSFamily.WINDOWS, arch=Arch.X64)
WIN_X86 = PlatformIdentity(family=OSFamily.WINDOWS, arch=Arch.X86)
LINUX_X64 = PlatformIdentity(family=OSFamily.LINUX, arch=Arch.X64)
LINUX_X86 = PlatformIdentity(family=OSFamily.LINUX, arch=Arch.X86)
MAC_X64 = PlatformIdentity(family=OSFamily.MACOS, arch=Arch.X64)
MAC_SILICON = PlatformIdentity(family=OSFamily.MACOS, arch=Arch.ARM64)
WIN_UNKNOWN = PlatformIdentity(family=OSFamily.WINDOWS, arch=Arch.UNKNOWN)
LINUX_UNKNOWN = PlatformIdentity(family=OSFamily.LINUX, arch=Arch.UNKNOWN)
MAC_UNKNOWN = PlatformIdentity(family=OSFamily.MACOS, arch=Arch.UNKNOWN)

ALL_IDENTITIES: Tuple[PlatformIdentity, ...] = (
    WIN_X64, WIN_X86, LINUX_X64, LINUX_X86, MAC_X64, MAC_SILICON,
    WIN_UNKNOWN, LINUX_UNKNOWN, MAC_UNKNOWN,
)


def identity_for(family: OSFamily, arch: Arch) -> PlatformIdentity:
    """Return the identity for family/arch, or the family's unknown variant if the pair is invalid."""
    if arch not in VALID_ARCHES[family]:
        arch = Arch.UNKNOWN
    return PlatformIdentity(family=family, arch=arch)


def unsupported_error(identity: PlatformIdentity) -> UnsupportedPlatformError:
    """Build the error raised when an identity reaches an unhandled branch."""
    family = identity.family
    return UnsupportedPlatformError(str(family.value if isinstance(family, OSFamily) else family))


def is_windows(identity: PlatformIdentity) -> bool:
    return identity.family == OSFamily.WINDOWS


def is_linux(identity: PlatformIdentity) -> bool:
    return identity.family == OSFamily.LINUX


def is_mac(identity: PlatformIdentity) -> bool:
    return identity.family == OSFamily.MACOS


def is_mac_or_linux(identity: PlatformIdentity) -> bool:
    return is_mac(identity) or is_linux(identity)


def select_by_family(identity: PlatformIdentity, windows_value: T, mac_value: T, linux_value: T) -> T:
    """Return the value matching the identity's OS family.

    Args:
        identity: The platform to select for.
        windows_value: Returned for Windows.
        mac_value: Returned for macOS.
        linux_value: Returned for Linux.

    Raises:
        UnsupportedPlatformError: If the family is none of the three.
    """
    if is_windows(identity):
        return windows_value
    elif is_mac(identity):
        return mac_value
    elif is_linux(identity):
        return linux_value
    raise unsupported_error(identity)


def select_by_arch(arch: Arch, x86_value: T, x64_value: T, arm64_value: T, unknown_value: T) -> T:
    """Return the value matching the architecture."""
    if arch == Arch.X86:
        return x86_value
    elif arch == Arch.X64:
        return x64_value
    elif arch == Arch.ARM64:
        return arm64_value
    return unknown_value


def os_token(identity: PlatformIdentity) -> str:
    """SWT-style win32/linux/macosx."""
    return select_by_family(identity, "win32", "macosx", "linux")


def arch_token(identity: PlatformIdentity) -> str:
    """SWT-style x86/x86_64/aarch64/unknown."""
    return select_by_arch(identity.arch, "x86", "x86_64", "aarch64", "unknown")


def os_dot_arch(identity: PlatformIdentity) -> str:
    """os_token.arch_token, e.g. linux.x86_64."""
    return f"{os_token(identity)}.{arch_token(identity)}"


class SwtPlatform(BaseModel):
    """Windowing system, OS and architecture tokens naming a native SWT bundle."""
    model_config = ConfigDict(frozen=True)

    ws: str
    os: str
    arch: str

    @classmethod
    def from_identity(cls, identity: PlatformIdentity) -> "SwtPlatform":
        return cls(
            ws=select_by_family(identity, "win32", "cocoa", "gtk"),
            os=os_token(identity),
            arch=arch_token(identity),
        )

    def bundle_name(self, prefix: str = "durian-swt") -> str:
        """Name of the per-platform native bundle, e.g. durian-swt.gtk.linux.x86_64."""
        return f"{prefix}.{self}"

    def __str__(self) -> str:
        return f"{self.ws}.{self.os}.{self.arch}"


def to_swt(identity: PlatformIdentity) -> str:
    """windowing.os.arch, e.g. cocoa.macosx.aarch64."""
    return str(SwtPlatform.from_identity(identity))
