"""Unit tests for platform identities."""
import pytest
from pydantic import ValidationError

from swtos_core.exceptions import SwtOsError, UnsupportedPlatformError
from swtos_core.platform import (
    ALL_IDENTITIES,
    LINUX_UNKNOWN,
    LINUX_X64,
    LINUX_X86,
    MAC_SILICON,
    MAC_UNKNOWN,
    MAC_X64,
    WIN_UNKNOWN,
    WIN_X64,
    WIN_X86,
    Arch,
    OSFamily,
    PlatformIdentity,
    SwtPlatform,
    arch_token,
    identity_for,
    is_linux,
    is_mac,
    is_mac_or_linux,
    is_windows,
    os_dot_arch,
    os_token,
    select_by_arch,
    select_by_family,
    to_swt,
)


class TestPlatformIdentity:
    """Tests for the identity value type."""

    def test_nine_variants(self):
        assert len(ALL_IDENTITIES) == 9
        assert len(set(ALL_IDENTITIES)) == 9

    def test_mac_x86_is_not_a_variant(self):
        with pytest.raises(ValidationError):
            PlatformIdentity(family=OSFamily.MACOS, arch=Arch.X86)

    def test_arm64_only_on_mac(self):
        with pytest.raises(ValidationError):
            PlatformIdentity(family=OSFamily.LINUX, arch=Arch.ARM64)
        with pytest.raises(ValidationError):
            PlatformIdentity(family=OSFamily.WINDOWS, arch=Arch.ARM64)

    def test_immutable(self):
        with pytest.raises(ValidationError):
            LINUX_X64.arch = Arch.X86

    def test_equality_by_value(self):
        assert PlatformIdentity(family=OSFamily.LINUX, arch=Arch.X64) == LINUX_X64
        assert PlatformIdentity(family=OSFamily.LINUX, arch=Arch.X64) != WIN_X64

    def test_names(self):
        assert str(WIN_X64) == "WIN_x64"
        assert str(MAC_SILICON) == "MAC_silicon"
        assert LINUX_UNKNOWN.name == "LINUX_unknown"

    def test_identity_for_invalid_pair_maps_to_unknown(self):
        assert identity_for(OSFamily.MACOS, Arch.X86) == MAC_UNKNOWN
        assert identity_for(OSFamily.LINUX, Arch.ARM64) == LINUX_UNKNOWN
        assert identity_for(OSFamily.WINDOWS, Arch.X64) == WIN_X64


class TestPredicates:
    """Tests for family predicates."""

    def test_windows(self):
        assert [i for i in ALL_IDENTITIES if is_windows(i)] == [WIN_X64, WIN_X86, WIN_UNKNOWN]

    def test_linux(self):
        assert [i for i in ALL_IDENTITIES if is_linux(i)] == [LINUX_X64, LINUX_X86, LINUX_UNKNOWN]

    def test_mac(self):
        assert [i for i in ALL_IDENTITIES if is_mac(i)] == [MAC_X64, MAC_SILICON, MAC_UNKNOWN]

    def test_mac_or_linux(self):
        for identity in ALL_IDENTITIES:
            assert is_mac_or_linux(identity) == (not is_windows(identity))


class TestSelection:
    """Tests for select_by_family and select_by_arch."""

    @pytest.mark.parametrize("identity", ALL_IDENTITIES, ids=str)
    def test_select_by_family_matches_position(self, identity):
        expected = {
            OSFamily.WINDOWS: "win",
            OSFamily.MACOS: "mac",
            OSFamily.LINUX: "linux",
        }[identity.family]
        assert select_by_family(identity, "win", "mac", "linux") == expected

    def test_unknown_arch_still_routes_by_family(self):
        assert select_by_family(MAC_UNKNOWN, 1, 2, 3) == 2
        assert select_by_family(LINUX_UNKNOWN, 1, 2, 3) == 3

    def test_unrecognized_family_raises(self):
        bogus = PlatformIdentity.model_construct(family="solaris", arch=Arch.X64)
        with pytest.raises(UnsupportedPlatformError) as exc_info:
            select_by_family(bogus, 1, 2, 3)
        assert "solaris" in str(exc_info.value)
        assert isinstance(exc_info.value, SwtOsError)

    def test_select_by_arch(self):
        assert select_by_arch(Arch.X86, "a", "b", "c", "d") == "a"
        assert select_by_arch(Arch.X64, "a", "b", "c", "d") == "b"
        assert select_by_arch(Arch.ARM64, "a", "b", "c", "d") == "c"
        assert select_by_arch(Arch.UNKNOWN, "a", "b", "c", "d") == "d"


class TestStringViews:
    """Tests for SWT-style tokens."""

    def test_os_tokens(self):
        assert os_token(WIN_X86) == "win32"
        assert os_token(LINUX_UNKNOWN) == "linux"
        assert os_token(MAC_X64) == "macosx"

    def test_arch_tokens(self):
        assert arch_token(WIN_X86) == "x86"
        assert arch_token(LINUX_X64) == "x86_64"
        assert arch_token(MAC_SILICON) == "aarch64"
        assert arch_token(WIN_UNKNOWN) == "unknown"

    def test_os_dot_arch(self):
        assert os_dot_arch(MAC_SILICON) == "macosx.aarch64"
        assert os_dot_arch(LINUX_X64) == "linux.x86_64"
        assert os_dot_arch(WIN_X64) == "win32.x86_64"

    def test_to_swt(self):
        assert to_swt(MAC_SILICON) == "cocoa.macosx.aarch64"
        assert to_swt(LINUX_X86) == "gtk.linux.x86"
        assert to_swt(WIN_X64) == "win32.win32.x86_64"

    def test_bundle_name(self):
        swt = SwtPlatform.from_identity(LINUX_X64)
        assert swt.bundle_name() == "durian-swt.gtk.linux.x86_64"
        assert swt.bundle_name("natives") == "natives.gtk.linux.x86_64"
