"""
Tests for platform keys, tables, resolution and host detection.
"""

import pytest

from relbin.core.errors import UnsupportedPlatform
from relbin.core.models.platform import PlatformKey, PlatformTable
from relbin.core.services.binary_install import (
    RELEASE_TRACKS,
    PlatformResolver,
    detect_platform_key,
    table_for,
)
from relbin.core.services.binary_install.detection.host import (
    normalize_arch,
    normalize_endianness,
    normalize_os,
)


class TestPlatformKey:
    def test_string_form(self):
        assert str(PlatformKey("darwin", "x64", "LE")) == "darwin x64 LE"

    def test_parse(self):
        assert PlatformKey.parse("linux arm64 LE") == PlatformKey("linux", "arm64", "LE")

    @pytest.mark.parametrize("text", ["", "linux x64", "linux x64 LE extra"])
    def test_parse_rejects_wrong_field_count(self, text):
        with pytest.raises(ValueError):
            PlatformKey.parse(text)


class TestPlatformTable:
    def test_string_keys_are_parsed(self):
        table = PlatformTable({"linux x64 LE": "x86_64-unknown-linux-gnu"})
        assert table[PlatformKey("linux", "x64", "LE")] == "x86_64-unknown-linux-gnu"

    def test_is_immutable(self):
        table = PlatformTable({"linux x64 LE": "t"})
        with pytest.raises(TypeError):
            table[PlatformKey("darwin", "x64", "LE")] = "other"  # type: ignore[index]

    def test_empty_target_rejected(self):
        with pytest.raises(ValueError, match="non-empty"):
            PlatformTable({"linux x64 LE": "  "})

    def test_to_dict_is_sorted_and_stringly_keyed(self):
        table = PlatformTable({"linux x64 LE": "b", "darwin x64 LE": "a"})
        assert list(table.to_dict()) == ["darwin x64 LE", "linux x64 LE"]


class TestPlatformResolver:
    """Lookup semantics: exact match or UnsupportedPlatform, never a default."""

    def test_stable_darwin(self):
        resolver = PlatformResolver(RELEASE_TRACKS["stable"])
        assert resolver.resolve(PlatformKey("darwin", "x64", "LE")) == "x86_64-apple-darwin"

    def test_stable_linux(self):
        resolver = PlatformResolver(RELEASE_TRACKS["stable"])
        assert resolver.resolve(PlatformKey("linux", "x64", "LE")) == "x86_64-unknown-linux-gnu"

    def test_unknown_key_raises(self):
        resolver = PlatformResolver(RELEASE_TRACKS["stable"])
        key = PlatformKey("linux", "arm64", "LE")
        with pytest.raises(UnsupportedPlatform) as exc_info:
            resolver.resolve(key)
        assert exc_info.value.key == key
        assert "linux x64 LE" in exc_info.value.supported
        assert exc_info.value.kind == "unsupported_platform"

    def test_supports(self):
        resolver = PlatformResolver(RELEASE_TRACKS["extended"])
        assert resolver.supports(PlatformKey("win32", "x64", "LE"))
        assert not resolver.supports(PlatformKey("linux", "x64", "BE"))


class TestTracks:
    def test_stable_has_two_targets(self):
        assert len(RELEASE_TRACKS["stable"]) == 2

    def test_extended_is_superset_of_stable(self):
        stable = RELEASE_TRACKS["stable"]
        extended = RELEASE_TRACKS["extended"]
        assert len(extended) == 5
        for key, target in stable.items():
            assert extended[key] == target

    def test_table_for_default_track(self):
        assert table_for().track == "stable"

    def test_explicit_targets_replace_track(self):
        table = table_for("extended", {"freebsd x64 LE": "x86_64-unknown-freebsd"})
        assert table.track == "custom"
        assert list(table.to_dict()) == ["freebsd x64 LE"]

    def test_unknown_track(self):
        with pytest.raises(ValueError, match="Unknown release track"):
            table_for("nightly")


class TestHostDetection:
    @pytest.mark.parametrize(
        "system, expected",
        [("Darwin", "darwin"), ("Linux", "linux"), ("Windows", "win32"), ("Plan9", "plan9")],
    )
    def test_normalize_os(self, system, expected):
        assert normalize_os(system) == expected

    @pytest.mark.parametrize(
        "machine, expected",
        [("x86_64", "x64"), ("AMD64", "x64"), ("aarch64", "arm64"), ("arm64", "arm64"),
         ("i686", "ia32"), ("mips", "mips")],
    )
    def test_normalize_arch(self, machine, expected):
        assert normalize_arch(machine) == expected

    def test_normalize_endianness(self):
        assert normalize_endianness("little") == "LE"
        assert normalize_endianness("big") == "BE"

    def test_detect_with_overrides(self):
        key = detect_platform_key(system="Darwin", machine="x86_64", byteorder="little")
        assert key == PlatformKey("darwin", "x64", "LE")

    def test_detect_host_produces_three_fields(self):
        key = detect_platform_key()
        assert key.os and key.arch and key.endianness in ("LE", "BE")
