"""
Tests for release URL composition.
"""

import pytest

from relbin.core.errors import InvalidConfiguration
from relbin.core.services.binary_install.domain.release_locator import (
    asset_name,
    normalize_host,
    normalize_version,
    release_url,
)


class TestReleaseUrl:
    def test_canonical_pattern(self):
        url = release_url(
            "https://github.com/org/typescript-tools", "1.2.3", "monorepo", "x86_64-apple-darwin"
        )
        assert url == (
            "https://github.com/org/typescript-tools/releases/download/"
            "v1.2.3/monorepo-x86_64-apple-darwin.tar.gz"
        )

    def test_npm_repository_url_is_normalized(self):
        url = release_url("git+https://github.com/org/tool.git", "0.4.0", "tool", "t")
        assert url == "https://github.com/org/tool/releases/download/v0.4.0/tool-t.tar.gz"

    def test_leading_v_not_doubled(self):
        url = release_url("https://example.com", "v2.0.0", "tool", "t")
        assert "/v2.0.0/" in url
        assert "/vv2.0.0/" not in url

    def test_prerelease_version(self):
        url = release_url("https://example.com", "1.0.0-rc.1+build.5", "tool", "t")
        assert "/v1.0.0-rc.1+build.5/" in url

    def test_all_problems_reported_together(self):
        with pytest.raises(InvalidConfiguration) as exc_info:
            release_url("ftp://example.com", "latest", "", "")
        problems = exc_info.value.problems
        assert len(problems) == 4
        assert any("host" in p for p in problems)
        assert any("semantic version" in p for p in problems)
        assert "Correct usage" in str(exc_info.value)

    @pytest.mark.parametrize("version", ["1.2", "01.2.3", "1.2.3.4", ""])
    def test_rejects_non_semver(self, version):
        with pytest.raises(InvalidConfiguration):
            release_url("https://example.com", version, "tool", "t")

    def test_rejects_relative_host(self):
        with pytest.raises(InvalidConfiguration):
            release_url("github.com/org/tool", "1.0.0", "tool", "t")


class TestHelpers:
    def test_normalize_host(self):
        assert normalize_host("git+https://h.example/o/r.git/") == "https://h.example/o/r"
        assert normalize_host("https://h.example/o/r/") == "https://h.example/o/r"

    def test_normalize_version(self):
        assert normalize_version("v1.0.0") == "1.0.0"
        assert normalize_version("1.0.0") == "1.0.0"

    def test_asset_name(self):
        assert asset_name("tool", "aarch64-apple-darwin") == "tool-aarch64-apple-darwin.tar.gz"
