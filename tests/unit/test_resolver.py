"""Unit tests for platform detection and artifact directory resolution."""
import itertools
import logging

import pytest
from unittest.mock import patch

from ecogen_core.platform import (
    Architecture,
    OsFamily,
    detect_host,
    get_architecture,
    get_os_family,
)
from ecogen_core.resolver import ARTIFACT_DIRS, DEFAULT_ARTIFACT_DIR, resolve, resolve_host


class TestNormalization:
    """Tests for raw identifier normalization."""

    def test_os_families(self):
        assert get_os_family("Darwin") == OsFamily.MACOS
        assert get_os_family("macos") == OsFamily.MACOS
        assert get_os_family("Linux") == OsFamily.LINUX
        assert get_os_family("Windows") == OsFamily.OTHER
        assert get_os_family("freebsd") == OsFamily.OTHER
        assert get_os_family("") == OsFamily.OTHER

    def test_architectures(self):
        assert get_architecture("arm64") == Architecture.ARM64
        assert get_architecture("aarch64") == Architecture.ARM64
        assert get_architecture("x86_64") == Architecture.X86_64
        assert get_architecture("AMD64") == Architecture.X86_64
        assert get_architecture("riscv64") == Architecture.OTHER
        assert get_architecture("i686") == Architecture.OTHER

    @patch("ecogen_core.platform.platform.machine", return_value="aarch64")
    @patch("ecogen_core.platform.platform.system", return_value="Linux")
    def test_detect_host_reads_runtime(self, mock_system, mock_machine):
        host = detect_host()
        assert host.os_family == OsFamily.LINUX
        assert host.architecture == Architecture.ARM64
        assert host.raw_os == "Linux"
        assert host.raw_arch == "aarch64"

    @patch("ecogen_core.platform.platform.machine", return_value="x86_64")
    @patch("ecogen_core.platform.platform.system", return_value="Linux")
    def test_detect_host_overrides(self, mock_system, mock_machine):
        host = detect_host("darwin", "arm64")
        assert host.os_family == OsFamily.MACOS
        assert host.architecture == Architecture.ARM64


class TestResolve:
    """Tests for the artifact directory table."""

    def test_known_combinations(self):
        assert resolve(OsFamily.MACOS, Architecture.ARM64) == "target/aarch64-apple-darwin/release"
        assert resolve(OsFamily.MACOS, Architecture.X86_64) == "target/release"
        assert resolve(OsFamily.LINUX, Architecture.ARM64) == "target/aarch64-unknown-linux-gnu/release"
        assert resolve(OsFamily.LINUX, Architecture.X86_64) == "target/release"

    def test_raw_identifiers(self):
        assert resolve("darwin", "arm64") == "target/aarch64-apple-darwin/release"
        assert resolve("linux", "aarch64") == "target/aarch64-unknown-linux-gnu/release"
        assert resolve("linux", "arm64") == "target/aarch64-unknown-linux-gnu/release"
        assert resolve("darwin", "x64") == "target/release"

    def test_other_os_always_default(self):
        for arch in ("arm64", "aarch64", "x86_64", "mips", ""):
            assert resolve("win32", arch) == DEFAULT_ARTIFACT_DIR
            assert resolve("sunos", arch) == DEFAULT_ARTIFACT_DIR

    def test_table_covers_every_pair(self):
        """Every enumerated pair has an entry, so lookups cannot miss."""
        for pair in itertools.product(OsFamily, Architecture):
            assert pair in ARTIFACT_DIRS

    def test_total_over_unknown_values(self):
        """resolve never raises and always returns a non-empty fragment."""
        os_values = list(OsFamily) + ["darwin", "linux", "plan9", "", None, 42]
        arch_values = list(Architecture) + ["aarch64", "x86_64", "sparc", "", None, 7]
        for os_value, arch_value in itertools.product(os_values, arch_values):
            result = resolve(os_value, arch_value)
            assert isinstance(result, str)
            assert result

    def test_resolve_host(self):
        assert resolve_host(detect_host("Darwin", "arm64")) == "target/aarch64-apple-darwin/release"

    def test_logs_detection(self, caplog):
        with caplog.at_level(logging.INFO, logger="ecogen_core.resolver"):
            resolve("linux", "aarch64")
        assert "Detected platform: linux, architecture: arm64" in caplog.text
        assert "Using binary path: target/aarch64-unknown-linux-gnu/release" in caplog.text


@pytest.mark.parametrize("system, machine, expected", [
    ("Darwin", "arm64", "target/aarch64-apple-darwin/release"),
    ("Darwin", "x86_64", "target/release"),
    ("Linux", "aarch64", "target/aarch64-unknown-linux-gnu/release"),
    ("Linux", "x86_64", "target/release"),
    ("Windows", "AMD64", "target/release"),
])
def test_detected_hosts(system, machine, expected):
    assert resolve_host(detect_host(system, machine)) == expected
