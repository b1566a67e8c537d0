"""Unit tests for compiler version string helpers."""

import pytest

from solidity_deployer.versions import (
    is_long_version,
    long_version_from_filename,
    to_short_version,
)


class TestIsLongVersion:
    """Test the is_long_version function."""

    def test_detects_long_version(self):
        assert is_long_version("v0.8.18+commit.87f61d96")

    def test_short_version_is_not_long(self):
        assert not is_long_version("v0.8.18")

    def test_unprefixed_versions(self):
        """Test that the leading 'v' is irrelevant to the check."""
        assert is_long_version("0.8.18+commit.87f61d96")
        assert not is_long_version("0.8.18")


class TestToShortVersion:
    """Test the to_short_version function."""

    def test_truncates_at_commit_qualifier(self):
        assert to_short_version("v0.8.18+commit.87f61d96") == "v0.8.18"

    def test_short_version_unchanged(self):
        assert to_short_version("v0.8.18") == "v0.8.18"

    def test_truncates_only_at_first_delimiter(self):
        assert to_short_version("v0.4.24+commit.e67f0147+extra") == "v0.4.24"


class TestLongVersionFromFilename:
    """Test the long_version_from_filename function."""

    @pytest.mark.parametrize(
        "filename,expected",
        [
            ("soljson-v0.8.18+commit.87f61d96.js", "v0.8.18+commit.87f61d96"),
            ("soljson-v0.8.19+commit.7dd6d404.js", "v0.8.19+commit.7dd6d404"),
            ("soljson-v0.4.11+commit.68ef5810.js", "v0.4.11+commit.68ef5810"),
        ],
    )
    def test_extracts_long_version(self, filename: str, expected: str):
        assert long_version_from_filename(filename) == expected

    def test_returns_none_for_unexpected_filename(self):
        assert long_version_from_filename("solc-linux-amd64-v0.8.18") is None

    def test_returns_none_for_empty_string(self):
        assert long_version_from_filename("") is None
