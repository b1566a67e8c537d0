"""Compiler version string utilities for solidity-deployer library."""

import re
from typing import Optional

# Delimiter between the release number and the build qualifier in long versions
LONG_VERSION_DELIMITER = "+"

_SOLJSON_FILENAME = re.compile(r"soljson-(?P<version>.+)\.js")


def is_long_version(version: str) -> bool:
    """
    Check whether a compiler version is in long, commit-qualified form.

    Long versions look like "v0.8.18+commit.87f61d96".
    Short versions look like "v0.8.18".
    """
    return LONG_VERSION_DELIMITER in version


def to_short_version(version: str) -> str:
    """
    Derive the short version by truncating at the build qualifier.

    Args:
        version: Short or long compiler version

    Returns:
        Short version (e.g., "v0.8.18"); short input is returned unchanged
    """
    return version.split(LONG_VERSION_DELIMITER, 1)[0]


def long_version_from_filename(filename: str) -> Optional[str]:
    """
    Extract the long version embedded in a solc-bin build filename.

    Args:
        filename: e.g., "soljson-v0.8.18+commit.87f61d96.js"

    Returns:
        Long version (e.g., "v0.8.18+commit.87f61d96"), or None if the
        filename does not embed one
    """
    match = _SOLJSON_FILENAME.fullmatch(filename)
    if match is None:
        return None
    return match.group("version")
