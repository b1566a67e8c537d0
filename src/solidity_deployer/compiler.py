"""Solidity compiler version resolution against the solc-bin release index."""

import asyncio
from typing import Any, Dict, Optional, Tuple

import requests

from .constants import COMPILERS_LIST_URL
from .exceptions import CompilerVersionLookupError
from .logging import logger
from .versions import is_long_version, long_version_from_filename, to_short_version


class CompilerVersionResolver:
    """
    Resolves short compiler versions to their long, commit-qualified form.

    The release index is fetched on every call and never cached.
    """

    def __init__(self, list_url: str = COMPILERS_LIST_URL, timeout: float = 30):
        self.list_url = list_url
        self.timeout = timeout

    async def resolve_long_version(self, short_version: str) -> str:
        """
        Resolve a short compiler version to its long form.

        Args:
            short_version: e.g., "v0.8.18"; a long version is returned unchanged

        Returns:
            Long version, e.g., "v0.8.18+commit.87f61d96"

        Raises:
            CompilerVersionLookupError: If the index can't be fetched or the
                                        version is not listed
        """
        if is_long_version(short_version):
            return short_version

        releases = await self._fetch_releases(short_version)

        # The public index keys releases without the leading "v"
        filename = releases.get(short_version)
        if filename is None and short_version.startswith("v"):
            filename = releases.get(short_version[1:])

        if not filename:
            msg = f"Unable to find full solidity compiler version {short_version}"
            logger.error(msg)
            raise CompilerVersionLookupError(short_version, msg)

        long_version = long_version_from_filename(filename)
        if long_version is None:
            msg = f"Unexpected compiler build filename {filename!r} for {short_version}"
            logger.error(msg)
            raise CompilerVersionLookupError(short_version, msg)

        if not long_version.startswith("v"):
            long_version = f"v{long_version}"
        return long_version

    async def normalize(self, version: str) -> Tuple[str, str]:
        """
        Derive both forms of a compiler version from either one.

        Returns:
            Tuple of (short_version, long_version)

        Raises:
            CompilerVersionLookupError: If a short version can't be resolved
        """
        if is_long_version(version):
            return to_short_version(version), version
        return version, await self.resolve_long_version(version)

    async def _fetch_releases(self, version: str) -> Dict[str, Any]:
        try:
            response = await asyncio.to_thread(
                requests.get, self.list_url, timeout=self.timeout
            )
        except requests.RequestException as e:
            msg = f"Unable to determine solidity compiler version {version}: {e}"
            logger.error(msg)
            raise CompilerVersionLookupError(version, msg) from e

        if response.status_code < 200 or response.status_code > 299:
            msg = (
                f"Unable to get solidity compiler versions, "
                f"status {response.status_code}: {response.text}"
            )
            logger.error(msg)
            raise CompilerVersionLookupError(version, msg)

        try:
            releases: Optional[Dict[str, Any]] = response.json().get("releases")
        except (ValueError, AttributeError) as e:
            msg = f"Malformed solidity compiler version list from {self.list_url}"
            logger.error(msg)
            raise CompilerVersionLookupError(version, msg) from e

        if not isinstance(releases, dict):
            msg = f"Solidity compiler version list from {self.list_url} has no releases"
            logger.error(msg)
            raise CompilerVersionLookupError(version, msg)
        return releases
