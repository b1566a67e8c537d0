"""Tenderly source verification client."""

import asyncio
from typing import Any, Dict

import requests

from ..constants import TENDERLY_API_URL
from ..exceptions import VerificationSubmissionError
from ..logging import logger
from ..networks import get_network_config


class TenderlyVerifier:
    """Adds contracts to a Tenderly project and verifies their sources."""

    BACKEND = "tenderly"

    def __init__(
        self,
        access_key: str,
        account_name: str,
        project_name: str,
        network: str = "mainnet",
        api_url: str = TENDERLY_API_URL,
        timeout: float = 30,
    ):
        """
        Initialize the verifier.

        Args:
            access_key: Tenderly access key
            account_name: Tenderly account (user or organization) slug
            project_name: Tenderly project slug
            network: Network name (see NETWORK_CONFIG)
            api_url: Tenderly REST API root
            timeout: HTTP request timeout in seconds

        Raises:
            ValueError: If any credential is empty or the network is unknown
        """
        if not (access_key and account_name and project_name):
            raise ValueError("Tenderly access key, account name and project name required")

        self.access_key = access_key
        self.account_name = account_name
        self.project_name = project_name
        self.network = network
        self.network_id = str(get_network_config(network)["chain_id"])
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    async def verify_contract(
        self, address: str, display_name: str, payload: Dict[str, Any]
    ) -> None:
        """
        Add a contract to the project, then verify it.

        Args:
            address: Deployed contract address
            display_name: Name shown in the Tenderly dashboard
            payload: Request built by `to_tenderly_request`

        Raises:
            VerificationSubmissionError: If either request fails
        """
        logger.info(f"Adding {display_name} at {address} to Tenderly project {self.project_name}")
        await self._post(
            f"/account/{self.account_name}/project/{self.project_name}/address",
            {
                "network_id": self.network_id,
                "address": address.lower(),
                "display_name": display_name,
            },
            address,
        )

        solc = payload["solc"]
        logger.info(f"Submitting {payload['contractToVerify']} at {address} to Tenderly")
        await self._post(
            f"/accounts/{self.account_name}/projects/{self.project_name}/contracts/verify",
            {
                "config": payload["config"],
                "contracts": [
                    {
                        "contractToVerify": payload["contractToVerify"],
                        "sources": solc["sources"],
                        "compiler": {
                            "version": solc["version"],
                            "settings": solc["settings"],
                        },
                        "networks": {self.network_id: {"address": address.lower()}},
                    }
                ],
            },
            address,
        )
        logger.info(f"Verified {address} on Tenderly")

    async def _post(self, path: str, body: Dict[str, Any], address: str) -> Dict[str, Any]:
        try:
            response = await asyncio.to_thread(
                requests.post,
                f"{self.api_url}{path}",
                json=body,
                headers={"X-Access-Key": self.access_key},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise self._error(address, f"Network error during Tenderly request: {e}") from e

        if response.status_code < 200 or response.status_code > 299:
            raise self._error(
                address,
                f"Tenderly request {path} failed with status {response.status_code}: "
                f"{response.text}",
            )

        if not response.content:
            return {}
        try:
            result = response.json()
        except ValueError as e:
            raise self._error(address, f"Tenderly returned invalid JSON: {response.text}") from e

        if isinstance(result, dict) and result.get("error"):
            raise self._error(address, f"Tenderly rejected {address}: {result['error']}")
        return result

    def _error(self, address: str, msg: str) -> VerificationSubmissionError:
        logger.error(msg)
        return VerificationSubmissionError(self.BACKEND, address, msg)
