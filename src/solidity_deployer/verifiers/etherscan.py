"""Etherscan source verification client."""

import asyncio
import json
from typing import Any, Dict, Optional

import requests

from ..constants import ETHERSCAN_API_URL
from ..exceptions import VerificationSubmissionError
from ..logging import logger
from ..networks import explorer_address_url, get_network_config


class EtherscanVerifier:
    """Submits standard-json verification requests to the Etherscan V2 API."""

    BACKEND = "etherscan"

    def __init__(
        self,
        api_key: str,
        network: str = "mainnet",
        api_url: str = ETHERSCAN_API_URL,
        poll_interval: float = 5.0,
        max_polls: Optional[int] = None,
        timeout: float = 30,
    ):
        """
        Initialize the verifier.

        Args:
            api_key: Etherscan API key
            network: Network name (see NETWORK_CONFIG)
            api_url: Etherscan V2 API endpoint
            poll_interval: Seconds between verification status checks
            max_polls: Give up after this many pending status checks (None: never)
            timeout: HTTP request timeout in seconds

        Raises:
            ValueError: If api_key is empty or the network is unknown
        """
        if not api_key:
            raise ValueError("Etherscan API key required")

        self.api_key = api_key
        self.network = network
        self.chain_id = get_network_config(network)["chain_id"]
        self.api_url = api_url
        self.poll_interval = poll_interval
        self.max_polls = max_polls
        self.timeout = timeout

    async def verify_contract(self, address: str, payload: Dict[str, Any]) -> None:
        """
        Submit a contract for verification.

        Args:
            address: Deployed contract address
            payload: Request built by `to_etherscan_request`

        Raises:
            VerificationSubmissionError: If Etherscan rejects the submission or
                                         verification fails while waiting
        """
        form: Dict[str, Any] = {
            "module": "contract",
            "action": "verifysourcecode",
            "contractaddress": address,
            "sourceCode": json.dumps(payload["compilerInput"]),
            "codeformat": "solidity-standard-json-input",
            "contractname": payload["contractToVerify"],
            "compilerversion": payload["version"],
        }
        constructor_arguments = payload.get("constructorArguments")
        if constructor_arguments:
            # Etherscan's parameter name is misspelled
            form["constructorArguements"] = constructor_arguments.removeprefix("0x")

        logger.info(f"Submitting {payload['contractToVerify']} at {address} to Etherscan")
        result = await self._request("POST", address, form)

        message = str(result.get("result", ""))
        if result.get("status") != "1":
            if _is_already_verified(message):
                logger.info(f"{address} is already verified on Etherscan")
                return
            raise self._error(address, f"Etherscan rejected verification of {address}: {message}")

        if payload.get("waitForSuccess"):
            await self._wait_for_verification(address, guid=message)

    async def _wait_for_verification(self, address: str, guid: str) -> None:
        polls = 0
        while True:
            await asyncio.sleep(self.poll_interval)
            result = await self._request(
                "GET",
                address,
                {"module": "contract", "action": "checkverifystatus", "guid": guid},
            )

            message = str(result.get("result", ""))
            if result.get("status") == "1" or _is_already_verified(message):
                logger.info(
                    f"Verified {address} on Etherscan: "
                    f"{explorer_address_url(self.network, address)}#code"
                )
                return

            if "pending" not in message.lower():
                raise self._error(address, f"Etherscan verification of {address} failed: {message}")

            polls += 1
            logger.debug(f"Etherscan verification of {address} pending ({polls})")
            if self.max_polls is not None and polls >= self.max_polls:
                raise self._error(
                    address,
                    f"Etherscan verification of {address} still pending after {polls} checks",
                )

    async def _request(
        self, method: str, address: str, fields: Dict[str, Any]
    ) -> Dict[str, Any]:
        query: Dict[str, Any] = {"chainid": self.chain_id, "apikey": self.api_key}
        if method == "GET":
            query.update(fields)
            body = None
        else:
            body = fields

        try:
            response = await asyncio.to_thread(
                requests.request,
                method,
                self.api_url,
                params=query,
                data=body,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise self._error(address, f"Network error during Etherscan request: {e}") from e

        if response.status_code != 200:
            raise self._error(
                address, f"Etherscan request failed with status {response.status_code}"
            )

        try:
            result = response.json()
        except ValueError as e:
            raise self._error(address, f"Etherscan returned invalid JSON: {response.text}") from e

        if not isinstance(result, dict):
            raise self._error(
                address, f"Etherscan returned an unexpected response: {response.text}"
            )
        return result

    def _error(self, address: str, msg: str) -> VerificationSubmissionError:
        logger.error(msg)
        return VerificationSubmissionError(self.BACKEND, address, msg)


def _is_already_verified(message: str) -> bool:
    return "already verified" in message.lower()
