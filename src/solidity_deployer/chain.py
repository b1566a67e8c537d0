"""Chain access used by the deployer."""

import asyncio
from typing import Any, Dict, Mapping, Optional, Protocol

import aiohttp
from eth_typing import ChecksumAddress
from hexbytes import HexBytes
from web3 import AsyncBaseProvider, AsyncWeb3
from web3.exceptions import Web3Exception

from .exceptions import TransactionError
from .logging import logger

# Web3 errors plus provider transport failures
RPC_ERRORS = (Web3Exception, aiohttp.ClientError, asyncio.TimeoutError, OSError)


class ChainClient(Protocol):
    """
    Minimal chain capability needed to deploy through the singleton factory.

    Signing, nonce management and timeouts belong to the implementation.
    """

    async def get_code(self, address: ChecksumAddress) -> bytes: ...

    async def get_latest_block(self) -> Mapping[str, Any]: ...

    async def send_transaction(
        self, to: ChecksumAddress, data: bytes, tx_params: Dict[str, Any]
    ) -> HexBytes: ...

    async def wait_for_receipt(self, tx_hash: HexBytes) -> Mapping[str, Any]: ...


class Web3ChainClient:
    """ChainClient backed by an `AsyncWeb3` instance."""

    def __init__(
        self,
        w3: AsyncWeb3[AsyncBaseProvider],
        sender: Optional[str] = None,
        receipt_timeout: float = 120,
    ) -> None:
        """
        Args:
            w3: Connected async web3 instance. Its provider/middleware does the signing.
            sender: Default `from` address, used when tx params don't carry one
            receipt_timeout: Seconds to wait for a transaction receipt
        """
        self.w3 = w3
        self.sender = sender
        self.receipt_timeout = receipt_timeout

    async def get_code(self, address: ChecksumAddress) -> bytes:
        return bytes(await self.w3.eth.get_code(address))

    async def get_latest_block(self) -> Mapping[str, Any]:
        return await self.w3.eth.get_block("latest")

    async def send_transaction(
        self, to: ChecksumAddress, data: bytes, tx_params: Dict[str, Any]
    ) -> HexBytes:
        tx: Dict[str, Any] = {**tx_params, "to": to, "data": HexBytes(data)}
        if "from" not in tx and self.sender is not None:
            tx["from"] = self.sender

        try:
            tx_hash = await self.w3.eth.send_transaction(tx)  # type: ignore[arg-type]
        except RPC_ERRORS as e:
            raise TransactionError(f"Transaction to {to} was rejected: {e}") from e

        logger.debug(f"Sent transaction {HexBytes(tx_hash).to_0x_hex()} to {to}")
        return HexBytes(tx_hash)

    async def wait_for_receipt(self, tx_hash: HexBytes) -> Mapping[str, Any]:
        try:
            receipt = await self.w3.eth.wait_for_transaction_receipt(
                tx_hash, timeout=self.receipt_timeout
            )
        except RPC_ERRORS as e:
            raise TransactionError(
                f"Failed waiting for transaction {HexBytes(tx_hash).to_0x_hex()}: {e}"
            ) from e

        if receipt["status"] == 0:
            raise TransactionError(f"Transaction {HexBytes(tx_hash).to_0x_hex()} reverted")
        return receipt
