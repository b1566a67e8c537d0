"""Binding for the singleton deployment factory contract."""

from typing import Any, Dict, Optional

import eth_abi
from eth_typing import ChecksumAddress
from eth_utils import function_signature_to_4byte_selector
from eth_utils.address import to_checksum_address

from .chain import ChainClient
from .constants import SINGLETON_FACTORY_ADDRESS


class SingletonFactory:
    """The factory contract exposing `deploy(bytes _initCode, bytes32 _salt)`."""

    DEPLOY_SIGNATURE = "deploy(bytes,bytes32)"

    def __init__(self, address: str = SINGLETON_FACTORY_ADDRESS):
        self._address = to_checksum_address(address)

    @property
    def address(self) -> ChecksumAddress:
        return self._address

    def encode_deploy(self, init_code: bytes, salt: bytes) -> bytes:
        """Build call data for the factory's deploy entry point."""
        if len(salt) != 32:
            raise ValueError(f"Salt must be 32 bytes, got {len(salt)}")
        selector = function_signature_to_4byte_selector(self.DEPLOY_SIGNATURE)
        return selector + eth_abi.encode(["bytes", "bytes32"], [init_code, salt])

    async def deploy(
        self,
        chain: ChainClient,
        init_code: bytes,
        salt: bytes,
        tx_params: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Send a deployment transaction through the factory.

        Returns:
            Transaction hash of the pending transaction
        """
        return await chain.send_transaction(
            self.address,
            self.encode_deploy(init_code, salt),
            dict(tx_params or {}),
        )

    def __repr__(self) -> str:
        return f"SingletonFactory(address={self.address})"
