"""Idempotent deployment through the singleton factory."""

from fractions import Fraction
from typing import Any, Dict, Optional, Union

from eth_typing import ChecksumAddress
from hexbytes import HexBytes

from .address import address_from_data
from .chain import ChainClient
from .constants import DEFAULT_GAS_LIMIT_RATIO, ZERO_SALT
from .exceptions import (
    DeploymentConfirmationError,
    DeploymentTransactionError,
    TransactionError,
)
from .factory import SingletonFactory
from .logging import logger
from .types import ContractArtifact, DeployedContract


class SingletonDeployer:
    """Deploys contracts at deterministic addresses, skipping any that already exist."""

    def __init__(
        self,
        chain: ChainClient,
        factory: Optional[SingletonFactory] = None,
        gas_limit_ratio: Union[Fraction, int, float, str] = DEFAULT_GAS_LIMIT_RATIO,
    ):
        """
        Initialize the deployer.

        Args:
            chain: Chain client used for code lookups and transactions
            factory: Singleton factory binding (defaults to the EIP-2470 factory)
            gas_limit_ratio: Share of the latest block gas limit used when
                             the caller supplies no gas limit

        Raises:
            ValueError: If gas_limit_ratio is not in (0, 1]
        """
        if isinstance(gas_limit_ratio, float):
            ratio = Fraction(str(gas_limit_ratio))
        else:
            ratio = Fraction(gas_limit_ratio)
        if not 0 < ratio <= 1:
            raise ValueError(f"Gas limit ratio must be in (0, 1], got {gas_limit_ratio}")

        self.chain = chain
        self.factory = factory if factory is not None else SingletonFactory()
        self.gas_limit_ratio = ratio

    async def deploy(
        self,
        name: str,
        artifact: ContractArtifact,
        *constructor_args: Any,
        tx_params: Optional[Dict[str, Any]] = None,
    ) -> DeployedContract:
        """
        Deploy a contract unless code already exists at its derived address.

        Args:
            name: Human-readable name used in logs and errors
            artifact: Compiled contract to deploy
            *constructor_args: Constructor arguments
            tx_params: Extra transaction fields (`gas` or `gasLimit`, `maxFeePerGas`, `from`, ...)

        Returns:
            DeployedContract bound to the derived address

        Raises:
            EncodingError: If no deployment bytecode can be produced
            DeploymentTransactionError: If the transaction fails, reverts or times out
            DeploymentConfirmationError: If no code exists at the address afterwards
        """
        logger.info(f"Deploying {name}")
        data = artifact.deploy_data(*constructor_args)

        # Check if contract already deployed
        address = self.address_from_data(data)
        if await self._has_code(address):
            logger.info(f"Skipping {name} because it has been deployed at {address}")
            return DeployedContract(
                name=name, address=address, abi=artifact.abi, deployed=False
            )

        params = dict(tx_params or {})
        # web3 spells the gas limit "gas"
        gas_limit = params.pop("gasLimit", None)
        if not params.get("gas") and gas_limit:
            params["gas"] = gas_limit
        if not params.get("gas"):
            params["gas"] = await self._estimate_gas_limit()
            logger.info(f"Using gas limit {params['gas']} for {name}")

        try:
            tx_hash = await self.factory.deploy(self.chain, data, ZERO_SALT, params)
            logger.info(f"Sent {name} deployment in transaction {HexBytes(tx_hash).to_0x_hex()}")
            await self.chain.wait_for_receipt(tx_hash)
        except TransactionError as e:
            msg = f"Deployment transaction for {name} at {address} failed: {e}"
            logger.error(msg)
            raise DeploymentTransactionError(name, address, msg) from e

        # Confirm deployment
        if not await self._has_code(address):
            msg = f"Failed to deploy {name} at {address}"
            logger.error(msg)
            raise DeploymentConfirmationError(name, address, msg)

        logger.info(f"Deployed {name} at {address}")
        return DeployedContract(
            name=name,
            address=address,
            abi=artifact.abi,
            deployed=True,
            transaction_hash=HexBytes(tx_hash).to_0x_hex(),
        )

    def address_of(self, artifact: ContractArtifact, *constructor_args: Any) -> ChecksumAddress:
        """
        Compute the address a contract would be deployed to, without touching the chain.

        Raises:
            EncodingError: If no deployment bytecode can be produced
        """
        return self.address_from_data(artifact.deploy_data(*constructor_args))

    def address_from_data(self, data: Union[bytes, str]) -> ChecksumAddress:
        """Compute the deployment address of raw deployment bytecode."""
        return address_from_data(data, self.factory.address)

    async def _has_code(self, address: ChecksumAddress) -> bool:
        return len(await self.chain.get_code(address)) > 0

    async def _estimate_gas_limit(self) -> int:
        block = await self.chain.get_latest_block()
        gas_limit = int(block["gasLimit"])
        return gas_limit * self.gas_limit_ratio.numerator // self.gas_limit_ratio.denominator
