"""Contract verification across Tenderly and Etherscan."""

import os
from typing import List, Optional, Union

from hexbytes import HexBytes

from .compiler import CompilerVersionResolver
from .exceptions import BytecodeMismatchError, VerificationSubmissionError
from .logging import logger
from .payloads import ContractVerificationRequest, to_etherscan_request, to_tenderly_request
from .types import ContractArtifact, VerificationReport
from .verifiers import EtherscanVerifier, TenderlyVerifier


class ContractVerifier:
    """
    Verifies deployed contracts on Tenderly, then on Etherscan.

    Submissions are sequential: if Tenderly fails, Etherscan is not attempted.
    """

    def __init__(
        self,
        tenderly: TenderlyVerifier,
        etherscan: EtherscanVerifier,
        resolver: Optional[CompilerVersionResolver] = None,
        network: str = "mainnet",
    ):
        self.tenderly = tenderly
        self.etherscan = etherscan
        self.resolver = resolver if resolver is not None else CompilerVersionResolver()
        self.network = network

    @classmethod
    def from_env(cls, network: str = "mainnet") -> "ContractVerifier":
        """
        Build a verifier from environment variables.

        Reads $ETHERSCAN_API_KEY, $TENDERLY_ACCESS_KEY, $TENDERLY_ACCOUNT_NAME
        and $TENDERLY_PROJECT_NAME.

        Raises:
            ValueError: If any variable is missing
        """
        names = [
            "ETHERSCAN_API_KEY",
            "TENDERLY_ACCESS_KEY",
            "TENDERLY_ACCOUNT_NAME",
            "TENDERLY_PROJECT_NAME",
        ]
        missing = [name for name in names if not os.environ.get(name)]
        if missing:
            raise ValueError(f"Missing environment variables: {', '.join(missing)}")

        tenderly = TenderlyVerifier(
            os.environ["TENDERLY_ACCESS_KEY"],
            os.environ["TENDERLY_ACCOUNT_NAME"],
            os.environ["TENDERLY_PROJECT_NAME"],
            network=network,
        )
        etherscan = EtherscanVerifier(os.environ["ETHERSCAN_API_KEY"], network=network)
        return cls(tenderly, etherscan, network=network)

    def validate_bytecode(
        self, artifact: ContractArtifact, expected_bytecode: Union[bytes, str]
    ) -> None:
        """
        Check that the artifact's creation bytecode is exactly the expected bytecode.

        Raises:
            BytecodeMismatchError: If they differ
        """
        if bytes(artifact.bytecode) != bytes(HexBytes(expected_bytecode)):
            msg = f"Bytecode mismatch for {artifact.name}"
            logger.error(msg)
            raise BytecodeMismatchError(msg)

    async def verify_contract(
        self, address: str, request: ContractVerificationRequest
    ) -> VerificationReport:
        """
        Verify a deployed contract on both backends.

        Args:
            address: Deployed contract address
            request: Backend-independent verification request

        Returns:
            VerificationReport listing the backends that accepted the contract

        Raises:
            CompilerVersionLookupError: If the compiler version can't be resolved
            VerificationSubmissionError: On the first backend failure. Its
                `completed` attribute lists the backends that already succeeded.
        """
        short_version, long_version = await self.resolver.normalize(request.version)

        tenderly_request = to_tenderly_request(request, short_version)
        etherscan_request = to_etherscan_request(request, long_version)

        completed: List[str] = []
        try:
            await self.tenderly.verify_contract(
                address, request.contract_to_verify, tenderly_request
            )
            completed.append(TenderlyVerifier.BACKEND)

            await self.etherscan.verify_contract(address, etherscan_request)
            completed.append(EtherscanVerifier.BACKEND)
        except VerificationSubmissionError as e:
            raise VerificationSubmissionError(
                e.backend, address, str(e), completed=completed
            ) from e

        logger.info(f"Verified {request.contract_to_verify} at {address} on {self.network}")
        return VerificationReport(
            address=address,
            short_version=short_version,
            long_version=long_version,
            verified=tuple(completed),
        )
