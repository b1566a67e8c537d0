"""
solidity-deployer: deterministic singleton-factory deployments and multi-backend verification
"""

from importlib.metadata import PackageNotFoundError, version

from .address import address_from_data, compute_create2_address
from .artifacts import load_artifact, load_build_info
from .chain import ChainClient, Web3ChainClient
from .compiler import CompilerVersionResolver
from .deployer import SingletonDeployer
from .exceptions import (
    ArtifactFormatError,
    BytecodeMismatchError,
    CompilerVersionLookupError,
    DeploymentConfirmationError,
    DeploymentError,
    DeploymentTransactionError,
    EncodingError,
    NetworkNotFoundError,
    SolidityDeployerError,
    TransactionError,
    VerificationSubmissionError,
)
from .factory import SingletonFactory
from .payloads import ContractVerificationRequest
from .types import ContractArtifact, DeployedContract, OptimizerSettings, VerificationReport
from .verifier import ContractVerifier
from .verifiers import EtherscanVerifier, TenderlyVerifier

try:
    __version__ = version("solidity-deployer")
except PackageNotFoundError:
    __version__ = None

__all__ = [
    "SingletonDeployer",
    "SingletonFactory",
    "ContractVerifier",
    "CompilerVersionResolver",
    "TenderlyVerifier",
    "EtherscanVerifier",
    "ChainClient",
    "Web3ChainClient",
    "address_from_data",
    "compute_create2_address",
    "load_artifact",
    "load_build_info",
    "ContractArtifact",
    "ContractVerificationRequest",
    "DeployedContract",
    "OptimizerSettings",
    "VerificationReport",
    "SolidityDeployerError",
    "EncodingError",
    "ArtifactFormatError",
    "NetworkNotFoundError",
    "TransactionError",
    "DeploymentError",
    "DeploymentTransactionError",
    "DeploymentConfirmationError",
    "CompilerVersionLookupError",
    "BytecodeMismatchError",
    "VerificationSubmissionError",
]
