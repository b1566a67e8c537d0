"""Custom exception classes for solidity-deployer library."""

from typing import Optional, Sequence


class SolidityDeployerError(Exception):
    """
    Base exception for all errors raised by this package.

    An optional message may be retrieved from the `.message` attribute.
    """

    message: Optional[str] = None

    def __init__(self, message: Optional[str] = None) -> None:
        if message:
            self.message = message
            super().__init__(message)
        else:
            super().__init__()


class EncodingError(SolidityDeployerError, ValueError):
    """Raised when no creation bytecode can be produced for a contract."""

    pass


class ArtifactFormatError(SolidityDeployerError, ValueError):
    """Raised when a compiled artifact file is not in a recognized format."""

    pass


class NetworkNotFoundError(SolidityDeployerError, ValueError):
    """Raised when a network name is not in the network table."""

    pass


class TransactionError(SolidityDeployerError, RuntimeError):
    """Raised by a chain client when a transaction is rejected, reverts or times out."""

    pass


class DeploymentError(SolidityDeployerError, RuntimeError):
    """Base exception for failures while deploying a contract."""

    def __init__(self, name: str, address: str, message: str) -> None:
        self.name = name
        self.address = address
        super().__init__(message)


class DeploymentTransactionError(DeploymentError):
    """Raised when the chain rejects or times out the deployment transaction."""

    pass


class DeploymentConfirmationError(DeploymentError):
    """Raised when the deployment transaction was mined but no code exists at the address."""

    pass


class CompilerVersionLookupError(SolidityDeployerError, LookupError):
    """Raised when a long compiler version cannot be resolved."""

    def __init__(self, version: str, message: str) -> None:
        self.version = version
        super().__init__(message)


class BytecodeMismatchError(SolidityDeployerError, ValueError):
    """Raised when local creation bytecode differs from the expected bytecode."""

    pass


class VerificationSubmissionError(SolidityDeployerError, RuntimeError):
    """
    Raised when a verification backend rejects a submission or cannot be reached.

    `completed` lists the backends that accepted the submission before this one failed.
    """

    def __init__(
        self,
        backend: str,
        address: str,
        message: str,
        completed: Sequence[str] = (),
    ) -> None:
        self.backend = backend
        self.address = address
        self.completed = tuple(completed)
        super().__init__(message)
