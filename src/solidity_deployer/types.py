"""Data types and dataclasses for solidity-deployer library."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

import eth_abi
from eth_abi.exceptions import ABITypeError, ParseError
from eth_abi.exceptions import EncodingError as AbiEncodingError
from eth_typing import ChecksumAddress
from eth_utils.abi import collapse_if_tuple
from hexbytes import HexBytes

from .exceptions import EncodingError


@dataclass(frozen=True)
class ContractArtifact:
    """A compiled contract: the ABI and the creation bytecode needed to deploy it."""

    name: str  # e.g., "Counter"
    abi: List[Dict[str, Any]]
    bytecode: HexBytes  # Creation code, empty for interfaces and abstract contracts
    deployed_bytecode: Optional[HexBytes] = None
    source_name: Optional[str] = None  # e.g., "contracts/Counter.sol"

    @property
    def constructor_inputs(self) -> List[Dict[str, Any]]:
        for item in self.abi:
            if item.get("type") == "constructor":
                return item.get("inputs", [])
        return []

    def encode_constructor_args(self, *args: Any) -> bytes:
        """
        ABI-encode constructor arguments.

        Raises:
            EncodingError: If the arguments do not match the constructor inputs
        """
        inputs = self.constructor_inputs
        if len(args) != len(inputs):
            raise EncodingError(
                f"Constructor of {self.name} takes {len(inputs)} arguments, got {len(args)}"
            )
        if not inputs:
            return b""

        types = [collapse_if_tuple(item) for item in inputs]
        try:
            return eth_abi.encode(types, list(args))
        except (AbiEncodingError, ABITypeError, ParseError) as e:
            raise EncodingError(
                f"Unable to encode constructor arguments for {self.name}: {e}"
            ) from e

    def deploy_data(self, *args: Any) -> bytes:
        """
        Build the deployment bytecode: creation code followed by encoded constructor args.

        Raises:
            EncodingError: If there is no creation bytecode or the arguments don't encode
        """
        if not self.bytecode:
            raise EncodingError(f"No data for {self.name}")
        return bytes(self.bytecode) + self.encode_constructor_args(*args)


@dataclass(frozen=True)
class DeployedContract:
    """Handle to a contract living at its deterministic address."""

    name: str
    address: ChecksumAddress
    abi: List[Dict[str, Any]]
    deployed: bool  # True only if this call sent the deployment transaction
    transaction_hash: Optional[str] = None

    def attach(self, w3: Any) -> Any:
        """Bind the handle to a web3 instance, returning a contract object."""
        return w3.eth.contract(address=self.address, abi=self.abi)


@dataclass(frozen=True)
class OptimizerSettings:
    """Solidity optimizer settings as they appear in standard-json input."""

    enabled: bool = False
    runs: int = 200
    details: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"enabled": self.enabled, "runs": self.runs}
        if self.details is not None:
            result["details"] = dict(self.details)
        return result


@dataclass(frozen=True)
class VerificationReport:
    """Outcome of a successful verification across all backends."""

    address: str
    short_version: str
    long_version: str
    verified: Tuple[str, ...] = field(default_factory=tuple)  # Backends, in submission order
