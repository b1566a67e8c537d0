"""Verification requests and their backend-specific payloads."""

import copy
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from .constants import DEFAULT_OUTPUT_SELECTION
from .types import OptimizerSettings


@dataclass(frozen=True)
class ContractVerificationRequest:
    """Everything needed to verify one contract, independent of the backend."""

    contract_to_verify: str  # e.g., "contracts/Counter.sol:Counter"
    version: str  # Short ("v0.8.18") or long ("v0.8.18+commit.87f61d96")
    sources: Mapping[str, str]  # Source path -> source text
    optimizer: OptimizerSettings = field(default_factory=OptimizerSettings)
    libraries: Optional[Mapping[str, Mapping[str, str]]] = None  # Path -> name -> address
    remappings: Optional[List[str]] = None
    constructor_arguments: Optional[str] = None  # ABI-encoded, hex
    wait_for_success: bool = False

    @property
    def contract_name(self) -> str:
        """Contract name without the source path ("Counter")."""
        return self.contract_to_verify.rsplit(":", 1)[-1]


def _sources_payload(sources: Mapping[str, str]) -> Dict[str, Dict[str, str]]:
    return {path: {"content": content} for path, content in sources.items()}


def to_tenderly_request(
    request: ContractVerificationRequest, short_version: str
) -> Dict[str, Any]:
    """
    Build the Tenderly verification payload.

    Tenderly infers the rest of the compiler input, so only the short version,
    sources and optimizer settings are sent. Verification is always public.
    """
    return {
        "contractToVerify": request.contract_to_verify,
        "solc": {
            "version": short_version,
            "sources": _sources_payload(request.sources),
            "settings": {
                "optimizer": request.optimizer.to_dict(),
            },
        },
        "config": {
            "mode": "public",
        },
    }


def to_etherscan_request(
    request: ContractVerificationRequest, long_version: str
) -> Dict[str, Any]:
    """Build the Etherscan verification payload around a full standard-json input."""
    settings: Dict[str, Any] = {
        "optimizer": request.optimizer.to_dict(),
        "outputSelection": copy.deepcopy(DEFAULT_OUTPUT_SELECTION),
    }
    if request.remappings is not None:
        settings["remappings"] = list(request.remappings)
    if request.libraries is not None:
        settings["libraries"] = {
            path: dict(libraries) for path, libraries in request.libraries.items()
        }

    return {
        "contractToVerify": request.contract_to_verify,
        "version": long_version,
        "compilerInput": {
            "language": "Solidity",
            "sources": _sources_payload(request.sources),
            "settings": settings,
        },
        "constructorArguments": request.constructor_arguments,
        "waitForSuccess": request.wait_for_success,
    }
