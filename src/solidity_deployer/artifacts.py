"""Compiled artifact parsers for solidity-deployer library."""

import json
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

from hexbytes import HexBytes

from .exceptions import ArtifactFormatError
from .payloads import ContractVerificationRequest
from .types import ContractArtifact, OptimizerSettings


class ArtifactFormat(Enum):
    """
    Compiled artifact file formats.

    - HARDHAT: artifacts/<path>/<Name>.json with "_format": "hh-sol-artifact-1"
    - FOUNDRY: out/<File>.sol/<Name>.json with bytecode under "bytecode.object"
    """

    HARDHAT = "hardhat"
    FOUNDRY = "foundry"


def detect_artifact_format(data: Dict[str, Any]) -> Optional[ArtifactFormat]:
    """
    Detect which tool produced an artifact.

    Returns:
        ArtifactFormat.HARDHAT if the artifact carries a hardhat format tag or a
        plain bytecode string, ArtifactFormat.FOUNDRY if the bytecode is an object,
        None if neither applies
    """
    if str(data.get("_format", "")).startswith("hh-sol-artifact"):
        return ArtifactFormat.HARDHAT

    bytecode = data.get("bytecode")
    if isinstance(bytecode, dict) and "object" in bytecode:
        return ArtifactFormat.FOUNDRY
    if isinstance(bytecode, str):
        return ArtifactFormat.HARDHAT

    return None


def _parse_bytecode(value: Optional[str], file_path: Path) -> HexBytes:
    if not value:
        return HexBytes(b"")
    try:
        return HexBytes(value)
    except ValueError as e:
        # Link references ("__$...$__") leave the bytecode non-hex
        raise ArtifactFormatError(
            f"Bytecode in {file_path} is not valid hex (unlinked libraries?)"
        ) from e


def parse_artifact(data: Dict[str, Any], file_path: Path) -> ContractArtifact:
    """
    Parse a compiled artifact document.

    Args:
        data: Decoded artifact JSON
        file_path: Where the artifact was read from, used for naming and errors

    Raises:
        ArtifactFormatError: If the format is unknown or the bytecode is malformed
    """
    match detect_artifact_format(data):
        case ArtifactFormat.HARDHAT:
            return ContractArtifact(
                name=data.get("contractName") or file_path.stem,
                abi=data.get("abi", []),
                bytecode=_parse_bytecode(data.get("bytecode"), file_path),
                deployed_bytecode=_parse_bytecode(data.get("deployedBytecode"), file_path),
                source_name=data.get("sourceName"),
            )
        case ArtifactFormat.FOUNDRY:
            # Foundry records the compilation target in the embedded metadata
            target = data.get("metadata", {}).get("settings", {}).get("compilationTarget", {})
            source_name, name = next(iter(target.items()), (None, file_path.stem))
            return ContractArtifact(
                name=name,
                abi=data.get("abi", []),
                bytecode=_parse_bytecode(data["bytecode"].get("object"), file_path),
                deployed_bytecode=_parse_bytecode(
                    data.get("deployedBytecode", {}).get("object"), file_path
                ),
                source_name=source_name,
            )
        case _:
            raise ArtifactFormatError(f"Unrecognized artifact format: {file_path}")


def load_artifact(file_path: Union[Path, str]) -> ContractArtifact:
    """
    Load a hardhat or foundry artifact from disk.

    Raises:
        ArtifactFormatError: If the file isn't a recognized artifact
    """
    path = Path(file_path)
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ArtifactFormatError(f"Artifact is not valid JSON: {path}") from e

    if not isinstance(data, dict):
        raise ArtifactFormatError(f"Unrecognized artifact format: {path}")
    return parse_artifact(data, path)


def load_build_info(
    file_path: Union[Path, str],
    contract_to_verify: str,
    wait_for_success: bool = False,
    constructor_arguments: Optional[str] = None,
) -> ContractVerificationRequest:
    """
    Build a verification request from a hardhat build-info file.

    The build-info carries the exact compiler input, so the long compiler
    version is known and no registry lookup is needed.

    Args:
        file_path: Path to artifacts/build-info/<hash>.json
        contract_to_verify: "path/to/File.sol:Name"
        wait_for_success: Whether backends should wait for verification to finish
        constructor_arguments: ABI-encoded constructor arguments, hex

    Raises:
        ArtifactFormatError: If required fields are missing or the contract
                             source is not part of the build
    """
    path = Path(file_path)
    with open(path) as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ArtifactFormatError(f"Build-info file is not valid JSON: {path}") from e

    try:
        version = data.get("solcLongVersion") or data["solcVersion"]
        compiler_input = data["input"]
        sources = {
            source_path: source["content"]
            for source_path, source in compiler_input["sources"].items()
        }
    except (KeyError, TypeError) as e:
        raise ArtifactFormatError(f"Missing field in build-info file {path}: {e}") from e

    source_path = contract_to_verify.rsplit(":", 1)[0]
    if source_path not in sources:
        raise ArtifactFormatError(f"{source_path} is not part of build {path}")

    settings = compiler_input.get("settings", {})
    optimizer = settings.get("optimizer", {})

    return ContractVerificationRequest(
        contract_to_verify=contract_to_verify,
        version=version if version.startswith("v") else f"v{version}",
        sources=sources,
        optimizer=OptimizerSettings(
            enabled=optimizer.get("enabled", False),
            runs=optimizer.get("runs", 200),
            details=optimizer.get("details"),
        ),
        libraries=settings.get("libraries") or None,
        remappings=settings.get("remappings"),
        constructor_arguments=constructor_arguments,
        wait_for_success=wait_for_success,
    )
