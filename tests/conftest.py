"""Shared pytest fixtures for solidity-deployer tests."""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import eth_abi
import pytest
from eth_utils import keccak
from hexbytes import HexBytes

from solidity_deployer import ContractArtifact, ContractVerificationRequest, OptimizerSettings
from solidity_deployer.address import address_from_data
from solidity_deployer.artifacts import load_artifact


class FakeChain:
    """In-memory ChainClient: the factory deploys to its CREATE2 address on send."""

    # Runtime code installed for every successful deployment
    DEPLOYED_CODE = bytes.fromhex("6080604052600080fd")

    def __init__(self, gas_limit: int = 30_000_000):
        self.gas_limit = gas_limit
        self.code: Dict[str, bytes] = {}
        self.sent: List[Tuple[str, bytes, Dict[str, Any]]] = []
        self.waited: List[HexBytes] = []
        self.code_queries: List[str] = []
        self.block_queries = 0
        self.deploy_on_send = True
        self.send_error: Optional[Exception] = None
        self.wait_error: Optional[Exception] = None

    async def get_code(self, address: str) -> bytes:
        self.code_queries.append(address)
        return self.code.get(address, b"")

    async def get_latest_block(self) -> Dict[str, Any]:
        self.block_queries += 1
        return {"number": 1, "gasLimit": self.gas_limit}

    async def send_transaction(self, to: str, data: bytes, tx_params: Dict[str, Any]) -> HexBytes:
        if self.send_error is not None:
            raise self.send_error
        self.sent.append((to, data, tx_params))
        if self.deploy_on_send:
            init_code, _salt = eth_abi.decode(["bytes", "bytes32"], data[4:])
            self.code[address_from_data(init_code, to)] = self.DEPLOYED_CODE
        return HexBytes(keccak(data))

    async def wait_for_receipt(self, tx_hash: HexBytes) -> Dict[str, Any]:
        if self.wait_error is not None:
            raise self.wait_error
        self.waited.append(tx_hash)
        return {"status": 1, "transactionHash": tx_hash}


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def fake_chain() -> FakeChain:
    return FakeChain()


@pytest.fixture
def hardhat_artifact_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "hardhat" / "Counter.json"


@pytest.fixture
def foundry_artifact_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "foundry" / "Counter.json"


@pytest.fixture
def build_info_path(fixtures_dir: Path) -> Path:
    return fixtures_dir / "build-info" / "counter.json"


@pytest.fixture
def counter_artifact(hardhat_artifact_path: Path) -> ContractArtifact:
    return load_artifact(hardhat_artifact_path)


@pytest.fixture
def interface_artifact(fixtures_dir: Path) -> ContractArtifact:
    return load_artifact(fixtures_dir / "hardhat" / "ICounter.json")


@pytest.fixture
def counter_source(fixtures_dir: Path) -> str:
    return (fixtures_dir / "Counter.sol").read_text()


@pytest.fixture
def solc_list_json(fixtures_dir: Path) -> Dict[str, Any]:
    with open(fixtures_dir / "solc_list.json") as f:
        return json.load(f)


@pytest.fixture
def verification_request(counter_source: str) -> ContractVerificationRequest:
    return ContractVerificationRequest(
        contract_to_verify="contracts/Counter.sol:Counter",
        version="v0.8.18",
        sources={"contracts/Counter.sol": counter_source},
        optimizer=OptimizerSettings(enabled=True, runs=200),
        remappings=["@openzeppelin/=node_modules/@openzeppelin/"],
        wait_for_success=True,
    )
