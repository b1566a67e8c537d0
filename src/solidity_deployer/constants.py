"""Configuration constants for solidity-deployer library."""

from fractions import Fraction

from eth_typing import ChecksumAddress
from eth_utils.address import to_checksum_address

# EIP-2470 singleton factory, deployed at the same address on every chain that has it
SINGLETON_FACTORY_ADDRESS: ChecksumAddress = to_checksum_address(
    "0xce0042B868300000d44A59004Da54A005ffdcf9f"
)

SINGLETON_FACTORY_ABI = [
    {
        "type": "function",
        "name": "deploy",
        "stateMutability": "nonpayable",
        "inputs": [
            {"name": "_initCode", "type": "bytes"},
            {"name": "_salt", "type": "bytes32"},
        ],
        "outputs": [{"name": "createdContract", "type": "address"}],
    }
]

ZERO_SALT = bytes(32)

# Share of the latest block's gas limit used when the caller supplies none
DEFAULT_GAS_LIMIT_RATIO = Fraction(2, 5)

# Public solc-bin release index: {"releases": {"0.8.18": "soljson-v0.8.18+commit.87f61d96.js"}}
COMPILERS_LIST_URL = "https://binaries.soliditylang.org/bin/list.json"

TENDERLY_API_URL = "https://api.tenderly.co/api/v1"
ETHERSCAN_API_URL = "https://api.etherscan.io/v2/api"

# Standard-json output selection submitted to Etherscan
DEFAULT_OUTPUT_SELECTION = {
    "*": {
        "*": [
            "abi",
            "evm.bytecode",
            "evm.deployedBytecode",
            "evm.methodIdentifiers",
            "metadata",
        ],
        "": ["ast"],
    }
}

# Network configuration based on ethereum-lists/chains
NETWORK_CONFIG = {
    "mainnet": {
        "chain_id": 1,
        "chain_name": "Ethereum Mainnet",
        "block_explorer_url": "https://etherscan.io",
    },
    "sepolia": {
        "chain_id": 11155111,
        "chain_name": "Sepolia",
        "block_explorer_url": "https://sepolia.etherscan.io",
    },
    "holesky": {
        "chain_id": 17000,
        "chain_name": "Holesky",
        "block_explorer_url": "https://holesky.etherscan.io",
    },
    "gnosis": {
        "chain_id": 100,
        "chain_name": "Gnosis Chain",
        "block_explorer_url": "https://gnosisscan.io",
    },
    "polygon": {
        "chain_id": 137,
        "chain_name": "Polygon Mainnet",
        "block_explorer_url": "https://polygonscan.com",
    },
    "optimism": {
        "chain_id": 10,
        "chain_name": "OP Mainnet",
        "block_explorer_url": "https://optimistic.etherscan.io",
    },
    "arbitrum": {
        "chain_id": 42161,
        "chain_name": "Arbitrum One",
        "block_explorer_url": "https://arbiscan.io",
    },
    "base": {
        "chain_id": 8453,
        "chain_name": "Base",
        "block_explorer_url": "https://basescan.org",
    },
}

# Aliases used by other tooling for the same networks
NETWORK_ALIASES = {
    "homestead": "mainnet",
    "ethereum": "mainnet",
    "xdai": "gnosis",
    "matic": "polygon",
}
