"""Clients for the verification backends."""

from .etherscan import EtherscanVerifier
from .tenderly import TenderlyVerifier

__all__ = [
    "EtherscanVerifier",
    "TenderlyVerifier",
]
