"""CREATE2 address derivation for singleton factory deployments (EIP-1014).

The address is computed as:
    address = keccak256(0xff ++ factory_address ++ salt ++ keccak256(init_code))[12:]

Deployments in this library always use the zero salt, so every distinct
creation bytecode (constructor arguments included) has exactly one address on
any chain sharing the factory.
"""

from typing import Union

from eth_typing import ChecksumAddress
from eth_utils import keccak
from eth_utils.address import to_canonical_address, to_checksum_address
from hexbytes import HexBytes

from .constants import ZERO_SALT


def compute_create2_address(
    sender: bytes,
    salt: bytes,
    init_code: bytes,
) -> bytes:
    """
    Compute CREATE2 contract address.

    Args:
        sender: 20-byte deployer (factory) address
        salt: 32-byte salt value
        init_code: Contract creation code, constructor arguments included

    Returns:
        20-byte predicted contract address

    Raises:
        ValueError: If sender is not 20 bytes or salt is not 32 bytes

    Example:
        >>> sender = bytes(20)
        >>> addr = compute_create2_address(sender, bytes(32), bytes.fromhex("00"))
        >>> addr.hex()
        '4d1a2e2bb4f88f0250f26ffff098b0b30b26bf38'
    """
    if len(sender) != 20:
        raise ValueError(f"Sender must be 20 bytes, got {len(sender)}")
    if len(salt) != 32:
        raise ValueError(f"Salt must be 32 bytes, got {len(salt)}")

    init_code_hash = keccak(init_code)
    preimage = b"\xff" + sender + salt + init_code_hash
    return keccak(preimage)[12:]


def address_from_data(
    data: Union[bytes, str],
    factory_address: str,
) -> ChecksumAddress:
    """
    Derive the address the singleton factory will deploy `data` to.

    Args:
        data: Deployment bytecode, as bytes or a 0x-prefixed hex string
        factory_address: Address of the singleton factory

    Returns:
        Checksummed deployment address
    """
    return to_checksum_address(
        compute_create2_address(
            to_canonical_address(factory_address),
            ZERO_SALT,
            bytes(HexBytes(data)),
        )
    )
