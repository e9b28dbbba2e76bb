"""
Address handling: bech32m codec and normalization to puzzle hashes.

User-facing addresses are bech32m strings (BIP350) whose data part is a
32-byte puzzle hash. The wallet backend only understands puzzle hashes.
"""

from __future__ import annotations

from sparecore.constants import (
    ADDRESS_URI_PREFIX,
    FOREIGN_ASSET_MARKER,
    HEX_PREFIXES,
    PUZZLE_HASH_LENGTH,
)

CHARSET = "qpzry9x8gf2tvdw0s3jn54khce6mua7l"
BECH32M_CONST = 0x2BC830A3


class AddressDecodeError(ValueError):
    """Raised when a string is not a well-formed bech32m address."""


class InvalidAddressError(ValueError):
    """Raised when a user-entered address cannot be turned into a puzzle hash."""

    code = "INVALID_ADDRESS"

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"This is not a valid chia address. {address}")


def bech32_polymod(values: list[int]) -> int:
    """Bech32 checksum polymod"""
    gen = [0x3B6A57B2, 0x26508E6D, 0x1EA119FA, 0x3D4233DD, 0x2A1462B3]
    chk = 1
    for v in values:
        b = chk >> 25
        chk = (chk & 0x1FFFFFF) << 5 ^ v
        for i in range(5):
            chk ^= gen[i] if ((b >> i) & 1) else 0
    return chk


def bech32_hrp_expand(hrp: str) -> list[int]:
    """Expand HRP for checksum computation"""
    return [ord(x) >> 5 for x in hrp] + [0] + [ord(x) & 31 for x in hrp]


def bech32m_verify_checksum(hrp: str, data: list[int]) -> bool:
    return bech32_polymod(bech32_hrp_expand(hrp) + data) == BECH32M_CONST


def bech32m_create_checksum(hrp: str, data: list[int]) -> list[int]:
    """Create bech32m checksum"""
    values = bech32_hrp_expand(hrp) + data
    polymod = bech32_polymod(values + [0, 0, 0, 0, 0, 0]) ^ BECH32M_CONST
    return [(polymod >> 5 * (5 - i)) & 31 for i in range(6)]


def bech32m_encode(hrp: str, data: list[int]) -> str:
    """Encode bech32m string"""
    combined = data + bech32m_create_checksum(hrp, data)
    return hrp + "1" + "".join([CHARSET[d] for d in combined])


def bech32m_decode(bech: str) -> tuple[str, list[int]]:
    """
    Decode a bech32m string into its human-readable part and 5-bit data.

    Raises:
        AddressDecodeError: On mixed case, bad characters, bad length or
            checksum mismatch
    """
    if any(ord(x) < 33 or ord(x) > 126 for x in bech):
        raise AddressDecodeError("Invalid character in address")
    if bech.lower() != bech and bech.upper() != bech:
        raise AddressDecodeError("Mixed case address")
    bech = bech.lower()
    pos = bech.rfind("1")
    if pos < 1 or pos + 7 > len(bech):
        raise AddressDecodeError("Missing separator or checksum")
    if any(x not in CHARSET for x in bech[pos + 1 :]):
        raise AddressDecodeError("Invalid data character")
    hrp = bech[:pos]
    data = [CHARSET.find(x) for x in bech[pos + 1 :]]
    if not bech32m_verify_checksum(hrp, data):
        raise AddressDecodeError("Invalid checksum")
    return hrp, data[:-6]


def convertbits(data: bytes | list[int], frombits: int, tobits: int, pad: bool = True) -> list[int]:
    """Convert between bit groups"""
    acc = 0
    bits = 0
    ret = []
    maxv = (1 << tobits) - 1
    max_acc = (1 << (frombits + tobits - 1)) - 1

    for value in data:
        if value < 0 or (value >> frombits):
            raise ValueError("Invalid value for bit conversion")
        acc = ((acc << frombits) | value) & max_acc
        bits += frombits
        while bits >= tobits:
            bits -= tobits
            ret.append((acc >> bits) & maxv)

    if pad:
        if bits:
            ret.append((acc << (tobits - bits)) & maxv)
    elif bits >= frombits or ((acc << (tobits - bits)) & maxv):
        raise ValueError("Invalid bits")

    return ret


def encode_puzzle_hash(puzzle_hash: bytes, prefix: str) -> str:
    """Encode a 32-byte puzzle hash as a bech32m address with the given prefix."""
    if len(puzzle_hash) != PUZZLE_HASH_LENGTH:
        raise ValueError(f"Invalid puzzle hash length: {len(puzzle_hash)}")
    return bech32m_encode(prefix, convertbits(puzzle_hash, 8, 5))


def decode_puzzle_hash(address: str) -> bytes:
    """
    Decode a bech32m address into its puzzle hash.

    Raises:
        AddressDecodeError: If the address is malformed or does not carry
            a 32-byte puzzle hash
    """
    _hrp, data = bech32m_decode(address)
    try:
        decoded = bytes(convertbits(data, 5, 8, False))
    except ValueError as e:
        raise AddressDecodeError(str(e)) from e
    if len(decoded) != PUZZLE_HASH_LENGTH:
        raise AddressDecodeError(f"Invalid puzzle hash length: {len(decoded)}")
    return decoded


def strip_uri_prefix(address: str) -> str:
    if address.startswith(ADDRESS_URI_PREFIX):
        return address[len(ADDRESS_URI_PREFIX) :]
    return address


def strip_address_prefixes(address: str) -> str:
    """Remove the URI and hex prefixes without decoding what remains."""
    address = strip_uri_prefix(address)
    if address.startswith(HEX_PREFIXES):
        return address[2:]
    return address


def address_to_puzzle_hash(address: str) -> str:
    """
    Normalize a user-entered address into a hex puzzle hash.

    Accepted forms:
    - "chia_addr://<address>": URI prefix is stripped first
    - "0x<hex>" / "0X<hex>": returned as-is without the prefix, not decoded
    - bech32m address: decoded and checksum-verified

    Raises:
        InvalidAddressError: If the bech32m form fails to decode
    """
    puzzle_hash = strip_uri_prefix(address)
    if puzzle_hash.startswith(HEX_PREFIXES):
        return puzzle_hash[2:]

    try:
        return decode_puzzle_hash(puzzle_hash).hex()
    except AddressDecodeError as e:
        raise InvalidAddressError(address) from e


def is_foreign_asset_address(address: str) -> bool:
    """Check whether the address belongs to a coloured-coin namespace."""
    return FOREIGN_ASSET_MARKER in address
