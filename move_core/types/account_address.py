from __future__ import annotations
from canoser import DelegateT, BytesT

ADDRESS_LENGTH = 32
HEX_ADDRESS_LENGTH = ADDRESS_LENGTH * 2

# Addresses 0x0..0xf are reserved for the framework and are printed in their short form.
MAX_SPECIAL_ADDRESS = 0xf


class AccountAddress(DelegateT):
    """A 32 byte account address. Values are plain `bytes` of length `ADDRESS_LENGTH`."""
    delegate_type = BytesT(ADDRESS_LENGTH, encode_len=False)

    LENGTH = ADDRESS_LENGTH

    @classmethod
    def default(cls) -> bytes:
        return b'\x00' * ADDRESS_LENGTH

    @staticmethod
    def from_hex_literal(literal: str) -> bytes:
        if not literal.startswith("0x") and not literal.startswith("0X"):
            raise ValueError(f"Address literal '{literal}' must start with 0x.")
        digits = literal[2:]
        if not digits or len(digits) > HEX_ADDRESS_LENGTH:
            raise ValueError(f"Address literal '{literal}' has invalid length.")
        try:
            return bytes.fromhex(digits.rjust(HEX_ADDRESS_LENGTH, '0'))
        except ValueError:
            raise ValueError(f"Address literal '{literal}' is not hex.")

    @staticmethod
    def normalize_to_bytes(address) -> bytes:
        if isinstance(address, str):
            return AccountAddress.from_hex_literal(address)
        if isinstance(address, (bytes, bytearray)):
            if len(address) != ADDRESS_LENGTH:
                raise ValueError(f"{address} is not a valid address.")
            return bytes(address)
        if isinstance(address, int) and not isinstance(address, bool):
            if address < 0:
                raise ValueError(f"{address} is not a valid address.")
            return address.to_bytes(ADDRESS_LENGTH, byteorder="big")
        raise TypeError(f"Address: {address} has unknown type.")

    @staticmethod
    def is_special(address: bytes) -> bool:
        return int.from_bytes(address, byteorder="big") <= MAX_SPECIAL_ADDRESS

    @staticmethod
    def to_hex_literal(address: bytes) -> str:
        if AccountAddress.is_special(address):
            return hex(address[-1])
        return "0x" + address.hex()

    @classmethod
    def to_json_serializable(cls, value):
        return cls.to_hex_literal(value)
