from __future__ import annotations
from canoser import Struct
from move_core.types.account_address import AccountAddress
from move_core.types.identifier import Identifier


class ModuleId(Struct):
    """
    Represents the initial key into global storage where modules live: an account address
    plus the module name.

    Module ids are totally ordered by address bytes then by name. The ordering is what makes
    module retrieval deterministic.
    """
    _fields = [
        ('address', AccountAddress),
        ('name', Identifier)
    ]

    @classmethod
    def new(cls, address, name: str) -> ModuleId:
        return cls(AccountAddress.normalize_to_bytes(address), Identifier.new(name))

    # Parses `0x1::coin` style module ids.
    @classmethod
    def from_str(cls, s: str) -> ModuleId:
        parts = s.split("::")
        if len(parts) != 2:
            raise ValueError(f"Invalid module id '{s}', expected <address>::<name>")
        return cls.new(parts[0].strip(), parts[1].strip())

    def sort_key(self):
        return (self.address, self.name)

    def __lt__(self, other: ModuleId) -> bool:
        return self.sort_key() < other.sort_key()

    def __le__(self, other: ModuleId) -> bool:
        return self.sort_key() <= other.sort_key()

    def __gt__(self, other: ModuleId) -> bool:
        return self.sort_key() > other.sort_key()

    def __ge__(self, other: ModuleId) -> bool:
        return self.sort_key() >= other.sort_key()

    def __hash__(self):
        return (self.address, self.name).__hash__()

    def short_str_lossless(self) -> str:
        return f"{AccountAddress.to_hex_literal(self.address)}::{self.name}"

    def __str__(self):
        return self.short_str_lossless()

    def __repr__(self):
        return f"ModuleId({self.short_str_lossless()})"
