from __future__ import annotations
from canoser import Struct, RustEnum, Uint16
from move_core.types.account_address import AccountAddress
from move_core.types.identifier import Identifier
from move_core.types.language_storage import ModuleId
from typing import List, Optional

# Types of struct fields as they are described by on-chain module ABIs.
#
# `MoveType` is a closed set of variants. Every consumer dispatches on the full set and raises
# on anything it does not know, so adding a variant here is a deliberate change everywhere.

PRIMITIVE_TYPES = ['Bool', 'U8', 'U16', 'U32', 'U64', 'U128', 'U256', 'Address', 'Signer']

PRIMITIVE_NAMES = {
    'Bool': "bool",
    'U8': "u8",
    'U16': "u16",
    'U32': "u32",
    'U64': "u64",
    'U128': "u128",
    'U256': "u256",
    'Address': "address",
    'Signer': "signer",
}


class MoveStructTag(Struct):
    _fields = [
        ('address', AccountAddress),
        ('module', Identifier),
        ('name', Identifier),
        ('generic_type_params', ['move_core.types.move_types.MoveType'])
    ]

    @classmethod
    def new(cls, address, module: str, name: str, generic_type_params: List[MoveType] = None) -> MoveStructTag:
        if generic_type_params is None:
            generic_type_params = []
        return cls(
            AccountAddress.normalize_to_bytes(address),
            Identifier.new(module),
            Identifier.new(name),
            generic_type_params,
        )

    def module_id(self) -> ModuleId:
        return ModuleId(self.address, self.module)

    def __hash__(self):
        return self.serialize().__hash__()

    def __str__(self):
        ret = f"{AccountAddress.to_hex_literal(self.address)}::{self.module}::{self.name}"
        if self.generic_type_params:
            ret += "<" + ", ".join(str(x) for x in self.generic_type_params) + ">"
        return ret

    def __repr__(self):
        return f"MoveStructTag({self})"


class MoveReference(Struct):
    _fields = [
        ('mutable', bool),
        ('to', 'move_core.types.move_types.MoveType')
    ]

    def __hash__(self):
        return self.serialize().__hash__()

    def __str__(self):
        if self.mutable:
            return f"&mut {self.to}"
        return f"&{self.to}"


class MoveType(RustEnum):
    _enums = [
        ('Bool', None),
        ('U8', None),
        ('U16', None),
        ('U32', None),
        ('U64', None),
        ('U128', None),
        ('U256', None),
        ('Address', None),
        ('Signer', None),
        ('Vector', 'move_core.types.move_types.MoveType'),
        ('Struct', MoveStructTag),
        ('GenericTypeParam', Uint16),
        ('Reference', MoveReference),
    ]

    @classmethod
    def primitive(cls, name: str) -> MoveType:
        if name not in PRIMITIVE_TYPES:
            raise TypeError(f"{name} is not a primitive type")
        return cls(name)

    @classmethod
    def vector(cls, items: MoveType) -> MoveType:
        return cls('Vector', items)

    @classmethod
    def reference(cls, to: MoveType, mutable: bool = False) -> MoveType:
        return cls('Reference', MoveReference(mutable, to))

    @classmethod
    def struct(cls, tag: MoveStructTag) -> MoveType:
        return cls('Struct', tag)

    @classmethod
    def type_param(cls, index: int) -> MoveType:
        return cls('GenericTypeParam', index)

    def is_primitive(self) -> bool:
        return self.enum_name in PRIMITIVE_TYPES

    # Replace every `GenericTypeParam(i)` by `type_args[i]`.
    def substitute(self, type_args: List[MoveType]) -> MoveType:
        name = self.enum_name
        if name in PRIMITIVE_TYPES:
            return self
        elif name == 'GenericTypeParam':
            if self.value >= len(type_args):
                raise IndexError(f"type parameter T{self.value} has no type argument")
            return type_args[self.value]
        elif name == 'Vector':
            return MoveType.vector(self.value.substitute(type_args))
        elif name == 'Reference':
            return MoveType.reference(self.value.to.substitute(type_args), self.value.mutable)
        elif name == 'Struct':
            tag = self.value
            return MoveType.struct(MoveStructTag(
                tag.address,
                tag.module,
                tag.name,
                [ty.substitute(type_args) for ty in tag.generic_type_params],
            ))
        else:
            raise TypeError(f"unreachable: unknown MoveType variant {name}")

    def __hash__(self):
        return self.serialize().__hash__()

    def __str__(self):
        name = self.enum_name
        if name in PRIMITIVE_NAMES:
            return PRIMITIVE_NAMES[name]
        elif name == 'Vector':
            return f"vector<{self.value}>"
        elif name == 'GenericTypeParam':
            return f"T{self.value}"
        elif name in ('Struct', 'Reference'):
            return str(self.value)
        else:
            raise TypeError(f"unreachable: unknown MoveType variant {name}")

    def __repr__(self):
        return f"MoveType({self})"

    def to_json_serializable(self):
        return str(self)


class MoveStructField(Struct):
    _fields = [
        ('name', Identifier),
        ('typ', MoveType)
    ]


class MoveStruct(Struct):
    _fields = [
        ('name', Identifier),
        ('is_native', bool),
        ('abilities', [str]),
        ('fields', [MoveStructField])
    ]

    @classmethod
    def new(cls, name: str, fields: List[MoveStructField], is_native: bool = False,
            abilities: Optional[List[str]] = None) -> MoveStruct:
        if abilities is None:
            abilities = []
        return cls(Identifier.new(name), is_native, abilities, fields)


# A module as far as field typing is concerned: its id plus the structs it declares.
class MoveModule(Struct):
    _fields = [
        ('address', AccountAddress),
        ('name', Identifier),
        ('structs', [MoveStruct])
    ]

    @classmethod
    def new(cls, address, name: str, structs: List[MoveStruct]) -> MoveModule:
        return cls(AccountAddress.normalize_to_bytes(address), Identifier.new(name), structs)

    def module_id(self) -> ModuleId:
        return ModuleId(self.address, self.name)
