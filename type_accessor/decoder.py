from move_core.types.account_address import AccountAddress
from move_core.types.move_types import MoveModule, MoveStruct, MoveStructField
from move_core.types.type_parser import parse_type_tag
from dataclasses import dataclass, field
from dataclasses_json import dataclass_json, Undefined
from typing import List
import abc

# Module decoders turn the raw bytes handed out by a `ModuleSource` into a `MoveModule`.
# Decoding is pure: any exception escaping `decode` is reported by the builder as a
# decode failure of the module being fetched.


class ModuleDecoder(abc.ABC):

    @abc.abstractmethod
    def decode(self, raw: bytes) -> MoveModule:
        pass


# Decodes the canonical (canoser) serialization of a `MoveModule`.
class CanonicalModuleDecoder(ModuleDecoder):

    def decode(self, raw: bytes) -> MoveModule:
        return MoveModule.deserialize(raw)


@dataclass_json(undefined=Undefined.EXCLUDE)
@dataclass
class AbiField:
    name: str
    type: str


@dataclass_json(undefined=Undefined.EXCLUDE)
@dataclass
class AbiStruct:
    name: str
    is_native: bool = False
    abilities: List[str] = field(default_factory=list)
    fields: List[AbiField] = field(default_factory=list)


@dataclass_json(undefined=Undefined.EXCLUDE)
@dataclass
class AbiModule:
    address: str
    name: str
    structs: List[AbiStruct] = field(default_factory=list)

    def into_move_module(self) -> MoveModule:
        structs = []
        for struc in self.structs:
            fields = [MoveStructField(f.name, parse_type_tag(f.type)) for f in struc.fields]
            structs.append(MoveStruct.new(struc.name, fields, struc.is_native, list(struc.abilities)))
        return MoveModule.new(AccountAddress.from_hex_literal(self.address), self.name, structs)


# The bytecode payload of a node's `/accounts/{address}/module/{name}` response. Only the ABI
# is read, the bytecode itself is ignored.
@dataclass_json(undefined=Undefined.EXCLUDE)
@dataclass
class MoveModuleBytecode:
    abi: AbiModule
    bytecode: str = ""


# Decodes the JSON module description served by a node REST API.
class AbiJsonDecoder(ModuleDecoder):

    def decode(self, raw: bytes) -> MoveModule:
        payload = MoveModuleBytecode.from_json(raw)
        return payload.abi.into_move_module()
