from move_core.types.language_storage import ModuleId
from move_core.types.move_types import MoveModule, MoveStruct, MoveStructField
from move_core.types.type_parser import parse_type_tag
from type_accessor.module_source import InMemoryModuleSource
from typing import Mapping


# Builds a module from `{struct name: {field name: type string}}`.
def make_module(module_id: str, structs: Mapping[str, Mapping[str, str]]) -> MoveModule:
    mid = ModuleId.from_str(module_id)
    return MoveModule(mid.address, mid.name, [
        MoveStruct.new(name, [MoveStructField(fname, parse_type_tag(ty)) for fname, ty in fields.items()])
        for name, fields in structs.items()
    ])


def make_source(*modules: MoveModule) -> InMemoryModuleSource:
    source = InMemoryModuleSource()
    for module in modules:
        source.add_module(module)
    return source


def mid(s: str) -> ModuleId:
    return ModuleId.from_str(s)


def ty(s: str):
    return parse_type_tag(s)
