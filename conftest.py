from move_core.types.language_storage import ModuleId
from move_core.types.move_types import MoveModule, MoveStruct, MoveStructField, MoveType, MoveStructTag
import pytest


# 0xa::a { struct S { f: vector<0xb::b::T> } }
@pytest.fixture
def module_a() -> MoveModule:
    field_type = MoveType.vector(MoveType.struct(MoveStructTag.new("0xb", "b", "T")))
    return MoveModule.new("0xa", "a", [MoveStruct.new("S", [MoveStructField("f", field_type)])])


# 0xb::b { struct T { g: u64 } }
@pytest.fixture
def module_b() -> MoveModule:
    return MoveModule.new("0xb", "b", [MoveStruct.new("T", [MoveStructField("g", MoveType('U64'))])])


@pytest.fixture
def id_a() -> ModuleId:
    return ModuleId.new("0xa", "a")


@pytest.fixture
def id_b() -> ModuleId:
    return ModuleId.new("0xb", "b")
