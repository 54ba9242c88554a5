from type_accessor.walker import walk_module
from move_core.types.move_types import MoveModule, MoveStruct, MoveStructField, MoveType, MoveStructTag
from testutils import make_module, mid, ty


def test_field_map_and_discovered_modules():
    module = make_module("0xa::a", {
        "S": {"f": "vector<0xb::b::T>", "g": "u64"},
        "R": {"h": "&mut 0xc::c::U<u8>", "i": "0x1::string::String"},
    })
    (structs_info, discovered) = walk_module(module)

    assert structs_info == {
        "S": {"f": ty("vector<0xb::b::T>"), "g": ty("u64")},
        "R": {"h": ty("&mut 0xc::c::U<u8>"), "i": ty("0x1::string::String")},
    }
    assert discovered == {mid("0xb::b"), mid("0xc::c"), mid("0x1::string")}


def test_own_module_is_not_discovered():
    module = make_module("0xa::a", {"Node": {"next": "vector<0xa::a::Node>", "v": "u8"}})
    (structs_info, discovered) = walk_module(module)
    assert structs_info == {"Node": {"next": ty("vector<0xa::a::Node>"), "v": ty("u8")}}
    assert discovered == set()


def test_type_parameters_are_leaves():
    module = make_module("0xa::a", {"Box": {"inner": "T0", "items": "vector<&T1>"}})
    (_, discovered) = walk_module(module)
    assert discovered == set()


def test_type_arguments_only_followed_on_request():
    module = make_module("0xa::a", {
        "S": {"c": "0x1::coin::Coin<vector<0x5::usdc::USDC>>"},
    })
    (_, discovered) = walk_module(module)
    assert discovered == {mid("0x1::coin")}

    (_, discovered) = walk_module(module, follow_type_arguments=True)
    assert discovered == {mid("0x1::coin"), mid("0x5::usdc")}


def test_struct_without_fields():
    module = make_module("0xa::a", {"Marker": {}})
    (structs_info, discovered) = walk_module(module)
    assert structs_info == {"Marker": {}}
    assert discovered == set()


def test_repeated_types_visited_once():
    # Structurally identical but independently built types collapse in the seen set.
    t1 = MoveType.vector(MoveType.struct(MoveStructTag.new("0xb", "b", "T")))
    t2 = MoveType.vector(MoveType.struct(MoveStructTag.new("0xb", "b", "T")))
    assert t1 is not t2
    assert t1 == t2
    assert hash(t1) == hash(t2)

    module = MoveModule.new("0xa", "a", [
        MoveStruct.new("S", [MoveStructField("x", t1), MoveStructField("y", t2)]),
    ])
    (structs_info, discovered) = walk_module(module)
    assert structs_info["S"] == {"x": t1, "y": t2}
    assert discovered == {mid("0xb::b")}


def test_all_primitives_are_leaves():
    fields = {f"f{i}": name for i, name in enumerate(
        ["bool", "u8", "u16", "u32", "u64", "u128", "u256", "address", "signer"])}
    module = make_module("0xa::a", {"P": fields})
    (structs_info, discovered) = walk_module(module)
    assert len(structs_info["P"]) == 9
    assert discovered == set()
