from type_accessor.accessor import TypeAccessor
from type_accessor.builder import TypeAccessorBuilder
from move_core.types.type_parser import parse_struct_tag_str
from testutils import make_module, mid, ty
import json
import pytest


def build_accessor():
    coin = make_module("0x1::coin", {
        "CoinStore": {"coin": "0x1::coin::Coin<T0>", "frozen": "bool"},
        "Coin": {"value": "u64"},
    })
    table = make_module("0x1::table", {"Table": {"handle": "address"}})
    return TypeAccessorBuilder().add_modules([table, coin]).do_not_recurse().build_sync()


def test_lookup():
    accessor = build_accessor()
    assert accessor.lookup(mid("0x1::coin"), "Coin", "value") == ty("u64")
    assert accessor.lookup(mid("0x1::coin"), "Coin", "missing") is None
    assert accessor.lookup(mid("0x1::coin"), "Missing", "value") is None
    assert accessor.lookup(mid("0x2::coin"), "Coin", "value") is None


def test_struct_fields_and_modules_sorted():
    accessor = build_accessor()
    assert list(accessor.modules()) == [mid("0x1::coin"), mid("0x1::table")]
    assert list(accessor.structs(mid("0x1::coin"))) == ["Coin", "CoinStore"]
    assert list(accessor.struct_fields(mid("0x1::coin"), "CoinStore")) == ["coin", "frozen"]
    assert accessor.struct_fields(mid("0x1::nothing"), "Coin") is None
    assert dict(accessor.structs(mid("0x1::nothing"))) == {}


def test_field_type_substitutes_type_arguments():
    accessor = build_accessor()
    tag = parse_struct_tag_str("0x1::coin::CoinStore<0x1::aptos_coin::AptosCoin>")
    assert accessor.field_type(tag, "coin") == ty("0x1::coin::Coin<0x1::aptos_coin::AptosCoin>")
    assert accessor.field_type(tag, "frozen") == ty("bool")
    assert accessor.field_type(tag, "missing") is None


def test_read_only():
    accessor = build_accessor()
    with pytest.raises(TypeError):
        accessor.field_info[mid("0x2::x")] = {}
    with pytest.raises(TypeError):
        accessor.struct_fields(mid("0x1::coin"), "Coin")["value"] = ty("u8")


def test_source_dict_changes_do_not_leak():
    field_info = {mid("0x1::a"): {"S": {"f": ty("u8")}}}
    accessor = TypeAccessor(field_info)
    field_info[mid("0x1::a")]["S"]["g"] = ty("u16")
    assert list(accessor.struct_fields(mid("0x1::a"), "S")) == ["f"]


def test_to_json():
    accessor = build_accessor()
    assert json.loads(accessor.to_json()) == {
        "0x1::coin": {
            "Coin": {"value": "u64"},
            "CoinStore": {"coin": "0x1::coin::Coin<T0>", "frozen": "bool"},
        },
        "0x1::table": {"Table": {"handle": "address"}},
    }


def test_equality():
    assert build_accessor() == build_accessor()
    assert build_accessor() != TypeAccessor({})
