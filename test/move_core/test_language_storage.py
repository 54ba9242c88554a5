from move_core.types.account_address import AccountAddress, ADDRESS_LENGTH
from move_core.types.language_storage import ModuleId
import pytest


def test_address_literals():
    assert AccountAddress.from_hex_literal("0x1") == b'\x00' * 31 + b'\x01'
    assert AccountAddress.from_hex_literal("0x" + "ab" * 32) == b'\xab' * 32
    for bad in ["1", "0x", "0xzz", "0x" + "1" * 65]:
        with pytest.raises(ValueError):
            AccountAddress.from_hex_literal(bad)


def test_address_rendering():
    assert AccountAddress.to_hex_literal(AccountAddress.normalize_to_bytes(0)) == "0x0"
    assert AccountAddress.to_hex_literal(AccountAddress.normalize_to_bytes(0xf)) == "0xf"
    assert AccountAddress.to_hex_literal(AccountAddress.normalize_to_bytes(0x10)) == "0x" + "0" * 62 + "10"


def test_normalize_to_bytes():
    assert AccountAddress.normalize_to_bytes(bytearray(ADDRESS_LENGTH)) == AccountAddress.default()
    with pytest.raises(ValueError):
        AccountAddress.normalize_to_bytes(b'\x01')
    with pytest.raises(TypeError):
        AccountAddress.normalize_to_bytes(1.0)


def test_module_id_from_str():
    module_id = ModuleId.from_str("0x1::coin")
    assert module_id.address == AccountAddress.from_hex_literal("0x1")
    assert module_id.name == "coin"
    assert str(module_id) == "0x1::coin"
    assert ModuleId.from_str(" 0x01 :: coin ") == module_id
    for bad in ["0x1", "0x1::coin::Coin", "coin::coin", "0x1::0coin"]:
        with pytest.raises(ValueError):
            ModuleId.from_str(bad)


def test_module_id_ordering():
    ids = [
        ModuleId.from_str("0xb::a"),
        ModuleId.from_str("0xa::z"),
        ModuleId.from_str("0x" + "1" * 64 + "::a"),
        ModuleId.from_str("0xa::b"),
    ]
    assert [str(x) for x in sorted(ids)] == [
        "0xa::b",
        "0xa::z",
        "0xb::a",
        "0x" + "1" * 64 + "::a",
    ]
    assert ModuleId.from_str("0xa::b") < ModuleId.from_str("0xa::z")
    assert ModuleId.from_str("0xb::a") > ModuleId.from_str("0xa::z")


def test_module_id_hash():
    a1 = ModuleId.from_str("0x1::coin")
    a2 = ModuleId.new(1, "coin")
    assert a1 == a2
    assert len({a1, a2}) == 1
    assert {a1: 1}[a2] == 1


def test_module_id_serialize():
    module_id = ModuleId.from_str("0x1::coin")
    assert ModuleId.deserialize(module_id.serialize()) == module_id
