from __future__ import annotations
from move_core.types.language_storage import ModuleId
from move_core.types.move_types import MoveStructTag, MoveType
from types import MappingProxyType
from typing import Iterator, Mapping, Optional
import json

# module id -> struct name -> field name -> field type
FieldInfo = Mapping[ModuleId, Mapping[str, Mapping[str, MoveType]]]


def freeze_field_info(field_info: FieldInfo) -> FieldInfo:
    frozen = {}
    for module_id in sorted(field_info):
        structs = {}
        for struct_name in sorted(field_info[module_id]):
            fields = field_info[module_id][struct_name]
            structs[struct_name] = MappingProxyType({k: fields[k] for k in sorted(fields)})
        frozen[module_id] = MappingProxyType(structs)
    return MappingProxyType(frozen)


class TypeAccessor:
    """
    TypeAccessor is a utility for looking up the types of fields in a resource.

    It is a read-only map of ModuleId (address, name) to a map of struct name to a map of
    field name to field type. Every level is sorted by key, so iteration, equality and the
    JSON form are deterministic.
    """

    def __init__(self, field_info: FieldInfo):
        self._field_info = freeze_field_info(field_info)

    def lookup(self, module_id: ModuleId, struct_name: str, field_name: str) -> Optional[MoveType]:
        fields = self.struct_fields(module_id, struct_name)
        if fields is None:
            return None
        return fields.get(field_name)

    def struct_fields(self, module_id: ModuleId, struct_name: str) -> Optional[Mapping[str, MoveType]]:
        structs = self._field_info.get(module_id)
        if structs is None:
            return None
        return structs.get(struct_name)

    # Field type as seen through an instantiated struct tag: `T0`, `T1`... are replaced by
    # the tag's type arguments.
    def field_type(self, struct_tag: MoveStructTag, field_name: str) -> Optional[MoveType]:
        typ = self.lookup(struct_tag.module_id(), struct_tag.name, field_name)
        if typ is None:
            return None
        return typ.substitute(struct_tag.generic_type_params)

    def modules(self) -> Iterator[ModuleId]:
        return iter(self._field_info)

    def structs(self, module_id: ModuleId) -> Mapping[str, Mapping[str, MoveType]]:
        return self._field_info.get(module_id, MappingProxyType({}))

    @property
    def field_info(self) -> FieldInfo:
        return self._field_info

    def __contains__(self, module_id: ModuleId) -> bool:
        return module_id in self._field_info

    def __len__(self) -> int:
        return len(self._field_info)

    def __eq__(self, other) -> bool:
        if not isinstance(other, TypeAccessor):
            return False
        return self._field_info == other._field_info

    def to_json_serializable(self):
        amap = {}
        for module_id, structs in self._field_info.items():
            amap[str(module_id)] = {
                struct_name: {name: str(typ) for name, typ in fields.items()}
                for struct_name, fields in structs.items()
            }
        return amap

    def to_json(self, indent=2) -> str:
        return json.dumps(self.to_json_serializable(), indent=indent)

    def __str__(self):
        return self.to_json()
