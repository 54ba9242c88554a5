from __future__ import annotations
from move_core.types.language_storage import ModuleId
from move_core.types.move_types import MoveModule, MoveType, PRIMITIVE_TYPES
from typing import List, Mapping, Set, Tuple

# struct name -> field name -> field type
StructsInfo = Mapping[str, Mapping[str, MoveType]]


def walk_module(
    module: MoveModule,
    follow_type_arguments: bool = False,
) -> Tuple[StructsInfo, Set[ModuleId]]:
    """
    Collect the field types of every struct in `module`, and the ids of the other modules
    those field types refer to.

    Struct references are not expanded here: the fields of a referenced struct are only
    looked at when its own module is walked. With `follow_type_arguments` the type arguments
    of a struct reference are walked as well, so `Coin<0x5::usdc::USDC>` also yields
    `0x5::usdc`. Type parameters are leaves either way.
    """
    self_id = module.module_id()
    structs_info = {}
    modules_to_retrieve = set()

    for struc in module.structs:
        fields = structs_info.setdefault(struc.name, {})
        types_to_resolve: List[MoveType] = []
        types_seen: Set[MoveType] = set()

        for field in struc.fields:
            types_to_resolve.append(field.typ)
            fields[field.name] = field.typ

        # Go through the types until we hit leaf types or a type we have already seen.
        while types_to_resolve:
            typ = types_to_resolve.pop()
            if typ in types_seen:
                continue
            types_seen.add(typ)

            name = typ.enum_name
            if name == 'Vector':
                types_to_resolve.append(typ.value)
            elif name == 'Reference':
                types_to_resolve.append(typ.value.to)
            elif name == 'Struct':
                module_id = typ.value.module_id()
                if module_id != self_id:
                    modules_to_retrieve.add(module_id)
                if follow_type_arguments:
                    types_to_resolve.extend(typ.value.generic_type_params)
            elif name == 'GenericTypeParam' or name in PRIMITIVE_TYPES:
                pass
            else:
                raise TypeError(f"unreachable: unknown MoveType variant {name}")

    return (structs_info, modules_to_retrieve)
