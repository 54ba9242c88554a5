from move_core.types.account_address import AccountAddress
from move_core.types.identifier import Identifier
from move_core.types.language_storage import ModuleId
from move_core.types.move_types import MoveType, MoveStructTag, MoveReference, MoveStructField, MoveStruct, MoveModule
from move_core.types.type_parser import TypeParseError, parse_type_tag, parse_struct_tag_str
