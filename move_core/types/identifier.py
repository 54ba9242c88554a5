from __future__ import annotations
from canoser import DelegateT

# An identifier is the name of an entity (module, resource, function, etc) in Move.
#
# A valid identifier consists of an ASCII string which satisfies any of the conditions:
#
# * The first character is a letter and the remaining characters are letters, digits or
#   underscores.
# * The first character is an underscore, and there is at least one further letter, digit or
#   underscore.
#
# Allowed identifiers are restricted to ASCII. Node APIs hand out names in exactly this form,
# so anything else showing up in a module ABI or a type string is rejected early.


def is_first_char(ch: str) -> bool:
    if '_' == ch:
        return True
    if 'a' <= ch <= 'z':
        return True
    if 'A' <= ch <= 'Z':
        return True
    return False


def is_underscore_alpha_or_digit(ch: str) -> bool:
    if is_first_char(ch):
        return True
    return '0' <= ch <= '9'


# Describes what identifiers are allowed.
def is_valid(s: str) -> bool:
    if s == "_":
        return False

    if not s:
        return False

    if not is_first_char(s[0]):
        return False

    for ch in s[1:]:
        if not is_underscore_alpha_or_digit(ch):
            return False

    return True


class Identifier(DelegateT):
    """
    An identifier is the name of an entity (module, resource, function, etc) in Move.

    Among other things, identifiers are used to:
    * name the module half of a `ModuleId`
    * name structs and their fields in the field type index
    """
    delegate_type = str

    # Creates a new `Identifier` instance.
    @staticmethod
    def new(s: str) -> str:
        if not is_valid(s):
            raise ValueError(f"Invalid identifier '{s}'")
        return s


Identifier.is_valid = is_valid
