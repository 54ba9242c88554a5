from __future__ import annotations
from move_core.types.identifier import is_first_char, is_underscore_alpha_or_digit
from move_core.types.move_types import MoveType, MoveStructTag, PRIMITIVE_NAMES
from enum import Enum, auto
from dataclasses import dataclass
from typing import List, Tuple

# Parser for the textual form of Move types used by node REST APIs, e.g.
#
#   u64
#   vector<0x1::string::String>
#   &mut 0x1::coin::Coin<T0>
#   0x1::table::Table<address, vector<u8>>


class TypeParseError(ValueError):
    pass


class Tok(Enum):
    EOF = auto()
    AddressValue = auto()
    NameValue = auto()
    Amp = auto()
    AmpMut = auto()
    ColonColon = auto()
    Comma = auto()
    Less = auto()
    Greater = auto()


PRIMITIVE_KEYWORDS = {v: k for k, v in PRIMITIVE_NAMES.items()}


def get_name_len(text: str) -> int:
    if not text or not is_first_char(text[0]):
        return 0
    lenn = 1
    while lenn < len(text) and is_underscore_alpha_or_digit(text[lenn]):
        lenn += 1
    return lenn


def get_hex_digits_len(text: str) -> int:
    lenn = 0
    for ch in text:
        if ch not in "0123456789abcdefABCDEF":
            break
        lenn += 1
    return lenn


def is_type_param_name(name: str) -> bool:
    return len(name) > 1 and name[0] == 'T' and name[1:].isdigit()


@dataclass
class Lexer:
    text: str
    cur_start: int = 0
    cur_end: int = 0
    token: Tok = Tok.EOF

    @classmethod
    def new(cls, s: str) -> Lexer:
        return cls(text=s)

    def peek(self) -> Tok:
        return self.token

    def content(self) -> str:
        return self.text[self.cur_start:self.cur_end]

    def advance(self) -> None:
        text = self.text[self.cur_end:].lstrip()
        self.cur_start = len(self.text) - len(text)
        (token, lenn) = self.find_token(text)
        self.cur_end = self.cur_start + lenn
        self.token = token

    # Find the next token and its length without changing the state of the lexer.
    def find_token(self, text: str) -> Tuple[Tok, int]:
        if not text:
            return (Tok.EOF, 0)

        ch = text[0]
        if text.startswith("0x") or text.startswith("0X"):
            hex_len = get_hex_digits_len(text[2:])
            if hex_len == 0:
                raise TypeParseError(f"Invalid address at offset {self.cur_start} in '{self.text}'")
            return (Tok.AddressValue, 2 + hex_len)
        elif is_first_char(ch):
            return (Tok.NameValue, get_name_len(text))
        elif ch == '&':
            rest = text[1:].lstrip()
            if rest.startswith("mut") and get_name_len(rest) == 3:
                return (Tok.AmpMut, len(text) - len(rest) + 3)
            return (Tok.Amp, 1)
        elif text.startswith("::"):
            return (Tok.ColonColon, 2)
        elif ch == ',':
            return (Tok.Comma, 1)
        elif ch == '<':
            return (Tok.Less, 1)
        elif ch == '>':
            return (Tok.Greater, 1)
        else:
            raise TypeParseError(f"Invalid character '{ch}' at offset {self.cur_start} in '{self.text}'")


def consume_token(tokens: Lexer, tok: Tok) -> str:
    if tokens.peek() != tok:
        raise TypeParseError(
            f"Expected {tok.name} but found '{tokens.content()}' at offset {tokens.cur_start} in '{tokens.text}'"
        )
    content = tokens.content()
    tokens.advance()
    return content


# Type = "&" Type | "&mut" Type | Primitive | "vector" "<" Type ">" | TypeParam | StructTag
def parse_type(tokens: Lexer) -> MoveType:
    tk = tokens.peek()

    if tk == Tok.Amp:
        tokens.advance()
        return MoveType.reference(parse_type(tokens), mutable=False)

    elif tk == Tok.AmpMut:
        tokens.advance()
        return MoveType.reference(parse_type(tokens), mutable=True)

    elif tk == Tok.AddressValue:
        return MoveType.struct(parse_struct_tag(tokens))

    elif tk == Tok.NameValue:
        name = tokens.content()
        if name in PRIMITIVE_KEYWORDS:
            tokens.advance()
            return MoveType.primitive(PRIMITIVE_KEYWORDS[name])
        elif name == "vector":
            tokens.advance()
            consume_token(tokens, Tok.Less)
            ty = parse_type(tokens)
            consume_token(tokens, Tok.Greater)
            return MoveType.vector(ty)
        elif is_type_param_name(name):
            tokens.advance()
            return MoveType.type_param(int(name[1:]))

    raise TypeParseError(
        f"Unexpected '{tokens.content()}' at offset {tokens.cur_start} in '{tokens.text}'"
    )


# StructTag = Address "::" Name "::" Name TypeActuals
def parse_struct_tag(tokens: Lexer) -> MoveStructTag:
    address = consume_token(tokens, Tok.AddressValue)
    consume_token(tokens, Tok.ColonColon)
    module = consume_token(tokens, Tok.NameValue)
    consume_token(tokens, Tok.ColonColon)
    name = consume_token(tokens, Tok.NameValue)
    type_params = parse_type_actuals(tokens)
    try:
        return MoveStructTag.new(address, module, name, type_params)
    except ValueError as err:
        raise TypeParseError(str(err)) from err


# TypeActuals = ("<" Comma<Type> ">")?
def parse_type_actuals(tokens: Lexer) -> List[MoveType]:
    if tokens.peek() != Tok.Less:
        return []
    tokens.advance()
    tys = [parse_type(tokens)]
    while tokens.peek() == Tok.Comma:
        tokens.advance()
        tys.append(parse_type(tokens))
    consume_token(tokens, Tok.Greater)
    return tys


def parse_type_tag(s: str) -> MoveType:
    tokens = Lexer.new(s)
    tokens.advance()
    ty = parse_type(tokens)
    if tokens.peek() != Tok.EOF:
        raise TypeParseError(f"Unexpected trailing '{tokens.content()}' in '{s}'")
    return ty


def parse_struct_tag_str(s: str) -> MoveStructTag:
    ty = parse_type_tag(s)
    if not ty.Struct:
        raise TypeParseError(f"'{s}' is not a struct type")
    return ty.value
