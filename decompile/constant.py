import io
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional, Union

from decompile.error import InvalidConstantKind, NotIntegral, NotString
from decompile.output import Output
from decompile.utf8 import probe
from undump.number import LNumber
from undump.objects import LBoolean, LNil, LString

RESERVED_WORDS = frozenset(
    {
        "and",
        "break",
        "do",
        "else",
        "elseif",
        "end",
        "false",
        "for",
        "function",
        "if",
        "in",
        "local",
        "nil",
        "not",
        "or",
        "repeat",
        "return",
        "then",
        "true",
        "until",
        "while",
    }
)

CONTROL_ESCAPES = {
    0x07: "\\a",
    0x08: "\\b",
    0x0C: "\\f",
    0x0A: "\\n",
    0x0D: "\\r",
    0x09: "\\t",
    0x0B: "\\v",
    0x22: '\\"',
    0x5C: "\\\\",
}

PRINTABLE_LOW = 0x20
PRINTABLE_HIGH = 0x7F

INT_MIN = -(2**31)
INT_MAX = 2**31 - 1


class PieceKind(Enum):
    LITERAL = "literal"
    ESCAPE = "escape"
    RAW = "raw"
    HEX = "hex"


@dataclass(frozen=True)
class Piece:
    kind: PieceKind
    data: bytes


def scan_string(data: bytes) -> Iterator[Piece]:
    """Split the body of a string constant into the pieces of its literal.

    Every byte position is classified as a control escape, a printable
    character, the start of a multi-byte text run that is copied as is, or a
    byte that needs a hex escape. RAW pieces carry the original bytes, the
    others carry the ASCII text to emit.
    """
    i = 0
    while i < len(data):
        c = data[i]
        if c in CONTROL_ESCAPES:
            yield Piece(PieceKind.ESCAPE, CONTROL_ESCAPES[c].encode("ascii"))
        elif PRINTABLE_LOW <= c <= PRINTABLE_HIGH:
            yield Piece(PieceKind.LITERAL, bytes((c,)))
        elif (length := probe(data, i)) > 1:
            yield Piece(PieceKind.RAW, data[i : i + length])
            i += length
            continue
        else:
            yield Piece(PieceKind.HEX, f"\\{c:02X}".encode("ascii"))
        i += 1


def is_letter(ch: str) -> bool:
    return ch.isalpha()


def is_digit(ch: str) -> bool:
    # Decimal digits in any script (category Nd), not only 0-9.
    return ch.isdecimal()


@dataclass(frozen=True)
class Constant:
    class Kind(Enum):
        NIL = 0
        BOOLEAN = 1
        NUMBER = 3
        STRING = 4

    kind: Kind
    const: Optional[Union[bool, LNumber, bytes]] = None

    def __post_init__(self):
        expected = {
            Constant.Kind.NIL: type(None),
            Constant.Kind.BOOLEAN: bool,
            Constant.Kind.NUMBER: LNumber,
            Constant.Kind.STRING: bytes,
        }
        if not isinstance(self.const, expected[self.kind]):
            raise InvalidConstantKind(
                f"{self.kind.name} constant cannot hold {type(self.const).__name__}"
            )

    @staticmethod
    def from_integer(n: int) -> "Constant":
        return Constant(Constant.Kind.NUMBER, LNumber.make_integer(n))

    @staticmethod
    def from_decoded(constant) -> "Constant":
        if isinstance(constant, LNil):
            return Constant(Constant.Kind.NIL)
        elif isinstance(constant, LBoolean):
            return Constant(Constant.Kind.BOOLEAN, bool(constant.value))
        elif isinstance(constant, LNumber):
            return Constant(Constant.Kind.NUMBER, constant)
        elif isinstance(constant, LString):
            return Constant(Constant.Kind.STRING, bytes(constant.deref()))
        raise InvalidConstantKind(f"Illegal constant type: {constant!r}")

    def is_nil(self) -> bool:
        return self.kind == Constant.Kind.NIL

    def is_boolean(self) -> bool:
        return self.kind == Constant.Kind.BOOLEAN

    def is_number(self) -> bool:
        return self.kind == Constant.Kind.NUMBER

    def is_string(self) -> bool:
        return self.kind == Constant.Kind.STRING

    def is_integer(self) -> bool:
        return self.is_number() and self.const.is_integral()

    def as_integer(self) -> int:
        if not self.is_integer():
            raise NotIntegral(f"{self!r} is not an integral number")
        # Saturating narrowing conversion to a 32-bit int.
        return max(INT_MIN, min(INT_MAX, int(self.const.value())))

    def is_identifier(self) -> bool:
        if not self.is_string():
            return False
        name = self.as_name()
        if name in RESERVED_WORDS:
            return False
        if len(name) == 0:
            return False
        if name[0] != "_" and not is_letter(name[0]):
            return False
        for ch in name[1:]:
            if is_letter(ch) or is_digit(ch) or ch == "_":
                continue
            return False
        return True

    def as_name(self) -> str:
        if not self.is_string():
            raise NotString(f"{self!r} is not a string")
        return self.const.decode("latin-1")

    def print(self, out: Output, braced: bool = False):
        # `braced` marks a table constructor context; literals print the same
        # either way.
        match self.kind:
            case Constant.Kind.NIL:
                out.print("nil")
            case Constant.Kind.BOOLEAN:
                out.print("true" if self.const else "false")
            case Constant.Kind.NUMBER:
                out.print(str(self.const))
            case Constant.Kind.STRING:
                out.print('"')
                for piece in scan_string(self.const):
                    if piece.kind == PieceKind.RAW:
                        for b in piece.data:
                            out.print_byte(b)
                    else:
                        out.print(piece.data.decode("ascii"))
                out.print('"')
            case _:
                raise AssertionError(f"unhandled constant kind: {self.kind}")

    def literal(self, braced: bool = False) -> bytes:
        buf = io.BytesIO()
        self.print(Output(buf), braced)
        return buf.getvalue()

    def __repr__(self):
        return f"{self.kind} {self.const if self.kind != Constant.Kind.NIL else ''}"
