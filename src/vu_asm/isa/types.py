r"""
 Copyright 2023 GSI Technology, Inc.

 Permission is hereby granted, free of charge, to any person obtaining a copy of
 this software and associated documentation files (the “Software”), to deal in
 the Software without restriction, including without limitation the rights to
 use, copy, modify, merge, publish, distribute, sublicense, and/or sell copies of
 the Software, and to permit persons to whom the Software is furnished to do so,
 subject to the following conditions:

 The above copyright notice and this permission notice shall be included in all
 copies or substantial portions of the Software.

 THE SOFTWARE IS PROVIDED “AS IS”, WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
 IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS
 FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR
 COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER
 IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
 CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.
"""

from collections import OrderedDict
from enum import Enum, IntEnum
from typing import (Any, ClassVar, Dict, NamedTuple, Optional, Sequence,
                    Tuple, Type)

from vu_asm.common.types import Integer


class VUEnum(Enum):

    @classmethod
    def values(cls: Type["VUEnum"]) -> Sequence[Any]:
        return [enumerated.value for enumerated in cls]

    @classmethod
    def value_map(cls: Type["VUEnum"]) -> Dict[Any, "VUEnum"]:
        """Returns a mapping of enum values to members."""
        return OrderedDict((enumerated.value, enumerated)
                           for enumerated in cls)

    @classmethod
    def find_by_value(cls: Type["VUEnum"], value: Any) -> "VUEnum":
        """Returns the member associated with the given value, or raises an
        error if none exists."""
        for enumerated in cls:
            if enumerated.value == value:
                return enumerated
        raise ValueError(
            f"No {cls.__name__} exists for value: {value}")

    def __str__(self: "VUEnum") -> str:
        return str(self.value)


class Opcode(IntEnum):
    """Opcode numbers of the VU instruction set. These must match the target
    processor exactly."""

    LD = 0
    ST = 1
    LDC = 2
    ADD = 3
    SUB = 4
    MUL = 5
    DIV = 6
    DOT = 7
    ABS = 8
    SIGN = 9
    SQRT = 10
    POW = 11
    EXP = 12
    LOG = 13
    MIN = 14
    MAX = 15
    SIN = 16
    COS = 17
    TAN = 18
    ASIN = 19
    ACOS = 20
    ATAN = 21
    ATAN2 = 22
    SHF = 23
    MULM = 24
    END = 63

    @property
    def mnemonic(self: "Opcode") -> str:
        return self.name.lower()


class OperandShape(VUEnum):
    """Operand layouts shared by groups of mnemonics.

        1. NO_OPERAND            := `end`
        2. REG_FROM_INPUT_SLOT   := `ld r3 7`
        3. OUTPUT_FROM_REG       := `st pos r2`
        4. REG_FROM_CONST_SLOT   := `ldc r0 15`
        5. REG_REG               := `add r0 r1`
        6. REG_REG_SWIZZLE_MASK  := `shf r1 r2 xyzw 0b1010`"""

    NO_OPERAND = "NoOperand"
    REG_FROM_INPUT_SLOT = "RegFromInputSlot"
    OUTPUT_FROM_REG = "OutputFromReg"
    REG_FROM_CONST_SLOT = "RegFromConstSlot"
    REG_REG = "RegReg"
    REG_REG_SWIZZLE_MASK = "RegRegSwizzleMask"


class OperandKind(VUEnum):
    REGISTER = "register"
    OUTPUT_SLOT = "output slot"
    INPUT_SLOT = "input slot"
    CONSTANT_SLOT = "constant slot"
    SWIZZLE = "swizzle"
    MASK = "mask"


class Register(IntEnum):
    R0 = 0
    R1 = 1
    R2 = 2
    R3 = 3
    R4 = 4
    R5 = 5
    R6 = 6
    R7 = 7
    R8 = 8
    R9 = 9
    R10 = 10
    R11 = 11
    R12 = 12
    R13 = 13
    R14 = 14
    R15 = 15

    @property
    def identifier(self: "Register") -> str:
        return self.name.lower()


class OutputSlot(IntEnum):
    POS = 0
    TEX = 1
    COL = 2
    OCOL = 3

    @property
    def identifier(self: "OutputSlot") -> str:
        return self.name.lower()


class SwizzleComponent(IntEnum):
    X = 0
    Y = 1
    Z = 2
    W = 3

    @property
    def identifier(self: "SwizzleComponent") -> str:
        return self.name.lower()


# Positional and color letters name the same components and may be mixed
# within one swizzle (e.g. `xgbw`).
SWIZZLE_ALIASES: Dict[str, SwizzleComponent] = {
    "x": SwizzleComponent.X,
    "y": SwizzleComponent.Y,
    "z": SwizzleComponent.Z,
    "w": SwizzleComponent.W,
    "r": SwizzleComponent.X,
    "g": SwizzleComponent.Y,
    "b": SwizzleComponent.Z,
    "a": SwizzleComponent.W,
}

Swizzle = Tuple[int, int, int, int]

NO_SWIZZLE: Swizzle = (0, 0, 0, 0)


class TokenKind(VUEnum):
    IDENTIFIER = "identifier"
    INTEGER_LITERAL = "integer literal"
    FLOAT_LITERAL = "float literal"


class Position(NamedTuple):
    """1-based line and column of a token within its source text."""

    line: int
    column: int

    def __str__(self: "Position") -> str:
        return f"{self.line}:{self.column}"


class Token(NamedTuple):
    """A lexical unit consumed by the assembler.

    Parameters:
        kind: whether this is an identifier or a literal.
        text: the source text of the token.
        value: the name of an identifier, or the numeric value of a
               literal.
        position: where the token begins within its source, if known."""

    kind: TokenKind
    text: str
    value: Any
    position: Optional[Position] = None

    @staticmethod
    def identifier(name: str,
                   position: Optional[Position] = None) -> "Token":
        return Token(TokenKind.IDENTIFIER, name, name, position)

    @staticmethod
    def integer(value: Integer,
                position: Optional[Position] = None,
                text: Optional[str] = None) -> "Token":
        if text is None:
            text = str(value)
        return Token(TokenKind.INTEGER_LITERAL, text, value, position)

    @property
    def is_identifier(self: "Token") -> bool:
        return self.kind is TokenKind.IDENTIFIER

    @property
    def is_literal(self: "Token") -> bool:
        return self.kind is not TokenKind.IDENTIFIER

    def __str__(self: "Token") -> str:
        return self.text


class Instruction(NamedTuple):
    """One decoded operation. Fields the opcode does not use stay 0."""

    opcode: int
    dst: int = 0
    src: int = 0
    swizzle: Swizzle = NO_SWIZZLE
    mask: int = 0


class VUAssemblyError(RuntimeError):
    """Top-level error class for failures while assembling or disassembling
    VU programs. Every error is fatal to the current assembly."""

    kind: ClassVar[str] = "AssemblyError"

    def __init__(self: "VUAssemblyError",
                 message: str,
                 token: Optional[Token] = None,
                 position: Optional[Position] = None) -> None:
        super().__init__(message)
        self.message = message
        self.token = token
        if position is None and token is not None:
            position = token.position
        self.position = position

    @property
    def line(self: "VUAssemblyError") -> Optional[int]:
        if self.position is None:
            return None
        return self.position.line

    @property
    def column(self: "VUAssemblyError") -> Optional[int]:
        if self.position is None:
            return None
        return self.position.column

    def describe(self: "VUAssemblyError",
                 source_name: Optional[str] = None) -> str:
        """Formats this error as a compiler-style diagnostic, e.g.
        `shader.vu:3:5: InvalidRegister: ...`."""
        location = []
        if source_name is not None:
            location.append(source_name)
        if self.position is not None:
            location.append(str(self.position))
        prefix = ":".join(location)
        if len(prefix) > 0:
            return f"{prefix}: {self.kind}: {self.message}"
        return f"{self.kind}: {self.message}"


class UnknownOpcode(VUAssemblyError):
    kind = "UnknownOpcode"


class InvalidRegister(VUAssemblyError):
    kind = "InvalidRegister"


class InvalidOutput(VUAssemblyError):
    kind = "InvalidOutput"


class InvalidSwizzle(VUAssemblyError):
    kind = "InvalidSwizzle"


class InvalidOperandType(VUAssemblyError):
    kind = "InvalidOperandType"


class OperandOutOfRange(VUAssemblyError):
    kind = "OperandOutOfRange"


class ProgramTooLarge(VUAssemblyError):
    kind = "ProgramTooLarge"


class UnexpectedEndOfInput(VUAssemblyError):
    kind = "UnexpectedEndOfInput"


class InvalidToken(VUAssemblyError):
    """The lexer met a character that starts no token."""
    kind = "InvalidToken"


class UnterminatedProgram(VUAssemblyError):
    """A full-length program whose last word is not `end`. Raised only when
    the `full_program_policy` option is `error`."""
    kind = "UnterminatedProgram"
