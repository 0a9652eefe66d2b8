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

from typing import Dict, NamedTuple, Sequence, Tuple

from vu_asm.isa.types import (InvalidOperandType, Opcode, OperandKind,
                              OperandShape, Token, UnknownOpcode)


class OperandSlot(NamedTuple):
    """Binds one operand of a shape to the Instruction field it fills."""

    field: str
    kind: OperandKind


class InstructionSpec(NamedTuple):
    mnemonic: str
    opcode: Opcode
    shape: OperandShape

    @property
    def operands(self: "InstructionSpec") -> Sequence[OperandSlot]:
        return SHAPE_OPERANDS[self.shape]


# Operands are read in the order listed here.
SHAPE_OPERANDS: Dict[OperandShape, Tuple[OperandSlot, ...]] = {
    OperandShape.NO_OPERAND: (),
    OperandShape.REG_FROM_INPUT_SLOT: (
        OperandSlot("dst", OperandKind.REGISTER),
        OperandSlot("src", OperandKind.INPUT_SLOT),
    ),
    OperandShape.OUTPUT_FROM_REG: (
        OperandSlot("dst", OperandKind.OUTPUT_SLOT),
        OperandSlot("src", OperandKind.REGISTER),
    ),
    OperandShape.REG_FROM_CONST_SLOT: (
        OperandSlot("dst", OperandKind.REGISTER),
        OperandSlot("src", OperandKind.CONSTANT_SLOT),
    ),
    OperandShape.REG_REG: (
        OperandSlot("dst", OperandKind.REGISTER),
        OperandSlot("src", OperandKind.REGISTER),
    ),
    OperandShape.REG_REG_SWIZZLE_MASK: (
        OperandSlot("dst", OperandKind.REGISTER),
        OperandSlot("src", OperandKind.REGISTER),
        OperandSlot("swizzle", OperandKind.SWIZZLE),
        OperandSlot("mask", OperandKind.MASK),
    ),
}


def _shape_of(opcode: Opcode) -> OperandShape:
    if opcode is Opcode.END:
        return OperandShape.NO_OPERAND
    if opcode is Opcode.LD:
        return OperandShape.REG_FROM_INPUT_SLOT
    if opcode is Opcode.ST:
        return OperandShape.OUTPUT_FROM_REG
    if opcode is Opcode.LDC:
        return OperandShape.REG_FROM_CONST_SLOT
    if opcode is Opcode.SHF:
        return OperandShape.REG_REG_SWIZZLE_MASK
    return OperandShape.REG_REG


INSTRUCTION_TABLE: Dict[str, InstructionSpec] = {
    opcode.mnemonic: InstructionSpec(opcode.mnemonic, opcode, _shape_of(opcode))
    for opcode in Opcode
}

OPCODE_TABLE: Dict[int, InstructionSpec] = {
    int(spec.opcode): spec
    for spec in INSTRUCTION_TABLE.values()
}


def lookup_mnemonic(token: Token) -> InstructionSpec:
    if not token.is_identifier:
        raise InvalidOperandType(
            f"Expected an instruction mnemonic but found {token.kind}: "
            f"{token.text}",
            token=token)
    spec = INSTRUCTION_TABLE.get(token.value)
    if spec is None:
        raise UnknownOpcode(f"Invalid opcode: {token.value}", token=token)
    return spec


def lookup_opcode(opcode: int) -> InstructionSpec:
    spec = OPCODE_TABLE.get(opcode)
    if spec is None:
        raise UnknownOpcode(f"Invalid opcode number: {opcode}")
    return spec
