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

import logging
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Union

import numpy as np

from vu_asm.common.constants import (MAX_INPUT_SLOTS, NUM_OUTPUT_SLOTS,
                                     TERMINATOR_WORD)
from vu_asm.common.types import Integer
from vu_asm.isa.encoders import decode_word
from vu_asm.isa.instruction_table import InstructionSpec, lookup_opcode
from vu_asm.isa.types import (Instruction, OperandKind, OperandOutOfRange,
                              OutputSlot, Register, SwizzleComponent,
                              VUEnum)

LOGGER = logging.getLogger(__name__)


class InputFormat(VUEnum):
    HEX = "hex"
    BIN = "bin"


def fmt_swizzle(swizzle) -> str:
    return "".join(SwizzleComponent(component).identifier
                   for component in swizzle)


OPERAND_FORMATTERS: Dict[OperandKind, Callable] = {
    OperandKind.REGISTER: lambda value: Register(value).identifier,
    OperandKind.OUTPUT_SLOT: lambda value: OutputSlot(value).identifier,
    OperandKind.INPUT_SLOT: str,
    OperandKind.CONSTANT_SLOT: str,
    OperandKind.SWIZZLE: fmt_swizzle,
    OperandKind.MASK: lambda value: f"0b{value:04b}",
}

# exclusive upper bounds of the fields narrower than their bit width
OPERAND_BOUNDS: Dict[OperandKind, int] = {
    OperandKind.OUTPUT_SLOT: NUM_OUTPUT_SLOTS,
    OperandKind.INPUT_SLOT: MAX_INPUT_SLOTS,
}


def check_fields(word: int,
                 spec: InstructionSpec,
                 instruction: Instruction) -> None:
    """Rejects words the assembler could never have produced: an operand
    beyond the bound its decoder enforces, or a non-zero unused field."""

    used = set()
    for operand in spec.operands:
        used.add(operand.field)
        value = getattr(instruction, operand.field)
        upper_bound = OPERAND_BOUNDS.get(operand.kind)
        if upper_bound is not None and value >= upper_bound:
            raise OperandOutOfRange(
                f"Word 0x{word:08X}: {operand.kind} of [{spec.mnemonic}] "
                f"must be less than {upper_bound}, found {value}")

    defaults = Instruction(opcode=instruction.opcode)
    for field_name in Instruction._fields:
        if field_name == "opcode" or field_name in used:
            continue
        if getattr(instruction, field_name) != getattr(defaults, field_name):
            raise OperandOutOfRange(
                f"Word 0x{word:08X}: [{spec.mnemonic}] does not use the "
                f"{field_name} field, but it is not zero")


def disassemble_word(word: Integer) -> str:
    """Renders one encoded word as a line of VU assembly, e.g.
    `0x00000801` -> `st pos r2`."""

    instruction = decode_word(word)
    spec = lookup_opcode(instruction.opcode)
    check_fields(int(word), spec, instruction)
    operands = [
        OPERAND_FORMATTERS[operand.kind](getattr(instruction, operand.field))
        for operand in spec.operands
    ]
    return " ".join([spec.mnemonic] + operands)


def disassemble(words: Iterable[Integer],
                strip_terminator: bool = True) -> List[str]:
    """Disassembles a program one line per word. With `strip_terminator`, a
    trailing terminator is dropped so that assembling the lines reproduces
    the program (the assembler appends it again)."""

    words = [int(word) for word in words]
    if strip_terminator and len(words) > 0 and words[-1] == TERMINATOR_WORD:
        words = words[:-1]
    return [disassemble_word(word) for word in words]


def read_words(path: Union[str, Path],
               input_format: InputFormat = InputFormat.HEX) -> List[int]:
    if not isinstance(path, Path):
        path = Path(path)

    if input_format is InputFormat.BIN:
        if path.stat().st_size % 4 != 0:
            raise ValueError(
                f"Binary program size is not a multiple of 4 bytes: {path}")
        words = np.fromfile(path, dtype="<u4")
        return [int(word) for word in words]

    words = []
    with open(path, "rt") as f:
        for line in f:
            line = line.split("//", 1)[0].strip()
            if len(line) == 0:
                continue
            words.append(int(line, 16))
    LOGGER.debug("Read %d words from %s", len(words), path)
    return words
