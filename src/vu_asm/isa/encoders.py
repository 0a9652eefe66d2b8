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

from vu_asm.common.constants import (DST_MASK, DST_SHIFT, ENCODED_WIDTH,
                                     MASK_MASK, MASK_SHIFT, OPCODE_MASK,
                                     OPCODE_SHIFT, SRC_MASK, SRC_SHIFT,
                                     SWIZZLE_COMPONENT_MASK,
                                     SWIZZLE_COMPONENT_WIDTH, SWIZZLE_SHIFT,
                                     TERMINATOR_WORD)
from vu_asm.common.types import Integer, Word
from vu_asm.isa.types import NO_SWIZZLE, Instruction, Swizzle


def encode_fields(opcode: Integer,
                  dst: Integer = 0,
                  src: Integer = 0,
                  swizzle: Swizzle = NO_SWIZZLE,
                  mask: Integer = 0) -> Word:
    """Packs the instruction fields into a single 32-bit word:

        bits  0-5   opcode
        bits  6-9   dst
        bits 10-13  src
        bits 14-21  swizzle (2 bits per component, x first)
        bits 22-25  mask
        bits 26-31  always zero"""

    word = (int(opcode) & OPCODE_MASK) << OPCODE_SHIFT
    word |= (int(dst) & DST_MASK) << DST_SHIFT
    word |= (int(src) & SRC_MASK) << SRC_SHIFT
    for index, component in enumerate(swizzle):
        shift = SWIZZLE_SHIFT + index * SWIZZLE_COMPONENT_WIDTH
        word |= (int(component) & SWIZZLE_COMPONENT_MASK) << shift
    word |= (int(mask) & MASK_MASK) << MASK_SHIFT
    return word


def encode_instruction(instruction: Instruction) -> Word:
    return encode_fields(instruction.opcode,
                         dst=instruction.dst,
                         src=instruction.src,
                         swizzle=instruction.swizzle,
                         mask=instruction.mask)


def encode_terminator() -> Word:
    return TERMINATOR_WORD


def decode_word(word: Integer) -> Instruction:
    word = int(word)
    if word < 0 or word >> ENCODED_WIDTH != 0:
        raise ValueError(f"Not a VU instruction word: 0x{word:08X}")

    swizzle = tuple(
        (word >> (SWIZZLE_SHIFT + index * SWIZZLE_COMPONENT_WIDTH))
        & SWIZZLE_COMPONENT_MASK
        for index in range(len(NO_SWIZZLE)))

    return Instruction(
        opcode=(word >> OPCODE_SHIFT) & OPCODE_MASK,
        dst=(word >> DST_SHIFT) & DST_MASK,
        src=(word >> SRC_SHIFT) & SRC_MASK,
        swizzle=swizzle,
        mask=(word >> MASK_SHIFT) & MASK_MASK)
