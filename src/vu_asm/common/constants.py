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


MAX_PROGRAM_LEN = 64

NUM_REGISTERS = 16
NUM_OUTPUT_SLOTS = 4
NUM_SWIZZLE_COMPONENTS = 4

MAX_INPUT_SLOTS = 8
MAX_CONSTANT_SLOTS = 16

OPCODE_SHIFT = 0
OPCODE_WIDTH = 6
OPCODE_MASK = (1 << OPCODE_WIDTH) - 1  # 0x3F

DST_SHIFT = 6
DST_WIDTH = 4
DST_MASK = (1 << DST_WIDTH) - 1

SRC_SHIFT = 10
SRC_WIDTH = 4
SRC_MASK = (1 << SRC_WIDTH) - 1

SWIZZLE_SHIFT = 14
SWIZZLE_COMPONENT_WIDTH = 2
SWIZZLE_COMPONENT_MASK = (1 << SWIZZLE_COMPONENT_WIDTH) - 1

MASK_SHIFT = 22
MASK_WIDTH = 4
MASK_MASK = (1 << MASK_WIDTH) - 1  # 0b1111

# bits 26-31 are never set by the encoder
ENCODED_WIDTH = MASK_SHIFT + MASK_WIDTH

END_OPCODE = 0x3F
TERMINATOR_WORD = END_OPCODE
