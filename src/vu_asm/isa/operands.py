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

import re
from numbers import Integral
from typing import Callable, Dict

from vu_asm.common.constants import (MASK_MASK, MAX_CONSTANT_SLOTS,
                                     MAX_INPUT_SLOTS, NUM_SWIZZLE_COMPONENTS)
from vu_asm.isa.types import (SWIZZLE_ALIASES, InvalidOperandType,
                              InvalidOutput, InvalidRegister, InvalidSwizzle,
                              OperandKind, OperandOutOfRange, OutputSlot,
                              Register, Swizzle, Token, TokenKind)

REGISTER_PATTERN = re.compile(r"r(?:[0-9]|1[0-5])")

OUTPUT_SLOTS: Dict[str, OutputSlot] = {
    output_slot.identifier: output_slot
    for output_slot in OutputSlot
}


def expect_identifier(token: Token, what: str) -> str:
    if not token.is_identifier:
        raise InvalidOperandType(
            f"Expected {what} identifier but found {token.kind}: "
            f"{token.text}",
            token=token)
    return token.value


def expect_integer(token: Token, what: str) -> int:
    if token.kind is not TokenKind.INTEGER_LITERAL \
       or not isinstance(token.value, Integral) \
       or isinstance(token.value, bool):
        raise InvalidOperandType(
            f"Expected {what} integer literal but found {token.kind}: "
            f"{token.text}",
            token=token)
    value = int(token.value)
    if value < 0:
        raise InvalidOperandType(
            f"Expected non-negative {what} but found: {token.text}",
            token=token)
    return value


def decode_register(token: Token) -> Register:
    identifier = expect_identifier(token, "register")
    # `fullmatch` rejects aliases such as `r01` or `R1`
    if not REGISTER_PATTERN.fullmatch(identifier):
        raise InvalidRegister(
            f"Invalid register identifier: {identifier}",
            token=token)
    return Register(int(identifier[1:]))


def decode_output_slot(token: Token) -> OutputSlot:
    identifier = expect_identifier(token, "vertex output")
    if identifier not in OUTPUT_SLOTS:
        raise InvalidOutput(
            f"Invalid vertex output identifier: {identifier}",
            token=token)
    return OUTPUT_SLOTS[identifier]


def decode_swizzle(token: Token) -> Swizzle:
    identifier = expect_identifier(token, "swizzle")
    if len(identifier) != NUM_SWIZZLE_COMPONENTS:
        raise InvalidSwizzle(
            f"Invalid shuffle subscript (expected {NUM_SWIZZLE_COMPONENTS} "
            f"components): {identifier}",
            token=token)
    components = []
    for subscript in identifier:
        if subscript not in SWIZZLE_ALIASES:
            raise InvalidSwizzle(
                f"Invalid shuffle subscript '{subscript}' in: {identifier}",
                token=token)
        components.append(int(SWIZZLE_ALIASES[subscript]))
    return tuple(components)


def decode_bounded_literal(token: Token, upper_bound: int, what: str) -> int:
    """Decodes an integer literal in `[0, upper_bound)`. Values are never
    clamped."""
    value = expect_integer(token, what)
    if value >= upper_bound:
        raise OperandOutOfRange(
            f"{what.capitalize()} index out of range "
            f"(expected less than {upper_bound}): {token.text}",
            token=token)
    return value


def decode_input_slot(token: Token) -> int:
    return decode_bounded_literal(token, MAX_INPUT_SLOTS, "input vertex slot")


def decode_constant_slot(token: Token) -> int:
    return decode_bounded_literal(token, MAX_CONSTANT_SLOTS,
                                  "input constant slot")


def decode_mask(token: Token) -> int:
    value = expect_integer(token, "mask")
    if value & MASK_MASK != value:
        raise OperandOutOfRange(
            f"Mask value out of range (expected 4-bit value): {token.text}",
            token=token)
    return value


OPERAND_DECODERS: Dict[OperandKind, Callable[[Token], int]] = {
    OperandKind.REGISTER: decode_register,
    OperandKind.OUTPUT_SLOT: decode_output_slot,
    OperandKind.INPUT_SLOT: decode_input_slot,
    OperandKind.CONSTANT_SLOT: decode_constant_slot,
    OperandKind.SWIZZLE: decode_swizzle,
    OperandKind.MASK: decode_mask,
}


def decode_operand(kind: OperandKind, token: Token):
    decoder = OPERAND_DECODERS[kind]
    return decoder(token)
