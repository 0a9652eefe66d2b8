import pytest

from vu_asm.isa.instruction_table import (INSTRUCTION_TABLE, lookup_mnemonic,
                                          lookup_opcode)
from vu_asm.isa.types import (InvalidOperandType, OperandShape, Position,
                              Token, UnknownOpcode)

EXPECTED_OPCODES = {
    "ld": 0, "st": 1, "ldc": 2, "add": 3, "sub": 4, "mul": 5, "div": 6,
    "dot": 7, "abs": 8, "sign": 9, "sqrt": 10, "pow": 11, "exp": 12,
    "log": 13, "min": 14, "max": 15, "sin": 16, "cos": 17, "tan": 18,
    "asin": 19, "acos": 20, "atan": 21, "atan2": 22, "shf": 23, "mulm": 24,
    "end": 63,
}


def test_opcode_assignment_matches_hardware():
    actual = {mnemonic: int(spec.opcode)
              for mnemonic, spec in INSTRUCTION_TABLE.items()}
    assert actual == EXPECTED_OPCODES


def test_operand_shapes():
    special = {
        "end": OperandShape.NO_OPERAND,
        "ld": OperandShape.REG_FROM_INPUT_SLOT,
        "st": OperandShape.OUTPUT_FROM_REG,
        "ldc": OperandShape.REG_FROM_CONST_SLOT,
        "shf": OperandShape.REG_REG_SWIZZLE_MASK,
    }
    for mnemonic, spec in INSTRUCTION_TABLE.items():
        assert spec.shape is special.get(mnemonic, OperandShape.REG_REG)


def test_operand_counts():
    assert len(INSTRUCTION_TABLE["end"].operands) == 0
    assert [operand.field for operand in INSTRUCTION_TABLE["shf"].operands] \
        == ["dst", "src", "swizzle", "mask"]
    assert [operand.field for operand in INSTRUCTION_TABLE["atan2"].operands] \
        == ["dst", "src"]


def test_lookup_mnemonic():
    spec = lookup_mnemonic(Token.identifier("mulm"))
    assert spec.opcode == 24
    assert spec.mnemonic == "mulm"


@pytest.mark.parametrize("name", ["mystery", "ADD", "Add", "nop"])
def test_lookup_unknown_mnemonic(name):
    token = Token.identifier(name, Position(2, 3))
    with pytest.raises(UnknownOpcode) as exc_info:
        lookup_mnemonic(token)
    assert exc_info.value.position == Position(2, 3)


def test_lookup_literal_as_mnemonic():
    with pytest.raises(InvalidOperandType):
        lookup_mnemonic(Token.integer(3))


def test_lookup_opcode():
    assert lookup_opcode(63).mnemonic == "end"
    assert lookup_opcode(23).mnemonic == "shf"
    with pytest.raises(UnknownOpcode):
        lookup_opcode(25)
