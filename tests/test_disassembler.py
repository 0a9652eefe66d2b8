import pytest

from vu_asm.assembler import assemble
from vu_asm.disassembler import (InputFormat, disassemble, disassemble_word,
                                 read_words)
from vu_asm.isa.types import OperandOutOfRange, UnknownOpcode

SOURCE = """\
ld r0 0
ldc r1 15
mul r0 r1
shf r2 r0 wzyx 0b0101
dot r2 r0
st pos r0
st ocol r2
"""


@pytest.mark.parametrize("word, text", [
    (0x00001CC0, "ld r3 7"),
    (0x00000801, "st pos r2"),
    (0x02B90857, "shf r1 r2 xyzw 0b1010"),
    (0x0000003F, "end"),
    (3 | (1 << 10), "add r0 r1"),
])
def test_disassemble_word(word, text):
    assert disassemble_word(word) == text


def test_unknown_opcode():
    with pytest.raises(UnknownOpcode):
        disassemble_word(25)


@pytest.mark.parametrize("word", [
    9 << 10,                  # ld with input slot 9
    1 | (5 << 6),             # st to output slot 5
    0x3F | (1 << 6),          # end with a destination
    3 | (1 << 22),            # add with a mask
    1 | (2 << 10) | (1 << 14),  # st with a swizzle
])
def test_words_the_assembler_cannot_produce(word):
    with pytest.raises(OperandOutOfRange):
        disassemble_word(word)


def test_largest_slots_disassemble():
    assert disassemble_word(7 << 10) == "ld r0 7"
    assert disassemble_word(2 | (15 << 10)) == "ldc r0 15"
    assert disassemble_word(1 | (3 << 6)) == "st ocol r0"


def test_round_trip():
    program = assemble(SOURCE)
    lines = disassemble(program)
    assert lines == SOURCE.splitlines()
    assert assemble("\n".join(lines)) == program


def test_keep_terminator():
    program = assemble("add r0 r1")
    assert disassemble(program, strip_terminator=False) == ["add r0 r1", "end"]


def test_round_trip_full_program():
    program = assemble("\n".join(["sub r1 r2"] * 64))
    lines = disassemble(program)
    assert len(lines) == 64
    assert assemble("\n".join(lines)) == program


def test_read_hex_words(tmp_path):
    path = tmp_path / "program.hex"
    path.write_text("// header\n00000801\n\n0000003F // end\n")
    assert read_words(path) == [0x801, 0x3F]


def test_read_bin_words(tmp_path):
    program = assemble(SOURCE)
    path = tmp_path / "program.bin"
    path.write_bytes(program.to_bytes())
    assert read_words(path, InputFormat.BIN) == list(program)


def test_read_truncated_bin(tmp_path):
    path = tmp_path / "program.bin"
    path.write_bytes(b"\x3f\x00\x00")
    with pytest.raises(ValueError):
        read_words(path, InputFormat.BIN)
