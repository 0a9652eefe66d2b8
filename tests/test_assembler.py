import logging

import numpy as np
import pytest

from vu_asm.assembler import Assembler, AssemblerState, Program, assemble
from vu_asm.common.stack_manager import ConfigStack
from vu_asm.isa.types import (InvalidOperandType, InvalidOutput,
                              InvalidRegister, InvalidSwizzle,
                              OperandOutOfRange, Position, ProgramTooLarge,
                              Token, UnexpectedEndOfInput, UnknownOpcode,
                              UnterminatedProgram)
from vu_asm.lexer import tokenize
from vu_asm.utils.config_utils import vu_config

END = 0x0000003F


def repeat(line, count):
    return "\n".join([line] * count)


def test_empty_program_is_a_single_terminator():
    assert list(assemble("")) == [END]
    assert list(assemble([])) == [END]


def test_ld():
    assert list(assemble("ld r3 7")) == [0x00001CC0, END]


def test_st():
    assert list(assemble("st pos r2")) == [0x00000801, END]


def test_ldc():
    assert list(assemble("ldc r4 15")) == [2 | (4 << 6) | (15 << 10), END]


def test_shf():
    expected = 23 | (1 << 6) | (2 << 10) | (0 << 14) | (1 << 16) \
        | (2 << 18) | (3 << 20) | (10 << 22)
    assert list(assemble("shf r1 r2 xyzw 0b1010")) == [expected, END]


def test_reg_reg():
    program = assemble("add r0 r1\natan2 r15 r14\nmulm r2 r3")
    assert list(program) == [
        3 | (0 << 6) | (1 << 10),
        22 | (15 << 6) | (14 << 10),
        24 | (2 << 6) | (3 << 10),
        END,
    ]


@pytest.mark.parametrize("count", [1, 2, 10, 63])
def test_short_programs_gain_a_terminator(count):
    program = assemble(repeat("add r0 r1", count))
    assert len(program) == count + 1
    assert program[-1] == END
    assert program.is_terminated


def test_explicit_end_still_gains_a_terminator():
    program = assemble("add r0 r1\nend")
    assert list(program) == [3 | (1 << 10), END, END]


def test_code_after_end_is_accepted():
    program = assemble("end\nadd r0 r1")
    assert list(program) == [END, 3 | (1 << 10), END]


def test_full_program_is_not_terminated():
    program = assemble(repeat("add r0 r1", 64))
    assert len(program) == 64
    assert program[-1] == 3 | (1 << 10)
    assert not program.is_terminated


def test_full_program_ending_in_end():
    program = assemble(repeat("add r0 r1", 63) + "\nend")
    assert len(program) == 64
    assert program[-1] == END


@pytest.mark.parametrize("count", [65, 100])
def test_oversized_programs_fail(count):
    with pytest.raises(ProgramTooLarge) as exc_info:
        assemble(repeat("add r0 r1", count))
    # points at the first instruction beyond the ceiling
    assert exc_info.value.position == Position(65, 1)


def test_oversized_program_with_ends_fails():
    with pytest.raises(ProgramTooLarge):
        assemble(repeat("end", 65))


@pytest.mark.parametrize("source, error_class, position", [
    ("mystery r0 r1", UnknownOpcode, Position(1, 1)),
    ("ld r0 8", OperandOutOfRange, Position(1, 7)),
    ("ldc r0 16", OperandOutOfRange, Position(1, 8)),
    ("shf r0 r1 xyzw 16", OperandOutOfRange, Position(1, 16)),
    ("shf r0 r1 xyzq 0", InvalidSwizzle, Position(1, 11)),
    ("add r16 r0", InvalidRegister, Position(1, 5)),
    ("st out r0", InvalidOutput, Position(1, 4)),
    ("st pos 3", InvalidOperandType, Position(1, 8)),
    ("ld r0 r1", InvalidOperandType, Position(1, 7)),
    ("ld r0 -1", InvalidOperandType, Position(1, 7)),
    ("ld r0 1.0", InvalidOperandType, Position(1, 7)),
    ("7 r0 r1", InvalidOperandType, Position(1, 1)),
    ("add r0 r1\nsub r2", UnexpectedEndOfInput, Position(2, 1)),
    ("shf r0 r1 xyzw", UnexpectedEndOfInput, Position(1, 1)),
])
def test_errors(source, error_class, position):
    with pytest.raises(error_class) as exc_info:
        assemble(source)
    assert exc_info.value.position == position


def test_first_error_wins():
    # both operands are invalid; the destination is decoded first
    with pytest.raises(InvalidRegister) as exc_info:
        assemble("add r16 r99")
    assert exc_info.value.token.text == "r16"


def test_tokens_without_source_text():
    tokens = [
        Token.identifier("ld"),
        Token.identifier("r3"),
        Token.integer(np.uint8(7)),
    ]
    assert list(assemble(tokens)) == [0x00001CC0, END]


def test_subscriber_receives_every_word():
    events = []
    assemble("ld r3 7\nst pos r3", subscriber=events.append)
    assert [event.index for event in events] == [0, 1, 2]
    assert [event.mnemonic for event in events] == ["ld", "st", "end"]
    assert [event.auto_appended for event in events] == [False, False, True]
    assert events[1].position == Position(2, 1)
    assert events[2].position is None


def test_assembler_is_single_use():
    assembler = Assembler()
    assert assembler.state is AssemblerState.ACCUMULATING
    assembler.assemble([])
    assert assembler.state is AssemblerState.DONE
    with pytest.raises(RuntimeError):
        assembler.assemble([])


def test_assembler_is_single_use_after_a_failure():
    assembler = Assembler()
    with pytest.raises(InvalidRegister):
        assembler.assemble(tokenize("add r0 r1\nadd r99 r0"))
    assert assembler.state is AssemblerState.DONE
    assert assembler.words == []
    with pytest.raises(RuntimeError):
        assembler.assemble(tokenize("st pos r2"))


def test_subscriber_is_told_about_failures():
    events = []
    errors = []
    assembler = Assembler()
    assembler.subscribe(events.append, on_error=errors.append)
    with pytest.raises(OperandOutOfRange) as exc_info:
        assembler.assemble(tokenize("ld r0 0\nld r1 8"))
    assert [event.mnemonic for event in events] == ["ld"]
    assert errors == [exc_info.value]


def test_subscriber_without_error_handler():
    events = []
    with pytest.raises(UnknownOpcode):
        assemble("add r0 r1\nnop", subscriber=events.append)
    assert len(events) == 1


def test_invocations_are_independent():
    assert list(assemble("add r0 r1")) == [3 | (1 << 10), END]
    assert list(assemble("add r0 r1")) == [3 | (1 << 10), END]


def test_program_views():
    program = assemble("st pos r2")
    assert program == Program((0x801, END))
    array = program.as_array()
    assert array.dtype == np.uint32
    assert array.tolist() == [0x801, END]
    assert program.to_bytes() == b"\x01\x08\x00\x00\x3f\x00\x00\x00"


def test_full_program_policy_warn(caplog):
    with caplog.at_level(logging.WARNING):
        program = assemble(repeat("add r0 r1", 64),
                           config={"full_program_policy": "warn"})
    assert len(program) == 64
    assert "does not end with [end]" in caplog.text


def test_full_program_policy_error():
    with pytest.raises(UnterminatedProgram):
        assemble(repeat("add r0 r1", 64),
                 config={"full_program_policy": "error"})


def test_full_program_policy_error_accepts_trailing_end():
    program = assemble(repeat("add r0 r1", 63) + "\nend",
                       config={"full_program_policy": "error"})
    assert len(program) == 64


def test_full_program_policy_ignore_is_silent(caplog):
    with caplog.at_level(logging.WARNING):
        assemble(repeat("add r0 r1", 64))
    assert caplog.text == ""


def test_warn_on_code_after_end(caplog):
    with caplog.at_level(logging.WARNING):
        program = assemble("end\nadd r0 r1",
                           config={"warn_on_code_after_end": True})
    assert len(program) == 3
    assert "follows an explicit end" in caplog.text


def test_invalid_config_is_rejected():
    with pytest.raises(RuntimeError):
        assemble("", config={"full_program_policy": "sometimes"})
    with pytest.raises(RuntimeError):
        assemble("", config={"unknown_option": True})


def test_vu_config_decorator():

    @vu_config(full_program_policy="error")
    def build():
        return assemble(repeat("add r0 r1", 64))

    with pytest.raises(UnterminatedProgram):
        build()

    assert ConfigStack.depth() == 0
    assert len(assemble(repeat("add r0 r1", 64))) == 64


def test_explicit_config_overrides_vu_config():

    @vu_config(full_program_policy="error")
    def build():
        return assemble(repeat("add r0 r1", 64),
                        config={"full_program_policy": "ignore"})

    assert len(build()) == 64
