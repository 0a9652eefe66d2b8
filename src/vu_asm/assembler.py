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
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass, field
from typing import (Any, Callable, Dict, Iterable, Iterator, List, NamedTuple,
                    Optional, Sequence, Tuple, Union)

import numpy as np
from reactivex.subject import Subject

from vu_asm.common.constants import (END_OPCODE, MAX_PROGRAM_LEN,
                                     OPCODE_MASK, TERMINATOR_WORD)
from vu_asm.common.types import Word
from vu_asm.isa.encoders import encode_instruction, encode_terminator
from vu_asm.isa.instruction_table import InstructionSpec, lookup_mnemonic
from vu_asm.isa.operands import decode_operand
from vu_asm.isa.types import (Instruction, Opcode, Position, ProgramTooLarge,
                              Token, UnexpectedEndOfInput,
                              UnterminatedProgram, VUAssemblyError,
                              VUEnum)
from vu_asm.lexer import tokenize
from vu_asm.utils.config_utils import FullProgramPolicy, resolve_config

LOGGER = logging.getLogger(__name__)


class AssemblerState(VUEnum):
    ACCUMULATING = "Accumulating"
    DONE = "Done"


class AssembledInstruction(NamedTuple):
    """Published to subscribers once per word appended to the program.

    Parameters:
        index: position of the word within the program.
        mnemonic: mnemonic of the instruction the word encodes.
        word: the encoded instruction.
        position: source position of the mnemonic, or None for the
                  automatically appended terminator.
        auto_appended: whether the assembler, not the source, produced the
                       word."""

    index: int
    mnemonic: str
    word: Word
    position: Optional[Position] = None
    auto_appended: bool = False


Subscriber = Callable[[AssembledInstruction], None]
ErrorHandler = Callable[[Exception], None]


def log_abort(error: Exception) -> None:
    LOGGER.debug("Assembly aborted: %s", error)


@dataclass(frozen=True)
class Program(SequenceABC):
    """An assembled VU program: at most 64 encoded words, in source order."""

    words: Tuple[Word, ...]

    def __getitem__(self: "Program", index: Any) -> Any:
        return self.words[index]

    def __len__(self: "Program") -> int:
        return len(self.words)

    @property
    def is_terminated(self: "Program") -> bool:
        return len(self.words) > 0 \
            and self.words[-1] & OPCODE_MASK == END_OPCODE

    def as_array(self: "Program") -> np.ndarray:
        return np.array(self.words, dtype=np.uint32)

    def to_bytes(self: "Program") -> bytes:
        return self.as_array().astype("<u4").tobytes()


Source = Union[str, Iterable[Token]]


@dataclass
class Assembler:
    """Assembles one program. The assembler starts out ACCUMULATING and moves
    to DONE once `assemble` returns or fails; a DONE assembler may not be
    reused. Subscribers see either every word followed by completion, or the
    error that aborted the assembly."""

    config: Optional[Dict[str, Any]] = None
    words: List[Word] = field(default_factory=list)
    state: AssemblerState = AssemblerState.ACCUMULATING
    subject: Subject = field(default_factory=Subject)

    # mnemonic of the most recent source instruction
    last_mnemonic: Optional[str] = None

    # mnemonic token of the first instruction beyond the size ceiling
    overflow_token: Optional[Token] = None

    def __post_init__(self: "Assembler") -> None:
        self.config = resolve_config(self.config)

    def subscribe(self: "Assembler",
                  subscriber: Subscriber,
                  on_error: Optional[ErrorHandler] = None) -> None:
        if on_error is None:
            on_error = log_abort
        self.subject.subscribe(on_next=subscriber, on_error=on_error)

    def assemble(self: "Assembler", tokens: Iterable[Token]) -> Program:
        if self.state is AssemblerState.DONE:
            raise RuntimeError("Assembler has already produced its program")

        try:
            tokens = iter(tokens)
            for mnemonic_token in tokens:
                self.assemble_instruction(mnemonic_token, tokens)
            self.terminate()
        except VUAssemblyError as error:
            # a failed assembly produces no words
            self.words.clear()
            self.subject.on_error(error)
            raise
        finally:
            self.state = AssemblerState.DONE

        self.subject.on_completed()
        LOGGER.debug("Assembled %d words", len(self.words))
        return Program(tuple(self.words))

    def assemble_instruction(self: "Assembler",
                             mnemonic_token: Token,
                             tokens: Iterator[Token]) -> Word:
        spec = lookup_mnemonic(mnemonic_token)

        if self.last_mnemonic == Opcode.END.mnemonic \
           and self.config["warn_on_code_after_end"]:
            LOGGER.warning(
                "%s: instruction [%s] follows an explicit end and will never "
                "execute", mnemonic_token.position, spec.mnemonic)

        fields = {}
        for operand in spec.operands:
            operand_token = self.next_operand(spec, operand.kind.value,
                                              mnemonic_token, tokens)
            fields[operand.field] = decode_operand(operand.kind, operand_token)

        if spec.opcode is Opcode.END:
            word = encode_terminator()
        else:
            instruction = Instruction(opcode=spec.opcode, **fields)
            word = encode_instruction(instruction)

        if len(self.words) == MAX_PROGRAM_LEN:
            self.overflow_token = mnemonic_token

        self.append(word, spec.mnemonic, mnemonic_token.position)
        self.last_mnemonic = spec.mnemonic
        return word

    def next_operand(self: "Assembler",
                     spec: InstructionSpec,
                     what: str,
                     mnemonic_token: Token,
                     tokens: Iterator[Token]) -> Token:
        operand_token = next(tokens, None)
        if operand_token is None:
            raise UnexpectedEndOfInput(
                f"Expected {what} operand for [{spec.mnemonic}] but the "
                f"input ended",
                token=mnemonic_token)
        return operand_token

    def append(self: "Assembler",
               word: Word,
               mnemonic: str,
               position: Optional[Position],
               auto_appended: bool = False) -> None:
        self.words.append(word)
        event = AssembledInstruction(index=len(self.words) - 1,
                                     mnemonic=mnemonic,
                                     word=word,
                                     position=position,
                                     auto_appended=auto_appended)
        LOGGER.debug("[%02d] 0x%08X %s", event.index, word, mnemonic)
        self.subject.on_next(event)

    def terminate(self: "Assembler") -> None:
        num_words = len(self.words)

        if num_words < MAX_PROGRAM_LEN:
            # appended even when the source already ends with `end`
            self.append(TERMINATOR_WORD, Opcode.END.mnemonic, None,
                        auto_appended=True)

        elif num_words > MAX_PROGRAM_LEN:
            raise ProgramTooLarge(
                f"Program too large (must be no more than {MAX_PROGRAM_LEN} "
                f"instructions, found {num_words})",
                token=self.overflow_token)

        elif self.words[-1] & OPCODE_MASK != END_OPCODE:
            self.check_unterminated()

    def check_unterminated(self: "Assembler") -> None:
        policy = FullProgramPolicy.find_by_value(
            self.config["full_program_policy"])

        message = (f"Program fills all {MAX_PROGRAM_LEN} instructions and "
                   f"does not end with [end]")

        if policy is FullProgramPolicy.ERROR:
            raise UnterminatedProgram(message)

        if policy is FullProgramPolicy.WARN:
            LOGGER.warning(message)


def as_tokens(source: Source) -> Sequence[Token]:
    if isinstance(source, str):
        return tokenize(source)
    return source


def assemble(source: Source,
             config: Optional[Dict[str, Any]] = None,
             subscriber: Optional[Subscriber] = None) -> Program:
    """Assembles VU source text (or an already tokenized program) into a
    Program of at most 64 words, appending the terminator when there is room.

    Parameters:
        source: either VU assembly text or a sequence of Tokens.
        config: (optional) assembler options overriding the defaults and any
                options pushed with `vu_config`.
        subscriber: (optional) callback receiving an AssembledInstruction per
                    word.

    Returns:
        The assembled Program."""

    tokens = as_tokens(source)
    assembler = Assembler(config=config)
    if subscriber is not None:
        assembler.subscribe(subscriber)
    return assembler.assemble(tokens)
