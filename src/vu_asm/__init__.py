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

from vu_asm.assembler import (AssembledInstruction, Assembler, Program,
                              assemble)
from vu_asm.codegen.emitters import OutputFormat, emit, write_program
from vu_asm.disassembler import disassemble, disassemble_word
from vu_asm.isa.encoders import decode_word, encode_fields, encode_instruction
from vu_asm.isa.types import (Instruction, InvalidOperandType, InvalidOutput,
                              InvalidRegister, InvalidSwizzle, InvalidToken,
                              Opcode, OperandOutOfRange, OutputSlot,
                              ProgramTooLarge, Register, Token,
                              UnexpectedEndOfInput, UnknownOpcode,
                              UnterminatedProgram, VUAssemblyError)
from vu_asm.lexer import tokenize
from vu_asm.utils.config_utils import vu_config

__version__ = "0.1.0"
