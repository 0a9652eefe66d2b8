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

from typing import Optional

from jinja2 import Environment
from jinja2.ext import Extension

from vu_asm.common.types import Integer
from vu_asm.disassembler import disassemble_word


class TemplateExtensions(Extension):

    def __init__(self: "TemplateExtensions", environment: Environment) -> None:
        super().__init__(environment)

        # Filters
        environment.filters.update({
            "hex32": self.fmt_hex32,
            "bare_hex32": self.fmt_bare_hex32,
            "mnemonic": self.fmt_mnemonic,
        })

        # Globals
        environment.globals.update({
            "emit_banner": self.emit_banner,
        })

    ## ======= ##
    ## Filters ##
    ## ======= ##

    def fmt_hex32(self: "TemplateExtensions", word: Integer) -> str:
        return f"0x{int(word):08X}"

    def fmt_bare_hex32(self: "TemplateExtensions", word: Integer) -> str:
        return f"{int(word):08X}"

    def fmt_mnemonic(self: "TemplateExtensions", word: Integer) -> str:
        return disassemble_word(word)

    ## ======= ##
    ## Globals ##
    ## ======= ##

    def emit_banner(self: "TemplateExtensions",
                    source_name: Optional[str] = None) -> str:
        if source_name is None:
            return "Generated by vu-asm. Do not edit."
        return f"Generated by vu-asm from {source_name}. Do not edit."
