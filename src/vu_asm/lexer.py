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

# Source text to tokens. Comments (`;`, `#` or `//` to end of line), commas
# and whitespace separate tokens and are otherwise dropped.

import logging
import re
from typing import List

from vu_asm.isa.types import InvalidToken, Position, Token, TokenKind

LOGGER = logging.getLogger(__name__)

NOT_WORD_CHAR = r"(?![A-Za-z0-9_])"

TOKEN_PATTERN = re.compile(rf"""
    (?P<comment>(?:;|\#|//)[^\n]*)
  | (?P<newline>\n)
  | (?P<space>[ \t\r\f\v,]+)
  | (?P<float>-?[0-9][0-9_]*\.[0-9][0-9_]*){NOT_WORD_CHAR}
  | (?P<integer>-?(?:0[xX]_*[0-9a-fA-F][0-9a-fA-F_]*
                   |0[oO]_*[0-7][0-7_]*
                   |0[bB]_*[01][01_]*
                   |[0-9][0-9_]*)){NOT_WORD_CHAR}
  | (?P<identifier>[A-Za-z_][A-Za-z0-9_]*)
""", re.VERBOSE)


def parse_integer(text: str) -> int:
    digits = text.replace("_", "")
    sign = 1
    if digits.startswith("-"):
        sign = -1
        digits = digits[1:]
    if digits[:2].lower() in ("0x", "0o", "0b"):
        return sign * int(digits, 0)
    # leading zeros are legal in decimal literals (e.g. `007`)
    return sign * int(digits, 10)


def tokenize(source: str) -> List[Token]:
    tokens = []
    line = 1
    line_start = 0
    offset = 0

    while offset < len(source):
        match = TOKEN_PATTERN.match(source, offset)
        if match is None:
            position = Position(line, offset - line_start + 1)
            raise InvalidToken(
                f"Unexpected character: {source[offset]!r}",
                position=position)

        position = Position(line, offset - line_start + 1)
        group = match.lastgroup
        text = match.group(group)

        if group == "newline":
            line += 1
            line_start = match.end()
        elif group == "identifier":
            tokens.append(Token.identifier(text, position))
        elif group == "integer":
            tokens.append(Token.integer(parse_integer(text), position, text))
        elif group == "float":
            value = float(text.replace("_", ""))
            tokens.append(
                Token(TokenKind.FLOAT_LITERAL, text, value, position))

        offset = match.end()

    LOGGER.debug("Tokenized %d tokens over %d lines", len(tokens), line)
    return tokens
