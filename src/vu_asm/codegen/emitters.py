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

import json
import logging
import re
from pathlib import Path
from typing import Dict, Optional, Union

from vu_asm.assembler import Program
from vu_asm.codegen.template_accessors import VUTemplateAccessor
from vu_asm.isa.types import VUEnum

LOGGER = logging.getLogger(__name__)

C_ID_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

DEFAULT_NAME = "VU_PROGRAM"


class OutputFormat(VUEnum):
    C = "c"
    RUST = "rust"
    HEX = "hex"
    JSON = "json"
    BIN = "bin"

    @property
    def is_binary(self: "OutputFormat") -> bool:
        return self is OutputFormat.BIN


FORMATS_BY_SUFFIX: Dict[str, OutputFormat] = {
    ".c": OutputFormat.C,
    ".h": OutputFormat.C,
    ".inc": OutputFormat.C,
    ".rs": OutputFormat.RUST,
    ".hex": OutputFormat.HEX,
    ".mem": OutputFormat.HEX,
    ".json": OutputFormat.JSON,
    ".bin": OutputFormat.BIN,
}


def format_for_path(path: Optional[Union[str, Path]],
                    default: OutputFormat = OutputFormat.HEX) -> OutputFormat:
    if path is None:
        return default
    return FORMATS_BY_SUFFIX.get(Path(path).suffix.lower(), default)


def name_for_path(path: Union[str, Path]) -> str:
    """Derives an array identifier from a source file name, e.g.
    `shaders/basic-lit.vu` -> `BASIC_LIT`."""
    stem = re.sub(r"[^A-Za-z0-9_]", "_", Path(path).stem).upper()
    if not C_ID_PATTERN.fullmatch(stem):
        stem = f"_{stem}"
    return stem


def emit(program: Program,
         output_format: Union[str, OutputFormat] = OutputFormat.HEX,
         name: str = DEFAULT_NAME,
         source_name: Optional[str] = None) -> Union[str, bytes]:
    """Renders an assembled program for embedding into a host build. Returns
    bytes for the binary format and text otherwise."""

    if not isinstance(output_format, OutputFormat):
        output_format = OutputFormat.find_by_value(output_format)

    if not C_ID_PATTERN.fullmatch(name):
        raise ValueError(f"Not a valid array identifier: {name}")

    LOGGER.debug("Emitting %d words as %s", len(program), output_format)

    if output_format is OutputFormat.BIN:
        return program.to_bytes()

    if output_format is OutputFormat.JSON:
        document = {"name": name, "words": list(program.words)}
        return json.dumps(document, indent=2) + "\n"

    template_accessor = VUTemplateAccessor()
    if output_format is OutputFormat.C:
        return template_accessor.emit_c_array(name=name,
                                              words=program.words,
                                              source_name=source_name)
    if output_format is OutputFormat.RUST:
        return template_accessor.emit_rust_array(name=name,
                                                 words=program.words,
                                                 source_name=source_name)
    return template_accessor.emit_hex_image(words=program.words,
                                            source_name=source_name)


def write_program(program: Program,
                  output_path: Union[str, Path],
                  output_format: Optional[Union[str, OutputFormat]] = None,
                  name: str = DEFAULT_NAME,
                  source_name: Optional[str] = None) -> Path:
    if not isinstance(output_path, Path):
        output_path = Path(output_path)

    if output_format is None:
        output_format = format_for_path(output_path)

    rendition = emit(program, output_format, name=name,
                     source_name=source_name)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    if isinstance(rendition, bytes):
        with open(output_path, "wb") as f:
            f.write(rendition)
    else:
        with open(output_path, "wt") as f:
            f.write(rendition)

    LOGGER.info("Wrote %d words to %s", len(program), output_path)
    return output_path
