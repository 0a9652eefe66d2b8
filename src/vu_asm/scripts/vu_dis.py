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
import logging.handlers
import sys
from pathlib import Path

import click

from vu_asm.disassembler import InputFormat, disassemble, read_words
from vu_asm.isa.types import VUAssemblyError
from vu_asm.utils.log_utils import LogLevel, init_logger
from vu_asm.utils.script_utils import (DefaultHelp, collect_log_level,
                                       report_error)

SCRIPT_NAME = "vu-dis"

LOGGER = logging.getLogger()


@click.command(cls=DefaultHelp)
@click.option("-i", "--input-format", "input_format",
              help=("Encoding of the input file. [Default: bin for *.bin, "
                    "otherwise hex]"),
              type=click.Choice(InputFormat.values()),
              required=False)
@click.option("-o", "--output", "output_path",
              help="Path to the source file to generate. [Default: stdout]",
              type=click.Path(exists=False, file_okay=True, dir_okay=False),
              required=False)
@click.option("--strip-terminator/--keep-terminator", "strip_terminator",
              help=("Whether to drop the trailing end word, which the "
                    "assembler appends again. [Default: strip]"),
              default=True)
@click.option("--log-level", "log_level",
              help="Specifies the verbosity of output from the disassembler.",
              type=click.Choice(LogLevel.names()),
              default=LogLevel.DEFAULT.name,
              callback=collect_log_level,
              required=False)
@click.option("--log-dir", "log_dir",
              help="Folder to hold the log files.",
              type=click.Path(file_okay=False),
              envvar="VU_ASM_LOG_DIR",
              required=False)
@click.argument("input_file",
                type=click.Path(exists=True, file_okay=True, dir_okay=False))
def main(**kwargs) -> None:
    """Disassembles VU instruction words back into VU assembly.

    Example Usage:

        vu-dis shader.hex

        vu-dis shader.bin -o shader.vu"""

    global LOGGER, SCRIPT_NAME
    init_logger(LOGGER, SCRIPT_NAME,
                log_level=kwargs["log_level"],
                log_dir=kwargs["log_dir"])

    for arg, val in kwargs.items():
        LOGGER.debug("%s = %s", arg, val)

    input_file = Path(kwargs["input_file"])

    input_format = kwargs["input_format"]
    if input_format is None:
        input_format = "bin" if input_file.suffix.lower() == ".bin" else "hex"
    input_format = InputFormat.find_by_value(input_format)

    try:
        words = read_words(input_file, input_format)
        lines = disassemble(words,
                            strip_terminator=kwargs["strip_terminator"])
    except ValueError as error:
        click.echo(f"{input_file}: {error}", err=True)
        sys.exit(1)
    except VUAssemblyError as error:
        report_error(error, str(input_file))
        sys.exit(1)

    source = "".join(f"{line}\n" for line in lines)

    output_path = kwargs["output_path"]
    if output_path is None:
        click.echo(source, nl=False)
    else:
        with open(output_path, "wt") as f:
            f.write(source)
        LOGGER.info("Wrote %d instructions to %s", len(lines), output_path)

    LOGGER.info("Done.")


if __name__ == "__main__":
    try:
        main()
    except Exception:
        LOGGER.exception("Failed to disassemble VU program")
        sys.exit(1)
