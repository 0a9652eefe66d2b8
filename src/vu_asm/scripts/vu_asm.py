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

from vu_asm.assembler import AssembledInstruction, assemble
from vu_asm.codegen.emitters import (OutputFormat, emit, format_for_path,
                                     name_for_path, write_program)
from vu_asm.disassembler import disassemble_word
from vu_asm.isa.types import VUAssemblyError
from vu_asm.utils.log_utils import LogLevel, init_logger
from vu_asm.utils.script_utils import (DefaultHelp, collect_config,
                                       collect_log_level, collect_name,
                                       report_error)

SCRIPT_NAME = "vu-asm"

LOGGER = logging.getLogger()


def print_listing(event: AssembledInstruction) -> None:
    if event.auto_appended:
        location = "auto"
    else:
        location = str(event.position)
    click.echo(f"{event.index:02d}  {event.word:08X}  "
               f"{disassemble_word(event.word):<24} ; {location}",
               err=True)


@click.command(cls=DefaultHelp)
@click.option("-o", "--output", "output_path",
              help="Path to the file to generate. [Default: stdout]",
              type=click.Path(exists=False, file_okay=True, dir_okay=False),
              required=False)
@click.option("-f", "--format", "output_format",
              help=("Type of output to generate. [Default: inferred from the "
                    "output suffix, otherwise hex]"),
              type=click.Choice(OutputFormat.values()),
              required=False)
@click.option("-n", "--name", "name",
              help=("Identifier of the generated array. [Default: derived "
                    "from the source file name]"),
              callback=collect_name,
              required=False)
@click.option("--listing/--no-listing", "listing",
              help="Whether to print an address/word/instruction listing to "
                   "stderr.",
              default=False)
@click.option("--config", "config",
              help="Specifies path to the assembler config YAML file.",
              callback=collect_config,
              required=False)
@click.option("--log-level", "log_level",
              help="Specifies the verbosity of output from the assembler.",
              type=click.Choice(LogLevel.names()),
              default=LogLevel.DEFAULT.name,
              callback=collect_log_level,
              required=False)
@click.option("--log-dir", "log_dir",
              help="Folder to hold the log files.",
              type=click.Path(file_okay=False),
              envvar="VU_ASM_LOG_DIR",
              required=False)
@click.argument("source_file",
                type=click.Path(exists=True, file_okay=True, dir_okay=False))
def main(**kwargs) -> None:
    """Assembles a VU program into an array of 32-bit instruction words.

    Example Usage:

        vu-asm shader.vu

        vu-asm shader.vu -o shader.h --name BASIC_SHADER

        vu-asm shader.vu -o shader.rs --listing"""

    global LOGGER, SCRIPT_NAME
    init_logger(LOGGER, SCRIPT_NAME,
                log_level=kwargs["log_level"],
                log_dir=kwargs["log_dir"])

    for arg, val in kwargs.items():
        LOGGER.debug("%s = %s", arg, val)

    source_file = Path(kwargs["source_file"])
    with open(source_file, "rt") as f:
        source = f.read()

    output_path = kwargs["output_path"]
    output_format = kwargs["output_format"]
    if output_format is None:
        output_format = format_for_path(output_path)

    name = kwargs["name"]
    if name is None:
        name = name_for_path(source_file)

    events = []

    try:
        program = assemble(source,
                           config=kwargs["config"],
                           subscriber=events.append)
    except VUAssemblyError as error:
        report_error(error, str(source_file))
        sys.exit(1)

    if kwargs["listing"]:
        for event in events:
            print_listing(event)

    LOGGER.info("Assembled %d words from %s", len(program), source_file)

    if output_path is not None:
        write_program(program, output_path,
                      output_format=output_format,
                      name=name,
                      source_name=source_file.name)
    else:
        rendition = emit(program, output_format,
                         name=name,
                         source_name=source_file.name)
        if isinstance(rendition, bytes):
            click.get_binary_stream("stdout").write(rendition)
        else:
            click.echo(rendition, nl=False)

    LOGGER.info("Done.")


if __name__ == "__main__":
    try:
        main()
    except Exception:
        LOGGER.exception("Failed to assemble VU program")
        sys.exit(1)
