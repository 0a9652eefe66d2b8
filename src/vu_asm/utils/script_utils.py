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
from typing import Any, Dict, Optional

import click

from vu_asm.codegen.emitters import C_ID_PATTERN
from vu_asm.isa.types import VUAssemblyError
from vu_asm.utils.config_utils import load_config, resolve_config
from vu_asm.utils.log_utils import LogLevel

LOGGER = logging.getLogger()


class DefaultHelp(click.Command):
    """Prints the help text when a command is invoked without arguments."""

    def __init__(self, *args, **kwargs):
        context_settings = kwargs.setdefault('context_settings', {})
        if 'help_option_names' not in context_settings:
            context_settings['help_option_names'] = ['-h', '--help']
        self.help_flag = context_settings['help_option_names'][0]
        super().__init__(*args, **kwargs)

    def parse_args(self, ctx, args):
        if not args:
            args = [self.help_flag]
        return super().parse_args(ctx, args)


def collect_log_level(ctx: click.Context,
                      option: click.Option,
                      log_level: str) -> int:
    log_level = LogLevel[log_level]
    return log_level.value


def collect_config(ctx: click.Context,
                   option: click.Option,
                   config_path: Optional[str]) -> Dict[str, Any]:
    try:
        config = load_config(config_path)
    except (RuntimeError, ValueError) as error:
        message = str(error)
        if error.__cause__ is not None:
            message = f"{message}: {error.__cause__}"
        raise click.BadParameter(message) from error
    return resolve_config(config)


def collect_name(ctx: click.Context,
                 option: click.Option,
                 name: Optional[str]) -> Optional[str]:
    if name is not None and not C_ID_PATTERN.fullmatch(name):
        raise click.BadParameter(f"Not a valid array identifier: {name}")
    return name


def report_error(error: VUAssemblyError,
                 source_name: Optional[str] = None) -> None:
    diagnostic = error.describe(source_name)
    LOGGER.debug("Assembly failed: %s", diagnostic)
    click.echo(diagnostic, err=True)
