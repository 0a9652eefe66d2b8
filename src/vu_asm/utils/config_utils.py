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
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

import yaml

from cerberus import Validator

from vu_asm.common.stack_manager import ConfigStack
from vu_asm.isa.types import VUEnum

LOGGER = logging.getLogger()


class FullProgramPolicy(VUEnum):
    """What to do when a program fills all 64 words and the last word is not
    `end` (the hardware then runs off the end of instruction memory).

        1. IGNORE := accept silently; the default.
        2. WARN   := accept, but log a warning.
        3. ERROR  := fail with UnterminatedProgram."""

    IGNORE = "ignore"
    WARN = "warn"
    ERROR = "error"


CONFIG_SCHEMA = {
    "full_program_policy": {
        "type": "string",
        "allowed": FullProgramPolicy.values(),
    },
    "warn_on_code_after_end": {
        "type": "boolean",
    },
}

DEFAULT_CONFIG: Dict[str, Any] = {
    "full_program_policy": FullProgramPolicy.IGNORE.value,
    "warn_on_code_after_end": False,
}


def validate_config(config: Dict[str, Any]) -> None:
    if not isinstance(config, dict):
        raise RuntimeError(
            f"Expected config to be a mapping, not "
            f"{config.__class__.__name__}: {config}")
    config_validator = Validator(CONFIG_SCHEMA)
    if not config_validator.validate(config):
        error_message = \
            f"Validation failed for config: {config_validator.errors}"
        raise RuntimeError(error_message)


def load_config(config_path: Optional[Union[str, Path]]) -> Dict[str, Any]:
    if config_path is None:
        return {}

    if not isinstance(config_path, Path):
        config_path = Path(config_path)

    if not config_path.exists():
        raise ValueError(f"File not found: {config_path}")

    with open(config_path, "rt") as f:
        config = yaml.safe_load(f)

    # an empty YAML document loads as None
    if config is None:
        config = {}

    try:
        validate_config(config)
    except RuntimeError as error:
        error_message = \
            f"Validation failed for {config_path}"
        raise RuntimeError(error_message) from error

    LOGGER.debug("Loaded config from %s: %s", config_path, config)
    return config


def resolve_config(config: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """Merges, in increasing priority, the defaults, the innermost config
    pushed by `vu_config`, and the explicitly given config."""

    resolved = dict(DEFAULT_CONFIG)

    pushed = ConfigStack.peek()
    if pushed is not None:
        resolved.update(pushed)

    if config is not None:
        validate_config(config)
        resolved.update(config)

    return resolved


def vu_config(**config) -> Callable:
    """Applies the given assembler options to every assembly performed within
    the decorated function, e.g.

        @vu_config(full_program_policy="error")
        def build_shaders():
            ..."""

    validate_config(config)

    def decorator(fn: Callable) -> Callable:

        @wraps(fn)
        def wrapper(*args, **kwargs):
            ConfigStack.push(config)
            try:
                return fn(*args, **kwargs)
            finally:
                popped = ConfigStack.pop()
                assert config is popped

        return wrapper

    return decorator
