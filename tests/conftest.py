import logging

import pytest

from vu_asm.common.stack_manager import ConfigStack
from vu_asm.utils.log_utils import remove_handlers


@pytest.fixture(autouse=True)
def reset_logging_and_config():
    yield
    # CLI tests install handlers bound to CliRunner's streams
    remove_handlers(logging.getLogger())
    while ConfigStack.depth() > 0:
        ConfigStack.pop()


@pytest.fixture
def write_source(tmp_path):

    def writer(text, name="shader.vu"):
        path = tmp_path / name
        path.write_text(text)
        return path

    return writer
