import pytest

from vu_asm.common.stack_manager import ConfigStack
from vu_asm.utils.config_utils import (DEFAULT_CONFIG, FullProgramPolicy,
                                       load_config, resolve_config,
                                       validate_config, vu_config)


def test_load_config_without_path():
    assert load_config(None) == {}


def test_load_config(tmp_path):
    config_path = tmp_path / "vu-asm.yaml"
    config_path.write_text(
        "full_program_policy: warn\n"
        "warn_on_code_after_end: true\n")
    assert load_config(config_path) == {
        "full_program_policy": "warn",
        "warn_on_code_after_end": True,
    }
    assert load_config(str(config_path))["full_program_policy"] == "warn"


def test_load_empty_config(tmp_path):
    config_path = tmp_path / "empty.yaml"
    config_path.write_text("")
    assert load_config(config_path) == {}


def test_load_missing_config(tmp_path):
    with pytest.raises(ValueError):
        load_config(tmp_path / "missing.yaml")


def test_load_invalid_config(tmp_path):
    config_path = tmp_path / "invalid.yaml"
    config_path.write_text("full_program_policy: sometimes\n")
    with pytest.raises(RuntimeError) as exc_info:
        load_config(config_path)
    assert isinstance(exc_info.value.__cause__, RuntimeError)


@pytest.mark.parametrize("config", [
    {"full_program_policy": 3},
    {"warn_on_code_after_end": "yes"},
    {"max_program_len": 128},
    ["full_program_policy"],
])
def test_validate_config_rejects(config):
    with pytest.raises(RuntimeError):
        validate_config(config)


def test_policy_values():
    assert FullProgramPolicy.values() == ["ignore", "warn", "error"]
    assert FullProgramPolicy.find_by_value("warn") is FullProgramPolicy.WARN
    with pytest.raises(ValueError):
        FullProgramPolicy.find_by_value("never")


def test_resolve_config_precedence():
    assert resolve_config() == DEFAULT_CONFIG

    @vu_config(full_program_policy="warn", warn_on_code_after_end=True)
    def resolve(config=None):
        return resolve_config(config)

    assert resolve() == {
        "full_program_policy": "warn",
        "warn_on_code_after_end": True,
    }
    assert resolve({"full_program_policy": "error"}) == {
        "full_program_policy": "error",
        "warn_on_code_after_end": True,
    }
    assert resolve_config() == DEFAULT_CONFIG


def test_vu_config_pops_on_error():

    @vu_config(warn_on_code_after_end=True)
    def explode():
        assert ConfigStack.depth() == 1
        raise KeyError("boom")

    with pytest.raises(KeyError):
        explode()
    assert ConfigStack.depth() == 0


def test_vu_config_validates_eagerly():
    with pytest.raises(RuntimeError):
        vu_config(full_program_policy="loudly")
