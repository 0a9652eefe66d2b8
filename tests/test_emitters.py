import json

import pytest

from vu_asm.assembler import assemble
from vu_asm.codegen.emitters import (OutputFormat, emit, format_for_path,
                                     name_for_path, write_program)
from vu_asm.disassembler import read_words


@pytest.fixture
def program():
    return assemble("ld r3 7\nst pos r3")


def test_emit_c(program):
    rendition = emit(program, "c", name="SHADER", source_name="shader.vu")
    assert "Generated by vu-asm from shader.vu" in rendition
    assert "#include <stdint.h>" in rendition
    assert "#define SHADER_LEN 3" in rendition
    assert "static const uint32_t SHADER[SHADER_LEN] = {" in rendition
    assert "    0x00001CC0,  /* ld r3 7 */\n" in rendition
    assert "    0x0000003F,  /* end */\n};\n" in rendition


def test_emit_rust(program):
    rendition = emit(program, OutputFormat.RUST, name="SHADER")
    assert "pub const SHADER: [u32; 3] = [" in rendition
    assert "    0x00000C01, // st pos r3\n" in rendition
    assert rendition.endswith("];\n")


def test_emit_hex(program, tmp_path):
    rendition = emit(program, "hex")
    lines = rendition.splitlines()
    assert lines[0].startswith("//")
    assert lines[1:] == ["00001CC0", "00000C01", "0000003F"]

    path = tmp_path / "program.hex"
    path.write_text(rendition)
    assert read_words(path) == list(program)


def test_emit_json(program):
    document = json.loads(emit(program, "json", name="SHADER"))
    assert document == {"name": "SHADER", "words": [0x1CC0, 0xC01, 0x3F]}


def test_emit_bin(program):
    rendition = emit(program, "bin")
    assert isinstance(rendition, bytes)
    assert rendition == program.to_bytes()
    assert len(rendition) == 12


def test_emit_rejects_bad_names_and_formats(program):
    with pytest.raises(ValueError):
        emit(program, "c", name="not-an-identifier")
    with pytest.raises(ValueError):
        emit(program, "verilog")


@pytest.mark.parametrize("path, output_format", [
    ("out.h", OutputFormat.C),
    ("out.c", OutputFormat.C),
    ("out.rs", OutputFormat.RUST),
    ("out.mem", OutputFormat.HEX),
    ("out.json", OutputFormat.JSON),
    ("out.bin", OutputFormat.BIN),
    ("out.txt", OutputFormat.HEX),
    (None, OutputFormat.HEX),
])
def test_format_for_path(path, output_format):
    assert format_for_path(path) is output_format


@pytest.mark.parametrize("path, name", [
    ("shaders/basic-lit.vu", "BASIC_LIT"),
    ("skin.vu", "SKIN"),
    ("2d.vu", "_2D"),
])
def test_name_for_path(path, name):
    assert name_for_path(path) == name


def test_write_program_infers_format(program, tmp_path):
    path = write_program(program, tmp_path / "nested" / "shader.bin")
    assert path.read_bytes() == program.to_bytes()

    path = write_program(program, tmp_path / "shader.rs", name="SHADER")
    assert "pub const SHADER" in path.read_text()
