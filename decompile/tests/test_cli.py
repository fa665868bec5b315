import logging

from click.testing import CliRunner

from moonlit import cli
from undump.dump import dump
from undump.number import LNumber
from undump.objects import LString
from undump.prototype import Prototype


def test_literal_command():
    result = CliRunner().invoke(cli, ["literal", 'say "hi"\t€'])
    assert result.exit_code == 0
    assert result.stdout_bytes == b'"say \\"hi\\"\\t\xe2\x82\xac"\n'


def sample_file(tmp_path):
    proto = Prototype(
        source_name="@t.lua",
        line_defined=0,
        last_line_defined=0,
        num_upvalues=0,
        num_parameters=0,
        is_vararg=2,
        max_stack_size=2,
        constants=[LString(b"x"), LNumber(1.5)],
    )
    path = tmp_path / "t.luac"
    path.write_bytes(dump(proto))
    return path


def test_constants_command(tmp_path):
    path = sample_file(tmp_path)
    result = CliRunner().invoke(cli, ["constants", str(path)])
    assert result.exit_code == 0
    assert '1       "x" [ident]' in result.output
    assert "2       1.5" in result.output


def test_constants_command_bad_file(tmp_path):
    path = tmp_path / "t.luac"
    path.write_bytes(b"not bytecode")

    result = CliRunner().invoke(cli, ["constants", str(path)])
    assert result.exit_code == 1
    assert "Not a luac file" in result.output


def test_constants_command_with_header(tmp_path, caplog):
    caplog.set_level(logging.INFO)
    path = sample_file(tmp_path)

    result = CliRunner().invoke(cli, ["-v", "constants", "--header", str(path)])
    assert result.exit_code == 0
    assert "Lua bytecode executable, version 5.1" in caplog.text
    assert '1       "x" [ident]' in result.output
