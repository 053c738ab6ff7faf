"""Command line runner tests."""

from azalea.cli import main


def run_cli(tmp_path, *args):
    return main([*args, "--workspace", str(tmp_path)])


def test_eval_prints_output_and_result(tmp_path, clean_env, capsys) -> None:
    assert run_cli(tmp_path, "-e", 'say "hi"') == 0
    assert capsys.readouterr().out == "hi\nhi\n"


def test_void_result_is_not_printed(tmp_path, clean_env, capsys) -> None:
    assert run_cli(tmp_path, "-e", "mystery") == 0
    assert capsys.readouterr().out == ""


def test_runs_a_source_file(tmp_path, clean_env, capsys) -> None:
    program = tmp_path / "count.az"
    program.write_text("loop 2 do say step end\n", encoding="utf-8")
    assert run_cli(tmp_path, str(program)) == 0
    assert capsys.readouterr().out == "0\n1\n1\n"


def test_missing_file(tmp_path, clean_env, capsys) -> None:
    assert run_cli(tmp_path, str(tmp_path / "missing.az")) == 1
    assert "Cannot open file" in capsys.readouterr().err


def test_module_option_registers_reference_module(tmp_path, clean_env, capsys) -> None:
    assert run_cli(tmp_path, "-e", 'call net get "u"', "--module", "net") == 0
    assert capsys.readouterr().out == "GET u\n"


def test_unknown_module_option_fails(tmp_path, clean_env, capsys) -> None:
    assert run_cli(tmp_path, "-e", "say 1", "--module", "db") == 1
    assert "unknown modules db" in capsys.readouterr().err


def test_invalid_config_file_fails(tmp_path, clean_env, capsys) -> None:
    (tmp_path / "azalea.toml").write_text("[interpreter]\nmax_call_depth = 0\n", encoding="utf-8")
    assert run_cli(tmp_path, "-e", "say 1") == 1
    assert "AZ_CONFIG" in capsys.readouterr().err
