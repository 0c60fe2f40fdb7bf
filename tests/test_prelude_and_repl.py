import logging
import sys

import pytest

from mallet import config
from mallet import repl
from mallet.errors import MalletIOError
from mallet.interpreter import Interpreter
from mallet.types.nil import Nil
from mallet.types.symbol import Symbol


# -------------------------------
# Prelude
# -------------------------------
@pytest.mark.parametrize(
    "source, expected",
    [
        ("(not true)", False),
        ("(not nil)", True),
        ("(not 0)", False),
    ]
)
def test_not(interp, source, expected):
    assert interp.eval(source) is expected


def test_interpreter_without_prelude():
    interp = Interpreter(prelude=None)
    assert interp.env.get(Symbol("not")) is None
    assert interp.eval("(+ 1 1)") == 2


def test_custom_prelude_text():
    interp = Interpreter(prelude="(def! answer 42) (def! twice (fn* (x) (* 2 x)))")
    assert interp.eval("(twice answer)") == 84


def test_prelude_path_from_environment(monkeypatch, tmp_path):
    (tmp_path / config.PRELUDE_FILE).write_text("(def! from-env :yes)", encoding="utf-8")
    monkeypatch.setenv("MALLET_PRELUDE_PATH", str(tmp_path))
    assert config.get_prelude_file() == tmp_path / config.PRELUDE_FILE
    interp = Interpreter()
    assert interp.rep("from-env") == ":yes"


def test_prelude_path_may_name_the_file(monkeypatch, tmp_path):
    prelude = tmp_path / config.PRELUDE_FILE
    prelude.write_text("nil", encoding="utf-8")
    monkeypatch.setenv("MALLET_PRELUDE_PATH", str(prelude))
    assert config.get_prelude_root() == tmp_path


def test_default_prelude_ships_with_package(monkeypatch):
    monkeypatch.delenv("MALLET_PRELUDE_PATH", raising=False)
    assert config.get_prelude_file().is_file()


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, logging.WARNING),
        ("debug", logging.DEBUG),
        ("INFO", logging.INFO),
        ("not-a-level", logging.WARNING),
    ]
)
def test_log_level_from_environment(monkeypatch, value, expected):
    if value is None:
        monkeypatch.delenv("MALLET_LOG_LEVEL", raising=False)
    else:
        monkeypatch.setenv("MALLET_LOG_LEVEL", value)
    assert config.get_log_level() == expected


# -------------------------------
# load-file
# -------------------------------
def test_load_file(interp, tmp_path):
    source = tmp_path / "lib.mal"
    source.write_text(
        ";; helpers\n"
        "(def! inc (fn* (x) (+ x 1)))\n"
        "(def! two (inc 1))\n",
        encoding="utf-8",
    )
    assert interp.eval(f'(load-file "{source}")') is Nil
    assert interp.eval("two") == 2
    assert interp.eval("(inc 10)") == 11


def test_load_file_ending_in_comment(interp, tmp_path):
    source = tmp_path / "lib.mal"
    source.write_text("(def! z 3) ; trailing comment", encoding="utf-8")
    interp.eval(f'(load-file "{source}")')
    assert interp.eval("z") == 3


def test_load_missing_file(interp, tmp_path):
    with pytest.raises(MalletIOError):
        interp.eval(f'(load-file "{tmp_path / "nope.mal"}")')


# -------------------------------
# REPL and command line
# -------------------------------
def _feed(monkeypatch, lines):
    it = iter(lines)

    def fake_input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    monkeypatch.setattr("builtins.input", fake_input)


def test_repl_session(monkeypatch, capsys):
    _feed(monkeypatch, ["(def! x 5)", "", "(+ x 1)", "(undefined)", '"done"'])
    assert repl.repl(Interpreter()) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "5"
    assert out[1] == "6"
    assert out[2].startswith("Error: ")
    assert "undefined" in out[2]
    assert out[3] == '"done"'


def test_repl_survives_reader_errors(monkeypatch, capsys):
    _feed(monkeypatch, ["(1 2", "(+ 1 2)"])
    assert repl.repl(Interpreter()) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("Error: ")
    assert out[1] == "3"


def test_repl_survives_runaway_recursion(monkeypatch, capsys):
    _feed(monkeypatch, ["(def! f (fn* (n) (+ 1 (f n))))", "(f 1)", "(+ 1 2)"])
    assert repl.repl(Interpreter()) == 0
    out = capsys.readouterr().out.splitlines()
    assert out[0] == "#<function>"
    assert out[1].startswith("Error: stack overflow")
    assert out[2] == "3"


def test_main_raises_recursion_limit(monkeypatch, tmp_path):
    calls = []
    monkeypatch.setattr(sys, "setrecursionlimit", calls.append)
    script = tmp_path / "empty.mal"
    script.write_text("nil", encoding="utf-8")
    assert repl.main([str(script)]) == 0
    assert calls and calls[0] >= repl.RECURSION_LIMIT


def test_main_runs_script_with_argv(tmp_path, capsys):
    script = tmp_path / "main.mal"
    script.write_text("(prn *ARGV*)\n(println (count *ARGV*))", encoding="utf-8")
    assert repl.main([str(script), "a", "b"]) == 0
    assert capsys.readouterr().out == '("a" "b")\n2\n'


def test_main_reports_script_errors(tmp_path, capsys):
    script = tmp_path / "bad.mal"
    script.write_text('(throw "bad")', encoding="utf-8")
    assert repl.main([str(script)]) == 1
    assert 'uncaught exception: "bad"' in capsys.readouterr().err


def test_main_binds_empty_argv_for_repl(monkeypatch, capsys):
    _feed(monkeypatch, ["*ARGV*"])
    assert repl.main([]) == 0
    assert "()" in capsys.readouterr().out
