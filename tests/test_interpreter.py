import io
import sys

import pytest

from lispy.interpreter import Interpreter, MAX_DEPTH_MESSAGE
from lispy.repl import repl, run_files, main, enable_line_editing, BANNER
from lispy.types.errors import LispySyntaxError
from lispy.types.value import Number, SExpr
from lispy import config


def test_eval_and_run(interp):
    assert interp.eval("(+ 1 2 3)") == Number(6)
    assert interp.run("(- 5)") == "-5"
    assert interp.run("") == "()"


def test_definitions_persist_across_calls(interp):
    interp.run("(def {x} 10)")
    assert interp.run("(* x x)") == "100"


def test_eval_combines_top_level_expressions(interp):
    # the whole line reads as one S-expression
    assert interp.run("+ 1 2") == "3"
    assert interp.run("1 2") == "Error: S-expression does not start with a function"


def test_eval_all_evaluates_each_expression(interp):
    results = interp.eval_all("(def {x} 2) (* x 21) (/ 1 0)")
    assert [str(r) for r in results] == ["()", "42", "Error: division by zero"]


def test_syntax_error_propagates(interp):
    with pytest.raises(LispySyntaxError):
        interp.eval("(+ 1")


def test_prelude_string():
    interp = Interpreter(prelude="(def {one two} 1 2)")
    assert interp.run("(+ one two)") == "3"


def test_prelude_from_environment(tmp_path, monkeypatch):
    prelude = tmp_path / "prelude.lspy"
    prelude.write_text("(def {answer} 42)\n")
    monkeypatch.setenv("LISPY_PRELUDE_PATH", str(prelude))
    assert Interpreter().run("answer") == "42"
    assert Interpreter(prelude=None).run("answer") == "Error: unbound symbol: answer"


def test_load_file(interp, tmp_path):
    path = tmp_path / "prog.lspy"
    path.write_text("(def {xs} {1 2 3})\n(len xs)\n")
    assert interp.load_file(path) == [SExpr(), Number(3)]


def test_config(monkeypatch, tmp_path):
    assert config.get_prompt() == config.DEFAULT_PROMPT
    assert config.get_prelude_path() is None
    monkeypatch.setenv("LISPY_PROMPT", ">> ")
    monkeypatch.setenv("LISPY_PRELUDE_PATH", f"  {tmp_path}  ")
    assert config.get_prompt() == ">> "
    assert config.get_prelude_path() == tmp_path
    monkeypatch.setenv("LISPY_PRELUDE_PATH", "   ")
    assert config.get_prelude_path() is None


def _lines(*lines):
    it = iter(lines)

    def read_line(prompt):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return read_line


def test_repl_session(interp):
    out = io.StringIO()
    repl(
        interp,
        "lispy> ",
        read_line=_lines("(+ 1 2 3)", "", "(head {})", "(+ 1", "(def {x} 4)", "x"),
        out=out,
    )
    lines = out.getvalue().splitlines()
    assert out.getvalue().startswith(BANNER)
    assert "6" in lines
    assert "Error: head: empty list" in lines
    assert any("end of input" in line for line in lines)
    assert lines[-3:] == ["()", "4", ""]


def test_repl_stops_on_interrupt(interp):
    def read_line(prompt):
        raise KeyboardInterrupt

    out = io.StringIO()
    repl(interp, "lispy> ", read_line=read_line, out=out)
    assert out.getvalue() == BANNER + "\n\n"


def test_repl_shows_parse_tree(interp):
    out = io.StringIO()
    repl(interp, "lispy> ", show_ast=True, read_line=_lines("(+ 1)"), out=out)
    text = out.getvalue()
    assert "symbol '+'" in text
    assert "number '1'" in text


def test_run_files(interp, tmp_path):
    path = tmp_path / "prog.lspy"
    path.write_text("(def {x} 2)\n(* x 21)\n(head {})\n")
    out = io.StringIO()
    assert run_files(interp, [str(path)], out=out) == 0
    assert out.getvalue().splitlines() == ["42", "Error: head: empty list"]


def test_run_files_syntax_error(interp, tmp_path, capsys):
    path = tmp_path / "bad.lspy"
    path.write_text("(+ 1\n")
    assert run_files(interp, [str(path)]) == 1
    assert str(path) in capsys.readouterr().err


def test_main_with_files(tmp_path, capsys):
    first = tmp_path / "a.lspy"
    second = tmp_path / "b.lspy"
    first.write_text("(def {x} 5)")
    second.write_text("(+ x 1)")
    assert main(["--no-prelude", str(first), str(second)]) == 0
    assert capsys.readouterr().out == "6\n"


def test_repl_survives_deeply_nested_line(interp):
    depth = sys.getrecursionlimit() * 2
    out = io.StringIO()
    repl(
        interp,
        "lispy> ",
        read_line=_lines("(" * depth + "1" + ")" * depth, "(+ 1 2)"),
        out=out,
    )
    lines = out.getvalue().splitlines()
    assert f"Error: {MAX_DEPTH_MESSAGE}" in lines
    assert lines[-2] == "3"


def test_repl_shows_deep_parse_tree(interp):
    depth = sys.getrecursionlimit() * 2
    out = io.StringIO()
    repl(interp, "lispy> ", show_ast=True, read_line=_lines("{" * depth + "}" * depth), out=out)
    assert "{" * depth + "}" * depth in out.getvalue().splitlines()


def test_run_files_with_deep_expression(interp, tmp_path):
    depth = sys.getrecursionlimit() * 2
    path = tmp_path / "deep.lspy"
    path.write_text("(" * depth + "1" + ")" * depth + "\n(+ 2 2)\n")
    out = io.StringIO()
    assert run_files(interp, [str(path)], out=out) == 0
    assert out.getvalue().splitlines() == [f"Error: {MAX_DEPTH_MESSAGE}", "4"]


def test_history_config(monkeypatch, tmp_path):
    monkeypatch.setenv("HOME", str(tmp_path))
    assert config.get_history_path() == tmp_path / config.DEFAULT_HISTORY_FILE
    monkeypatch.setenv("LISPY_HISTORY_FILE", str(tmp_path / "hist"))
    assert config.get_history_path() == tmp_path / "hist"
    monkeypatch.setenv("LISPY_HISTORY_FILE", "")
    assert config.get_history_path() is None


def test_line_editing_without_history_file():
    pytest.importorskip("readline")
    assert enable_line_editing(None) is None


def test_history_saved_and_reloaded(tmp_path):
    readline = pytest.importorskip("readline")
    path = tmp_path / "history"
    readline.clear_history()
    try:
        readline.add_history("(+ 1 2)")
        save_history = enable_line_editing(path)
        save_history()
        assert path.exists()

        readline.clear_history()
        enable_line_editing(path)
        last = readline.get_current_history_length()
        assert readline.get_history_item(last) == "(+ 1 2)"
    finally:
        readline.clear_history()


def test_main_interactive_session(monkeypatch, capsys):
    monkeypatch.setattr(sys, "stdin", io.StringIO("(+ 1 2)\n(head {})\n"))
    assert main(["--no-prelude", "--no-history"]) == 0
    out = capsys.readouterr().out
    assert out.startswith(BANNER)
    assert "lispy> 3\n" in out
    assert "lispy> Error: head: empty list\n" in out


def test_main_writes_history_file(monkeypatch, capsys, tmp_path):
    readline = pytest.importorskip("readline")
    history = tmp_path / "history"
    monkeypatch.setenv("LISPY_HISTORY_FILE", str(history))
    monkeypatch.setattr(sys, "stdin", io.StringIO("(+ 1 2)\n"))
    try:
        assert main(["--no-prelude"]) == 0
    finally:
        readline.clear_history()
    assert history.exists()
