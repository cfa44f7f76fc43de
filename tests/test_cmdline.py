import io

import pytest

from kappa.cmdline import main, repl, report, PROMPT
from kappa.interpreter import Interpreter


def test_eval_option_prints_results(capsys):
    assert main(["--no-prelude", "-e", "(cons 1 2)", "-e", "'a"]) == 0
    assert capsys.readouterr().out == "(1 . 2)\nA\n"


def test_eval_option_with_prelude(capsys):
    assert main(["-e", "(list 1 2 3)"]) == 0
    assert capsys.readouterr().out == "(1 2 3)\n"


def test_failures_are_reported_and_set_exit_status(capsys):
    assert main(["--no-prelude", "-e", "(car nil) 7"]) == 1
    out = capsys.readouterr().out.splitlines()
    assert out[0].startswith("error: ")
    assert out[1] == "\t(CAR NIL)"
    assert out[2] == "7"


def test_files_are_loaded_in_order(tmp_path, capsys):
    first = tmp_path / "a.lisp"
    second = tmp_path / "b.lisp"
    first.write_text("(define x 20)", encoding="utf-8")
    second.write_text("(+ x 22)", encoding="utf-8")
    assert main(["--no-prelude", str(first), str(second)]) == 0
    assert capsys.readouterr().out == "X\n42\n"


def test_missing_file(tmp_path, capsys):
    assert main(["--no-prelude", str(tmp_path / "nope.lisp")]) == 1
    assert "cannot read" in capsys.readouterr().err


def test_version(capsys):
    with pytest.raises(SystemExit):
        main(["--version"])
    assert "kappa" in capsys.readouterr().out


def test_report_counts_failures():
    out = io.StringIO()
    itp = Interpreter()
    assert report(itp.load("1 nope 2 undefined"), out) == 2


def test_repl_session():
    itp = Interpreter()
    stdin = io.StringIO("(define (sq x) (* x x))\n\n(sq 5)\n(car nil)\n")
    out = io.StringIO()
    repl(itp, stdin, out)
    text = out.getvalue()
    assert text.count(PROMPT) == 5
    assert "SQ\n" in text
    assert "25\n" in text
    assert "error: " in text
    assert text.endswith("\n")
