import pytest

from kappa.errors import KappaArityError, KappaSyntaxError, KappaTypeError


@pytest.mark.parametrize(
    "code, expected",
    [
        ("(apply + '(1 2))", "3"),
        ("(apply cons '(1 2))", "(1 . 2)"),
        ("(apply (lambda args args) '(1 2 3))", "(1 2 3)"),
        ("(apply (lambda () 5) nil)", "5"),
        ("(apply car '((a b)))", "A"),
        ("(apply apply (cons + (cons '(3 4) nil)))", "7"),
    ],
)
def test_apply(run, code, expected):
    assert run(code) == expected


def test_apply_does_not_evaluate_list_elements_again(run):
    assert run("(apply (lambda (x) x) '((car (quote (1)))))") == "(CAR (QUOTE (1)))"


def test_apply_never_mutates_the_argument_list(run):
    run("(define args '(1 2 3))")
    run("(define (keep . xs) xs)")
    run("(define out (apply keep args))")
    assert run("(eq? out args)") == "NIL"
    assert run("args") == "(1 2 3)"


def test_apply_evaluates_both_operands(run):
    run("(define f car)")
    run("(define xs '((9)))")
    assert run("(apply f xs)") == "9"


@pytest.mark.parametrize(
    "code, error",
    [
        ("(apply)", KappaArityError),
        ("(apply car)", KappaArityError),
        ("(apply car '(1) '(2))", KappaArityError),
        ("(apply car '(1 . 2))", KappaSyntaxError),
        ("(apply car 5)", KappaSyntaxError),
        ("(apply 5 '(1))", KappaTypeError),
        ("(apply (lambda (x) x) '(1 2))", KappaArityError),
    ],
)
def test_apply_errors(interp, code, error):
    with pytest.raises(error):
        interp.eval(code)
