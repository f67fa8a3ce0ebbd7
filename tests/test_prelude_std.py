import pytest

from lwhlisp.errors import LispTypeError
from lwhlisp.reader.parser import read_one
from lwhlisp.types.nil import Nil
from lwhlisp.types.symbol import Symbol
from conftest import last


@pytest.mark.parametrize(
    "code, expected",
    [
        ("(list)", "nil"),
        ("(list 1 2 3)", "(1 2 3)"),
        ("(not nil)", "t"),
        ("(not 1)", "nil"),
        ("(null? '())", "t"),
        ("(cadr '(1 2 3))", "2"),
        ("(cddr '(1 2 3))", "(3)"),
        ("(map (lambda (x) (* x x)) '(1 2 3))", "(1 4 9)"),
        ("(filter (lambda (x) (> x 1)) '(1 2 3))", "(2 3)"),
        ("(foldl - 10 '(1 2))", "7"),
        ("(foldr cons nil '(1 2))", "(1 2)"),
        ("(reverse '(1 2 3))", "(3 2 1)"),
        ("(append)", "nil"),
        ("(append '(1) '(2 3) '(4))", "(1 2 3 4)"),
        ("(nth 1 '(a b c))", "b"),
        ("(last '(a b c))", "c"),
        ("(range 0 3)", "(0 1 2)"),
        ("(length '(1 2 3))", "3"),
        ('(length "hello")', "5"),
        ("(length nil)", "0"),
    ]
)
def test_library_functions(itp, code, expected):
    assert itp.eval(code) == read_one(expected)


def test_length_rejects_non_lists(itp):
    with pytest.raises(LispTypeError):
        itp.eval("(length 5)")


def test_redefined_helper_is_seen_by_caller(itp):
    code = """
    (define (fact-iter n acc) 42)
    (factorial 10)
    """
    assert last(itp.eval(code)) == 42.0


def test_aliased_recursive_function_keeps_its_own_self(itp):
    code = """
    (define (countdown n) (if (= n 0) 'done (countdown (- n 1))))
    (define old countdown)
    (define (countdown n) 'replaced)
    (old 3)
    """
    assert last(itp.eval(code)) == Symbol("done")
    assert itp.eval("(countdown 3)") == Symbol("replaced")


def test_library_definitions_can_be_shadowed_locally(itp):
    code = """
    (define (f list) (car list))
    (f '(9 8))
    """
    assert last(itp.eval(code)) == 9.0
    assert itp.eval("(list 1)") == read_one("(1)")


def test_nil_and_t_are_bound(itp):
    assert itp.eval("nil") is Nil
    assert itp.eval("t") == Symbol("t")


@pytest.mark.parametrize(
    "code, expected",
    [
        ("((lambda (x) (* x x)) 7)", "49"),
        ("((lambda (x) (+ x x) (* x x)) 7)", "49"),
        ("(define (f . a) a) (f 1 2 3)", "(1 2 3)"),
        ("(define (f a . b) (list a b)) (f 1 2 3)", "(1 (2 3))"),
        ("`(1 ,(+ 1 1) ,@(list 3 4))", "(1 2 3 4)"),
        ("(quote (a b c))", "(a b c)"),
        ("'(a b c)", "(a b c)"),
        ("(length \"abc\")", "3"),
    ]
)
def test_worked_examples(itp, code, expected):
    assert last(itp.eval(code)) == read_one(expected)
