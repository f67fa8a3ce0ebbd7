import pytest

from lwhlisp.printer import format_source, leaf_count, pretty_print, to_display_string, to_string
from lwhlisp.reader.parser import read_one
from lwhlisp.types.nil import Nil
from lwhlisp.types.pair import Pair, make_list
from lwhlisp.types.primitive import Primitive
from lwhlisp.types.symbol import Symbol


@pytest.mark.parametrize(
    "value, expected",
    [
        (6.0, "6"),
        (-2.0, "-2"),
        (2.5, "2.5"),
        (Nil, "nil"),
        (Symbol("foo"), "foo"),
        ("plain", '"plain"'),
        ('a"b\n', '"a\\"b\\n"'),
        (Pair(1.0, 2.0), "(1 . 2)"),
        (make_list([Symbol("a"), make_list([1.0])]), "(a (1))"),
        (make_list([1.0, 2.0], Symbol("rest")), "(1 2 . rest)"),
        (Primitive("car", lambda env, args: None, 1, 1), "#<BUILTIN car>"),
    ]
)
def test_to_string(value, expected):
    assert to_string(value) == expected


def test_display_string_drops_quotes():
    assert to_display_string(make_list(["hi", 1.0])) == "(hi 1)"


def test_leaf_count_includes_terminators():
    assert leaf_count(read_one("(1 2 3)")) == 4
    assert leaf_count(read_one("(1 (2))")) == 4
    assert leaf_count(Symbol("x")) == 1


def test_short_forms_stay_inline():
    form = read_one("(define (f x) (+ x 1))")
    assert pretty_print(form) == "(define (f x) (+ x 1))"


def test_long_forms_break_with_head_line_argument():
    form = read_one("(define (f x) (if (= x 0) 1 (* x (f (- x 1)))))")
    assert pretty_print(form) == (
        "(define (f x)\n"
        "   (if (= x 0)\n"
        "      1\n"
        "      (* x (f (- x 1)))))"
    )


def test_long_call_puts_every_argument_on_its_own_line():
    form = read_one("(foo 1 2 3 4 5 6 7 8 9 10 11 12)")
    lines = pretty_print(form).split("\n")
    assert lines[0] == "(foo"
    assert lines[1] == "   1"
    assert lines[-1] == "   12)"


def test_pretty_print_reads_back_equal():
    form = read_one("(defmacro (m a b) (list 'if a (cons 'begin b) (list 'quote (cons a b))))")
    assert read_one(pretty_print(form)) == form


def test_format_source_separates_forms_and_drops_comments():
    assert format_source("(a   b) ; c\n\n\n(c\n d)") == "(a b)\n\n(c d)\n\n"
