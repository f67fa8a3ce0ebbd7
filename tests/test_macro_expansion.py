import pytest

from lwhlisp.errors import LispArityError, LispTypeError, LispUnboundSymbol
from lwhlisp.evaluation.evaluator import evaluate
from lwhlisp.evaluation.macro_expander import macroexpand, macroexpand_1
from lwhlisp.printer import to_string
from lwhlisp.reader.parser import read_one
from lwhlisp.types.lambda_fn import Macro
from lwhlisp.types.nil import Nil
from lwhlisp.types.pair import make_list
from lwhlisp.types.symbol import Symbol
from conftest import last

IGNORE = "(defmacro (ignore x) (cons 'quote (cons x nil)))"


def test_macro_argument_is_not_evaluated(bare):
    assert bare.eval(f"{IGNORE} (ignore foo)") == [Symbol("ignore"), Symbol("foo")]
    with pytest.raises(LispUnboundSymbol):
        bare.eval("foo")


def test_macroexpand_1_builtin(bare):
    bare.eval(IGNORE)
    assert bare.eval("(macroexpand-1 '(ignore foo))") == read_one("(quote foo)")
    # not a macro call: unchanged
    assert bare.eval("(macroexpand-1 '(car x))") == read_one("(car x)")


def test_expansion_is_evaluated_in_caller_environment(itp):
    code = """
    (defmacro (define-answer name) (list 'define name 42))
    (define (f) (define-answer z) z)
    (f)
    """
    assert last(itp.eval(code)) == 42.0
    with pytest.raises(LispUnboundSymbol):
        itp.eval("z")


def test_expansion_result_is_evaluated_again(itp):
    code = """
    (defmacro (my-if c a b) (list 'if c a b))
    (my-if (= 1 1) (+ 1 1) undefined)
    """
    assert last(itp.eval(code)) == 2.0


def test_macro_receives_forms_with_rest(bare):
    code = """
    (defmacro (first-form x . rest) (cons 'quote (cons x nil)))
    (first-form (undefined 1) 2 3)
    """
    assert last(bare.eval(code)) == make_list([Symbol("undefined"), 1.0])


def test_macro_value_prints_as_defmacro(bare):
    m = last(bare.eval(f"{IGNORE} ignore"))
    assert isinstance(m, Macro)
    assert to_string(m) == "(defmacro (x) (cons (quote quote) (cons x nil)))"
    assert bare.eval("(macro? ignore)") == Symbol("t")
    assert bare.eval("(procedure? ignore)") is Nil


def test_macro_cannot_be_applied_as_procedure_value(bare):
    bare.eval(IGNORE)
    with pytest.raises(LispTypeError, match="macro"):
        evaluate(bare.env.lookup(Symbol("ignore")), bare.env)


def test_macro_arity(bare):
    bare.eval(IGNORE)
    with pytest.raises(LispArityError, match="Too many arguments"):
        bare.eval("(ignore a b)")


def test_macroexpand_repeats_on_head(itp):
    form = read_one("(when t 1)")
    once = macroexpand_1(form, itp.env, evaluate)
    assert once == read_one("(if t (begin 1))")
    assert macroexpand(form, itp.env, evaluate) == once
    # begin expands further only when it is at the head
    full = macroexpand(read_one("(begin 1 2)"), itp.env, evaluate)
    assert full == read_one("(last (list 1 2))")


# -------------------------
# Quasiquote
# -------------------------
@pytest.mark.parametrize(
    "code, expected",
    [
        ("`x", "x"),
        ("`(a b)", "(a b)"),
        ("`(a ,(+ 1 2))", "(a 3)"),
        ("`(1 ,@xs 4)", "(1 2 3 4)"),
        ("`(,@xs)", "(2 3)"),
        ("`(0 ,@nil 1)", "(0 1)"),
        ("`(1 . ,(+ 1 1))", "(1 . 2)"),
        ("`((nested ,(car xs)) last)", "((nested 2) last)"),
    ]
)
def test_quasiquote(itp, code, expected):
    itp.eval("(define xs '(2 3))")
    assert itp.eval(code) == read_one(expected)


def test_quasiquote_in_user_macro(itp):
    code = """
    (defmacro (swap-args f a b) `(,f ,b ,a))
    (swap-args - 1 10)
    """
    assert last(itp.eval(code)) == 9.0


# -------------------------
# Library macros
# -------------------------
@pytest.mark.parametrize(
    "code, expected",
    [
        ("(let ((x 1) (y 2)) (+ x y))", 3.0),
        ("(let () 5)", 5.0),
        ("(begin 1 2 3)", 3.0),
        ("(when 1 'a 'b)", Symbol("b")),
        ("(when nil 'a)", Nil),
        ("(unless 1 'a)", Nil),
        ("(unless nil 'a)", Symbol("a")),
        ("(cond ((= 1 2) 'a) ((= 1 1) 'b))", Symbol("b")),
        ("(cond ((= 1 2) 'a))", Nil),
        ("(and)", Symbol("t")),
        ("(and 1 2)", 2.0),
        ("(and 1 nil 3)", Nil),
        ("(or)", Nil),
        ("(or nil 2)", 2.0),
        ("(or nil nil)", Nil),
        ("(or 1 undefined)", 1.0),
        ("(begin)", Nil),
        ("(when t)", Nil),
        ("(cond (1))", Nil),
        ("(let ((or-value 5)) (or nil or-value))", 5.0),
        ("(let ((value 5) (otherwise 6)) (or nil otherwise))", 6.0),
    ]
)
def test_library_macros(itp, code, expected):
    assert itp.eval(code) == expected


def test_define_inside_control_macros_is_visible_afterwards(itp):
    code = """
    (when t (define wx 1))
    (begin (define wy 2) (define wz 3))
    (cond (nil (define skipped 0)) (t (define wc 4)))
    (list wx wy wz wc)
    """
    assert to_string(last(itp.eval(code))) == "(1 2 3 4)"
    with pytest.raises(LispUnboundSymbol):
        itp.eval("skipped")


def test_begin_inside_a_function_defines_locally(itp):
    code = """
    (define (f) (begin (define inner 7) inner))
    (f)
    """
    assert last(itp.eval(code)) == 7.0
    with pytest.raises(LispUnboundSymbol):
        itp.eval("inner")
