import pytest

from lwhlisp.builtin import env_builtin
from lwhlisp.errors import LispArityError, LispTypeError, LispUserError
from lwhlisp.reader.parser import read_one
from lwhlisp.types.environment import Environment
from lwhlisp.types.nil import Nil
from lwhlisp.types.pair import Pair
from lwhlisp.types.primitive import Primitive
from lwhlisp.types.symbol import Symbol

T = Symbol("t")


@pytest.fixture
def env():
    env = Environment()
    env_builtin.register(env)
    return env


def test_register_binds_every_builtin(env):
    for name in env_builtin.BUILTINS:
        assert isinstance(env.lookup(Symbol(name)), Primitive)
    assert env.lookup(Symbol("nil")) is Nil
    assert env.lookup(T) == T


def test_builtin_called_directly(env):
    cons = env.lookup(Symbol("cons"))
    assert cons(env, [1.0, 2.0]) == Pair(1.0, 2.0)


def test_println_outputs_and_returns_nil(bare, capsys):
    assert bare.eval('(println "alpha" 42 \'beta "x y")') is Nil
    assert capsys.readouterr().out == "alpha 42 beta x y\n"


def test_print_has_no_newline(bare, capsys):
    bare.eval('(print "a") (print 1.5)')
    assert capsys.readouterr().out == "a1.5"


@pytest.mark.parametrize(
    "code, expected",
    [
        ("(car '(1 2))", 1.0),
        ("(cdr '(1 2))", read_one("(2)")),
        ("(car nil)", Nil),
        ("(cdr nil)", Nil),
        ("(cons 1 2)", Pair(1.0, 2.0)),
        ("(pair? '(1))", T),
        ("(pair? nil)", Nil),
        ("(symbol? 'a)", T),
        ("(symbol? \"a\")", Nil),
        ('(string? "s")', T),
        ("(number? 1)", T),
        ("(number? 'one)", Nil),
        ("(procedure? car)", T),
        ("(procedure? (lambda (x) x))", T),
        ("(procedure? 1)", Nil),
        ("(macro? car)", Nil),
        ('(string-length "abc")', 3.0),
        ('(string-append "a" "b" "c")', "abc"),
        ("(string-append)", ""),
        ("(to-string 1.5)", "1.5"),
        ('(to-string "x")', "x"),
        ("(to-string '(a \"b\"))", "(a b)"),
        ("(eval '(+ 1 2))", 3.0),
        ("(eval (cons '+ '(1 2)))", 3.0),
    ]
)
def test_builtin_results(bare, code, expected):
    assert bare.eval(code) == expected


@pytest.mark.parametrize(
    "code, error, message",
    [
        ("(car 1)", LispTypeError, "Builtin car expected a pair, got 1"),
        ("(cdr \"s\")", LispTypeError, "Builtin cdr expected a pair"),
        ("(car)", LispArityError, "Builtin car expected exactly 1 argument, got 0"),
        ("(string-length 1)", LispTypeError, "expected its argument to be a string"),
        ("(string-append \"a\" 1)", LispTypeError, "expected strings"),
        ('(error "boom" 1)', LispUserError, "boom 1"),
    ]
)
def test_builtin_errors(bare, code, error, message):
    with pytest.raises(error, match=message):
        bare.eval(code)


def test_eval_uses_caller_environment(bare):
    assert bare.eval("((lambda (x) (eval 'x)) 7)") == 7.0
