import pytest

from lispy.builtin.env_builtin import all_builtins
from lispy.types import Long, Symbol


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(def {a b} 1 2) (+ a b)", "3"),
        ("(def {xs} {1 2}) xs", "{1 2}"),
        ("(def {arglist} {a b}) (def arglist 3 4) (* a b)", "12"),
        ("(def {} )", "ok"),
        ("(= {z} 5) z", "5"),
        ("(def {x} 1)", "ok"),
    ],
)
def test_def_and_put(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source, expected",
    [
        ("(def {a b} 1)",
         "The number of symbols defined by 'def' must be equal to the number of values. Got 2, expected 1."),
        ("(= {a} 1 2)",
         "The number of symbols defined by '=' must be equal to the number of values. Got 1, expected 2."),
        ("(def {a 1} 1 2)",
         "The first argument to 'def' must be a list of symbols. Got Long, expected Symbol."),
        ("(def 1 2)",
         "Incorrect type for argument #1 passed to 'def'. Got Long, expected Q-expression."),
        ("(def)", "Invalid number of arguments passed to 'def'. Got 0, expected at least 1."),
    ],
)
def test_definition_errors(run, source, expected):
    assert run(source) == f"Error: {expected}"


def test_def_inside_a_closure_is_global(itp):
    itp.eval("(def {set-g} (\\ {v} {def {g} v}))")
    itp.eval("(set-g 42)")
    assert itp.eval("g") == Long(42)


def test_put_inside_a_closure_is_local(itp):
    itp.eval("(def {set-l} (\\ {v} {= {l} v}))")
    itp.eval("(set-l 42)")
    assert str(itp.eval("l")) == "Error: unbound symbol: 'l'"


def test_builtins_can_be_redefined(itp):
    itp.eval("(def {plus} +)")
    assert itp.eval("(plus 2 3)") == Long(5)


def test_print_env_lists_the_current_frame(itp, capsys):
    itp.eval("(def {answer} 42)")
    itp.eval("(print-env)")
    out = capsys.readouterr().out
    assert "answer: 42\n" in out
    assert "+: <builtin>\n" in out


def test_every_builtin_is_registered(itp):
    names = set(all_builtins())
    assert {
        "+", "-", "*", "/", "%", "^", "add", "sub", "mul", "div", "mod", "pow", "min", "max",
        "list", "head", "first", "tail", "rest", "init", "eval", "join", "cons", "len",
        "==", "!=", ">", "<", ">=", "<=", "||", "&&", "!", "or", "and", "not", "if",
        "def", "=", "\\", "print-env",
        "fopen", "fclose", "getc", "putc", "fgets", "fseek", "ftell", "rewind",
        "read", "load-file", "print", "show", "error", "exit",
    } <= names
    for name in names:
        assert Symbol(name) in itp.env
