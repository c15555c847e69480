import pytest

from lispy.types import OK, Char, Error, File, Long, QExpr, String


def _lisp_path(path):
    return str(path).replace("\\", "\\\\")


def test_print_writes_values_separated_by_spaces(itp, capsys):
    assert itp.eval('(print 1 "two" {3} \'c\')') is OK
    assert capsys.readouterr().out == "1 \"two\" {3} 'c' \n"


def test_print_with_no_arguments_prints_a_newline(itp, capsys):
    itp.eval("(print)")
    assert capsys.readouterr().out == "\n"


def test_show_prints_raw_string(itp, capsys):
    assert itp.eval('(show "a\\tb")') is OK
    assert capsys.readouterr().out == "a\tb\n"


@pytest.mark.parametrize(
    "source, expected",
    [
        ('(error "custom failure")', "Error: custom failure"),
        ("(error 1)", "Error: Incorrect type for argument #1 passed to 'error'. Got Long, expected String."),
        ("(show 1)", "Error: Incorrect type for argument #1 passed to 'show'. Got Long, expected String."),
        ('(read "(+ 1 2) x")', "{(+ 1 2) x}"),
        ('(eval (read "(+ 1 2)"))', "3"),
        ('(read "")', "{}"),
        ('(read "(1 2")', "Error: <stdin>:1:1: error: unmatched '('"),
    ],
)
def test_console_and_reader_builtins(run, source, expected):
    assert run(source) == expected


def test_load_file_evaluates_each_form(itp, tmp_path, capsys):
    source = tmp_path / "lib.lspy"
    source.write_text('(def {loaded} 7)\n(error "reported")\n(def {after} 8)\n', encoding="utf-8")

    assert itp.eval(f'(load-file "{_lisp_path(source)}")') is OK
    assert itp.eval("(+ loaded after)") == Long(15)
    assert capsys.readouterr().out == "Error: reported\n"


def test_load_file_failures_are_errors(itp, tmp_path):
    missing = tmp_path / "missing.lspy"
    result = itp.eval(f'(load-file "{_lisp_path(missing)}")')
    assert isinstance(result, Error)
    assert result.message.startswith(f"Could not load file {missing}.")

    broken = tmp_path / "broken.lspy"
    broken.write_text("(+ 1", encoding="utf-8")
    result = itp.load_file(broken)
    assert isinstance(result, Error)
    assert "unmatched '('" in result.message


def test_load_file_argument_checks(run):
    assert run("(load-file 1)") == (
        "Error: Incorrect type for argument #1 passed to 'load'. Got Long, expected String."
    )


def test_exit_prints_farewell_and_raises(itp, capsys):
    with pytest.raises(SystemExit) as excinfo:
        itp.eval("(exit)")
    assert excinfo.value.code == 0
    assert capsys.readouterr().out == "\nAdiós!\n"

    with pytest.raises(SystemExit) as excinfo:
        itp.eval("(exit 3)")
    assert excinfo.value.code == 3


def test_exit_rejects_bad_arguments(run):
    assert run('(exit "x")') == (
        "Error: Incorrect type for argument #1 passed to 'exit'. Got String, expected Long."
    )
    assert run("(exit 1 2)") == (
        "Error: Invalid number of arguments passed to 'exit'. Got 2, expected at most 1."
    )


def test_file_round_trip(itp, tmp_path):
    path = _lisp_path(tmp_path / "data.txt")
    itp.eval(f'(def {{out}} (fopen "{path}" "w"))')
    assert isinstance(itp.eval("out"), File)
    assert str(itp.eval("out")) == f"<File[w]: {tmp_path / 'data.txt'}>"
    assert itp.eval("(putc out 'h') (putc out 'i') (putc out '\\n') (putc out 'z')") == [OK] * 4
    assert itp.eval("(fclose out)") is OK

    itp.eval(f'(def {{in}} (fopen "{path}" "r"))')
    assert itp.eval("(getc in)") == Char("h")
    assert itp.eval("(ftell in)") == Long(1)
    assert itp.eval("(rewind in)") is OK
    assert itp.eval("(fgets in 100)") == String("hi\n")
    assert itp.eval("(fgets in 100)") == String("z")
    assert itp.eval("(fgets in 100)") == Error("Already at the end of the file, or some error occurred.")
    assert itp.eval("(getc in)") == Error("File closed or reached end of file.")

    assert itp.eval("(fseek in -1 2)") is OK
    assert itp.eval("(getc in)") == Char("z")
    assert itp.eval("(fseek in 1 0)") is OK
    assert itp.eval("(fgets in 2)") == String("i")
    assert itp.eval("(fgets in 1)") == String("")
    assert itp.eval("(fclose in)") is OK


@pytest.mark.parametrize(
    "source, expected",
    [
        ('(fopen "/nonexistent-dir/x.txt" "r")',
         "Unable to open file '/nonexistent-dir/x.txt' with mode 'r'."),
        ('(fopen "x.txt")', "Invalid number of arguments passed to 'fopen'. Got 1, expected 2."),
        ('(fopen 1 "r")', "Incorrect type for argument #1 passed to 'fopen'. Got Long, expected String."),
        ("(getc 1)", "Incorrect type for argument #1 passed to 'getc'. Got Long, expected File."),
        ("(fclose {})", "Incorrect type for argument #1 passed to 'fclose'. Got Q-expression, expected File."),
    ],
)
def test_file_builtin_errors(run, source, expected):
    assert run(source) == f"Error: {expected}"


def test_fseek_and_fgets_validate_arguments(itp, tmp_path):
    path = tmp_path / "f.txt"
    path.write_bytes(b"abc")
    itp.eval(f'(def {{f}} (fopen "{_lisp_path(path)}" "r"))')

    assert str(itp.eval("(fseek f 0 5)")) == (
        "Error: Unexpected value at argument #3 to 'fseek'. Got 5; expected 0 (from beginning), "
        "1 (from current position), or 2 (from end)."
    )
    assert str(itp.eval("(fgets f 0)")) == (
        "Error: Unexpected value at argument #2 to 'fgets'. Got 0; expected a positive buffer size."
    )
    itp.eval("(fclose f)")
    assert str(itp.eval("(getc f)")) == "Error: Unable to read character from file."


def test_file_values_compare_by_name(itp, tmp_path):
    path = _lisp_path(tmp_path / "same.txt")
    itp.eval(f'(def {{a b}} (fopen "{path}" "w") (fopen "{path}" "r"))')
    assert str(itp.eval("(== a b)")) == "true"
    itp.eval("(fclose a) (fclose b)")


def test_read_result_is_data(itp):
    assert itp.eval('(read "{1 2}")') == QExpr([QExpr([Long(1), Long(2)])])
