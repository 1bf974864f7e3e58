import io

import pytest

from unirecords.common import Color, Console, colored


def make_console(text=""):
    return Console(stdin=io.StringIO(text), stdout=io.StringIO())


def test_colored_wraps_and_resets():
    assert colored("ok", Color.GREEN) == "\033[32mok\033[0m"


def test_colored_red_prefix():
    result = colored("bad", Color.RED)
    assert result.startswith("\033[31m")
    assert result.endswith(Color.DEFAULT.value)


def test_write_goes_to_stdout():
    console = make_console()
    console.write("hello")
    assert console.stdout.getvalue() == "hello"


def test_read_char_skips_blank_lines():
    console = make_console("\n   \n  xyz\n")
    assert console.read_char("Enter: ") == "x"
    assert console.stdout.getvalue() == "Enter: "


def test_read_word_returns_first_token():
    console = make_console("alpha beta\nsecond\n")
    assert console.read_word() == "alpha"
    assert console.read_word() == "second"


def test_read_line_keeps_spaces():
    console = make_console("two words\n")
    assert console.read_line("Name: ") == "two words"


def test_read_int_parses_number():
    console = make_console("42\n")
    assert console.read_int() == 42


def test_read_int_rejects_text():
    console = make_console("abc\n")
    with pytest.raises(ValueError):
        console.read_int()


def test_reading_from_closed_input_raises_eof():
    console = make_console("")
    with pytest.raises(EOFError):
        console.read_char()
    with pytest.raises(EOFError):
        console.read_line()


def test_wait_prints_prompt_and_consumes_line():
    console = make_console("\nnext\n")
    console.wait()
    assert console.stdout.getvalue() == "Press Enter to continue..."
    assert console.read_word() == "next"


def test_clear_screen_writes_sequence_when_not_a_tty():
    console = make_console()
    console.clear_screen()
    assert "\033[2J" in console.stdout.getvalue()