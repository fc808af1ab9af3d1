from bfsession import EndOfInput, UnbalancedBracket
from bfsession.cli import HELLO_WORLD
from bfsession.core.bf_runner import compare_optimized, run_once, run_program


def test_run_program_collects_output():
    result = run_program(HELLO_WORLD)
    assert result.ok
    assert result.text == "Hello World!\n"
    assert not result.hit_step_limit


def test_run_program_reports_compile_error():
    result = run_program("[[")
    assert isinstance(result.error, UnbalancedBracket)
    assert result.output == b""
    assert result.iterations == 0


def test_run_program_step_limit():
    result = run_program("+[.]", step_limit=10)
    assert result.hit_step_limit
    assert result.iterations == 11
    assert result.output == b"\x01" * 5


def test_run_program_end_of_input_error():
    result = run_program(",.,.", "a", eof="error")
    assert isinstance(result.error, EndOfInput)
    assert result.output == b"a"


def test_run_once():
    assert run_once(",+.", 5) == 6
    assert run_once(",+.", 255) == 0
    assert run_once(",[->++<]>.", 21) == 42
    assert run_once(",", 3) is None
    assert run_once("]", 3) is None


def test_compare_optimized():
    plain, optimized = compare_optimized(HELLO_WORLD)
    assert plain.output == optimized.output == b"Hello World!\n"
    assert plain.iterations != optimized.iterations
