import pytest

from bfsession.core.compiler import compile_program, match_brackets, strip_comments
from bfsession.core.errors import EmptyProgram, UnbalancedBracket
from bfsession.core.optimizer import cancel_pairs, fold_runs, optimize


def test_strip_comments():
    assert strip_comments("a+b-c [>.<] # done,") == "+-[>.<],"


def test_nested_brackets_pair_innermost_first():
    code = "[[]][-[+]]"
    jumps = match_brackets(code)
    assert jumps[0] == 3 and jumps[3] == 0
    assert jumps[1] == 2 and jumps[2] == 1
    assert jumps[4] == 9 and jumps[6] == 8
    assert jumps[5] == -1


def test_jump_table_is_symmetric():
    code = strip_comments("+[>[-]<[>+<-]]>[[[]]]")
    jumps = match_brackets(code)
    for i, c in enumerate(code):
        if c in "[]":
            assert jumps[jumps[i]] == i
            assert code[jumps[i]] == ("]" if c == "[" else "[")
        else:
            assert jumps[i] == -1


@pytest.mark.parametrize("code,index", [
    ("[[", 0),
    ("]", 0),
    ("+[]]", 3),
    ("[][", 2),
    ("+[[-]", 1),
])
def test_unbalanced_brackets(code, index):
    with pytest.raises(UnbalancedBracket) as exc:
        match_brackets(code)
    assert exc.value.index == index
    assert f"col {index}" in str(exc.value)


def test_cancellation_reaches_fixed_point():
    assert cancel_pairs("+-+-+-") == ""
    assert cancel_pairs("+<>-") == ""
    assert cancel_pairs("><<") == "<"
    assert cancel_pairs("+.-") == "+.-"
    assert cancel_pairs("[+-]") == "[]"


def test_fold_runs_keeps_brackets_single():
    code, repeats = fold_runs("+++>>[[--]]..,")
    assert code == "+>[[-]].,"
    assert repeats == [3, 2, 1, 1, 2, 1, 1, 2, 1]


def test_optimize_empty_raises():
    with pytest.raises(EmptyProgram):
        optimize("")


def test_optimize_can_cancel_everything():
    assert optimize("+-+-+-") == ("", [])


def test_compile_program_tables():
    program = compile_program("++ comment [->+<]", optimize=True)
    assert program.code == "+[->+<]"
    assert program.repeats == (2, 1, 1, 1, 1, 1, 1)
    assert program.jumps[1] == 6 and program.jumps[6] == 1
    assert program.logical_length == 8
    assert program.instruction(0) == ("+", -1, 2)


def test_compile_unoptimized_has_unit_repeats():
    program = compile_program("+++")
    assert program.repeats == (1, 1, 1)
    assert not program.optimized


def test_compile_reports_unbalanced():
    with pytest.raises(UnbalancedBracket):
        compile_program("+[", optimize=True)
