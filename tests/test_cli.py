from bfsession.cli import main


def test_demo_prints_both_runs(capsys):
    assert main(["--demo"]) == 0
    out = capsys.readouterr().out
    assert out.count("Hello World!") == 2
    assert out.count("Iterations:") == 2
    assert "---" in out


def test_eval_with_input(capsysbinary):
    assert main(["-e", ",+.,+.", "--input", "ab"]) == 0
    assert capsysbinary.readouterr().out == b"bc"


def test_program_file_with_stats(tmp_path, capsysbinary):
    path = tmp_path / "three.bf"
    path.write_text("print three: +++ +++ [>++++++++<-] > + .")
    assert main([str(path), "--optimize", "--stats", "--input", ""]) == 0
    captured = capsysbinary.readouterr()
    assert captured.out == b"1"
    assert b"Iterations:" in captured.err


def test_iteration_cap_option(capsysbinary):
    assert main(["-e", "+[]", "--max-iterations", "5", "--stats", "--input", ""]) == 0
    err = capsysbinary.readouterr().err
    assert b"Iterations: 6" in err
    assert b"iteration cap" in err


def test_unbalanced_program_exits_nonzero(capsysbinary):
    assert main(["-e", "[[", "--input", ""]) == 1
    assert b"Unbalanced bracket at col 0" in capsysbinary.readouterr().err


def test_bad_tape_length_exits_nonzero(capsysbinary):
    assert main(["-e", "+", "--tape-length", "0", "--input", ""]) == 1
    assert b"Invalid tape length" in capsysbinary.readouterr().err


def test_config_file(tmp_path, capsysbinary):
    config = tmp_path / "bf.yaml"
    config.write_text("tape_length: 4\neof: zero\n")
    assert main(["-e", "<+<.,.", "--config", str(config), "--input", ""]) == 0
    assert capsysbinary.readouterr().out == b"\x00\x00"


def test_debug_mode(capsys):
    assert main(["-e", "++.", "--debug", "--input", ""]) == 0
    assert "BRAINFUCK DEBUGGER" in capsys.readouterr().out


def test_missing_program_file_exits_nonzero(tmp_path, capsysbinary):
    assert main([str(tmp_path / "missing.bf"), "--input", ""]) == 1
    assert b"Cannot read" in capsysbinary.readouterr().err
