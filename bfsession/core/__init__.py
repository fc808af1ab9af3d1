from .errors import (
    BrainfuckError, UnbalancedBracket, EmptyProgram, InvalidTapeLength,
    TapeIndexOutOfBounds, EndOfInput, ConfigError,
)
from .tape import Tape, DEFAULT_TAPE_LENGTH
from .compiler import Program, compile_program, match_brackets, strip_comments
from .optimizer import optimize, cancel_pairs, fold_runs
