"""Brainfuck execution engine: compiler, peephole optimizer and stepping interpreter."""

from .brainfuck import (
    BrainfuckSession, ExecutionState, SessionStatus,
    EOF_KEEP, EOF_ZERO, EOF_ERROR, EOF_MODES,
)
from .config import SessionBuilder, SessionConfig, load_config_file, defaults_from_env
from .core import (
    BrainfuckError, UnbalancedBracket, EmptyProgram, InvalidTapeLength,
    TapeIndexOutOfBounds, EndOfInput, ConfigError,
    Tape, Program, compile_program, match_brackets, strip_comments,
    optimize, cancel_pairs, fold_runs,
)
from .core.bf_runner import RunResult, run_program, run_once, compare_optimized
from .core.streams import BufferSink, BufferSource, StreamSink, StreamSource

__version__ = "0.1.0"
