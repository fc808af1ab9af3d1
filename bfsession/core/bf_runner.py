from dataclasses import dataclass
from typing import Optional
import os

from ..brainfuck import BrainfuckSession, EOF_KEEP
from .errors import BrainfuckError
from .streams import BufferSink

DEFAULT_STEP_LIMIT = int(os.environ.get("BF_STEP_LIMIT", "0"))


@dataclass
class RunResult:
    output: bytes
    iterations: int
    hit_step_limit: bool = False
    error: Optional[BrainfuckError] = None

    @property
    def text(self) -> str:
        return self.output.decode('latin-1')

    @property
    def ok(self) -> bool:
        return self.error is None


def run_program(code: str, input_data="", optimize: bool = False,
                step_limit: int = DEFAULT_STEP_LIMIT, tape_length: int = 30000,
                eof: str = EOF_KEEP) -> RunResult:
    """Execute BF code against in-memory input and collect its output.
    Compile errors and EndOfInput are reported in ``error`` instead of raised.
    """
    sink = BufferSink()
    session = BrainfuckSession(code, tape_length=tape_length, optimize=optimize,
                               max_iterations=step_limit, input=input_data,
                               output=sink, eof=eof)
    if session.error is not None:
        return RunResult(b'', 0, error=session.error)
    try:
        session.run()
    except BrainfuckError as e:
        return RunResult(sink.getvalue(), session.iterations, error=e)
    return RunResult(sink.getvalue(), session.iterations, session.hit_iteration_cap)


def run_once(code: str, x: int, step_limit: int = DEFAULT_STEP_LIMIT) -> Optional[int]:
    """Execute BF code with single byte input, return the first output byte.
    Fresh tape each time (stateless).
    """
    result = run_program(code, bytes([x % 256]), step_limit=step_limit)
    if not result.ok or not result.output:
        return None
    return result.output[0]


def compare_optimized(code: str, input_data="", step_limit: int = DEFAULT_STEP_LIMIT):
    """Run code plain and optimized; returns (plain, optimized) results."""
    plain = run_program(code, input_data, optimize=False, step_limit=step_limit)
    optimized = run_program(code, input_data, optimize=True, step_limit=step_limit)
    return plain, optimized
