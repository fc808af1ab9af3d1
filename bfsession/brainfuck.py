#!/usr/bin/env python3
"""
Brainfuck Session

Brainfuck is an esoteric programming language with only 8 commands:
    >   Move the pointer to the right
    <   Move the pointer to the left
    +   Increment the memory cell at the pointer
    -   Decrement the memory cell at the pointer
    .   Output the byte in the cell at the pointer
    ,   Input a byte and store it in the cell at the pointer
    [   Jump past the matching ] if the cell at the pointer is 0
    ]   Jump back to the matching [ if the cell at the pointer is nonzero

All other characters are treated as comments and ignored.

A session owns one tape, one compiled program and one execution state. It
can be stepped one instruction at a time or run to completion, reset and
run again without recompiling. When the program was optimized, a single
step performs a whole folded run (e.g. '+++' is one step adding 3).
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional

from .core.compiler import Program, compile_program
from .core.errors import BrainfuckError, ConfigError, EndOfInput
from .core.streams import as_sink, as_source
from .core.tape import DEFAULT_TAPE_LENGTH, Tape

logger = logging.getLogger(__name__)

# What ',' does when the input source is exhausted
EOF_KEEP = 'keep'    # leave the cell unchanged
EOF_ZERO = 'zero'    # store 0
EOF_ERROR = 'error'  # raise EndOfInput
EOF_MODES = (EOF_KEEP, EOF_ZERO, EOF_ERROR)


class SessionStatus(enum.Enum):
    RUNNING = 'running'
    HALTED = 'halted'
    ERRORED = 'errored'


@dataclass
class ExecutionState:
    pc: int = 0
    pointer: int = 0
    iterations: int = 0
    halted: bool = False

    def reset(self) -> None:
        self.pc = 0
        self.pointer = 0
        self.iterations = 0
        self.halted = False


class BrainfuckSession:
    def __init__(self, source: str = '', tape_length: int = DEFAULT_TAPE_LENGTH,
                 optimize: bool = False, max_iterations: Optional[int] = None,
                 input=None, output=None, eof: str = EOF_KEEP):
        if eof not in EOF_MODES:
            raise ConfigError(f"eof must be one of {', '.join(EOF_MODES)}, got {eof!r}")
        self.tape = Tape(tape_length)
        self.state = ExecutionState()
        self.max_iterations = max_iterations if max_iterations and max_iterations > 0 else None
        self.eof = eof
        self.set_input(input)
        self.set_output(output)

        self.program = Program.empty()
        self.error: Optional[BrainfuckError] = None
        self.hit_iteration_cap = False
        self.input_reads = 0
        self.output_writes = 0
        self._partial_reads = {}

        self.load(source, optimize)

    @classmethod
    def from_config(cls, config) -> 'BrainfuckSession':
        return cls(config.source, tape_length=config.tape_length, optimize=config.optimize,
                   max_iterations=config.max_iterations, input=config.input,
                   output=config.output, eof=config.eof)

    # -- I/O -------------------------------------------------------------

    def set_input(self, source) -> None:
        self.input = as_source(source)

    def set_output(self, sink) -> None:
        self.output = as_sink(sink)

    # -- Loading ---------------------------------------------------------

    def load(self, source: str, optimize: bool = False) -> bool:
        """Compile source into this session, replacing the old program.

        Compile errors do not raise: they are kept on ``self.error`` and the
        session becomes unrunnable until a valid program is loaded.
        Returns True when the program compiled.
        """
        try:
            self.program = compile_program(source, optimize=optimize)
            self.error = None
        except BrainfuckError as e:
            self.program = Program.empty()
            self.error = e
        self.reset()
        return self.error is None

    def reset(self) -> None:
        """Clear the tape and counters. Does not touch the loaded program."""
        self.state.reset()
        self.tape.reset()
        self.hit_iteration_cap = False
        self.input_reads = 0
        self.output_writes = 0
        self._partial_reads = {}

    # -- Inspection ------------------------------------------------------

    @property
    def status(self) -> SessionStatus:
        if self.error is not None:
            return SessionStatus.ERRORED
        if self.state.halted or self.state.pc >= len(self.program):
            return SessionStatus.HALTED
        return SessionStatus.RUNNING

    @property
    def program_counter(self) -> int:
        return self.state.pc

    @property
    def pointer(self) -> int:
        return self.state.pointer

    @property
    def iterations(self) -> int:
        return self.state.iterations

    @property
    def code(self) -> str:
        return self.program.code

    @property
    def tape_size(self) -> int:
        return len(self.tape)

    def tape_value(self, pos: int) -> int:
        return self.tape[pos]

    def available(self) -> bool:
        """True while there is a compiled instruction left to execute."""
        return self.error is None and self.state.pc < len(self.program)

    # -- Execution -------------------------------------------------------

    def step(self) -> Optional[int]:
        """Execute one instruction and return the value of the current cell.

        Returns None when the program has finished. Raises the compile error
        if the session holds an invalid program.
        """
        if self.error is not None:
            raise self.error
        if not self.available():
            return None

        st = self.state
        tape = self.tape
        cmd, jump, n = self.program.instruction(st.pc)

        if cmd == '>':
            st.pointer = tape.shift(st.pointer, n)

        elif cmd == '<':
            st.pointer = tape.shift(st.pointer, -n)

        elif cmd == '+':
            tape.add(st.pointer, n)

        elif cmd == '-':
            tape.add(st.pointer, -n)

        elif cmd == '.':
            self.output.write(bytes([tape.get(st.pointer)]) * n)
            self.output_writes += n

        elif cmd == ',':
            self._read_input(n)

        elif cmd == '[':
            if tape.get(st.pointer) == 0:
                st.pc = jump

        elif cmd == ']':
            if tape.get(st.pointer) != 0:
                st.pc = jump

        # Jump targets point at the partner bracket; this moves past it
        st.pc += 1
        st.iterations += 1
        st.halted = st.pc >= len(self.program)

        return tape.get(st.pointer)

    def _read_input(self, n: int) -> None:
        ptr = self.state.pointer
        # Reads a folded ',' already did before an EndOfInput are not repeated
        done = self._partial_reads.pop(self.state.pc, 0)
        for i in range(done, n):
            value = self.input.read_byte()
            if value is None:
                if self.eof == EOF_ERROR:
                    self._partial_reads[self.state.pc] = i
                    raise EndOfInput(self.state.pc)
                if self.eof == EOF_ZERO:
                    self.tape.set(ptr, 0)
                logger.debug("end of input at pc=%d", self.state.pc)
                continue
            self.tape.set(ptr, value)
            self.input_reads += 1

    def run(self, reset: bool = True) -> 'BrainfuckSession':
        """Run until the program ends or the iteration cap is exceeded."""
        if self.error is not None:
            raise self.error
        if reset:
            self.reset()

        cap = self.max_iterations
        while self.available():
            self.step()
            if cap is not None and self.state.iterations > cap:
                self.state.halted = True
                self.hit_iteration_cap = True
                logger.info("stopped after %d iterations (max_iterations=%d)",
                            self.state.iterations, cap)
                break

        return self
