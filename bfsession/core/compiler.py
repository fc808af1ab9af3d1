"""
Compile Brainfuck source into a Program.

Compilation strips comments, optionally runs the peephole optimizer and
then builds the jump table for brackets. The result is an immutable
Program holding the instruction string plus two parallel tables:

    jumps[i]    index of the matching bracket for '[' / ']', -1 elsewhere
    repeats[i]  how many logical repetitions instruction i stands for
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from .errors import UnbalancedBracket
from .optimizer import optimize as optimize_code

logger = logging.getLogger(__name__)

COMMANDS = '><+-.,[]'


def strip_comments(text: str) -> str:
    """Keep only the eight BF commands; everything else is a comment."""
    return ''.join(c for c in text if c in COMMANDS)


def match_brackets(code: str) -> List[int]:
    """Build a table mapping bracket positions to their partners.

    Raises UnbalancedBracket with the index of a stray ']' or of the first
    '[' that is never closed.
    """
    jumps = [-1] * len(code)
    stack: List[int] = []

    for i, cmd in enumerate(code):
        if cmd == '[':
            stack.append(i)
        elif cmd == ']':
            if not stack:
                raise UnbalancedBracket(i)
            start = stack.pop()
            jumps[start] = i
            jumps[i] = start

    if stack:
        raise UnbalancedBracket(stack[0])

    return jumps


@dataclass(frozen=True)
class Program:
    code: str
    jumps: Tuple[int, ...]
    repeats: Tuple[int, ...]
    optimized: bool = False

    @classmethod
    def empty(cls) -> 'Program':
        return cls('', (), ())

    def __len__(self) -> int:
        return len(self.code)

    def instruction(self, pc: int) -> Tuple[str, int, int]:
        """(command, jump target, repeat count) at position pc."""
        return self.code[pc], self.jumps[pc], self.repeats[pc]

    @property
    def logical_length(self) -> int:
        """Number of instructions before run-length folding."""
        return sum(self.repeats)


def compile_program(source: str, optimize: bool = False) -> Program:
    code = strip_comments(source)
    if optimize:
        code, repeats = optimize_code(code)
    else:
        repeats = [1] * len(code)

    try:
        jumps = match_brackets(code)
    except UnbalancedBracket as e:
        logger.warning("%s", e)
        raise

    logger.debug("compiled %d instructions (optimize=%s, %d logical)",
                 len(code), optimize, sum(repeats))
    return Program(code, tuple(jumps), tuple(repeats), optimized=optimize)
