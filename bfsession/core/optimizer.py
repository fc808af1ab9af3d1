"""
Peephole optimizer for Brainfuck instruction strings.

Two passes, in order:

1. Cancellation: adjacent inverse pairs ('+-', '-+', '<>', '><') are
   removed until none remain. Removing a pair can bring a new pair
   together, e.g. '+<>-' -> '+-' -> ''.
2. Run-length folding: each run of identical non-bracket commands becomes
   one command with a repeat count. '.' and ',' keep their count, the
   interpreter performs them that many times.
"""

from typing import List, Tuple

from .errors import EmptyProgram

INVERSE = {'+': '-', '-': '+', '<': '>', '>': '<'}
BRACKETS = '[]'


def cancel_pairs(code: str) -> str:
    """Remove adjacent inverse pairs to a fixed point.

    A single stack pass gives the same result as rewriting the string
    repeatedly: popping a command when its inverse arrives is exactly the
    removal of an adjacent pair in the partially reduced string.
    """
    out: List[str] = []
    for c in code:
        if out and INVERSE.get(out[-1]) == c:
            out.pop()
        else:
            out.append(c)
    return ''.join(out)


def fold_runs(code: str) -> Tuple[str, List[int]]:
    """Collapse runs of identical commands; brackets are never folded."""
    new_code: List[str] = []
    repeats: List[int] = []
    i = 0
    while i < len(code):
        c = code[i]
        j = i + 1
        if c not in BRACKETS:
            while j < len(code) and code[j] == c:
                j += 1
        new_code.append(c)
        repeats.append(j - i)
        i = j
    return ''.join(new_code), repeats


def optimize(code: str) -> Tuple[str, List[int]]:
    """Return (optimized code, repeat count per instruction)."""
    if not code:
        raise EmptyProgram()
    return fold_runs(cancel_pairs(code))
