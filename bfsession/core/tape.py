"""
Circular byte tape.

The tape has a fixed number of unsigned 8-bit cells. Pointer arithmetic
wraps modulo the tape length in both directions and cell arithmetic wraps
modulo 256, so neither ever raises. Only the debug accessor ``tape[i]``
checks bounds.
"""

import numpy as np

from .errors import InvalidTapeLength, TapeIndexOutOfBounds

DEFAULT_TAPE_LENGTH = 30000


def validate_tape_length(length) -> int:
    # bool is an int subclass, but True is not a tape length
    if isinstance(length, bool) or not isinstance(length, (int, np.integer)) or length <= 0:
        raise InvalidTapeLength(length)
    return int(length)


class Tape:
    def __init__(self, length: int = DEFAULT_TAPE_LENGTH):
        self.length = validate_tape_length(length)
        self.cells = np.zeros(self.length, dtype=np.uint8)

    def __len__(self) -> int:
        return self.length

    def __getitem__(self, index: int) -> int:
        """Bounds-checked read used for inspection, not by the interpreter."""
        if not 0 <= index < self.length:
            raise TapeIndexOutOfBounds(index, self.length)
        return int(self.cells[index])

    def shift(self, ptr: int, n: int) -> int:
        """Move a pointer by n cells (n may be negative or larger than the tape)."""
        return (ptr + n) % self.length

    def get(self, ptr: int) -> int:
        return int(self.cells[ptr])

    def set(self, ptr: int, value: int) -> None:
        self.cells[ptr] = value & 0xFF

    def add(self, ptr: int, n: int) -> int:
        value = (int(self.cells[ptr]) + n) & 0xFF
        self.cells[ptr] = value
        return value

    def window(self, start: int, stop: int) -> list:
        start = max(0, start)
        stop = min(self.length, stop)
        return [int(v) for v in self.cells[start:stop]]

    def nonzero(self) -> dict:
        """Map of index -> value for every non-zero cell."""
        return {int(i): int(self.cells[i]) for i in np.flatnonzero(self.cells)}

    def reset(self) -> None:
        self.cells.fill(0)

    def snapshot(self) -> bytes:
        return self.cells.tobytes()
