#!/usr/bin/env python3
"""
Brainfuck Step-by-Step Debugger

Shows the step-by-step execution of a Brainfuck program, displaying the
program with the current instruction marked, the tape around the pointer
and the output produced so far.
"""

from dataclasses import dataclass
from typing import Iterator, List

from .brainfuck import BrainfuckSession
from .core.streams import BufferSink


@dataclass
class TraceEntry:
    step: int
    pc: int
    command: str
    repeat: int
    pointer: int
    cell: int


class BrainfuckDebugger(BrainfuckSession):
    """Session that records or prints each step it executes."""

    def __init__(self, source: str = '', show_memory_range: int = 10, **kwargs):
        kwargs.setdefault('output', BufferSink())
        super().__init__(source, **kwargs)
        self.show_memory_range = show_memory_range

    def trace(self, max_steps: int = 1000) -> Iterator[TraceEntry]:
        """Run from a clean state, yielding the state after every step."""
        if self.error is not None:
            raise self.error
        self.reset()
        while self.available() and self.state.iterations < max_steps:
            pc = self.state.pc
            cmd, _, repeat = self.program.instruction(pc)
            cell = self.step()
            yield TraceEntry(self.state.iterations, pc, cmd, repeat, self.state.pointer, cell)

    def debug_run(self, max_steps: int = 100) -> bytes:
        """Execute the loaded program, printing the state after each step."""
        print(f"🐛 BRAINFUCK DEBUGGER")
        if self.error is not None:
            print(f"❌ {self.error}")
            return b''
        print(f"Program: {self.code}")
        print("=" * 80)

        self.reset()
        self._show_state("INITIAL")

        for entry in self.trace(max_steps):
            label = f"x{entry.repeat}" if entry.repeat > 1 else ""
            print(f"\nStep {entry.step}: Execute '{entry.command}'{label} at position {entry.pc}")
            self._show_state(f"AFTER STEP {entry.step}")

        if self.available():
            print(f"\n⚠️ Execution stopped after {max_steps} steps (possible infinite loop)")

        output = self._output_bytes()
        print(f"\n🎯 FINAL RESULT:")
        print(f"Output: {output.decode('latin-1')!r} → {list(output)}")
        return output

    def _output_bytes(self) -> bytes:
        getvalue = getattr(self.output, 'getvalue', None)
        return getvalue() if getvalue is not None else b''

    def _program_display(self) -> str:
        parts: List[str] = []
        for i, cmd in enumerate(self.code):
            repeat = self.program.repeats[i]
            text = cmd if repeat == 1 else f"{cmd}{repeat}"
            parts.append(f"[{text}]" if i == self.state.pc else text)
        return ''.join(parts)

    def _show_state(self, label: str) -> None:
        """Show current state of memory, pointer, and program."""
        print(f"\n{label}:")
        print(f"Program:  {self._program_display()}")

        # Show memory tape (focused around pointer)
        pointer = self.state.pointer
        start = max(0, pointer - self.show_memory_range // 2)
        end = min(self.tape_size, start + self.show_memory_range)
        # Adjust start if we're near the end
        if end - start < self.show_memory_range:
            start = max(0, end - self.show_memory_range)

        values = self.tape.window(start, end)
        memory_vals = [f"{v:3d}" for v in values]
        memory_ptrs = [" ^ " if i == pointer else "   " for i in range(start, end)]
        memory_addrs = [f"{i:3d}" for i in range(start, end)]

        print(f"Memory:   [" + "|".join(memory_vals) + "]")
        print(f"Pointer:   " + " ".join(memory_ptrs))
        print(f"Address:   " + " ".join(memory_addrs))

        output = self._output_bytes()
        if output:
            print(f"Output:   {output.decode('latin-1')!r} → {list(output)}")
        else:
            print(f"Output:   (empty)")
