"""Error types raised by the compiler, tape and session."""


class BrainfuckError(Exception):
    """Base class for every error raised by bfsession."""


class UnbalancedBracket(BrainfuckError):
    """A '[' or ']' without a partner. Makes the program unrunnable."""

    def __init__(self, index: int):
        self.index = index
        super().__init__(f"Error parsing input BF: Unbalanced bracket at col {index}")


class EmptyProgram(BrainfuckError):
    def __init__(self):
        super().__init__("There is no code to optimize!")


class InvalidTapeLength(BrainfuckError, ValueError):
    def __init__(self, length):
        self.length = length
        super().__init__(f"Invalid tape length {length!r}!")


class TapeIndexOutOfBounds(BrainfuckError, IndexError):
    def __init__(self, index: int, length: int):
        self.index = index
        self.length = length
        super().__init__(f"{index} is out of the bounds of the BF tape [0,{length})")


class EndOfInput(BrainfuckError):
    """Raised by ',' when the input source is exhausted and eof mode is 'error'."""

    def __init__(self, pc: int):
        self.pc = pc
        super().__init__(f"End of input reached at instruction {pc}")


class ConfigError(BrainfuckError, ValueError):
    """Bad option name or value in a session configuration."""
