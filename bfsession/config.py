"""
Session configuration.

``SessionConfig`` is the immutable set of run parameters; ``SessionBuilder``
assembles one fluently and builds the session:

    session = (SessionBuilder(code)
               .input(sys.stdin.buffer)
               .output(sys.stdout.buffer)
               .optimize()
               .build())

Defaults can come from the environment (BF_TAPE_LENGTH, BF_MAX_ITERATIONS,
BF_OPTIMIZE, BF_EOF) or from a YAML file with the same option names in
lower case.
"""

import os
from dataclasses import dataclass, field, replace
from typing import Any, Dict, Optional

import yaml

from .brainfuck import EOF_KEEP, EOF_MODES, BrainfuckSession
from .core.compiler import strip_comments
from .core.errors import ConfigError
from .core.tape import DEFAULT_TAPE_LENGTH, validate_tape_length

OPTION_TYPES = {
    'tape_length': int,
    'optimize': bool,
    'max_iterations': int,
    'eof': str,
}

TRUE_STRINGS = ('1', 'true', 'yes', 'on')
FALSE_STRINGS = ('0', 'false', 'no', 'off', '')


@dataclass(frozen=True)
class SessionConfig:
    source: str = ''
    tape_length: int = DEFAULT_TAPE_LENGTH
    optimize: bool = False
    max_iterations: Optional[int] = None
    input: Any = field(default=None, compare=False)
    output: Any = field(default=None, compare=False)
    eof: str = EOF_KEEP

    def __post_init__(self):
        object.__setattr__(self, 'source', strip_comments(self.source))
        object.__setattr__(self, 'tape_length', validate_tape_length(self.tape_length))
        if self.max_iterations is not None:
            if isinstance(self.max_iterations, bool) or not isinstance(self.max_iterations, int):
                raise ConfigError(f"max_iterations must be an integer, got {self.max_iterations!r}")
            if self.max_iterations <= 0:
                object.__setattr__(self, 'max_iterations', None)
        if self.eof not in EOF_MODES:
            raise ConfigError(f"eof must be one of {', '.join(EOF_MODES)}, got {self.eof!r}")

    def with_options(self, **options) -> 'SessionConfig':
        return replace(self, **options)

    def build(self) -> BrainfuckSession:
        return BrainfuckSession.from_config(self)


class SessionBuilder:
    """Fluent builder for a BrainfuckSession."""

    def __init__(self, source: str = '', **defaults):
        self._options: Dict[str, Any] = dict(defaults)
        self._options['source'] = strip_comments(source)

    def input(self, source) -> 'SessionBuilder':
        self._options['input'] = source
        return self

    def output(self, sink) -> 'SessionBuilder':
        self._options['output'] = sink
        return self

    def tape_length(self, length: int) -> 'SessionBuilder':
        """Override the default 30000 cells. Raises InvalidTapeLength now, not at run time."""
        self._options['tape_length'] = validate_tape_length(length)
        return self

    def optimize(self, flag: bool = True) -> 'SessionBuilder':
        self._options['optimize'] = bool(flag)
        return self

    def max_iterations(self, limit: Optional[int]) -> 'SessionBuilder':
        """Stop runs after this many steps; None or non-positive means unlimited."""
        self._options['max_iterations'] = limit
        return self

    def eof(self, mode: str) -> 'SessionBuilder':
        self._options['eof'] = mode
        return self

    def config(self) -> SessionConfig:
        return SessionConfig(**self._options)

    def build(self) -> BrainfuckSession:
        return self.config().build()


def _coerce(name: str, value: Any) -> Any:
    kind = OPTION_TYPES[name]
    if kind is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in TRUE_STRINGS + FALSE_STRINGS:
            return value.strip().lower() in TRUE_STRINGS
        raise ConfigError(f"{name} must be a boolean, got {value!r}")
    if kind is int:
        if value is None and name == 'max_iterations':
            return None
        if isinstance(value, bool):
            raise ConfigError(f"{name} must be an integer, got {value!r}")
        try:
            return int(value)
        except (TypeError, ValueError):
            raise ConfigError(f"{name} must be an integer, got {value!r}") from None
    if not isinstance(value, str):
        raise ConfigError(f"{name} must be a string, got {value!r}")
    return value.strip().lower()


def parse_options(data: Dict[str, Any]) -> Dict[str, Any]:
    """Validate a mapping of option name -> value."""
    if not isinstance(data, dict):
        raise ConfigError("configuration must be a mapping of option names to values")
    unknown = sorted(set(data) - set(OPTION_TYPES))
    if unknown:
        raise ConfigError(f"unknown configuration option(s): {', '.join(unknown)}")
    return {name: _coerce(name, value) for name, value in data.items()}


def defaults_from_env(environ=None) -> Dict[str, Any]:
    """Read BF_* environment variables into builder options."""
    environ = os.environ if environ is None else environ
    data = {}
    for name in OPTION_TYPES:
        key = 'BF_' + name.upper()
        if key in environ:
            data[name] = environ[key]
    return parse_options(data)


def load_config_file(path: str) -> Dict[str, Any]:
    """Load options from a YAML file, e.g.

        tape_length: 1000
        optimize: true
        max_iterations: 100000
        eof: zero
    """
    with open(path, 'r') as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    return parse_options(data)
