#!/usr/bin/env python3
"""
Command line runner for Brainfuck programs.

    python -m bfsession hello.bf
    python -m bfsession -e ',[.,]' --input "echo me"
    python -m bfsession --demo
"""

import argparse
import logging
import sys

from dotenv import load_dotenv

from .brainfuck import EOF_MODES
from .brainfuck_debugger import BrainfuckDebugger
from .config import SessionBuilder, defaults_from_env, load_config_file
from .core.errors import BrainfuckError
from .core.streams import BufferSink, StreamSink, StreamSource

HELLO_WORLD = ("++++++++[>++++[>++>+++>+++>+<<<<-]>+>+>->>+[<]<-]"
               ">>.>---.+++++++..+++.>>.<-.<.+++.------.--------.>>+.>++.")


def run_demo() -> int:
    """Run Hello World plain and optimized and report both iteration counts."""
    for optimize in (False, True):
        sink = BufferSink()
        session = SessionBuilder(HELLO_WORLD).output(sink).optimize(optimize).build()
        session.run()
        print(sink.text(), end="")
        print(f"Iterations: {session.iterations}")
        if not optimize:
            print("---")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="bfsession", description="Run a Brainfuck program")
    ap.add_argument("program", nargs="?", help="Path to a Brainfuck source file")
    ap.add_argument("-e", "--eval", dest="code", default=None, help="Program text given on the command line")
    ap.add_argument("--input", default=None, help="Input text for ',' (default: read stdin)")
    ap.add_argument("--optimize", action="store_true", default=None, help="Fold runs of identical instructions")
    ap.add_argument("--tape-length", type=int, default=None)
    ap.add_argument("--max-iterations", type=int, default=None, help="Stop after this many steps (<= 0: unlimited)")
    ap.add_argument("--eof", choices=EOF_MODES, default=None, help="What ',' does at end of input")
    ap.add_argument("--config", default="", help="YAML file with session options")
    ap.add_argument("--stats", action="store_true", help="Print iteration count to stderr when done")
    ap.add_argument("--debug", action="store_true", help="Step through the program, printing the tape")
    ap.add_argument("--debug-steps", type=int, default=100)
    ap.add_argument("--demo", action="store_true", help="Run the built-in Hello World demo")
    ap.add_argument("-v", "--verbose", action="store_true")
    return ap


def main(argv=None) -> int:
    load_dotenv()
    ap = build_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")

    stdout = sys.stdout.buffer
    if args.demo:
        return run_demo()

    if args.code is not None:
        source = args.code
    elif args.program:
        try:
            with open(args.program, "r") as f:
                source = f.read()
        except OSError as e:
            print(f"❌ Cannot read {args.program}: {e.strerror or e}", file=sys.stderr)
            return 1
    else:
        ap.error("a program file or -e CODE is required")

    try:
        options = defaults_from_env()
        if args.config:
            options.update(load_config_file(args.config))
        cli_options = {
            "tape_length": args.tape_length,
            "optimize": args.optimize,
            "max_iterations": args.max_iterations,
            "eof": args.eof,
        }
        options.update({k: v for k, v in cli_options.items() if v is not None})

        source_in = args.input if args.input is not None else StreamSource(sys.stdin.buffer)
        builder = SessionBuilder(source, **options).input(source_in)

        if args.debug:
            config = builder.config()
            debugger = BrainfuckDebugger(config.source, tape_length=config.tape_length,
                                         optimize=config.optimize, input=config.input,
                                         eof=config.eof)
            debugger.debug_run(args.debug_steps)
            return 1 if debugger.error is not None else 0

        session = builder.output(StreamSink(stdout, flush=False)).build()
        if session.error is not None:
            print(f"❌ {session.error}", file=sys.stderr)
            return 1
        session.run()
    except (BrainfuckError, OSError) as e:
        print(f"❌ {e}", file=sys.stderr)
        return 1
    finally:
        stdout.flush()

    if args.stats:
        suffix = " (iteration cap reached)" if session.hit_iteration_cap else ""
        print(f"Iterations: {session.iterations}{suffix}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
