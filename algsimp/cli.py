#!/usr/bin/env python3
"""
ALGSIMP Command-Line Interface

Provides one-shot, pipe/filter and interactive REPL modes.

Usage:
    algsimp "3 + 2*x"               # Simplify one expression
    algsimp -e "3 + 2*x"            # Same, with an explicit flag
    algsimp -t "(1 + 0) * x"        # Show the rules that fired
    algsimp -o out.typ "x + 2*3"    # Also write a Typst document
    echo "x + 0" | algsimp          # Filter mode, one expression per line
    algsimp                         # Start REPL

REPL Commands:
    :help              Show help
    :trace on|off      Toggle tracing
    :debug on|off      Toggle the structural tree dump
    :quit              Exit
"""

import argparse
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .engine import simplify, write_typst_source
from .parser import parse_expression, ParseError

# Try to import readline for better REPL experience
try:
    import readline
    HAS_READLINE = True
except ImportError:
    HAS_READLINE = False

HISTORY_FILE = Path.home() / ".algsimp_history"
HISTORY_LENGTH = 1000

SWITCH_ON = ("on", "true", "1")
SWITCH_OFF = ("off", "false", "0")


class AlgsimpCompleter:
    """Tab completer for the ALGSIMP REPL."""

    COMMANDS = [
        ":help", ":quit", ":exit", ":q",
        ":trace", ":debug",
    ]

    SWITCH_OPTIONS = ["on", "off"]

    def __init__(self):
        self.matches = []

    def complete(self, text: str, state: int) -> Optional[str]:
        """Return the next possible completion for 'text'."""
        if state == 0:
            line = readline.get_line_buffer() if HAS_READLINE else ""
            self.matches = self.get_matches(text, line)

        try:
            return self.matches[state]
        except IndexError:
            return None

    def get_matches(self, text: str, line: str) -> list:
        """Get list of matches for the current input."""
        line = line.lstrip()

        if line.startswith(":trace ") or line.startswith(":debug "):
            return [s for s in self.SWITCH_OPTIONS if s.startswith(text)]

        if text.startswith(":") or (line.startswith(":") and " " not in line):
            return [c for c in self.COMMANDS if c.startswith(text)]

        return []


def parse_switch(arg: str, current: bool) -> bool:
    """Interpret an on/off argument; an empty or unknown one toggles."""
    arg = arg.lower()
    if arg in SWITCH_ON:
        return True
    if arg in SWITCH_OFF:
        return False
    return not current


class AlgsimpREPL:
    """Interactive REPL for algsimp."""

    def __init__(self, use_readline: bool = True):
        self.trace = False
        self.debug = False
        self.running = True
        self.use_readline = use_readline and HAS_READLINE

        if self.use_readline:
            try:
                readline.read_history_file(HISTORY_FILE)
            except OSError:
                pass
            readline.set_history_length(HISTORY_LENGTH)

            self.completer = AlgsimpCompleter()
            readline.set_completer(self.completer.complete)
            readline.parse_and_bind("tab: complete")

            # Don't break on colons so commands complete as one word
            readline.set_completer_delims(" \t\n")

    def save_history(self):
        """Save readline history."""
        if self.use_readline:
            try:
                readline.write_history_file(HISTORY_FILE)
            except OSError as e:
                print(f"Could not save history to {HISTORY_FILE}: {e}", file=sys.stderr)

    def handle_command(self, line: str) -> Optional[str]:
        """
        Handle a REPL command (starts with :).

        Returns a message to print, or None.
        """
        parts = line[1:].split(None, 1)
        if not parts:
            return "Unknown command. Type :help for help."

        cmd = parts[0].lower()
        arg = parts[1].strip() if len(parts) > 1 else ""

        if cmd == "help":
            return self.help_text()

        elif cmd in ("quit", "exit", "q"):
            self.running = False
            return None

        elif cmd == "trace":
            self.trace = parse_switch(arg, self.trace)
            return f"Tracing {'enabled' if self.trace else 'disabled'}"

        elif cmd == "debug":
            self.debug = parse_switch(arg, self.debug)
            return f"Tree dump {'enabled' if self.debug else 'disabled'}"

        else:
            return f"Unknown command: {cmd}. Type :help for help."

    def help_text(self) -> str:
        """Return help text."""
        return """ALGSIMP REPL Commands:
  :help              Show this help
  :trace on|off      Toggle tracing
  :debug on|off      Toggle the structural tree dump
  :quit              Exit

Syntax:
  3 + 2*x            Numbers, x, y, z, +, -, * and parentheses
  (x + 1) * y        Parentheses group sub-expressions
  # comment          Ignored
"""

    def simplify_source(self, source: str):
        """
        Parse and simplify one expression.

        Returns:
            (result, trace), where trace is None unless tracing is on

        Raises:
            ParseError: If the source does not parse.
        """
        expr = parse_expression(source)
        if self.trace:
            return simplify(expr, trace=True)
        return simplify(expr), None

    def format_result(self, result, trace=None) -> str:
        """Format a simplified expression with the enabled diagnostics."""
        lines = [result.render_to_text()]
        if trace:
            lines.append(trace.format("rules"))
        if self.debug:
            lines.append(result.structural_debug().rstrip("\n"))
        return "\n".join(lines)

    def evaluate(self, source: str) -> str:
        """Simplify one expression and format the output."""
        return self.format_result(*self.simplify_source(source))

    def process_line(self, line: str) -> Optional[str]:
        """
        Process a single line of input.

        Returns the result to print, or None.
        """
        line = line.strip()

        if not line or line.startswith("#"):
            return None

        if line.startswith(":"):
            return self.handle_command(line)

        try:
            return self.evaluate(line)
        except ParseError as e:
            return f"Error: {e}"

    def run(self):
        """Run the REPL loop."""
        print(f"ALGSIMP {__version__} - Algebraic Simplification")
        print("Type :help for help, :quit to exit")
        print()

        while self.running:
            try:
                line = input("algsimp> ")
                result = self.process_line(line)
                if result:
                    print(result)

            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                print()
                continue

        self.save_history()


class ExpressionRunner:
    """Runs one-shot and filter modes."""

    def __init__(self, typst_path: Optional[Path] = None):
        self.repl = AlgsimpREPL(use_readline=False)
        self.typst_path = typst_path

    def run_expression(self, source: str) -> int:
        """
        Simplify a single expression and print it.

        Returns:
            Exit code (0 for success)
        """
        try:
            result, trace = self.repl.simplify_source(source)
        except ParseError as e:
            print(f"Error: {e}", file=sys.stderr)
            return 1

        print(self.repl.format_result(result, trace))

        if self.typst_path is not None:
            return self.write_typst(result)
        return 0

    def write_typst(self, result) -> int:
        """Write the simplified expression as a Typst document."""
        try:
            write_typst_source(result, self.typst_path)
        except OSError as e:
            print(f"Error writing {self.typst_path}: {e}", file=sys.stderr)
            return 1
        return 0

    def run_stdin(self) -> int:
        """
        Read expressions from stdin and simplify them.

        Returns:
            Exit code (0 for success)
        """
        for lineno, line in enumerate(sys.stdin, 1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            try:
                print(self.repl.evaluate(line))
            except ParseError as e:
                print(f"<stdin>:{lineno}: Error: {e}", file=sys.stderr)
                return 1

        return 0


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="algsimp",
        description="ALGSIMP - Algebraic Simplification of arithmetic expressions",
        epilog="Examples:\n"
               "  algsimp '3 + 2*x'              Simplify an expression\n"
               "  algsimp -t '(1 + 0) * x'       Show the rules applied\n"
               "  algsimp -o out.typ 'x + 2*3'   Also write a Typst document\n"
               "  echo 'x + 0' | algsimp         Filter mode\n"
               "  algsimp                        Start REPL\n",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "expression",
        nargs="?",
        help="Expression to simplify"
    )

    parser.add_argument(
        "-e", "--expr",
        help="Expression to simplify (alternative to the positional argument)"
    )

    parser.add_argument(
        "-t", "--trace",
        action="store_true",
        help="Print the simplification rules that fired"
    )

    parser.add_argument(
        "-d", "--debug",
        action="store_true",
        help="Print the structural tree of the result"
    )

    parser.add_argument(
        "-o", "--typst",
        metavar="FILE",
        help="Write the simplified expression as a Typst document"
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (suppress non-essential output)"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    args = parser.parse_args(argv)

    if args.expression and args.expr:
        parser.error("give the expression either positionally or with -e, not both")

    runner = ExpressionRunner(Path(args.typst) if args.typst else None)
    runner.repl.trace = args.trace
    runner.repl.debug = args.debug

    source = args.expr if args.expr is not None else args.expression

    if source is not None:
        code = runner.run_expression(source)
        if code == 0 and args.typst and not args.quiet:
            print(f"Wrote {args.typst}", file=sys.stderr)
        sys.exit(code)

    elif args.typst:
        parser.error("-o/--typst needs an expression")

    elif not sys.stdin.isatty():
        # Pipe/filter mode (stdin is not a terminal)
        sys.exit(runner.run_stdin())

    else:
        repl = AlgsimpREPL()
        repl.trace = args.trace
        repl.debug = args.debug
        repl.run()


if __name__ == "__main__":
    main()
