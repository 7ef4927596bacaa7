#!/usr/bin/env python3
"""
MATHCAT Command-Line Interface

Provides an interactive calculator REPL, script execution, and pipe/filter
modes.

Usage:
    mathcat                         # Start REPL
    mathcat script.mc               # Run script (one expression per line)
    mathcat -e "2 ** 10 / 5"        # Evaluate expression
    mathcat -m hex -e "255"         # Print result as 0xff
    echo "a = 2" | mathcat          # Filter mode

REPL Commands:
    :help              Show help
    :vars              List variables
    :funcs             List functions
    :reset             Forget all assigned variables
    :mode NAME         Set output mode (decimal, hex, binary, octal)
    :precision N       Set decimal places for non-integer results
    :quit              Exit
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from . import __version__
from .errors import MathcatError
from .evaluator import Evaluator
from .functions import function_names
from .rational import MODES, format_decimal, format_result

# Try to import readline for better REPL experience
try:
    import readline
    HAS_READLINE = True
except ImportError:
    HAS_READLINE = False

logger = logging.getLogger(__name__)

DEFAULT_PRECISION = 6
HISTORY_FILE = Path.home() / ".mathcat_history"


class MathcatCompleter:
    """Tab completer for the MATHCAT REPL."""

    COMMANDS = [
        ":help", ":quit", ":exit", ":q",
        ":vars", ":funcs", ":reset",
        ":mode", ":precision",
    ]

    def __init__(self, repl: 'MathcatREPL'):
        self.repl = repl
        self.matches = []

    def complete(self, text: str, state: int) -> Optional[str]:
        """Return the next possible completion for 'text'."""
        if state == 0:
            line = readline.get_line_buffer() if HAS_READLINE else ""
            self.matches = self._get_matches(text, line)

        try:
            return self.matches[state]
        except IndexError:
            return None

    def _get_matches(self, text: str, line: str) -> list:
        """Get list of matches for the current input."""
        line = line.lstrip()

        if line.startswith(":mode "):
            return [m for m in MODES if m.startswith(text)]

        if text.startswith(":") or (line.startswith(":") and " " not in line):
            return [c for c in self.COMMANDS if c.startswith(text)]

        # Expression context: variables and functions
        names = sorted(self.repl.evaluator.variables) + function_names()
        return [n for n in names if n.startswith(text)] if text else []


def count_parens(text: str) -> int:
    """Count unbalanced parentheses. Returns >0 if more open than close."""
    depth = 0
    for c in text:
        if c == '#':
            break
        if c == '(':
            depth += 1
        elif c == ')':
            depth -= 1
    return depth


class MathcatREPL:
    """Interactive calculator REPL."""

    def __init__(self, mode: str = "decimal", precision: int = DEFAULT_PRECISION):
        self.evaluator = Evaluator()
        self.mode = mode
        self.precision = precision
        self.running = True
        self.multi_line_buffer = ""

        # Set up readline history and completion
        if HAS_READLINE:
            self.history_file = HISTORY_FILE
            try:
                readline.read_history_file(self.history_file)
            except (FileNotFoundError, OSError):
                pass
            readline.set_history_length(1000)

            self.completer = MathcatCompleter(self)
            readline.set_completer(self.completer.complete)
            readline.parse_and_bind("tab: complete")
            readline.set_completer_delims(" \t\n()+-*/%&|^~<>=!,")

    def save_history(self):
        """Save readline history."""
        if HAS_READLINE:
            try:
                readline.write_history_file(self.history_file)
            except OSError as e:
                logger.warning("Could not save history to %s: %s", self.history_file, e)

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

        elif cmd == "quit" or cmd == "exit" or cmd == "q":
            self.running = False
            return None

        elif cmd == "vars":
            return "\n".join(
                f"{name} = {format_decimal(value, self.precision)}"
                for name, value in sorted(self.evaluator.variables.items())
            )

        elif cmd == "funcs":
            return " ".join(function_names())

        elif cmd == "reset":
            self.evaluator.reset()
            return "Variables reset"

        elif cmd == "mode":
            if arg.lower() in MODES:
                self.mode = arg.lower()
                return f"Mode set to: {self.mode}"
            return f"Unknown mode. Options: {', '.join(MODES)}"

        elif cmd == "precision":
            try:
                precision = int(arg)
            except ValueError:
                return "Usage: :precision N"
            if precision < 0:
                return "Precision must be non-negative"
            self.precision = precision
            return f"Precision set to: {self.precision}"

        else:
            return f"Unknown command: {cmd}. Type :help for help."

    def help_text(self) -> str:
        """Return help text."""
        return """MATHCAT REPL Commands:
  :help              Show this help
  :vars              List all variables
  :funcs             List all functions
  :reset             Forget assigned variables
  :mode NAME         Output mode (decimal, hex, binary, octal)
  :precision N       Decimal places for non-integer results
  :quit              Exit

Syntax:
  a = 2 ** 10                 Assign (also += -= *= /= **= %= &= |= ^= <<= >>=)
  max(a, 3) % 7               Call a function
  0xff & 0b1010 | 0o7         Hex, binary and octal literals
  1 + 1  # comment            Comments run to the end of the line
"""

    def process_line(self, line: str) -> Optional[str]:
        """
        Process a single line of input.

        Returns the result to print, or None.
        """
        line = line.strip()

        # Empty line or comment
        if not line or line.startswith("#"):
            return None

        if line.startswith(":"):
            return self.handle_command(line)

        try:
            result = self.evaluator.run(line)
        except MathcatError as e:
            return f"Error: {e}"

        return format_result(result, self.mode, self.precision)

    def run(self):
        """Run the REPL loop."""
        print(f"MATHCAT {__version__} - exact rational calculator")
        print("Type :help for help, :quit to exit")
        print()

        while self.running:
            try:
                prompt = "...... " if self.multi_line_buffer else "mc> "
                line = input(prompt)

                if self.multi_line_buffer:
                    self.multi_line_buffer += " " + line
                else:
                    self.multi_line_buffer = line

                # Keep reading while parentheses are open
                if count_parens(self.multi_line_buffer) > 0:
                    continue

                complete_input = self.multi_line_buffer
                self.multi_line_buffer = ""

                result = self.process_line(complete_input)
                if result:
                    print(result)

            except EOFError:
                print()
                break
            except KeyboardInterrupt:
                if self.multi_line_buffer:
                    print("\nInput cancelled")
                    self.multi_line_buffer = ""
                else:
                    print()
                continue

        self.save_history()


class ScriptRunner:
    """Runs expressions from scripts, the command line, or stdin."""

    def __init__(self, mode: str = "decimal", precision: int = DEFAULT_PRECISION):
        self.repl = MathcatREPL(mode, precision)

    def run_script(self, path: Path, quiet: bool = False) -> int:
        """
        Run a script file, one expression or command per line.

        Returns:
            Exit code (0 for success)
        """
        try:
            lines = path.read_text().splitlines()
        except OSError as e:
            print(f"Error reading {path}: {e}", file=sys.stderr)
            return 1

        for lineno, line in enumerate(lines, 1):
            result = self.repl.process_line(line)
            if result is None:
                continue
            if result.startswith("Error") or result.startswith("Unknown"):
                print(f"{path}:{lineno}: {result}", file=sys.stderr)
                return 1
            if not quiet and not line.strip().startswith(":"):
                print(result)

        return 0

    def run_expression(self, expr_str: str) -> int:
        """
        Evaluate a single expression.

        Returns:
            Exit code (0 for success)
        """
        result = self.repl.process_line(expr_str)
        if result:
            if result.startswith("Error"):
                print(result, file=sys.stderr)
                return 1
            print(result)
        return 0

    def run_stdin(self) -> int:
        """
        Read expressions from stdin and evaluate them.

        Returns:
            Exit code (0 for success)
        """
        for line in sys.stdin:
            result = self.repl.process_line(line)
            if result:
                if result.startswith("Error"):
                    print(result, file=sys.stderr)
                    return 1
                print(result)

        return 0


def main(argv=None):
    """Main entry point."""
    parser = argparse.ArgumentParser(
        prog="mathcat",
        description="MATHCAT - exact rational expression calculator",
        epilog="Examples:\n"
               "  mathcat                        Start REPL\n"
               "  mathcat script.mc              Run script\n"
               "  mathcat -e '2 ** 3 ** 2'       Evaluate expression\n"
               "  mathcat -m hex -e '255'        Print result in hex\n"
               "  echo 'fact(20)' | mathcat      Filter mode\n",
        formatter_class=argparse.RawDescriptionHelpFormatter
    )

    parser.add_argument(
        "script",
        nargs="?",
        help="Script file to run, one expression per line"
    )

    parser.add_argument(
        "-e", "--expr",
        help="Evaluate a single expression"
    )

    parser.add_argument(
        "-p", "--precision",
        type=int,
        default=DEFAULT_PRECISION,
        help="Decimal places used for non-integer results (default: 6)"
    )

    parser.add_argument(
        "-m", "--mode",
        default="decimal",
        choices=list(MODES),
        help="Output mode for results"
    )

    parser.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (suppress script results)"
    )

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Log evaluator activity to stderr"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.precision < 0:
        parser.error("precision must be non-negative")

    runner = ScriptRunner(args.mode, args.precision)

    if args.script:
        sys.exit(runner.run_script(Path(args.script), quiet=args.quiet))

    elif args.expr is not None:
        sys.exit(runner.run_expression(args.expr))

    elif not sys.stdin.isatty():
        sys.exit(runner.run_stdin())

    else:
        runner.repl.run()


if __name__ == "__main__":
    main()
