"""A very small interactive shell.

Each input line may hold several commands separated by ``;``. Every
command is split on spaces and run as a child process, one after another.
The word ``quit`` on a line of its own ends the session.
"""

from __future__ import annotations

import argparse
import subprocess
import sys
from collections.abc import Sequence
from typing import TextIO

INPUT_MAX = 256
CMD_MAX = 5
PROMPT = "$> "
QUIT_WORD = "quit"


class ShellError(Exception):
    """Raised when input cannot be read or a line cannot be parsed."""


def read_command(stream: TextIO) -> str:
    """Read one line of at most ``INPUT_MAX - 1`` characters from ``stream``.

    The trailing newline, if any, is removed. A longer line is cut and its
    remainder is left in the stream for the next read.
    """
    line = stream.readline(INPUT_MAX - 1)
    if not line:
        raise ShellError("Unable to read user input")
    return line[:-1] if line.endswith("\n") else line


def parse_commands(line: str) -> list[str]:
    """Split ``line`` on ``;`` into at most ``CMD_MAX`` non-empty commands."""
    commands = [part for part in line.split(";") if part]
    if len(commands) > CMD_MAX:
        raise ShellError("Too many commands")
    return commands


def split_arguments(command: str) -> list[str]:
    """Split ``command`` on spaces, ignoring runs of spaces."""
    return [word for word in command.split(" ") if word]


def run_command(args: Sequence[str]) -> int:
    """Run ``args`` as a child process, wait for it and return its exit status."""
    if not args:
        raise ShellError("empty command")
    sys.stdout.flush()
    try:
        completed = subprocess.run(list(args), check=False)
    except OSError as error:
        print(f"Command not found: {args[0]}")
        print(f"Exec failed: {error.strerror or error}", file=sys.stderr)
        return 1
    return completed.returncode


def main(argv: Sequence[str] | None = None) -> int:
    """Run the read-parse-execute loop on standard input."""
    parser = argparse.ArgumentParser(description="A very small interactive shell.")
    parser.parse_args(argv)

    while True:
        sys.stdout.write(PROMPT)
        sys.stdout.flush()
        try:
            line = read_command(sys.stdin)
        except ShellError as error:
            print(error, file=sys.stderr)
            return 1

        quitting = line == QUIT_WORD
        if quitting:
            print("Quitting...")

        try:
            commands = parse_commands(line)
        except ShellError as error:
            print(f"\n{error}", file=sys.stderr)
            return 1

        if quitting:
            return 0

        for command in commands:
            args = split_arguments(command)
            if args:
                run_command(args)


if __name__ == "__main__":
    sys.exit(main())