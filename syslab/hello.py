"""Greet the user with information about the running system."""

from __future__ import annotations

import argparse
import os
import platform
import sys
from collections.abc import Sequence

NO_USER_MESSAGE = "User information not returned by the operating system."


def system_greeting() -> str:
    """Return a greeting built from the system name, host, release, version and machine."""
    info = platform.uname()
    return (
        f"Hello {info.system}:{info.node}:{info.release}:"
        f"{info.version}:z{info.machine}"
    )


def user_line() -> str:
    """Return the name of the current user, or a message when it is unknown."""
    user = os.environ.get("USER")
    return user if user is not None else NO_USER_MESSAGE


def main(argv: Sequence[str] | None = None) -> int:
    """Print the system greeting and the current user."""
    parser = argparse.ArgumentParser(description="Print system and user information.")
    parser.parse_args(argv)
    print(system_greeting())
    line = user_line()
    if line == NO_USER_MESSAGE:
        sys.stdout.write(line)
    else:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())