"""An unbounded stack machine that holds integers.

Values are pushed onto the top of the stack. The arithmetic operations
take the two topmost values off and push their result. ``rotate`` moves
the top value down to a given depth.
"""

from __future__ import annotations

import contextlib
import sys
from collections.abc import Iterator, Sequence


class StackError(IndexError):
    """Raised when an operation cannot be carried out on the stack."""


class StackMachine:
    """A stack of integers with arithmetic and rotation operations."""

    def __init__(self) -> None:
        # The last element of the list is the top of the stack.
        self._items: list[int] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[int]:
        """Yield the values from the top of the stack to the bottom."""
        return reversed(self._items)

    def __repr__(self) -> str:
        return f"StackMachine({list(self)!r})"

    def push(self, value: int) -> None:
        """Place ``value`` on top of the stack."""
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(f"stack holds integers only, not {type(value).__name__}")
        self._items.append(value)

    def pop(self) -> int:
        """Remove the top value and return it."""
        if not self._items:
            raise StackError("pop from an empty stack")
        return self._items.pop()

    def top(self) -> int:
        """Return the top value without removing it."""
        if not self._items:
            raise StackError("top of an empty stack")
        return self._items[-1]

    def clear(self) -> None:
        """Remove every value; the stack can be used again afterwards."""
        self._items.clear()

    def _take_two(self, operation: str) -> tuple[int, int]:
        if len(self._items) < 2:
            raise StackError(f"{operation} needs at least 2 elements on the stack")
        first = self._items.pop()
        second = self._items.pop()
        return first, second

    def add(self) -> int:
        """Replace the top two values by their sum and return it."""
        first, second = self._take_two("add")
        result = first + second
        self._items.append(result)
        return result

    def sub(self) -> int:
        """Replace the top two values by top minus second and return it."""
        first, second = self._take_two("sub")
        result = first - second
        self._items.append(result)
        return result

    def mult(self) -> int:
        """Replace the top two values by their product and return it."""
        first, second = self._take_two("mult")
        result = first * second
        self._items.append(result)
        return result

    def rotate(self, depth: int) -> None:
        """Move the top value down to position ``depth``.

        Every value above that position moves up one place. A depth of 1
        leaves the stack unchanged.
        """
        if depth < 1:
            raise StackError("rotation depth must be at least 1")
        if depth > len(self._items):
            raise StackError(
                f"rotation depth {depth} exceeds stack size {len(self._items)}"
            )
        top = self._items.pop()
        self._items.insert(len(self._items) - depth + 1, top)

    def format(self) -> str:
        """Return the printable listing of the stack, top first."""
        body = "".join(f"{value} \n" for value in self)
        return f"==Stack Contents==\nTop -> {body}"


def main(argv: Sequence[str] | None = None) -> int:
    """Run a short demonstration of the stack machine."""
    stack = StackMachine()

    def show() -> None:
        sys.stdout.write(stack.format())
        if not len(stack):
            sys.stdout.write("\n")

    def attempt(operation, *args) -> None:
        with contextlib.suppress(StackError):
            operation(*args)

    for value in (2, 3, 4):
        stack.push(value)
    show()

    attempt(stack.pop)
    show()
    attempt(stack.add)
    show()

    value = 0
    with contextlib.suppress(StackError):
        value = stack.top()
    print(value)

    stack.push(10)
    stack.push(11)
    show()
    attempt(stack.mult)
    show()

    stack.push(10)
    stack.push(11)
    attempt(stack.rotate, 3)
    show()
    attempt(stack.rotate, 5)
    show()

    stack.clear()
    show()
    return 0


if __name__ == "__main__":
    sys.exit(main())