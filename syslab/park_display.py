"""Drawing and running the Jurassic Park simulation.

Each round the park is drawn as a 25-line picture holding the counters,
the drivers, the tour cars and two wandering dinosaurs. The cars are
then moved one step.
"""

from __future__ import annotations

import argparse
import random
import sys
import time
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import datetime
from typing import TextIO

from syslab.park import (
    LOAD_LOCATION,
    NUM_CARS,
    NUM_VISITORS,
    UNLOAD_LOCATION,
    LostVisitorError,
    ParkState,
    check_lost_visitors,
    step_cars,
)

D1_UPPER = 13
D1_LEFT = 45
D1_LOWER = 18
D1_RIGHT = 53
D2_UPPER = 4
D2_LEFT = 53
D2_LOWER = 13
D2_RIGHT = 57

CLEAR_SCREEN = "\033[H\033[2J"
WELCOME = "\n\nWelcome to Jurassic Park\n\n"
SHUTDOWN = "\nJurassic Park is shutting down for the evening!!"
THANK_YOU = "\nThank you for visiting Jurassic Park!!"

# Indexed by driver state + 1: -1 selling tickets, 0 asleep, n driving car n - 1.
_DRIVER_MARKS = "TzABCD"

PARK_TEMPLATE = (
    "                ___Jurassic Park_______________________________________",
    "   Entrance    /            ++++++++++++++++++++++++++++++++++++++++++|",
    "              -             +---------------------------             +|",
    "           # -             /+   /                       \\            +|",
    "            /             | +  |     ************        |           +|",
    "   |********          # >>| +  |     *Cntrl Room*        |           +|",
    "   |*Ticket*              | +  |     * A=# D1=# *        |           +|",
    "   |*Booth *              | +  |     * B=# D2=# *       / \\          +|",
    "   |* T=#  * #            | +  |     * C=# D3=# *      /   -------   +|",
    "   |* P=#  *              | +  |     * D=# D4=# *     /           \\  +|",
    "   |* S=#  *              | +  |     ************    /             | +|",
    "   |********            <<| +   \\                   /              | +|",
    "   |                      | +    -------------------               | +|",
    "   |                       \\+       /   \\                          | +|",
    "   |                        +-------     |                         | +|",
    "   |                        +++++++++++  |                         | +|",
    "   |                                  +  |                         | +|",
    "   |                #      #          +   \\                       /  +|",
    "   |        ******\\ /****\\ /********  +    |                     |   +|",
    "   |        *         *            *  +    |                     |   +|",
    "    \\       *  Gifts  *   Museum   *  +    |                     |   +|",
    "     -      *         *            *  +     \\                   /    +|",
    "    # -     *         *            *  +      -------------------     +|",
    "       \\    ************************  ++++++++++++++++++++++++++++++++|",
    "   Exit \\_____________________________________________________________|",
)

# Screen row, column and drawing style of every track position.
# Style 0 is horizontal, 1 vertical, 2 diagonal right, 3 diagonal left.
_CAR_POSITIONS = (
    (2, 29, 0), (2, 33, 0), (2, 37, 0), (2, 41, 0),
    (2, 45, 0), (2, 49, 0), (2, 53, 0), (4, 57, 1),
    (8, 59, 0), (8, 63, 0),
    (10, 67, 1), (14, 67, 1), (18, 65, 1),
    (22, 61, 0), (22, 57, 0), (22, 53, 0),
    (22, 49, 0), (22, 45, 0), (18, 43, 1), (14, 41, 1),
    (12, 37, 0), (12, 33, 0), (8, 31, 1), (4, 31, 1),
    (8, 55, 3),
    (12, 49, 0), (12, 45, 0), (12, 41, 0),
    (14, 33, 0), (14, 29, 0),
    (10, 26, 1), (8, 26, 1), (6, 26, 1), (4, 26, 1),
)

_Grid = list[list[str]]


def _put(grid: _Grid, row: int, col: int, text: str) -> None:
    if col < 0:
        raise ValueError(f"text {text!r} does not fit before column 0")
    line = grid[row]
    if len(line) < col + len(text):
        line.extend(" " * (col + len(text) - len(line)))
    line[col : col + len(text)] = text


def _put_right(grid: _Grid, row: int, end: int, text: str) -> None:
    _put(grid, row, end - len(text), text)


@dataclass
class Dinosaurs:
    """Position and heading of the two dinosaurs; a negative heading walks left."""

    direction1: int = D1_LEFT
    dy1: int = D1_LOWER
    direction2: int = D2_LEFT
    dy2: int = D1_LOWER - 9

    def _draw(self, grid: _Grid, rng: random.Random) -> None:
        self.dy1 = min(max(self.dy1 + rng.randrange(3) - 1, D1_UPPER), D1_LOWER)
        dy, d = self.dy1, self.direction1
        if d > 0:
            _put(grid, dy, d + 4, "...  /O")
            _put(grid, dy + 1, d, "___/|||\\/")
            _put(grid, dy + 2, d + 3, "x   x")
            self.direction1 += 1
            if self.direction1 > D1_RIGHT:
                self.direction1 = -self.direction1
        else:
            if rng.randrange(3) == 1:
                _put(grid, dy, -d + 4, "...")
                _put(grid, dy + 1, -d + 1, "__/|||\\___")
                _put(grid, dy + 2, -d, "O  x   x")
            else:
                _put(grid, dy, -d, "O\\  ...")
                _put(grid, dy + 1, -d + 2, "\\/|||\\___")
                _put(grid, dy + 2, -d + 3, "x   x")
            self.direction1 += 1
            if self.direction1 > -D1_LEFT:
                self.direction1 = -self.direction1

        self.dy2 = min(max(self.dy2 + rng.randrange(3) - 1, D2_UPPER), D2_LOWER)
        if self.dy2 + 9 >= self.dy1:
            self.dy2 = self.dy1 - 9
        dy, d = self.dy2, self.direction2
        if d > 0:
            _put(grid, dy, d + 7, "_")
            _put(grid, dy + 1, d + 6, "/o\\")
            _put(grid, dy + 2, d + 4, "</ _<")
            _put(grid, dy + 3, d + 3, "</ /")
            _put(grid, dy + 4, d + 2, "</ ==x")
            _put(grid, dy + 5, d + 3, "/  \\")
            _put(grid, dy + 6, d + 2, "//)__)")
            _put(grid, dy + 7, d, "<<< \\_ \\_")
            self.direction2 += 1
            if self.direction2 > D2_RIGHT:
                self.direction2 = -self.direction2
        else:
            _put(grid, dy, -d + 1, "_")
            _put(grid, dy + 1, -d, "/o\\")
            _put(grid, dy + 2, -d, ">_ \\>")
            _put(grid, dy + 3, -d + 2, "\\ \\>")
            _put(grid, dy + 4, -d + 1, "x== \\>")
            _put(grid, dy + 5, -d + 2, "/  \\")
            _put(grid, dy + 6, -d + 1, "(__(\\\\")
            _put(grid, dy + 7, -d, "_/ _/ >>>")
            self.direction2 += 1
            if self.direction2 > -D2_LEFT:
                self.direction2 = -self.direction2


def format_time(now: datetime) -> str:
    """Return ``now`` in the classic asctime form, with no trailing newline."""
    return time.asctime(now.timetuple())


def check_drivers(park: ParkState) -> None:
    """Raise AssertionError if two drivers are busy with the same task."""
    busy = [state for state in park.drivers if state != 0]
    if len(set(busy)) != len(busy):
        raise AssertionError(f"Driver Error: {park.drivers}")


def _draw_car(grid: _Grid, number: int, location: int, passengers: int) -> None:
    row, col, style = _CAR_POSITIONS[location]
    letter = chr(ord("A") + number)
    if style == 0:
        _put(grid, row, col, f"o{letter}o")
    elif style == 1:
        if passengers > 0 and location in (UNLOAD_LOCATION, LOAD_LOCATION):
            middle = chr(ord("0") + passengers)
        else:
            middle = letter
        _put(grid, row, col, "o")
        _put(grid, row + 1, col, middle)
        _put(grid, row + 2, col, "o")
    elif style == 2:
        _put(grid, row, col, "o")
        _put(grid, row + 1, col + 1, letter)
        _put(grid, row + 2, col + 2, "o")
    else:
        _put(grid, row, col, "o")
        _put(grid, row + 1, col - 1, letter)
        _put(grid, row + 2, col - 2, "o")


def render_park(
    park: ParkState, dinosaurs: Dinosaurs, rng: random.Random, now: datetime
) -> str:
    """Draw ``park`` as 25 lines of text, moving the dinosaurs one step."""
    grid: _Grid = [list(line) for line in PARK_TEMPLATE]

    _put_right(grid, 0, len(grid[0]), format_time(now))
    _put_right(grid, 3, 12, str(park.num_outside_park))
    _put(grid, 8, 8, f"{park.num_tickets_available} ")
    _put(grid, 9, 8, f"{park.num_in_park} ")
    _put(grid, 10, 8, str(park.num_rides_taken))
    _put(grid, 8, 13, f"{park.num_in_ticket_line} ")
    _put_right(grid, 17, 21, str(park.num_in_gift_line))
    _put_right(grid, 17, 28, str(park.num_in_museum_line))
    _put_right(grid, 5, 23, str(park.num_in_car_line))
    _put(grid, 21, 17, f"{park.num_in_gift_shop} ")
    _put(grid, 21, 29, f"{park.num_in_museum} ")
    _put_right(grid, 22, 5, str(park.num_exited_park))

    for number, car in enumerate(park.cars):
        _put_right(grid, 6 + number, 42, str(car.passengers))
    for number, state in enumerate(park.drivers):
        if not -1 <= state <= NUM_CARS:
            raise ValueError(f"driver {number} has unknown state {state}")
        _put(grid, 6 + number, 46, _DRIVER_MARKS[state + 1])
    for number, car in enumerate(park.cars):
        _draw_car(grid, number, car.location, car.passengers)

    dinosaurs._draw(grid, rng)
    check_drivers(park)
    return "\n".join("".join(line) for line in grid)


def run_park(
    rounds: int | None, rng: random.Random, out: TextIO
) -> Iterator[ParkState]:
    """Draw the park to ``out`` and move its cars, once per round.

    Yields a copy of the park after every round. With ``rounds`` None the
    park runs until every visitor has left.
    """
    park = ParkState()
    dinosaurs = Dinosaurs()
    out.write(WELCOME)
    done = 0
    while rounds is None or done < rounds:
        check_lost_visitors(park)
        picture = render_park(park.snapshot(), dinosaurs, rng, datetime.now())
        out.write(f"{CLEAR_SCREEN}\n\n{picture}\n")
        step_cars(park, rng)
        done += 1
        yield park.snapshot()
        if park.num_exited_park >= NUM_VISITORS:
            out.write(SHUTDOWN)
            out.write(THANK_YOU)
            break


def main(argv: Sequence[str] | None = None) -> int:
    """Run the park simulation on the terminal."""
    parser = argparse.ArgumentParser(description="Run the Jurassic Park simulation.")
    parser.add_argument("--rounds", type=int, default=None, help="rounds to run")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument(
        "--delay", type=float, default=1.0, help="seconds between frames"
    )
    args = parser.parse_args(argv)
    rng = random.Random(args.seed)
    try:
        for _ in run_park(args.rounds, rng, sys.stdout):
            sys.stdout.flush()
            if args.delay > 0:
                time.sleep(args.delay)
    except (LostVisitorError, AssertionError, RuntimeError) as error:
        print(f"\n{error}", file=sys.stderr)
        return 1
    print()
    return 0


if __name__ == "__main__":
    sys.exit(main())