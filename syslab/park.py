"""State and car movement for the Jurassic Park simulation.

The park holds counters for the visitors in each area, the state of the
drivers and the position and load of every tour car. Cars drive around a
track of 34 positions. They load at position 33 and unload at position 30,
and no two cars may share a position.
"""

from __future__ import annotations

import copy
import random
from dataclasses import dataclass, field

NUM_CARS = 4
NUM_DRIVERS = 4
NUM_SEATS = 3
NUM_VISITORS = NUM_SEATS * 20
MAX_IN_PARK = 20
MAX_TICKETS = NUM_CARS * NUM_SEATS
MAX_IN_MUSEUM = 5
MAX_IN_GIFTSHOP = 2

TRACK_LENGTH = 34
LOAD_LOCATION = 33
UNLOAD_LOCATION = 30

SEAT_FILLED = "seat_filled"
RIDE_OVER = "ride_over"


class LostVisitorError(AssertionError):
    """Raised when the visitors found in the park do not match its count."""


@dataclass
class Car:
    """A tour car: its place on the track and how many ride in it."""

    location: int
    passengers: int = 0


def _initial_cars() -> list[Car]:
    return [Car(location=LOAD_LOCATION - number) for number in range(NUM_CARS)]


@dataclass
class ParkState:
    """Every counter of the park, with the drivers and the cars."""

    num_outside_park: int = 0
    num_in_park: int = 0
    num_tickets_available: int = MAX_TICKETS
    num_rides_taken: int = 0
    num_exited_park: int = 0
    num_in_ticket_line: int = 0
    num_in_museum_line: int = 0
    num_in_museum: int = 0
    num_in_car_line: int = 0
    num_in_cars: int = 0
    num_in_gift_line: int = 0
    num_in_gift_shop: int = 0
    # Driver state: -1 selling tickets, 0 asleep, n driving car n - 1.
    drivers: list[int] = field(default_factory=lambda: [0] * NUM_DRIVERS)
    cars: list[Car] = field(default_factory=_initial_cars)

    def snapshot(self) -> ParkState:
        """Return an independent copy of the park."""
        return copy.deepcopy(self)

    def visitors_found(self) -> int:
        """Count the visitors in every line, attraction and car."""
        return (
            self.num_in_ticket_line
            + self.num_in_museum_line
            + self.num_in_museum
            + self.num_in_car_line
            + self.num_in_cars
            + self.num_in_gift_line
            + self.num_in_gift_shop
        )


def _next_location(park: ParkState, car: Car, rng: random.Random) -> int:
    location = car.location
    if location == 7:
        # First crossroads: the bridge loop or the long way round.
        return 24 if rng.randrange(2) else 8
    if location == 20:
        # Second crossroads: take the short route when no one is waiting.
        if park.num_in_car_line == 0:
            return 28
        return 28 if rng.randrange(3) else 21
    if location == 23:
        return 1
    if location == 27:
        return 20
    if location == UNLOAD_LOCATION:
        return location + 1 if car.passengers == 0 else location
    if location == LOAD_LOCATION:
        return 0 if car.passengers == NUM_SEATS else location
    return location + 1


def make_move(park: ParkState, car: int, rng: random.Random) -> bool:
    """Move car number ``car`` one step if it can; return whether it moved.

    A car stays put when its next position is taken by another car, while
    it waits for passengers at the loading point, and while it still has
    passengers at the unloading point.
    """
    this_car = park.cars[car]
    target = _next_location(park, this_car, rng)
    if any(
        other.location == target
        for number, other in enumerate(park.cars)
        if number != car
    ):
        return False
    moved = this_car.location != target
    this_car.location = target
    return moved


def order_cars(park: ParkState) -> list[int]:
    """Return the car numbers ordered by location, furthest along first."""
    return sorted(
        range(len(park.cars)), key=lambda number: park.cars[number].location, reverse=True
    )


def check_cars(park: ParkState) -> None:
    """Raise RuntimeError if two cars share a position."""
    locations = [car.location for car in park.cars]
    if len(set(locations)) != len(locations):
        raise RuntimeError("Problem: " + " ".join(str(loc) for loc in locations))


def step_cars(park: ParkState, rng: random.Random) -> list[tuple[str, int]]:
    """Move every car once, loading and unloading those that stay put.

    Returns the events in the order they happened: ``(SEAT_FILLED, car)``
    when a passenger takes a seat, ``(RIDE_OVER, car)`` when a car has
    been emptied at the unloading point.
    """
    events: list[tuple[str, int]] = []
    for number in order_cars(park):
        if make_move(park, number, rng):
            continue
        car = park.cars[number]
        if (
            car.location == LOAD_LOCATION
            and car.passengers < NUM_SEATS
            and park.num_in_car_line
        ):
            events.append((SEAT_FILLED, number))
            car.passengers += 1
        if car.location == UNLOAD_LOCATION and car.passengers > 0:
            park.num_rides_taken += 1
            car.passengers -= 1
            if car.passengers == 0:
                events.append((RIDE_OVER, number))
        check_cars(park)
    return events


def check_lost_visitors(park: ParkState) -> None:
    """Raise LostVisitorError if the visitors found differ from the park count."""
    found = park.visitors_found()
    if found != park.num_in_park:
        raise LostVisitorError(
            "Someone is lost!!! "
            f"There are {park.num_in_park} visitors in the park, "
            f"but I can only find {found} of them! "
            f"numInTicketLine={park.num_in_ticket_line} "
            f"numInMuseumLine={park.num_in_museum_line} "
            f"numInMuseum={park.num_in_museum} "
            f"numInCarLine={park.num_in_car_line} "
            f"numInCars={park.num_in_cars} "
            f"numInGiftLine={park.num_in_gift_line} "
            f"numInGiftShop={park.num_in_gift_shop}"
        )