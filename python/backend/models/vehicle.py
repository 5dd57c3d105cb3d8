"""Vehicle model and the move-descriptor text format."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import StrEnum

from backend.models.errors import InvalidMoveDescriptor, InvalidVehicle


class VehicleType(StrEnum):
    CAR = "car"
    TRUCK = "truck"

    @property
    def length(self) -> int:
        return 2 if self is VehicleType.CAR else 3


class Orientation(StrEnum):
    HORIZONTAL = "h"
    VERTICAL = "v"


class Direction(StrEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def orientation(self) -> Orientation:
        """The vehicle orientation able to slide this way."""
        if self in (Direction.LEFT, Direction.RIGHT):
            return Orientation.HORIZONTAL
        return Orientation.VERTICAL

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]


_DELTAS: dict[Direction, tuple[int, int]] = {
    Direction.UP: (0, -1),
    Direction.DOWN: (0, 1),
    Direction.LEFT: (-1, 0),
    Direction.RIGHT: (1, 0),
}


def parse_type(value: str | VehicleType) -> VehicleType:
    try:
        return VehicleType(value)
    except ValueError:
        raise InvalidVehicle(f"Unknown vehicle type {value!r}.") from None


def parse_orientation(value: str | Orientation) -> Orientation:
    try:
        return Orientation(value)
    except ValueError:
        raise InvalidVehicle(f"Unknown orientation {value!r}.") from None


def parse_direction(value: str | Direction) -> Direction:
    try:
        return Direction(value)
    except ValueError:
        raise InvalidMoveDescriptor(f"Unknown direction {value!r}.") from None


@dataclass(eq=False)
class Vehicle:
    """A car or truck on the board.

    ``x``/``y`` are the 0-based top-left cell. Only the board moves a
    vehicle; type, color and orientation are fixed once it is created.
    Equality is identity, since two vehicles with equal fields on the
    same board are still different objects in its grid.
    """

    id: int
    type: VehicleType
    color: str
    orientation: Orientation
    x: int
    y: int
    width: int = field(default=1, init=False)

    @property
    def length(self) -> int:
        return self.type.length

    @property
    def is_horizontal(self) -> bool:
        return self.orientation is Orientation.HORIZONTAL

    @property
    def label(self) -> str:
        """Two-digit id as printed on console boards and in descriptors."""
        return f"{self.id:02d}"

    def cells(self) -> list[tuple[int, int]]:
        return vehicle_cells(self.orientation, self.length, self.x, self.y)

    def __str__(self) -> str:
        return self.label


def vehicle_cells(
    orientation: Orientation, length: int, x: int, y: int
) -> list[tuple[int, int]]:
    """Cells ``(x, y)`` covered by a vehicle anchored at its top-left cell."""
    if orientation is Orientation.HORIZONTAL:
        return [(x + i, y) for i in range(length)]
    return [(x, y + i) for i in range(length)]


# -- move descriptors ----------------------------------------------------------

_DESCRIPTOR_RE = re.compile(
    r"^(?P<color>.+) \((?P<id>\d{2,})\) (?P<direction>up|down|left|right) (?P<distance>\d+)$"
)


@dataclass(frozen=True)
class Move:
    """One slide: ``red (01) right 4`` moves vehicle 1 four cells right.

    The text form is what the solver reports and what replay code reads.
    """

    color: str
    vehicle_id: int
    direction: Direction
    distance: int

    @classmethod
    def parse(cls, text: str) -> Move:
        match = _DESCRIPTOR_RE.match(text.strip())
        if match is None:
            raise InvalidMoveDescriptor(f"Cannot read move {text!r}.")
        distance = int(match["distance"])
        if distance < 1:
            raise InvalidMoveDescriptor(f"Move {text!r} has no distance.")
        return cls(
            color=match["color"],
            vehicle_id=int(match["id"]),
            direction=Direction(match["direction"]),
            distance=distance,
        )

    def __str__(self) -> str:
        return (
            f"{self.color} ({self.vehicle_id:02d}) "
            f"{self.direction.value} {self.distance}"
        )
