"""Exceptions raised by the Rush Hour board model.

Every error is raised *before* the board is mutated, so a caller that
catches one can keep using the board as it was.
"""

from __future__ import annotations


class RushHourError(Exception):
    """Base class for every Rush Hour error."""


# -- structural ----------------------------------------------------------------


class InvalidVehicle(RushHourError):
    """The vehicle type or orientation is not recognised."""

    def __init__(self, detail: str = "unrecognised vehicle") -> None:
        super().__init__(detail)


class InvalidFirstVehicle(RushHourError):
    """The roster must start with (and keep) the red goal car."""

    def __init__(self, color: str | None = None) -> None:
        msg = "The first vehicle on the board must be the red car"
        if color is not None:
            msg += f" (got {color!r})"
        super().__init__(msg + ".")


class InvalidVehicleColor(RushHourError):
    """A vehicle of this color is already on the board."""

    def __init__(self, color: str) -> None:
        self.color = color
        super().__init__(f"A vehicle colored {color!r} is already on the board.")


class TooManyVehicles(RushHourError):
    """The compact state encoding holds at most 99 vehicles."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"A board holds at most {limit} vehicles.")


# -- geometric -----------------------------------------------------------------


class InvalidBoardSize(RushHourError, ValueError):
    """Board dimensions outside what the state encoding supports."""

    def __init__(self, width: int, height: int, limit: int) -> None:
        super().__init__(
            f"Board size {width}×{height} is not supported "
            f"(each side must be between 1 and {limit})."
        )


class OffGameBoard(RushHourError):
    """A vehicle cell would fall outside the board."""

    def __init__(self, x: int, y: int) -> None:
        self.x = x
        self.y = y
        # Reported 1-based, the way players count rows and columns.
        super().__init__(
            f"Location (row {y + 1}, column {x + 1}) is off the game board."
        )


class VehicleOverlap(RushHourError):
    """A vehicle would be placed on top of another one."""

    def __init__(self, x: int, y: int, color: str) -> None:
        self.x = x
        self.y = y
        self.color = color
        super().__init__(
            f"The {color} vehicle at (row {y + 1}, column {x + 1}) "
            f"overlaps another vehicle."
        )


class RedCarException(RushHourError):
    """The red car must sit horizontally on the exit row."""

    def __init__(self, row: int) -> None:
        super().__init__(
            f"The red car must be horizontal on row {row + 1} so it can exit."
        )


# -- movement ------------------------------------------------------------------


class IllegalBoardMove(RushHourError):
    """The requested slide is blocked, off the board or along the wrong axis."""

    def __init__(self, color: str, direction: str, distance: int) -> None:
        self.color = color
        self.direction = direction
        self.distance = distance
        super().__init__(f"The {color} vehicle cannot move {direction} {distance}.")


class VehicleDoesNotExist(RushHourError):
    """Lookup of a vehicle that is not on the board."""

    def __init__(self, detail: str = "The vehicle does not exist on the board.") -> None:
        super().__init__(detail)


# -- encodings -----------------------------------------------------------------


class StateEncodingError(RushHourError, ValueError):
    """A state key is malformed or cannot represent the board."""


class InvalidMoveDescriptor(RushHourError, ValueError):
    """A move descriptor does not read ``<color> (<id>) <direction> <n>``."""


class LevelFormatError(RushHourError, ValueError):
    """A level file does not follow the count + 5-lines-per-vehicle layout.

    ``line`` is the 1-based line where the problem was found. A file that
    ends early reports the first missing line.
    """

    def __init__(self, message: str, line: int | None = None) -> None:
        self.line = line
        if line is not None:
            message = f"line {line}: {message}"
        super().__init__(message)
