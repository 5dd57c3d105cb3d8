from backend.models.board import (
    DEFAULT_HEIGHT,
    DEFAULT_WIDTH,
    EXIT_ROW,
    GOAL_COLOR,
    Board,
)
from backend.models.errors import RushHourError
from backend.models.state import BoardState
from backend.models.vehicle import Direction, Move, Orientation, Vehicle, VehicleType

__all__ = [
    "DEFAULT_HEIGHT",
    "DEFAULT_WIDTH",
    "EXIT_ROW",
    "GOAL_COLOR",
    "Board",
    "BoardState",
    "Direction",
    "Move",
    "Orientation",
    "RushHourError",
    "Vehicle",
    "VehicleType",
]
