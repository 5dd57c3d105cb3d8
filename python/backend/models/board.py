"""Board model for the Rush Hour puzzle."""

from __future__ import annotations

from backend.models.errors import (
    IllegalBoardMove,
    InvalidBoardSize,
    InvalidFirstVehicle,
    InvalidMoveDescriptor,
    InvalidVehicle,
    InvalidVehicleColor,
    OffGameBoard,
    RedCarException,
    StateEncodingError,
    TooManyVehicles,
    VehicleDoesNotExist,
    VehicleOverlap,
)
from backend.models.state import MAX_VEHICLES, BoardState, coerce_state
from backend.models.vehicle import (
    Direction,
    Orientation,
    Vehicle,
    VehicleType,
    parse_direction,
    parse_orientation,
    parse_type,
    vehicle_cells,
)

DEFAULT_WIDTH = 6
DEFAULT_HEIGHT = 6
EXIT_ROW = 2
GOAL_COLOR = "red"
MAX_DIMENSION = 9


def is_goal_color(color: str) -> bool:
    return color.casefold() == GOAL_COLOR


class Board:
    """A Rush Hour board: a grid plus the ordered vehicle roster.

    Coordinates are 0-based ``(x, y)`` with ``(0, 0)`` in the upper-left
    corner. Vehicle ids follow roster order starting at 1, and vehicle 1
    is always the red goal car on row ``EXIT_ROW``. The puzzle is solved
    once the red car's x reaches ``width - 2``.

    Every mutating method checks all of its preconditions before touching
    the grid, so a raised :class:`~backend.models.errors.RushHourError`
    leaves the board exactly as it was.
    """

    def __init__(self, width: int = DEFAULT_WIDTH, height: int = DEFAULT_HEIGHT) -> None:
        if not (1 <= width <= MAX_DIMENSION and 1 <= height <= MAX_DIMENSION):
            raise InvalidBoardSize(width, height, MAX_DIMENSION)
        self.width = width
        self.height = height
        self._grid: list[list[Vehicle | None]] = []
        self._vehicles: list[Vehicle] = []
        self.reset()

    def reset(self) -> None:
        """Remove every vehicle, keeping the board object itself."""
        self._grid = [[None] * self.width for _ in range(self.height)]
        self._vehicles = []

    # -- queries --------------------------------------------------------------

    @property
    def vehicles(self) -> tuple[Vehicle, ...]:
        return tuple(self._vehicles)

    @property
    def goal_vehicle(self) -> Vehicle | None:
        return self._vehicles[0] if self._vehicles else None

    @property
    def exit_column(self) -> int:
        return self.width - 2

    def __len__(self) -> int:
        return len(self._vehicles)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def vehicle_at(self, x: int, y: int) -> Vehicle | None:
        """Return the vehicle covering ``(x, y)``, or ``None`` if empty."""
        if not self.in_bounds(x, y):
            raise OffGameBoard(x, y)
        return self._grid[y][x]

    def vehicle_at_index(self, index: int) -> Vehicle:
        """Return the vehicle at roster position ``index`` (id - 1)."""
        if not 0 <= index < len(self._vehicles):
            raise VehicleDoesNotExist(f"No vehicle at index {index}.")
        return self._vehicles[index]

    def vehicle_by_color(self, color: str) -> Vehicle | None:
        key = color.casefold()
        for vehicle in self._vehicles:
            if vehicle.color.casefold() == key:
                return vehicle
        return None

    def owns(self, vehicle: Vehicle | None) -> bool:
        """True if *vehicle* is this board's own object (not a copy)."""
        return (
            vehicle is not None
            and 0 < vehicle.id <= len(self._vehicles)
            and self._vehicles[vehicle.id - 1] is vehicle
        )

    def is_solved(self) -> bool:
        goal = self.goal_vehicle
        return goal is not None and goal.x == self.exit_column

    # -- placement ------------------------------------------------------------

    def add_vehicle(
        self,
        type: str | VehicleType,
        color: str,
        orientation: str | Orientation,
        x: int,
        y: int,
    ) -> Vehicle:
        """Add a car or a truck depending on *type* (``"car"``/``"truck"``)."""
        vehicle_type = parse_type(type)
        if vehicle_type is VehicleType.CAR:
            return self.add_car(color, orientation, x, y)
        return self.add_truck(color, orientation, x, y)

    def add_car(self, color: str, orientation: str | Orientation, x: int, y: int) -> Vehicle:
        return self._place(VehicleType.CAR, color, orientation, x, y)

    def add_truck(self, color: str, orientation: str | Orientation, x: int, y: int) -> Vehicle:
        return self._place(VehicleType.TRUCK, color, orientation, x, y)

    def _place(
        self,
        vehicle_type: VehicleType,
        color: str,
        orientation: str | Orientation,
        x: int,
        y: int,
    ) -> Vehicle:
        if len(self._vehicles) >= MAX_VEHICLES:
            raise TooManyVehicles(MAX_VEHICLES)
        orient = parse_orientation(orientation)
        if not color or not color.strip():
            raise InvalidVehicle("A vehicle needs a color.")

        first = not self._vehicles
        if first and (not is_goal_color(color) or vehicle_type is not VehicleType.CAR):
            raise InvalidFirstVehicle(color)
        if first and (y != EXIT_ROW or orient is not Orientation.HORIZONTAL):
            raise RedCarException(EXIT_ROW)
        if self.vehicle_by_color(color) is not None:
            raise InvalidVehicleColor(color)

        cells = vehicle_cells(orient, vehicle_type.length, x, y)
        for cx, cy in cells:
            if not self.in_bounds(cx, cy):
                raise OffGameBoard(cx, cy)
        for cx, cy in cells:
            if self._grid[cy][cx] is not None:
                raise VehicleOverlap(x, y, color)

        vehicle = Vehicle(
            id=len(self._vehicles) + 1,
            type=vehicle_type,
            color=color,
            orientation=orient,
            x=x,
            y=y,
        )
        self._mark(vehicle, vehicle)
        self._vehicles.append(vehicle)
        return vehicle

    def remove_vehicle(self, vehicle: Vehicle | None) -> None:
        """Remove *vehicle* and renumber every vehicle after it."""
        if vehicle is None or not self.owns(vehicle):
            raise VehicleDoesNotExist()
        if vehicle.id == 1 and len(self._vehicles) > 1:
            raise InvalidFirstVehicle()

        self._mark(vehicle, None)
        del self._vehicles[vehicle.id - 1]
        for later in self._vehicles[vehicle.id - 1 :]:
            later.id -= 1

    def _mark(self, vehicle: Vehicle, owner: Vehicle | None) -> None:
        for cx, cy in vehicle.cells():
            self._grid[cy][cx] = owner

    # -- movement -------------------------------------------------------------

    def max_move(self, vehicle: Vehicle, direction: Direction | str) -> int:
        """How many cells *vehicle* can slide toward *direction* right now.

        Counts consecutive empty cells ahead of the vehicle up to the first
        blocker or the edge of the board.
        """
        direction = parse_direction(direction)
        if not self.owns(vehicle) or vehicle.orientation is not direction.orientation:
            return 0
        dx, dy = direction.delta
        # Cell at the leading end of the vehicle in the direction of travel.
        if direction in (Direction.RIGHT, Direction.DOWN):
            lx = vehicle.x + dx * (vehicle.length - 1)
            ly = vehicle.y + dy * (vehicle.length - 1)
        else:
            lx, ly = vehicle.x, vehicle.y
        steps = 0
        cx, cy = lx + dx, ly + dy
        while self.in_bounds(cx, cy) and self._grid[cy][cx] is None:
            steps += 1
            cx += dx
            cy += dy
        return steps

    def can_move(self, vehicle: Vehicle, direction: Direction | str, n: int) -> bool:
        try:
            return n >= 1 and n <= self.max_move(vehicle, direction)
        except InvalidMoveDescriptor:
            return False

    def can_move_left(self, vehicle: Vehicle, n: int) -> bool:
        return self.can_move(vehicle, Direction.LEFT, n)

    def can_move_right(self, vehicle: Vehicle, n: int) -> bool:
        return self.can_move(vehicle, Direction.RIGHT, n)

    def can_move_up(self, vehicle: Vehicle, n: int) -> bool:
        return self.can_move(vehicle, Direction.UP, n)

    def can_move_down(self, vehicle: Vehicle, n: int) -> bool:
        return self.can_move(vehicle, Direction.DOWN, n)

    def move(self, vehicle: Vehicle, direction: Direction | str, n: int) -> bool:
        """Slide *vehicle* ``n`` cells toward *direction*.

        Returns True when the move puts the red car on the exit column.
        """
        direction = parse_direction(direction)
        if not self.can_move(vehicle, direction, n):
            raise IllegalBoardMove(vehicle.color, direction.value, n)
        dx, dy = direction.delta
        self._mark(vehicle, None)
        vehicle.x += dx * n
        vehicle.y += dy * n
        self._mark(vehicle, vehicle)
        return vehicle.id == 1 and vehicle.x == self.exit_column

    def move_left(self, vehicle: Vehicle, n: int) -> None:
        self.move(vehicle, Direction.LEFT, n)

    def move_right(self, vehicle: Vehicle, n: int) -> bool:
        return self.move(vehicle, Direction.RIGHT, n)

    def move_up(self, vehicle: Vehicle, n: int) -> None:
        self.move(vehicle, Direction.UP, n)

    def move_down(self, vehicle: Vehicle, n: int) -> None:
        self.move(vehicle, Direction.DOWN, n)

    # -- state encoding -------------------------------------------------------

    def state(self) -> BoardState:
        return BoardState(tuple((v.x, v.y) for v in self._vehicles))

    def encode(self) -> str:
        """Return the fixed-width state key, 4 characters per vehicle."""
        return self.state().key()

    def decode(self, state: str | BoardState) -> Board:
        """Build a new board holding this roster at the positions in *state*.

        Type, color and orientation come from this board's vehicle with the
        same id; only the positions are read from *state*.
        """
        positions = coerce_state(state).positions
        board = Board(self.width, self.height)
        for index, (x, y) in enumerate(positions):
            template = self.vehicle_at_index(index)
            board._place(template.type, template.color, template.orientation, x, y)
        return board

    def apply_state(self, state: str | BoardState) -> None:
        """Move every vehicle of this board to the positions in *state*."""
        positions = coerce_state(state).positions
        if len(positions) != len(self._vehicles):
            raise StateEncodingError(
                f"State holds {len(positions)} vehicles, board has {len(self._vehicles)}."
            )
        occupied: set[tuple[int, int]] = set()
        for vehicle, (x, y) in zip(self._vehicles, positions):
            if vehicle.id == 1 and y != EXIT_ROW:
                raise RedCarException(EXIT_ROW)
            for cell in vehicle_cells(vehicle.orientation, vehicle.length, x, y):
                if not self.in_bounds(*cell):
                    raise OffGameBoard(*cell)
                if cell in occupied:
                    raise VehicleOverlap(x, y, vehicle.color)
                occupied.add(cell)

        self._grid = [[None] * self.width for _ in range(self.height)]
        for vehicle, (x, y) in zip(self._vehicles, positions):
            vehicle.x, vehicle.y = x, y
            self._mark(vehicle, vehicle)

    # -- copying --------------------------------------------------------------

    def copy(self) -> Board:
        return self.decode(self.state())

    def copy_from(self, other: Board) -> None:
        """Replace this board's size and vehicles with copies of *other*'s."""
        self.width = other.width
        self.height = other.height
        self.reset()
        for vehicle in other.vehicles:
            self._place(vehicle.type, vehicle.color, vehicle.orientation, vehicle.x, vehicle.y)

    def same_positions(self, other: Board) -> bool:
        """True if both boards hold the same number of vehicles at the same spots."""
        return self.state() == other.state()

    def __repr__(self) -> str:
        return f"Board({self.width}x{self.height}, state={self.encode()!r})"
