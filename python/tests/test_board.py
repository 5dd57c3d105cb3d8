"""Board model tests — placement rules, movement, and state encoding."""

from __future__ import annotations

import pytest

from backend.models.board import EXIT_ROW, Board
from backend.models.errors import (
    IllegalBoardMove,
    InvalidBoardSize,
    InvalidFirstVehicle,
    InvalidMoveDescriptor,
    InvalidVehicle,
    InvalidVehicleColor,
    OffGameBoard,
    RedCarException,
    RushHourError,
    StateEncodingError,
    TooManyVehicles,
    VehicleDoesNotExist,
    VehicleOverlap,
)
from backend.models.vehicle import Direction, Orientation, VehicleType


# -- helpers ------------------------------------------------------------------


def _board(*vehicles: tuple[str, str, str, int, int], width: int = 6, height: int = 6) -> Board:
    """Build a board from ``(type, color, orientation, x, y)`` tuples."""
    board = Board(width, height)
    for placement in vehicles:
        board.add_vehicle(*placement)
    return board


RED = ("car", "red", "h", 0, 2)


# -- construction -------------------------------------------------------------


def test_new_board_is_empty_and_unsolved() -> None:
    board = Board()
    assert (board.width, board.height) == (6, 6)
    assert len(board) == 0
    assert board.vehicles == ()
    assert board.encode() == ""
    assert not board.is_solved()


@pytest.mark.parametrize("size", [(0, 6), (6, 0), (10, 6), (6, 10)])
def test_board_size_must_fit_the_encoding(size: tuple[int, int]) -> None:
    with pytest.raises(InvalidBoardSize):
        Board(*size)


def test_reset_keeps_the_same_object() -> None:
    board = _board(RED, ("truck", "yellow", "v", 5, 0))
    board.reset()
    assert len(board) == 0
    assert board.vehicle_at(0, 2) is None
    board.add_car("red", "h", 2, 2)
    assert board.encode() == "2201"


# -- placement ----------------------------------------------------------------


def test_add_vehicle_assigns_ids_in_order() -> None:
    board = _board(RED, ("car", "blue", "v", 4, 1), ("truck", "yellow", "h", 0, 5))
    assert [v.id for v in board.vehicles] == [1, 2, 3]
    assert [v.color for v in board.vehicles] == ["red", "blue", "yellow"]
    truck = board.vehicles[2]
    assert truck.type is VehicleType.TRUCK
    assert truck.orientation is Orientation.HORIZONTAL
    assert truck.length == 3
    assert truck.width == 1
    assert truck.cells() == [(0, 5), (1, 5), (2, 5)]


def test_grid_tracks_every_cell() -> None:
    board = _board(RED, ("truck", "yellow", "v", 5, 0))
    red, truck = board.vehicles
    assert board.vehicle_at(0, 2) is red
    assert board.vehicle_at(1, 2) is red
    assert [board.vehicle_at(5, y) for y in range(4)] == [truck, truck, truck, None]


def test_vehicle_at_outside_the_board() -> None:
    with pytest.raises(OffGameBoard):
        Board().vehicle_at(6, 0)


def test_first_vehicle_must_be_red() -> None:
    board = Board()
    with pytest.raises(InvalidFirstVehicle):
        board.add_car("blue", "h", 0, 2)
    assert len(board) == 0


def test_first_vehicle_cannot_be_a_truck() -> None:
    with pytest.raises(InvalidFirstVehicle):
        Board().add_truck("red", "h", 0, 2)


def test_red_color_is_case_insensitive() -> None:
    board = Board()
    board.add_car("Red", "h", 0, 2)
    with pytest.raises(InvalidVehicleColor):
        board.add_car("RED", "v", 0, 3)


@pytest.mark.parametrize(
    "orientation, x, y",
    [("h", 0, 1), ("h", 0, 3), ("v", 0, 2)],
)
def test_red_car_is_pinned_to_the_exit_row(orientation: str, x: int, y: int) -> None:
    with pytest.raises(RedCarException):
        Board().add_car("red", orientation, x, y)


def test_exit_row_does_not_depend_on_height() -> None:
    board = Board(6, 9)
    board.add_car("red", "h", 0, EXIT_ROW)
    with pytest.raises(RedCarException):
        Board(6, 9).add_car("red", "h", 0, 4)


def test_duplicate_color_is_rejected() -> None:
    board = _board(RED, ("car", "blue", "v", 4, 0))
    with pytest.raises(InvalidVehicleColor):
        board.add_truck("Blue", "v", 2, 3)
    assert len(board) == 2


@pytest.mark.parametrize(
    "placement",
    [
        ("car", "blue", "h", 5, 0),
        ("truck", "blue", "v", 0, 4),
        ("car", "blue", "v", -1, 0),
        ("truck", "blue", "h", 4, 5),
    ],
)
def test_vehicle_must_fit_on_the_board(placement: tuple[str, str, str, int, int]) -> None:
    board = _board(RED)
    with pytest.raises(OffGameBoard):
        board.add_vehicle(*placement)
    assert board.encode() == "0201"


def test_overlap_is_rejected_without_side_effects() -> None:
    board = _board(RED)
    with pytest.raises(VehicleOverlap):
        board.add_truck("yellow", "v", 1, 0)
    assert len(board) == 1
    assert board.vehicle_at(1, 0) is None
    assert board.vehicle_at(1, 1) is None


@pytest.mark.parametrize(
    "vehicle_type, orientation",
    [("bus", "h"), ("car", "x"), ("truck", "")],
)
def test_unknown_type_or_orientation(vehicle_type: str, orientation: str) -> None:
    board = _board(RED)
    with pytest.raises(InvalidVehicle):
        board.add_vehicle(vehicle_type, "blue", orientation, 0, 0)


def test_missing_color_is_invalid() -> None:
    board = _board(RED)
    with pytest.raises(InvalidVehicle):
        board.add_car("  ", "h", 0, 0)


def test_roster_is_capped_for_the_encoding(monkeypatch: pytest.MonkeyPatch) -> None:
    import backend.models.board as board_module

    monkeypatch.setattr(board_module, "MAX_VEHICLES", 2)
    board = _board(RED, ("car", "blue", "v", 4, 0))
    with pytest.raises(TooManyVehicles):
        board.add_car("green", "v", 5, 0)


def test_all_errors_share_a_base_class() -> None:
    with pytest.raises(RushHourError):
        Board().add_car("blue", "h", 0, 2)


# -- removal ------------------------------------------------------------------


def test_remove_vehicle_renumbers_later_vehicles() -> None:
    board = _board(
        RED,
        ("car", "blue", "v", 4, 0),
        ("truck", "yellow", "h", 0, 5),
        ("car", "green", "v", 5, 0),
    )
    blue = board.vehicle_by_color("blue")
    board.remove_vehicle(blue)

    assert [(v.id, v.color) for v in board.vehicles] == [
        (1, "red"),
        (2, "yellow"),
        (3, "green"),
    ]
    assert board.vehicle_at(4, 0) is None
    assert board.vehicle_at(4, 1) is None
    assert board.encode() == "0201" + "0502" + "5003"


def test_remove_missing_vehicle() -> None:
    board = _board(RED)
    other = _board(RED).vehicles[0]
    with pytest.raises(VehicleDoesNotExist):
        board.remove_vehicle(None)
    with pytest.raises(VehicleDoesNotExist):
        board.remove_vehicle(other)


def test_red_car_cannot_be_removed_while_others_remain() -> None:
    board = _board(RED, ("car", "blue", "v", 4, 0))
    with pytest.raises(InvalidFirstVehicle):
        board.remove_vehicle(board.vehicles[0])
    board.remove_vehicle(board.vehicles[1])
    board.remove_vehicle(board.vehicles[0])
    assert len(board) == 0


def test_vehicle_lookups() -> None:
    board = _board(RED, ("car", "Light Blue", "v", 4, 0))
    assert board.vehicle_at_index(1).color == "Light Blue"
    assert board.vehicle_by_color("light blue") is board.vehicles[1]
    assert board.vehicle_by_color("green") is None
    with pytest.raises(VehicleDoesNotExist):
        board.vehicle_at_index(2)
    with pytest.raises(VehicleDoesNotExist):
        board.vehicle_at_index(-1)


# -- movement -----------------------------------------------------------------


def test_can_move_counts_free_cells_up_to_the_first_blocker() -> None:
    # red at x 0-1, blue blocks column 4 on the exit row
    board = _board(RED, ("car", "blue", "v", 4, 1))
    red, blue = board.vehicles

    assert board.max_move(red, Direction.RIGHT) == 2
    assert board.can_move_right(red, 1)
    assert board.can_move_right(red, 2)
    assert not board.can_move_right(red, 3)
    assert not board.can_move_right(red, 4)  # never jumps over blue
    assert not board.can_move_left(red, 1)

    assert board.can_move_up(blue, 1)
    assert not board.can_move_up(blue, 2)
    assert board.can_move_down(blue, 3)
    assert not board.can_move_down(blue, 4)


def test_can_move_rejects_the_wrong_axis_and_zero() -> None:
    board = _board(RED, ("car", "blue", "v", 4, 1))
    red, blue = board.vehicles
    assert not board.can_move_up(red, 1)
    assert not board.can_move_down(red, 1)
    assert not board.can_move_left(blue, 1)
    assert not board.can_move_right(blue, 1)
    assert not board.can_move_right(red, 0)
    assert board.max_move(blue, Direction.LEFT) == 0


def test_can_move_is_pure() -> None:
    board = _board(RED, ("car", "blue", "v", 4, 1))
    before = board.encode()
    for vehicle in board.vehicles:
        for direction in Direction:
            for n in range(1, 7):
                board.can_move(vehicle, direction, n)
    assert board.encode() == before


def test_unknown_direction() -> None:
    board = _board(RED)
    red = board.vehicles[0]
    assert not board.can_move(red, "sideways", 1)
    with pytest.raises(InvalidMoveDescriptor):
        board.max_move(red, "sideways")
    with pytest.raises(InvalidMoveDescriptor):
        board.move(red, "sideways", 1)
    assert board.encode() == "0201"


def test_move_updates_position_and_grid() -> None:
    board = _board(RED, ("truck", "yellow", "v", 4, 0))
    truck = board.vehicles[1]
    board.move_down(truck, 3)

    assert (truck.x, truck.y) == (4, 3)
    assert [board.vehicle_at(4, y) for y in range(3)] == [None, None, None]
    assert [board.vehicle_at(4, y) for y in range(3, 6)] == [truck] * 3

    board.move_up(truck, 2)
    assert truck.y == 1
    assert board.vehicle_at(4, 0) is None
    assert board.vehicle_at(4, 4) is None


def test_illegal_move_raises_and_changes_nothing() -> None:
    board = _board(RED, ("car", "blue", "v", 4, 1))
    red = board.vehicles[0]
    with pytest.raises(IllegalBoardMove):
        board.move_right(red, 3)
    with pytest.raises(IllegalBoardMove):
        board.move_up(red, 1)
    assert board.encode() == "0201" + "4102"


def test_move_right_signals_the_win() -> None:
    board = _board(RED)
    red = board.vehicles[0]
    assert board.move_right(red, 2) is False
    assert board.move_right(red, 2) is True
    assert board.move_left(red, 1) is None


def test_move_right_of_another_vehicle_never_wins() -> None:
    board = _board(("car", "red", "h", 4, 2), ("car", "blue", "h", 2, 0))
    blue = board.vehicles[1]
    assert board.move_right(blue, 2) is False


def test_is_solved_follows_the_red_car() -> None:
    board = _board(RED, ("truck", "yellow", "v", 0, 3))
    red, truck = board.vehicles
    board.move_right(red, 4)
    assert board.is_solved()

    board.move_up(truck, 3)
    assert board.is_solved()

    board.move_left(red, 1)
    assert not board.is_solved()


def test_exit_column_tracks_board_width() -> None:
    board = Board(8, 6)
    red = board.add_car("red", "h", 0, 2)
    assert board.exit_column == 6
    assert board.move_right(red, 4) is False
    assert board.move_right(red, 2) is True
    assert board.is_solved()


def test_foreign_vehicle_cannot_be_moved() -> None:
    board = _board(RED)
    copy = board.copy()
    assert not board.can_move_right(copy.vehicles[0], 1)
    with pytest.raises(IllegalBoardMove):
        board.move_right(copy.vehicles[0], 1)


# -- state encoding -----------------------------------------------------------


def test_encode_is_four_characters_per_vehicle() -> None:
    board = _board(
        ("car", "red", "h", 1, 2),
        ("truck", "yellow", "v", 5, 0),
        ("car", "blue", "h", 0, 5),
    )
    assert board.encode() == "1201" + "5002" + "0503"


def test_encode_follows_moves() -> None:
    board = _board(RED, ("car", "blue", "v", 4, 1))
    board.move_up(board.vehicles[1], 1)
    assert board.encode() == "0201" + "4002"


def test_decode_round_trip() -> None:
    board = _board(
        ("car", "red", "h", 1, 2),
        ("truck", "yellow", "v", 5, 0),
        ("car", "blue", "h", 0, 5),
        ("truck", "green", "h", 2, 4),
    )
    decoded = board.decode(board.encode())

    assert decoded is not board
    assert decoded.same_positions(board)
    for a, b in zip(board.vehicles, decoded.vehicles):
        assert (a.id, a.type, a.color, a.orientation, a.x, a.y) == (
            b.id, b.type, b.color, b.orientation, b.x, b.y,
        )
        assert a is not b


def test_decode_places_the_roster_at_new_positions() -> None:
    board = _board(RED, ("car", "blue", "v", 4, 1))
    moved = board.decode("3201" + "4302")
    assert moved.vehicles[0].x == 3
    assert moved.vehicles[1].y == 3
    assert moved.vehicle_at(4, 4) is moved.vehicles[1]
    assert board.encode() == "0201" + "4102"


def test_decode_rejects_bad_keys() -> None:
    board = _board(RED, ("car", "blue", "v", 4, 1))
    with pytest.raises(StateEncodingError):
        board.decode("020")
    with pytest.raises(StateEncodingError):
        board.decode("0202" + "4101")
    with pytest.raises(VehicleDoesNotExist):
        board.decode("0201" + "4102" + "0003")
    with pytest.raises(VehicleOverlap):
        board.decode("3201" + "4102")


def test_apply_state_moves_the_live_vehicles() -> None:
    board = _board(RED, ("car", "blue", "v", 4, 1))
    red, blue = board.vehicles
    board.apply_state("4201" + "4002")
    assert (red.x, blue.y) == (4, 0)
    assert board.vehicle_at(4, 2) is red
    assert board.is_solved()


@pytest.mark.parametrize(
    "state, error",
    [
        ("3201" + "4102", VehicleOverlap),
        ("0201" + "4502", OffGameBoard),
        ("0101" + "4102", RedCarException),
        ("0201", StateEncodingError),
    ],
)
def test_apply_state_validates_before_mutating(state: str, error: type[Exception]) -> None:
    board = _board(RED, ("car", "blue", "v", 4, 1))
    with pytest.raises(error):
        board.apply_state(state)
    assert board.encode() == "0201" + "4102"
    assert board.vehicle_at(4, 1) is board.vehicles[1]


# -- copying ------------------------------------------------------------------


def test_copy_is_independent() -> None:
    board = _board(RED, ("car", "blue", "v", 4, 1))
    copy = board.copy()
    copy.move_right(copy.vehicles[0], 2)
    assert board.encode() == "0201" + "4102"
    assert not board.same_positions(copy)


def test_copy_from_replaces_contents() -> None:
    source = _board(RED, ("car", "blue", "v", 4, 1), width=7, height=7)
    target = _board(("car", "red", "h", 3, 2))
    target.copy_from(source)
    assert (target.width, target.height) == (7, 7)
    assert target.same_positions(source)
    assert target.vehicles[1] is not source.vehicles[1]
