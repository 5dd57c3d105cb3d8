"""Compact, immutable snapshot of every vehicle position on a board.

A state is held as a tuple of ``(x, y)`` pairs indexed by ``id - 1``.
Only at the hashing boundary is it turned into the fixed-width key::

    "0201" + "4102"  ->  vehicle 01 at (0, 2), vehicle 02 at (4, 1)

Each vehicle takes exactly four characters: x digit, y digit and the
zero-padded two-digit id.
"""

from __future__ import annotations

from dataclasses import dataclass

from backend.models.errors import StateEncodingError

FIELD_WIDTH = 4
MAX_COORDINATE = 9
MAX_VEHICLES = 99


@dataclass(frozen=True, slots=True)
class BoardState:
    positions: tuple[tuple[int, int], ...]

    # -- construction ---------------------------------------------------------

    @classmethod
    def from_key(cls, key: str) -> BoardState:
        """Parse a fixed-width key back into positions.

        Ids must appear as ``01, 02, …`` in order; anything else is a
        corrupted key.
        """
        if len(key) % FIELD_WIDTH:
            raise StateEncodingError(
                f"State key {key!r} is not a multiple of {FIELD_WIDTH} characters."
            )
        positions: list[tuple[int, int]] = []
        for offset in range(0, len(key), FIELD_WIDTH):
            chunk = key[offset : offset + FIELD_WIDTH]
            if not chunk.isdigit() or not chunk.isascii():
                raise StateEncodingError(f"State field {chunk!r} is not numeric.")
            expected = offset // FIELD_WIDTH + 1
            if int(chunk[2:]) != expected:
                raise StateEncodingError(
                    f"State field {chunk!r} should hold vehicle {expected:02d}."
                )
            positions.append((int(chunk[0]), int(chunk[1])))
        return cls(tuple(positions))

    def with_position(self, index: int, x: int, y: int) -> BoardState:
        """Return a copy with vehicle ``index`` (0-based) moved to ``(x, y)``."""
        positions = list(self.positions)
        positions[index] = (x, y)
        return BoardState(tuple(positions))

    # -- encoding -------------------------------------------------------------

    def key(self) -> str:
        if len(self.positions) > MAX_VEHICLES:
            raise StateEncodingError(
                f"Cannot encode {len(self.positions)} vehicles "
                f"(limit {MAX_VEHICLES})."
            )
        parts: list[str] = []
        for vid, (x, y) in enumerate(self.positions, 1):
            if not (0 <= x <= MAX_COORDINATE and 0 <= y <= MAX_COORDINATE):
                raise StateEncodingError(
                    f"Vehicle {vid:02d} at ({x}, {y}) does not fit a one-digit field."
                )
            parts.append(f"{x}{y}{vid:02d}")
        return "".join(parts)

    def __len__(self) -> int:
        return len(self.positions)

    def __str__(self) -> str:
        return self.key()


def coerce_state(state: str | BoardState) -> BoardState:
    if isinstance(state, BoardState):
        return state
    return BoardState.from_key(state)
