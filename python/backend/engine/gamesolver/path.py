"""Turn the solver's parent/direction maps into a forward move list."""

from __future__ import annotations

from collections.abc import Mapping


def reconstruct_states(
    parents: Mapping[str, str | None], winning_state: str
) -> list[str]:
    """Return the states after each move, from the first move to *winning_state*.

    The initial state (the one without a parent) is not included, so the
    result has one entry per move.
    """
    states: list[str] = []
    state: str | None = winning_state
    while state is not None and parents.get(state) is not None:
        states.append(state)
        state = parents[state]
    states.reverse()
    return states


def reconstruct_path(
    parents: Mapping[str, str | None],
    directions: Mapping[str, str],
    winning_state: str,
) -> list[str]:
    """Walk back from *winning_state* and return the move descriptors in order.

    Example::

        reconstruct_path(parents, directions, result.winning_state)
        # ['blue (02) up 1', 'red (01) right 4']
    """
    return [directions[s] for s in reconstruct_states(parents, winning_state)]
