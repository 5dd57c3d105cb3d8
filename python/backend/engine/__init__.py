"""Game engine: solver, game sessions and session state."""
