"""Rush Hour game backend: board model, solver and game sessions."""
