from backend.engine.gamesolver.path import reconstruct_path, reconstruct_states
from backend.engine.gamesolver.solver import SearchRoster, SolveResult, Solver

__all__ = ["SearchRoster", "SolveResult", "Solver", "reconstruct_path", "reconstruct_states"]
