import typing, logging, random, kociemba
from . import log, moves, cubie
from .state import SOLVED_FACELETS

class SolverError(Exception): pass

class Solver:
    """The four operations the editor delegates to a cube solving library.

    Only ``solve`` may fail, by raising SolverError. ``apply_moves`` returns
    None when the move text can't be applied to the given cube.
    """

    def solve(self, cube_text: str, max_depth: int) -> str: raise NotImplementedError
    def random_cube(self) -> str: raise NotImplementedError
    def random_moves(self, count: int) -> str: raise NotImplementedError
    def apply_moves(self, cube_text: str, move_text: str) -> typing.Optional[str]: raise NotImplementedError

class KociembaSolver(Solver):
    rng: random.Random

    def __init__(self, seed: typing.Optional[int] = None): self.rng = random.Random(seed)

    def solve(self, cube_text: str, max_depth: int) -> str:
        if cube_text == SOLVED_FACELETS: return ""

        try: sol = kociemba.solve(cube_text, max_depth=max_depth)
        except ValueError as e: raise SolverError(str(e) or "invalid cube") from e

        log.LOGGER.log(logging.DEBUG, f"kociemba | {cube_text} depth {max_depth} -> {sol}")
        return sol.strip()

    def random_cube(self) -> str: return cubie.random_cube(self.rng)
    def random_moves(self, count: int) -> str: return moves.random_moves(count, self.rng)
    def apply_moves(self, cube_text: str, move_text: str) -> typing.Optional[str]: return moves.apply_moves(cube_text, move_text)
