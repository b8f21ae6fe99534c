import threading, time, typing, pytest
from cubeedit import Solver, SolverError, apply_moves

class FakeSolver(Solver):
    """Deterministic solver which records every call it receives."""

    def __init__(self):
        self.calls: typing.List[tuple] = []
        self.solution = ""
        self.solve_error: typing.Optional[str] = None
        self.cube = "UUUUUUUUURRRRRRRRRFFFFFFFFFDDDDDDDDDLLLLLLLLLBBBBBBBBB"
        self.scramble = "R U"
        self.reject_moves = False
        self.delay = 0.0
        self.apply_delay = 0.0

        self._active_lock = threading.Lock()
        self.active = 0
        self.max_active = 0

    def solve(self, cube_text, max_depth):
        self.calls.append(("solve", cube_text, max_depth))
        with self._active_lock:
            self.active += 1
            self.max_active = max(self.max_active, self.active)
        try:
            if self.delay: time.sleep(self.delay)
            if self.solve_error: raise SolverError(self.solve_error)
            return self.solution
        finally:
            with self._active_lock: self.active -= 1

    def random_cube(self):
        self.calls.append(("random_cube",))
        return self.cube

    def random_moves(self, count):
        self.calls.append(("random_moves", count))
        return self.scramble

    def apply_moves(self, cube_text, move_text):
        self.calls.append(("apply_moves", cube_text, move_text))
        if self.apply_delay: time.sleep(self.apply_delay)
        if self.reject_moves: return None
        return apply_moves(cube_text, move_text)

@pytest.fixture
def solver() -> FakeSolver: return FakeSolver()
