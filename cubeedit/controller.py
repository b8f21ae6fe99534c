import asyncio, contextlib, logging, typing
from . import log
from .session import Session
from .solver import Solver, SolverError

Handler = typing.Callable[[Session, str], None]

class Controller:
    """Runs the editor's actions against a session, one at a time.

    Solver calls happen on a worker thread, the session itself is only ever
    touched from the event loop thread. Registered handlers are invoked with
    the session and the action name after every action or edit.
    """

    session: Session
    solver: Solver

    _lock: asyncio.Lock
    _handlers: typing.List[Handler]

    def __init__(self, session: Session, solver: Solver):
        self.session = session
        self.solver = solver

        self._lock = asyncio.Lock()
        self._handlers = []

    @property
    def busy(self) -> bool: return self._lock.locked()

    def register_handler(self, cb: Handler): self._handlers = self._handlers + [cb]
    def unregister_handler(self, cb: Handler): self._handlers = [h for h in self._handlers if h is not cb]

    def _notify(self, action: str):
        for h in self._handlers: h(self.session, action)

    @contextlib.asynccontextmanager
    async def _action(self, name: str):
        async with self._lock:
            log.LOGGER.log(logging.DEBUG, f"action {name} | cube {self.session.facelet_text} | moves {self.session.moves_text!r}")
            yield
        self._notify(name)

    async def _call(self, fnc, *args):
        return await asyncio.to_thread(fnc, *args)

    async def solve(self):
        async with self._action("solve"):
            sess = self.session
            cube = sess.current_cube_text()
            sess.history.record(f"Cube: {cube}")

            try: sol = await self._call(self.solver.solve, cube, sess.max_depth)
            except SolverError as e:
                sess.history.record(f"Solve failed: {e}")
                return

            sess.moves_text = sol
            sess.history.record(f"{sol} ({len(sol.split())}f)")

    async def random_cube(self):
        async with self._action("random_cube"):
            sess = self.session
            before = sess.facelets.copy()
            cube = await self._call(self.solver.random_cube)

            sess.snapshot(before)
            sess.load(cube)
            sess.moves_text = ""
            sess.history.record(cube)

    async def scramble(self):
        async with self._action("scramble"):
            sess = self.session
            before = sess.facelets.copy()
            scr = await self._call(self.solver.random_moves, sess.scramble_length)

            #Scrambles always start from the grid, never from pending text
            new_cube = await self._call(self.solver.apply_moves, sess.facelets.encode(), scr)
            if new_cube is None:
                log.LOGGER.log(logging.DEBUG, f"scramble {scr!r} rejected by solver")
                return

            sess.snapshot(before)
            sess.load(new_cube)
            sess.moves_text = scr
            sess.history.record(f"Scramble: {scr}")

    async def apply_moves(self):
        async with self._action("apply_moves"):
            sess = self.session
            mv = sess.moves_text.strip()
            if not mv: return
            before = sess.facelets.copy()

            new_cube = await self._call(self.solver.apply_moves, sess.current_cube_text(), mv)
            if new_cube is None:
                log.LOGGER.log(logging.DEBUG, f"moves {mv!r} rejected by solver")
                return

            sess.snapshot(before)
            sess.load(new_cube)
            sess.history.record(f"Apply: {mv}")

    async def reset(self):
        async with self._action("reset"):
            sess = self.session
            sess.snapshot()
            sess.reset()
            sess.moves_text = ""
            sess.history.record("Reset")

    async def undo(self):
        async with self._action("undo"):
            if self.session.restore(): self.session.history.record("Undo")

    #Edits to the cube or the texts are refused while an action is in flight, the palette selection is not
    def _edit_allowed(self, what: str) -> bool:
        if not self.busy: return True
        log.LOGGER.log(logging.DEBUG, f"{what} refused, action in progress")
        return False

    def paint(self, index: int) -> bool:
        if not self._edit_allowed("paint"): return False
        self.session.paint(index)
        self._notify("paint")
        return True

    def select(self, ordinal: int):
        self.session.palette.select(ordinal)
        self._notify("select")

    def edit_facelet_text(self, text: str) -> bool:
        if not self._edit_allowed("facelet edit"): return False
        self.session.edit_facelet_text(text)
        self._notify("edit")
        return True

    def edit_moves_text(self, text: str) -> bool:
        if not self._edit_allowed("moves edit"): return False
        self.session.moves_text = text
        self._notify("edit")
        return True

    def set_max_depth(self, depth: int) -> bool:
        if not self._edit_allowed("move limit"): return False
        self.session.max_depth = depth
        self._notify("edit")
        return True
