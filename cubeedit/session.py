import typing, logging
from . import log
from .state import Facelets, NUM_FACELETS
from .palette import Palette
from .history import History

MIN_DEPTH, MAX_DEPTH = 1, 24
DEFAULT_DEPTH = 21
DEFAULT_SCRAMBLE_LENGTH = 25

class Session:
    """Everything the editor knows about the cube being edited.

    The facelets are the only copy of the cube state. The facelet text shown
    to the user is derived from them, unless the user is in the middle of
    typing a new state, in which case that pending edit is shown instead
    until it is used or the facelets change.
    """

    facelets: Facelets
    palette: Palette
    history: History
    moves_text: str

    _max_depth: int
    scramble_length: int

    _pending_text: typing.Optional[str]
    _undo_facelets: typing.Optional[Facelets]

    def __init__(self, max_depth: int = DEFAULT_DEPTH, scramble_length: int = DEFAULT_SCRAMBLE_LENGTH):
        self.facelets = Facelets.solved()
        self.palette = Palette()
        self.history = History()
        self.moves_text = ""

        self.max_depth = max_depth
        if scramble_length < 1: raise ValueError(f"Scramble length must be at least 1: {scramble_length}")
        self.scramble_length = scramble_length

        self._pending_text = None
        self._undo_facelets = None

    @property
    def max_depth(self) -> int: return self._max_depth
    @max_depth.setter
    def max_depth(self, depth: int): self._max_depth = max(MIN_DEPTH, min(MAX_DEPTH, int(depth)))

    @property
    def facelet_text(self) -> str: return self._pending_text if self._pending_text is not None else self.facelets.encode()

    @property
    def has_pending_text(self) -> bool: return self._pending_text is not None

    def edit_facelet_text(self, text: str): self._pending_text = text

    def current_cube_text(self) -> str:
        #A complete pending edit wins over the grid, anything shorter is ignored
        if self._pending_text is not None and len(self._pending_text.strip()) >= NUM_FACELETS:
            return Facelets.decode(self._pending_text.strip()).encode()
        return self.facelets.encode()

    def load(self, text: str):
        self.facelets.decode_into(text)
        self._pending_text = None

    def paint(self, index: int):
        self.facelets.paint(index, self.palette.selected)
        self._pending_text = None
        log.LOGGER.log(logging.DEBUG, f"paint {index} -> {self.palette.selected.code}")

    def reset(self):
        self.facelets = Facelets.solved()
        self._pending_text = None

    def snapshot(self, facelets: typing.Optional[Facelets] = None): self._undo_facelets = (facelets if facelets is not None else self.facelets).copy()

    @property
    def can_undo(self) -> bool: return self._undo_facelets is not None

    def restore(self) -> bool:
        if self._undo_facelets is None: return False
        self.facelets, self._undo_facelets = self._undo_facelets, None
        self._pending_text = None
        return True
