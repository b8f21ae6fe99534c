from .log import LOGGER
from .state import Color, Face, Facelets, FALLBACK_FACE, SOLVED_FACELETS
from .palette import Palette
from .history import History
from .moves import Move, parse_moves, apply_moves, random_moves
from .cubie import CubieState, random_cube
from .solver import Solver, SolverError, KociembaSolver
from .session import Session
from .controller import Controller
