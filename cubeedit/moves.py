import typing, enum, random, re, logging
from . import log
from .state import Face, Facelets, NUM_FACELETS

Vec = typing.Tuple[int, int, int]

def _cross(a: Vec, b: Vec) -> Vec: return (a[1]*b[2] - a[2]*b[1], a[2]*b[0] - a[0]*b[2], a[0]*b[1] - a[1]*b[0])
def _dot(a: Vec, b: Vec) -> int: return a[0]*b[0] + a[1]*b[1] + a[2]*b[2]

def _rotate_cw(v: Vec, axis: Vec) -> Vec:
    #Quarter turn clockwise when looking down the axis from outside the cube
    d, c = _dot(axis, v), _cross(axis, v)
    return tuple(axis[i]*d - c[i] for i in range(3))

def facelet_location(index: int) -> typing.Tuple[Vec, Vec]:
    """Returns the (position, outward normal) of a facelet, positions in {-1, 0, 1}^3."""
    face = Face.from_ordinal(index // 9)
    r, c = divmod(index % 9, 3)
    pos = {
        Face.U: (c-1, +1, r-1),
        Face.R: (+1, 1-r, 1-c),
        Face.F: (c-1, 1-r, +1),
        Face.D: (c-1, -1, 1-r),
        Face.L: (-1, 1-r, c-1),
        Face.B: (1-c, 1-r, -1)
    }[face]
    return pos, face.direction

_LOCATION_TO_FACELET = { facelet_location(i): i for i in range(NUM_FACELETS) }

def _quarter_turn_perm(face: Face) -> typing.List[int]:
    #perm[dst] = src
    axis = face.direction
    perm = list(range(NUM_FACELETS))
    for src in range(NUM_FACELETS):
        pos, normal = facelet_location(src)
        if _dot(pos, axis) != 1: continue
        perm[_LOCATION_TO_FACELET[(_rotate_cw(pos, axis), _rotate_cw(normal, axis))]] = src
    return perm

def _compose(perm: typing.List[int], times: int) -> typing.List[int]:
    res = list(range(NUM_FACELETS))
    for _ in range(times): res = [res[p] for p in perm]
    return res

_QUARTER_PERMS = { f: _quarter_turn_perm(f) for f in Face }

class Move(enum.Enum):
    U = (Face.U, 1)
    U2 = (Face.U, 2)
    Ur = (Face.U, 3)
    R = (Face.R, 1)
    R2 = (Face.R, 2)
    Rr = (Face.R, 3)
    F = (Face.F, 1)
    F2 = (Face.F, 2)
    Fr = (Face.F, 3)
    D = (Face.D, 1)
    D2 = (Face.D, 2)
    Dr = (Face.D, 3)
    L = (Face.L, 1)
    L2 = (Face.L, 2)
    Lr = (Face.L, 3)
    B = (Face.B, 1)
    B2 = (Face.B, 2)
    Br = (Face.B, 3)

    @property
    def face(self) -> Face: return self.value[0]
    @property
    def turns(self) -> int: return self.value[1]
    @property
    def is_ccw(self) -> bool: return 'r' in self.name
    @property
    def is_double_rot(self) -> bool: return '2' in self.name

    @property
    def inverse(self) -> "Move": return Move.from_turns(self.face, -self.turns)

    @property
    def perm(self) -> typing.List[int]: return _MOVE_PERMS[self]

    @staticmethod
    def from_turns(face: Face, turns: int) -> "Move":
        turns %= 4
        assert turns != 0
        return _FACE_TURNS_TO_MOVE[(face, turns)]

    def apply(self, facelets: Facelets):
        old = list(facelets.faces)
        facelets.faces = [old[src] for src in self.perm]

    def __str__(self): return self.name.replace('r', '\'')

_MOVE_PERMS = { m: _compose(_QUARTER_PERMS[m.face], m.turns) for m in Move }
_FACE_TURNS_TO_MOVE = { m.value: m for m in Move }

_TOKEN_RE = re.compile(r"^([URFDLB])([123]?)('?)$")

def parse_moves(text: str) -> typing.Optional[typing.List[Move]]:
    """Parses whitespace separated face turns, e.g. ``R U2 F' D2'``.

    Returns None if any token isn't a face turn. Tokens which cancel out to
    no turn at all are not possible with this notation.
    """
    moves = []
    for tok in text.split():
        m = _TOKEN_RE.match(tok)
        if not m: return None
        turns = int(m.group(2) or 1) * (-1 if m.group(3) else 1)
        moves.append(Move.from_turns(Face[m.group(1)], turns))
    return moves

def apply_moves(cube_text: str, move_text: str) -> typing.Optional[str]:
    if len(cube_text) != NUM_FACELETS or any(Face.from_code(ch) is None for ch in cube_text):
        log.LOGGER.log(logging.DEBUG, f"apply_moves: not a facelet string: {cube_text!r}")
        return None

    moves = parse_moves(move_text)
    if moves is None:
        log.LOGGER.log(logging.DEBUG, f"apply_moves: can't parse moves {move_text!r}")
        return None

    facelets = Facelets.decode(cube_text)
    for m in moves: m.apply(facelets)
    return facelets.encode()

def random_moves(count: int, rng: typing.Optional[random.Random] = None) -> str:
    rng = rng or random
    moves: typing.List[Move] = []
    while len(moves) < count:
        m = rng.choice(list(Move))
        #Don't turn the same face twice in a row, or return to a face across one turn of its opposite
        if moves and m.face == moves[-1].face: continue
        if len(moves) >= 2 and m.face == moves[-2].face and m.face.opposite == moves[-1].face: continue
        moves.append(m)
    return " ".join(str(m) for m in moves)
