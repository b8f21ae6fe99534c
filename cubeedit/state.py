import typing, enum, logging
from . import log

class Color(enum.Enum):
    WHITE = 'W'
    RED = 'R'
    GREEN = 'G'
    YELLOW = 'Y'
    ORANGE = 'O'
    BLUE = 'B'

class Face(enum.Enum):
    U = 0
    R = 1
    F = 2
    D = 3
    L = 4
    B = 5

    @property
    def ordinal(self) -> int: return self.value
    @property
    def code(self) -> str: return self.name

    @property
    def direction(self) -> typing.Tuple[int, int, int]: return {
        Face.U: ( 0, +1,  0),
        Face.R: (+1,  0,  0),
        Face.F: ( 0,  0, +1),
        Face.D: ( 0, -1,  0),
        Face.L: (-1,  0,  0),
        Face.B: ( 0,  0, -1)
    }[self]

    @property
    def color(self) -> Color: return {
        Face.U: Color.WHITE,
        Face.R: Color.RED,
        Face.F: Color.GREEN,
        Face.D: Color.YELLOW,
        Face.L: Color.ORANGE,
        Face.B: Color.BLUE
    }[self]

    @property
    def opposite(self) -> "Face": return {
        Face.U: Face.D,
        Face.R: Face.L,
        Face.F: Face.B,
        Face.D: Face.U,
        Face.L: Face.R,
        Face.B: Face.F
    }[self]

    @staticmethod
    def from_ordinal(n: int) -> "Face":
        if not 0 <= n < NUM_FACES: raise ValueError(f"Face ordinal out of range: {n}")
        return Face(n)

    @staticmethod
    def from_code(ch: str) -> typing.Optional["Face"]: return _CODE_TO_FACE.get(ch)

NUM_FACES = 6
NUM_FACELETS = 9 * NUM_FACES

#Substituted for any character which isn't a face code when decoding
FALLBACK_FACE = Face.B

_CODE_TO_FACE = { f.code: f for f in Face }

class Facelets:
    """The 54 visible stickers of the cube, in URFDLB face order.

    Slot ``i`` belongs to face ``i // 9`` and sits at position ``i % 9`` of
    that face's 3x3 grid (row-major, as seen looking straight at the face).
    """

    faces: typing.List[Face]

    def __init__(self, faces: typing.Iterable[Face]):
        self.faces = list(faces)
        assert len(self.faces) == NUM_FACELETS and all(isinstance(f, Face) for f in self.faces)

    @staticmethod
    def solved() -> "Facelets": return Facelets(Face.from_ordinal(i // 9) for i in range(NUM_FACELETS))

    @staticmethod
    def decode(text: str) -> "Facelets":
        facelets = Facelets.solved()
        facelets.decode_into(text)
        return facelets

    def encode(self) -> str: return "".join(f.code for f in self.faces)

    def decode_into(self, text: str):
        """Overwrite every slot from the first 54 characters of ``text``.

        Shorter input leaves the state untouched. Characters which aren't one
        of the six face codes map to ``FALLBACK_FACE``.
        """
        if len(text) < NUM_FACELETS: return

        bad_slots = []
        for i, ch in enumerate(text[:NUM_FACELETS]):
            face = Face.from_code(ch)
            if face is None:
                bad_slots.append(i)
                face = FALLBACK_FACE
            self.faces[i] = face

        if bad_slots: log.LOGGER.log(logging.WARNING, f"Unknown facelet codes at {bad_slots} replaced with {FALLBACK_FACE.code}")

    def paint(self, index: int, face: Face):
        assert 0 <= index < NUM_FACELETS, f"facelet index out of range: {index}"
        self.faces[index] = face

    def face_slice(self, face: Face) -> typing.List[Face]: return self.faces[face.ordinal*9 : face.ordinal*9 + 9]

    @property
    def is_solved(self) -> bool: return all(f == self.faces[(i // 9) * 9 + 4] for i, f in enumerate(self.faces))

    def copy(self) -> "Facelets": return Facelets(self.faces)

    def __getitem__(self, idx: int) -> Face: return self.faces[idx]
    def __iter__(self) -> typing.Iterator[Face]: return iter(self.faces)
    def __len__(self): return len(self.faces)

    def __eq__(self, other):
        if not isinstance(other, Facelets): return NotImplemented
        return self.faces == other.faces

    def __str__(self): return self.encode()
    def __repr__(self): return f"Facelets({self.encode()!r})"

SOLVED_FACELETS = Facelets.solved().encode()
