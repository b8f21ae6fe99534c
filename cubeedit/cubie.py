import typing, dataclasses, random
from .state import Face, Facelets

#Facelet indices of each corner/edge position (URF UFL ULB UBR DFR DLF DBL DRB / UR UF UL UB DR DF DL DB FR FL BL BR), first entry on the U/D or F/B face
CORNER_FACELETS = [
    (8, 9, 20),
    (6, 18, 38),
    (0, 36, 47),
    (2, 45, 11),
    (29, 26, 15),
    (27, 44, 24),
    (33, 53, 42),
    (35, 17, 51)
]
EDGE_FACELETS = [
    (5, 10),
    (7, 19),
    (3, 37),
    (1, 46),
    (32, 16),
    (28, 25),
    (30, 43),
    (34, 52),
    (23, 12),
    (21, 41),
    (50, 39),
    (48, 14)
]

def _perm_parity(perm: typing.Sequence[int]) -> int:
    parity = 0
    for i in range(len(perm)):
        for j in range(i+1, len(perm)):
            if perm[i] > perm[j]: parity ^= 1
    return parity

@dataclasses.dataclass
class CubieState:
    cp: typing.List[int]
    co: typing.List[int]
    ep: typing.List[int]
    eo: typing.List[int]

    @staticmethod
    def solved() -> "CubieState": return CubieState(list(range(8)), [0]*8, list(range(12)), [0]*12)

    @staticmethod
    def random(rng: typing.Optional[random.Random] = None) -> "CubieState":
        rng = rng or random

        cp, ep = list(range(8)), list(range(12))
        rng.shuffle(cp)
        rng.shuffle(ep)

        #Permutation parities have to match, fix up by swapping two edges
        if _perm_parity(cp) != _perm_parity(ep): ep[0], ep[1] = ep[1], ep[0]

        #Twists and flips have to cancel out, the last cubie takes up the slack
        co = [rng.randrange(3) for _ in range(7)]
        co.append((3 - sum(co) % 3) % 3)
        eo = [rng.randrange(2) for _ in range(11)]
        eo.append(sum(eo) % 2)

        return CubieState(cp, co, ep, eo)

    @property
    def is_valid(self) -> bool:
        return (
            sorted(self.cp) == list(range(8)) and sorted(self.ep) == list(range(12)) and
            sum(self.co) % 3 == 0 and sum(self.eo) % 2 == 0 and
            _perm_parity(self.cp) == _perm_parity(self.ep)
        )

    def to_facelets(self) -> Facelets:
        faces = [Face.from_ordinal(i // 9) for i in range(54)]
        for i in range(8):
            for k in range(3): faces[CORNER_FACELETS[i][(k + self.co[i]) % 3]] = Face.from_ordinal(CORNER_FACELETS[self.cp[i]][k] // 9)
        for i in range(12):
            for k in range(2): faces[EDGE_FACELETS[i][(k + self.eo[i]) % 2]] = Face.from_ordinal(EDGE_FACELETS[self.ep[i]][k] // 9)
        return Facelets(faces)

def random_cube(rng: typing.Optional[random.Random] = None) -> str: return CubieState.random(rng).to_facelets().encode()
