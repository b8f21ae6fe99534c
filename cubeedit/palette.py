import typing, logging
from . import log
from .state import Color, Face

RGB = typing.Tuple[int, int, int]

COLOR_RGBS: typing.Dict[Color, RGB] = {
    Color.WHITE: (255, 255, 255),
    Color.RED: (220, 0, 0),
    Color.GREEN: (0, 160, 0),
    Color.YELLOW: (230, 200, 0),
    Color.ORANGE: (255, 120, 0),
    Color.BLUE: (0, 90, 200)
}

class Palette:
    colors: typing.Dict[Face, RGB]
    selected: Face

    def __init__(self, colors: typing.Optional[typing.Mapping[Face, RGB]] = None):
        self.colors = { f: COLOR_RGBS[f.color] for f in Face }
        if colors: self.colors.update(colors)
        self.selected = Face.U

    def select(self, ordinal: int):
        self.selected = Face.from_ordinal(ordinal)
        log.LOGGER.log(logging.DEBUG, f"Selected paint color {self.selected.code} {self.selected_color}")

    def color_of(self, face: Face) -> RGB: return self.colors[face]

    @property
    def selected_color(self) -> RGB: return self.colors[self.selected]

    def __iter__(self) -> typing.Iterator[typing.Tuple[Face, RGB]]:
        for f in Face: yield f, self.colors[f]
