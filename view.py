import asyncio, concurrent.futures, threading, pyglet, typing, cubeedit

TILE_SIZE = 40
TILE_GAP = 4
FACE_SIZE = 3*TILE_SIZE + 2*TILE_GAP
FACE_GAP = 12
MARGIN = 20
SWATCH_SIZE = 36
LOG_LINES = 5

#(column, row) of every face in the unfolded cube, row 0 at the top
NET_LAYOUT = {
    cubeedit.Face.U: (1, 0),
    cubeedit.Face.L: (0, 1),
    cubeedit.Face.F: (1, 1),
    cubeedit.Face.R: (2, 1),
    cubeedit.Face.B: (3, 1),
    cubeedit.Face.D: (1, 2)
}

ACTION_KEYS = {
    pyglet.window.key.S: "solve",
    pyglet.window.key.N: "random_cube",
    pyglet.window.key.C: "scramble",
    pyglet.window.key.A: "apply_moves",
    pyglet.window.key.X: "reset",
    pyglet.window.key.Z: "undo"
}

COLOR_KEYS = [pyglet.window.key._1, pyglet.window.key._2, pyglet.window.key._3, pyglet.window.key._4, pyglet.window.key._5, pyglet.window.key._6]

BLACK = (0, 0, 0, 255)

class EditorView(pyglet.window.Window):
    ctrl: cubeedit.Controller
    loop: asyncio.AbstractEventLoop

    batch: pyglet.graphics.Batch
    tiles: typing.List[pyglet.shapes.Rectangle]
    centre_labels: typing.List[pyglet.text.Label]
    swatches: typing.List[pyglet.shapes.Rectangle]
    swatch_frame: pyglet.shapes.Rectangle
    log_labels: typing.List[pyglet.text.Label]
    moves_label: pyglet.text.Label
    status_label: pyglet.text.Label

    _lock: threading.Lock
    _should_close: bool
    _dirty: bool
    _faces: typing.List[cubeedit.Face]
    _colors: typing.Dict[cubeedit.Face, typing.Tuple[int, int, int]]
    _selected: cubeedit.Face
    _log: typing.List[str]
    _moves: str
    _pending: typing.Optional[concurrent.futures.Future]

    def __init__(self, ctrl: cubeedit.Controller, loop: asyncio.AbstractEventLoop):
        width = 2*MARGIN + 4*FACE_SIZE + 3*FACE_GAP
        height = 2*MARGIN + 3*FACE_SIZE + 2*FACE_GAP + SWATCH_SIZE + (LOG_LINES + 3) * 18
        super().__init__(width, height, caption="Cube Facelet Editor")
        self.set_vsync(True)

        self.ctrl = ctrl
        self.loop = loop

        self._lock = threading.Lock()
        self._should_close = False
        self._dirty = True
        self._pending = None

        sess = ctrl.session
        self._faces = list(sess.facelets)
        self._colors = dict(sess.palette.colors)
        self._selected = sess.palette.selected
        self._log = []
        self._moves = ""

        #Set up rendering
        pyglet.gl.glClearColor(0.9, 0.9, 0.9, 1)
        self.batch = pyglet.graphics.Batch()
        bg, fg = pyglet.graphics.Group(order=0), pyglet.graphics.Group(order=1)

        self.tiles = []
        for i in range(cubeedit.state.NUM_FACELETS):
            x, y = self.tile_origin(i)
            self.tiles.append(pyglet.shapes.Rectangle(x, y, TILE_SIZE, TILE_SIZE, color=(0, 0, 0), batch=self.batch, group=bg))

        self.centre_labels = []
        for face in NET_LAYOUT:
            x, y = self.tile_origin(face.ordinal*9 + 4)
            self.centre_labels.append(pyglet.text.Label(face.code, font_size=16, x=x + TILE_SIZE//2, y=y + TILE_SIZE//2, anchor_x='center', anchor_y='center', color=BLACK, batch=self.batch, group=fg))

        self.swatch_frame = pyglet.shapes.Rectangle(0, 0, SWATCH_SIZE + 6, SWATCH_SIZE + 6, color=(0, 0, 0), batch=self.batch, group=bg)
        self.swatches = []
        for f in cubeedit.Face:
            x, y = self.swatch_origin(f.ordinal)
            self.swatches.append(pyglet.shapes.Rectangle(x, y, SWATCH_SIZE, SWATCH_SIZE, color=(0, 0, 0), batch=self.batch, group=fg))

        text_x, text_y = MARGIN, self.swatch_origin(0)[1] - 24
        self.status_label = pyglet.text.Label("1-6 color | S solve  N random  C scramble  A apply  X reset  Z undo", font_size=10, x=text_x, y=text_y, color=BLACK, batch=self.batch)
        self.moves_label = pyglet.text.Label("", font_size=10, x=text_x, y=text_y - 18, color=BLACK, batch=self.batch)
        self.log_labels = [pyglet.text.Label("", font_name="monospace", font_size=10, x=text_x, y=text_y - 18*(i+2), color=BLACK, batch=self.batch) for i in range(LOG_LINES)]

    def tile_origin(self, index: int) -> typing.Tuple[int, int]:
        face = cubeedit.Face.from_ordinal(index // 9)
        r, c = divmod(index % 9, 3)
        col, row = NET_LAYOUT[face]
        x = MARGIN + col * (FACE_SIZE + FACE_GAP) + c * (TILE_SIZE + TILE_GAP)
        top = self.height - MARGIN - row * (FACE_SIZE + FACE_GAP)
        return x, top - (r+1) * TILE_SIZE - r * TILE_GAP

    def swatch_origin(self, ordinal: int) -> typing.Tuple[int, int]:
        return MARGIN + 3 + ordinal * (SWATCH_SIZE + 12), self.height - MARGIN - 3*FACE_SIZE - 2*FACE_GAP - SWATCH_SIZE - 12

    def hit_test(self, x: int, y: int) -> typing.Optional[typing.Tuple[str, int]]:
        for i in range(cubeedit.state.NUM_FACELETS):
            tx, ty = self.tile_origin(i)
            if tx <= x < tx + TILE_SIZE and ty <= y < ty + TILE_SIZE: return "tile", i
        for i in range(cubeedit.state.NUM_FACES):
            sx, sy = self.swatch_origin(i)
            if sx <= x < sx + SWATCH_SIZE and sy <= y < sy + SWATCH_SIZE: return "swatch", i
        return None

    def update_state(self, sess: cubeedit.Session):
        with self._lock:
            self._faces = list(sess.facelets)
            self._colors = dict(sess.palette.colors)
            self._selected = sess.palette.selected
            self._log = list(sess.history.entries[:LOG_LINES])
            self._moves = sess.moves_text
            self._dirty = True

    def _refresh(self):
        with self._lock:
            if not self._dirty: return
            for tile, face in zip(self.tiles, self._faces): tile.color = self._colors[face]
            for swatch, face in zip(self.swatches, cubeedit.Face): swatch.color = self._colors[face]
            self.swatch_frame.x, self.swatch_frame.y = (v - 3 for v in self.swatch_origin(self._selected.ordinal))
            self.moves_label.text = f"Moves: {self._moves}"
            for i, lbl in enumerate(self.log_labels): lbl.text = self._log[i] if i < len(self._log) else ""
            self._dirty = False

    def on_draw(self, dt = None):
        self.clear()
        self._refresh()
        self.batch.draw()

    def on_mouse_press(self, x, y, button, modifiers):
        if (button & pyglet.window.mouse.LEFT) == 0: return
        hit = self.hit_test(x, y)
        if not hit: return

        kind, idx = hit
        if kind == "tile":
            #Tiles can't be painted until the running action completes
            if self._pending and not self._pending.done(): return
            self.loop.call_soon_threadsafe(self.ctrl.paint, idx)
        else: self.loop.call_soon_threadsafe(self.ctrl.select, idx)

    def on_key_press(self, symbol, modifiers):
        if symbol in COLOR_KEYS:
            self.loop.call_soon_threadsafe(self.ctrl.select, COLOR_KEYS.index(symbol))
        elif symbol in ACTION_KEYS:
            #Only one action may be in flight, ignore the key until it completes
            if self._pending and not self._pending.done(): return
            self._pending = asyncio.run_coroutine_threadsafe(getattr(self.ctrl, ACTION_KEYS[symbol])(), self.loop)

    def run(self):
        while not self.has_exit:
            with self._lock:
                if self._should_close: break

            dt = pyglet.clock.tick()
            self.dispatch_events()
            self.dispatch_event('on_draw', dt)
            self.flip()

        self.close()

    @staticmethod
    def run_thread(ctrl: cubeedit.Controller, exit_cb: typing.Union[None, typing.Callable] = None) -> asyncio.Future[typing.Tuple["EditorView", threading.Thread]]:
        loop = asyncio.get_running_loop()
        fut = loop.create_future()

        def thread_fnc():
            view = EditorView(ctrl, loop)
            loop.call_soon_threadsafe(lambda: fut.set_result((view, threading.current_thread())))
            view.run()
            if exit_cb and loop.is_running(): loop.call_soon_threadsafe(exit_cb)

        threading.Thread(target=thread_fnc).start()

        return fut

    def close_threadsafe(self):
        with self._lock: self._should_close = True
