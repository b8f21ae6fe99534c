import asyncio, aioconsole, logging, cubeedit, argparse
from view import EditorView

logging.basicConfig(level=logging.INFO)

def positive_int(text: str) -> int:
    n = int(text)
    if n < 1: raise argparse.ArgumentTypeError(f"must be at least 1: {n}")
    return n

parser = argparse.ArgumentParser()
parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
parser.add_argument("-n", "--max-depth", type=int, default=cubeedit.session.DEFAULT_DEPTH, help="Move limit passed to the solver (1-24)")
parser.add_argument("-s", "--scramble-length", type=positive_int, default=cubeedit.session.DEFAULT_SCRAMBLE_LENGTH, help="Number of moves in a scramble")
parser.add_argument("-v", "--view", action="store_true", help="Open the facelet view on startup")
args = parser.parse_args()

if args.debug: cubeedit.LOGGER.setLevel(logging.DEBUG)

def print_cube(sess: cubeedit.Session):
    f = sess.facelets
    def row(face: cubeedit.Face, r: int) -> str: return " ".join(x.code for x in f.face_slice(face)[r*3 : r*3+3])

    for r in range(3): print(" "*8 + row(cubeedit.Face.U, r))
    for r in range(3): print("  ".join(row(face, r) for face in [cubeedit.Face.L, cubeedit.Face.F, cubeedit.Face.R, cubeedit.Face.B]))
    for r in range(3): print(" "*8 + row(cubeedit.Face.D, r))
    print(f"facelets: {sess.facelet_text}")
    print(f"moves:    {sess.moves_text}")
    print(f"limit:    {sess.max_depth}    paint: {sess.palette.selected.code}")

async def open_view(ctrl: cubeedit.Controller) -> EditorView:
    def view_cb(sess: cubeedit.Session, action: str):
        if view: view.update_state(sess)

    view = None
    ctrl.register_handler(view_cb)
    view, _ = await EditorView.run_thread(ctrl, lambda: ctrl.unregister_handler(view_cb))
    view.update_state(ctrl.session)
    return view

async def command_loop(ctrl: cubeedit.Controller):
    sess = ctrl.session

    #Main command loop
    view : EditorView = None
    if args.view: view = await open_view(ctrl)
    try:
        while True:
            line = (await aioconsole.ainput("> ")).strip()
            cmd, _, arg = line.partition(" ")
            cmd, arg = cmd.lower(), arg.strip()

            if cmd == "h" or cmd == "help":
                print("(h)elp:            Shows this help text")
                print("(q)uit:            Exits the editor")
                print("(s)olve:           Solves the current cube")
                print("(r)andom:          Replaces the cube with a random one")
                print("s(c)ramble:        Scrambles the current cube")
                print("(a)pply [moves]:   Applies the move text to the cube")
                print("(x) reset:         Resets the cube to the solved state")
                print("(u)ndo:            Undoes the last random/scramble/apply/reset")
                print("(p)aint <i>:       Paints facelet i (0-53) with the selected color")
                print("(k) select <f>:    Selects the paint color (U R F D L B or 0-5)")
                print("(t)ext <facelets>: Edits the facelet text (54 chars)")
                print("(m)oves <moves>:   Edits the move text")
                print("(n) depth <n>:     Sets the solver move limit (1-24)")
                print("(w) show:          Shows the cube")
                print("(l)og:             Shows the action log")
                print("(v)iew:            Opens a window showing the cube")
                print("(d)ebug:           Toggles debug logging")
            elif cmd == "q" or cmd == "quit":
                print("Exiting...")
                break
            elif cmd == "s" or cmd == "solve":
                await ctrl.solve()
                print(sess.history.entries[0])
            elif cmd == "r" or cmd == "random":
                await ctrl.random_cube()
                print_cube(sess)
            elif cmd == "c" or cmd == "scramble":
                await ctrl.scramble()
                print_cube(sess)
            elif cmd == "a" or cmd == "apply":
                if arg: ctrl.edit_moves_text(arg)
                n = len(sess.history)
                await ctrl.apply_moves()
                if len(sess.history) == n: print("Moves not applied")
                print_cube(sess)
            elif cmd == "x" or cmd == "reset":
                await ctrl.reset()
                print_cube(sess)
            elif cmd == "u" or cmd == "undo":
                if not sess.can_undo: print("Nothing to undo")
                await ctrl.undo()
                print_cube(sess)
            elif cmd == "p" or cmd == "paint":
                try: idx = int(arg)
                except ValueError: idx = -1
                if not 0 <= idx < cubeedit.state.NUM_FACELETS:
                    print("Facelet index must be in 0-53")
                    continue
                ctrl.paint(idx)
                print_cube(sess)
            elif cmd == "k" or cmd == "select":
                face = cubeedit.Face.from_code(arg.upper())
                if face is None and arg.isdigit() and int(arg) < cubeedit.state.NUM_FACES: face = cubeedit.Face.from_ordinal(int(arg))
                if face is None:
                    print("Unknown color")
                    continue
                ctrl.select(face.ordinal)
            elif cmd == "t" or cmd == "text":
                ctrl.edit_facelet_text(arg)
                if len(arg) < cubeedit.state.NUM_FACELETS: print(f"Facelet text has {len(arg)} chars, the grid is used until it has 54")
            elif cmd == "m" or cmd == "moves":
                ctrl.edit_moves_text(arg)
            elif cmd == "n" or cmd == "depth":
                try: ctrl.set_max_depth(int(arg))
                except ValueError: print("Move limit must be a number")
                print(f"Move limit: {sess.max_depth}")
            elif cmd == "w" or cmd == "show":
                print_cube(sess)
            elif cmd == "l" or cmd == "log":
                print(sess.history.text)
            elif cmd == "v" or cmd == "view":
                if not view or view.has_exit: view = await open_view(ctrl)
            elif cmd == "d" or cmd == "debug":
                if cubeedit.LOGGER.level != logging.DEBUG:
                    cubeedit.LOGGER.setLevel(logging.DEBUG)
                    print("Enabled debug logging")
                else:
                    cubeedit.LOGGER.setLevel(logging.INFO)
                    print("Disabled debug logging")
            elif cmd == "": continue
            else: print("Unknown command")
    finally:
        if view: view.close_threadsafe()

async def main():
    sess = cubeedit.Session(max_depth=args.max_depth, scramble_length=args.scramble_length)
    ctrl = cubeedit.Controller(sess, cubeedit.KociembaSolver())

    print_cube(sess)
    await command_loop(ctrl)

asyncio.run(main())
