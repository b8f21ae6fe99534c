import asyncio
from cubeedit import Controller, Face, Session, SOLVED_FACELETS, apply_moves

def run(ctrl_fnc, solver, sess = None):
    sess = sess or Session()
    async def main():
        ctrl = Controller(sess, solver)
        await ctrl_fnc(ctrl)
        return ctrl
    return asyncio.run(main())

def state_of(sess: Session):
    return (sess.facelets.encode(), sess.facelet_text, sess.moves_text, sess.history.entries)

def test_solve_solved_cube(solver):
    sess = Session(max_depth=21)
    run(lambda c: c.solve(), solver, sess)

    assert solver.calls == [("solve", SOLVED_FACELETS, 21)]
    assert sess.history.entries[0].endswith("(0f)")
    assert sess.history.entries[1] == f"Cube: {SOLVED_FACELETS}"
    assert sess.moves_text == ""

def test_solve_counts_moves(solver):
    solver.solution = "R U2 F'"
    sess = Session()
    run(lambda c: c.solve(), solver, sess)

    assert sess.moves_text == "R U2 F'"
    assert sess.history.entries[0] == "R U2 F' (3f)"

def test_solve_uses_complete_facelet_text(solver):
    cube = apply_moves(SOLVED_FACELETS, "R")
    sess = Session()
    sess.edit_facelet_text(f" {cube}\n")
    run(lambda c: c.solve(), solver, sess)

    assert solver.calls[0][1] == cube
    assert sess.facelets.encode() == SOLVED_FACELETS

def test_solve_uses_grid_for_short_text(solver):
    sess = Session()
    sess.palette.select(Face.B.ordinal)
    sess.paint(0)
    sess.edit_facelet_text("UUU")
    run(lambda c: c.solve(), solver, sess)

    assert solver.calls[0][1] == "B" + SOLVED_FACELETS[1:]

def test_solve_failure_is_logged(solver):
    solver.solve_error = "Error 8"
    sess = Session()
    sess.moves_text = "R"
    run(lambda c: c.solve(), solver, sess)

    assert sess.history.entries[0] == "Solve failed: Error 8"
    assert sess.moves_text == "R"

def test_random_cube(solver):
    solver.cube = apply_moves(SOLVED_FACELETS, "F D")
    sess = Session()
    sess.moves_text = "R U"
    run(lambda c: c.random_cube(), solver, sess)

    assert sess.facelets.encode() == solver.cube
    assert sess.facelet_text == solver.cube
    assert sess.moves_text == ""
    assert sess.history.entries == (solver.cube,)
    assert sess.can_undo

def test_scramble(solver):
    sess = Session(scramble_length=25)
    run(lambda c: c.scramble(), solver, sess)

    assert ("random_moves", 25) in solver.calls
    assert sess.facelets.encode() == apply_moves(SOLVED_FACELETS, "R U")
    assert sess.moves_text == "R U"
    assert sess.history.entries == ("Scramble: R U",)

def test_scramble_starts_from_grid(solver):
    sess = Session()
    sess.edit_facelet_text("B"*54)
    run(lambda c: c.scramble(), solver, sess)

    assert ("apply_moves", SOLVED_FACELETS, "R U") in solver.calls
    assert not sess.has_pending_text

def test_rejected_scramble_changes_nothing(solver):
    solver.reject_moves = True
    sess = Session()
    sess.moves_text = "F"
    sess.edit_facelet_text("URF")
    before = state_of(sess)
    run(lambda c: c.scramble(), solver, sess)

    assert state_of(sess) == before
    assert not sess.can_undo

def test_apply_moves(solver):
    sess = Session()
    sess.moves_text = "  R U  "
    run(lambda c: c.apply_moves(), solver, sess)

    assert ("apply_moves", SOLVED_FACELETS, "R U") in solver.calls
    assert sess.facelets.encode() == apply_moves(SOLVED_FACELETS, "R U")
    assert sess.moves_text == "  R U  "
    assert sess.history.entries == ("Apply: R U",)

def test_apply_moves_to_facelet_text(solver):
    cube = apply_moves(SOLVED_FACELETS, "L")
    sess = Session()
    sess.edit_facelet_text(cube)
    sess.moves_text = "L'"
    run(lambda c: c.apply_moves(), solver, sess)

    assert sess.facelet_text == SOLVED_FACELETS
    assert not sess.has_pending_text

def test_apply_empty_moves_is_noop(solver):
    for text in ["", "   ", "\t\n"]:
        sess = Session()
        sess.moves_text = text
        before = state_of(sess)
        run(lambda c: c.apply_moves(), solver, sess)

        assert state_of(sess) == before
    assert solver.calls == []

def test_rejected_apply_changes_nothing(solver):
    solver.reject_moves = True
    sess = Session()
    sess.palette.select(Face.L.ordinal)
    sess.paint(3)
    sess.edit_facelet_text("R"*60)
    sess.moves_text = "R U"
    before = state_of(sess)
    run(lambda c: c.apply_moves(), solver, sess)

    assert state_of(sess) == before

def test_reset_after_paints(solver):
    sess = Session()
    sess.moves_text = "R U"
    for i in [0, 10, 20, 53]:
        sess.palette.select(i % 6)
        sess.paint(i)
    run(lambda c: c.reset(), solver, sess)

    assert sess.facelets.encode() == SOLVED_FACELETS
    assert sess.moves_text == ""
    assert sess.history.entries == ("Reset",)

def test_undo_restores_previous_state(solver):
    sess = Session()
    sess.moves_text = "R"

    async def actions(ctrl):
        await ctrl.apply_moves()
        await ctrl.undo()
    run(actions, solver, sess)

    assert sess.facelets.encode() == SOLVED_FACELETS
    assert sess.moves_text == "R"
    assert sess.history.entries == ("Undo", "Apply: R")

def test_undo_reset(solver):
    cube = apply_moves(SOLVED_FACELETS, "D")
    sess = Session()
    sess.load(cube)

    async def actions(ctrl):
        await ctrl.reset()
        await ctrl.undo()
        await ctrl.undo()
    run(actions, solver, sess)

    assert sess.facelets.encode() == cube
    assert sess.history.entries == ("Undo", "Reset")

def test_handlers(solver):
    seen = []
    def handler(sess, action): seen.append(action)

    async def actions(ctrl):
        ctrl.register_handler(handler)
        ctrl.select(2)
        ctrl.paint(0)
        await ctrl.solve()
        ctrl.unregister_handler(handler)
        await ctrl.reset()
    run(actions, solver)

    assert seen == ["select", "paint", "solve"]

def test_edits(solver):
    sess = Session()

    async def actions(ctrl):
        ctrl.select(Face.F.ordinal)
        ctrl.paint(0)
        ctrl.edit_moves_text("U")
        ctrl.set_max_depth(30)
        ctrl.edit_facelet_text("abc")
    run(actions, solver, sess)

    assert sess.facelets[0] is Face.F
    assert sess.moves_text == "U"
    assert sess.max_depth == 24
    assert sess.facelet_text == "abc"

def test_actions_never_overlap(solver):
    solver.delay = 0.05
    busy = []

    async def actions(ctrl):
        task = asyncio.ensure_future(asyncio.gather(ctrl.solve(), ctrl.solve(), ctrl.solve()))
        await asyncio.sleep(0.01)
        busy.append(ctrl.busy)
        await task
        busy.append(ctrl.busy)
    run(actions, solver)

    assert solver.max_active == 1
    assert len([c for c in solver.calls if c[0] == "solve"]) == 3
    assert busy == [True, False]

def test_paint_refused_during_apply(solver):
    solver.apply_delay = 0.1
    sess = Session()
    sess.moves_text = "R"
    refused = []

    async def actions(ctrl):
        task = asyncio.ensure_future(ctrl.apply_moves())
        await asyncio.sleep(0.02)
        assert ctrl.busy
        ctrl.select(Face.B.ordinal)
        refused.append(ctrl.paint(13))
        refused.append(ctrl.edit_facelet_text("B"*54))
        refused.append(ctrl.edit_moves_text("U"))
        refused.append(ctrl.set_max_depth(5))
        await task
        await ctrl.undo()
    run(actions, solver, sess)

    assert refused == [False]*4
    assert sess.moves_text == "R"
    assert sess.max_depth == 21
    assert sess.facelets.encode() == SOLVED_FACELETS
    assert sess.palette.selected is Face.B

def test_undo_after_scramble_restores_pre_action_state(solver):
    solver.apply_delay = 0.1
    sess = Session()
    sess.palette.select(Face.D.ordinal)
    sess.paint(0)
    before = sess.facelets.encode()

    async def actions(ctrl):
        task = asyncio.ensure_future(ctrl.scramble())
        await asyncio.sleep(0.02)
        ctrl.paint(13)
        await task
        assert sess.facelets.encode() == apply_moves(before, "R U")
        await ctrl.undo()
    run(actions, solver, sess)

    assert sess.facelets.encode() == before

def test_edits_allowed_when_idle(solver):
    async def actions(ctrl):
        assert ctrl.paint(0)
        assert ctrl.edit_moves_text("R")
    run(actions, solver)
