from __future__ import annotations

import random

import numpy as np
import pytest

from falling_blocks.game import (
    BOARD_HEIGHT,
    BOARD_WIDTH,
    SHAPES,
    Action,
    FallingBlockGame,
    GameState,
    TetrominoType,
    rotate_clockwise,
    shape_cells,
)

from conftest import game_with


def test_new_game_has_no_piece():
    game = FallingBlockGame(seed=0)
    assert game.state is GameState.NO_PIECE
    assert game.current_piece is None
    assert game.score == 0
    assert not game.game_over


@pytest.mark.parametrize(
    "kind,spawn_x",
    [(TetrominoType.I, 3), (TetrominoType.O, 4), (TetrominoType.T, 4), (TetrominoType.S, 4)],
)
def test_spawn_anchor_is_centred(kind, spawn_x):
    game = game_with(kind)
    game.generate_piece()
    piece = game.current_piece
    assert game.state is GameState.FALLING
    assert piece.kind is kind
    assert (piece.x, piece.y) == (spawn_x, 0)
    assert np.array_equal(piece.shape, SHAPES[kind])


def test_generate_is_ignored_while_a_piece_is_falling(o_game):
    first = o_game.current_piece
    o_game.generate_piece()
    assert o_game.current_piece is first
    assert o_game.pieces_spawned == 1


def test_spawn_failure_ends_game_without_piece():
    game = game_with(TetrominoType.O)
    game.board.grid[0, 4] = True
    game.generate_piece()
    assert game.game_over
    assert game.state is GameState.GAME_OVER
    assert game.current_piece is None


def test_o_piece_drops_to_floor_and_locks(o_game):
    for _ in range(18):
        o_game.move_down()
    assert o_game.current_piece.y == 18
    o_game.move_down()
    grid = o_game.board.grid
    assert grid[18:20, 4:6].all()
    assert int(grid.sum()) == 4
    assert o_game.score == 0
    # next piece spawned at the top
    assert o_game.state is GameState.FALLING
    assert (o_game.current_piece.x, o_game.current_piece.y) == (4, 0)


def test_vertical_i_fills_last_gap_and_clears_row():
    game = game_with(TetrominoType.I, TetrominoType.O)
    game.board.grid[19, 1:] = True
    game.generate_piece()
    game.rotate()
    for _ in range(3):
        game.move_left()
    assert (game.current_piece.x, game.current_piece.y) == (0, 0)
    for _ in range(16):
        game.move_down()
    assert game.current_piece.y == 16
    game.move_down()

    assert game.score == 1
    grid = game.board.grid
    assert grid.shape == (BOARD_HEIGHT, BOARD_WIDTH)
    assert not grid[0].any()
    assert grid[17:20, 0].all()
    assert int(grid.sum()) == 3
    assert game.current_piece.kind is TetrominoType.O


def test_horizontal_moves_stop_at_walls(o_game):
    for _ in range(10):
        o_game.move_left()
    assert o_game.current_piece.x == 0
    for _ in range(20):
        o_game.move_right()
    assert o_game.current_piece.x == BOARD_WIDTH - 2


def test_horizontal_move_blocked_by_locked_cell(o_game):
    o_game.board.grid[1, 3] = True
    o_game.move_left()
    assert o_game.current_piece.x == 4


def test_rotate_applies_clockwise_rotation():
    game = game_with(TetrominoType.T)
    game.generate_piece()
    game.rotate()
    assert np.array_equal(game.current_piece.shape, rotate_clockwise(SHAPES[TetrominoType.T]))
    assert (game.current_piece.x, game.current_piece.y) == (4, 0)


def test_rotate_four_times_restores_shape():
    game = game_with(TetrominoType.L)
    game.generate_piece()
    game.move_down()
    game.move_down()
    for _ in range(4):
        game.rotate()
    assert np.array_equal(game.current_piece.shape, SHAPES[TetrominoType.L])


def test_rotation_blocked_by_locked_cell_keeps_shape():
    game = game_with(TetrominoType.I)
    game.generate_piece()
    game.board.grid[2, 3] = True
    game.rotate()
    assert game.current_piece.shape.shape == (1, 4)


def test_rotation_has_no_wall_kick():
    game = game_with(TetrominoType.I)
    game.generate_piece()
    game.rotate()
    for _ in range(10):
        game.move_right()
    assert game.current_piece.x == BOARD_WIDTH - 1
    game.rotate()
    assert game.current_piece.shape.shape == (4, 1)
    assert game.current_piece.x == BOARD_WIDTH - 1


def test_top_reaching_lock_ends_game_without_clearing():
    game = game_with(TetrominoType.O)
    game.board.grid[1, :4] = True
    game.board.grid[1, 6:] = True
    game.board.grid[2, 4] = True
    game.generate_piece()
    game.move_down()

    assert game.game_over
    assert game.current_piece is None
    assert game.score == 0
    # the full row 1 stays because top-out skips line clearing
    assert game.board.grid[1].all()
    assert game.board.grid[0, 4:6].all()


def test_previously_occupied_top_row_does_not_end_game(o_game):
    o_game.board.grid[0, 0] = True
    for _ in range(19):
        o_game.move_down()
    assert not o_game.game_over
    assert o_game.board.grid[18:20, 4:6].all()


def test_game_over_freezes_everything():
    game = game_with(TetrominoType.O)
    game.board.grid[0, 4] = True
    game.generate_piece()
    assert game.game_over
    grid = game.board.clone_state()

    for action in Action:
        game.step(action)
    game.move_down()
    game.move_left()
    game.move_right()
    game.rotate()
    game.generate_piece()

    assert game.game_over
    assert game.current_piece is None
    assert game.score == 0
    assert np.array_equal(game.board.grid, grid)


def test_cell_at_overlays_active_piece(o_game):
    assert o_game.cell_at(0, 4) and o_game.cell_at(1, 5)
    assert not o_game.cell_at(0, 3)
    assert not o_game.board.grid.any()
    o_game.board.grid[19, 0] = True
    assert o_game.cell_at(19, 0)


def test_cell_at_skips_empty_cells_of_shape():
    game = game_with(TetrominoType.T)
    game.generate_piece()
    # T is [[1,1,1],[0,1,0]] anchored at (4, 0)
    assert not game.cell_at(1, 4)
    assert game.cell_at(1, 5)


def test_step_dispatches_actions(o_game):
    o_game.step(Action.LEFT)
    o_game.step(Action.SOFT_DROP)
    o_game.step(Action.NONE)
    assert (o_game.current_piece.x, o_game.current_piece.y) == (3, 1)
    with pytest.raises(ValueError):
        o_game.step(42)


def test_get_state_marks_locked_and_falling_cells(o_game):
    o_game.board.grid[19, 0] = True
    state = o_game.get_state()
    assert state.dtype == np.int8
    assert state[19, 0] == 1
    assert (state[0:2, 4:6] == -1).all()
    assert int((state != 0).sum()) == 5


def test_random_play_keeps_invariants():
    rng = random.Random(1234)
    game = FallingBlockGame(seed=99)
    game.generate_piece()
    last_score = 0
    for _ in range(5000):
        game.step(rng.choice([Action.LEFT, Action.RIGHT, Action.ROTATE, Action.SOFT_DROP, Action.SOFT_DROP]))
        assert game.score >= last_score
        last_score = game.score
        assert game.board.grid.shape == (BOARD_HEIGHT, BOARD_WIDTH)
        piece = game.current_piece
        if piece is not None:
            for x, y in shape_cells(piece.shape, piece.x, piece.y):
                assert 0 <= x < BOARD_WIDTH and 0 <= y < BOARD_HEIGHT
        if game.game_over:
            break
    assert game.pieces_spawned > 1


def test_sessions_are_independent():
    a = game_with(TetrominoType.O)
    b = game_with(TetrominoType.O)
    a.generate_piece()
    b.generate_piece()
    a.move_left()
    a.board.grid[19, 0] = True
    assert b.current_piece.x == 4
    assert not b.board.grid.any()
