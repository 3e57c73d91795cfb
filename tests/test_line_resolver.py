# tests/test_line_resolver.py
from __future__ import annotations

from tetris_sim.game.core.board import Board
from tetris_sim.game.core.rules import ScoreConfig, resolve_lines, score_for_clears


def _fill_row(board: Board, row: int, *, skip: tuple[int, ...] = ()) -> None:
    board.commit((row, c, "gray") for c in range(board.w) if c not in skip)


def test_no_full_rows_leaves_board_unchanged() -> None:
    board = Board.empty(h=20, w=10)
    _fill_row(board, 19, skip=(0,))
    board.commit([(10, 5, "red")])
    before = board.rows()

    assert resolve_lines(board) == 0
    assert board.rows() == before


def test_single_full_row_shifts_rows_above_down() -> None:
    board = Board.empty(h=20, w=10)
    _fill_row(board, 10)
    board.commit([(9, 3, "x"), (11, 5, "y")])

    assert resolve_lines(board) == 1

    assert board.cell(10, 3) == "x"
    assert board.cell(9, 3) is None
    assert board.cell(11, 5) == "y"
    assert all(cell is None for cell in board.rows()[0])
    assert not any(board.is_row_full(r) for r in range(board.h))


def test_adjacent_full_rows_are_all_cleared() -> None:
    board = Board.empty(h=20, w=10)
    _fill_row(board, 18)
    _fill_row(board, 19)
    board.commit([(17, 0, "m")])

    assert resolve_lines(board) == 2
    assert board.cell(19, 0) == "m"
    assert sum(1 for row in board.rows() for cell in row if cell is not None) == 1


def test_non_adjacent_full_rows() -> None:
    board = Board.empty(h=20, w=10)
    _fill_row(board, 17)
    _fill_row(board, 19)
    board.commit([(18, 2, "m")])

    assert resolve_lines(board) == 2
    assert board.cell(19, 2) == "m"
    assert board.cell(18, 2) is None


def test_all_rows_full_clears_everything() -> None:
    board = Board.empty(h=20, w=10)
    for r in range(board.h):
        _fill_row(board, r)

    assert resolve_lines(board) == 20
    assert board.is_empty()


def test_score_is_linear_in_cleared_lines() -> None:
    cfg = ScoreConfig()
    assert score_for_clears(0, cfg) == 0
    assert score_for_clears(1, cfg) == 100
    assert score_for_clears(4, cfg) == 400
    assert score_for_clears(2, ScoreConfig(points_per_line=7)) == 14
