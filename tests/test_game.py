"""Unit tests for chessrelay/game.py (python-chess adapter)"""

import chess
import pytest

from chessrelay import game
from chessrelay.errors import IllegalMove

STALEMATE_IN_ONE = "k7/8/1K6/2Q5/8/8/8/8 w - - 0 1"
PROMOTION_READY = "8/P7/8/8/8/8/8/k6K w - - 0 1"


def test_turn_alternates_after_legal_move() -> None:
    board = game.new_board()
    assert game.turn_color(board) == "w"
    game.apply_move(board, "e2", "e4")
    assert game.turn_color(board) == "b"


@pytest.mark.parametrize(
    "from_sq, to_sq, promotion",
    [
        ("e2", "e5", None),  # pawn cannot jump three squares
        ("e7", "e5", None),  # not white's piece
        ("z9", "e4", None),  # not a square
        ("e2", "", None),
        ("e2", "e4", "x"),  # not a piece letter
        ("e2", "e4", "q"),  # promotion on a non-promoting move
    ],
)
def test_illegal_moves_leave_board_unchanged(from_sq: str, to_sq: str, promotion: str | None) -> None:
    board = game.new_board()
    before = board.fen()
    with pytest.raises(IllegalMove):
        game.apply_move(board, from_sq, to_sq, promotion)
    assert board.fen() == before


def test_promotion_requires_piece() -> None:
    """A pawn reaching the last rank must name the promotion piece."""
    board = chess.Board(PROMOTION_READY)
    with pytest.raises(IllegalMove):
        game.apply_move(board, "a7", "a8")

    move = game.apply_move(board, "a7", "a8", "q")
    assert move.promotion == chess.QUEEN
    assert board.piece_at(chess.A8) == chess.Piece(chess.QUEEN, chess.WHITE)


def test_fools_mate_is_won_by_black() -> None:
    board = game.new_board()
    for from_sq, to_sq in [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]:
        assert not game.is_game_over(board)
        game.apply_move(board, from_sq, to_sq)
    assert game.is_game_over(board)
    assert game.winner(board) == "b"


def test_stalemate_has_no_winner() -> None:
    board = chess.Board(STALEMATE_IN_ONE)
    game.apply_move(board, "c5", "c7")
    assert game.is_game_over(board)
    assert game.winner(board) is None


def test_no_winner_while_game_runs() -> None:
    assert game.winner(game.new_board()) is None
