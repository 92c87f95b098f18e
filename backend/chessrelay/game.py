"""
Обёртка над python-chess: чей ход, применение хода, конец партии.
Вся проверка правил делается библиотекой, здесь только перевод в наши типы.
"""
import chess
from chess import Board

from .constants import BLACK, WHITE, Color
from .errors import IllegalMove


def new_board() -> Board:
    return Board()


def turn_color(board: Board) -> Color:
    return WHITE if board.turn == chess.WHITE else BLACK


def apply_move(board: Board, from_sq: str, to_sq: str, promotion: str | None = None) -> chess.Move:
    """
    Проверить и сделать ход на доске.
    При любой ошибке бросает IllegalMove, доска не меняется.
    """
    uci = from_sq.lower() + to_sq.lower() + (promotion or "").lower()
    try:
        move = chess.Move.from_uci(uci)
    except ValueError as e:
        raise IllegalMove() from e
    if move not in board.legal_moves:
        raise IllegalMove()
    board.push(move)
    return move


def is_game_over(board: Board) -> bool:
    # claim_draw: троекратное повторение и правило 50 ходов тоже заканчивают партию
    return board.is_game_over(claim_draw=True)


def winner(board: Board) -> Color | None:
    """Победитель завершённой партии, None при ничьей или если партия идёт."""
    outcome = board.outcome(claim_draw=True)
    if outcome is None or outcome.winner is None:
        return None
    return WHITE if outcome.winner == chess.WHITE else BLACK
