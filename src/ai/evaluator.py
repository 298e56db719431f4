"""
局面評価関数
"""

from typing import Dict, List

from ..engine.board import Board, BOARD_SIZE
from ..engine.piece import Player, PieceType, PIECE_DEFINITIONS
from ..engine.rules import Rules

# 王将が盤上にない局面の評価値
ROYAL_LOST_SCORE = 99999
# 詰みの評価値（残り深さで補正して早い詰みを優先する）
MATE_SCORE = 90000
# 王手をかけている側への加点
CHECK_BONUS = 150
# 持ち駒の価値の割合
HAND_VALUE_RATIO = 0.8
# 1段前進するごとの加点
ADVANCE_BONUS = 3


def advancement(row: int, owner: Player) -> int:
    """自陣の最奥の段から何段前に出ているか"""
    return row if owner.forward > 0 else BOARD_SIZE - 1 - row


def evaluate(board: Board, hands: Dict[Player, List[PieceType]], player: Player) -> float:
    """
    player から見た局面の評価値

    - 相手の王将がなければ +ROYAL_LOST_SCORE、自分の王将がなければ -ROYAL_LOST_SCORE
    - 王将以外の盤上の駒: 駒の価値 + 前進の加点
    - 持ち駒: 駒の価値の8割
    - 王手をかけていれば +CHECK_BONUS、かけられていれば -CHECK_BONUS
    """
    opponent = player.opponent
    if board.get_royal_position(opponent) is None:
        return ROYAL_LOST_SCORE
    if board.get_royal_position(player) is None:
        return -ROYAL_LOST_SCORE

    score = 0
    for (row, _), piece in board.pieces():
        if piece.is_royal:
            continue
        value = piece.value + advancement(row, piece.owner) * ADVANCE_BONUS
        score += value if piece.owner == player else -value

    for piece_type in hands[player]:
        score += PIECE_DEFINITIONS[piece_type].value * HAND_VALUE_RATIO
    for piece_type in hands[opponent]:
        score -= PIECE_DEFINITIONS[piece_type].value * HAND_VALUE_RATIO

    if Rules.is_check(board, opponent):
        score += CHECK_BONUS
    if Rules.is_check(board, player):
        score -= CHECK_BONUS

    return score
