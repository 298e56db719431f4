"""
駒の移動先（王手放置を考慮しない擬似合法手）を生成するモジュール
"""

from typing import List, Set, Tuple
from .board import Board, BOARD_SIZE
from .piece import Piece, PieceType, Player


def get_destinations(
    board: Board,
    from_pos: Tuple[int, int],
    piece_type: PieceType,
    owner: Player
) -> List[Tuple[int, int]]:
    """
    駒が移動できる位置のリストを取得

    盤上の駒の有無だけで判定し、自玉が王手になるかは考慮しない。
    複数の動きを持つ駒でも同じマスは一度しか含めない（生成順を保つ）。
    """
    row, col = from_pos
    piece = Piece(piece_type, owner)
    destinations: List[Tuple[int, int]] = []
    seen: Set[Tuple[int, int]] = set()

    def add(target: Tuple[int, int]) -> bool:
        """
        移動先候補を追加
        返り値: さらに先へ進めるならTrue（空マス）
        """
        if not board.is_valid_position(target):
            return False
        occupant = board.get_piece(target)
        if occupant is not None and occupant.owner == owner:
            return False  # 味方の駒で止まる
        if target not in seen:
            seen.add(target)
            destinations.append(target)
        return occupant is None  # 敵の駒は取って止まる

    # 駒の動きパターンでは正の値=前方向と定義
    # SHU（下側）: 前方向は上（負の方向）、WEI（上側）: 前方向は下（正の方向）
    direction_multiplier = owner.forward

    for pattern in piece.get_move_patterns():
        for dr, dc in pattern['moves']:
            dr = dr * direction_multiplier
            if pattern['slide']:
                for step in range(1, BOARD_SIZE):
                    if not add((row + dr * step, col + dc * step)):
                        break
            else:
                add((row + dr, col + dc))

    return destinations


def attacks_square(
    board: Board,
    from_pos: Tuple[int, int],
    piece: Piece,
    target: Tuple[int, int]
) -> bool:
    """指定の駒が target のマスに利いているか"""
    return target in get_destinations(board, from_pos, piece.piece_type, piece.owner)
