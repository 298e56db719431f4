"""
初期盤面の設定
"""

from typing import Dict, List, Tuple
from .board import Board, BOARD_SIZE
from .piece import Piece, Player, PieceType


# 先手（蜀）の配置（下側: 7-9段目、インデックスは6-8）
SHU_SETUP: List[Tuple[int, int, PieceType]] = [
    # 7段目（インデックス6）
    (6, 3, PieceType.FU),
    (6, 4, PieceType.FU),
    (6, 5, PieceType.FU),
    # 8段目（インデックス7）
    (7, 4, PieceType.CHOUUN),
    # 9段目（インデックス8）
    (8, 2, PieceType.KOUMEI),
    (8, 3, PieceType.KANNU),
    (8, 4, PieceType.RYUBI),   # 劉備
    (8, 5, PieceType.BACHOU),
    (8, 6, PieceType.HOUTOU),
]

# 後手（魏）の配置は自分から見た位置で記述し、盤面上で点対称に反転する
WEI_SETUP: List[Tuple[int, int, PieceType]] = [
    (6, 3, PieceType.FU),
    (6, 4, PieceType.FU),
    (6, 5, PieceType.FU),
    (7, 4, PieceType.KYOCHO),
    (8, 2, PieceType.KAKOUEN),
    (8, 3, PieceType.KAKOUTON),
    (8, 4, PieceType.SOUSOU),  # 曹操
    (8, 5, PieceType.JOKOU),
    (8, 6, PieceType.CHURYOU),
]


def mirror_position(row: int, col: int) -> Tuple[int, int]:
    """相手側から見た位置を盤面の位置に変換"""
    return BOARD_SIZE - 1 - row, BOARD_SIZE - 1 - col


def load_initial_board() -> Board:
    """初期盤面を作成"""
    board = Board()

    for row, col, piece_type in SHU_SETUP:
        board.add_piece((row, col), Piece(piece_type, Player.SHU))

    for row, col, piece_type in WEI_SETUP:
        board.add_piece(mirror_position(row, col), Piece(piece_type, Player.WEI))

    return board


def get_initial_hands() -> Dict[Player, List[PieceType]]:
    """対局開始時の持ち駒（両者とも空）"""
    return {
        Player.SHU: [],
        Player.WEI: [],
    }
