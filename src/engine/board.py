"""
三國志将棋の盤面を管理するモジュール
"""

from typing import Dict, Iterator, List, Optional, Tuple
from .piece import Piece, Player

# 盤面サイズ
BOARD_SIZE = 9

Position = Tuple[int, int]


class Board:
    """三國志将棋のゲームボードを表すクラス"""

    def __init__(self):
        # 9x9の盤面を初期化（各マスは駒1枚または None）
        self.squares: List[List[Optional[Piece]]] = [
            [None for _ in range(BOARD_SIZE)]
            for _ in range(BOARD_SIZE)
        ]
        # 王将に相当する駒の位置を記録
        self.royal_positions: Dict[Player, Optional[Position]] = {
            Player.SHU: None,
            Player.WEI: None
        }

    def is_valid_position(self, position: Position) -> bool:
        """位置が盤面内か確認"""
        row, col = position
        return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE

    def get_piece(self, position: Position) -> Optional[Piece]:
        """指定位置の駒を取得"""
        if not self.is_valid_position(position):
            raise ValueError(f"Invalid position: {position}")
        row, col = position
        return self.squares[row][col]

    def is_occupied(self, position: Position) -> bool:
        """指定位置に駒があるか確認"""
        return self.get_piece(position) is not None

    def get_owner(self, position: Position) -> Optional[Player]:
        """指定位置の駒の所有者を取得"""
        piece = self.get_piece(position)
        return piece.owner if piece else None

    def set_piece(self, position: Position, piece: Optional[Piece]) -> Optional[Piece]:
        """
        指定位置の駒を置き換える（Noneで空にする）
        返り値: 置き換えられる前の駒
        """
        previous = self.get_piece(position)
        row, col = position
        self.squares[row][col] = piece

        # 王将の位置を記録
        if previous is not None and previous.is_royal:
            if self.royal_positions[previous.owner] == position:
                self.royal_positions[previous.owner] = None
        if piece is not None and piece.is_royal:
            self.royal_positions[piece.owner] = position

        return previous

    def add_piece(self, position: Position, piece: Piece) -> bool:
        """空きマスに駒を置く"""
        if not self.is_valid_position(position) or self.is_occupied(position):
            return False
        self.set_piece(position, piece)
        return True

    def remove_piece(self, position: Position) -> Optional[Piece]:
        """指定位置から駒を取り除く"""
        return self.set_piece(position, None)

    def get_royal_position(self, player: Player) -> Optional[Position]:
        """指定プレイヤーの王将の位置を取得"""
        return self.royal_positions[player]

    def pieces(self, player: Optional[Player] = None) -> Iterator[Tuple[Position, Piece]]:
        """盤上の駒を (位置, 駒) で列挙（行優先順）"""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                piece = self.squares[row][col]
                if piece is not None and (player is None or piece.owner == player):
                    yield (row, col), piece

    def empty_squares(self) -> Iterator[Position]:
        """空きマスを行優先順に列挙"""
        for row in range(BOARD_SIZE):
            for col in range(BOARD_SIZE):
                if self.squares[row][col] is None:
                    yield (row, col)

    def copy(self) -> 'Board':
        """盤面のコピーを作成"""
        new_board = Board()
        for position, piece in self.pieces():
            new_board.set_piece(position, Piece(piece.piece_type, piece.owner))
        return new_board

    def __eq__(self, other):
        if not isinstance(other, Board):
            return NotImplemented
        return self.squares == other.squares

    def __str__(self):
        """盤面の文字列表現を返す"""
        cell_width = 10
        separator_length = BOARD_SIZE * (cell_width + 1) + 1

        result = []

        # 列インデックスヘッダー
        header = "   "
        for i in range(BOARD_SIZE):
            header += f"{i:^{cell_width}}|"
        result.append(header)
        result.append("  " + "-" * separator_length)

        for row in range(BOARD_SIZE):
            row_str = f"{row} |"
            for col in range(BOARD_SIZE):
                piece = self.squares[row][col]
                piece_str = str(piece) if piece else ""
                row_str += f"{piece_str:^{cell_width}}|"
            result.append(row_str)
            result.append("  " + "-" * separator_length)

        return "\n".join(result)

    def to_dict(self) -> dict:
        """盤面を辞書形式に変換（API用）"""
        board_data = []
        for row in range(BOARD_SIZE):
            row_data = []
            for col in range(BOARD_SIZE):
                piece = self.squares[row][col]
                row_data.append(
                    {"type": piece.piece_type.name, "owner": piece.owner.name}
                    if piece else None
                )
            board_data.append(row_data)

        return {
            "board": board_data,
            "royal_positions": {
                "SHU": self.royal_positions[Player.SHU],
                "WEI": self.royal_positions[Player.WEI]
            }
        }
