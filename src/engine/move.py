"""
三國志将棋の手（Move）を表現するモジュール
"""

from enum import Enum, auto
from typing import Optional, Tuple
from .piece import PieceType, Player


class MoveType(Enum):
    """手の種類"""
    NORMAL = auto()  # 盤上の駒の移動（駒取りを含む）
    DROP = auto()    # 持ち駒を打つ


class Move:
    """三國志将棋の一手を表すクラス"""

    def __init__(
        self,
        move_type: MoveType,
        from_pos: Optional[Tuple[int, int]] = None,
        to_pos: Optional[Tuple[int, int]] = None,
        piece_type: Optional[PieceType] = None,
        player: Optional[Player] = None
    ):
        self.move_type = move_type
        self.from_pos = from_pos  # 移動元（打つ手の場合はNone）
        self.to_pos = to_pos      # 移動先
        self.piece_type = piece_type  # 打つ駒の種類
        self.player = player      # プレイヤー

    @property
    def is_drop(self) -> bool:
        return self.move_type == MoveType.DROP

    def _key(self):
        return (self.move_type, self.from_pos, self.to_pos, self.piece_type, self.player)

    def __eq__(self, other):
        if not isinstance(other, Move):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    def __str__(self):
        if self.is_drop:
            return f"{self.player.name} {self.piece_type.name} * {self.to_pos}"
        return f"{self.player.name} {self.from_pos} -> {self.to_pos}"

    def __repr__(self):
        return (
            f"Move(type={self.move_type.name}, "
            f"from={self.from_pos}, to={self.to_pos}, "
            f"piece={self.piece_type.name if self.piece_type else None}, "
            f"player={self.player.name if self.player else None})"
        )

    def to_dict(self) -> dict:
        """手を辞書形式に変換（API用）"""
        return {
            "type": self.move_type.name,
            "from": self.from_pos,
            "to": self.to_pos,
            "piece_type": self.piece_type.name if self.piece_type else None,
            "player": self.player.name if self.player else None
        }

    @staticmethod
    def from_dict(data: dict) -> 'Move':
        """辞書形式から手を復元（API用）"""
        move_type = MoveType[data["type"]]
        from_pos = tuple(data["from"]) if data.get("from") else None
        to_pos = tuple(data["to"]) if data.get("to") else None
        piece_type = PieceType[data["piece_type"]] if data.get("piece_type") else None
        player = Player[data["player"]] if data.get("player") else None

        return Move(
            move_type=move_type,
            from_pos=from_pos,
            to_pos=to_pos,
            piece_type=piece_type,
            player=player
        )

    @staticmethod
    def create_normal_move(
        from_pos: Tuple[int, int],
        to_pos: Tuple[int, int],
        player: Player
    ) -> 'Move':
        """盤上の駒を動かす手を作成"""
        return Move(
            move_type=MoveType.NORMAL,
            from_pos=from_pos,
            to_pos=to_pos,
            player=player
        )

    @staticmethod
    def create_drop_move(
        to_pos: Tuple[int, int],
        piece_type: PieceType,
        player: Player
    ) -> 'Move':
        """持ち駒を打つ手を作成"""
        return Move(
            move_type=MoveType.DROP,
            to_pos=to_pos,
            piece_type=piece_type,
            player=player
        )
