"""
三國志将棋の駒の種類と動きを定義するモジュール
"""

from enum import Enum, auto
from typing import Dict, FrozenSet, List, NamedTuple


class Player(Enum):
    """プレイヤーの定義"""
    SHU = 0  # 先手（蜀）- 盤面下側、人間
    WEI = 1  # 後手（魏）- 盤面上側、コンピュータ

    @property
    def opponent(self):
        """相手プレイヤーを返す"""
        return Player.WEI if self == Player.SHU else Player.SHU

    @property
    def forward(self) -> int:
        """前方向の行の増分（蜀は上向き、魏は下向き）"""
        return -1 if self == Player.SHU else 1


class Movement(Enum):
    """駒の動きの基本要素"""
    CROSS = auto()   # 縦横1マス
    KING = auto()    # 全方向1マス
    ROOK = auto()    # 縦横に走る
    BISHOP = auto()  # 斜めに走る
    KNIGHT = auto()  # 桂馬跳び（前方2マス・横1マス）
    LANCE = auto()   # 前方に走る
    GOLD = auto()    # 金将の動き
    SILVER = auto()  # 銀将の動き
    PAWN = auto()    # 前方1マス


class PieceType(Enum):
    """駒の種類"""
    # 蜀
    RYUBI = auto()     # 劉備 - 王将に相当
    KANNU = auto()     # 関羽
    CHOHI = auto()     # 張飛
    CHOUUN = auto()    # 趙雲
    KOUCHUU = auto()   # 黄忠
    BACHOU = auto()    # 馬超
    KOUMEI = auto()    # 孔明
    HOUTOU = auto()    # 龐統
    # 魏
    SOUSOU = auto()    # 曹操 - 王将に相当
    KAKUKA = auto()    # 郭嘉
    JUNIKU = auto()    # 荀彧
    JUNYUU = auto()    # 荀攸
    TEIIKU = auto()    # 程昱
    KAKOUTON = auto()  # 夏侯惇
    KAKOUEN = auto()   # 夏侯淵
    CHURYOU = auto()   # 張遼
    KYOCHO = auto()    # 許褚
    JOKOU = auto()     # 徐晃
    # 共通
    FU = auto()        # 歩


class PieceDefinition(NamedTuple):
    """駒の性能（読み込み後は不変）"""
    movements: FrozenSet[Movement]
    is_royal: bool
    value: int


def _define(movements: List[Movement], is_royal: bool, value: int) -> PieceDefinition:
    return PieceDefinition(frozenset(movements), is_royal, value)


PIECE_DEFINITIONS: Dict[PieceType, PieceDefinition] = {
    PieceType.RYUBI: _define([Movement.CROSS], True, 9999),
    PieceType.KANNU: _define([Movement.ROOK, Movement.KING], False, 1200),
    PieceType.CHOHI: _define([Movement.BISHOP, Movement.LANCE], False, 900),
    PieceType.CHOUUN: _define([Movement.ROOK], False, 800),
    PieceType.KOUCHUU: _define([Movement.ROOK], False, 800),
    PieceType.BACHOU: _define([Movement.BISHOP], False, 700),
    PieceType.KOUMEI: _define([Movement.KING, Movement.KNIGHT], False, 700),
    PieceType.HOUTOU: _define([Movement.KING, Movement.KNIGHT], False, 700),
    PieceType.SOUSOU: _define([Movement.KING, Movement.KNIGHT, Movement.LANCE], True, 9999),
    PieceType.KAKUKA: _define([Movement.KING], False, 500),
    PieceType.JUNIKU: _define([Movement.KING], False, 500),
    PieceType.JUNYUU: _define([Movement.SILVER], False, 400),
    PieceType.TEIIKU: _define([Movement.SILVER], False, 400),
    PieceType.KAKOUTON: _define([Movement.ROOK], False, 800),
    PieceType.KAKOUEN: _define([Movement.BISHOP], False, 700),
    PieceType.CHURYOU: _define([Movement.BISHOP], False, 700),
    PieceType.KYOCHO: _define([Movement.ROOK], False, 800),
    PieceType.JOKOU: _define([Movement.ROOK], False, 800),
    PieceType.FU: _define([Movement.PAWN], False, 100),
}

# 二歩・行き所のない駒の制限を受ける駒
PAWN_TYPE = PieceType.FU

# 駒の動きパターン定義
# [row, col]で表現: rowの正の値は前方向（所有者の forward を掛けて盤面座標にする）
# 'slide': True の場合は盤端か駒に当たるまで進む
MOVEMENT_PATTERNS = {
    Movement.CROSS: {
        'moves': [[0, 1], [0, -1], [1, 0], [-1, 0]],
        'slide': False
    },
    Movement.KING: {
        'moves': [[0, 1], [0, -1], [1, 0], [-1, 0], [1, 1], [1, -1], [-1, 1], [-1, -1]],
        'slide': False
    },
    Movement.ROOK: {
        'moves': [[0, 1], [0, -1], [1, 0], [-1, 0]],
        'slide': True
    },
    Movement.BISHOP: {
        'moves': [[1, 1], [1, -1], [-1, 1], [-1, -1]],
        'slide': True
    },
    Movement.KNIGHT: {
        'moves': [[2, -1], [2, 1]],
        'slide': False
    },
    Movement.LANCE: {
        'moves': [[1, 0]],
        'slide': True
    },
    Movement.GOLD: {
        'moves': [[1, 0], [1, -1], [1, 1], [0, -1], [0, 1], [-1, 0]],
        'slide': False
    },
    Movement.SILVER: {
        'moves': [[1, 0], [1, -1], [1, 1], [-1, -1], [-1, 1]],
        'slide': False
    },
    Movement.PAWN: {
        'moves': [[1, 0]],
        'slide': False
    },
}


class Piece:
    """三國志将棋の駒を表すクラス"""

    def __init__(self, piece_type: PieceType, owner: Player):
        self.piece_type = piece_type
        self.owner = owner

    def __str__(self):
        """駒の文字列表現（例: 's:RYUBI', 'w:FU'）"""
        prefix = 's' if self.owner == Player.SHU else 'w'
        return f"{prefix}:{self.piece_type.name}"

    def __repr__(self):
        return f"Piece({self.piece_type.name}, {self.owner.name})"

    def __eq__(self, other):
        if not isinstance(other, Piece):
            return NotImplemented
        return self.piece_type == other.piece_type and self.owner == other.owner

    def __hash__(self):
        return hash((self.piece_type, self.owner))

    @property
    def definition(self) -> PieceDefinition:
        return PIECE_DEFINITIONS[self.piece_type]

    @property
    def is_royal(self) -> bool:
        """王将に相当する駒か"""
        return self.definition.is_royal

    @property
    def value(self) -> int:
        """駒の価値"""
        return self.definition.value

    def get_move_patterns(self) -> List[dict]:
        """
        この駒の移動パターンのリストを返す
        返り値: [{'moves': list, 'slide': bool}, ...]
        """
        return [MOVEMENT_PATTERNS[m] for m in sorted(self.definition.movements, key=lambda m: m.value)]
