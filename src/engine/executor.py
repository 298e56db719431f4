"""
手の実行と取り消しを行うモジュール

探索は盤面と持ち駒を一つだけ共有して書き換えるため、
実行した手は必ず逆順に一度ずつ取り消す必要がある。
"""

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional

from .board import Board
from .errors import IllegalMoveError, MoveStackError
from .move import Move
from .piece import Piece, PieceType, Player


@dataclass
class UndoRecord:
    """手を取り消すための情報"""
    move: Move
    moved_piece: Piece
    previous_occupant: Optional[Piece] = None  # 移動先にいた駒
    captured: Optional[PieceType] = None       # 持ち駒に加えた駒
    hand_index: Optional[int] = None           # 打つ手で持ち駒から外した位置
    reverted: bool = False


class MoveExecutor:
    """盤面と持ち駒に手を適用し、取り消し情報を管理するクラス"""

    def __init__(self, board: Board, hands: Dict[Player, List[PieceType]]):
        self.board = board
        self.hands = hands
        self._applied: List[UndoRecord] = []

    @property
    def depth(self) -> int:
        """取り消されていない手の数"""
        return len(self._applied)

    def execute(self, move: Move) -> UndoRecord:
        """手を適用し、取り消し情報を返す"""
        undo = self._do(move)
        self._applied.append(undo)
        return undo

    def revert(self, undo: UndoRecord):
        """
        execute の逆操作
        最後に実行した手から順に取り消さなければならない
        """
        if undo.reverted:
            raise MoveStackError(f"既に取り消された手です: {undo.move}")
        if not self._applied or self._applied[-1] is not undo:
            raise MoveStackError(f"取り消しの順序が正しくありません: {undo.move}")

        self._applied.pop()
        self._undo(undo)
        undo.reverted = True

    @contextmanager
    def applied(self, move: Move) -> Iterator[UndoRecord]:
        """with ブロックの間だけ手を適用する（枝刈りで抜ける場合も必ず戻す）"""
        undo = self.execute(move)
        try:
            yield undo
        finally:
            self.revert(undo)

    def apply(self, move: Move) -> Optional[PieceType]:
        """
        実際の対局の手として適用する（取り消さない）
        返り値: 取った駒の種類
        """
        if self._applied:
            raise MoveStackError("探索中の手が取り消されていません")
        return self._do(move).captured

    def _do(self, move: Move) -> UndoRecord:
        board = self.board

        if move.is_drop:
            hand = self.hands[move.player]
            if move.piece_type not in hand:
                raise IllegalMoveError(f"持ち駒にありません: {move}")
            if board.is_occupied(move.to_pos):
                raise IllegalMoveError(f"打つ先に駒があります: {move}")

            index = hand.index(move.piece_type)
            del hand[index]
            piece = Piece(move.piece_type, move.player)
            board.set_piece(move.to_pos, piece)
            return UndoRecord(move=move, moved_piece=piece, hand_index=index)

        piece = board.get_piece(move.from_pos)
        if piece is None:
            raise IllegalMoveError(f"移動元に駒がありません: {move}")

        target = board.get_piece(move.to_pos)
        captured = None
        # 王将以外の敵の駒を取ったら持ち駒に加える
        if target is not None and not target.is_royal:
            captured = target.piece_type
            self.hands[piece.owner].append(captured)

        board.set_piece(move.to_pos, piece)
        board.set_piece(move.from_pos, None)
        return UndoRecord(
            move=move,
            moved_piece=piece,
            previous_occupant=target,
            captured=captured
        )

    def _undo(self, undo: UndoRecord):
        board = self.board
        move = undo.move

        if move.is_drop:
            board.set_piece(move.to_pos, None)
            self.hands[move.player].insert(undo.hand_index, move.piece_type)
            return

        board.set_piece(move.from_pos, undo.moved_piece)
        board.set_piece(move.to_pos, undo.previous_occupant)
        if undo.captured is not None:
            # 最後に加えた同じ種類の駒を取り除く
            hand = self.hands[undo.moved_piece.owner]
            for i in range(len(hand) - 1, -1, -1):
                if hand[i] == undo.captured:
                    del hand[i]
                    break
