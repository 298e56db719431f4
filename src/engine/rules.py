"""
三國志将棋のルール判定を行うモジュール
"""

from typing import Dict, List, Optional, Tuple
from .board import Board, BOARD_SIZE
from .movegen import get_destinations, attacks_square
from .piece import Piece, Player, PieceType, PAWN_TYPE
from .move import Move


class Rules:
    """三國志将棋のルールを管理するクラス"""

    @staticmethod
    def is_check(board: Board, player: Player) -> bool:
        """
        指定プレイヤーの王将が王手されているか確認

        王将が盤上に見つからない場合は王手とみなす。
        """
        royal_pos = board.get_royal_position(player)
        if royal_pos is None:
            return True

        for pos, piece in board.pieces(player.opponent):
            if attacks_square(board, pos, piece, royal_pos):
                return True

        return False

    @staticmethod
    def get_piece_legal_moves(board: Board, from_pos: Tuple[int, int]) -> List[Tuple[int, int]]:
        """
        指定位置の駒の合法な移動先を取得

        擬似合法手を一手ずつ盤上で試し、自玉が王手のまま残る手を除く。
        試した手は次の候補に進む前に必ず元に戻す。
        """
        piece = board.get_piece(from_pos)
        if piece is None:
            return []

        legal_positions = []
        for to_pos in get_destinations(board, from_pos, piece.piece_type, piece.owner):
            captured = board.set_piece(to_pos, piece)
            board.set_piece(from_pos, None)
            try:
                in_check = Rules.is_check(board, piece.owner)
            finally:
                board.set_piece(from_pos, piece)
                board.set_piece(to_pos, captured)
            if not in_check:
                legal_positions.append(to_pos)

        return legal_positions

    @staticmethod
    def get_legal_drops(board: Board, piece_type: PieceType, player: Player) -> List[Tuple[int, int]]:
        """
        持ち駒を打てるマスを取得

        - 空きマスにのみ打てる
        - 歩は最奥の段に打てない
        - 歩は自分の歩がある筋に打てない（二歩）
        - 打った結果自玉が王手になるマスには打てない
        打ち歩詰めの禁止は判定しない。
        """
        pawn_columns = set()
        last_row = None
        if piece_type == PAWN_TYPE:
            last_row = 0 if player.forward < 0 else BOARD_SIZE - 1
            pawn_columns = Rules._pawn_columns(board, player)

        drops = []
        for pos in board.empty_squares():
            row, col = pos
            if row == last_row or col in pawn_columns:
                continue

            board.set_piece(pos, Piece(piece_type, player))
            try:
                in_check = Rules.is_check(board, player)
            finally:
                board.set_piece(pos, None)
            if not in_check:
                drops.append(pos)

        return drops

    @staticmethod
    def _pawn_columns(board: Board, player: Player) -> set:
        """指定プレイヤーの歩がある筋の集合"""
        return {
            col for (row, col), piece in board.pieces(player)
            if piece.piece_type == PAWN_TYPE
        }

    @staticmethod
    def get_legal_moves(
        board: Board,
        player: Player,
        hand: Optional[List[PieceType]] = None,
        include_drops: bool = True
    ) -> List[Move]:
        """
        指定プレイヤーの合法手をすべて取得
        hand: 持ち駒のリスト（同じ駒が複数あってよい）
        """
        legal_moves = []

        # 盤上の駒の移動
        for from_pos, _ in list(board.pieces(player)):
            for to_pos in Rules.get_piece_legal_moves(board, from_pos):
                legal_moves.append(Move.create_normal_move(from_pos, to_pos, player))

        # 持ち駒を打つ手（同じ種類は一度だけ調べる）
        if include_drops and hand:
            for piece_type in dict.fromkeys(hand):
                for to_pos in Rules.get_legal_drops(board, piece_type, player):
                    legal_moves.append(Move.create_drop_move(to_pos, piece_type, player))

        return legal_moves

    @staticmethod
    def has_no_moves(board: Board, player: Player, hand: Optional[List[PieceType]] = None) -> bool:
        """指定プレイヤーに合法手（打つ手を含む）が一つもないか"""
        return len(Rules.get_legal_moves(board, player, hand)) == 0

    @staticmethod
    def is_checkmate(board: Board, player: Player, hand: Optional[List[PieceType]] = None) -> bool:
        """指定プレイヤーが詰んでいるか確認"""
        return Rules.is_check(board, player) and Rules.has_no_moves(board, player, hand)

    @staticmethod
    def is_legal(board: Board, move: Move, hands: Dict[Player, List[PieceType]]) -> bool:
        """手が現在の盤面で合法か確認"""
        player = move.player
        if player is None or move.to_pos is None or not board.is_valid_position(move.to_pos):
            return False

        if move.is_drop:
            if move.piece_type not in hands[player]:
                return False
            return move.to_pos in Rules.get_legal_drops(board, move.piece_type, player)

        if move.from_pos is None or not board.is_valid_position(move.from_pos):
            return False
        piece = board.get_piece(move.from_pos)
        if piece is None or piece.owner != player:
            return False
        return move.to_pos in Rules.get_piece_legal_moves(board, move.from_pos)
