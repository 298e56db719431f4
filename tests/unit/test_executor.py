"""
単体テスト: 手の実行と取り消し
"""

import pytest
from src.engine import (
    Board, Player, PieceType, Piece, Move, MoveExecutor, IllegalMoveError, MoveStackError
)


@pytest.fixture
def position():
    board = Board()
    board.add_piece((8, 4), Piece(PieceType.RYUBI, Player.SHU))
    board.add_piece((4, 4), Piece(PieceType.KANNU, Player.SHU))
    board.add_piece((2, 4), Piece(PieceType.FU, Player.WEI))
    board.add_piece((0, 0), Piece(PieceType.SOUSOU, Player.WEI))
    hands = {Player.SHU: [PieceType.FU, PieceType.KAKUKA], Player.WEI: []}
    return board, hands


class TestExecuteRevert:
    """実行と取り消しのテストクラス"""

    def test_capture_round_trip(self, position):
        board, hands = position
        before_board = board.copy()
        before_hands = {p: list(h) for p, h in hands.items()}
        executor = MoveExecutor(board, hands)

        undo = executor.execute(Move.create_normal_move((4, 4), (2, 4), Player.SHU))

        assert undo.captured == PieceType.FU
        assert hands[Player.SHU] == [PieceType.FU, PieceType.KAKUKA, PieceType.FU]
        assert board.get_piece((2, 4)) == Piece(PieceType.KANNU, Player.SHU)
        assert board.get_piece((4, 4)) is None
        assert executor.depth == 1

        executor.revert(undo)

        assert board == before_board
        assert hands == before_hands
        assert executor.depth == 0
        assert undo.reverted

    def test_drop_restores_hand_order(self, position):
        """打った駒は元の位置に戻る"""
        board, hands = position
        hands[Player.SHU] = [PieceType.FU, PieceType.KAKUKA, PieceType.FU]
        executor = MoveExecutor(board, hands)

        undo = executor.execute(Move.create_drop_move((5, 0), PieceType.FU, Player.SHU))

        assert undo.hand_index == 0
        assert hands[Player.SHU] == [PieceType.KAKUKA, PieceType.FU]
        assert board.get_piece((5, 0)) == Piece(PieceType.FU, Player.SHU)

        executor.revert(undo)

        assert hands[Player.SHU] == [PieceType.FU, PieceType.KAKUKA, PieceType.FU]
        assert board.get_piece((5, 0)) is None

    def test_captured_royal_is_not_added_to_hand(self, position):
        board, hands = position
        board.remove_piece((2, 4))
        board.set_piece((0, 4), Piece(PieceType.SOUSOU, Player.WEI))
        board.remove_piece((0, 0))
        executor = MoveExecutor(board, hands)

        undo = executor.execute(Move.create_normal_move((4, 4), (0, 4), Player.SHU))

        assert undo.captured is None
        assert hands[Player.SHU] == [PieceType.FU, PieceType.KAKUKA]
        assert board.get_royal_position(Player.WEI) is None

        executor.revert(undo)
        assert board.get_royal_position(Player.WEI) == (0, 4)

    def test_nested_moves_revert_in_reverse_order(self, position):
        board, hands = position
        before_board = board.copy()
        executor = MoveExecutor(board, hands)

        first = executor.execute(Move.create_normal_move((4, 4), (2, 4), Player.SHU))
        second = executor.execute(Move.create_normal_move((0, 0), (1, 0), Player.WEI))
        third = executor.execute(Move.create_drop_move((5, 5), PieceType.FU, Player.SHU))

        executor.revert(third)
        executor.revert(second)
        executor.revert(first)

        assert board == before_board
        assert hands[Player.SHU] == [PieceType.FU, PieceType.KAKUKA]


class TestMoveStack:
    """取り消し順序の検査のテストクラス"""

    def test_out_of_order_revert_raises(self, position):
        executor = MoveExecutor(*position)
        first = executor.execute(Move.create_normal_move((4, 4), (3, 4), Player.SHU))
        executor.execute(Move.create_normal_move((0, 0), (1, 0), Player.WEI))

        with pytest.raises(MoveStackError):
            executor.revert(first)

    def test_double_revert_raises(self, position):
        executor = MoveExecutor(*position)
        undo = executor.execute(Move.create_normal_move((4, 4), (3, 4), Player.SHU))
        executor.revert(undo)

        with pytest.raises(MoveStackError):
            executor.revert(undo)

    def test_applied_context_reverts_on_exception(self, position):
        board, hands = position
        before = board.copy()
        executor = MoveExecutor(board, hands)

        with pytest.raises(KeyError):
            with executor.applied(Move.create_normal_move((4, 4), (3, 4), Player.SHU)):
                raise KeyError("中断")

        assert board == before
        assert executor.depth == 0

    def test_apply_with_pending_search_raises(self, position):
        executor = MoveExecutor(*position)
        executor.execute(Move.create_normal_move((4, 4), (3, 4), Player.SHU))

        with pytest.raises(MoveStackError):
            executor.apply(Move.create_normal_move((0, 0), (1, 0), Player.WEI))

    def test_apply_is_permanent(self, position):
        board, hands = position
        executor = MoveExecutor(board, hands)

        captured = executor.apply(Move.create_normal_move((4, 4), (2, 4), Player.SHU))

        assert captured == PieceType.FU
        assert executor.depth == 0
        assert board.get_piece((2, 4)).piece_type == PieceType.KANNU


class TestInvalidExecution:

    def test_drop_not_in_hand(self, position):
        executor = MoveExecutor(*position)

        with pytest.raises(IllegalMoveError):
            executor.execute(Move.create_drop_move((5, 5), PieceType.KANNU, Player.SHU))
        assert executor.depth == 0

    def test_drop_on_occupied_square(self, position):
        board, hands = position
        executor = MoveExecutor(board, hands)

        with pytest.raises(IllegalMoveError):
            executor.execute(Move.create_drop_move((2, 4), PieceType.FU, Player.SHU))
        assert hands[Player.SHU] == [PieceType.FU, PieceType.KAKUKA]

    def test_move_from_empty_square(self, position):
        executor = MoveExecutor(*position)

        with pytest.raises(IllegalMoveError):
            executor.execute(Move.create_normal_move((5, 5), (4, 5), Player.SHU))
