"""
単体テスト: αβ枝刈り付きミニマックス探索
"""

import math
import random

import pytest
from src.engine import Player, PieceType, Move, apply_move
from src.ai.search import MinimaxSearch, DEFAULT_DEPTH
from src.ai.evaluator import MATE_SCORE, evaluate


class TestMoveOrdering:

    def test_captures_first_by_value(self, build_state):
        state = build_state([
            ((8, 8), PieceType.RYUBI, Player.SHU),
            ((4, 4), PieceType.KANNU, Player.SHU),
            ((4, 7), PieceType.FU, Player.WEI),
            ((1, 4), PieceType.BACHOU, Player.WEI),
            ((0, 0), PieceType.SOUSOU, Player.WEI),
        ])
        search = MinimaxSearch(state, Player.SHU)

        ordered = search.order_moves(search.generate_moves(Player.SHU, include_drops=True))

        assert ordered[0].to_pos == (1, 4)
        assert ordered[1].to_pos == (4, 7)

    def test_ordering_is_stable(self, build_state):
        state = build_state([
            ((8, 4), PieceType.RYUBI, Player.SHU),
            ((0, 0), PieceType.SOUSOU, Player.WEI),
        ])
        search = MinimaxSearch(state, Player.SHU)
        moves = search.generate_moves(Player.SHU, include_drops=False)

        assert search.order_moves(moves) == moves


class TestMinimax:
    """探索値のテストクラス"""

    def test_depth_zero_is_evaluation(self, initial_state):
        search = MinimaxSearch(initial_state, Player.SHU)

        assert search.minimax(0, -math.inf, math.inf, True) == search.evaluate()

    def test_shallow_nodes_skip_drops(self, build_state):
        """残り深さ1では持ち駒を打つ手を読まない"""
        state = build_state(
            [
                ((8, 4), PieceType.RYUBI, Player.SHU),
                ((0, 0), PieceType.SOUSOU, Player.WEI),
            ],
            hands={Player.SHU: [PieceType.FU]},
        )
        search = MinimaxSearch(state, Player.SHU)

        search.minimax(1, -math.inf, math.inf, True)

        # 劉備の3手だけ
        assert search.nodes == 4

    def test_mated_side_scores_mate(self, build_state):
        state = build_state(
            [
                ((8, 0), PieceType.RYUBI, Player.SHU),
                ((3, 1), PieceType.KYOCHO, Player.WEI),
                ((7, 3), PieceType.KAKOUTON, Player.WEI),
                ((8, 5), PieceType.JOKOU, Player.WEI),
                ((0, 8), PieceType.SOUSOU, Player.WEI),
            ],
            side=Player.SHU,
        )

        as_shu = MinimaxSearch(state, Player.SHU)
        as_wei = MinimaxSearch(state, Player.WEI)

        assert as_shu.minimax(2, -math.inf, math.inf, True) == -MATE_SCORE + 2
        assert as_wei.minimax(3, -math.inf, math.inf, False) == MATE_SCORE - 3

    def test_no_moves_without_check_is_zero(self, build_state):
        state = build_state([
            ((8, 0), PieceType.RYUBI, Player.SHU),
            ((3, 1), PieceType.KYOCHO, Player.WEI),
            ((7, 3), PieceType.KAKOUTON, Player.WEI),
            ((0, 8), PieceType.SOUSOU, Player.WEI),
        ])
        search = MinimaxSearch(state, Player.SHU)

        assert search.minimax(2, -math.inf, math.inf, True) == 0


class TestChooseMove:
    """ルートの手選びのテストクラス"""

    def test_takes_hanging_piece(self, build_state):
        state = build_state(
            [
                ((0, 0), PieceType.SOUSOU, Player.WEI),
                ((8, 8), PieceType.RYUBI, Player.SHU),
                ((4, 0), PieceType.KYOCHO, Player.WEI),
                ((4, 6), PieceType.KANNU, Player.SHU),
            ],
            side=Player.WEI,
        )

        result = MinimaxSearch(state, Player.WEI).choose_move(1)

        assert result.move == Move.create_normal_move((4, 0), (4, 6), Player.WEI)
        assert result.candidates == [result.move]
        assert result.nodes > 0

    def test_finds_mate_in_one(self, build_state):
        state = build_state(
            [
                ((8, 0), PieceType.RYUBI, Player.SHU),
                ((3, 1), PieceType.KYOCHO, Player.WEI),
                ((7, 3), PieceType.KAKOUTON, Player.WEI),
                ((2, 5), PieceType.JOKOU, Player.WEI),
                ((0, 8), PieceType.SOUSOU, Player.WEI),
            ],
            side=Player.WEI,
        )

        result = MinimaxSearch(state, Player.WEI, rng=random.Random(3)).choose_move(1)

        assert result.score == MATE_SCORE - 1
        assert result.move in result.candidates
        apply_move(state, result.move)
        assert state.game_over
        assert state.winner == Player.WEI

    def test_root_considers_drops(self, build_state):
        state = build_state(
            [
                ((8, 4), PieceType.RYUBI, Player.SHU),
                ((0, 0), PieceType.SOUSOU, Player.WEI),
            ],
            hands={Player.SHU: [PieceType.KANNU]},
        )

        result = MinimaxSearch(state, Player.SHU).choose_move(0)

        assert result.move.is_drop

    def test_depth_zero_matches_static_evaluation(self, build_state):
        """深さ0では各手を指した直後の評価値の最大を選ぶ"""
        state = build_state(
            [
                ((8, 4), PieceType.RYUBI, Player.SHU),
                ((5, 4), PieceType.CHOUUN, Player.SHU),
                ((2, 4), PieceType.FU, Player.WEI),
                ((2, 2), PieceType.JUNYUU, Player.WEI),
                ((0, 0), PieceType.SOUSOU, Player.WEI),
            ],
            hands={Player.SHU: [PieceType.FU]},
        )
        search = MinimaxSearch(state, Player.SHU)

        scores = []
        for move in search.generate_moves(Player.SHU, include_drops=True):
            with state.executor.applied(move):
                scores.append(evaluate(state.board, state.hands, Player.SHU))

        assert search.choose_move(0).score == max(scores)

    def test_no_legal_moves_returns_none(self, build_state):
        state = build_state([
            ((8, 0), PieceType.RYUBI, Player.SHU),
            ((3, 1), PieceType.KYOCHO, Player.WEI),
            ((7, 3), PieceType.KAKOUTON, Player.WEI),
            ((0, 8), PieceType.SOUSOU, Player.WEI),
        ])

        assert MinimaxSearch(state, Player.SHU).choose_move() is None

    def test_seeded_search_is_reproducible(self, initial_state):
        first = MinimaxSearch(initial_state, Player.SHU, rng=random.Random(42)).choose_move(1)
        second = MinimaxSearch(initial_state, Player.SHU, rng=random.Random(42)).choose_move(1)

        assert first.move == second.move
        assert first.candidates == second.candidates

    @pytest.mark.parametrize("depth", [0, 1, DEFAULT_DEPTH])
    def test_search_leaves_state_unchanged(self, build_state, depth):
        state = build_state(
            [
                ((8, 4), PieceType.RYUBI, Player.SHU),
                ((6, 4), PieceType.KOUMEI, Player.SHU),
                ((2, 4), PieceType.FU, Player.WEI),
                ((1, 3), PieceType.JUNIKU, Player.WEI),
                ((0, 4), PieceType.SOUSOU, Player.WEI),
            ],
            hands={Player.SHU: [PieceType.FU], Player.WEI: [PieceType.JUNYUU]},
        )
        board_before = state.board.copy()
        hands_before = {p: list(h) for p, h in state.hands.items()}

        MinimaxSearch(state, Player.SHU, rng=random.Random(0)).choose_move(depth)

        assert state.board == board_before
        assert state.hands == hands_before
        assert state.executor.depth == 0
        assert state.board.get_royal_position(Player.WEI) == (0, 4)
