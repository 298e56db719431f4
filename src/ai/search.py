"""
αβ枝刈り付きミニマックス探索

探索は対局中の盤面そのものを MoveExecutor で書き換えて進め、
子局面から戻るたびに手を取り消す（盤面のコピーは作らない）。
"""

import math
import random
from dataclasses import dataclass, field
from typing import List, Optional

from ..engine.game import GameState
from ..engine.move import Move
from ..engine.piece import Player
from ..engine.rules import Rules
from .evaluator import evaluate, MATE_SCORE

# ルートから1手指した後の残り探索深さ
DEFAULT_DEPTH = 2
# これより浅い残り深さでは打つ手を生成しない
DROP_SEARCH_MIN_DEPTH = 2


@dataclass
class SearchResult:
    """探索結果"""
    move: Move
    score: float
    candidates: List[Move] = field(default_factory=list)  # 最善評価値の手すべて
    nodes: int = 0


class MinimaxSearch:
    """
    player を最大化側とするミニマックス探索

    rng: 同点の手から選ぶための乱数（シードを固定すれば結果を再現できる）
    """

    def __init__(self, state: GameState, player: Player, rng: Optional[random.Random] = None):
        self.state = state
        self.player = player
        self.rng = rng if rng is not None else random.Random()
        self.executor = state.executor
        self.nodes = 0

    def evaluate(self) -> float:
        return evaluate(self.state.board, self.state.hands, self.player)

    def order_moves(self, moves: List[Move]) -> List[Move]:
        """取れる駒の価値が高い手から並べる（打つ手・駒を取らない手は0、安定ソート）"""
        board = self.state.board

        def capture_value(move: Move) -> int:
            if move.is_drop:
                return 0
            target = board.get_piece(move.to_pos)
            return target.value if target else 0

        return sorted(moves, key=capture_value, reverse=True)

    def generate_moves(self, player: Player, include_drops: bool) -> List[Move]:
        return Rules.get_legal_moves(
            self.state.board, player, self.state.hands[player], include_drops
        )

    def minimax(self, depth: int, alpha: float, beta: float, maximizing: bool) -> float:
        """
        残り深さ depth の評価値

        合法手がない場合、王手されていれば早い詰みほど大きな値を返し、
        王手されていなければ 0 を返す（対局の終局判定では合法手なしは負け）。
        """
        self.nodes += 1
        if depth == 0:
            return self.evaluate()

        side = self.player if maximizing else self.player.opponent
        moves = self.order_moves(
            self.generate_moves(side, include_drops=depth >= DROP_SEARCH_MIN_DEPTH)
        )
        if not moves:
            if Rules.is_check(self.state.board, side):
                return -MATE_SCORE + depth if maximizing else MATE_SCORE - depth
            return 0

        if maximizing:
            best = -math.inf
            for move in moves:
                with self.executor.applied(move):
                    score = self.minimax(depth - 1, alpha, beta, False)
                best = max(best, score)
                alpha = max(alpha, best)
                if beta <= alpha:
                    break
        else:
            best = math.inf
            for move in moves:
                with self.executor.applied(move):
                    score = self.minimax(depth - 1, alpha, beta, True)
                best = min(best, score)
                beta = min(beta, best)
                if beta <= alpha:
                    break
        return best

    def choose_move(self, depth: int = DEFAULT_DEPTH) -> Optional[SearchResult]:
        """
        打つ手を含む全合法手を1手ずつ指し、相手番から depth の探索で評価する
        最善の評価値の手が複数あれば rng で一つ選ぶ
        """
        self.nodes = 0
        moves = self.order_moves(self.generate_moves(self.player, include_drops=True))
        if not moves:
            return None

        best_score = -math.inf
        best_moves: List[Move] = []
        for move in moves:
            with self.executor.applied(move):
                score = self.minimax(depth, -math.inf, math.inf, False)
            if score > best_score:
                best_score = score
                best_moves = [move]
            elif score == best_score:
                best_moves.append(move)

        chosen = self.rng.choice(best_moves)
        return SearchResult(move=chosen, score=best_score, candidates=best_moves, nodes=self.nodes)
