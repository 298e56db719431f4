"""
ウェブAPI用 AI推論モジュール
ミニマックス探索でコンピュータ側の手を選ぶ
"""

import random
import time
from typing import Optional, Tuple

from ..engine.game import GameState
from ..engine.move import Move
from ..engine.piece import Player
from ..ai.evaluator import evaluate
from ..ai.search import MinimaxSearch


class ShogiAI:
    """
    三國志将棋AI - αβ枝刈り付きミニマックス

    難易度レベル（ルートの1手の後に読む深さ）:
    - easy: 1
    - medium: 2
    - hard: 3
    """

    DIFFICULTY_SETTINGS = {
        'easy': {'depth': 1},
        'medium': {'depth': 2},
        'hard': {'depth': 3},
    }

    def __init__(self, seed: Optional[int] = None):
        """
        Args:
            seed: 同点の手を選ぶ乱数のシード（Noneなら固定しない）
        """
        self.seed = seed
        self.rng = random.Random(seed)

    def get_best_move(
        self,
        state: GameState,
        difficulty: str = 'medium'
    ) -> Tuple[Move, float]:
        """
        手番側の最善手を取得

        Returns:
            (最善手, 評価値)
        """
        settings = self.DIFFICULTY_SETTINGS.get(difficulty, self.DIFFICULTY_SETTINGS['medium'])

        started = time.perf_counter()
        search = MinimaxSearch(state, state.side_to_move, rng=self.rng)
        result = search.choose_move(settings['depth'])
        if result is None:
            raise ValueError("No legal moves available")

        elapsed = time.perf_counter() - started
        print(
            f"探索: depth={settings['depth']} nodes={result.nodes} "
            f"候補={len(result.candidates)} 時間={elapsed:.2f}s"
        )
        return result.move, float(result.score)

    def evaluate_position(self, state: GameState, player: Optional[Player] = None) -> float:
        """
        局面を評価

        Returns:
            正の値: player（省略時は手番側）有利
            負の値: 相手有利
        """
        player = player or state.side_to_move
        return float(evaluate(state.board, state.hands, player))


# シングルトンインスタンス（サーバー起動時に1回だけ初期化）
_ai_instance: Optional[ShogiAI] = None


def get_ai() -> ShogiAI:
    """AIインスタンスを取得（遅延初期化）"""
    global _ai_instance
    if _ai_instance is None:
        _ai_instance = ShogiAI()
    return _ai_instance


def reset_ai(seed: Optional[int] = None) -> ShogiAI:
    """乱数のシードを指定してAIを作り直す"""
    global _ai_instance
    _ai_instance = ShogiAI(seed=seed)
    return _ai_instance
