"""
自己対戦シミュレーション
コンピュータ同士（またはランダムな手）で対局し、ルール違反やバグを検出する

使用方法:
    python scripts/self_play_simulation.py [--games 10] [--max-moves 200] [--depth 1] [--random] [--seed 0] [--verbose]
"""

import sys
import argparse
import random
from pathlib import Path
from typing import List, Optional
from dataclasses import dataclass, field

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from src.engine import (
    Player, Rules, GameState, new_game, all_legal_moves, apply_move, choose_engine_move
)


@dataclass
class GameResult:
    """ゲーム結果"""
    game_id: int
    winner: Optional[Player]
    total_moves: int
    termination_reason: str
    error: Optional[str] = None
    error_move: Optional[int] = None


@dataclass
class SimulationStats:
    """シミュレーション統計"""
    total_games: int = 0
    completed_games: int = 0
    error_games: int = 0
    shu_wins: int = 0
    wei_wins: int = 0
    max_moves_reached: int = 0
    total_moves: int = 0
    errors: List[str] = field(default_factory=list)


class SelfPlaySimulator:
    """自己対戦シミュレータ"""

    def __init__(self, depth: int = 1, use_random: bool = False,
                 seed: Optional[int] = None, verbose: bool = False):
        self.depth = depth
        self.use_random = use_random
        self.rng = random.Random(seed)
        self.verbose = verbose
        self.stats = SimulationStats()

    def run_game(self, game_id: int, max_moves: int = 200) -> GameResult:
        """1ゲームを実行"""
        state = new_game()
        move_count = 0

        try:
            while move_count < max_moves:
                if state.game_over:
                    return GameResult(
                        game_id=game_id,
                        winner=state.winner,
                        total_moves=move_count,
                        termination_reason="game_over"
                    )

                self._check_invariants(state, move_count)

                if self.use_random:
                    moves = all_legal_moves(state, state.side_to_move)
                    move = self.rng.choice(moves)
                else:
                    move = choose_engine_move(state, rng=self.rng, depth=self.depth)

                apply_move(state, move)
                move_count += 1

            return GameResult(
                game_id=game_id,
                winner=state.winner,
                total_moves=move_count,
                termination_reason="game_over" if state.game_over else "max_moves"
            )

        except Exception as e:
            error_msg = f"例外発生: {type(e).__name__}: {e} at move {move_count}"
            return GameResult(
                game_id=game_id,
                winner=None,
                total_moves=move_count,
                termination_reason="exception",
                error=error_msg,
                error_move=move_count
            )

    def _check_invariants(self, state: GameState, move_count: int):
        """不変条件をチェック"""
        if state.executor.depth != 0:
            raise AssertionError(f"取り消されていない手が残っています at move {move_count}")

        for player in Player:
            royal_count = sum(1 for _, piece in state.board.pieces(player) if piece.is_royal)
            if royal_count != 1:
                raise AssertionError(
                    f"{player.name}の王将が{royal_count}個 at move {move_count}"
                )

        # 手番側の相手は王手されたままではいけない
        if Rules.is_check(state.board, state.side_to_move.opponent):
            raise AssertionError(f"手番でない側が王手されています at move {move_count}")

    def run_simulation(self, num_games: int, max_moves: int = 200) -> SimulationStats:
        """複数ゲームのシミュレーションを実行"""
        self.stats = SimulationStats()

        mode = "ランダム" if self.use_random else f"探索 depth={self.depth}"
        print(f"自己対戦シミュレーション開始: {num_games}ゲーム ({mode})")
        print(f"   最大手数: {max_moves}")
        print("=" * 50)

        for i in range(num_games):
            result = self.run_game(i + 1, max_moves)
            self.stats.total_games += 1
            self.stats.total_moves += result.total_moves

            if result.termination_reason == "game_over":
                self.stats.completed_games += 1
                if result.winner == Player.SHU:
                    self.stats.shu_wins += 1
                elif result.winner == Player.WEI:
                    self.stats.wei_wins += 1
            elif result.termination_reason == "max_moves":
                self.stats.max_moves_reached += 1
            else:
                self.stats.error_games += 1
                self.stats.errors.append(result.error)

            if self.verbose or result.error:
                self._print_result(result)

        self._print_summary()
        return self.stats

    def _print_result(self, result: GameResult):
        """ゲーム結果を表示"""
        winner_str = result.winner.name if result.winner else "なし"
        print(f"Game {result.game_id}: "
              f"手数={result.total_moves}, "
              f"勝者={winner_str}, "
              f"終了理由={result.termination_reason}")

        if result.error:
            print(f"   エラー: {result.error}")

    def _print_summary(self):
        """統計サマリーを表示"""
        print("\n" + "=" * 50)
        print("シミュレーション結果")
        print("=" * 50)
        print(f"総ゲーム数:     {self.stats.total_games}")
        print(f"完了ゲーム:     {self.stats.completed_games}")
        print(f"エラーゲーム:   {self.stats.error_games}")
        print(f"蜀の勝利:       {self.stats.shu_wins}")
        print(f"魏の勝利:       {self.stats.wei_wins}")
        print(f"最大手数到達:   {self.stats.max_moves_reached}")

        if self.stats.total_games > 0:
            avg_moves = self.stats.total_moves / self.stats.total_games
            print(f"平均手数:       {avg_moves:.1f}")

        if self.stats.errors:
            print("\n発見されたエラー:")
            for i, error in enumerate(self.stats.errors[:10], 1):
                print(f"   {i}. {error}")


def main():
    parser = argparse.ArgumentParser(description="三國志将棋の自己対戦シミュレーション")
    parser.add_argument("--games", type=int, default=10, help="シミュレーションするゲーム数")
    parser.add_argument("--max-moves", type=int, default=200, help="ゲームあたりの最大手数")
    parser.add_argument("--depth", type=int, default=1, help="探索の深さ（ルートの1手を除く）")
    parser.add_argument("--random", action="store_true", help="探索せずランダムな合法手で対局")
    parser.add_argument("--seed", type=int, default=None, help="乱数のシード")
    parser.add_argument("--verbose", "-v", action="store_true", help="詳細な出力を表示")

    args = parser.parse_args()

    simulator = SelfPlaySimulator(
        depth=args.depth, use_random=args.random, seed=args.seed, verbose=args.verbose
    )
    stats = simulator.run_simulation(args.games, args.max_moves)

    # エラーがあった場合は終了コード1を返す
    if stats.error_games > 0:
        sys.exit(1)


if __name__ == "__main__":
    main()
