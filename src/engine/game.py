"""
対局の状態と手番・終局の管理

盤面や手番をグローバルに持たず、GameState を明示的に受け渡す。
"""

import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from .board import Board
from .errors import GameOverError, IllegalMoveError
from .executor import MoveExecutor
from .initial_setup import load_initial_board, get_initial_hands
from .move import Move
from .piece import Player, PieceType
from .rules import Rules

# コンピュータが受け持つ側
ENGINE_PLAYER = Player.WEI


class GameState:
    """ゲームの状態を管理するクラス"""

    def __init__(
        self,
        board: Optional[Board] = None,
        hands: Optional[Dict[Player, List[PieceType]]] = None,
        side_to_move: Player = Player.SHU
    ):
        self.board = board if board is not None else load_initial_board()
        self.hands = hands if hands is not None else get_initial_hands()
        self.side_to_move = side_to_move
        self.move_history: List[Move] = []
        self.game_over = False
        self.winner: Optional[Player] = None
        self.executor = MoveExecutor(self.board, self.hands)

    @property
    def last_move(self) -> Optional[Move]:
        return self.move_history[-1] if self.move_history else None

    def switch_turn(self):
        """手番を交代"""
        self.side_to_move = self.side_to_move.opponent

    def finish(self, winner: Player):
        self.game_over = True
        self.winner = winner

    def to_dict(self) -> dict:
        """ゲーム状態を辞書形式に変換"""
        return {
            "board": self.board.to_dict(),
            "side_to_move": self.side_to_move.name,
            "move_count": len(self.move_history),
            "last_move": self.last_move.to_dict() if self.last_move else None,
            "hands": {
                player.name: [piece_type.name for piece_type in self.hands[player]]
                for player in Player
            },
            "in_check": Rules.is_check(self.board, self.side_to_move),
            "game_over": self.game_over,
            "winner": self.winner.name if self.winner else None,
        }


@dataclass
class MoveResult:
    """apply_move の結果"""
    state: GameState
    captured: Optional[PieceType] = None


def new_game() -> GameState:
    """初期配置から新しい対局を始める（先手番）"""
    return GameState()


def legal_moves(state: GameState, square: Tuple[int, int]) -> List[Tuple[int, int]]:
    """指定マスの駒の合法な移動先"""
    return Rules.get_piece_legal_moves(state.board, square)


def legal_drops(state: GameState, piece_type: PieceType, owner: Player) -> List[Tuple[int, int]]:
    """持ち駒を打てるマス"""
    return Rules.get_legal_drops(state.board, piece_type, owner)


def all_legal_moves(state: GameState, owner: Player, include_drops: bool = True) -> List[Move]:
    """指定プレイヤーの合法手すべて"""
    return Rules.get_legal_moves(state.board, owner, state.hands[owner], include_drops)


def is_check(state: GameState, owner: Player) -> bool:
    return Rules.is_check(state.board, owner)


def is_over(state: GameState) -> bool:
    return state.game_over


def winner(state: GameState) -> Optional[Player]:
    return state.winner


def apply_move(state: GameState, move: Move) -> MoveResult:
    """
    手番側の手を適用する

    合法手でなければ IllegalMoveError、終局後なら GameOverError を送出し、
    どちらの場合も状態は変更しない。
    適用後、相手に合法手が一つもなければ（王手の有無を問わず）手番側の勝ち。
    """
    if state.game_over:
        raise GameOverError("ゲームは既に終了しています")
    if move.player != state.side_to_move:
        raise IllegalMoveError(f"手番ではありません: {move}")
    if not Rules.is_legal(state.board, move, state.hands):
        raise IllegalMoveError(f"無効な手です: {move}")

    captured = state.executor.apply(move)
    state.move_history.append(move)

    opponent = move.player.opponent
    if Rules.has_no_moves(state.board, opponent, state.hands[opponent]):
        state.finish(move.player)
    else:
        state.switch_turn()

    return MoveResult(state=state, captured=captured)


def resign(state: GameState) -> GameState:
    """手番側が投了し、相手の勝ちとする"""
    if state.game_over:
        raise GameOverError("ゲームは既に終了しています")
    state.finish(state.side_to_move.opponent)
    return state


def choose_engine_move(
    state: GameState,
    rng: Optional[random.Random] = None,
    depth: int = 2
) -> Optional[Move]:
    """
    手番側のコンピュータの手を探索して返す（適用はしない）
    合法手がなければ None
    """
    from ..ai.search import MinimaxSearch

    if state.game_over:
        raise GameOverError("ゲームは既に終了しています")
    result = MinimaxSearch(state, state.side_to_move, rng=rng).choose_move(depth)
    return result.move if result else None


def play_engine_move(
    state: GameState,
    rng: Optional[random.Random] = None,
    depth: int = 2
) -> MoveResult:
    """コンピュータの手を探索して適用する"""
    move = choose_engine_move(state, rng=rng, depth=depth)
    if move is None:
        # 合法手がない側の負け
        state.finish(state.side_to_move.opponent)
        return MoveResult(state=state)
    return apply_move(state, move)
