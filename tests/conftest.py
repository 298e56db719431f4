"""
pytest共通設定とフィクスチャ
"""

import pytest
import sys
from pathlib import Path

# プロジェクトルートをパスに追加
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))


@pytest.fixture
def empty_board():
    """空の盤面を提供するフィクスチャ"""
    from src.engine import Board
    return Board()


@pytest.fixture
def initial_board():
    """初期配置の盤面を提供するフィクスチャ"""
    from src.engine.initial_setup import load_initial_board
    return load_initial_board()


@pytest.fixture
def initial_state():
    """初期配置の対局状態を提供するフィクスチャ"""
    from src.engine import new_game
    return new_game()


@pytest.fixture
def build_state():
    """
    駒の配置から対局状態を作る関数を提供するフィクスチャ

    使用例: build_state([((8, 4), PieceType.RYUBI, Player.SHU), ...],
                        hands={Player.SHU: [PieceType.FU]}, side=Player.WEI)
    """
    from src.engine import Board, GameState, Piece, Player

    def _build(pieces, hands=None, side=Player.SHU):
        board = Board()
        for position, piece_type, owner in pieces:
            assert board.add_piece(position, Piece(piece_type, owner)), position
        full_hands = {Player.SHU: [], Player.WEI: []}
        for player, hand in (hands or {}).items():
            full_hands[player] = list(hand)
        return GameState(board=board, hands=full_hands, side_to_move=side)

    return _build


@pytest.fixture
def shu_player():
    """蜀プレイヤーを提供するフィクスチャ"""
    from src.engine import Player
    return Player.SHU


@pytest.fixture
def wei_player():
    """魏プレイヤーを提供するフィクスチャ"""
    from src.engine import Player
    return Player.WEI
