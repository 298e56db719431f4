"""
三國志将棋のゲームエンジン - パッケージ初期化
"""

from .piece import (
    Piece, Player, PieceType, Movement, PieceDefinition, PIECE_DEFINITIONS, PAWN_TYPE
)
from .board import Board, BOARD_SIZE
from .move import Move, MoveType
from .errors import GameError, IllegalMoveError, GameOverError, MoveStackError
from .executor import MoveExecutor, UndoRecord
from .rules import Rules
from .game import (
    GameState, MoveResult, ENGINE_PLAYER,
    new_game, legal_moves, legal_drops, all_legal_moves, apply_move,
    is_check, is_over, winner, resign, choose_engine_move, play_engine_move,
)

__all__ = [
    'Piece',
    'Player',
    'PieceType',
    'Movement',
    'PieceDefinition',
    'PIECE_DEFINITIONS',
    'PAWN_TYPE',
    'Board',
    'BOARD_SIZE',
    'Move',
    'MoveType',
    'GameError',
    'IllegalMoveError',
    'GameOverError',
    'MoveStackError',
    'MoveExecutor',
    'UndoRecord',
    'Rules',
    'GameState',
    'MoveResult',
    'ENGINE_PLAYER',
    'new_game',
    'legal_moves',
    'legal_drops',
    'all_legal_moves',
    'apply_move',
    'is_check',
    'is_over',
    'winner',
    'resign',
    'choose_engine_move',
    'play_engine_move',
]
