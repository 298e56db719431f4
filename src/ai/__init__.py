"""
三國志将棋AI - 評価関数と探索
"""

from .evaluator import evaluate, ROYAL_LOST_SCORE, MATE_SCORE, CHECK_BONUS
from .search import MinimaxSearch, SearchResult, DEFAULT_DEPTH

__all__ = [
    'evaluate',
    'ROYAL_LOST_SCORE',
    'MATE_SCORE',
    'CHECK_BONUS',
    'MinimaxSearch',
    'SearchResult',
    'DEFAULT_DEPTH',
]
