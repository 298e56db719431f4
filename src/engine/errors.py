"""
ゲームエンジンの例外定義
"""


class GameError(Exception):
    """呼び出し側で回復可能なゲーム操作のエラー"""


class IllegalMoveError(GameError):
    """合法手に含まれない手が要求された（盤面は変更されない）"""


class GameOverError(GameError):
    """終了したゲームに手が要求された"""


class MoveStackError(RuntimeError):
    """
    手の実行と取り消しの対応が崩れた

    取り消し順序の誤り・二重取り消しなど。盤面と持ち駒の整合性が
    保証できなくなるため、回復せずに上位へ伝播させる。
    """
