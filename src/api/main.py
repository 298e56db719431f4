"""
三國志将棋 FastAPI サーバ
ゲームの状態管理とAI推論のエンドポイントを提供
"""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel
from typing import Optional, Dict
import uuid

from ..engine import (
    Player, PieceType, Move, GameState, GameError, GameOverError, ENGINE_PLAYER,
    new_game as create_game, legal_moves, legal_drops, all_legal_moves,
    apply_move as apply_game_move, resign as resign_game,
)
from .ai_player import get_ai

app = FastAPI(
    title="三國志将棋 API",
    description="三國志将棋のバックエンドAPI",
    version="1.0.0"
)

# CORS設定（フロントエンドからのアクセスを許可）
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # 本番環境では制限すべき
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ゲームの状態を保持する辞書（各ゲームの正本）
games: Dict[str, GameState] = {}


# Pydanticモデル（リクエスト/レスポンス用）

class NewGameResponse(BaseModel):
    game_id: str
    message: str
    game_state: dict


class MoveRequest(BaseModel):
    from_row: Optional[int] = None
    from_col: Optional[int] = None
    to_row: int
    to_col: int
    move_type: str = "NORMAL"  # NORMAL, DROP
    piece_type: Optional[str] = None  # DROPの場合に必要


class MoveResponse(BaseModel):
    success: bool
    message: str
    game_state: dict
    captured: Optional[str] = None
    move: Optional[dict] = None


class PredictRequest(BaseModel):
    difficulty: str = 'medium'  # easy, medium, hard


class PredictResponse(BaseModel):
    move: dict
    evaluation: float
    game_state: dict


def _get_game(game_id: str) -> GameState:
    if game_id not in games:
        raise HTTPException(status_code=404, detail="ゲームが見つかりません")
    return games[game_id]


def _state_dict(game_id: str, game_state: GameState) -> dict:
    return {"game_id": game_id, **game_state.to_dict()}


def _build_move(game_state: GameState, move_request: MoveRequest) -> Move:
    """リクエストから手を構築"""
    player = game_state.side_to_move
    to_pos = (move_request.to_row, move_request.to_col)

    if move_request.move_type == "DROP":
        if not move_request.piece_type:
            raise HTTPException(status_code=400, detail="DROPには piece_type が必要です")
        try:
            piece_type = PieceType[move_request.piece_type]
        except KeyError as e:
            raise HTTPException(status_code=400, detail=f"無効なパラメータ: {str(e)}")
        return Move.create_drop_move(to_pos, piece_type, player)

    if move_request.move_type != "NORMAL":
        raise HTTPException(status_code=400, detail=f"無効な手の種類: {move_request.move_type}")
    if move_request.from_row is None or move_request.from_col is None:
        raise HTTPException(status_code=400, detail="移動元の座標が必要です")
    return Move.create_normal_move((move_request.from_row, move_request.from_col), to_pos, player)


# エンドポイント

@app.get("/api")
async def root():
    """APIルート"""
    return {
        "message": "三國志将棋 API へようこそ",
        "version": "1.0.0",
        "endpoints": [
            "/new_game",
            "/get_game/{game_id}",
            "/legal_moves/{game_id}",
            "/legal_drops/{game_id}",
            "/get_legal_moves/{game_id}",
            "/apply_move/{game_id}",
            "/predict/{game_id}",
            "/engine_move/{game_id}",
            "/resign/{game_id}",
            "/delete_game/{game_id}",
        ]
    }


@app.post("/new_game", response_model=NewGameResponse)
async def new_game():
    """
    新しいゲームを開始する
    初期配置から蜀の手番で始まる
    """
    game_id = str(uuid.uuid4())
    game_state = create_game()
    games[game_id] = game_state

    return NewGameResponse(
        game_id=game_id,
        message="新しいゲームを開始しました",
        game_state=_state_dict(game_id, game_state)
    )


@app.get("/get_game/{game_id}")
async def get_game(game_id: str):
    """ゲームの状態を取得"""
    return _state_dict(game_id, _get_game(game_id))


@app.get("/legal_moves/{game_id}")
async def get_piece_legal_moves(game_id: str, row: int, col: int):
    """指定マスの駒の移動先（ハイライト用）"""
    game_state = _get_game(game_id)
    if not game_state.board.is_valid_position((row, col)):
        raise HTTPException(status_code=400, detail="盤外の座標です")

    targets = legal_moves(game_state, (row, col))
    return {"from": (row, col), "targets": targets, "count": len(targets)}


@app.get("/legal_drops/{game_id}")
async def get_legal_drops(game_id: str, piece_type: str, player: Optional[str] = None):
    """持ち駒を打てるマス（ハイライト用）"""
    game_state = _get_game(game_id)
    try:
        pt = PieceType[piece_type]
        owner = Player[player] if player else game_state.side_to_move
    except KeyError as e:
        raise HTTPException(status_code=400, detail=f"無効なパラメータ: {str(e)}")

    targets = legal_drops(game_state, pt, owner)
    return {"piece_type": pt.name, "player": owner.name, "targets": targets, "count": len(targets)}


@app.get("/get_legal_moves/{game_id}")
async def get_legal_moves(game_id: str):
    """現在のプレイヤーの合法手を取得"""
    game_state = _get_game(game_id)

    if game_state.game_over:
        return {"legal_moves": [], "message": "ゲームは終了しています"}

    moves = all_legal_moves(game_state, game_state.side_to_move)
    return {
        "legal_moves": [move.to_dict() for move in moves],
        "count": len(moves),
        "current_player": game_state.side_to_move.name
    }


@app.post("/apply_move/{game_id}", response_model=MoveResponse)
async def apply_move(game_id: str, move_request: MoveRequest):
    """手を適用する"""
    game_state = _get_game(game_id)
    move = _build_move(game_state, move_request)

    try:
        result = apply_game_move(game_state, move)
    except GameError as e:
        print(f"無効な手: {move} ({e})")
        raise HTTPException(status_code=400, detail=str(e))

    message = "手を適用しました"
    if game_state.game_over:
        message = f"{game_state.winner.name}の勝利です！"

    return MoveResponse(
        success=True,
        message=message,
        game_state=_state_dict(game_id, game_state),
        captured=result.captured.name if result.captured else None,
        move=move.to_dict()
    )


@app.post("/predict/{game_id}", response_model=PredictResponse)
async def predict(game_id: str, request: Optional[PredictRequest] = None):
    """
    AIが次の手を予測する（盤面には適用しない）

    difficulty: 'easy', 'medium', 'hard'
    """
    game_state = _get_game(game_id)

    if game_state.game_over:
        raise HTTPException(status_code=400, detail="ゲームは終了しています")

    difficulty = request.difficulty if request else 'medium'

    print(f"\n=== AI予測開始 (難易度: {difficulty}) ===")
    print(f"プレイヤー: {game_state.side_to_move.name}")

    try:
        best_move, evaluation = get_ai().get_best_move(game_state, difficulty)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    print(f"AI選択: {best_move} 評価値: {evaluation:.1f}")
    print("=== AI予測終了 ===\n")

    return PredictResponse(
        move=best_move.to_dict(),
        evaluation=evaluation,
        game_state=_state_dict(game_id, game_state)
    )


@app.post("/engine_move/{game_id}", response_model=MoveResponse)
async def engine_move(game_id: str, request: Optional[PredictRequest] = None):
    """
    AIが自分の手番（魏）の手を選んで適用する
    蜀の手番で呼ばれた場合は400
    """
    game_state = _get_game(game_id)

    if game_state.game_over:
        raise HTTPException(status_code=400, detail="ゲームは終了しています")
    if game_state.side_to_move != ENGINE_PLAYER:
        raise HTTPException(
            status_code=400,
            detail=f"コンピュータ（{ENGINE_PLAYER.name}）の手番ではありません"
        )

    difficulty = request.difficulty if request else 'medium'
    try:
        best_move, evaluation = get_ai().get_best_move(game_state, difficulty)
    except ValueError:
        # 合法手がない側の負け
        game_state.finish(game_state.side_to_move.opponent)
        return MoveResponse(
            success=False,
            message="合法手がありません",
            game_state=_state_dict(game_id, game_state)
        )

    result = apply_game_move(game_state, best_move)
    print(f"AI着手: {best_move} 評価値: {evaluation:.1f}")

    return MoveResponse(
        success=True,
        message="AIが手を指しました",
        game_state=_state_dict(game_id, game_state),
        captured=result.captured.name if result.captured else None,
        move=best_move.to_dict()
    )


@app.post("/resign/{game_id}")
async def resign(game_id: str):
    """
    投了する
    現在のプレイヤーが投了し、相手の勝利となる
    """
    game_state = _get_game(game_id)

    try:
        resign_game(game_state)
    except GameOverError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "message": f"{game_state.side_to_move.name}が投了しました",
        "winner": game_state.winner.name,
        "game_state": _state_dict(game_id, game_state)
    }


@app.delete("/delete_game/{game_id}")
async def delete_game(game_id: str):
    """ゲームを削除"""
    _get_game(game_id)
    del games[game_id]
    return {"message": "ゲームを削除しました"}


@app.get("/ai/evaluate/{game_id}")
async def evaluate_position(game_id: str):
    """現在の局面を手番側から評価"""
    game_state = _get_game(game_id)
    evaluation = get_ai().evaluate_position(game_state)
    return {
        "evaluation": evaluation,
        "current_player": game_state.side_to_move.name,
        "interpretation": "有利" if evaluation > 100 else "不利" if evaluation < -100 else "互角"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
