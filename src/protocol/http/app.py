from __future__ import annotations

import asyncio
import logging
import random
from typing import Dict, List, Optional

from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, Field

from .error import (
    board_invariant_handler,
    exception_handler,
    http_exception_handler,
    request_validation_exception_handler,
)
from .logging_middleware import RequestIDLoggingMiddleware
from .session import InMemorySessionStore
from .settings import Settings
from ...engine.board import BoardInvariantError
from ...engine.game import GameState
from ...engine.move import Square, square_to_str, str_to_square
from ...engine.status import GameStatus, status_for
from ...search.selector import Difficulty, select_move


logger = logging.getLogger(__name__)


class MoveRequest(BaseModel):
    from_square: str = Field(..., description="Origin square, e.g. e2")
    to_square: str = Field(..., description="Destination square, e.g. e4")


class ClickRequest(BaseModel):
    square: str = Field(..., description="Clicked square, e.g. e2")


class AIMoveRequest(BaseModel):
    difficulty: Optional[Difficulty] = Field(default=None, description="easy | medium | hard")


class CastlingState(BaseModel):
    kingside: bool
    queenside: bool


class GameStateView(BaseModel):
    game_id: str
    board: List[str]
    turn: str
    status: GameStatus
    in_check: bool
    checkmate: bool
    stalemate: bool
    castling: Dict[str, CastlingState]
    en_passant: Optional[str]
    captured: Dict[str, List[str]]
    last_move: Optional[str]
    move_history: List[str]
    selection: Optional[str]
    selection_moves: List[str]


class CreateGameResponse(BaseModel):
    game_id: str
    state: GameStateView


class LegalMovesResponse(BaseModel):
    square: str
    moves: List[str]


class ClickResponse(BaseModel):
    result: str
    state: GameStateView


class AIMoveResponse(BaseModel):
    move: str
    piece: str
    captured: Optional[str]
    state: GameStateView


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    app = FastAPI(title="Chess Rules Engine API", version="0.1.0")

    # Basic logging setup
    logging.basicConfig(level=settings.log_level)

    # Middleware & error handling
    app.add_middleware(RequestIDLoggingMiddleware)
    # Preserve FastAPI 422 validation behavior and structured HTTP errors
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
    app.add_exception_handler(BoardInvariantError, board_invariant_handler)
    app.add_exception_handler(Exception, exception_handler)

    # In-memory session store for games
    store = InMemorySessionStore()
    rng = random.Random(settings.ai_seed)
    app.state.settings = settings
    app.state.store = store

    @app.get("/healthz")
    async def healthz() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games", response_model=CreateGameResponse)
    async def create_game() -> CreateGameResponse:
        game_id = store.create(GameState.new(settings.rules))
        with store.locked(game_id) as state:
            view = _view(game_id, _require(state))
        logger.info("game created", extra={"game_id": game_id})
        return CreateGameResponse(game_id=game_id, state=view)

    @app.get("/api/games/{game_id}/state", response_model=GameStateView)
    async def get_state(game_id: str) -> GameStateView:
        with store.locked(game_id) as state:
            return _view(game_id, _require(state))

    @app.get("/api/games/{game_id}/moves/{square}", response_model=LegalMovesResponse)
    async def legal_moves(game_id: str, square: str) -> LegalMovesResponse:
        sq = _parse_square(square)
        with store.locked(game_id) as state:
            moves = _require(state).legal_moves_at(sq)
        return LegalMovesResponse(square=square, moves=[square_to_str(m) for m in moves])

    @app.post("/api/games/{game_id}/click", response_model=ClickResponse)
    async def click(game_id: str, req: ClickRequest) -> ClickResponse:
        sq = _parse_square(req.square)
        with store.locked(game_id) as state:
            game = _require(state)
            result = game.click(sq)
            return ClickResponse(result=result.value, state=_view(game_id, game))

    @app.post("/api/games/{game_id}/move", response_model=GameStateView)
    async def make_move(game_id: str, req: MoveRequest) -> GameStateView:
        from_sq = _parse_square(req.from_square)
        to_sq = _parse_square(req.to_square)
        with store.locked(game_id) as state:
            game = _require(state)
            if game.commit_move(from_sq, to_sq) is None:
                # Illegal move attempted
                raise HTTPException(status_code=400, detail="illegal move")
            return _view(game_id, game)

    @app.post("/api/games/{game_id}/undo", response_model=GameStateView)
    async def undo(game_id: str) -> GameStateView:
        with store.locked(game_id) as state:
            game = _require(state)
            if not game.undo():
                raise HTTPException(status_code=400, detail="no moves to undo")
            return _view(game_id, game)

    @app.post("/api/games/{game_id}/reset", response_model=GameStateView)
    async def reset(game_id: str) -> GameStateView:
        with store.locked(game_id) as state:
            game = _require(state)
            game.reset()
            return _view(game_id, game)

    @app.post("/api/games/{game_id}/ai-move", response_model=AIMoveResponse)
    async def ai_move(game_id: str, req: Optional[AIMoveRequest] = None) -> AIMoveResponse:
        difficulty = (req.difficulty if req else None) or settings.ai_difficulty
        if settings.ai_move_delay_ms:
            await asyncio.sleep(settings.ai_move_delay_ms / 1000)
        with store.locked(game_id) as state:
            game = _require(state)
            move = select_move(game, game.turn, difficulty, rng)
            if move is None:
                raise HTTPException(status_code=409, detail="no legal moves")
            game.commit_move(move.from_sq, move.to_sq)
            logger.info(
                "ai move",
                extra={"game_id": game_id, "move": move.to_coord(), "difficulty": difficulty.value},
            )
            return AIMoveResponse(
                move=move.to_coord(),
                piece=move.piece.letter,
                captured=move.captured.letter if move.captured else None,
                state=_view(game_id, game),
            )

    @app.delete("/api/games/{game_id}")
    async def delete_game(game_id: str) -> Dict[str, str]:
        if not store.delete(game_id):
            raise HTTPException(status_code=404, detail="game not found")
        return {"status": "deleted"}

    return app


def _require(state: Optional[GameState]) -> GameState:
    if state is None:
        raise HTTPException(status_code=404, detail="game not found")
    return state


def _parse_square(name: str) -> Square:
    try:
        return str_to_square(name)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


def _view(game_id: str, game: GameState) -> GameStateView:
    st = status_for(game, game.turn)
    history = [m.to_coord() for m in game.move_history]
    return GameStateView(
        game_id=game_id,
        board=game.board.rows(),
        turn=game.turn.value,
        status=st,
        in_check=st in (GameStatus.IN_CHECK, GameStatus.CHECKMATE),
        checkmate=st is GameStatus.CHECKMATE,
        stalemate=st is GameStatus.STALEMATE,
        castling={
            color.value: CastlingState(kingside=r.kingside, queenside=r.queenside)
            for color, r in game.castling.items()
        },
        en_passant=square_to_str(game.en_passant) if game.en_passant is not None else None,
        captured={color.value: [p.letter for p in ps] for color, ps in game.captured.items()},
        last_move=history[-1] if history else None,
        move_history=history,
        selection=square_to_str(game.selection) if game.selection is not None else None,
        selection_moves=[square_to_str(s) for s in game.selection_moves],
    )


# Default app for non-factory servers
app = create_app()
