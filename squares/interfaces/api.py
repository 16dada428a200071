"""
api.py - REST adapter for Squares

Exposes the engine's next-move analysis over HTTP:

    POST /api/nextMove  {"size": 3, "data": "W.B......", "nextPlayerColor": "w"}

Each request loads its own SquaresGame, so no game is shared between
requests.
"""

from typing import List, Optional

from fastapi import FastAPI
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from squares.debug import debug
from squares.exceptions import SquaresError
from squares.game.rules import SquaresGame
from squares.utils import MIN_BOARD_SIZE, GameResult


class BoardRequest(BaseModel):
    """Board snapshot sent by the client."""
    size: int = Field(..., description="Board side length (> 2)")
    data: Optional[str] = Field(None, description="Row-major cells: '.', ' ', 'W', 'B'")
    nextPlayerColor: Optional[str] = Field(None, description="'w' or 'b'")

    model_config = {
        "json_schema_extra": {
            "example": {"size": 3, "data": "W.B......", "nextPlayerColor": "w"}
        }
    }


class MoveResponse(BaseModel):
    """Suggested move. row = col = -1 and color = null mean no move."""
    row: int = -1
    col: int = -1
    color: Optional[str] = None
    message: str
    winningSquare: Optional[List[List[int]]] = None


def _respond(status_code: int, message: str, row: int = -1, col: int = -1,
             color: Optional[str] = None,
             winning_square: Optional[List[List[int]]] = None) -> JSONResponse:
    body = MoveResponse(row=row, col=col, color=color, message=message,
                        winningSquare=winning_square)
    return JSONResponse(status_code=status_code, content=body.model_dump())


def next_move(board: BoardRequest) -> JSONResponse:
    """Validate the snapshot, load it and answer with the engine's move."""
    if board.size < MIN_BOARD_SIZE:
        return _respond(400, "Invalid board size")

    data = "".join((board.data or "").split())
    if len(data) != board.size * board.size:
        return _respond(400, "Invalid board data length")

    color = (board.nextPlayerColor or "").strip().lower()
    if color not in ("w", "b"):
        return _respond(400, "Invalid player color")

    try:
        game = SquaresGame()
        game.load_board(board.size, data, color)

        status = game.status()
        if status.is_game_over():
            if status == GameResult.DRAW:
                return _respond(200, "Game finished. Draw")
            winner = status.winner.symbol
            square = [list(cell) for cell in game.winning_square]
            return _respond(200, f"Game finished. {winner} wins!",
                            color=winner.lower(), winning_square=square)

        move = game.find_next_move()
        if move is None:
            return _respond(200, "No valid moves available")
        return _respond(200, "Move found", row=move[0], col=move[1], color=color)
    except SquaresError as e:
        debug.info(f"Rejected board: {e}", "api")
        return _respond(400, str(e))
    except Exception as e:
        debug.error(f"nextMove failed: {e}", "api")
        return _respond(500, f"Internal server error: {e}")


def create_app() -> FastAPI:
    """Build the FastAPI application."""
    app = FastAPI(title="Squares API", version="0.1.0")

    @app.get("/health")
    def health():
        return {"ok": True}

    app.post("/api/nextMove", response_model=MoveResponse)(next_move)
    return app


app = create_app()
