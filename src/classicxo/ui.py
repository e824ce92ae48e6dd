"""FastAPI-powered web UI for playing ClassicXO in the browser."""

from __future__ import annotations

import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

import threading

from fastapi import BackgroundTasks, FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .ai import HeuristicAI
from .game import EMPTY, PLAYERS, ClassicXOGame

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for an active ClassicXO game and its computer opponent."""

    game: ClassicXOGame
    ai: HeuristicAI
    ai_pending: bool = False
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="ClassicXO", description="Tic-tac-toe against a scripted opponent")


AI_THINK_DELAY: float = 0.5


class NewGameRequest(BaseModel):
    """Request payload for starting a new game."""

    symbol: str = Field(default="X", description="Symbol played by the human")

    @field_validator("symbol")
    @classmethod
    def ensure_known_symbol(cls, value: str) -> str:
        value = value.strip().upper()
        if value not in PLAYERS:
            raise ValueError(
                f"Unsupported symbol {value!r}. Choose one of {', '.join(PLAYERS)}."
            )
        return value


class MoveRequest(BaseModel):
    """Request payload for submitting a move on an existing game."""

    model_config = ConfigDict(populate_by_name=True)

    cell_index: int = Field(alias="cellIndex", ge=0, le=8)


def _create_session(symbol: str) -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    game = ClassicXOGame(human=symbol)
    session = GameSession(game=game, ai=HeuristicAI(player=game.computer))
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Created game %s (human=%s)", session_id, symbol)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _log_if_finished(game_id: str, game: ClassicXOGame) -> None:
    if game.winner:
        logger.info("Game %s won by %s", game_id, game.winner)
    elif game.drawn:
        logger.info("Game %s drawn", game_id)


def _run_ai_turn(game_id: str) -> None:
    session = SESSIONS.get(game_id)
    if not session:
        return

    time.sleep(max(0.0, AI_THINK_DELAY))

    with session.lock:
        try:
            game = session.game
            if game.outcome.finished:
                return
            if game.current_player != session.ai.player:
                return
            move = session.ai.choose(game)
            if move is None:
                return
            game.play_move(move)
            logger.info("Game %s: computer %s -> %d", game_id, session.ai.player, move)
            _log_if_finished(game_id, game)
        finally:
            session.ai_pending = False


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        game = session.game
        move_log: List[Dict[str, object]] = [
            {"player": m.player, "position": m.position} for m in game.moves
        ]
        state: Dict[str, object] = {
            "id": game_id,
            "humanSymbol": game.human,
            "computerSymbol": game.computer,
            "currentPlayer": game.current_player,
            "board": ["" if c == EMPTY else c for c in game.board],
            "winner": game.winner,
            "drawn": game.drawn,
            "winningLine": list(game.line) if game.line else None,
            "availableMoves": game.available_moves(),
            "moveLog": move_log,
            "aiPending": session.ai_pending,
        }
        if move_log:
            state["lastMove"] = move_log[-1]
        return state


def _apply_player_move(
    game_id: str,
    session: GameSession,
    cell_index: int,
    background_tasks: Optional[BackgroundTasks] = None,
) -> None:
    should_schedule_ai = False
    with session.lock:
        game = session.game
        if game.outcome.finished:
            raise HTTPException(status_code=400, detail="Game already finished")

        if session.ai_pending:
            raise HTTPException(status_code=400, detail="AI is completing its move")

        if game.current_player != game.human:
            raise HTTPException(status_code=400, detail="It is not your turn")

        try:
            game.play_move(cell_index)
        except ValueError as exc:
            logger.warning("Game %s: rejected move %d: %s", game_id, cell_index, exc)
            raise HTTPException(status_code=400, detail=str(exc)) from exc

        logger.info("Game %s: human %s -> %d", game_id, game.human, cell_index)
        _log_if_finished(game_id, game)

        should_schedule_ai = (
            not game.outcome.finished and game.current_player == session.ai.player
        )
        if should_schedule_ai:
            session.ai_pending = True

    if should_schedule_ai and background_tasks is not None:
        background_tasks.add_task(_run_ai_turn, game_id)


@app.post("/api/game")
def create_game(request: NewGameRequest) -> Dict[str, object]:
    game_id, session = _create_session(request.symbol)
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(
    game_id: str, request: MoveRequest, background_tasks: BackgroundTasks
) -> Dict[str, object]:
    session = _get_session(game_id)
    _apply_player_move(game_id, session, request.cell_index, background_tasks)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/restart")
def restart_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    with session.lock:
        session.game.restart()
        session.ai_pending = False
    logger.info("Game %s restarted", game_id)
    return _serialize_session(game_id, session)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>ClassicXO</title>
    <style>
      :root {
        --bg-from: #3b0764;
        --bg-via: #1e3a8a;
        --bg-to: #134e4a;
        --cell-border: #06b6d4;
        --win-border: #facc15;
        --x-color: #ef4444;
        --o-color: #3b82f6;
      }
      * { box-sizing: border-box; }
      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        flex-direction: column;
        align-items: center;
        justify-content: center;
        font-family: system-ui, sans-serif;
        color: #e0f2fe;
        background: linear-gradient(135deg, var(--bg-from), var(--bg-via), var(--bg-to));
      }
      h1 {
        font-size: 3rem;
        margin: 0 0 2rem;
        background: linear-gradient(90deg, #22d3ee, #c084fc);
        -webkit-background-clip: text;
        background-clip: text;
        color: transparent;
      }
      .status { font-size: 1.5rem; margin-bottom: 1.5rem; min-height: 2rem; }
      .board {
        display: grid;
        grid-template-columns: repeat(3, 6rem);
        gap: 0.75rem;
        margin-bottom: 2rem;
      }
      .cell {
        width: 6rem;
        height: 6rem;
        border: 2px solid var(--cell-border);
        border-radius: 0.5rem;
        background: transparent;
        font-size: 2.5rem;
        font-weight: 700;
        cursor: pointer;
        box-shadow: 0 0 10px rgba(0, 255, 255, 0.3);
        transition: transform 0.15s ease, background 0.15s ease;
      }
      .cell:hover:empty { background: #164e63; transform: scale(1.05); }
      .cell.win { border-color: var(--win-border); box-shadow: 0 0 15px rgba(255, 255, 0, 0.7); }
      .cell.X { color: var(--x-color); }
      .cell.O { color: var(--o-color); }
      button.action {
        background: #06b6d4;
        color: white;
        border: none;
        border-radius: 0.375rem;
        padding: 0.5rem 1rem;
        font-weight: 700;
        cursor: pointer;
        margin: 0 0.5rem;
      }
      button.action:hover { background: #0891b2; }
      .hidden { display: none; }
    </style>
  </head>
  <body>
    <h1>Tic-Tac-Toe</h1>
    <section id=\"choice\">
      <div class=\"status\">Choose your symbol</div>
      <button class=\"action\" data-symbol=\"X\">Play X</button>
      <button class=\"action\" data-symbol=\"O\">Play O</button>
    </section>
    <section id=\"game\" class=\"hidden\">
      <div id=\"status\" class=\"status\"></div>
      <div id=\"board\" class=\"board\"></div>
      <button id=\"restart\" class=\"action\">Restart</button>
    </section>
    <script>
      let gameId = null;
      let pollTimer = null;

      async function api(path, body) {
        const response = await fetch(path, {
          method: body === undefined ? 'GET' : 'POST',
          headers: { 'Content-Type': 'application/json' },
          body: body === undefined ? undefined : JSON.stringify(body),
        });
        const payload = await response.json();
        if (!response.ok) {
          throw new Error(payload.detail || 'Request failed');
        }
        return payload;
      }

      function statusText(state) {
        if (state.winner) {
          return state.winner === state.humanSymbol ? 'You win!' : `Player ${state.winner} wins!`;
        }
        if (state.drawn) {
          return 'Draw!';
        }
        return state.currentPlayer === state.humanSymbol ? 'Your turn' : "Computer's turn";
      }

      function render(state) {
        document.getElementById('status').textContent = statusText(state);
        const boardContainer = document.getElementById('board');
        boardContainer.innerHTML = '';
        const line = state.winningLine || [];
        state.board.forEach((cell, index) => {
          const cellButton = document.createElement('button');
          cellButton.className = 'cell';
          if (cell) cellButton.classList.add(cell);
          if (line.includes(index)) cellButton.classList.add('win');
          cellButton.textContent = cell;
          cellButton.addEventListener('click', () => play(index));
          boardContainer.appendChild(cellButton);
        });
        clearTimeout(pollTimer);
        if (state.aiPending) {
          pollTimer = setTimeout(refresh, 200);
        }
      }

      async function refresh() {
        render(await api(`/api/game/${gameId}`));
      }

      async function play(index) {
        try {
          render(await api(`/api/game/${gameId}/move`, { cellIndex: index }));
        } catch (err) {
          console.warn(err.message);
        }
      }

      document.querySelectorAll('[data-symbol]').forEach((button) => {
        button.addEventListener('click', async () => {
          const state = await api('/api/game', { symbol: button.dataset.symbol });
          gameId = state.id;
          document.getElementById('choice').classList.add('hidden');
          document.getElementById('game').classList.remove('hidden');
          render(state);
        });
      });

      document.getElementById('restart').addEventListener('click', async () => {
        render(await api(`/api/game/${gameId}/restart`, {}));
      });
    </script>
  </body>
</html>
"""
