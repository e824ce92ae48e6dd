"""Rule-cascade computer opponent for ClassicXO."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from .game import (
    CENTER,
    CORNERS,
    EDGES,
    EMPTY,
    OPPOSITE_CORNERS,
    ClassicXOGame,
    Player,
    cell_at,
    evaluate,
    other_player,
    place,
)

logger = logging.getLogger(__name__)


# ---- rules ----


def _find_winning_move(board: Sequence[str], player: Player) -> Optional[int]:
    for i in range(len(board)):
        if board[i] != EMPTY:
            continue
        # place() hands back a fresh list, the caller's board stays intact
        if evaluate(place(board, i, player)).winner == player:
            return i
    return None


def _take_opposite_corner(board: Sequence[str], human: Player) -> Optional[int]:
    for a, b in OPPOSITE_CORNERS:
        if cell_at(board, a) == human and cell_at(board, b) == EMPTY:
            return b
        if cell_at(board, b) == human and cell_at(board, a) == EMPTY:
            return a
    return None


def _block_double_threat(board: Sequence[str], human: Player) -> Optional[int]:
    if any(
        cell_at(board, a) == human and cell_at(board, b) == human
        for a, b in OPPOSITE_CORNERS
    ):
        return _first_empty(board, EDGES)
    return None


def _first_empty(board: Sequence[str], cells: Sequence[int]) -> Optional[int]:
    for i in cells:
        if cell_at(board, i) == EMPTY:
            return i
    return None


# ---- public API ----


def explain_move(
    board: Sequence[str], computer: Player, human: Player
) -> Tuple[Optional[int], Optional[str]]:
    """Pick the computer's next cell and name the rule that chose it.

    Rules are tried in a fixed order and the first one that yields a cell
    wins: complete our own line, block the human's line, take the center,
    answer a human corner with the opposite corner, defend a diagonal
    corner pair from an edge, take any corner, take any cell. A full board
    yields ``(None, None)``.
    """
    move = _find_winning_move(board, computer)
    if move is not None:
        return move, "win"

    move = _find_winning_move(board, human)
    if move is not None:
        return move, "block"

    if cell_at(board, CENTER) == EMPTY:
        return CENTER, "center"

    move = _take_opposite_corner(board, human)
    if move is not None:
        return move, "opposite_corner"

    move = _block_double_threat(board, human)
    if move is not None:
        return move, "block_fork"

    move = _first_empty(board, CORNERS)
    if move is not None:
        return move, "corner"

    move = _first_empty(board, range(len(board)))
    if move is not None:
        return move, "any"
    return None, None


def select_move(
    board: Sequence[str], computer: Player, human: Player
) -> Optional[int]:
    return explain_move(board, computer, human)[0]


@dataclass
class HeuristicAI:
    """Scripted opponent that answers with :func:`select_move`.

    Public surface:
      - HeuristicAI(player="O")
      - choose(game) -> cell index, or None on a full board
    """

    player: Player

    @property
    def opponent(self) -> Player:
        return other_player(self.player)

    def choose(self, game: ClassicXOGame) -> Optional[int]:
        if game.current_player != self.player:
            raise ValueError("It is not this AI player's turn")

        move, rule = explain_move(game.board, self.player, self.opponent)
        logger.debug("AI %s picks %s (%s)", self.player, move, rule)
        return move
