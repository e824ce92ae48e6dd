"""Core rules for ClassicXO: board helpers, outcome detection, and game state."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

Player = str  # "X" or "O"
Board = List[str]

EMPTY = " "
PLAYERS: Tuple[Player, Player] = ("X", "O")

WINNING_LINES: Tuple[Tuple[int, int, int], ...] = (
    (0, 1, 2),
    (3, 4, 5),
    (6, 7, 8),
    (0, 3, 6),
    (1, 4, 7),
    (2, 5, 8),
    (0, 4, 8),
    (2, 4, 6),
)

CENTER = 4
CORNERS: Tuple[int, ...] = (0, 2, 6, 8)
EDGES: Tuple[int, ...] = (1, 3, 5, 7)
OPPOSITE_CORNERS: Tuple[Tuple[int, int], ...] = ((0, 8), (2, 6))


def other_player(player: Player) -> Player:
    return "O" if player == "X" else "X"


# ---------- Outcome ----------


@dataclass(frozen=True)
class Outcome:
    winner: Optional[Player] = None
    drawn: bool = False

    @property
    def finished(self) -> bool:
        return self.winner is not None or self.drawn

    @classmethod
    def won_by(cls, player: Player) -> "Outcome":
        return cls(winner=player)


IN_PROGRESS = Outcome()
DRAW = Outcome(drawn=True)


# ---------- Board helpers ----------


def new_board() -> Board:
    return [EMPTY] * 9


def empty_cells(board: Sequence[str]) -> List[int]:
    return [i for i, c in enumerate(board) if c == EMPTY]


def cell_at(board: Sequence[str], index: int) -> Optional[str]:
    """Cell value at ``index``, or None when the board is too short."""
    return board[index] if 0 <= index < len(board) else None


def place(board: Sequence[str], index: int, player: Player) -> Board:
    """Return a copy of ``board`` with ``player`` written at ``index``."""
    if not 0 <= index < len(board):
        raise ValueError("Cell index out of range")
    if board[index] != EMPTY:
        raise ValueError("Cell already occupied")
    out = list(board)
    out[index] = player
    return out


def winning_line(board: Sequence[str]) -> Optional[Tuple[int, int, int]]:
    """First completed line in row, column, diagonal order (or None)."""
    for a, b, c in WINNING_LINES:
        # Lines running off a short board never match
        if max(a, b, c) >= len(board):
            continue
        v = board[a]
        if v != EMPTY and v == board[b] == board[c]:
            return (a, b, c)
    return None


def evaluate(board: Sequence[str]) -> Outcome:
    line = winning_line(board)
    if line is not None:
        return Outcome.won_by(board[line[0]])
    if all(c != EMPTY for c in board):
        return DRAW
    return IN_PROGRESS


# ---------- Game ----------


@dataclass(frozen=True)
class Move:
    player: Player
    position: int


@dataclass
class ClassicXOGame:
    # The human always opens, whichever symbol they picked
    human: Player = "X"
    board: Board = field(default_factory=new_board)
    current_player: Player = ""
    moves: List[Move] = field(default_factory=list)
    outcome: Outcome = field(default=IN_PROGRESS, init=False)
    line: Optional[Tuple[int, int, int]] = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.human not in PLAYERS:
            raise ValueError(f"Unknown symbol {self.human!r}")
        if not self.current_player:
            self.current_player = self.human
        # Outcome is derived from the board
        self.outcome = evaluate(self.board)
        self.line = winning_line(self.board)

    @property
    def computer(self) -> Player:
        return other_player(self.human)

    @property
    def winner(self) -> Optional[Player]:
        return self.outcome.winner

    @property
    def drawn(self) -> bool:
        return self.outcome.drawn

    def available_moves(self) -> List[int]:
        if self.outcome.finished:
            return []
        return empty_cells(self.board)

    def play_move(self, index: int) -> None:
        """Apply a move for the current player and refresh the outcome."""
        if self.outcome.finished:
            raise ValueError("Game already finished")
        if index not in self.available_moves():
            raise ValueError("Illegal move for the current position")

        player = self.current_player
        self.board = place(self.board, index, player)
        self.moves.append(Move(player=player, position=index))
        self.outcome = evaluate(self.board)
        self.line = winning_line(self.board)
        self.current_player = other_player(player)

    def restart(self) -> None:
        self.board = new_board()
        self.current_player = self.human
        self.moves = []
        self.outcome = IN_PROGRESS
        self.line = None

    def clone(self) -> "ClassicXOGame":
        return ClassicXOGame(
            human=self.human,
            board=self.board.copy(),
            current_player=self.current_player,
            moves=list(self.moves),
        )
