"""ClassicXO package exposing game logic, the scripted opponent, and the web application."""

from .ai import HeuristicAI, select_move
from .game import ClassicXOGame, Outcome, evaluate
from .ui import app

__all__ = ["ClassicXOGame", "HeuristicAI", "Outcome", "app", "evaluate", "select_move"]
