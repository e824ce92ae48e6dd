"""Tests for the ClassicXO scripted opponent."""

import pytest

from classicxo.ai import HeuristicAI, explain_move, select_move
from classicxo.game import EMPTY, ClassicXOGame, empty_cells, evaluate, new_board


def board_from(text: str):
    return [EMPTY if c == "_" else c for c in text]


def test_takes_immediate_win_before_block():
    # X also threatens 5, but O finishing its own row comes first
    board = board_from("OO_XX____")
    assert explain_move(board, "O", "X") == (2, "win")


def test_blocks_human_line():
    board = board_from("XX__O____")
    assert explain_move(board, "O", "X") == (2, "block")


def test_takes_center_on_empty_board():
    assert select_move(new_board(), "O", "X") == 4


def test_answers_corner_with_opposite_corner():
    assert explain_move(board_from("X___O____"), "O", "X") == (8, "opposite_corner")
    assert explain_move(board_from("____O___X"), "O", "X") == (0, "opposite_corner")


def test_first_corner_pair_wins_when_both_qualify():
    # Human holds 0 and 2; both 8 and 6 are open, the (0, 8) pair is checked first
    board = board_from("XOX_O__X_")
    assert explain_move(board, "O", "X") == (8, "opposite_corner")


def test_short_board_degrades_instead_of_raising():
    board = ["X", EMPTY, EMPTY, EMPTY, "O"]
    assert explain_move(board, "O", "X") == (2, "corner")
    assert select_move(["X", "O"], "O", "X") is None
    assert select_move([EMPTY, "X"], "O", "X") == 0


def test_defends_diagonal_corner_pair_from_edge():
    board = board_from("X___O___X")
    assert explain_move(board, "O", "X") == (1, "block_fork")

    board = board_from("__X_O_X__")
    assert explain_move(board, "O", "X") == (1, "block_fork")


def test_takes_open_corner_when_human_holds_center():
    assert explain_move(board_from("____X____"), "O", "X") == (0, "corner")


def test_falls_back_to_first_open_cell():
    board = board_from("XOX_O_OXO")
    assert explain_move(board, "X", "O") == (3, "any")


def test_full_board_yields_none():
    board = board_from("XOXXOOOXX")
    assert select_move(board, "O", "X") is None
    assert explain_move(board, "O", "X") == (None, None)


def test_does_not_mutate_board():
    board = board_from("XX__O____")
    snapshot = list(board)
    select_move(board, "O", "X")
    assert board == snapshot


def test_choose_rejects_wrong_turn():
    game = ClassicXOGame(human="X")
    ai = HeuristicAI(player="O")
    with pytest.raises(ValueError):
        ai.choose(game)


def test_choose_plays_after_human():
    game = ClassicXOGame(human="X")
    game.play_move(0)
    ai = HeuristicAI(player=game.computer)
    assert ai.choose(game) == 4


def _play_out(game: ClassicXOGame, ai: HeuristicAI) -> int:
    """Try every human reply against the AI, checking each AI move is legal."""
    if game.outcome.finished:
        return 1
    if game.current_player == ai.player:
        move = ai.choose(game)
        assert move in empty_cells(game.board)
        game.play_move(move)
        return _play_out(game, ai)
    total = 0
    for cell in game.available_moves():
        child = game.clone()
        child.play_move(cell)
        total += _play_out(child, ai)
    return total


@pytest.mark.parametrize("human", ["X", "O"])
def test_ai_only_plays_empty_cells_in_every_game(human):
    game = ClassicXOGame(human=human)
    assert _play_out(game, HeuristicAI(player=game.computer)) > 0


def test_ai_wins_when_human_ignores_threat():
    game = ClassicXOGame(human="X")
    ai = HeuristicAI(player="O")
    for human_move in (0, 8, 2):
        game.play_move(human_move)
        game.play_move(ai.choose(game))
    # X: 0, 8, 2; O: 4, 1, then O completes the middle column
    assert evaluate(game.board).winner == "O"
