import logging
import random
from dataclasses import dataclass
from typing import List

import pytest

from nimsearch.errors import InvalidMove
from nimsearch.game import Game
from nimsearch.games.nim_game import NimMove, NimState
from nimsearch.minimax import SearchStats, best_move, minimax, winning_moves


@dataclass(frozen=True)
class Countdown(Game[int]):
    """Subtraction game: take 1 or 2 from a counter, taking the last one wins."""

    remaining: int
    player: int = 1

    @property
    def current_player(self) -> int:
        return self.player

    def get_possible_moves(self) -> List[int]:
        return [n for n in (1, 2) if n <= self.remaining]

    def apply_move(self, move: int) -> "Countdown":
        if move not in self.get_possible_moves():
            raise InvalidMove(f"Cannot take {move}")
        return Countdown(self.remaining - move, -self.player)

    def is_terminal(self) -> bool:
        return self.remaining == 0

    def evaluate(self, depth: int) -> int:
        return -self.player * (depth + 1)


def test_minimax_terminal_position():
    result = minimax(NimState(piles=(0, 0)))
    assert result.best_move is None
    assert result.score == -1
    assert result.favorable is False


def test_minimax_single_stick_is_favorable():
    result = minimax(NimState(piles=(1,)))
    assert result.best_move == NimMove(0, 1)
    assert result.score > 0
    assert result.favorable is True


def test_minimax_minimizing_player():
    result = minimax(NimState(piles=(1,), turn=-1))
    assert result.best_move == NimMove(0, 1)
    assert result.score < 0
    assert result.favorable is True


@pytest.mark.parametrize("piles", [(1, 1), (1, 2, 3), (2, 2), (0, 3, 3)])
def test_minimax_losing_positions(piles):
    assert minimax(NimState(piles=piles)).favorable is False


@pytest.mark.parametrize("piles", [(3,), (1, 2, 4), (2, 1), (1, 1, 1)])
def test_minimax_winning_positions(piles):
    assert minimax(NimState(piles=piles)).favorable is True


def test_minimax_counts_nodes():
    stats = SearchStats()
    minimax(NimState(piles=(2,)), stats=stats)
    # (2) -> (1) -> (0), and (2) -> (0)
    assert stats.nodes == 4


def test_single_pile_takes_everything(rng):
    state = NimState(piles=(3,))
    assert winning_moves(state) == [NimMove(0, 3)]

    move = best_move(state, rng)
    assert move == NimMove(0, 3)
    assert state.apply_move(move).is_terminal()
    assert NimState(piles=(0,)).is_terminal()


@pytest.mark.parametrize("piles", [(1, 1), (1, 2, 3)])
def test_losing_position_falls_back_to_any_legal_move(piles, rng):
    state = NimState(piles=piles)
    assert winning_moves(state) == []

    move = best_move(state, rng)
    assert move in state.get_possible_moves()


@pytest.mark.parametrize("piles", [(1, 2, 4), (3,), (2, 1), (1, 1, 1), (0, 2, 3), (1, 3, 3)])
def test_winning_moves_reach_zero_nim_sum(piles, rng):
    state = NimState(piles=piles)
    assert state.nim_sum() != 0

    winners = winning_moves(state)
    assert winners
    expected = [m for m in state.get_possible_moves() if state.apply_move(m).nim_sum() == 0]
    assert winners == expected

    for _ in range(5):
        assert state.apply_move(best_move(state, rng)).nim_sum() == 0


def test_best_move_on_terminal_position_raises():
    with pytest.raises(InvalidMove):
        best_move(NimState(piles=(0, 0)))


def test_best_move_is_reproducible_with_seed():
    state = NimState(piles=(1, 2, 3))
    first = [best_move(state, random.Random(7)) for _ in range(3)]
    second = [best_move(state, random.Random(7)) for _ in range(3)]
    assert first == second


def test_best_move_without_rng():
    state = NimState(piles=(1, 2, 4))
    assert state.best_move() == NimMove(2, 1)


def test_best_move_logs_search_summary(caplog, rng):
    with caplog.at_level(logging.DEBUG, logger="nimsearch.minimax"):
        best_move(NimState(piles=(3,)), rng)
    assert "1 of 3 moves are winning" in caplog.text


def test_self_play_from_winning_position(rng):
    state = NimState(piles=(1, 2, 4))
    while not state.is_terminal():
        state = state.apply_move(state.best_move(rng))
    # Player +1 started from a winning position and took the last stick
    assert state.turn == -1
    assert state.undo_moves(len(state.history) - 1) == NimState(piles=(1, 2, 4))


@pytest.mark.parametrize("remaining,winning", [(1, True), (2, True), (3, False), (4, True), (6, False)])
def test_engine_works_with_other_games(remaining, winning):
    assert minimax(Countdown(remaining)).favorable is winning


def test_engine_best_move_for_other_games(rng):
    # From 4 the only winning move leaves a multiple of three
    assert best_move(Countdown(4), rng) == 1
    assert winning_moves(Countdown(5)) == [2]
