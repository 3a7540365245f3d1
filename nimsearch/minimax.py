"""Exhaustive minimax search over any `Game`.

The engine walks the full game tree without pruning or caching. Player +1
maximizes the score returned by `Game.evaluate`, player -1 minimizes it.
"""

import logging
import random
from dataclasses import dataclass
from typing import Any, List, NamedTuple, Optional

from nimsearch.errors import InvalidMove
from nimsearch.game import Game, MoveType

logger = logging.getLogger(__name__)


class SearchResult(NamedTuple):
    best_move: Optional[Any]
    score: int
    favorable: bool  # True if the position is good for the player to move


@dataclass
class SearchStats:
    nodes: int = 0


def minimax(
    game: Game, depth: int = 0, stats: Optional[SearchStats] = None
) -> SearchResult:
    """Evaluate a position by searching the whole tree below it.

    Args:
        game: Position to evaluate
        depth: Plies already searched above this position
        stats: Optional counter of visited nodes

    Returns:
        SearchResult with the best move for the player to act (None at a
        terminal position), its score and whether it favors that player.
    """
    if stats is not None:
        stats.nodes += 1

    player = game.current_player
    moves = game.get_possible_moves()
    if game.is_terminal() or not moves:
        score = game.evaluate(depth)
        return SearchResult(None, score, score * player > 0)

    best = None
    best_score = 0
    for move in moves:
        result = minimax(game.apply_move(move), depth + 1, stats)
        # Strict comparison keeps the first move in enumeration order on ties
        if best is None or result.score * player > best_score * player:
            best, best_score = move, result.score

    return SearchResult(best, best_score, best_score * player > 0)


def winning_moves(game: Game[MoveType], stats: Optional[SearchStats] = None) -> List[MoveType]:
    """Return the moves after which the opponent is at a disadvantage.

    A move wins for the player to act if the resulting position is not
    favorable for the opponent, who moves next there.
    """
    return [
        move
        for move in game.get_possible_moves()
        if not minimax(game.apply_move(move), stats=stats).favorable
    ]


def best_move(game: Game[MoveType], rng: Optional[random.Random] = None) -> MoveType:
    """Choose a move for the player to act.

    Picks uniformly at random among the winning moves, or among all legal
    moves when none of them wins.

    Args:
        game: Position to move from
        rng: Random source; pass a seeded `random.Random` for reproducible picks

    Returns:
        The chosen move

    Raises:
        InvalidMove: If the game has no legal moves
    """
    moves = game.get_possible_moves()
    if not moves:
        raise InvalidMove("No legal moves: the game is already over.")

    stats = SearchStats()
    winners = winning_moves(game, stats)
    logger.debug(
        f"Searched {stats.nodes} nodes, {len(winners)} of {len(moves)} moves are winning"
    )

    chooser = rng if rng is not None else random
    if winners:
        return chooser.choice(winners)
    return chooser.choice(moves)
