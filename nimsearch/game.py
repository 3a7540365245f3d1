from abc import ABC, abstractmethod
from typing import Generic, List, TypeVar

MoveType = TypeVar('MoveType')
GameType = TypeVar('GameType', bound='Game')


class Game(ABC, Generic[MoveType]):
    """Abstract base class for searchable two-player games.

    This class defines the interface the minimax engine relies on. A game
    value is a position: moves produce new positions and never mutate the
    one they were applied to.
    """

    @property
    @abstractmethod
    def current_player(self) -> int:
        """Return the sign of the player whose turn it is.

        Returns:
            +1 for the maximizing player, -1 for the minimizing player
        """
        pass

    @abstractmethod
    def get_possible_moves(self) -> List[MoveType]:
        """Return every legal move in a deterministic order.

        Returns:
            List of moves, empty if the game is over
        """
        pass

    @abstractmethod
    def apply_move(self: GameType, move: MoveType) -> GameType:
        """Apply move and return the resulting position.

        Args:
            move: The move to apply

        Returns:
            New position after the move

        Raises:
            InvalidMove: If the game is over or the move is illegal
        """
        pass

    @abstractmethod
    def is_terminal(self) -> bool:
        """Return True if no further moves are possible."""
        pass

    @abstractmethod
    def evaluate(self, depth: int) -> int:
        """Score this position for the minimax engine.

        Args:
            depth: Number of plies searched from the root of the search

        Returns:
            Score, positive when it favors player +1
        """
        pass
