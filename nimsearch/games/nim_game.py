import random
from dataclasses import dataclass
from functools import reduce
from operator import xor
from typing import Any, Dict, List, Optional, Sequence, Tuple

from nimsearch.errors import InvalidMove, InvalidUndo
from nimsearch.game import Game
from nimsearch.minimax import best_move

Piles = Tuple[int, ...]


@dataclass(frozen=True)
class NimMove:
    """Represents a move in Nim: take `amount` sticks from pile `row`."""

    row: int
    amount: int

    def to_dict(self) -> dict:
        """Convert move to dictionary for serialization."""
        return {"row": self.row, "amount": self.amount}

    @classmethod
    def parse(cls, move_str: str) -> Optional["NimMove"]:
        """Parse a move typed as "<row> <amount>".

        Rows are 1-based, matching the board rendering.

        Args:
            move_str: The raw string, e.g. "2 3"

        Returns:
            NimMove object if two numbers were found, None otherwise
        """
        try:
            numbers = [int(s) for s in move_str.replace(",", " ").split() if s.isdigit()]
            if len(numbers) < 2:
                return None
            return cls(row=numbers[0] - 1, amount=numbers[1])
        except (ValueError, AttributeError):
            return None

    def __str__(self) -> str:
        return f"take {self.amount} from row {self.row + 1}"


@dataclass(frozen=True)
class NimState(Game[NimMove]):
    """An immutable Nim position.

    `history` holds every pile configuration since the start of the game,
    earliest first, and always ends with `piles`.
    """

    piles: Piles
    history: Tuple[Piles, ...] = ()
    turn: int = 1

    def __post_init__(self):
        piles = tuple(int(p) for p in self.piles)
        history = tuple(tuple(h) for h in self.history) or (piles,)
        if any(p < 0 for p in piles):
            raise ValueError(f"Pile sizes must be non-negative, got {piles}")
        if history[-1] != piles:
            raise ValueError("The last history entry must equal the current piles")
        if self.turn not in (1, -1):
            raise ValueError(f"Turn must be 1 or -1, got {self.turn}")
        object.__setattr__(self, "piles", piles)
        object.__setattr__(self, "history", history)

    @property
    def current_player(self) -> int:
        return self.turn

    def validate_move(self, move: NimMove) -> Tuple[bool, str]:
        """Validate if a move is legal in this position.

        Args:
            move: The NimMove to validate

        Returns:
            Tuple of (is_valid, explanation_string)
        """
        if not isinstance(move, NimMove):
            return False, "Invalid move type"
        if self.is_terminal():
            return False, "The game is already over."
        if not isinstance(move.row, int) or not isinstance(move.amount, int):
            return False, "Row and amount must be whole numbers."
        if move.row < 0 or move.row >= len(self.piles):
            return False, f"Row must be between 1 and {len(self.piles)}."
        if move.amount < 1:
            return False, "You must take at least one stick."
        if move.amount > self.piles[move.row]:
            return False, (
                f"Row {move.row + 1} only has {self.piles[move.row]} sticks remaining."
            )
        return True, ""

    def apply_move(self, move: NimMove) -> "NimState":
        """Apply move and return the new position.

        Raises:
            InvalidMove: If the game is over or the move is illegal
        """
        valid, reason = self.validate_move(move)
        if not valid:
            raise InvalidMove(reason)

        piles = list(self.piles)
        piles[move.row] -= move.amount
        new_piles = tuple(piles)
        return NimState(
            piles=new_piles, history=self.history + (new_piles,), turn=-self.turn
        )

    def undo_moves(self, number: int) -> "NimState":
        """Return the position as it was `number` moves ago.

        Raises:
            InvalidUndo: If `number` is negative or not smaller than the history
        """
        if number < 0 or number >= len(self.history):
            raise InvalidUndo(
                f"Cannot undo {number} moves with a history of {len(self.history)}"
            )
        turn = self.turn if number % 2 == 0 else -self.turn
        size = len(self.history)
        return NimState(
            piles=self.history[size - 1 - number],
            history=self.history[: size - number],
            turn=turn,
        )

    def get_possible_moves(self) -> List[NimMove]:
        return [
            NimMove(row, amount)
            for row, pile in enumerate(self.piles)
            for amount in range(pile, 0, -1)
        ]

    def is_terminal(self) -> bool:
        return not any(self.piles)

    def evaluate(self, depth: int) -> int:
        return -self.turn * (depth + 1)

    def nim_sum(self) -> int:
        """Bitwise XOR of all pile sizes; zero means the player to move loses."""
        return reduce(xor, self.piles, 0)

    def best_move(self, rng: Optional[random.Random] = None) -> NimMove:
        """Best move for the player to act, or a random one if none wins."""
        return best_move(self, rng)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "piles": list(self.piles),
            "history": [list(h) for h in self.history],
            "turn": self.turn,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NimState":
        """Create a NimState from a dictionary.

        Args:
            data: Dictionary containing state data

        Returns:
            NimState object
        """
        piles: Sequence[int] = data["piles"]
        return cls(
            piles=tuple(piles),
            history=tuple(tuple(h) for h in data.get("history") or [piles]),
            turn=data.get("turn", 1),
        )

    def __str__(self) -> str:
        return "".join(
            f"\n ({index + 1})\t" + "I " * count for index, count in enumerate(self.piles)
        )
