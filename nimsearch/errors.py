class InvalidMove(ValueError):
    """Raised when a move is applied to a finished game or is not legal."""


class InvalidUndo(ValueError):
    """Raised when more moves are undone than the history holds."""
