from .nim_game import NimMove, NimState

__all__ = [
    "NimMove",
    "NimState",
]
