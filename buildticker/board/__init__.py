# Board - terminal projection of the card store
from .live import run_board
from .renderer import BoardRenderer

__all__ = ["BoardRenderer", "run_board"]
