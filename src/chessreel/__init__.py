"""Chess.com archive browser with a move-by-move replay board."""

__version__ = "0.1.0"
