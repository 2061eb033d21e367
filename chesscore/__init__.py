"""Chess engine building blocks: bitboards and attack tables, benchmark command lists, benchmark positions and utilities."""

__version__ = "0.1.0"
__all__ = ["utils", "misc", "bitboard", "positions", "benchmark"]