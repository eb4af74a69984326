"""Encode memory operations described in JSON as CNF formulas and solve them."""

__version__ = "0.1.0"
__all__ = ["boolvector", "clause", "solver", "parser", "cli"]