"""Fruit slicing game: trajectory solver, object board and session engine."""

__version__ = "0.1.0"
