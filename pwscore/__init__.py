"""pwscore: pattern-aware password strength estimation."""

__version__ = "0.1.0"
