"""chesslite — a chess rules engine with a thin game-session layer."""

__version__ = "0.1.0"
