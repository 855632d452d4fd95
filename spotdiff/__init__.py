"""SpotDiff — difference detection for spot-the-difference puzzles."""

__version__ = "0.1.0"
