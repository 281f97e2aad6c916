"""snapcore - play-by-play American football simulation engine."""

__version__ = "0.1.0"
