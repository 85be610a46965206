"""Water tracker: a decaying hydration level with a persistent status surface."""

__version__ = "1.0.0"
