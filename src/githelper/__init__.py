"""Git working-tree queries and self-update for a single-file executable."""

__version__ = "0.1.0"
