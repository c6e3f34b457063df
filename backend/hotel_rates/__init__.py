"""Hotel room-night pricing and reservation statistics service."""

__version__ = "0.1.0"
