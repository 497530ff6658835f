"""In-memory transaction record service."""

__version__ = "0.1.0"
