"""Route optimization and navigation export pipeline."""

__version__ = "1.0.0"
