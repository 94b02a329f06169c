"""FitLog - personal fitness and nutrition journal."""

__version__ = "1.0.0"
