"""Path scorers."""

from .base import PathScorer
from .simple import SimplePathScorer

__all__ = ["PathScorer", "SimplePathScorer"]
