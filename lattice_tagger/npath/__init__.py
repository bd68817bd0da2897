"""N-best path generators."""

from .base import PathGenerator
from .cooccurrence import CooccurrencePathGenerator

__all__ = ["PathGenerator", "CooccurrencePathGenerator"]
