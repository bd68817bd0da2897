"""Base class for N-best path generators."""

from abc import ABC, abstractmethod

from ..models import TermGraph, TermPath


class PathGenerator(ABC):
    """
    Base class for path generators.

    Implementations expand a TermGraph into an ordered list of distinct
    candidate paths, best first. Carrying several paths forward leaves
    boundary alternatives for the recognizers to work on.
    """

    @abstractmethod
    def generate(self, graph: TermGraph) -> list[TermPath]:
        """
        Generate candidate paths through a graph.

        Args:
            graph: A validated term graph.

        Returns:
            Non-empty list of distinct BOS-to-EOS paths.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
