"""Base class for lattice builders."""

from abc import ABC, abstractmethod

from ..models import TermGraph


class LatticeBuilder(ABC):
    """
    Base class for lattice builders.

    A lattice builder turns a clause into the initial TermGraph: every
    dictionary-recognized candidate term plus a single-character fallback
    at each position, so that every position lies on a BOS-to-EOS path.
    """

    @abstractmethod
    def build(self, clause: str) -> TermGraph:
        """
        Build the initial term graph of a clause.

        Args:
            clause: Trimmed clause text.

        Returns:
            A TermGraph covering the whole clause.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
