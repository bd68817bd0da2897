"""Base class for path scorers."""

from abc import ABC, abstractmethod

from ..models import TermPath


class PathScorer(ABC):
    """
    Base class for path scorers.

    A scorer assigns a cost to a complete path; lower is better. Scoring
    must be a pure function of the path so that scorers can be shared
    across tokenizations.
    """

    @abstractmethod
    def score(self, path: TermPath) -> float:
        """
        Score a path.

        Args:
            path: A complete BOS-to-EOS path.

        Returns:
            The path cost.
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
