"""Base class for the recognizer cascade."""

from abc import ABC, abstractmethod
from typing import Iterable

from ..lexicon import Lexicon
from ..models import PosTag, Term, TermGraph, TermPath


class Recognizer(ABC):
    """
    Base class for all recognizers.

    A recognizer receives a graph rebuilt from one upstream path and
    returns the paths it proposes in place of it: re-segmentations where
    an entity spans several terms, or retaggings. It must return at least
    one path; when it recognizes nothing the upstream path is returned
    unchanged.
    """

    # Registry key, also used in log messages
    name: str = ""

    def __init__(self, lexicon: Lexicon):
        """
        Initialize the recognizer.

        Args:
            lexicon: Shared read-only lexicon.
        """
        self.lexicon = lexicon

    @abstractmethod
    def process(self, graph: TermGraph) -> list[TermPath]:
        """
        Recognize entities in a graph.

        Args:
            graph: Graph rebuilt from an upstream path (``graph.origin``).

        Returns:
            Non-empty list of paths replacing the upstream path.
        """
        pass

    def source_path(self, graph: TermGraph) -> TermPath:
        """The upstream path the graph was rebuilt from."""
        return graph.default_path()

    def is_known_word(self, surface: str, tag: PosTag) -> bool:
        """True if ``surface`` is a lexicon word that never carries ``tag``."""
        return surface in self.lexicon and self.lexicon.frequency(surface, tag) == 0

    def merge(
        self, path: TermPath, graph: TermGraph, start: int, end: int, tag: PosTag
    ) -> TermPath:
        """Merge the characters ``[start, end)`` of ``path`` into one ``tag`` term."""
        term = Term(graph.text[start:end], start, end, tag)
        return path.replace_span(start, end, term, graph)

    def with_origin(self, proposals: Iterable[TermPath], origin: TermPath) -> list[TermPath]:
        """Deduplicated proposals followed by the unchanged origin path."""
        result = []
        seen = set()
        for path in [*proposals, origin]:
            if path not in seen:
                seen.add(path)
                result.append(path)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
