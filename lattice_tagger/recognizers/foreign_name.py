"""Transliterated foreign person name recognizer."""

from ..models import PosTag, TermGraph, TermPath
from .base import Recognizer

# Middle dots joining given name and family name ("伊丽莎白·泰勒")
NAME_SEPARATORS = set("·•・")


class ForeignNameRecognizer(Recognizer):
    """Merges runs of transliteration characters into ``nrf`` terms."""

    name = "foreign_name"

    def __init__(self, lexicon, min_length: int = 3):
        """
        Initialize the recognizer.

        Args:
            lexicon: Shared read-only lexicon.
            min_length: Shortest character run treated as a name.
        """
        super().__init__(lexicon)
        self.min_length = min_length

    def find_runs(self, path: TermPath, text: str) -> list[tuple[int, int]]:
        chars = self.lexicon.roles.foreign_name_chars
        existing = {(t.start, t.end) for t in path.content if t.tag is PosTag.FOREIGN_PERSON}
        runs = []
        n = len(text)
        i = 0
        while i < n:
            if text[i] not in chars:
                i += 1
                continue
            j = i + 1
            while j < n:
                if text[j] in chars:
                    j += 1
                elif text[j] in NAME_SEPARATORS and j + 1 < n and text[j + 1] in chars:
                    j += 2
                else:
                    break
            surface = text[i:j]
            if (
                j - i >= self.min_length
                and (i, j) not in existing
                and not self.is_known_word(surface, PosTag.FOREIGN_PERSON)
            ):
                runs.append((i, j))
            i = j
        return runs

    def process(self, graph: TermGraph) -> list[TermPath]:
        path = self.source_path(graph)
        runs = self.find_runs(path, graph.text)
        if not runs:
            return [path]

        merged = path
        for start, end in runs:
            merged = self.merge(merged, graph, start, end, PosTag.FOREIGN_PERSON)
        return self.with_origin([merged], path)
