"""Numeral expression recognizer."""

from ..models import PosTag, Term, TermGraph, TermPath
from ..utils.chars import NUMERAL_INNER, NUMERAL_SUFFIX, is_numeral
from .base import Recognizer


def is_numeric_term(term: Term) -> bool:
    return bool(term.surface) and all(is_numeral(ch) for ch in term.surface)


class NumberRecognizer(Recognizer):
    """
    Merges runs of adjacent numeral terms into a single ``m`` term.

    "3", ".", "14" becomes "3.14"; "一", "百", "二十" becomes "一百二十".
    A separator only joins when numerals follow it and a trailing percent
    sign is absorbed. Numerals are unambiguous, so a merged path replaces
    the upstream path instead of competing with it.
    """

    name = "number"

    def find_runs(self, content: list[Term]) -> list[tuple[int, int]]:
        """Term index ranges ``[i, j)`` of numeral runs spanning 2+ terms."""
        runs = []
        i = 0
        while i < len(content):
            if not is_numeric_term(content[i]):
                i += 1
                continue
            j = i + 1
            while j < len(content):
                if is_numeric_term(content[j]):
                    j += 1
                elif (
                    content[j].surface in NUMERAL_INNER
                    and j + 1 < len(content)
                    and is_numeric_term(content[j + 1])
                ):
                    j += 2
                else:
                    break
            if j < len(content) and content[j].surface in NUMERAL_SUFFIX:
                j += 1
            if j - i >= 2:
                runs.append((i, j))
            i = j
        return runs

    def process(self, graph: TermGraph) -> list[TermPath]:
        path = self.source_path(graph)
        content = path.content
        runs = self.find_runs(content)
        if not runs:
            return [path]

        for i, j in reversed(runs):
            path = self.merge(path, graph, content[i].start, content[j - 1].end, PosTag.NUMERAL)
        return [path]
