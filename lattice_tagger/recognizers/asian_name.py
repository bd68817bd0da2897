"""Domestic (Chinese) person name recognizer."""

from ..models import PosTag, TermGraph, TermPath
from .base import Recognizer

# Compound surnames are tried before single-character ones
SURNAME_LENGTHS = (2, 1)
GIVEN_NAME_LENGTHS = (2, 1)


class AsianNameRecognizer(Recognizer):
    """
    Proposes surname + given name spans as ``nr`` terms.

    A candidate starts at a term boundary with a surname from the lexicon
    roles, followed by one or two given-name characters. Every candidate is
    proposed as its own path, since "张华平" may be a 2+1 or a 3 character
    reading; one more path applies all non-overlapping longest candidates.
    """

    name = "asian_name"

    def find_candidates(self, path: TermPath, text: str) -> list[tuple[int, int]]:
        roles = self.lexicon.roles
        existing = {(t.start, t.end) for t in path.content if t.tag is PosTag.PERSON}
        candidates = []
        for term in path.content:
            start = term.start
            for surname_len in SURNAME_LENGTHS:
                surname = text[start:start + surname_len]
                if len(surname) != surname_len or surname not in roles.surnames:
                    continue
                for given_len in GIVEN_NAME_LENGTHS:
                    end = start + surname_len + given_len
                    given = text[start + surname_len:end]
                    if len(given) != given_len:
                        continue
                    if not all(ch in roles.given_names for ch in given):
                        continue
                    if (start, end) in existing:
                        continue
                    if self.is_known_word(text[start:end], PosTag.PERSON):
                        continue
                    candidates.append((start, end))
        return candidates

    def process(self, graph: TermGraph) -> list[TermPath]:
        path = self.source_path(graph)
        candidates = self.find_candidates(path, graph.text)
        if not candidates:
            return [path]

        proposals = []

        # Longest non-overlapping candidates, left to right
        chosen = []
        for start, end in sorted(candidates, key=lambda c: (c[0], -c[1])):
            if not chosen or start >= chosen[-1][1]:
                chosen.append((start, end))
        if len(chosen) > 1:
            combined = path
            for start, end in chosen:
                combined = self.merge(combined, graph, start, end, PosTag.PERSON)
            proposals.append(combined)

        for start, end in candidates:
            proposals.append(self.merge(path, graph, start, end, PosTag.PERSON))
        return self.with_origin(proposals, path)
