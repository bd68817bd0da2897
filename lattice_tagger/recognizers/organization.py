"""Organization and company name recognizer."""

from ..models import PosTag, TermGraph, TermPath
from .base import Recognizer

# Tags a term may carry to be part of an organization name body
ORGANIZATION_BODY_TAGS = frozenset({
    PosTag.NOUN,
    PosTag.OTHER_PROPER,
    PosTag.PLACE,
    PosTag.PERSON,
    PosTag.FOREIGN_PERSON,
    PosTag.ORGANIZATION,
    PosTag.ABBREVIATION,
    PosTag.DISTINGUISHER,
    PosTag.VERB_NOUN,
    PosTag.LATIN,
    PosTag.UNKNOWN,
})


class OrganizationRecognizer(Recognizer):
    """Merges an organization suffix ("公司", "大学") with the terms before it."""

    name = "organization"

    def __init__(self, lexicon, max_body_terms: int = 3):
        """
        Initialize the recognizer.

        Args:
            lexicon: Shared read-only lexicon.
            max_body_terms: Most terms merged in front of a suffix.
        """
        super().__init__(lexicon)
        self.max_body_terms = max_body_terms

    def find_candidates(self, path: TermPath) -> list[tuple[int, int]]:
        suffixes = self.lexicon.roles.organization_suffixes
        content = path.content
        candidates = []
        for j, term in enumerate(content):
            if term.surface not in suffixes:
                continue
            spans = []
            for k in range(1, self.max_body_terms + 1):
                i = j - k
                if i < 0 or content[i].tag not in ORGANIZATION_BODY_TAGS:
                    break
                spans.append((content[i].start, term.end))
            # Longest body first
            candidates.extend(reversed(spans))
        return candidates

    def process(self, graph: TermGraph) -> list[TermPath]:
        path = self.source_path(graph)
        candidates = self.find_candidates(path)
        if not candidates:
            return [path]
        proposals = [
            self.merge(path, graph, start, end, PosTag.ORGANIZATION)
            for start, end in candidates
        ]
        return self.with_origin(proposals, path)
