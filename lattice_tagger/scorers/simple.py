"""Additive term and tag-transition cost scorer."""

import math

from ..lexicon import Lexicon
from ..models import ENTITY_TAGS, Term, TermPath
from .base import PathScorer


class SimplePathScorer(PathScorer):
    """
    Sums a cost per term and per tag transition.

    A known (word, tag) pair costs ``-log P(word, tag)``. An entity term the
    lexicon does not know costs as much as its whole class would, so a
    merged name or date competes with the characters it replaces. Anything
    else unknown gets the maximum cost.
    """

    def __init__(self, lexicon: Lexicon):
        """
        Initialize the scorer.

        Args:
            lexicon: Shared read-only lexicon.
        """
        self.lexicon = lexicon
        self._log_total = math.log(lexicon.total_frequency + 1)

    def term_cost(self, term: Term) -> float:
        if term.is_sentinel:
            return 0.0
        freq = self.lexicon.frequency(term.surface, term.tag)
        if freq > 0:
            return self._log_total - math.log(freq + 1)
        if term.tag in ENTITY_TAGS:
            return self._log_total - math.log(self.lexicon.tag_frequency(term.tag) + 1)
        return self._log_total

    def score(self, path: TermPath) -> float:
        terms = path.terms
        cost = sum(self.term_cost(term) for term in terms)
        for left, right in zip(terms, terms[1:]):
            cost += self.lexicon.transition_cost(left.tag, right.tag)
        return cost
