"""N-shortest paths weighted by word frequency and co-occurrence."""

import logging
import math
from operator import itemgetter

from ..errors import PipelineInvariantError
from ..lexicon import Lexicon
from ..models import Term, TermGraph, TermPath
from .base import PathGenerator

logger = logging.getLogger(__name__)

# Bigram keys used for the sentinels
BOS_WORD = "<s>"
EOS_WORD = "</s>"


class CooccurrencePathGenerator(PathGenerator):
    """
    Keeps the ``n`` cheapest partial paths ending in every term.

    The cost of stepping from term ``a`` to term ``b`` smooths the unigram
    probability of ``a`` with the conditional probability of ``b`` after
    ``a``, so rare words and unattested transitions cost more.
    """

    def __init__(self, lexicon: Lexicon, n: int = 5, smoothing: float = 0.1):
        """
        Initialize the generator.

        Args:
            lexicon: Shared lexicon with frequencies and bigrams.
            n: Maximum number of paths to return.
            smoothing: Weight of the unigram term (0 < smoothing < 1).
        """
        if n < 1:
            raise ValueError(f"n must be at least 1, got {n}")
        if not 0.0 < smoothing < 1.0:
            raise ValueError(f"smoothing must be in (0, 1), got {smoothing}")
        self.lexicon = lexicon
        self.n = n
        self.smoothing = smoothing

    def _frequency(self, term: Term) -> int:
        if term.is_sentinel:
            return self.lexicon.total_frequency
        return self.lexicon.frequency(term.surface)

    def transition_cost(self, left: Term, right: Term) -> float:
        """Cost of ``right`` directly following ``left``."""
        total = self.lexicon.total_frequency
        left_freq = self._frequency(left)
        pair_freq = self.lexicon.bigram_frequency(
            left.surface if not left.is_sentinel else BOS_WORD,
            right.surface if not right.is_sentinel else EOS_WORD,
        )
        delta = 1.0 / (total + 1)
        probability = (
            self.smoothing * (1 + left_freq) / (total + 1)
            + (1 - self.smoothing) * ((1 - delta) * pair_freq / (1 + left_freq) + delta)
        )
        return -math.log(probability)

    def generate(self, graph: TermGraph) -> list[TermPath]:
        bos = Term.bos()
        eos = Term.eos(graph.length)

        # term -> up to n (cost, previous term, rank in previous term's list)
        states = {bos: [(0.0, None, -1)]}
        ending = {0: [bos]}

        def expand(term: Term) -> list:
            candidates = []
            for prev in ending.get(term.start, ()):
                step = self.transition_cost(prev, term)
                for rank, (cost, _, _) in enumerate(states[prev]):
                    candidates.append((cost + step, prev, rank))
            candidates.sort(key=itemgetter(0))
            return candidates[: self.n]

        for term in graph.terms():
            best = expand(term)
            if not best:
                continue
            states[term] = best
            ending.setdefault(term.end, []).append(term)

        finals = expand(eos)
        if not finals:
            raise PipelineInvariantError(
                f"No path reaches the end of {graph.text!r}"
            )

        paths = []
        for cost, prev, rank in finals:
            content = []
            term = prev
            while term is not bos:
                content.append(term)
                _, term, rank = states[term][rank]
            content.reverse()
            paths.append(TermPath.from_terms(content))
            logger.debug(f"npath [{cost:.3f}] {paths[-1]}")
        return paths

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(n={self.n}, smoothing={self.smoothing})"
