"""Part-of-speech disambiguation, the last pass of the cascade."""

import math

from ..models import ENTITY_TAGS, PosTag, TAG_INDEX, Term, TermGraph, TermPath
from .base import Recognizer


class NatureRecognizer(Recognizer):
    """
    Viterbi tagging of a resolved segmentation.

    Each lexicon word may take any of its lexicon tags; terms the lexicon
    does not know keep the tag an earlier recognizer (or the lattice)
    gave them. Emission costs are add-one smoothed ``-log P(word | tag)``
    and transition costs come from the lexicon's tag transition matrix.
    """

    name = "nature"

    def candidate_tags(self, term: Term) -> list[PosTag]:
        tags = list(self.lexicon.tags(term.surface))
        if not tags:
            return [term.tag]
        if term.tag in ENTITY_TAGS and term.tag not in tags:
            tags.append(term.tag)
        return tags

    def emission_cost(self, term: Term, tag: PosTag) -> float:
        freq = self.lexicon.frequency(term.surface, tag)
        total = self.lexicon.tag_frequency(tag) + len(self.lexicon)
        return -math.log((freq + 1) / (total + 1))

    def best_tags(self, content: list[Term]) -> list[PosTag]:
        costs = self.lexicon.transition_costs
        # tag -> accumulated cost of the best sequence ending in it
        previous = {PosTag.BEGIN: 0.0}
        backpointers = []

        for term in content:
            candidates = self.candidate_tags(term)
            current = {}
            pointers = {}
            for tag in candidates:
                emission = self.emission_cost(term, tag) if len(candidates) > 1 else 0.0
                best_prev, best_cost = None, math.inf
                for prev_tag, prev_cost in previous.items():
                    cost = prev_cost + costs[TAG_INDEX[prev_tag], TAG_INDEX[tag]]
                    if cost < best_cost:
                        best_prev, best_cost = prev_tag, cost
                current[tag] = best_cost + emission
                pointers[tag] = best_prev
            backpointers.append(pointers)
            previous = current

        end = TAG_INDEX[PosTag.END]
        tag = min(previous, key=lambda t: previous[t] + costs[TAG_INDEX[t], end])

        tags = []
        for pointers in reversed(backpointers):
            tags.append(tag)
            tag = pointers[tag]
        tags.reverse()
        return tags

    def process(self, graph: TermGraph) -> list[TermPath]:
        path = self.source_path(graph)
        content = path.content
        if not content:
            return [path]
        return [path.retag(self.best_tags(content))]
