"""Dictionary prefix-matching lattice builder."""

from ..lexicon import Lexicon
from ..models import PosTag, Term, TermGraph
from ..utils.chars import char_tag, is_digit, is_latin
from .base import LatticeBuilder


class DictionaryLatticeBuilder(LatticeBuilder):
    """Adds every lexicon word found in the clause, atom runs and single characters."""

    def __init__(self, lexicon: Lexicon):
        """
        Initialize the builder.

        Args:
            lexicon: Shared lexicon used for word matching.
        """
        self.lexicon = lexicon

    def _word_term(self, word: str, start: int) -> Term:
        return Term(
            word,
            start,
            start + len(word),
            self.lexicon.best_tag(word),
            float(self.lexicon.frequency(word)),
        )

    def _single_term(self, clause: str, position: int) -> Term:
        ch = clause[position]
        if ch in self.lexicon:
            return self._word_term(ch, position)
        return Term(ch, position, position + 1, PosTag(char_tag(ch)))

    def _add_atoms(self, graph: TermGraph, clause: str) -> None:
        """Add maximal runs of digits (m) and latin letters (nx) as single terms."""
        position = 0
        while position < len(clause):
            for predicate, tag in ((is_digit, PosTag.NUMERAL), (is_latin, PosTag.LATIN)):
                end = position
                while end < len(clause) and predicate(clause[end]):
                    end += 1
                if end - position > 1:
                    word = clause[position:end]
                    if word in self.lexicon:
                        graph.add(self._word_term(word, position))
                    else:
                        graph.add(Term(word, position, end, tag))
                    break
            else:
                end = position + 1
            position = max(end, position + 1)

    def build(self, clause: str) -> TermGraph:
        graph = TermGraph(clause)
        n = len(clause)

        for start in range(n):
            # Single-character fallback first so it is always the first edge
            graph.add(self._single_term(clause, start))
            end = start + 1
            fragment = clause[start:end]
            while (
                end <= n
                and end - start <= self.lexicon.max_word_length
                and self.lexicon.is_prefix(fragment)
            ):
                if len(fragment) > 1 and fragment in self.lexicon:
                    graph.add(self._word_term(fragment, start))
                end += 1
                fragment = clause[start:end]

        self._add_atoms(graph, clause)
        return graph

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(lexicon={self.lexicon!r})"
