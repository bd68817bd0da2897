"""Clause splitting and the cascaded lattice tagging pipeline."""

import logging
import math
from typing import Iterable, Optional

from .config import Config, DEFAULT_CASCADE, DEFAULT_DELIMITERS
from .errors import PipelineInvariantError
from .lattice import DictionaryLatticeBuilder, LatticeBuilder
from .lexicon import Lexicon, load_lexicon
from .models import Term, TermPath
from .npath import CooccurrencePathGenerator, PathGenerator
from .recognizers import (
    AsianNameRecognizer,
    DateTimeRecognizer,
    ForeignNameRecognizer,
    NatureRecognizer,
    NumberRecognizer,
    OrganizationRecognizer,
    Recognizer,
)
from .scorers import PathScorer, SimplePathScorer

logger = logging.getLogger(__name__)

# Registries of available strategies
LATTICE_BUILDERS = {
    "dictionary": DictionaryLatticeBuilder,
}
PATH_GENERATORS = {
    "cooccurrence": CooccurrencePathGenerator,
}
RECOGNIZERS = {
    recognizer.name: recognizer
    for recognizer in (
        NumberRecognizer,
        AsianNameRecognizer,
        OrganizationRecognizer,
        ForeignNameRecognizer,
        DateTimeRecognizer,
        NatureRecognizer,
    )
}
SCORERS = {
    "simple": SimplePathScorer,
}


def _lookup(registry: dict, name: str, kind: str):
    if name not in registry:
        raise ValueError(
            f"Unknown {kind}: {name!r} (available: {', '.join(sorted(registry))})"
        )
    return registry[name]


class Tokenizer:
    """
    Segments and tags text through a cascade of lattice refinements.

    Per clause: the lattice builder proposes candidate terms, the path
    generator keeps the N best segmentations, each recognizer in turn
    rewrites every candidate path, and the scorer picks the cheapest
    survivor. All four strategies are public attributes and may be
    replaced at runtime; recognizers are appended with add_recognizer().
    """

    def __init__(
        self,
        lexicon: Lexicon,
        lattice_builder: Optional[LatticeBuilder] = None,
        path_generator: Optional[PathGenerator] = None,
        recognizers: Optional[Iterable[Recognizer]] = None,
        scorer: Optional[PathScorer] = None,
        delimiters: str = DEFAULT_DELIMITERS,
        max_candidates: Optional[int] = None,
    ):
        """
        Initialize the tokenizer.

        Args:
            lexicon: Shared read-only lexicon.
            lattice_builder: Initial graph builder (dictionary matching by default).
            path_generator: N-best generator (co-occurrence weighted by default).
            recognizers: Cascade in order (the six default recognizers by default).
            scorer: Final path scorer (SimplePathScorer by default).
            delimiters: Characters ending a clause.
            max_candidates: Paths kept between cascade stages; None keeps all.
        """
        if max_candidates is not None and max_candidates < 1:
            raise ValueError(f"max_candidates must be at least 1, got {max_candidates}")
        self.lexicon = lexicon
        self.lattice_builder = lattice_builder or DictionaryLatticeBuilder(lexicon)
        self.path_generator = path_generator or CooccurrencePathGenerator(lexicon)
        if recognizers is None:
            recognizers = [RECOGNIZERS[name](lexicon) for name in DEFAULT_CASCADE]
        self.recognizers: list[Recognizer] = list(recognizers)
        self.scorer = scorer or SimplePathScorer(lexicon)
        self.delimiters = frozenset(delimiters)
        self.max_candidates = max_candidates

    @classmethod
    def from_config(cls, config: Config, lexicon: Optional[Lexicon] = None) -> "Tokenizer":
        """
        Build a tokenizer and its strategies from configuration.

        Args:
            config: Tagger configuration.
            lexicon: Already loaded lexicon; loaded from ``config.lexicon`` if None.

        Returns:
            A ready tokenizer.

        Raises:
            ValueError: If a strategy name is unknown.
        """
        settings = config.tokenizer
        builder_cls = _lookup(LATTICE_BUILDERS, settings.lattice_builder, "lattice builder")
        generator_cls = _lookup(
            PATH_GENERATORS, settings.path_generator.strategy, "path generator"
        )
        recognizer_classes = [
            _lookup(RECOGNIZERS, name, "recognizer")
            for name in settings.cascade.recognizers
        ]
        scorer_cls = _lookup(SCORERS, settings.scorer, "scorer")

        if lexicon is None:
            lexicon = load_lexicon(config.lexicon.path)

        return cls(
            lexicon,
            lattice_builder=builder_cls(lexicon),
            path_generator=generator_cls(
                lexicon,
                n=settings.path_generator.n,
                smoothing=settings.path_generator.smoothing,
            ),
            recognizers=[recognizer_cls(lexicon) for recognizer_cls in recognizer_classes],
            scorer=scorer_cls(lexicon),
            delimiters=settings.delimiters,
            max_candidates=settings.cascade.max_candidates,
        )

    def add_recognizer(self, recognizer: Recognizer) -> None:
        """Append a recognizer to the end of the cascade."""
        self.recognizers.append(recognizer)

    def clauses(self, text: str) -> list[tuple[str, int]]:
        """
        Split text into clauses, each delimiter ending its clause.

        Args:
            text: Input text.

        Returns:
            List of (clause, offset in text) tuples.
        """
        result = []
        start = 0
        for i, ch in enumerate(text):
            if ch in self.delimiters:
                result.append((text[start:i + 1], start))
                start = i + 1
        if start < len(text):
            result.append((text[start:], start))
        return result

    def tokenize(self, text: str) -> list[Term]:
        """
        Segment and tag text.

        Args:
            text: Input text.

        Returns:
            Tagged terms of every clause in order. Offsets are relative to
            the trimmed clause each term belongs to.
        """
        terms = []
        for clause, _ in self.clauses(text):
            terms.extend(self.parse(clause))
        return terms

    def _trim(self, clause: str) -> str:
        text = clause.strip()
        if all(ch in self.delimiters for ch in text):
            return ""
        return text

    def _checked(self, paths: list[TermPath], stage: str, text: str) -> list[TermPath]:
        """Drop duplicate paths; fail on an empty set or a path for other text."""
        if not paths:
            raise PipelineInvariantError(f"Stage {stage!r} returned no paths for {text!r}")
        unique = []
        seen = set()
        for path in paths:
            if path.text != text:
                raise PipelineInvariantError(
                    f"Stage {stage!r} returned a path for {path.text!r} instead of {text!r}"
                )
            if path not in seen:
                seen.add(path)
                unique.append(path)
        return unique

    def _bounded(self, paths: list[TermPath]) -> list[TermPath]:
        """Keep the best max_candidates paths in generation order."""
        if self.max_candidates is None or len(paths) <= self.max_candidates:
            return paths
        scores = [self.scorer.score(path) for path in paths]
        ranked = sorted(range(len(paths)), key=scores.__getitem__)
        keep = sorted(ranked[: self.max_candidates])
        return [paths[i] for i in keep]

    def candidates(self, clause: str) -> list[TermPath]:
        """
        Run a clause through the lattice, path generation and the cascade.

        Args:
            clause: One clause.

        Returns:
            The surviving candidate paths in generation order; empty for a
            blank or delimiter-only clause.

        Raises:
            PipelineInvariantError: If a stage empties the candidate set or
                breaks a path invariant.
        """
        text = self._trim(clause)
        if not text:
            return []

        graph = self.lattice_builder.build(text)
        graph.validate()
        paths = self._checked(self.path_generator.generate(graph), "path_generator", text)
        logger.debug(f"{len(graph)} lattice terms, {len(paths)} initial paths for {text!r}")

        for recognizer in self.recognizers:
            stage = recognizer.name or recognizer.__class__.__name__
            generated = []
            for path in paths:
                generated.extend(recognizer.process(path.to_graph()))
            paths = self._bounded(self._checked(generated, stage, text))
            logger.debug(f"{stage}: {len(paths)} candidate paths")
        return paths

    def best_path(self, clause: str) -> Optional[TermPath]:
        """The lowest-scoring candidate path; the first one wins ties."""
        best = None
        best_score = math.inf
        for path in self.candidates(clause):
            score = self.scorer.score(path)
            if best is None or score < best_score:
                best, best_score = path, score
        if best is not None:
            logger.debug(f"best [{best_score:.3f}] {best}")
        return best

    def parse(self, clause: str) -> list[Term]:
        """
        Segment and tag one clause.

        Args:
            clause: One clause (surrounding whitespace is trimmed).

        Returns:
            The terms of the best path without the BOS/EOS sentinels.
        """
        best = self.best_path(clause)
        if best is None:
            return []
        return best.content

    def __repr__(self) -> str:
        stages = ", ".join(r.name or r.__class__.__name__ for r in self.recognizers)
        return f"Tokenizer(lexicon={self.lexicon!r}, cascade=[{stages}])"
