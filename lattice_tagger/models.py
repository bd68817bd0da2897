"""Data models for the lattice tagger: tags, terms, paths and term graphs."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Iterator, Optional

from .errors import PipelineInvariantError
from .utils.chars import char_tag


class PosTag(str, Enum):
    """Part-of-speech and entity categories (PKU/ICTCLAS style)."""

    BEGIN = "begin"
    END = "end"

    # Entity classes
    PERSON = "nr"
    FOREIGN_PERSON = "nrf"
    PLACE = "ns"
    ORGANIZATION = "nt"
    TIME = "t"
    NUMERAL = "m"
    LATIN = "nx"

    # General tag set
    NOUN = "n"
    OTHER_PROPER = "nz"
    SPACE = "s"
    DIRECTION = "f"
    VERB = "v"
    VERB_NOUN = "vn"
    VERB_ADVERB = "vd"
    ADJECTIVE = "a"
    ADJ_ADVERB = "ad"
    ADJ_NOUN = "an"
    DISTINGUISHER = "b"
    STATUS = "z"
    PRONOUN = "r"
    QUANTIFIER = "q"
    ADVERB = "d"
    PREPOSITION = "p"
    CONJUNCTION = "c"
    AUXILIARY = "u"
    EXCLAMATION = "e"
    MODAL = "y"
    ONOMATOPOEIA = "o"
    PREFIX = "h"
    SUFFIX = "k"
    IDIOM = "i"
    PHRASE = "l"
    ABBREVIATION = "j"
    PUNCTUATION = "w"
    UNKNOWN = "x"

    @classmethod
    def parse(cls, value: str) -> "PosTag":
        """Look up a tag by its short string value."""
        try:
            return cls(value.strip())
        except ValueError:
            raise ValueError(f"Unknown part-of-speech tag: {value!r}")

    def __str__(self) -> str:
        return self.value


# Tags whose out-of-vocabulary members are scored as a class
ENTITY_TAGS = frozenset({
    PosTag.PERSON,
    PosTag.FOREIGN_PERSON,
    PosTag.PLACE,
    PosTag.ORGANIZATION,
    PosTag.TIME,
    PosTag.NUMERAL,
    PosTag.LATIN,
})

TAG_INDEX = {tag: i for i, tag in enumerate(PosTag)}


@dataclass(frozen=True)
class Term:
    """A tagged span of a clause. ``end`` is exclusive."""

    surface: str
    start: int
    end: int
    tag: PosTag
    weight: float = 0.0

    def __post_init__(self):
        if self.end - self.start != len(self.surface):
            raise PipelineInvariantError(
                f"Term {self.surface!r} does not fit span [{self.start}, {self.end})"
            )

    @classmethod
    def bos(cls) -> "Term":
        return cls("", 0, 0, PosTag.BEGIN)

    @classmethod
    def eos(cls, length: int) -> "Term":
        return cls("", length, length, PosTag.END)

    @classmethod
    def single(cls, text: str, position: int) -> "Term":
        """Single-character fallback term tagged by character class."""
        ch = text[position]
        return cls(ch, position, position + 1, PosTag(char_tag(ch)))

    @property
    def is_sentinel(self) -> bool:
        return self.tag in (PosTag.BEGIN, PosTag.END)

    @property
    def length(self) -> int:
        return self.end - self.start

    @property
    def key(self) -> tuple:
        return (self.surface, self.start, self.end, self.tag)

    def with_tag(self, tag: PosTag) -> "Term":
        return Term(self.surface, self.start, self.end, tag, self.weight)

    def __str__(self) -> str:
        return f"{self.surface}/{self.tag.value}"


class TermPath:
    """
    One complete BOS-to-EOS segmentation hypothesis for a clause.

    The sentinel framing and contiguity of the terms are checked on
    construction, so every path in the pipeline is well formed.
    """

    __slots__ = ("terms",)

    def __init__(self, terms: Iterable[Term]):
        self.terms: tuple[Term, ...] = tuple(terms)
        self._validate()

    def _validate(self) -> None:
        terms = self.terms
        if len(terms) < 2:
            raise PipelineInvariantError("A path needs at least the BOS and EOS sentinels")
        if terms[0].tag is not PosTag.BEGIN or terms[0].start != 0:
            raise PipelineInvariantError(f"Path does not start with BOS: {terms[0]!r}")
        if terms[-1].tag is not PosTag.END:
            raise PipelineInvariantError(f"Path does not end with EOS: {terms[-1]!r}")
        for i, (left, right) in enumerate(zip(terms, terms[1:])):
            if left.end != right.start:
                raise PipelineInvariantError(
                    f"Path is not contiguous at index {i}: {left!r} -> {right!r}"
                )
            if 0 < i + 1 < len(terms) - 1 and right.is_sentinel:
                raise PipelineInvariantError(f"Sentinel inside path at index {i + 1}")

    @classmethod
    def from_terms(cls, content: Iterable[Term]) -> "TermPath":
        """Frame content terms (starting at offset 0) with BOS and EOS."""
        content = list(content)
        length = content[-1].end if content else 0
        return cls([Term.bos(), *content, Term.eos(length)])

    @property
    def content(self) -> list[Term]:
        """Terms without the BOS/EOS sentinels."""
        return list(self.terms[1:-1])

    @property
    def text(self) -> str:
        return "".join(term.surface for term in self.terms)

    @property
    def key(self) -> tuple:
        return tuple(term.key for term in self.terms)

    def to_graph(self) -> "TermGraph":
        return TermGraph.from_path(self)

    def replace_span(
        self, start: int, end: int, term: Term, graph: "TermGraph"
    ) -> "TermPath":
        """
        Return a copy with characters ``[start, end)`` merged into ``term``.

        Terms straddling the span edges are broken into the graph's
        single-character fallback terms outside the span.

        Args:
            start: Start offset of the merged span.
            end: End offset (exclusive) of the merged span.
            term: The replacement term covering exactly ``[start, end)``.
            graph: Graph providing the single-character fallbacks.

        Returns:
            The re-segmented path.
        """
        if term.start != start or term.end != end:
            raise PipelineInvariantError(
                f"Replacement {term!r} does not cover [{start}, {end})"
            )
        content = []
        for current in self.content:
            if current.end <= start or current.start >= end:
                content.append(current)
                continue
            for pos in range(current.start, start):
                content.append(graph.single(pos))
            if current.start <= start:
                content.append(term)
            for pos in range(max(end, current.start), current.end):
                content.append(graph.single(pos))
        return TermPath.from_terms(content)

    def retag(self, tags: list[PosTag]) -> "TermPath":
        """Return a copy with the content terms carrying ``tags``."""
        content = self.content
        if len(tags) != len(content):
            raise PipelineInvariantError(
                f"Got {len(tags)} tags for a path of {len(content)} terms"
            )
        return TermPath.from_terms(
            term if term.tag is tag else term.with_tag(tag)
            for term, tag in zip(content, tags)
        )

    def __iter__(self) -> Iterator[Term]:
        return iter(self.terms)

    def __len__(self) -> int:
        return len(self.terms)

    def __getitem__(self, index):
        return self.terms[index]

    def __eq__(self, other) -> bool:
        if not isinstance(other, TermPath):
            return NotImplemented
        return self.key == other.key

    def __hash__(self) -> int:
        return hash(self.key)

    def __repr__(self) -> str:
        return f"TermPath({' '.join(str(term) for term in self.content)})"


@dataclass
class TermGraph:
    """
    Lattice of candidate terms over the positions ``0..len(text)``.

    Edges are kept in lists keyed by their start position; an edge from
    ``p`` to ``q`` is a term spanning ``[p, q)``.
    """

    text: str
    origin: Optional[TermPath] = None
    _edges: dict[int, list[Term]] = field(default_factory=dict, repr=False)
    _seen: set = field(default_factory=set, repr=False)

    @property
    def length(self) -> int:
        return len(self.text)

    def add(self, term: Term) -> bool:
        """Add an edge; returns False when an equal span/tag edge exists."""
        if term.start < 0 or term.end > self.length or term.start >= term.end:
            raise PipelineInvariantError(
                f"Term {term!r} is outside the graph of length {self.length}"
            )
        if self.text[term.start:term.end] != term.surface:
            raise PipelineInvariantError(
                f"Term {term.surface!r} does not match the text at [{term.start}, {term.end})"
            )
        key = (term.start, term.end, term.tag)
        if key in self._seen:
            return False
        self._seen.add(key)
        self._edges.setdefault(term.start, []).append(term)
        return True

    def edges_from(self, position: int) -> list[Term]:
        return list(self._edges.get(position, ()))

    def edges_to(self, position: int) -> list[Term]:
        return [term for term in self.terms() if term.end == position]

    def single(self, position: int) -> Term:
        """The single-character term at ``position`` (added on demand)."""
        for term in self._edges.get(position, ()):
            if term.end == position + 1:
                return term
        term = Term.single(self.text, position)
        self.add(term)
        return term

    def terms(self) -> Iterator[Term]:
        """All edges ordered by start position, then insertion order."""
        for position in sorted(self._edges):
            yield from self._edges[position]

    def __len__(self) -> int:
        return len(self._seen)

    def validate(self) -> None:
        """Check coverage: every position is reachable and can reach the end."""
        n = self.length
        for position in range(n):
            if not self._edges.get(position):
                raise PipelineInvariantError(f"No outgoing edge at position {position}")

        reachable = [False] * (n + 1)
        reachable[0] = True
        for position in range(n):
            if reachable[position]:
                for term in self._edges[position]:
                    reachable[term.end] = True

        finishing = [False] * (n + 1)
        finishing[n] = True
        for position in range(n - 1, -1, -1):
            finishing[position] = any(finishing[t.end] for t in self._edges[position])

        for position in range(n + 1):
            if not (reachable[position] and finishing[position]):
                raise PipelineInvariantError(
                    f"Position {position} is not on a BOS-to-EOS path"
                )

    def default_path(self) -> TermPath:
        """Greedy longest-edge traversal from BOS to EOS."""
        if self.origin is not None:
            return self.origin
        content = []
        position = 0
        while position < self.length:
            term = max(self.edges_from(position), key=lambda t: t.end)
            content.append(term)
            position = term.end
        return TermPath.from_terms(content)

    @classmethod
    def from_path(cls, path: TermPath) -> "TermGraph":
        """Re-explode a path: its terms plus a single-character fallback everywhere."""
        graph = cls(path.text, origin=path)
        for term in path.content:
            graph.add(term)
        for position in range(graph.length):
            graph.single(position)
        return graph
