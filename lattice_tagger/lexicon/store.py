"""In-memory lexicon: word frequencies, co-occurrence and tag statistics."""

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from ..models import PosTag, TAG_INDEX


@dataclass(frozen=True)
class NameRoles:
    """Character and word lists used by the entity recognizers."""

    surnames: frozenset = field(default_factory=frozenset)
    given_names: frozenset = field(default_factory=frozenset)
    foreign_name_chars: frozenset = field(default_factory=frozenset)
    organization_suffixes: frozenset = field(default_factory=frozenset)

    @classmethod
    def from_dict(cls, data: dict) -> "NameRoles":
        """Build roles from a mapping of list values (e.g. parsed YAML)."""
        data = data or {}
        return cls(
            surnames=frozenset(data.get("surnames") or ()),
            given_names=frozenset(data.get("given_names") or ()),
            foreign_name_chars=frozenset(data.get("foreign_name_chars") or ()),
            organization_suffixes=frozenset(data.get("organization_suffixes") or ()),
        )


class Lexicon:
    """
    Read-only dictionary shared by every pipeline stage.

    Holds the frequency of each (word, tag) pair, the set of word prefixes
    used for dictionary matching, word co-occurrence (bigram) counts and
    the tag transition matrix. Nothing is mutated after construction.
    """

    def __init__(
        self,
        entries: dict[str, dict[PosTag, int]],
        bigrams: Optional[dict[tuple[str, str], int]] = None,
        transitions: Optional[np.ndarray] = None,
        roles: Optional[NameRoles] = None,
    ):
        """
        Initialize the lexicon.

        Args:
            entries: word -> {tag: frequency}.
            bigrams: (left word, right word) -> co-occurrence frequency.
            transitions: Square matrix of tag transition counts indexed by
                ``TAG_INDEX``.
            roles: Name and organization role lists.
        """
        self._entries = {word: dict(tags) for word, tags in entries.items() if tags}
        self._bigrams = dict(bigrams or {})
        self.roles = roles or NameRoles()

        size = len(TAG_INDEX)
        if transitions is None:
            transitions = np.zeros((size, size), dtype=np.float64)
        if transitions.shape != (size, size):
            raise ValueError(
                f"Transition matrix must be {size}x{size}, got {transitions.shape}"
            )
        self._transitions = transitions.astype(np.float64)
        self._transitions.setflags(write=False)
        self._transition_totals = self._transitions.sum(axis=1)
        # Add-one smoothed -log P(to_tag | from_tag)
        self.transition_costs = -np.log(
            (self._transitions + 1.0) / (self._transition_totals[:, None] + size)
        )
        self.transition_costs.setflags(write=False)

        self._word_totals = {
            word: sum(tags.values()) for word, tags in self._entries.items()
        }
        self.total_frequency = sum(self._word_totals.values())

        self._tag_totals = dict.fromkeys(PosTag, 0)
        for tags in self._entries.values():
            for tag, freq in tags.items():
                self._tag_totals[tag] += freq

        self._prefixes = set()
        for word in self._entries:
            for i in range(1, len(word) + 1):
                self._prefixes.add(word[:i])
        self.max_word_length = max((len(w) for w in self._entries), default=0)

    def __contains__(self, word: str) -> bool:
        return word in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def is_prefix(self, fragment: str) -> bool:
        """True if some word starts with ``fragment`` (or equals it)."""
        return fragment in self._prefixes

    def tags(self, word: str) -> dict[PosTag, int]:
        return dict(self._entries.get(word, {}))

    def best_tag(self, word: str) -> Optional[PosTag]:
        """Most frequent tag of ``word``; ties go to the first listed tag."""
        tags = self._entries.get(word)
        if not tags:
            return None
        return max(tags, key=tags.get)

    def frequency(self, word: str, tag: Optional[PosTag] = None) -> int:
        if tag is None:
            return self._word_totals.get(word, 0)
        return self._entries.get(word, {}).get(tag, 0)

    def tag_frequency(self, tag: PosTag) -> int:
        """Total frequency of all words carrying ``tag``."""
        return self._tag_totals[tag]

    def bigram_frequency(self, left: str, right: str) -> int:
        return self._bigrams.get((left, right), 0)

    def transition_frequency(self, from_tag: PosTag, to_tag: PosTag) -> float:
        return float(self._transitions[TAG_INDEX[from_tag], TAG_INDEX[to_tag]])

    def transition_total(self, from_tag: PosTag) -> float:
        return float(self._transition_totals[TAG_INDEX[from_tag]])

    def transition_cost(self, from_tag: PosTag, to_tag: PosTag) -> float:
        return float(self.transition_costs[TAG_INDEX[from_tag], TAG_INDEX[to_tag]])

    @property
    def transitions(self) -> np.ndarray:
        """Read-only view of the tag transition count matrix."""
        return self._transitions

    def __repr__(self) -> str:
        return (
            f"Lexicon(words={len(self._entries)}, total={self.total_frequency}, "
            f"bigrams={len(self._bigrams)})"
        )
