"""Shared fixtures."""

import pytest

from lattice_tagger.lexicon import load_lexicon
from lattice_tagger.models import PosTag, Term, TermPath
from lattice_tagger.tokenizer import Tokenizer


@pytest.fixture(scope="session")
def lexicon():
    """The bundled lexicon, loaded once."""
    return load_lexicon()


@pytest.fixture(scope="session")
def tokenizer(lexicon):
    """Tokenizer with the default strategies and cascade."""
    return Tokenizer(lexicon)


def make_path(*pieces: tuple[str, str]) -> TermPath:
    """Build a path from (surface, tag) pairs laid end to end."""
    terms = []
    position = 0
    for surface, tag in pieces:
        terms.append(Term(surface, position, position + len(surface), PosTag(tag)))
        position += len(surface)
    return TermPath.from_terms(terms)
