"""Lattice Tagger - Chinese word segmentation and POS tagging over a recognizer cascade."""

__version__ = "0.1.0"

from .config import Config
from .errors import LexiconError, PipelineInvariantError
from .lexicon import Lexicon, load_lexicon
from .models import PosTag, Term, TermGraph, TermPath
from .pipeline import TaggingPipeline
from .tokenizer import Tokenizer

__all__ = [
    "Config",
    "LexiconError",
    "PipelineInvariantError",
    "Lexicon",
    "load_lexicon",
    "PosTag",
    "Term",
    "TermGraph",
    "TermPath",
    "TaggingPipeline",
    "Tokenizer",
]
