"""Lexicon storage and loading."""

from .loader import DEFAULT_LEXICON_DIR, load_lexicon
from .store import Lexicon, NameRoles

__all__ = ["DEFAULT_LEXICON_DIR", "Lexicon", "NameRoles", "load_lexicon"]
