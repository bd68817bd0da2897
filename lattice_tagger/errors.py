"""Exceptions raised by the lattice tagger."""


class LexiconError(ValueError):
    """Lexicon data is present but malformed."""


class PipelineInvariantError(RuntimeError):
    """A pipeline stage broke a lattice or path invariant.

    This signals a bug in a strategy implementation (for example a
    recognizer returning no paths), never a property of the input text.
    """
