"""Lattice builders."""

from .base import LatticeBuilder
from .dictionary import DictionaryLatticeBuilder

__all__ = ["LatticeBuilder", "DictionaryLatticeBuilder"]
