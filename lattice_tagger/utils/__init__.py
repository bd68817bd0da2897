"""Utility functions."""

from .chars import (
    char_tag,
    is_chinese_numeral,
    is_digit,
    is_latin,
    is_numeral,
    is_punctuation,
)

__all__ = [
    "char_tag",
    "is_chinese_numeral",
    "is_digit",
    "is_latin",
    "is_numeral",
    "is_punctuation",
]
