"""Character classes used by the lattice builder and the recognizers."""

import re
import unicodedata

# Chinese numerals, including the financial forms and large units
CHINESE_DIGITS = "零〇一二三四五六七八九两壹贰叁肆伍陆柒捌玖"
CHINESE_UNITS = "十百千万亿拾佰仟"
CHINESE_NUMERALS = set(CHINESE_DIGITS + CHINESE_UNITS)

# Full-width digits U+FF10-U+FF19
DIGIT_PATTERN = re.compile(r"[0-9０-９]")
LATIN_PATTERN = re.compile(r"[A-Za-zＡ-Ｚａ-ｚ]")

# Separators allowed between numeral characters ("3.5", "三点五")
NUMERAL_INNER = set(".．点")
NUMERAL_SUFFIX = set("%％")


def is_digit(ch: str) -> bool:
    return bool(DIGIT_PATTERN.fullmatch(ch))


def is_latin(ch: str) -> bool:
    return bool(LATIN_PATTERN.fullmatch(ch))


def is_chinese_numeral(ch: str) -> bool:
    return ch in CHINESE_NUMERALS


def is_numeral(ch: str) -> bool:
    """True for Arabic, full-width and Chinese numeral characters."""
    return is_digit(ch) or is_chinese_numeral(ch)


def is_punctuation(ch: str) -> bool:
    """True for punctuation, symbols and whitespace."""
    if ch.isspace():
        return True
    category = unicodedata.category(ch)
    return category.startswith("P") or category.startswith("S")


def char_tag(ch: str) -> str:
    """Tag value for a character that is not in the lexicon."""
    if is_numeral(ch):
        return "m"
    if is_latin(ch):
        return "nx"
    if is_punctuation(ch):
        return "w"
    return "x"
