"""Load a lexicon directory from disk."""

import csv
import logging
from pathlib import Path
from typing import Optional, Union

import numpy as np
import pandas as pd
import yaml

from ..errors import LexiconError
from ..models import PosTag, TAG_INDEX
from .store import Lexicon, NameRoles

logger = logging.getLogger(__name__)

DEFAULT_LEXICON_DIR = Path(__file__).resolve().parent.parent / "data" / "lexicon"

WORDS_FILE = "words.tsv"
BIGRAMS_FILE = "bigrams.tsv"
TRANSITIONS_FILE = "transitions.tsv"
ROLES_FILE = "roles.yaml"

WORDS_COLUMNS = ["word", "tag", "frequency"]
BIGRAMS_COLUMNS = ["left", "right", "frequency"]
TRANSITIONS_COLUMNS = ["from_tag", "to_tag", "frequency"]


def _read_table(path: Path, columns: list[str]) -> pd.DataFrame:
    """Read a tab-separated table and check its columns and frequencies."""
    try:
        df = pd.read_csv(
            path,
            sep="\t",
            dtype=str,
            quoting=csv.QUOTE_NONE,
            keep_default_na=False,
            encoding="utf-8",
        )
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
        raise LexiconError(f"Cannot parse {path}: {e}") from e

    missing = set(columns) - set(df.columns)
    if missing:
        raise LexiconError(f"Missing required columns in {path.name}: {sorted(missing)}")
    df = df[columns]

    freq = pd.to_numeric(df["frequency"], errors="coerce")
    bad = freq.isna() | (freq < 0) | (freq != freq.round())
    if bad.any():
        row = int(bad.idxmax()) + 2  # header is line 1
        raise LexiconError(
            f"Invalid frequency {df['frequency'].iloc[int(bad.idxmax())]!r} "
            f"in {path.name} at line {row}"
        )
    df = df.assign(frequency=freq.astype(np.int64))

    empty = (df[[c for c in columns if c != "frequency"]] == "").any(axis=1)
    if empty.any():
        raise LexiconError(f"Empty field in {path.name} at line {int(empty.idxmax()) + 2}")
    return df


def _parse_tag(value: str, source: str) -> PosTag:
    if not isinstance(value, str):
        raise LexiconError(f"Missing tag in {source}")
    try:
        return PosTag.parse(value)
    except ValueError as e:
        raise LexiconError(f"{e} in {source}") from e


def _load_entries(path: Path) -> dict[str, dict[PosTag, int]]:
    df = _read_table(path, WORDS_COLUMNS)
    entries: dict[str, dict[PosTag, int]] = {}
    for word, tag, freq in df.itertuples(index=False, name=None):
        tag = _parse_tag(tag, path.name)
        if tag in (PosTag.BEGIN, PosTag.END):
            raise LexiconError(f"Sentinel tag '{tag.value}' used for word '{word}' in {path.name}")
        tags = entries.setdefault(word, {})
        tags[tag] = tags.get(tag, 0) + int(freq)
    return entries


def _load_bigrams(path: Path) -> dict[tuple[str, str], int]:
    df = _read_table(path, BIGRAMS_COLUMNS)
    bigrams: dict[tuple[str, str], int] = {}
    for left, right, freq in df.itertuples(index=False, name=None):
        bigrams[(left, right)] = bigrams.get((left, right), 0) + int(freq)
    return bigrams


def _load_transitions(path: Path) -> np.ndarray:
    df = _read_table(path, TRANSITIONS_COLUMNS)
    matrix = np.zeros((len(TAG_INDEX), len(TAG_INDEX)), dtype=np.float64)
    for from_tag, to_tag, freq in df.itertuples(index=False, name=None):
        i = TAG_INDEX[_parse_tag(from_tag, path.name)]
        j = TAG_INDEX[_parse_tag(to_tag, path.name)]
        matrix[i, j] += freq
    return matrix


def _load_roles(path: Path) -> NameRoles:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise LexiconError(f"Cannot parse {path}: {e}") from e
    if data is None:
        return NameRoles()
    if not isinstance(data, dict):
        raise LexiconError(f"{path.name} must contain a mapping of role lists")
    for key, value in data.items():
        if value is not None and not isinstance(value, list):
            raise LexiconError(f"Role {key!r} in {path.name} must be a list")
    return NameRoles.from_dict(data)


def load_lexicon(directory: Optional[Union[str, Path]] = None) -> Lexicon:
    """
    Load a lexicon directory.

    The directory must contain ``words.tsv``; ``bigrams.tsv``,
    ``transitions.tsv`` and ``roles.yaml`` are optional.

    Args:
        directory: Lexicon directory. ``None`` loads the bundled lexicon.

    Returns:
        The loaded Lexicon.

    Raises:
        FileNotFoundError: If the directory or ``words.tsv`` is missing.
        LexiconError: If any file is malformed.
    """
    directory = Path(directory) if directory is not None else DEFAULT_LEXICON_DIR
    if not directory.is_dir():
        raise FileNotFoundError(f"Lexicon directory not found: {directory}")

    words_path = directory / WORDS_FILE
    if not words_path.exists():
        raise FileNotFoundError(f"Lexicon words file not found: {words_path}")

    logger.info(f"Loading lexicon from: {directory}")
    entries = _load_entries(words_path)
    if not entries:
        raise LexiconError(f"No entries in {words_path}")

    bigrams_path = directory / BIGRAMS_FILE
    if bigrams_path.exists():
        bigrams = _load_bigrams(bigrams_path)
    else:
        logger.warning(f"No {BIGRAMS_FILE} in {directory}, co-occurrence statistics disabled")
        bigrams = {}

    transitions_path = directory / TRANSITIONS_FILE
    if transitions_path.exists():
        transitions = _load_transitions(transitions_path)
    else:
        logger.warning(f"No {TRANSITIONS_FILE} in {directory}, tag transitions are uniform")
        transitions = None

    roles_path = directory / ROLES_FILE
    if roles_path.exists():
        roles = _load_roles(roles_path)
    else:
        logger.warning(f"No {ROLES_FILE} in {directory}, name recognition has no role lists")
        roles = NameRoles()

    lexicon = Lexicon(entries, bigrams=bigrams, transitions=transitions, roles=roles)
    logger.info(f"Loaded {lexicon}")
    return lexicon
