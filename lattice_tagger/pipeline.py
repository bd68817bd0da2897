"""Batch tagging of JSONL records."""

import json
import logging
from concurrent.futures import ProcessPoolExecutor, as_completed
from pathlib import Path
from typing import Iterator, Optional

import pandas as pd
from tqdm import tqdm

from .config import Config
from .lexicon import Lexicon
from .tokenizer import Tokenizer

logger = logging.getLogger(__name__)

OUTPUT_COLUMNS = [
    "Record_Number",
    "Clause_Offset",
    "Term",
    "Tag",
    "Start_Index",
    "End_Index",
]

# Tokenizer of the current worker process, built once by _init_worker
_worker_tokenizer: Optional[Tokenizer] = None


def record_text(record: dict) -> str:
    """Text of a JSONL record (``text`` field, falling back to ``content``)."""
    text = record.get("text") or record.get("content") or ""
    return text if isinstance(text, str) else ""


def tag_record(tokenizer: Tokenizer, record_number: int, text: str) -> list[dict]:
    """
    Tag one record.

    Args:
        tokenizer: Tokenizer to use.
        record_number: Line number of the record in the input file.
        text: Record text.

    Returns:
        One row per term. ``Clause_Offset`` is the offset of the trimmed
        clause in the record text; term indices are relative to it.
    """
    rows = []
    for clause, offset in tokenizer.clauses(text):
        offset += len(clause) - len(clause.lstrip())
        for term in tokenizer.parse(clause):
            rows.append({
                "Record_Number": record_number,
                "Clause_Offset": offset,
                "Term": term.surface,
                "Tag": str(term.tag),
                "Start_Index": term.start,
                "End_Index": term.end,
            })
    return rows


def _init_worker(config_dict: dict, lexicon: Lexicon) -> None:
    global _worker_tokenizer
    _worker_tokenizer = Tokenizer.from_config(Config(**config_dict), lexicon=lexicon)


def _tag_record_worker(args: tuple) -> tuple[int, list[dict]]:
    """Worker for parallel processing. Must be module-level for pickling.

    Args:
        args: (record_number, text)

    Returns:
        (record_number, list of row dicts)
    """
    record_number, text = args
    return record_number, tag_record(_worker_tokenizer, record_number, text)


class TaggingPipeline:
    """Tags every record of a JSONL file and writes one row per term."""

    def __init__(self, config: Config, lexicon: Optional[Lexicon] = None):
        """
        Initialize pipeline.

        Args:
            config: Pipeline configuration.
            lexicon: Already loaded lexicon; loaded from the configuration if None.
        """
        self.config = config
        self.tokenizer = Tokenizer.from_config(config, lexicon=lexicon)

    def _read_records(self, input_path: Path) -> Iterator[tuple[int, str]]:
        """Yield (line number, text) for every non-empty record."""
        with open(input_path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as e:
                    logger.warning(f"Skipping malformed JSON at line {line_num}: {e}")
                    continue
                if not isinstance(record, dict):
                    logger.warning(f"Skipping non-object record at line {line_num}")
                    continue
                text = record_text(record)
                if text.strip():
                    yield line_num, text

    def _process_sequential(self, records: list[tuple[int, str]]) -> dict[int, list[dict]]:
        results = {}
        for record_number, text in tqdm(records, desc="Tagging"):
            results[record_number] = tag_record(self.tokenizer, record_number, text)
        return results

    def _process_parallel(self, records: list[tuple[int, str]]) -> dict[int, list[dict]]:
        workers = self.config.workers
        config_dict = self.config.model_dump(mode="json")
        results = {}

        with ProcessPoolExecutor(
            max_workers=workers,
            initializer=_init_worker,
            initargs=(config_dict, self.tokenizer.lexicon),
        ) as executor:
            futures = {
                executor.submit(_tag_record_worker, record): record[0]
                for record in records
            }
            for future in tqdm(
                as_completed(futures), total=len(futures), desc=f"Tagging ({workers} workers)"
            ):
                record_number, rows = future.result()
                results[record_number] = rows
        return results

    def save(self, rows: list[dict], output_path: Path) -> None:
        """Write rows as CSV or JSON according to the output format."""
        output_path.parent.mkdir(parents=True, exist_ok=True)
        df = pd.DataFrame(rows, columns=OUTPUT_COLUMNS)
        if self.config.output.format == "json":
            df.to_json(output_path, orient="records", force_ascii=False, indent=2)
        else:
            df.to_csv(output_path, index=False, encoding="utf-8")
        logger.info(f"Wrote {len(df)} terms to {output_path}")

    def run(self, input_path: Optional[Path] = None, output_path: Optional[Path] = None) -> int:
        """
        Run the pipeline.

        Args:
            input_path: JSONL input (``config.input_file`` if None).
            output_path: Output file (``config.output.output_path`` if None).

        Returns:
            Number of records tagged.

        Raises:
            ValueError: If no input file is given.
            FileNotFoundError: If the input file does not exist.
        """
        input_path = input_path or self.config.input_file
        if input_path is None:
            raise ValueError("No input file given")
        input_path = Path(input_path)
        if not input_path.exists():
            raise FileNotFoundError(f"Input file not found: {input_path}")
        output_path = Path(output_path or self.config.output.output_path)

        logger.info(f"Reading records from {input_path}")
        records = list(self._read_records(input_path))
        logger.info(f"Tagging {len(records)} records")

        if self.config.workers > 1 and len(records) > 1:
            results = self._process_parallel(records)
        else:
            results = self._process_sequential(records)

        rows = []
        for record_number in sorted(results):
            rows.extend(results[record_number])
        self.save(rows, output_path)
        return len(results)
