"""Command-line interface for the lattice tagger."""

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from pydantic import ValidationError

from .config import Config
from .errors import LexiconError
from .pipeline import TaggingPipeline
from .tokenizer import Tokenizer


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="lattice-tagger",
        description="Segment and POS-tag Chinese text",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Tag a sentence
  lattice-tagger tag "他来自中国。"

  # Tag a JSONL file (one row per term)
  lattice-tagger batch --input data/input.jsonl --output output/tagged.csv

  # Using a config file and 4 worker processes
  lattice-tagger batch --config config.yaml --workers 4
        """,
    )
    subparsers = parser.add_subparsers(dest="command", required=True, help="Command to run")

    tag_parser = subparsers.add_parser("tag", help="Tag a piece of text")
    tag_parser.add_argument("text", help="Text to tag")
    tag_parser.add_argument(
        "--separator",
        default=" ",
        help="Separator printed between word/tag pairs (default: space)",
    )
    setup_common_arguments(tag_parser)

    batch_parser = subparsers.add_parser("batch", help="Tag a JSONL file")
    batch_parser.add_argument(
        "--input",
        type=Path,
        help="Path to input JSONL file (records with a 'text' or 'content' field)",
    )
    batch_parser.add_argument(
        "--output",
        type=Path,
        help="Output file path (default: output/tagged.csv)",
    )
    batch_parser.add_argument(
        "--format",
        choices=["csv", "json"],
        help="Output format (default: csv)",
    )
    batch_parser.add_argument(
        "--workers",
        type=int,
        help="Number of parallel workers (default: 1)",
    )
    setup_common_arguments(batch_parser)

    return parser.parse_args(argv)


def setup_common_arguments(parser: argparse.ArgumentParser) -> None:
    """Setup arguments shared by all commands."""
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to YAML configuration file",
    )
    parser.add_argument(
        "--lexicon",
        type=Path,
        help="Lexicon directory (default: bundled lexicon)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )


def build_config(args: argparse.Namespace) -> Config:
    """Build configuration from arguments."""
    if args.config:
        config = Config.from_yaml(args.config)
    else:
        config = Config()

    # Override with command-line arguments
    if args.lexicon:
        config.lexicon.path = args.lexicon
    if getattr(args, "input", None):
        config.input_file = args.input
    if getattr(args, "output", None):
        config.output.output_path = args.output
    if getattr(args, "format", None):
        config.output.format = args.format
    if getattr(args, "workers", None) is not None:
        if args.workers < 1:
            raise ValueError(f"--workers must be at least 1, got {args.workers}")
        config.workers = args.workers

    return config


def handle_tag(args: argparse.Namespace, config: Config) -> int:
    """Handle tag command."""
    tokenizer = Tokenizer.from_config(config)
    terms = tokenizer.tokenize(args.text)
    print(args.separator.join(str(term) for term in terms))
    return 0


def handle_batch(args: argparse.Namespace, config: Config) -> int:
    """Handle batch command."""
    if not config.input_file:
        print("Error: Input file is required (use --input or --config)", file=sys.stderr)
        return 1

    pipeline = TaggingPipeline(config)
    record_count = pipeline.run()
    print(f"\nTagged {record_count} records -> {config.output.output_path}")
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point."""
    args = parse_args(argv)
    setup_logging(args.verbose)

    try:
        config = build_config(args)
        if args.command == "batch":
            return handle_batch(args, config)
        return handle_tag(args, config)
    except FileNotFoundError as e:
        print(f"Error: File not found - {e}", file=sys.stderr)
        return 1
    except LexiconError as e:
        print(f"Error: Invalid lexicon - {e}", file=sys.stderr)
        return 1
    except (ValidationError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        logging.exception("Tagging failed")
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
