"""Configuration management for the tagger and the batch pipeline."""

from pathlib import Path
from typing import Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

# Full-/half-width comma, period, question and exclamation marks, whitespace
DEFAULT_DELIMITERS = "，,。.？?！! \t\n\r　"

DEFAULT_CASCADE = (
    "number",
    "asian_name",
    "organization",
    "foreign_name",
    "datetime",
    "nature",
)


class LexiconConfig(BaseModel):
    """Configuration for the lexicon."""

    path: Optional[Path] = Field(
        default=None, description="Lexicon directory (bundled lexicon when empty)"
    )

    @field_validator("path", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        if v is None or v == "":
            return None
        return Path(v) if isinstance(v, str) else v


class PathGeneratorConfig(BaseModel):
    """Configuration for N-best path generation."""

    strategy: Literal["cooccurrence"] = "cooccurrence"
    n: int = Field(default=5, ge=1)
    smoothing: float = Field(default=0.1, gt=0.0, lt=1.0)


class CascadeConfig(BaseModel):
    """Configuration for the recognizer cascade."""

    recognizers: list[str] = Field(default_factory=lambda: list(DEFAULT_CASCADE))
    max_candidates: Optional[int] = Field(
        default=32, ge=1, description="Candidate paths kept between stages"
    )


class TokenizerConfig(BaseModel):
    """Configuration for the tokenizer strategies."""

    delimiters: str = Field(default=DEFAULT_DELIMITERS, min_length=1)
    lattice_builder: Literal["dictionary"] = "dictionary"
    path_generator: PathGeneratorConfig = Field(default_factory=PathGeneratorConfig)
    cascade: CascadeConfig = Field(default_factory=CascadeConfig)
    scorer: Literal["simple"] = "simple"


class OutputConfig(BaseModel):
    """Configuration for batch output."""

    output_path: Path = Path("output/tagged.csv")
    format: Literal["csv", "json"] = "csv"


class Config(BaseModel):
    """Main configuration for the tagger."""

    input_file: Optional[Path] = None
    workers: int = Field(default=1, ge=1)
    lexicon: LexiconConfig = Field(default_factory=LexiconConfig)
    tokenizer: TokenizerConfig = Field(default_factory=TokenizerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)

    @field_validator("input_file", mode="before")
    @classmethod
    def convert_to_path(cls, v):
        """Convert string to Path."""
        if v is None:
            return None
        return Path(v) if isinstance(v, str) else v

    @classmethod
    def from_yaml(cls, path: str | Path) -> "Config":
        """Load configuration from a YAML file."""
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls(**(data or {}))

    def to_yaml(self, path: str | Path) -> None:
        """Save configuration to a YAML file."""
        data = self.model_dump(mode="json")
        with open(path, "w", encoding="utf-8") as f:
            yaml.dump(data, f, default_flow_style=False, allow_unicode=True)
