"""Tests for the command-line interface."""

import json

import pandas as pd

from lattice_tagger.cli import build_config, main, parse_args


class TestParseArgs:
    """Tests for argument parsing and config overrides."""

    def test_tag_defaults(self):
        args = parse_args(["tag", "他来了"])
        assert args.command == "tag"
        assert args.text == "他来了"
        assert args.separator == " "
        assert not args.verbose

    def test_batch_overrides(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("workers: 2\noutput:\n  format: json\n", encoding="utf-8")

        args = parse_args([
            "batch",
            "--config", str(config_path),
            "--input", "in.jsonl",
            "--output", "out.csv",
            "--format", "csv",
            "--workers", "4",
        ])
        config = build_config(args)

        assert str(config.input_file) == "in.jsonl"
        assert str(config.output.output_path) == "out.csv"
        assert config.output.format == "csv"
        assert config.workers == 4

    def test_config_file_values_kept(self, tmp_path):
        config_path = tmp_path / "config.yaml"
        config_path.write_text("workers: 2\noutput:\n  format: json\n", encoding="utf-8")

        config = build_config(parse_args(["batch", "--config", str(config_path)]))

        assert config.workers == 2
        assert config.output.format == "json"


class TestMain:
    """Tests for the entry point."""

    def test_tag(self, capsys):
        assert main(["tag", "他来自中国。"]) == 0
        assert capsys.readouterr().out.strip() == "他/r 来自/v 中国/ns 。/w"

    def test_tag_separator(self, capsys):
        assert main(["tag", "他来自中国。", "--separator", "|"]) == 0
        assert capsys.readouterr().out.strip() == "他/r|来自/v|中国/ns|。/w"

    def test_tag_missing_lexicon(self, tmp_path, capsys):
        assert main(["tag", "他", "--lexicon", str(tmp_path / "missing")]) == 1
        assert "Error: File not found" in capsys.readouterr().err

    def test_tag_invalid_lexicon(self, tmp_path, capsys):
        (tmp_path / "words.tsv").write_text("word\ttag\tfrequency\n他\tqq\t1\n", encoding="utf-8")
        assert main(["tag", "他", "--lexicon", str(tmp_path)]) == 1
        assert "Invalid lexicon" in capsys.readouterr().err

    def test_batch_requires_input(self, capsys):
        assert main(["batch"]) == 1
        assert "Input file is required" in capsys.readouterr().err

    def test_batch_invalid_workers(self, capsys):
        assert main(["batch", "--input", "in.jsonl", "--workers", "0"]) == 1
        assert "Error" in capsys.readouterr().err

    def test_batch(self, tmp_path, capsys):
        input_path = tmp_path / "input.jsonl"
        input_path.write_text(
            json.dumps({"text": "他来自中国。"}, ensure_ascii=False) + "\n", encoding="utf-8"
        )
        output_path = tmp_path / "tagged.csv"

        assert main(["batch", "--input", str(input_path), "--output", str(output_path)]) == 0
        assert "Tagged 1 records" in capsys.readouterr().out

        results = pd.read_csv(output_path)
        assert list(results["Term"]) == ["他", "来自", "中国", "。"]

    def test_batch_missing_input_file(self, tmp_path, capsys):
        missing = tmp_path / "missing.jsonl"
        assert main(["batch", "--input", str(missing)]) == 1
        assert "File not found" in capsys.readouterr().err
