"""End-to-end tests for the tokenizer."""

import pytest

from lattice_tagger.config import Config
from lattice_tagger.errors import PipelineInvariantError
from lattice_tagger.models import PosTag, Term, TermPath
from lattice_tagger.recognizers import NatureRecognizer, Recognizer
from lattice_tagger.scorers import PathScorer
from lattice_tagger.tokenizer import RECOGNIZERS, Tokenizer

SENTENCES = [
    "他来自中国。",
    "2023年5月1日",
    "伊丽莎白来了。",
    "张华平在北京大学学习。",
    "我们今天下午3点开会，你来吗？",
    "克林顿和布什都是美国总统",
]


def rendered(terms):
    return [str(t) for t in terms]


class RecordingRecognizer(Recognizer):
    """Passes paths through and remembers what it saw."""

    name = "recording"

    def __init__(self, lexicon):
        super().__init__(lexicon)
        self.seen = []

    def process(self, graph):
        path = self.source_path(graph)
        self.seen.append(path)
        return [path]


class EmptyRecognizer(Recognizer):
    name = "empty"

    def process(self, graph):
        return []


class WrongTextRecognizer(Recognizer):
    name = "wrong_text"

    def process(self, graph):
        return [TermPath.from_terms([Term("错", 0, 1, PosTag.UNKNOWN)])]


class FewestTermsScorer(PathScorer):
    def score(self, path):
        return len(path)


class ConstantScorer(PathScorer):
    def score(self, path):
        return 1.0


class TestScenarios:
    """Known segmentations of the bundled lexicon."""

    def test_simple_sentence(self, tokenizer):
        assert rendered(tokenizer.tokenize("他来自中国。")) == ["他/r", "来自/v", "中国/ns", "。/w"]

    def test_date(self, tokenizer):
        assert rendered(tokenizer.tokenize("2023年5月1日")) == ["2023年5月1日/t"]

    def test_delimiters_only(self, tokenizer):
        assert tokenizer.tokenize("，。") == []
        assert tokenizer.parse("，。") == []

    def test_blank(self, tokenizer):
        assert tokenizer.tokenize("") == []
        assert tokenizer.tokenize("   ") == []

    def test_foreign_name(self, tokenizer):
        terms = tokenizer.tokenize("伊丽莎白来了。")
        assert rendered(terms)[0] == "伊丽莎白/nrf"
        assert "".join(t.surface for t in terms) == "伊丽莎白来了。"

    def test_domestic_name(self, tokenizer):
        terms = tokenizer.tokenize("张华平来了。")
        assert rendered(terms)[0] == "张华平/nr"

    def test_organization(self, tokenizer):
        assert rendered(tokenizer.tokenize("北京大学。")) == ["北京大学/nt", "。/w"]

    def test_known_foreign_name(self, tokenizer):
        terms = tokenizer.tokenize("克林顿来了")
        assert rendered(terms)[0] == "克林顿/nrf"


class TestClauses:
    """Tests for clause splitting."""

    def test_delimiter_stays_in_clause(self, tokenizer):
        assert tokenizer.clauses("你好，世界。再见") == [
            ("你好，", 0),
            ("世界。", 3),
            ("再见", 6),
        ]

    def test_single_character_tail_is_kept(self, tokenizer):
        assert tokenizer.clauses("好。吗") == [("好。", 0), ("吗", 2)]
        assert rendered(tokenizer.tokenize("好。吗")) == ["好/a", "。/w", "吗/y"]

    def test_whitespace_and_ideographic_space(self, tokenizer):
        assert tokenizer.clauses("他 来　了") == [("他 ", 0), ("来　", 2), ("了", 4)]

    def test_clause_offsets_are_relative(self, tokenizer):
        terms = tokenizer.tokenize("你好，他来自中国。")
        china = [t for t in terms if t.surface == "中国"][0]
        assert (china.start, china.end) == (3, 5)

    def test_custom_delimiters(self, lexicon):
        tokenizer = Tokenizer(lexicon, delimiters="|")
        assert tokenizer.clauses("他，来|了") == [("他，来|", 0), ("了", 4)]


class TestProperties:
    """Invariants that hold for any input."""

    @pytest.mark.parametrize("sentence", SENTENCES)
    def test_terms_reconstruct_clauses(self, tokenizer, sentence):
        for clause, _ in tokenizer.clauses(sentence):
            terms = tokenizer.parse(clause)
            trimmed = clause.strip()
            if not terms:
                assert all(ch in tokenizer.delimiters for ch in trimmed)
                continue
            assert "".join(t.surface for t in terms) == trimmed
            assert terms[0].start == 0
            assert terms[-1].end == len(trimmed)
            for left, right in zip(terms, terms[1:]):
                assert left.end == right.start

    @pytest.mark.parametrize("sentence", SENTENCES)
    def test_candidates_are_well_formed(self, tokenizer, sentence):
        for clause, _ in tokenizer.clauses(sentence):
            for path in tokenizer.candidates(clause):
                assert path.text == clause.strip()
                assert path[0].tag is PosTag.BEGIN
                assert path[-1].tag is PosTag.END
                for term in path:
                    assert 0 <= term.start <= term.end <= len(path.text)

    @pytest.mark.parametrize("sentence", SENTENCES)
    def test_deterministic(self, tokenizer, sentence):
        assert tokenizer.tokenize(sentence) == tokenizer.tokenize(sentence)

    @pytest.mark.parametrize("sentence", SENTENCES)
    def test_best_path_has_minimum_score(self, tokenizer, sentence):
        for clause, _ in tokenizer.clauses(sentence):
            candidates = tokenizer.candidates(clause)
            if not candidates:
                continue
            best = tokenizer.best_path(clause)
            best_score = tokenizer.scorer.score(best)
            assert best in candidates
            assert all(best_score <= tokenizer.scorer.score(p) for p in candidates)

    def test_ties_go_to_first_candidate(self, lexicon):
        tokenizer = Tokenizer(lexicon, scorer=ConstantScorer())
        clause = "张华平在北京大学学习"
        candidates = tokenizer.candidates(clause)
        assert len(candidates) > 1
        assert tokenizer.best_path(clause) == candidates[0]

    def test_candidates_are_unique(self, tokenizer):
        candidates = tokenizer.candidates("张华平在北京大学学习")
        assert len(candidates) == len(set(candidates))

    def test_max_candidates(self, lexicon):
        tokenizer = Tokenizer(lexicon, max_candidates=1)
        assert len(tokenizer.candidates("张华平在北京大学学习")) == 1
        assert rendered(tokenizer.tokenize("他来自中国。")) == ["他/r", "来自/v", "中国/ns", "。/w"]

    def test_invalid_max_candidates(self, lexicon):
        with pytest.raises(ValueError):
            Tokenizer(lexicon, max_candidates=0)


class TestExtensionPoints:
    """Tests for replacing and extending pipeline stages."""

    def test_default_cascade_order(self, tokenizer):
        assert [r.name for r in tokenizer.recognizers] == [
            "number",
            "asian_name",
            "organization",
            "foreign_name",
            "datetime",
            "nature",
        ]

    def test_add_recognizer(self, lexicon):
        tokenizer = Tokenizer(lexicon)
        recorder = RecordingRecognizer(lexicon)
        tokenizer.add_recognizer(recorder)

        tokenizer.tokenize("他来自中国。")

        assert tokenizer.recognizers[-1] is recorder
        assert recorder.seen
        assert all(path.text == "他来自中国。" for path in recorder.seen)

    def test_replace_scorer(self, lexicon):
        tokenizer = Tokenizer(lexicon, recognizers=[])
        tokenizer.scorer = FewestTermsScorer()
        terms = tokenizer.parse("他来自中国")
        assert rendered(terms) == ["他/r", "来自/v", "中国/ns"]

    def test_empty_cascade(self, lexicon):
        tokenizer = Tokenizer(lexicon, recognizers=[])
        assert tokenizer.recognizers == []
        assert [t.surface for t in tokenizer.parse("他来自中国")] == ["他", "来自", "中国"]

    def test_recognizer_returning_nothing(self, lexicon):
        tokenizer = Tokenizer(lexicon, recognizers=[EmptyRecognizer(lexicon)])
        with pytest.raises(PipelineInvariantError, match="empty"):
            tokenizer.parse("他来自中国")

    def test_recognizer_returning_other_text(self, lexicon):
        tokenizer = Tokenizer(lexicon, recognizers=[WrongTextRecognizer(lexicon)])
        with pytest.raises(PipelineInvariantError, match="wrong_text"):
            tokenizer.parse("他来自中国")

    def test_invariant_errors_not_raised_for_blank_input(self, lexicon):
        tokenizer = Tokenizer(lexicon, recognizers=[EmptyRecognizer(lexicon)])
        assert tokenizer.parse("。") == []


class TestFromConfig:
    """Tests for building a tokenizer from configuration."""

    def test_defaults(self, lexicon):
        tokenizer = Tokenizer.from_config(Config(), lexicon=lexicon)
        assert [type(r) for r in tokenizer.recognizers] == [
            RECOGNIZERS[name] for name in Config().tokenizer.cascade.recognizers
        ]
        assert tokenizer.max_candidates == 32
        assert tokenizer.path_generator.n == 5

    def test_custom_cascade(self, lexicon):
        config = Config()
        config.tokenizer.cascade.recognizers = ["nature"]
        config.tokenizer.path_generator.n = 2
        tokenizer = Tokenizer.from_config(config, lexicon=lexicon)

        assert len(tokenizer.recognizers) == 1
        assert isinstance(tokenizer.recognizers[0], NatureRecognizer)
        assert tokenizer.path_generator.n == 2

    def test_unknown_recognizer(self, lexicon):
        config = Config()
        config.tokenizer.cascade.recognizers = ["number", "martian"]
        with pytest.raises(ValueError, match="martian"):
            Tokenizer.from_config(config, lexicon=lexicon)

    def test_loads_lexicon_from_path(self, tmp_path):
        (tmp_path / "words.tsv").write_text(
            "word\ttag\tfrequency\n他\tr\t10\n来\tv\t5\n", encoding="utf-8"
        )
        config = Config(lexicon={"path": str(tmp_path)})
        tokenizer = Tokenizer.from_config(config)
        assert rendered(tokenizer.tokenize("他来")) == ["他/r", "来/v"]
