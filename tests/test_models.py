"""Tests for tags, terms, paths and term graphs."""

import pytest

from lattice_tagger.errors import PipelineInvariantError
from lattice_tagger.models import ENTITY_TAGS, PosTag, Term, TermGraph, TermPath

from conftest import make_path


class TestPosTag:
    """Tests for the tag enum."""

    def test_parse(self):
        assert PosTag.parse("nr") is PosTag.PERSON
        assert PosTag.parse(" v ") is PosTag.VERB
        assert str(PosTag.ORGANIZATION) == "nt"

    def test_parse_unknown(self):
        with pytest.raises(ValueError, match="Unknown part-of-speech tag"):
            PosTag.parse("zz")

    def test_entity_tags(self):
        assert PosTag.TIME in ENTITY_TAGS
        assert PosTag.NOUN not in ENTITY_TAGS


class TestTerm:
    """Tests for Term."""

    def test_sentinels(self):
        bos, eos = Term.bos(), Term.eos(4)
        assert bos.is_sentinel and eos.is_sentinel
        assert (bos.start, bos.end) == (0, 0)
        assert (eos.start, eos.end) == (4, 4)
        assert eos.length == 0

    def test_span_must_match_surface(self):
        with pytest.raises(PipelineInvariantError):
            Term("中国", 0, 1, PosTag.PLACE)

    def test_single_uses_character_class(self):
        assert Term.single("a3，字", 1).tag is PosTag.NUMERAL
        assert Term.single("a3，字", 2).tag is PosTag.PUNCTUATION
        assert Term.single("a3，字", 3).tag is PosTag.UNKNOWN

    def test_str(self):
        assert str(Term("中国", 0, 2, PosTag.PLACE)) == "中国/ns"


class TestTermPath:
    """Tests for TermPath construction and operations."""

    def test_requires_sentinels(self):
        term = Term("他", 0, 1, PosTag.PRONOUN)
        with pytest.raises(PipelineInvariantError):
            TermPath([term, Term.eos(1)])
        with pytest.raises(PipelineInvariantError):
            TermPath([Term.bos(), term])
        with pytest.raises(PipelineInvariantError):
            TermPath([Term.bos()])

    def test_requires_contiguity(self):
        with pytest.raises(PipelineInvariantError, match="not contiguous"):
            TermPath([
                Term.bos(),
                Term("他", 0, 1, PosTag.PRONOUN),
                Term("国", 2, 3, PosTag.NOUN),
                Term.eos(3),
            ])

    def test_text_and_content(self):
        path = make_path(("他", "r"), ("来自", "v"), ("中国", "ns"))
        assert path.text == "他来自中国"
        assert [t.surface for t in path.content] == ["他", "来自", "中国"]
        assert len(path) == 5
        assert path[0].tag is PosTag.BEGIN
        assert repr(path) == "TermPath(他/r 来自/v 中国/ns)"

    def test_equality_ignores_weight(self):
        a = TermPath.from_terms([Term("他", 0, 1, PosTag.PRONOUN, 5.0)])
        b = TermPath.from_terms([Term("他", 0, 1, PosTag.PRONOUN)])
        c = TermPath.from_terms([Term("他", 0, 1, PosTag.NOUN)])
        assert a == b
        assert hash(a) == hash(b)
        assert a != c

    def test_replace_span_breaks_straddling_terms(self):
        path = make_path(("张华", "nr"), ("平来", "x"), ("了", "u"))
        graph = path.to_graph()
        merged = path.replace_span(1, 3, Term("华平", 1, 3, PosTag.PERSON), graph)

        assert [str(t) for t in merged.content] == ["张/x", "华平/nr", "来/x", "了/u"]
        assert merged.text == path.text

    def test_replace_span_requires_matching_term(self):
        path = make_path(("他", "r"), ("来", "v"))
        with pytest.raises(PipelineInvariantError):
            path.replace_span(0, 2, Term("他", 0, 1, PosTag.PRONOUN), path.to_graph())

    def test_retag(self):
        path = make_path(("在", "v"), ("北京", "ns"))
        retagged = path.retag([PosTag.PREPOSITION, PosTag.PLACE])
        assert [str(t) for t in retagged.content] == ["在/p", "北京/ns"]
        with pytest.raises(PipelineInvariantError):
            path.retag([PosTag.PREPOSITION])


class TestTermGraph:
    """Tests for the term lattice."""

    def test_add_deduplicates(self):
        graph = TermGraph("中国")
        assert graph.add(Term("中国", 0, 2, PosTag.PLACE))
        assert not graph.add(Term("中国", 0, 2, PosTag.PLACE, 10.0))
        assert graph.add(Term("中国", 0, 2, PosTag.NOUN))
        assert len(graph) == 2

    def test_add_checks_text(self):
        graph = TermGraph("中国")
        with pytest.raises(PipelineInvariantError):
            graph.add(Term("美国", 0, 2, PosTag.PLACE))
        with pytest.raises(PipelineInvariantError):
            graph.add(Term("中国人", 0, 3, PosTag.NOUN))

    def test_edges(self):
        graph = TermGraph("中国人")
        graph.add(Term("中国", 0, 2, PosTag.PLACE))
        graph.add(Term("人", 2, 3, PosTag.NOUN))
        graph.add(Term("国人", 1, 3, PosTag.NOUN))
        assert [t.surface for t in graph.edges_from(0)] == ["中国"]
        assert sorted(t.surface for t in graph.edges_to(3)) == ["人", "国人"]

    def test_validate_missing_edge(self):
        graph = TermGraph("中国人")
        graph.add(Term("中", 0, 1, PosTag.DIRECTION))
        graph.add(Term("人", 2, 3, PosTag.NOUN))
        with pytest.raises(PipelineInvariantError, match="No outgoing edge"):
            graph.validate()

    def test_validate_unreachable(self):
        graph = TermGraph("中国人")
        graph.add(Term("中国人", 0, 3, PosTag.NOUN))
        graph.add(Term("国", 1, 2, PosTag.NOUN))
        graph.add(Term("人", 2, 3, PosTag.NOUN))
        with pytest.raises(PipelineInvariantError, match="not on a BOS-to-EOS path"):
            graph.validate()

    def test_single_adds_fallback(self):
        graph = TermGraph("中国")
        graph.add(Term("中国", 0, 2, PosTag.PLACE))
        single = graph.single(1)
        assert single.surface == "国"
        assert single.tag is PosTag.UNKNOWN
        assert graph.single(1) is single

    def test_from_path(self):
        path = make_path(("他", "r"), ("来自", "v"))
        graph = TermGraph.from_path(path)
        graph.validate()
        assert graph.origin is path
        assert graph.default_path() is path
        assert {t.surface for t in graph.terms()} == {"他", "来自", "来", "自"}

    def test_default_path_is_greedy(self):
        graph = TermGraph("他来自")
        for term in (
            Term("他", 0, 1, PosTag.PRONOUN),
            Term("来", 1, 2, PosTag.VERB),
            Term("来自", 1, 3, PosTag.VERB),
            Term("自", 2, 3, PosTag.PREPOSITION),
        ):
            graph.add(term)
        assert [t.surface for t in graph.default_path().content] == ["他", "来自"]
