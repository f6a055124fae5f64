"""Tests for the related-topic ranking."""

import pytest

from prepkb.domain.document import Document
from prepkb.domain.metadata import Difficulty, TopicMetadata
from prepkb.retrieval.related import (
    RelatedWeights,
    related_summaries,
    related_to,
    score_candidate,
)
from prepkb.storage.catalog import Catalog


def make_doc(category, slug, tags=(), difficulty=Difficulty.UNSPECIFIED):
    return Document(
        category=category,
        slug=slug,
        metadata=TopicMetadata(title=slug, tags=frozenset(tags), difficulty=difficulty),
        path=f"{category}/{slug}.md",
    )


class TestScenario:
    """Databases/security scenario from the site's content tree."""

    def test_same_category_and_tag_ranks_first(self, catalog):
        source = catalog.get("databases", "sql-interview-questions")

        related = related_to(source, catalog, limit=3)

        assert [r.topic.slug for r in related] == ["nosql-interview-questions"]
        assert related[0].score == 3 + 2
        assert related[0].shared_tags == ("performance",)

    def test_security_topic_has_no_shared_signal(self, catalog):
        source = catalog.get("security", "security-monitoring-interview-questions")

        assert related_to(source, catalog, limit=3) == []


class TestRanking:
    def test_source_is_excluded(self):
        source = make_doc("a", "x", tags=["t"])
        catalog = Catalog.from_documents([source, make_doc("a", "y", tags=["t"])])

        keys = [r.topic.key for r in related_to(source, catalog)]

        assert ("a", "x") not in keys
        assert keys == [("a", "y")]

    def test_same_slug_in_other_category_is_not_excluded(self):
        source = make_doc("a", "intro", tags=["t"])
        catalog = Catalog.from_documents([source, make_doc("b", "intro", tags=["t"])])

        assert [r.topic.key for r in related_to(source, catalog)] == [("b", "intro")]

    def test_scores_and_order(self):
        source = make_doc("db", "sql", tags=["sql", "perf"], difficulty=Difficulty.INTERMEDIATE)
        docs = [
            source,
            make_doc("db", "nosql", tags=["perf"]),  # 3 + 2
            make_doc("db", "orm", difficulty=Difficulty.INTERMEDIATE),  # 3 + 1
            make_doc("perf", "tuning", tags=["sql", "perf"]),  # 2 + 2
            make_doc("perf", "caching", tags=["perf"]),  # 2
            make_doc("security", "auth"),  # no signal
        ]
        catalog = Catalog.from_documents(docs)

        related = related_to(source, catalog, limit=10)

        assert [(r.topic.slug, r.score) for r in related] == [
            ("nosql", 5),
            ("orm", 4),
            ("tuning", 4),
            ("caching", 2),
        ]

    def test_ties_break_by_category_then_slug(self):
        source = make_doc("m", "src", tags=["t"])
        docs = [source] + [make_doc(c, s, tags=["t"]) for c, s in [("z", "a"), ("b", "z"), ("b", "a")]]
        catalog = Catalog.from_documents(docs)

        keys = [r.topic.key for r in related_to(source, catalog)]

        assert keys == [("b", "a"), ("b", "z"), ("z", "a")]

    def test_unspecified_difficulty_gives_no_bonus(self):
        source = make_doc("a", "x")
        candidate = make_doc("a", "y")

        score, _ = score_candidate(source, candidate, RelatedWeights())

        assert score == 3

    def test_deterministic(self, catalog):
        source = catalog.get("databases", "nosql-interview-questions")

        first = related_to(source, catalog)
        second = related_to(source, catalog)

        assert first == second

    def test_more_shared_tags_never_rank_lower(self):
        source = make_doc("src", "s", tags=["a", "b", "c"])
        fewer = make_doc("other", "aaa", tags=["a"])
        more = make_doc("other", "zzz", tags=["a", "b"])
        catalog = Catalog.from_documents([source, fewer, more])

        keys = [r.topic.slug for r in related_to(source, catalog)]

        assert keys.index("zzz") < keys.index("aaa")

    @pytest.mark.parametrize("extra_tags", [1, 2, 3])
    def test_adding_a_tag_never_decreases_score(self, extra_tags):
        tags = ["t0", "t1", "t2", "t3"]
        source = make_doc("a", "src", tags=tags)
        weights = RelatedWeights(same_category=1, shared_tag=1, same_difficulty=0)

        before, _ = score_candidate(source, make_doc("a", "c", tags=tags[:extra_tags]), weights)
        after, _ = score_candidate(source, make_doc("a", "c", tags=tags[: extra_tags + 1]), weights)

        assert after >= before


class TestLimits:
    def _catalog(self, count):
        source = make_doc("a", "src")
        return source, Catalog.from_documents([source] + [make_doc("a", f"t{i}") for i in range(count)])

    def test_truncates_to_limit(self):
        source, catalog = self._catalog(8)

        assert len(related_to(source, catalog, limit=3)) == 3

    def test_default_limit(self):
        source, catalog = self._catalog(8)

        assert len(related_to(source, catalog)) == 5

    def test_fewer_candidates_than_limit(self):
        source, catalog = self._catalog(2)

        assert len(related_to(source, catalog, limit=6)) == 2

    def test_zero_limit(self):
        source, catalog = self._catalog(2)

        assert related_to(source, catalog, limit=0) == []

    def test_single_document_catalog(self):
        source, catalog = self._catalog(0)

        assert related_to(source, catalog) == []


def test_related_summaries(catalog):
    source = catalog.get("databases", "sql-interview-questions")

    summaries = related_summaries(source, catalog)

    assert [s.key for s in summaries] == [("databases", "nosql-interview-questions")]


def test_negative_weights_are_rejected():
    with pytest.raises(ValueError):
        RelatedWeights(shared_tag=-1)


def test_custom_weights():
    source = make_doc("a", "src", tags=["t"])
    catalog = Catalog.from_documents(
        [source, make_doc("a", "same-cat"), make_doc("b", "tagged", tags=["t"])]
    )

    related = related_to(source, catalog, weights=RelatedWeights(same_category=1, shared_tag=5))

    assert [r.topic.slug for r in related] == ["tagged", "same-cat"]
