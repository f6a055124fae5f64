"""Tests for DocumentRepository catalog builds."""

import logging

import pytest

from prepkb.domain.metadata import Difficulty
from prepkb.errors import CatalogLoadError, DuplicateTopicError
from prepkb.storage.repository import DocumentRepository
from prepkb.tests.conftest import write_topic


class TestLoadAll:
    """Test walking the content tree."""

    def test_builds_categories_and_topics(self, content_root):
        catalog = DocumentRepository(content_root).load_all()

        assert [c.slug for c in catalog.categories] == ["databases", "security"]
        assert catalog.get_category("databases").topic_slugs == (
            "nosql-interview-questions",
            "sql-interview-questions",
        )
        assert len(catalog) == 3

    def test_document_fields(self, catalog):
        doc = catalog.get("databases", "sql-interview-questions")

        assert doc.category == "databases"
        assert doc.slug == "sql-interview-questions"
        assert doc.path == "databases/sql-interview-questions.md"
        assert doc.title == "SQL Interview Questions"
        assert doc.difficulty is Difficulty.INTERMEDIATE
        assert doc.metadata.estimated_read_time == 20
        assert doc.tags == frozenset({"sql", "performance"})
        assert doc.body.startswith("# SQL")
        assert "---" not in doc.body

    def test_stats_for_clean_tree(self, catalog):
        assert catalog.stats.total == 3
        assert catalog.stats.loaded == 3
        assert catalog.stats.skipped == 0
        assert catalog.stats.errors == ()

    def test_root_argument_overrides_constructor(self, content_root, tmp_path):
        catalog = DocumentRepository(tmp_path / "elsewhere").load_all(content_root)

        assert len(catalog) == 3

    def test_missing_root_is_fatal(self, tmp_path):
        with pytest.raises(CatalogLoadError, match="not found"):
            DocumentRepository(tmp_path / "missing").load_all()

    def test_root_that_is_a_file_is_fatal(self, tmp_path):
        path = tmp_path / "file.md"
        path.write_text("x", encoding="utf-8")

        with pytest.raises(CatalogLoadError, match="not a directory"):
            DocumentRepository(path).load_all()

    def test_empty_root_gives_empty_catalog(self, tmp_path):
        catalog = DocumentRepository(tmp_path).load_all()

        assert len(catalog) == 0
        assert catalog.categories == ()


class TestDiscovery:
    """Test which files become topics."""

    def test_ignores_non_markdown_hidden_and_root_files(self, tmp_path):
        write_topic(tmp_path, "databases", "sql", "title: SQL")
        (tmp_path / "databases" / "notes.txt").write_text("x", encoding="utf-8")
        (tmp_path / "databases" / "README.md").write_text("# readme", encoding="utf-8")
        (tmp_path / "root-level.md").write_text("# root", encoding="utf-8")
        write_topic(tmp_path, ".drafts", "draft", "title: Draft")
        write_topic(tmp_path, "databases", "_partial", "title: Partial")

        catalog = DocumentRepository(tmp_path).load_all()

        assert [doc.key for doc in catalog] == [("databases", "sql")]

    def test_category_is_immediate_parent(self, tmp_path):
        write_topic(tmp_path / "backend", "caching", "redis", "title: Redis")

        catalog = DocumentRepository(tmp_path).load_all()

        assert ("caching", "redis") in catalog

    def test_file_without_frontmatter_uses_defaults(self, tmp_path):
        write_topic(tmp_path, "devops", "docker-basics", body="# Docker\n")

        doc = DocumentRepository(tmp_path).load_all().get("devops", "docker-basics")

        assert doc.title == "Docker Basics"
        assert doc.difficulty is Difficulty.UNSPECIFIED
        assert doc.body == "# Docker\n"

    def test_custom_extensions(self, tmp_path):
        write_topic(tmp_path, "devops", "docker", "title: Docker")
        path = tmp_path / "devops" / "k8s.mdx"
        path.write_text("---\ntitle: K8s\n---\nbody", encoding="utf-8")

        catalog = DocumentRepository(tmp_path, file_extensions=[".md", ".mdx"]).load_all()

        assert ("devops", "k8s") in catalog
        assert ("devops", "docker") in catalog


class TestFailurePolicy:
    """Malformed files are skipped by default and fatal in strict mode."""

    def _tree_with_bad_file(self, root):
        write_topic(root, "databases", "sql", "title: SQL")
        bad = root / "databases" / "broken.md"
        bad.write_text("---\ntitle: [unclosed\n---\nbody", encoding="utf-8")
        return bad

    def test_malformed_file_is_skipped_and_recorded(self, tmp_path, caplog):
        self._tree_with_bad_file(tmp_path)

        with caplog.at_level(logging.WARNING, logger="prepkb"):
            catalog = DocumentRepository(tmp_path).load_all()

        assert ("databases", "sql") in catalog
        assert ("databases", "broken") not in catalog
        assert catalog.stats.total == 2
        assert catalog.stats.skipped == 1
        assert catalog.stats.errors[0]["path"] == "databases/broken.md"
        assert "Skipping databases/broken.md" in caplog.text

    def test_bad_metadata_type_is_skipped(self, tmp_path):
        write_topic(tmp_path, "databases", "sql", "title: SQL\nestimatedReadTime: soon")

        catalog = DocumentRepository(tmp_path).load_all()

        assert len(catalog) == 0
        assert "estimatedReadTime" in catalog.stats.errors[0]["error"]

    def test_non_utf8_file_is_skipped(self, tmp_path):
        write_topic(tmp_path, "databases", "sql", "title: SQL")
        (tmp_path / "databases" / "latin.md").write_bytes(b"---\ntitle: caf\xe9\n---\n")

        catalog = DocumentRepository(tmp_path).load_all()

        assert len(catalog) == 1
        assert catalog.stats.errors[0]["path"] == "databases/latin.md"

    def test_invalid_slug_is_skipped(self, tmp_path):
        write_topic(tmp_path, "databases", "sql", "title: SQL")
        (tmp_path / "databases" / "bad name.md").write_text("# x", encoding="utf-8")

        catalog = DocumentRepository(tmp_path).load_all()

        assert len(catalog) == 1
        assert catalog.stats.skipped == 1

    def test_strict_mode_fails_the_build(self, tmp_path):
        self._tree_with_bad_file(tmp_path)

        with pytest.raises(CatalogLoadError, match="broken.md"):
            DocumentRepository(tmp_path, strict=True).load_all()


class TestDuplicates:
    def test_duplicate_slug_is_a_build_error(self, tmp_path):
        write_topic(tmp_path, "databases", "sql", "title: SQL")
        write_topic(tmp_path / "archive", "databases", "sql", "title: Old SQL")

        with pytest.raises(DuplicateTopicError) as exc_info:
            DocumentRepository(tmp_path).load_all()

        assert exc_info.value.key == ("databases", "sql")
        assert sorted(exc_info.value.paths) == ["archive/databases/sql.md", "databases/sql.md"]

    def test_duplicate_across_extensions(self, tmp_path):
        write_topic(tmp_path, "databases", "sql", "title: SQL")
        (tmp_path / "databases" / "sql.markdown").write_text("# SQL", encoding="utf-8")

        repository = DocumentRepository(tmp_path, file_extensions=[".md", ".markdown"])

        with pytest.raises(DuplicateTopicError):
            repository.load_all()


class TestCategoryPresentation:
    def test_builtin_and_derived_titles(self, tmp_path):
        write_topic(tmp_path, "devops", "docker", "title: Docker")
        write_topic(tmp_path, "message-queues", "kafka", "title: Kafka")

        catalog = DocumentRepository(tmp_path).load_all()

        devops = catalog.get_category("devops")
        queues = catalog.get_category("message-queues")
        assert devops.title == "DevOps & Infrastructure"
        assert devops.description.startswith("Docker, Kubernetes")
        assert queues.title == "Message Queues"
        assert queues.description == "Comprehensive coverage of Message Queues topics."

    def test_overrides_and_order(self, tmp_path):
        for category in ("alpha", "beta", "gamma"):
            write_topic(tmp_path, category, "topic", "title: T")

        catalog = DocumentRepository(
            tmp_path,
            category_order=["gamma"],
            category_titles={"beta": "Second"},
            category_descriptions={"beta": "About beta"},
        ).load_all()

        assert [c.slug for c in catalog.categories] == ["gamma", "alpha", "beta"]
        assert catalog.get_category("beta").title == "Second"
        assert catalog.get_category("beta").description == "About beta"


class TestListing:
    def test_get_categories_builds_on_first_use(self, content_root):
        repository = DocumentRepository(content_root)

        categories = repository.get_categories()

        assert [c.slug for c in categories] == ["databases", "security"]

    def test_get_all_topics_returns_summaries(self, content_root):
        topics = DocumentRepository(content_root).get_all_topics()

        assert len(topics) == 3
        assert all(not hasattr(t, "body") for t in topics)

    def test_from_config(self, content_root):
        from prepkb.config import AppConfig, ContentConfig

        config = AppConfig(content=ContentConfig(root=str(content_root)))

        catalog = DocumentRepository.from_config(config).load_all()

        assert len(catalog) == 3
