"""Tests for configuration, file stores, sample addressing and reporting."""

import httpx
import pytest

from docs_inline.config import InlineConfig
from docs_inline.errors import ConfigError, ErrorCategory, ProjectPathError
from docs_inline.grammar.reference import RepoRef
from docs_inline.project import InMemoryProject, LocalProject
from docs_inline.reconcile import Disposition, OutcomeLocation, ReconciliationOutcome
from docs_inline.report import report_outcomes, summary_sections
from docs_inline.samples import SampleFetcher, SampleRepository
from docs_inline.settings import DocsInlineSettings

from helpers import RAW


# =============================================================================
# Configuration Tests
# =============================================================================

class TestInlineConfig:
    """Tests for InlineConfig."""

    def test_defaults(self):
        config = InlineConfig()

        assert config.sample_owner == "atomist"
        assert config.sample_repo == "samples"
        assert config.markdown_glob == "**/*.md"

    def test_from_yaml(self, tmp_path):
        """Test loading configuration from YAML."""
        path = tmp_path / "docs-inline.yaml"
        path.write_text(
            "sample_owner: acme\n"
            "sample_repo: widgets\n"
            "raw_base_url: https://raw.example.com/\n"
            "fence_languages:\n"
            "  .py: python\n"
        )
        config = InlineConfig.from_yaml(path)

        assert config.sample_owner == "acme"
        assert config.raw_base_url == "https://raw.example.com"
        assert config.fence_language_for("tools/run.py") == "python"
        assert config.fence_language_for("lib/a.ts") == "typescript"

    def test_unknown_keys_rejected(self):
        with pytest.raises(ConfigError, match="sample_ownr"):
            InlineConfig.from_dict({"sample_ownr": "acme"})

    def test_unreadable_yaml(self, tmp_path):
        with pytest.raises(ConfigError) as exc_info:
            InlineConfig.from_yaml(tmp_path / "missing.yaml")

        assert exc_info.value.category is ErrorCategory.CONFIG
        assert exc_info.value.to_dict()["error_type"] == "ConfigError"

    def test_to_dict_round_trip(self):
        config = InlineConfig(sample_branch="main", fetch_timeout=5.0)

        assert InlineConfig.from_dict(config.to_dict()) == config

    def test_should_skip(self):
        config = InlineConfig()

        assert config.should_skip("node_modules/x/README.md")
        assert not config.should_skip("docs/index.md")

    def test_should_skip_matches_whole_segments(self):
        config = InlineConfig()

        assert config.should_skip("site/index.md")
        assert config.should_skip("docs/.git/notes.md")
        assert not config.should_skip("docs/developer/website.md")
        assert not config.should_skip("docs/composite-goals.md")
        assert not config.should_skip(".github/CONTRIBUTING.md")


class TestSettings:
    """Tests for DocsInlineSettings."""

    def test_reads_environment(self, monkeypatch, tmp_path):
        monkeypatch.chdir(tmp_path)
        monkeypatch.setenv("DOCS_INLINE_LOG_LEVEL", "DEBUG")
        monkeypatch.setenv("DOCS_INLINE_CONFIG_FILE", "conf.yaml")

        settings = DocsInlineSettings()

        assert settings.log_level == "DEBUG"
        assert str(settings.config_file) == "conf.yaml"
        assert settings.log_format == "console"


# =============================================================================
# Project Tests
# =============================================================================

class TestLocalProject:
    """Tests for LocalProject."""

    def test_paths_read_write(self, tmp_path):
        (tmp_path / "docs").mkdir()
        (tmp_path / "docs" / "a.md").write_text("A")
        (tmp_path / "README.md").write_text("R")
        (tmp_path / "notes.txt").write_text("N")
        project = LocalProject(tmp_path)

        assert list(project.paths("**/*.md")) == ["README.md", "docs/a.md"]
        assert project.read_text("docs/a.md") == "A"

        project.write_text("docs/a.md", "B")
        assert (tmp_path / "docs" / "a.md").read_text() == "B"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            LocalProject(tmp_path).read_text("nope.md")

    def test_path_outside_root(self, tmp_path):
        with pytest.raises(ProjectPathError):
            LocalProject(tmp_path / "root").read_text("../escape.md")


class TestInMemoryProject:
    """Tests for InMemoryProject."""

    def test_glob_matches_root_and_nested(self):
        project = InMemoryProject({"README.md": "", "docs/a.md": "", "docs/b.txt": ""})

        assert list(project.paths("**/*.md")) == ["README.md", "docs/a.md"]
        assert list(project.paths("docs/*.txt")) == ["docs/b.txt"]

    def test_of(self):
        project = InMemoryProject.of(docs__index_md="x")

        assert project.read_text("docs/index_md") == "x"

    def test_write_recorded(self):
        project = InMemoryProject()
        project.write_text("a.md", "x")

        assert project.files == {"a.md": "x"}
        assert project.writes == ["a.md"]


# =============================================================================
# Sample Repository Tests
# =============================================================================

class TestSampleRepository:
    """Tests for SampleRepository addressing."""

    @pytest.fixture
    def samples(self, config):
        return SampleRepository.from_config(config)

    def test_raw_url(self, samples):
        assert samples.raw_url("lib/sdm/dotnetCore.ts") == f"{RAW}/lib/sdm/dotnetCore.ts"

    def test_browse_url_with_lines(self, samples):
        assert samples.browse_url("lib/a.ts", (3, 7)) == (
            "https://github.com/atomist/samples/tree/master/lib/a.ts#L3-L7"
        )

    def test_with_repo(self, samples):
        other = samples.with_repo(RepoRef("acme", "widgets"))

        assert other.raw_url("a.ts") == "https://raw.githubusercontent.com/acme/widgets/master/a.ts"
        assert samples.with_repo(None) is samples


class TestSampleFetcher:
    """Tests for SampleFetcher."""

    @pytest.mark.asyncio
    async def test_success(self, sample_server):
        async with sample_server.fetcher() as fetcher:
            response = await fetcher.fetch(f"{RAW}/lib/sdm/dotnetCore.ts")

        assert response.ok
        assert response.status == 200
        assert "dotnetGenerator" in response.body

    @pytest.mark.asyncio
    async def test_not_found_has_no_body(self, sample_server):
        async with sample_server.fetcher() as fetcher:
            response = await fetcher.fetch(f"{RAW}/nope.ts")

        assert not response.ok
        assert response.status == 404
        assert response.body is None

    @pytest.mark.asyncio
    async def test_empty_body_is_not_ok(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text=""))
        async with SampleFetcher(transport=transport) as fetcher:
            response = await fetcher.fetch("https://example.com/empty.ts")

        assert not response.ok

    @pytest.mark.asyncio
    async def test_transport_error_is_caught(self, sample_server):
        url = f"{RAW}/lib/sdm/dotnetCore.ts"
        sample_server.unreachable.add(url)
        async with sample_server.fetcher() as fetcher:
            response = await fetcher.fetch(url)

        assert response.body is None
        assert "connection refused" in response.status

    @pytest.mark.asyncio
    async def test_responses_memoized(self, sample_server):
        url = f"{RAW}/lib/sdm/dotnetCore.ts"
        async with sample_server.fetcher() as fetcher:
            first = await fetcher.fetch(url)
            second = await fetcher.fetch(url)

        assert first is second
        assert sample_server.requested == [url]


# =============================================================================
# Report Tests
# =============================================================================

def outcome(disposition, name="snip", sample="lib/a.ts", markdown="docs/a.md", edited=True):
    return ReconciliationOutcome(
        disposition=disposition,
        location=OutcomeLocation(markdown, sample, name),
        edited=edited,
    )


class TestReport:
    """Tests for the end-of-run summary."""

    def test_all_sections(self):
        sections = summary_sections([
            outcome(Disposition.REPLACE, name="one"),
            outcome(Disposition.SAMPLE_FILE_NOT_FOUND, name="two", sample="lib/gone.ts"),
            outcome(Disposition.SNIPPET_NOT_FOUND, name="three"),
            outcome(Disposition.REPLACE, name="four", markdown="docs/b.md", edited=False),
        ])

        assert sections == [
            "Snippets replaced:\n"
            "name: one from file: lib/a.ts in markdown: docs/a.md\n"
            "name: four from file: lib/a.ts in markdown: docs/b.md",
            "Files not found:\nname: two in nonexistent file: lib/gone.ts",
            "Snippets not found:\nname: three in file: lib/a.ts",
        ]

    def test_empty_sections_omitted(self):
        assert summary_sections([outcome(Disposition.SNIPPET_NOT_FOUND)]) == [
            "Snippets not found:\nname: snip in file: lib/a.ts",
        ]
        assert summary_sections([]) == []

    def test_report_writes_each_section(self):
        lines = []
        report_outcomes([outcome(Disposition.REPLACE), outcome(Disposition.SNIPPET_NOT_FOUND)], lines.append)

        assert len(lines) == 2
