"""
Configuration for docs-inline.

Holds the repository-wide settings the reconciler needs: which sample
repository to inline from, how to address it, and which Markdown files to
scan. Passed explicitly into the reconciler, never read from module state.
"""

from dataclasses import dataclass, field, fields
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from docs_inline.errors import ConfigError


@dataclass
class InlineConfig:
    """Configuration for the snippet inlining run.

    Attributes:
        project_root: Root directory holding the Markdown documents
        markdown_glob: Glob selecting documents to reconcile
        skip_patterns: Directory or file names to skip when scanning
        sample_owner: Owner of the default sample repository
        sample_repo: Name of the default sample repository
        sample_branch: Branch sample files are read from
        raw_base_url: Base URL serving raw file content
        web_base_url: Base URL for browsable source links
        fence_language: Language tag for inlined code fences
        fence_languages: Per-extension overrides for the fence language
        fetch_timeout: Seconds before a sample fetch gives up
    """

    project_root: Path = field(default_factory=lambda: Path("."))
    markdown_glob: str = "**/*.md"
    skip_patterns: list[str] = field(default_factory=lambda: [
        "node_modules", ".git", "site", ".venv",
    ])

    # Default sample repository
    sample_owner: str = "atomist"
    sample_repo: str = "samples"
    sample_branch: str = "master"
    raw_base_url: str = "https://raw.githubusercontent.com"
    web_base_url: str = "https://github.com"

    # Rendering
    fence_language: str = "typescript"
    fence_languages: dict[str, str] = field(default_factory=dict)

    fetch_timeout: float = 30.0

    def __post_init__(self):
        """Convert paths to Path objects if strings."""
        if isinstance(self.project_root, str):
            self.project_root = Path(self.project_root)
        self.raw_base_url = self.raw_base_url.rstrip("/")
        self.web_base_url = self.web_base_url.rstrip("/")

    @classmethod
    def from_yaml(cls, yaml_path: Path) -> "InlineConfig":
        """Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Raises:
            ConfigError: If the file cannot be read or has unknown keys
        """
        try:
            with open(yaml_path, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigError(f"Cannot load config {yaml_path}: {e}", cause=e) from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config {yaml_path} must be a mapping")

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "InlineConfig":
        """Create config from dictionary.

        Raises:
            ConfigError: If the dictionary has unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")
        return cls(**data)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "project_root": str(self.project_root),
            "markdown_glob": self.markdown_glob,
            "skip_patterns": self.skip_patterns,
            "sample_owner": self.sample_owner,
            "sample_repo": self.sample_repo,
            "sample_branch": self.sample_branch,
            "raw_base_url": self.raw_base_url,
            "web_base_url": self.web_base_url,
            "fence_language": self.fence_language,
            "fence_languages": self.fence_languages,
            "fetch_timeout": self.fetch_timeout,
        }

    def should_skip(self, path: str) -> bool:
        """Check if a document path should be skipped during scanning.

        Patterns match whole path segments, so `site` skips `site/index.md`
        but not `docs/website.md`.
        """
        return any(part in self.skip_patterns for part in PurePosixPath(path).parts)

    def fence_language_for(self, sample_filepath: str) -> str:
        """Language tag for a code fence holding content from *sample_filepath*."""
        suffix = Path(sample_filepath).suffix
        return self.fence_languages.get(suffix, self.fence_language)

