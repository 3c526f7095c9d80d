"""Project file stores.

The reconciler only needs three capabilities from the repository it edits:
list files by glob, read text, write text. ``LocalProject`` serves a
directory on disk; ``InMemoryProject`` serves a dict and is handy for
embedding and tests.
"""

from abc import ABC, abstractmethod
from pathlib import Path, PurePosixPath
from typing import Iterator

from docs_inline.errors import ProjectPathError
from docs_inline.logging import get_logger

logger = get_logger(__name__)


class Project(ABC):
    """Abstract base class for file stores."""

    @abstractmethod
    def paths(self, glob: str) -> Iterator[str]:
        """
        List files matching a glob.

        Args:
            glob: Pattern relative to the project root (e.g., "**/*.md")

        Yields:
            Project-relative POSIX paths, sorted
        """
        ...

    @abstractmethod
    def read_text(self, path: str) -> str:
        """
        Read full text content.

        Raises:
            FileNotFoundError: If file doesn't exist
        """
        ...

    @abstractmethod
    def write_text(self, path: str, content: str) -> None:
        """Replace the full text content of a file."""
        ...


class LocalProject(Project):
    """
    Project rooted at a directory on the local filesystem.

    Paths are project-relative; anything resolving outside the root is
    refused.
    """

    def __init__(self, root: str | Path = "."):
        self.root = Path(root).resolve()

    def _resolve_path(self, path: str) -> Path:
        """Resolve a project path to an absolute filesystem path."""
        clean_path = Path(path).as_posix().lstrip("/")
        full_path = self.root / clean_path

        try:
            full_path.resolve().relative_to(self.root)
        except ValueError:
            raise ProjectPathError(f"Invalid path: {path} (outside project root)")

        return full_path

    def paths(self, glob: str) -> Iterator[str]:
        matches = sorted(p for p in self.root.glob(glob) if p.is_file())
        for file_path in matches:
            yield file_path.relative_to(self.root).as_posix()

    def read_text(self, path: str) -> str:
        full_path = self._resolve_path(path)

        if not full_path.is_file():
            raise FileNotFoundError(f"File not found: {path}")

        return full_path.read_text(encoding="utf-8")

    def write_text(self, path: str, content: str) -> None:
        full_path = self._resolve_path(path)
        full_path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps the document's own line endings
        with open(full_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.info("file_written", path=path, size=len(content))


class InMemoryProject(Project):
    """Project held in a dict of path -> content."""

    def __init__(self, files: dict[str, str] | None = None):
        self.files: dict[str, str] = dict(files or {})
        self.writes: list[str] = []

    @classmethod
    def of(cls, **files: str) -> "InMemoryProject":
        """Build from keyword arguments; ``__`` in a name stands for ``/``."""
        return cls({name.replace("__", "/"): content for name, content in files.items()})

    def paths(self, glob: str) -> Iterator[str]:
        for path in sorted(self.files):
            if _glob_match(path, glob):
                yield path

    def read_text(self, path: str) -> str:
        try:
            return self.files[path]
        except KeyError:
            raise FileNotFoundError(f"File not found: {path}") from None

    def write_text(self, path: str, content: str) -> None:
        self.files[path] = content
        self.writes.append(path)


def _glob_match(path: str, glob: str) -> bool:
    pure = PurePosixPath(path)
    if pure.match(glob):
        return True
    # PurePath.match needs at least one directory for a leading "**/"
    if glob.startswith("**/"):
        return pure.match(glob[3:])
    return False
