"""
docs-inline

Keeps code samples in Markdown documentation in step with a sample
repository. Reference blocks in the docs name a region of a sample file;
the reconciler fetches the file, extracts the region and rewrites the
block when it is stale.

Example:
    >>> import asyncio
    >>> from docs_inline import InlineConfig, LocalProject, Reconciler, SampleFetcher
    >>> async def main():
    ...     async with SampleFetcher() as fetcher:
    ...         return await Reconciler(InlineConfig(), fetcher).run(LocalProject("."))
    >>> asyncio.run(main()).edited
"""

__version__ = "0.1.0"

from docs_inline.config import InlineConfig
from docs_inline.grammar import (
    RepoRef,
    SnippetFound,
    SnippetReference,
    find_snippet,
    iter_references,
)
from docs_inline.project import InMemoryProject, LocalProject, Project
from docs_inline.reconcile import (
    Disposition,
    InlineResult,
    ReconciliationOutcome,
    Reconciler,
)
from docs_inline.samples import FetchResponse, SampleFetcher, SampleRepository

__all__ = [
    "InlineConfig",
    "RepoRef",
    "SnippetFound",
    "SnippetReference",
    "find_snippet",
    "iter_references",
    "InMemoryProject",
    "LocalProject",
    "Project",
    "Disposition",
    "InlineResult",
    "ReconciliationOutcome",
    "Reconciler",
    "FetchResponse",
    "SampleFetcher",
    "SampleRepository",
    "__version__",
]
