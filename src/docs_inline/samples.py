"""
Sample repository addressing and fetching.

``SampleRepository`` turns a repository-relative file path into a raw
content URL (what we fetch) and a browsable URL (what we link to).
``SampleFetcher`` performs the fetch with httpx and never raises for
transport problems: an unreachable file is a normal answer.

Manifesto:
    A sample file that cannot be fetched is something a human should see
    in the document, not a crash. The fetcher converts transport errors
    and non-success statuses into a response with no body.

Architecture:
    ```
    SnippetReference.filepath (+ repo override)
          │
          ▼
    SampleRepository.raw_url() ──► SampleFetcher.fetch()
          │                              │
          ▼                              ▼
    browse_url(lines=(s, e))       FetchResponse(status, body | None)
    ```

Tags:
    - http
    - httpx
    - sample-repository
"""

from __future__ import annotations

from dataclasses import dataclass, replace

import httpx

from docs_inline.config import InlineConfig
from docs_inline.grammar.reference import RepoRef
from docs_inline.logging import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class SampleRepository:
    """Address files in one sample repository.

    Attributes:
        repo: Owner and name
        branch: Branch to read from
        raw_base_url: Base URL serving raw content
        web_base_url: Base URL of the browsable UI
    """

    repo: RepoRef
    branch: str = "master"
    raw_base_url: str = "https://raw.githubusercontent.com"
    web_base_url: str = "https://github.com"

    @classmethod
    def from_config(cls, config: InlineConfig) -> "SampleRepository":
        return cls(
            repo=RepoRef(config.sample_owner, config.sample_repo),
            branch=config.sample_branch,
            raw_base_url=config.raw_base_url,
            web_base_url=config.web_base_url,
        )

    def with_repo(self, repo: RepoRef | None) -> "SampleRepository":
        """Same addressing against another repository; None keeps this one."""
        if repo is None:
            return self
        return replace(self, repo=repo)

    def raw_url(self, filepath: str) -> str:
        return f"{self.raw_base_url}/{self.repo}/{self.branch}/{filepath.lstrip('/')}"

    def browse_url(self, filepath: str, lines: tuple[int, int] | None = None) -> str:
        url = f"{self.web_base_url}/{self.repo}/tree/{self.branch}/{filepath.lstrip('/')}"
        if lines is not None:
            url += f"#L{lines[0]}-L{lines[1]}"
        return url


@dataclass(frozen=True)
class FetchResponse:
    """Result of fetching a sample file.

    ``body`` is None when the file could not be retrieved; ``status`` then
    holds the HTTP status or the transport error message.
    """

    status: int | str
    body: str | None

    @property
    def ok(self) -> bool:
        return bool(self.body)


class SampleFetcher:
    """
    Fetch sample files over HTTP.

    Responses are memoized by URL for the lifetime of the fetcher, so a
    sample file referenced from several blocks is requested once per run.

    Usage:
        async with SampleFetcher(timeout=10) as fetcher:
            response = await fetcher.fetch(url)
    """

    def __init__(
        self,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._client = httpx.AsyncClient(
            timeout=timeout,
            transport=transport,
            follow_redirects=True,
        )
        self._cache: dict[str, FetchResponse] = {}

    async def __aenter__(self) -> "SampleFetcher":
        return self

    async def __aexit__(self, *args) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def fetch(self, url: str) -> FetchResponse:
        """GET *url*; never raises for transport or HTTP errors."""
        if url in self._cache:
            return self._cache[url]

        try:
            resp = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.error("sample_fetch_failed", url=url, error=str(e))
            response = FetchResponse(status=str(e) or type(e).__name__, body=None)
        else:
            if resp.is_success:
                response = FetchResponse(status=resp.status_code, body=resp.text)
            else:
                logger.error("sample_fetch_failed", url=url, status=resp.status_code)
                response = FetchResponse(status=resp.status_code, body=None)

        self._cache[url] = response
        return response
