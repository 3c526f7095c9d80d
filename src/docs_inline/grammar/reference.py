"""
Reference grammar for snippet blocks in Markdown.

A reference block points at a named snippet in a sample repository and
holds the text currently inlined for it, plus the diagnostic and source
link written by the previous run:

    <!-- atomist:code-snippet:start=lib/sdm/dotnetCore.ts#dotnetGenerator -->
    ```typescript
    ...
    ```
    <!-- atomist:docs-sdm:codeSnippetInline: Snippet 'dotnetGenerator' found in ... -->
    <div class="sample-code"><a href="..." target="_blank">Source</a></div>
    <!-- atomist:code-snippet:end -->

Manifesto:
    One broken block must not hide the rest of the page. The scanner tries
    a full-block match at every start marker and moves on to the next
    start marker when one fails, so an unresolved placeholder early in a
    document never swallows a well-formed block after it.

Architecture:
    ```
    document text
          │
          ▼
    _START_MARKER.search(pos) ──► candidate offset
          │
          ▼
    _BLOCK.match(candidate) ──┬──► SnippetReference (yield, pos = end)
                              └──► no match        (pos = marker end)
    ```

Guardrails:
    - Do NOT raise on malformed input
      ✅ Skip the candidate and keep scanning
    - Do NOT normalise the body
      ✅ Keep it verbatim; callers trim for comparison

Tags:
    - grammar
    - markdown
    - parser

Doc-Types:
    - API_REFERENCE (section: "Grammar Module", priority: 9)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterator

BLOCK_START = "<!-- atomist:code-snippet:start="
BLOCK_END = "<!-- atomist:code-snippet:end -->"
DIAGNOSTIC_PREFIX = "<!-- atomist:docs-sdm:codeSnippetInline:"

_START_MARKER = re.compile(r"<!--\s*atomist:code-snippet:start=")

_BLOCK = re.compile(
    r"<!--\s*atomist:code-snippet:start="
    r"(?P<filepath>[^#\s]+)"
    r"#(?P<name>[^@\s]+?)"
    r"(?:@(?P<owner>[^/\s]+)/(?P<repo>[^/\s]+?))?"
    r"\s*-->"
    # Body: everything up to the next marker-introducing token
    r"(?P<body>(?:(?!<!--\s*atomist:)[\s\S])*)"
    r"(?:<!--\s*atomist:docs-sdm:codeSnippetInline:"
    r"(?P<diagnostic>(?:(?!-->)[\s\S])*)-->)?"
    r"\s*"
    r"(?:<div\s+class=\"sample-code\">\s*"
    r"<a\s+href=\"(?P<link>[^\"]*)\"\s+target=\"_blank\">\s*Source\s*</a>\s*"
    r"</div>)?"
    r"\s*"
    r"<!--\s*atomist:code-snippet:end\s*-->"
)


@dataclass(frozen=True)
class RepoRef:
    """A GitHub-style repository coordinate."""

    owner: str
    name: str

    def __str__(self) -> str:
        return f"{self.owner}/{self.name}"


@dataclass(frozen=True)
class SnippetReference:
    """One parsed reference block in a Markdown document.

    Attributes:
        filepath: Repository-relative path of the sample file
        snippet_name: Name of the region inside the sample file
        repo: Repository override, or None for the default sample repository
        current_body: Text between the start marker and the diagnostic, verbatim
        prior_diagnostic: Diagnostic text left by the previous run, verbatim
        prior_link: Source link left by the previous run
        raw: Exact substring of the document occupied by the block
        start: Offset of the block in the document
        end: Offset just past the block
    """

    filepath: str
    snippet_name: str
    repo: RepoRef | None
    current_body: str
    prior_diagnostic: str | None
    prior_link: str | None
    raw: str
    start: int
    end: int

    @property
    def target(self) -> str:
        """The ``filepath#name[@owner/repo]`` text of the start marker."""
        target = f"{self.filepath}#{self.snippet_name}"
        if self.repo is not None:
            target += f"@{self.repo}"
        return target


def iter_references(text: str) -> Iterator[SnippetReference]:
    """Yield reference blocks in *text*, left to right, without overlap.

    Each call starts a fresh scan. Candidates that do not form a complete
    block are skipped.
    """
    pos = 0
    while True:
        candidate = _START_MARKER.search(text, pos)
        if candidate is None:
            return
        match = _BLOCK.match(text, candidate.start())
        if match is None:
            pos = candidate.end()
            continue
        yield _to_reference(match)
        pos = match.end()


def find_references(text: str) -> list[SnippetReference]:
    """All reference blocks in *text*."""
    return list(iter_references(text))


def _to_reference(match: re.Match[str]) -> SnippetReference:
    repo = None
    if match.group("owner"):
        repo = RepoRef(match.group("owner"), match.group("repo"))
    return SnippetReference(
        filepath=match.group("filepath"),
        snippet_name=match.group("name"),
        repo=repo,
        current_body=match.group("body"),
        prior_diagnostic=match.group("diagnostic"),
        prior_link=match.group("link"),
        raw=match.group(0),
        start=match.start(),
        end=match.end(),
    )


def render_block(
    target: str,
    body: str,
    diagnostic: str,
    link: str | None = None,
) -> str:
    """Render a complete reference block.

    The output parses back through :func:`iter_references` to the same
    trimmed body, diagnostic and link.
    """
    link_line = ""
    if link:
        link_line = f'\n<div class="sample-code"><a href="{link}" target="_blank">Source</a></div>'
    return (
        f"{BLOCK_START}{target} -->\n"
        f"{body}\n"
        f"{DIAGNOSTIC_PREFIX} {diagnostic} -->{link_line}\n"
        f"{BLOCK_END}"
    )
