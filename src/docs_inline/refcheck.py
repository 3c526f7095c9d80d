"""
Markdown link-reference inspection.

Finds reference-style links, ``[text][name]``, whose definition
``[name]: location`` is missing from the same file. Those links render as
literal brackets, which mkdocs does not flag.

Example:
    >>> comments = inspect_references(LocalProject("docs-repo"))
    >>> comments[0].detail
    'docs/index.md references sdm-intro which is not defined'
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from docs_inline.grammar.snippet import line_number_of_offset
from docs_inline.project import Project

_LINK_REFERENCE = re.compile(r"\[[^\]\n]*\]\[(?P<refname>[\w-]+)\]")
_LINK_DEFINITION = re.compile(r"^[ \t]{0,3}\[(?P<refname>[\w-]+)\]:[ \t]*(?P<location>\S+)", re.MULTILINE)


@dataclass(frozen=True)
class ReviewComment:
    """One inspection finding, located in a file."""

    severity: str
    category: str
    detail: str
    path: str
    offset: int
    line: int


def defined_names(content: str) -> set[str]:
    """Reference names defined in *content*; Markdown matches them case-insensitively."""
    return {m.group("refname").lower() for m in _LINK_DEFINITION.finditer(content)}


def inspect_content(path: str, content: str) -> list[ReviewComment]:
    """Unresolved link references in one Markdown document."""
    defined = defined_names(content)
    comments = []
    for match in _LINK_REFERENCE.finditer(content):
        refname = match.group("refname")
        if refname.lower() in defined:
            continue
        comments.append(ReviewComment(
            severity="error",
            category="unresolved-link-reference",
            detail=f"{path} references {refname} which is not defined",
            path=path,
            offset=match.start(),
            line=line_number_of_offset(content, match.start()),
        ))
    return comments


def inspect_references(project: Project, glob: str = "**/*.md") -> list[ReviewComment]:
    """Unresolved link references across every Markdown file in *project*."""
    comments: list[ReviewComment] = []
    for path in project.paths(glob):
        comments.extend(inspect_content(path, project.read_text(path)))
    return comments
