"""
Grammar module for docs-inline.

Two small declarative grammars: one recognising reference blocks in
Markdown, one locating named regions in sample source files.
"""

from docs_inline.grammar.reference import (
    RepoRef,
    SnippetReference,
    find_references,
    iter_references,
    render_block,
)
from docs_inline.grammar.snippet import (
    SnippetFound,
    find_snippet,
    find_snippets,
    line_number_of_offset,
)

__all__ = [
    "RepoRef",
    "SnippetReference",
    "find_references",
    "iter_references",
    "render_block",
    "SnippetFound",
    "find_snippet",
    "find_snippets",
    "line_number_of_offset",
]
