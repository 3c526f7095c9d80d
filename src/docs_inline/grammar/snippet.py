"""
Snippet grammar for sample source files.

A sample file marks the regions that documentation may inline:

    // atomist:code-snippet:start=dotnetGenerator
    export const DotnetCoreGenerator = ...
    // atomist:code-snippet:end

The grammar is built per search: the start marker must carry the requested
name exactly, so ``dotnet`` never matches a region named ``dotnetGenerator``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterator


@dataclass(frozen=True)
class SnippetFound:
    """A named region located in a sample file.

    Attributes:
        snippet_name: The name that was searched for
        content: Text between the marker lines, verbatim
        start: Offset of the content in the file
        end: Offset just past the content
    """

    snippet_name: str
    content: str
    start: int
    end: int

    def line_span(self, text: str) -> tuple[int, int]:
        """1-based first and last line of the content within *text*."""
        return line_number_of_offset(text, self.start), line_number_of_offset(text, self.end)


@lru_cache(maxsize=256)
def snippet_pattern(snippet_name: str) -> re.Pattern[str]:
    """Compile the grammar for one snippet name."""
    return re.compile(
        r"//[ \t]*atomist:code-snippet:start="
        + re.escape(snippet_name)
        + r"[ \t]*\r?\n"
        r"(?:(?P<content>[\s\S]*?)\r?\n)??"
        r"[ \t]*//[ \t]*atomist:code-snippet:end"
    )


def find_snippets(text: str, snippet_name: str) -> Iterator[SnippetFound]:
    """Yield every region named *snippet_name* in *text*, in file order."""
    for match in snippet_pattern(snippet_name).finditer(text):
        content = match.group("content")
        if content is None:
            # Markers on adjacent lines
            start = _line_after(text, match.start())
            yield SnippetFound(snippet_name, "", start, start)
            continue
        yield SnippetFound(
            snippet_name=snippet_name,
            content=content,
            start=match.start("content"),
            end=match.end("content"),
        )


def find_snippet(text: str, snippet_name: str) -> SnippetFound | None:
    """First region named *snippet_name*, or None if the file has none."""
    return next(find_snippets(text, snippet_name), None)


def line_number_of_offset(text: str, offset: int) -> int:
    """1-based line number of *offset* in *text*."""
    return text.count("\n", 0, offset) + 1


def _line_after(text: str, offset: int) -> int:
    newline = text.find("\n", offset)
    return len(text) if newline < 0 else newline + 1
