"""
Snippet reconciliation.

Resolves every reference block in every Markdown document of a project
against the sample repository and rewrites the blocks that are stale.

Example:
    >>> config = InlineConfig(project_root=Path("docs-repo"))
    >>> async with SampleFetcher() as fetcher:
    ...     result = await Reconciler(config, fetcher).run(LocalProject("docs-repo"))
    >>> result.edited
    True
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from docs_inline.config import InlineConfig
from docs_inline.grammar.reference import SnippetReference, iter_references, render_block
from docs_inline.grammar.snippet import find_snippet
from docs_inline.logging import LogContext, get_logger
from docs_inline.project import Project
from docs_inline.report import report_outcomes
from docs_inline.samples import SampleFetcher, SampleRepository

logger = get_logger(__name__)


class Disposition(str, Enum):
    """What resolving one reference amounted to."""

    REPLACE = "replace"
    SNIPPET_NOT_FOUND = "snippetNotFound"
    SAMPLE_FILE_NOT_FOUND = "sampleFileNotFound"


@dataclass(frozen=True)
class OutcomeLocation:
    markdown_path: str
    sample_filepath: str
    snippet_name: str


@dataclass(frozen=True)
class ReconciliationOutcome:
    """Result of evaluating one reference block.

    ``edited`` is True iff the block's text in the document changed.
    """

    disposition: Disposition
    location: OutcomeLocation
    edited: bool


@dataclass(frozen=True)
class Substitution:
    """What a reference block should contain after this run."""

    disposition: Disposition
    diagnostic: str
    body: str | None = None
    link: str | None = None

    def needs_update(self, reference: SnippetReference) -> bool:
        current_diagnostic = (reference.prior_diagnostic or "").strip()
        return bool(
            (self.body and self.body != reference.current_body.strip())
            or current_diagnostic != self.diagnostic
            or reference.prior_link != self.link
        )

    def render(self, reference: SnippetReference) -> str:
        return render_block(
            reference.target,
            self.body or reference.current_body.strip(),
            self.diagnostic,
            self.link,
        )


@dataclass
class DocumentResult:
    """Reconciled text of one document and its outcomes."""

    path: str
    text: str
    outcomes: list[ReconciliationOutcome] = field(default_factory=list)
    error: str | None = None

    @property
    def edited(self) -> bool:
        return any(o.edited for o in self.outcomes)


@dataclass
class InlineResult:
    """Result of a whole reconciliation run."""

    outcomes: list[ReconciliationOutcome] = field(default_factory=list)
    edited_paths: list[str] = field(default_factory=list)
    success: bool = True
    error: str | None = None

    @property
    def edited(self) -> bool:
        return any(o.edited for o in self.outcomes)

    def by_disposition(self, disposition: Disposition) -> list[ReconciliationOutcome]:
        return [o for o in self.outcomes if o.disposition is disposition]


class Reconciler:
    """Inline referenced code snippets into Markdown documents.

    Manifesto:
        Documentation samples should be real, compiled code. Docs point at
        a named region of a sample file; the reconciler keeps the inlined
        copy in step with it, and leaves a diagnostic in the document when
        it cannot.

    Architecture:
        ```
        Reconciler.run(project)
              │
              ├──► for each Markdown path:
              │         │
              │         ├──► iter_references(text)
              │         │         │
              │         │         ├──► resolve(): fetch + find_snippet
              │         │         ├──► Substitution.needs_update()
              │         │         └──► stitch replacement by offset
              │         │
              │         └──► write back if text changed
              │
              └──► report_outcomes(outcomes)
        ```

    Guardrails:
        - Do NOT abort the run on a missing sample or snippet
          ✅ Record an outcome and a diagnostic in the block
        - Do NOT rewrite a block that is already current
          ✅ A second run over the same input edits nothing

    Tags:
        - reconciler
        - markdown
        - core_infrastructure

    Doc-Types:
        - ARCHITECTURE (section: "Reconciliation", priority: 9)
    """

    def __init__(
        self,
        config: InlineConfig,
        fetcher: SampleFetcher,
        write_to_log: Callable[[str], None] | None = None,
        dry_run: bool = False,
    ):
        """Initialize the reconciler.

        Args:
            config: Repository-wide settings (default sample repo, URLs)
            fetcher: Fetches sample file content
            write_to_log: Sink for the end-of-run summary
            dry_run: Compute edits without writing documents
        """
        self.config = config
        self.fetcher = fetcher
        self.samples = SampleRepository.from_config(config)
        self.write_to_log = write_to_log or (lambda line: logger.info(line))
        self.dry_run = dry_run

    async def run(self, project: Project) -> InlineResult:
        """Reconcile every Markdown document in *project*."""
        result = InlineResult()

        for path in project.paths(self.config.markdown_glob):
            if self.config.should_skip(path):
                continue

            try:
                text = project.read_text(path)
            except (OSError, UnicodeDecodeError) as e:
                logger.error("document_unreadable", path=path, error=str(e))
                result.success = False
                result.error = f"{path}: {type(e).__name__}: {e}"
                continue

            document = await self.reconcile_document(path, text)
            result.outcomes.extend(document.outcomes)

            if document.error is not None:
                result.success = False
                result.error = f"{path}: {document.error}"

            if document.text == text:
                continue

            if not self.dry_run:
                try:
                    project.write_text(path, document.text)
                except OSError as e:
                    logger.error("document_write_failed", path=path, error=str(e))
                    result.success = False
                    result.error = f"{path}: {type(e).__name__}: {e}"
                    continue
            result.edited_paths.append(path)
            logger.info("document_rewritten", path=path, dry_run=self.dry_run)

        report_outcomes(result.outcomes, self.write_to_log)
        return result

    async def reconcile_document(self, path: str, text: str) -> DocumentResult:
        """Reconcile the reference blocks of one document.

        Replacements are applied left to right by original offset. If an
        unexpected error interrupts the loop, the blocks already handled
        keep their edits and the rest of the text is left as it was.
        """
        result = DocumentResult(path=path, text=text)
        parts: list[str] = []
        cursor = 0

        with LogContext(markdown_path=path):
            try:
                for reference in iter_references(text):
                    substitution = await self.resolve(reference)
                    edited = substitution.needs_update(reference)

                    parts.append(text[cursor:reference.start])
                    parts.append(substitution.render(reference) if edited else reference.raw)
                    cursor = reference.end

                    result.outcomes.append(ReconciliationOutcome(
                        disposition=substitution.disposition,
                        location=OutcomeLocation(
                            markdown_path=path,
                            sample_filepath=reference.filepath,
                            snippet_name=reference.snippet_name,
                        ),
                        edited=edited,
                    ))
            except Exception as e:
                logger.exception("reconcile_failed", path=path)
                result.error = f"{type(e).__name__}: {e}"

        parts.append(text[cursor:])
        result.text = "".join(parts)
        return result

    async def resolve(self, reference: SnippetReference) -> Substitution:
        """Work out what *reference* should contain."""
        name = reference.snippet_name
        samples = self.samples.with_repo(reference.repo)
        sample_url = samples.raw_url(reference.filepath)

        response = await self.fetcher.fetch(sample_url)
        if not response.ok:
            logger.error(
                "sample_file_not_found",
                url=sample_url,
                status=response.status,
                snippet=name,
            )
            return Substitution(
                disposition=Disposition.SAMPLE_FILE_NOT_FOUND,
                diagnostic=f"Warning: looking for '{name}' but could not retrieve file {reference.filepath}",
            )

        found = find_snippet(response.body, name)
        if found is None:
            logger.warning("snippet_not_found", url=sample_url, snippet=name)
            return Substitution(
                disposition=Disposition.SNIPPET_NOT_FOUND,
                diagnostic=f"Warning: snippet '{name}' not found in {sample_url}",
            )

        language = self.config.fence_language_for(reference.filepath)
        return Substitution(
            disposition=Disposition.REPLACE,
            diagnostic=f"Snippet '{name}' found in {sample_url}",
            body=f"```{language}\n{found.content.strip()}\n```",
            link=samples.browse_url(reference.filepath, found.line_span(response.body)),
        )
