"""End-of-run summary of reconciliation outcomes."""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Sequence

if TYPE_CHECKING:
    from docs_inline.reconcile import ReconciliationOutcome


def summary_sections(outcomes: Sequence["ReconciliationOutcome"]) -> list[str]:
    """Build the summary as a list of sections; empty sections are omitted.

    Sections, in order: snippets replaced, sample files not found,
    snippets not found.
    """
    replaced = [o for o in outcomes if o.disposition.value == "replace"]
    missing_files = [o for o in outcomes if o.disposition.value == "sampleFileNotFound"]
    missing_snippets = [o for o in outcomes if o.disposition.value == "snippetNotFound"]

    sections = []
    if replaced:
        sections.append("Snippets replaced:\n" + "\n".join(
            f"name: {o.location.snippet_name} from file: {o.location.sample_filepath} "
            f"in markdown: {o.location.markdown_path}"
            for o in replaced
        ))
    if missing_files:
        sections.append("Files not found:\n" + "\n".join(
            f"name: {o.location.snippet_name} in nonexistent file: {o.location.sample_filepath}"
            for o in missing_files
        ))
    if missing_snippets:
        sections.append("Snippets not found:\n" + "\n".join(
            f"name: {o.location.snippet_name} in file: {o.location.sample_filepath}"
            for o in missing_snippets
        ))
    return sections


def report_outcomes(
    outcomes: Sequence["ReconciliationOutcome"],
    write_to_log: Callable[[str], None],
) -> None:
    """Write each non-empty summary section to *write_to_log*."""
    for section in summary_sections(outcomes):
        write_to_log(section)
