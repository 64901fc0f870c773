"""
Document Analyzer: inventory and early diagnostics for parsed SQE documents.

This module provides lightweight analysis of Document objects:
    - Page and question inventory
    - Answer key inventory (explicit vs. synthesized, duplicates)
    - Script counts per page
    - Completeness checks (empty pages, choices without options)
    - Warning flags for fragile sources

IMPORTANT: This does NOT modify the document. It only produces read-only
reports.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, List

from sqe.model import Document, Choose, Js, Function, NO_QUESTION, UNTITLED


_KIND_NAMES = {
    "Insert": "insert",
    "Choose": "choice",
    "Html": "html",
    "Css": "css",
    "Js": "js",
    "Function": "f",
}


@dataclass
class DocumentReport:
    """Analysis report for a document."""

    title: str
    total_pages: int = 0
    total_questions: int = 0
    total_imports: int = 0
    total_diagnostics: int = 0

    # Inventory
    questions_by_kind: Dict[str, int] = field(default_factory=dict)
    questions_per_page: List[int] = field(default_factory=list)
    scripts_per_page: List[int] = field(default_factory=list)

    # Answer keys
    answer_keys: List[str] = field(default_factory=list)
    synthesized_keys: List[str] = field(default_factory=list)
    duplicate_keys: List[str] = field(default_factory=list)

    # Completeness
    empty_pages: List[int] = field(default_factory=list)
    untitled_pages: List[int] = field(default_factory=list)
    choices_without_options: List[str] = field(default_factory=list)
    choices_without_prompt: List[str] = field(default_factory=list)

    # Warnings and flags
    warnings: List[str] = field(default_factory=list)

    def add_warning(self, msg: str) -> None:
        """Add a warning to the report."""
        if msg not in self.warnings:
            self.warnings.append(msg)


def analyze_document(document: Document) -> DocumentReport:
    """
    Perform analysis of a Document.

    Checks for:
    - Page and question counts
    - Answer keys that depend on position or collide
    - Empty pages and incomplete choices
    - Parse diagnostics

    Returns a DocumentReport with metrics and warnings.
    """
    pages = document.pages
    report = DocumentReport(title=document.title)

    # Basic counts
    report.total_pages = len(pages)
    report.total_imports = len(document.imports)
    report.total_diagnostics = len(document.diagnostics)

    kinds: Counter = Counter()
    key_counts: Counter = Counter()

    # =========================================================================
    # 1. PAGE INVENTORY
    # =========================================================================

    for page_index, page in enumerate(pages):
        report.questions_per_page.append(len(page.content))
        report.total_questions += len(page.content)
        if not page.content:
            report.empty_pages.append(page_index)
        if page.title == UNTITLED:
            report.untitled_pages.append(page_index)

        scripts = 0
        choose_index = 0
        for question in page.content:
            kinds[_KIND_NAMES.get(type(question).__name__, type(question).__name__)] += 1

            if isinstance(question, (Js, Function)):
                scripts += 1

            # =================================================================
            # 2. ANSWER KEYS
            # =================================================================

            if isinstance(question, Choose):
                scripts += 1
                key = question.answer_key(page_index, choose_index)
                choose_index += 1
                report.answer_keys.append(key)
                key_counts[key] += 1
                if not question.id:
                    report.synthesized_keys.append(key)
                if not question.options:
                    report.choices_without_options.append(key)
                if question.prompt == NO_QUESTION:
                    report.choices_without_prompt.append(key)

        report.scripts_per_page.append(scripts)

    report.questions_by_kind = dict(kinds)
    report.duplicate_keys = sorted(k for k, n in key_counts.items() if n > 1)

    # =========================================================================
    # 3. WARNING FLAGS
    # =========================================================================

    if report.total_pages == 0:
        report.add_warning("Document has no pages")

    if report.synthesized_keys:
        report.add_warning(
            f"Position-based answer keys (change when earlier content changes): "
            f"{', '.join(report.synthesized_keys)}"
        )

    if report.duplicate_keys:
        report.add_warning(f"Duplicate answer keys: {', '.join(report.duplicate_keys)}")

    if report.empty_pages:
        report.add_warning(f"Empty pages: {', '.join(str(i) for i in report.empty_pages)}")

    if report.choices_without_options:
        report.add_warning(f"Choices without options: {', '.join(report.choices_without_options)}")

    if report.choices_without_prompt:
        report.add_warning(f"Choices without prompt: {', '.join(report.choices_without_prompt)}")

    if report.total_diagnostics:
        report.add_warning(f"Parser reported {report.total_diagnostics} diagnostic(s)")

    return report


__all__ = ["DocumentReport", "analyze_document"]
