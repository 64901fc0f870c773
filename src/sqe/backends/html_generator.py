"""
HTML generator for SQE documents.

Converts a Document into one self-contained HTML page:
    - <style> with the base stylesheet
    - one <section class="page"> per Page, holding rendered questions
    - navigation controls and an optional "Save Answers" button
    - <script> defining PAGE_COUNT, PAGE_SCRIPTS and the Runtime Library

PAGE_SCRIPTS is an array of arrays: the outer index is the page index, the
inner order is the source order of the page's script-bearing questions.
Each record is {"script": ...} or {"id": <placeholder>, "script": ...}.

Output is deterministic for a given Document and options.
"""

from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional

from sqe.model import Document, Page, FALLBACK_TITLE
from sqe.items import render_question
from sqe.items.common import escape_html, to_js_string
from sqe.backends.runtime import BASE_CSS, RUNTIME_JS, SAVE_JS


@dataclass
class GeneratorOptions:
    """
    Presentation settings for generated documents.

    Properties:
        fallback_title: Title used when the document has no title and no pages
        lang: Value of the <html lang> attribute
        save_button: Whether to emit the "Save Answers" download button
    """

    fallback_title: str = FALLBACK_TITLE
    lang: str = "en"
    save_button: bool = True


@dataclass
class ScriptRecord:
    """One entry of PAGE_SCRIPTS."""

    script: str
    id: Optional[str] = None

    def to_js(self) -> str:
        if self.id is None:
            return f'{{"script":{to_js_string(self.script)}}}'
        return f'{{"id":{to_js_string(self.id)},"script":{to_js_string(self.script)}}}'


def _render_page(page: Page, index: int, show_heading: bool, lines: List[str]) -> List[ScriptRecord]:
    """Append the page's section to lines and return its script records."""
    lines.append(f'<section class="page" data-index="{index}">')
    if show_heading:
        lines.append(f"<h2>{escape_html(page.title)}</h2>")

    records: List[ScriptRecord] = []
    positions: Dict[type, int] = defaultdict(int)

    for question in page.content:
        kind = type(question)
        fragment = render_question(question, index, positions[kind])
        positions[kind] += 1

        if fragment.html:
            lines.append(fragment.html)
        if fragment.script is not None:
            records.append(ScriptRecord(script=fragment.script, id=fragment.placeholder))

    lines.append("</section>")
    return records


def _page_scripts_js(page_scripts: List[List[ScriptRecord]]) -> str:
    pages = ["[" + ",".join(r.to_js() for r in records) + "]" for records in page_scripts]
    return "const PAGE_SCRIPTS = [" + ",".join(pages) + "];"


def generate_html(document: Document, options: Optional[GeneratorOptions] = None) -> str:
    """
    Generate the complete HTML document.

    Args:
        document: Parsed Document
        options: Presentation settings (defaults used when None)

    Returns:
        HTML text
    """
    options = options or GeneratorOptions()
    pages = document.pages
    explicit_title = document.explicit_title
    doc_title = document.effective_title(fallback=options.fallback_title)

    lines = []

    # Header
    lines.append("<!doctype html>")
    lines.append(
        f'<html lang="{escape_html(options.lang)}"><head><meta charset="utf-8">'
        '<meta name="viewport" content="width=device-width,initial-scale=1">'
    )
    lines.append(f"<title>{escape_html(doc_title)}</title>")
    lines.append("<style>")
    lines.append(BASE_CSS)
    lines.append("</style>")
    lines.append("</head><body>")
    lines.append(f"<h1>{escape_html(doc_title)}</h1>")

    # =========================================================================
    # PAGES
    # =========================================================================

    lines.append('<div id="pages">')
    page_scripts: List[List[ScriptRecord]] = []
    for index, page in enumerate(pages):
        # Only the first page's heading may repeat an explicit document title.
        show_heading = not (index == 0 and explicit_title is not None and explicit_title == page.title)
        page_scripts.append(_render_page(page, index, show_heading, lines))
    lines.append("</div>")

    # =========================================================================
    # CONTROLS
    # =========================================================================

    lines.append('<div class="controls">')
    lines.append('<div><button id="prevBtn">Previous</button></div>')
    lines.append('<div><button id="nextBtn">Next</button></div>')
    lines.append("</div>")
    if options.save_button:
        lines.append('<div id="saveBtnContainer" style="text-align:center; margin-top:20px; display:none;">')
        lines.append('<button id="saveBtn">Save Answers</button>')
        lines.append("</div>")
    lines.append('<div class="page-indicator" id="pageIndicator"></div>')

    # =========================================================================
    # SCRIPT
    # =========================================================================

    lines.append("<script>")
    lines.append(f"const PAGE_COUNT = {len(pages)};")
    lines.append(_page_scripts_js(page_scripts))
    lines.append(RUNTIME_JS)
    if options.save_button:
        lines.append(SAVE_JS)
    lines.append("</script>")
    lines.append("</body></html>")

    return "\n".join(lines) + "\n"


def save_html(document: Document, filename: str, options: Optional[GeneratorOptions] = None) -> None:
    """
    Generate HTML and save to file.

    Args:
        document: Document to render
        filename: Output file path
        options: Presentation settings
    """
    html = generate_html(document, options=options)
    with open(filename, "w", encoding="utf-8") as f:
        f.write(html)


__all__ = ["GeneratorOptions", "ScriptRecord", "generate_html", "save_html"]
