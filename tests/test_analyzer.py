"""
Tests for the Document Analyzer.

Tests verify that the analyzer correctly:
    - Inventories pages and questions
    - Lists answer keys and flags position-based or duplicate ones
    - Finds empty pages and incomplete choices
    - Surfaces parser diagnostics
"""

from sqe.model import Document, Page, Insert, Choose, Option, Js, Function, Diagnostic, Import
from sqe.parser import parse_string
from sqe.analyzer import analyze_document
from sqe.examples import build_example_document


def test_example_document():
    """Analyze the bundled example."""
    report = analyze_document(build_example_document())

    assert report.title == "Coffee Survey"
    assert report.total_pages == 3
    assert report.total_questions == 7
    assert report.total_imports == 1
    assert report.questions_per_page == [1, 3, 3]
    assert report.scripts_per_page == [0, 2, 2]
    assert report.answer_keys == ["cups", "1_1"]
    assert report.synthesized_keys == ["1_1"]
    assert report.questions_by_kind == {"insert": 1, "choice": 2, "css": 1, "f": 1, "js": 1, "html": 1}


def test_synthesized_keys_warned():
    report = analyze_document(parse_string("choice {\nQ\nA\n}"))
    assert report.synthesized_keys == ["0_0"]
    assert any("Position-based" in w for w in report.warnings)


def test_explicit_keys_not_warned():
    report = analyze_document(parse_string("choice a {\nQ\nA\n}"))
    assert report.synthesized_keys == []
    assert not any("Position-based" in w for w in report.warnings)


def test_duplicate_keys():
    doc = Document(entries=(
        Page("A", (Choose("Q", (Option("x", "0"),), id="k"),)),
        Page("B", (Choose("Q", (Option("x", "0"),), id="k"),)),
    ))
    report = analyze_document(doc)
    assert report.duplicate_keys == ["k"]
    assert any("Duplicate answer keys: k" in w for w in report.warnings)


def test_empty_and_untitled_pages():
    doc = Document(entries=(Page(), Page("B", (Insert("x"),))))
    report = analyze_document(doc)
    assert report.empty_pages == [0]
    assert report.untitled_pages == [0]
    assert any("Empty pages: 0" in w for w in report.warnings)


def test_incomplete_choices():
    report = analyze_document(parse_string("choice {\n}"))
    assert report.choices_without_options == ["0_0"]
    assert report.choices_without_prompt == ["0_0"]


def test_no_pages():
    report = analyze_document(Document(entries=(Import("x"),)))
    assert report.total_pages == 0
    assert "Document has no pages" in report.warnings


def test_script_counts():
    doc = Document(entries=(Page("A", (Js("a()"), Function("return 1"), Insert("x"))),))
    assert analyze_document(doc).scripts_per_page == [2]


def test_diagnostics_reported():
    doc = Document(entries=(Page("A"),), diagnostics=(Diagnostic(1, "odd"),))
    report = analyze_document(doc)
    assert report.total_diagnostics == 1
    assert "Parser reported 1 diagnostic(s)" in report.warnings
