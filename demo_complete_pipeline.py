#!/usr/bin/env python3
"""
Complete Pipeline Demo: SQE source → Document → Analysis → HTML

Shows the full workflow:
1. Parse the example SQE source
2. Analyze the document
3. Dump the document model as YAML
4. Compile to out/index.html
"""

import tempfile
from pathlib import Path

from sqe.examples import EXAMPLE_SOURCE
from sqe.parser import parse_string
from sqe.analyzer import analyze_document
from sqe.serialization import document_to_yaml
from sqe.compiler import compile_file


def main():
    print("=" * 80)
    print("COMPLETE PIPELINE DEMO: SQE → Document → Analysis → HTML")
    print("=" * 80)

    # =========================================================================
    # STEP 1: Parse
    # =========================================================================
    print("\n1. PARSING SOURCE...")
    document = parse_string(EXAMPLE_SOURCE, source="example")
    print(f"   ✓ Title: {document.title}")
    print(f"   ✓ Pages: {len(document.pages)}")
    print(f"   ✓ Imports: {document.imports}")

    # =========================================================================
    # STEP 2: Analyze
    # =========================================================================
    print("\n2. ANALYZING DOCUMENT...")
    report = analyze_document(document)
    print(f"   ✓ Questions per page: {report.questions_per_page}")
    print(f"   ✓ Scripts per page: {report.scripts_per_page}")
    print(f"   ✓ Answer keys: {report.answer_keys}")
    if report.warnings:
        print(f"\n   Warnings ({len(report.warnings)}):")
        for warning in report.warnings:
            print(f"      - {warning}")

    # =========================================================================
    # STEP 3: Document model
    # =========================================================================
    print("\n3. DOCUMENT MODEL (YAML):")
    print("-" * 80)
    for line in document_to_yaml(document).splitlines()[:20]:
        print(f"   {line}")

    # =========================================================================
    # STEP 4: Compile
    # =========================================================================
    print("\n4. COMPILING...")
    with tempfile.TemporaryDirectory() as tmp:
        src = Path(tmp) / "example.sqe"
        src.write_text(EXAMPLE_SOURCE, encoding="utf-8")
        result = compile_file(src, "out")
    print(f"   ✓ Wrote {result.output_path}")

    print("\n" + "=" * 80)
    print("PIPELINE COMPLETE! Open out/index.html in a browser.")
    print("=" * 80)


if __name__ == "__main__":
    main()
