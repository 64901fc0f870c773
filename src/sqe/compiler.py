"""
Compiler boundary: SQE file → Document → index.html.

    compile_file("survey.sqe", "out")   # writes out/index.html

The whole source is parsed and rendered before the output directory is
touched. The file is written to a temporary name and renamed into place, so
a failed compile never leaves a partial or stale-looking artifact behind.

Run as a module for a small command line:

    python -m sqe.compiler survey.sqe -o out --dump yaml
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
import tempfile
import warnings
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from sqe.analyzer import analyze_document
from sqe.backends.html_generator import GeneratorOptions, generate_html
from sqe.config import load_config, options_from_config, output_filename
from sqe.errors import SQECompileError, SQEError, SQEWarning
from sqe.model import Document
from sqe.parser import parse_string
from sqe.serialization import document_to_json, document_to_yaml


LOGGER = logging.getLogger(__name__)

OUTPUT_FILENAME = "index.html"


@dataclass
class CompileResult:
    """
    Outcome of a successful compile.

    Properties:
        document: Parsed Document, available for introspection
        output_path: Path of the written HTML file
    """

    document: Document
    output_path: Path


def compile_string(
    text: str,
    options: Optional[GeneratorOptions] = None,
    source: Optional[str] = None,
) -> Tuple[Document, str]:
    """
    Parse and render SQE source held in memory.

    Returns:
        (document, html)

    Raises:
        SQEParseError: If the source cannot be parsed
    """
    document = parse_string(text, source=source)
    return document, generate_html(document, options=options)


def _read_source(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise SQECompileError(f"input file not found: {path}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SQECompileError(f"cannot read {path}: {exc}") from exc


def _write_atomic(out_dir: Path, filename: str, html: str) -> Path:
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise SQECompileError(f"cannot create output directory {out_dir}: {exc}") from exc

    target = out_dir / filename
    tmp_name = None
    try:
        fd, tmp_name = tempfile.mkstemp(prefix=".sqe-", suffix=".tmp", dir=str(out_dir))
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(html)
        os.chmod(tmp_name, 0o644)
        os.replace(tmp_name, target)
    except OSError as exc:
        if tmp_name is not None and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise SQECompileError(f"cannot write {target}: {exc}") from exc
    return target


def compile_file(
    input_path: str | Path,
    out_dir: str | Path,
    options: Optional[GeneratorOptions] = None,
    filename: str = OUTPUT_FILENAME,
) -> CompileResult:
    """
    Compile one SQE file into `<out_dir>/<filename>`.

    Args:
        input_path: SQE source file (UTF-8)
        out_dir: Output directory, created if needed
        options: Presentation settings
        filename: Name of the generated file

    Returns:
        CompileResult with the Document and the written path

    Raises:
        SQECompileError: If the input can't be read or the output can't be written
        SQEParseError: If the source can't be parsed (nothing is written)
    """
    input_path = Path(input_path)
    out_dir = Path(out_dir)
    LOGGER.info("Compiling %s", input_path)

    text = _read_source(input_path)
    document, html = compile_string(text, options=options, source=str(input_path))
    target = _write_atomic(out_dir, filename, html)

    LOGGER.info("Wrote %s (%d pages, %d diagnostics)", target, len(document.pages), len(document.diagnostics))
    return CompileResult(document=document, output_path=target)


# =========================================================================
# COMMAND LINE
# =========================================================================


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Compile an SQE questionnaire into a single HTML page")
    p.add_argument("input", help="Path to the .sqe source file")
    p.add_argument("-o", "--out-dir", default="out", help="Output directory (default: out)")
    p.add_argument("--config", default=None, help="YAML config file")
    p.add_argument("--dump", choices=["json", "yaml"], default=None, help="Print the parsed document")
    p.add_argument("--report", action="store_true", help="Print an analysis report")
    p.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return p.parse_args(argv)


def _print_report(document: Document) -> None:
    report = analyze_document(document)
    print(f"Document: {report.title}")
    print(f"  Pages:      {report.total_pages}")
    print(f"  Questions:  {report.total_questions}")
    for kind, count in sorted(report.questions_by_kind.items()):
        print(f"    {kind}: {count}")
    print(f"  Answer keys: {', '.join(report.answer_keys) or '(none)'}")
    for warning in report.warnings:
        print(f"  ! {warning}")


def main(argv: Optional[List[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    cfg: Dict[str, Any] = load_config(args.config)
    try:
        # Diagnostics are logged below, one line each.
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", SQEWarning)
            result = compile_file(
                args.input,
                args.out_dir,
                options=options_from_config(cfg),
                filename=output_filename(cfg),
            )
    except SQEError as exc:
        LOGGER.error("Compile failed: %s", exc)
        return 1

    for diag in result.document.diagnostics:
        LOGGER.warning("line %d: %s", diag.line, diag.message)

    if args.dump == "json":
        print(document_to_json(result.document))
    elif args.dump == "yaml":
        print(document_to_yaml(result.document))

    if args.report:
        _print_report(result.document)

    return 0


__all__ = ["CompileResult", "OUTPUT_FILENAME", "compile_string", "compile_file", "main"]


if __name__ == "__main__":
    sys.exit(main())
