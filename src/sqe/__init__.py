"""
SQE Questionnaire Compiler

Turns SQE markup (a line-oriented description of multi-page questionnaires)
into one self-contained HTML page.

PIPELINE:
---------
    source text
        → sqe.parser        (directives, brace blocks via sqe.block_reader)
        → sqe.model         (Document: entries, pages, questions)
        → sqe.backends      (HTML + per-page scripts + runtime library)
        → index.html

The Document is a plain value owned by the caller. Nothing is kept in module
state, so independent compiles never interfere.
"""

__version__ = "0.1.0"
