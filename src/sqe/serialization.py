"""
Serialization helpers for SQE model objects (Document, Page, Question, etc.).

Provides lossless JSON/YAML round-trip via intermediate dict representation.
This module intentionally keeps serialization structure stable and explicit.
"""
from __future__ import annotations

import json
from typing import Any, Dict

import yaml

from sqe.model import (
    Document,
    Entry,
    Page,
    DocTitle,
    Import,
    Diagnostic,
    Question,
    Insert,
    Choose,
    Option,
    Html,
    Css,
    Js,
    Function,
    UNTITLED,
)


def question_to_dict(q: Question) -> Dict[str, Any]:
    if isinstance(q, Insert):
        return {"type": "insert", "text": q.text}
    if isinstance(q, Choose):
        return {
            "type": "choose",
            "id": q.id,
            "prompt": q.prompt,
            "options": [{"label": o.label, "value": o.value} for o in q.options],
            "addons": list(q.addons),
            "script": q.script,
        }
    if isinstance(q, Html):
        return {"type": "html", "raw": q.raw}
    if isinstance(q, Css):
        return {"type": "css", "raw": q.raw}
    if isinstance(q, Js):
        return {"type": "js", "raw": q.raw}
    if isinstance(q, Function):
        return {"type": "function", "script": q.script}
    raise TypeError(f"Unsupported Question type: {type(q)}")


def question_from_dict(d: Dict[str, Any]) -> Question:
    t = d.get("type")
    if t == "insert":
        return Insert(text=d["text"])
    if t == "choose":
        return Choose(
            prompt=d["prompt"],
            options=tuple(Option(label=o["label"], value=o["value"]) for o in d.get("options", [])),
            addons=tuple(d.get("addons", [])),
            script=d.get("script", ""),
            id=d.get("id"),
        )
    if t == "html":
        return Html(raw=d["raw"])
    if t == "css":
        return Css(raw=d["raw"])
    if t == "js":
        return Js(raw=d["raw"])
    if t == "function":
        return Function(script=d["script"])
    raise TypeError(f"Unsupported question dict type: {t}")


def entry_to_dict(e: Entry) -> Dict[str, Any]:
    if isinstance(e, Page):
        return {"type": "page", "title": e.title, "content": [question_to_dict(q) for q in e.content]}
    if isinstance(e, DocTitle):
        return {"type": "title", "text": e.text}
    if isinstance(e, Import):
        return {"type": "import", "path": e.path}
    raise TypeError(f"Unsupported Entry type: {type(e)}")


def entry_from_dict(d: Dict[str, Any]) -> Entry:
    t = d.get("type")
    if t == "page":
        return Page(title=d.get("title", UNTITLED), content=tuple(question_from_dict(q) for q in d.get("content", [])))
    if t == "title":
        return DocTitle(text=d["text"])
    if t == "import":
        return Import(path=d["path"])
    raise TypeError(f"Unsupported entry dict type: {t}")


def diagnostic_to_dict(diag: Diagnostic) -> Dict[str, Any]:
    return {"line": diag.line, "message": diag.message}


def diagnostic_from_dict(d: Dict[str, Any]) -> Diagnostic:
    return Diagnostic(line=d["line"], message=d["message"])


def document_to_dict(doc: Document) -> Dict[str, Any]:
    return {
        "source": doc.source,
        "entries": [entry_to_dict(e) for e in doc.entries],
        "diagnostics": [diagnostic_to_dict(diag) for diag in doc.diagnostics],
    }


def document_from_dict(d: Dict[str, Any]) -> Document:
    return Document(
        entries=tuple(entry_from_dict(e) for e in d.get("entries", [])),
        diagnostics=tuple(diagnostic_from_dict(diag) for diag in d.get("diagnostics", [])),
        source=d.get("source"),
    )


def document_to_json(doc: Document) -> str:
    return json.dumps(document_to_dict(doc), sort_keys=True, ensure_ascii=False)


def document_from_json(s: str) -> Document:
    d = json.loads(s)
    return document_from_dict(d)


def document_to_yaml(doc: Document) -> str:
    return yaml.safe_dump(document_to_dict(doc), allow_unicode=True)


def document_from_yaml(s: str) -> Document:
    d = yaml.safe_load(s)
    return document_from_dict(d)
