"""
Shared helpers for item renderers.

Everything that ends up inside generated HTML or generated JavaScript goes
through one of these functions.
"""

import html
import json
import re
from dataclasses import dataclass
from typing import Optional


_SCRIPT_CLOSE_RE = re.compile(r"</(script)", re.IGNORECASE)


@dataclass(frozen=True)
class Fragment:
    """
    Output of rendering one question.

    Properties:
        html: Markup inserted into the page section (may be empty)
        script: Script run when the page is entered, if any
        placeholder: Id of the element receiving the script's result.
                     None for fire-and-forget scripts.
    """

    html: str = ""
    script: Optional[str] = None
    placeholder: Optional[str] = None


def escape_html(text: str) -> str:
    """Escape &, <, >, " and ' for use in text nodes and attribute values."""
    return html.escape(text, quote=True)


def escape_attr(text: str) -> str:
    return escape_html(text)


def neutralize_script_close(text: str) -> str:
    """Rewrite every `</script` (any case) as `<\\/script` so it cannot end a script element."""
    return _SCRIPT_CLOSE_RE.sub(r"<\\/\1", text)


def to_js_string(text: str) -> str:
    """
    Encode text as a JavaScript string literal.

    Backslashes, quotes and control characters are escaped by the JSON
    encoder; `</script` is neutralized afterwards.

    Example:
        >>> to_js_string('a "b" </script>')
        '"a \\\\"b\\\\" <\\\\/script>"'
    """
    return neutralize_script_close(json.dumps(text, ensure_ascii=False))


def js_literal_for_key(key: str) -> str:
    return to_js_string(key)


__all__ = [
    "Fragment",
    "escape_html",
    "escape_attr",
    "neutralize_script_close",
    "to_js_string",
    "js_literal_for_key",
]
