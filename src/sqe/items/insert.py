"""Insert: escaped text block."""

from sqe.model import Insert
from sqe.items.common import Fragment, escape_html


def parse_insert(block: str) -> Insert:
    return Insert(text=block.strip())


def render_insert(node: Insert) -> Fragment:
    """Escape each line and join them with explicit line breaks."""
    lines = [escape_html(line) for line in node.text.splitlines()]
    joined = "<br/>\n".join(lines)
    return Fragment(html=f'<div class="text-block">{joined}</div>')


__all__ = ["parse_insert", "render_insert"]
