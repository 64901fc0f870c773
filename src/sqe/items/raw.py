"""
Raw passthrough items: html, css and js blocks.

Their contents are not interpreted. Html is inserted as-is, Css is wrapped in
a style element, Js becomes a page script whose result is discarded.
"""

from sqe.model import Html, Css, Js
from sqe.items.common import Fragment


def parse_html(block: str) -> Html:
    return Html(raw=block.strip())


def parse_css(block: str) -> Css:
    return Css(raw=block.strip())


def parse_js(block: str) -> Js:
    return Js(raw=block.strip())


def render_html(node: Html) -> Fragment:
    return Fragment(html=node.raw)


def render_css(node: Css) -> Fragment:
    return Fragment(html=f"<style>\n{node.raw}\n</style>")


def render_js(node: Js) -> Fragment:
    return Fragment(script=node.raw)


__all__ = [
    "parse_html",
    "parse_css",
    "parse_js",
    "render_html",
    "render_css",
    "render_js",
]
