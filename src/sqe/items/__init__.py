"""Item parsers and renderers (Insert, Choose, Html, Css, Js, Function)."""

from typing import Callable, Dict, Type

from sqe.model import Question, Insert, Choose, Html, Css, Js, Function
from sqe.items.common import Fragment
from sqe.items.insert import parse_insert, render_insert
from sqe.items.choose import parse_choose, render_choose
from sqe.items.raw import parse_html, parse_css, parse_js, render_html, render_css, render_js
from sqe.items.function import parse_function, render_function


# Each renderer takes (node, page_index, position) where position is the
# index of the node among questions of the same kind on its page.
RENDERERS: Dict[Type[Question], Callable[[Question, int, int], Fragment]] = {
    Insert: lambda node, page, pos: render_insert(node),
    Choose: render_choose,
    Html: lambda node, page, pos: render_html(node),
    Css: lambda node, page, pos: render_css(node),
    Js: lambda node, page, pos: render_js(node),
    Function: render_function,
}


def render_question(question: Question, page_index: int, position: int) -> Fragment:
    """
    Render one question.

    Raises:
        TypeError: If no renderer is registered for the question's type
    """
    renderer = RENDERERS.get(type(question))
    if renderer is None:
        raise TypeError(f"Unsupported Question type: {type(question)}")
    return renderer(question, page_index, position)


__all__ = [
    "Fragment",
    "RENDERERS",
    "render_question",
    "parse_insert",
    "parse_choose",
    "parse_html",
    "parse_css",
    "parse_js",
    "parse_function",
]
