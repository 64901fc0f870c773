"""
Function: a script rendered into its own placeholder.

    f {
        const a = SQE.getAnswer("colour");
        return a === undefined ? "Pick a colour first" : "You picked " + a;
    }

The placeholder id is "p<page>_fn<n>" where n counts Function blocks on the
page. The runtime clears the placeholder and renders the script's completion
value every time the script runs.
"""

from sqe.model import Function
from sqe.items.common import Fragment, escape_attr


def parse_function(block: str) -> Function:
    return Function(script=block.strip())


def placeholder_id(page_index: int, function_index: int) -> str:
    return f"p{page_index}_fn{function_index}"


def render_function(node: Function, page_index: int, function_index: int) -> Fragment:
    fn_id = placeholder_id(page_index, function_index)
    html = f'<div class="sqe-fn" data-sqe-fn="{escape_attr(fn_id)}"></div>'
    return Fragment(html=html, script=node.script, placeholder=fn_id)


__all__ = ["parse_function", "placeholder_id", "render_function"]
