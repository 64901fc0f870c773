"""
Choose: single-answer question parser and renderer.

Block format:
    Pick one              <- prompt (first non-empty line)
    Red                   <- option, auto value "0"
    Blue >> b             <- option, explicit value "b"
    .addons [
        shown under the options
        .script[ console.log("inline") ]
        .script[
            console.log("multi-line");
        ]
    ]

Rendering produces one radio input per option plus a script that records the
selected value in window.SQE_ANSWERS under the question's key and announces
it with an `sqe:answer` event. User `.script` text runs after that wiring.
"""

from string import Template
from typing import List, Optional, Tuple

from sqe.model import Choose, Option, NO_QUESTION
from sqe.items.common import Fragment, escape_attr, escape_html, js_literal_for_key


_WIRING = Template("""\
(function() {
  if (!window.SQE_ANSWERS) window.SQE_ANSWERS = {};
  const inputs = document.getElementsByName($group);
  Array.prototype.forEach.call(inputs, function(input) {
    if (input.dataset.sqeBound) return;
    input.dataset.sqeBound = "1";
    input.addEventListener("change", function() {
      const raw = this.dataset.sqeValue;
      const num = Number(raw);
      const val = (raw !== "" && Number.isFinite(num)) ? num : raw;
      window.SQE_ANSWERS[$key] = val;
      document.dispatchEvent(new CustomEvent("sqe:answer", { detail: { id: $key, value: val } }));
    });
  });
}());""")


def _closes(text: str) -> bool:
    """True when text holds an unmatched `]`."""
    return text.count("]") > text.count("[")


def _read_script(lines: List[str], i: int, script_lines: List[str]) -> int:
    """
    Collect one `.script[...]` entry starting at lines[i].

    Returns the index of the last line consumed.
    """
    first = lines[i]
    after = first[first.find("[") + 1:] if "[" in first else ""

    if _closes(after):
        inner = after[:after.rfind("]")].strip()
        if inner:
            script_lines.append(inner)
        return i

    if after.strip():
        script_lines.append(after.strip())

    i += 1
    while i < len(lines):
        line = lines[i]
        if _closes(line):
            before = line[:line.rfind("]")].strip()
            if before:
                script_lines.append(before)
            return i
        script_lines.append(line)
        i += 1
    return i


def _read_addons(lines: List[str], i: int, addons: List[str], script_lines: List[str]) -> int:
    """
    Collect an `.addons [ ... ]` section whose header is lines[i].

    Returns the index of the closing `]` line (or len(lines) if missing).
    """
    i += 1
    while i < len(lines):
        line = lines[i]
        if line == "]":
            return i
        if line.startswith(".script"):
            i = _read_script(lines, i, script_lines)
        else:
            addons.append(line)
        i += 1
    return i


def _parse_option(line: str, auto_index: int) -> Tuple[Option, bool]:
    """Returns the option and whether it consumed an auto index."""
    if ">>" in line:
        label, value = line.split(">>", 1)
        return Option(label=label.strip(), value=value.strip()), False
    return Option(label=line, value=str(auto_index)), True


def parse_choose(block: str, id: Optional[str] = None) -> Choose:
    """
    Parse the body of a `choice { ... }` block.

    Args:
        block: Text between the braces
        id: Optional answer key given between `choice` and `{`

    Returns:
        Choose with prompt, options, addons and joined user script.
        A block without any text gets the NO_QUESTION prompt.
    """
    lines = [line.strip() for line in block.splitlines()]
    lines = [line for line in lines if line]

    if not lines:
        return Choose(prompt=NO_QUESTION, id=id or None)

    prompt = lines[0]
    options: List[Option] = []
    addons: List[str] = []
    script_lines: List[str] = []
    auto_index = 0

    i = 1
    while i < len(lines):
        line = lines[i]
        if line.startswith(".addons"):
            i = _read_addons(lines, i, addons, script_lines) + 1
            continue

        option, used_auto = _parse_option(line, auto_index)
        options.append(option)
        if used_auto:
            auto_index += 1
        i += 1

    return Choose(
        prompt=prompt,
        options=tuple(options),
        addons=tuple(addons),
        script="\n".join(script_lines),
        id=id or None,
    )


def group_name(page_index: int, choose_index: int) -> str:
    return f"p{page_index}_q{choose_index}"


def wiring_script(group: str, key: str) -> str:
    """Generated script binding the radio group to the answer map."""
    return _WIRING.substitute(group=js_literal_for_key(group), key=js_literal_for_key(key))


def render_choose(node: Choose, page_index: int, choose_index: int) -> Fragment:
    """
    Render radio inputs and the answer-wiring script.

    Args:
        node: Parsed Choose
        page_index: Index of the page among pages
        choose_index: Index of the Choose among Choose questions on that page
    """
    group = group_name(page_index, choose_index)
    key = node.answer_key(page_index, choose_index)

    parts = [
        f'<fieldset class="question" data-q="{escape_attr(group)}">',
        f"<legend>{escape_html(node.prompt)}</legend>",
    ]
    for opt_index, option in enumerate(node.options):
        input_id = f"{group}_opt{opt_index}"
        parts.append(
            f'<div><input type="radio" id="{escape_attr(input_id)}" name="{escape_attr(group)}"'
            f' data-sqe-key="{escape_attr(key)}" data-sqe-value="{escape_attr(option.value)}">'
            f' <label for="{escape_attr(input_id)}">{escape_html(option.label)}</label></div>'
        )
    for addon in node.addons:
        parts.append(f'<div class="addon">{escape_html(addon)}</div>')
    parts.append("</fieldset>")

    script = wiring_script(group, key)
    if node.script:
        script += "\n// .script\n" + node.script + "\n"

    return Fragment(html="".join(parts), script=script)


__all__ = ["parse_choose", "render_choose", "group_name", "wiring_script"]
