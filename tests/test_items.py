"""
Tests for item parsers and renderers.

Each renderer maps one question to an HTML fragment plus an optional
script. We check escaping closely because generated markup and scripts are
easy to get subtly wrong.
"""

import json

import pytest

from sqe.model import Insert, Choose, Option, Html, Css, Js, Function, NO_QUESTION
from sqe.items import render_question, RENDERERS
from sqe.items.common import escape_html, to_js_string, neutralize_script_close, Fragment
from sqe.items.insert import render_insert
from sqe.items.choose import parse_choose, render_choose, wiring_script
from sqe.items.raw import render_html, render_css, render_js
from sqe.items.function import render_function, placeholder_id


class TestEscaping:
    """Test shared escaping helpers."""

    def test_escape_html(self):
        out = escape_html("<a & '\">")
        assert out == "&lt;a &amp; &#x27;&quot;&gt;"

    def test_js_string_is_quoted_literal(self):
        js = to_js_string('hello " world\nnew \\ end')
        assert js.startswith('"') and js.endswith('"')
        assert "\\n" in js
        assert '\\"' in js
        assert "\\\\" in js

    def test_js_string_neutralizes_script_close(self):
        js = to_js_string("x </script> y </SCRIPT>")
        assert "</script" not in js.lower()
        assert "<\\/script>" in js
        assert "<\\/SCRIPT>" in js

    def test_js_string_decodes_back(self):
        """Apart from the neutralized sequence, the literal is plain JSON."""
        raw = 'ünï "q" \\ \t'
        assert json.loads(to_js_string(raw)) == raw

    def test_neutralize_leaves_other_text(self):
        assert neutralize_script_close("<scripts> </style>") == "<scripts> </style>"


class TestChooseParser:
    """Test parsing of choice block bodies."""

    def test_explicit_values(self):
        q = parse_choose("Pick one\nRed >> r\nBlue >> b")
        assert q.prompt == "Pick one"
        assert q.options == (Option("Red", "r"), Option("Blue", "b"))

    def test_auto_values(self):
        q = parse_choose("Pick one\nRed\nBlue")
        assert q.options == (Option("Red", "0"), Option("Blue", "1"))

    def test_explicit_values_do_not_advance_counter(self):
        q = parse_choose("Q\nA\nB >> x\nC")
        assert [o.value for o in q.options] == ["0", "x", "1"]

    def test_split_on_first_marker(self):
        q = parse_choose("Q\nArrow >> a >> b")
        assert q.options == (Option("Arrow", "a >> b"),)

    def test_blank_lines_and_indentation_ignored(self):
        q = parse_choose("\n   Q  \n\n   A\n\n  B  \n")
        assert q.prompt == "Q"
        assert [o.label for o in q.options] == ["A", "B"]

    def test_missing_prompt(self):
        q = parse_choose("   \n\n")
        assert q.prompt == NO_QUESTION
        assert q.options == ()

    def test_prompt_only(self):
        q = parse_choose("Just a prompt")
        assert q.options == ()

    def test_id_passed_through(self):
        assert parse_choose("Q\nA", id="k").id == "k"
        assert parse_choose("Q\nA", id="").id is None

    def test_addons_and_inline_script(self):
        q = parse_choose(
            "Q\nA\n.addons [\nsome help text\n.script[ console.log(1); ]\n]\nB"
        )
        assert q.addons == ("some help text",)
        assert q.script == "console.log(1);"
        assert [o.label for o in q.options] == ["A", "B"]

    def test_multiline_script(self):
        q = parse_choose(
            "Q\nA\n.addons [\n.script[ const a = 1;\nconst b = arr[0];\nlog(a, b); ]\n]"
        )
        assert q.script == "const a = 1;\nconst b = arr[0];\nlog(a, b);"

    def test_multiline_script_closing_bracket_line(self):
        q = parse_choose("Q\n.addons [\n.script[\nfirst();\nsecond();\n]\nafter\n]")
        assert q.script == "first();\nsecond();"
        assert q.addons == ("after",)

    def test_scripts_concatenated_in_order(self):
        q = parse_choose("Q\n.addons [\n.script[ one(); ]\n.script[ two(); ]\n]")
        assert q.script == "one();\ntwo();"

    def test_unterminated_addons(self):
        q = parse_choose("Q\nA\n.addons [\nhelp")
        assert q.addons == ("help",)
        assert len(q.options) == 1


class TestInsertRenderer:
    """Test text blocks."""

    def test_newlines_become_breaks(self):
        frag = render_insert(Insert(text="Hello\nWorld"))
        assert frag.html == '<div class="text-block">Hello<br/>\nWorld</div>'
        assert frag.script is None

    def test_text_is_escaped(self):
        frag = render_insert(Insert(text='<b>"Tom" & Jerry</b>'))
        assert "<b>" not in frag.html
        assert '"Tom"' not in frag.html
        assert "&amp;" in frag.html
        assert "&lt;b&gt;" in frag.html


class TestChooseRenderer:
    """Test radio group markup and wiring scripts."""

    def build(self):
        return Choose(prompt="Pick one", options=(Option("Red", "r"), Option("Blue", "b")))

    def test_one_radio_per_option(self):
        frag = render_choose(self.build(), 0, 0)
        assert frag.html.count('type="radio"') == 2
        assert 'data-sqe-value="r"' in frag.html
        assert 'data-sqe-value="b"' in frag.html
        assert frag.html.count('name="p0_q0"') == 2

    def test_inputs_are_tracked_by_key(self):
        frag = render_choose(self.build(), 2, 1)
        assert frag.html.count('data-sqe-key="2_1"') == 2

    def test_explicit_id_used_as_key(self):
        q = Choose(prompt="Q", options=(Option("A", "0"),), id="colour")
        frag = render_choose(q, 0, 0)
        assert 'window.SQE_ANSWERS["colour"] = val;' in frag.script
        assert 'data-sqe-key="colour"' in frag.html

    def test_synthesized_key_in_script(self):
        frag = render_choose(self.build(), 3, 2)
        assert 'window.SQE_ANSWERS["3_2"] = val;' in frag.script
        assert 'document.getElementsByName("p3_q2")' in frag.script

    def test_script_coerces_numbers(self):
        frag = render_choose(self.build(), 0, 0)
        assert 'Number.isFinite(num)' in frag.script
        assert 'raw !== ""' in frag.script
        assert 'new CustomEvent("sqe:answer"' in frag.script

    def test_labels_and_prompt_escaped(self):
        q = Choose(prompt="<Q>", options=(Option("<A>", 'v"1'),))
        frag = render_choose(q, 0, 0)
        assert "<Q>" not in frag.html and "&lt;Q&gt;" in frag.html
        assert "&lt;A&gt;" in frag.html
        assert 'data-sqe-value="v&quot;1"' in frag.html

    def test_key_with_quotes_is_safe_in_script(self):
        q = Choose(prompt="Q", options=(), id='a"</script>')
        frag = render_choose(q, 0, 0)
        assert "</script>" not in frag.script
        assert 'window.SQE_ANSWERS["a\\"<\\/script>"]' in frag.script

    def test_user_script_after_wiring(self):
        q = Choose(prompt="Q", options=(Option("A", "0"),), script="userCode();")
        frag = render_choose(q, 0, 0)
        assert frag.script.index("userCode();") > frag.script.index("window.SQE_ANSWERS[")

    def test_addons_rendered(self):
        q = Choose(prompt="Q", options=(), addons=("<hint>",))
        frag = render_choose(q, 0, 0)
        assert '<div class="addon">&lt;hint&gt;</div>' in frag.html

    def test_wiring_script_is_self_contained(self):
        script = wiring_script("p0_q0", "k")
        assert script.startswith("(function() {")
        assert script.endswith("}());")


class TestRawRenderers:
    """Test html, css, js and f blocks."""

    def test_html_passthrough(self):
        frag = render_html(Html(raw="<b>raw & unescaped</b>"))
        assert frag == Fragment(html="<b>raw & unescaped</b>")

    def test_css_wrapped(self):
        frag = render_css(Css(raw="p { color: red; }"))
        assert frag.html == "<style>\np { color: red; }\n</style>"
        assert frag.script is None

    def test_js_script_only(self):
        frag = render_js(Js(raw="go();"))
        assert frag.html == ""
        assert frag.script == "go();"
        assert frag.placeholder is None

    def test_function_placeholder(self):
        frag = render_function(Function(script="return 1;"), 1, 2)
        assert frag.placeholder == "p1_fn2"
        assert 'data-sqe-fn="p1_fn2"' in frag.html
        assert frag.script == "return 1;"
        assert placeholder_id(0, 0) == "p0_fn0"


class TestDispatch:
    """Test the renderer table."""

    def test_every_question_type_registered(self):
        assert set(RENDERERS) == {Insert, Choose, Html, Css, Js, Function}

    def test_render_question_dispatches(self):
        frag = render_question(Insert(text="x"), 0, 0)
        assert "text-block" in frag.html

    def test_unknown_type_rejected(self):
        with pytest.raises(TypeError):
            render_question(object(), 0, 0)
