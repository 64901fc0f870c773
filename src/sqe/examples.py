"""
Example questionnaire used by the demo and the tests.

EXAMPLE_SOURCE exercises every directive. build_example_document builds the
same structure directly from model objects, so the parser's output can be
compared against a hand-written expectation.
"""
from sqe.model import (
    Document,
    DocTitle,
    Import,
    Page,
    Insert,
    Choose,
    Option,
    Html,
    Css,
    Js,
    Function,
)


EXAMPLE_SOURCE = """\
title "Coffee Survey"
import "shared/branding.sqe"

# Content before the first @p is adopted by it.
insert {
  Welcome! This takes about a minute.
  Answers stay in your browser.
}
@p "Welcome"

@p "Habits"
choice cups {
  How many cups per day?
  None >> 0
  One or two >> 2
  More >> 5
}
choice {
  Favourite roast?
  Light
  Dark
  .addons [
    Pick the one you buy most often.
    .script[ console.log("roast ready"); ]
  ]
}
css {
  .sqe-fn { font-weight: bold; }
}

@p "Summary"
f {
  const cups = SQE.getAnswer("cups");
  return cups === undefined || cups === null ? "No answer yet" : "Cups per day: " + cups;
}
js {
  console.log("summary page {entered}");
}
html { <hr class="end"> }
"""


def build_example_document() -> Document:
    welcome = Page(
        title="Welcome",
        content=(Insert(text="Welcome! This takes about a minute.\n  Answers stay in your browser."),),
    )
    habits = Page(
        title="Habits",
        content=(
            Choose(
                prompt="How many cups per day?",
                options=(Option("None", "0"), Option("One or two", "2"), Option("More", "5")),
                id="cups",
            ),
            Choose(
                prompt="Favourite roast?",
                options=(Option("Light", "0"), Option("Dark", "1")),
                addons=("Pick the one you buy most often.",),
                script='console.log("roast ready");',
            ),
            Css(raw=".sqe-fn { font-weight: bold; }"),
        ),
    )
    summary = Page(
        title="Summary",
        content=(
            Function(
                script=(
                    'const cups = SQE.getAnswer("cups");\n'
                    '  return cups === undefined || cups === null ? "No answer yet" : "Cups per day: " + cups;'
                )
            ),
            Js(raw='console.log("summary page {entered}");'),
            Html(raw='<hr class="end">'),
        ),
    )
    return Document(
        entries=(
            DocTitle(text="Coffee Survey"),
            Import(path="shared/branding.sqe"),
            welcome,
            habits,
            summary,
        ),
    )
